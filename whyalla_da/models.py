"""Domain models for positioned text and development applications."""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import Rectangle


@dataclass(frozen=True, slots=True)
class Fragment:
    """Single run of text on a PDF page, positioned from the top-left corner."""

    text: str
    x: float
    y: float
    width: float
    height: float

    @property
    def bounds(self) -> Rectangle:
        return Rectangle(self.x, self.y, self.width, self.height)

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True, slots=True)
class DevelopmentApplication:
    """Development application assembled from one page or page section."""

    application_number: str
    address: str
    description: str
    information_url: str
    comment_url: str
    scrape_date: str
    received_date: str = ""

    def is_valid(self) -> bool:
        """An application needs at least a council reference and an address."""
        return bool(self.application_number.strip()) and bool(self.address.strip())

    def as_row(self) -> dict[str, str | None]:
        return {
            "council_reference": self.application_number,
            "address": self.address,
            "description": self.description,
            "info_url": self.information_url,
            "comment_url": self.comment_url,
            "date_scraped": self.scrape_date,
            "date_received": self.received_date,
            "on_notice_from": None,
            "on_notice_to": None,
        }
