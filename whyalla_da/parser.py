"""Map positioned PDF text onto development application fields."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from .geometry import BELOW, RIGHT, Direction
from .logging import get_logger
from .models import DevelopmentApplication, Fragment
from .normalize import (
    clean_text,
    normalize_application_number,
    normalize_description,
    parse_received_date,
)
from .proximity import find_closest
from .regions import extract_region
from .segmenter import DEFAULT_MARKER, segment_page
from .suburbs import SuburbLookup

logger = get_logger(__name__)


class DocumentError(ValueError):
    """Raised when a document cannot be turned into pages at all."""


@dataclass(frozen=True, slots=True)
class RegionField:
    """Value found inside the rectangle delineated by up to three labels."""

    label: str
    right_bound: Optional[str] = None
    bottom_bound: Optional[str] = None
    direction: Direction = RIGHT

    def extract(self, fragments: Sequence[Fragment]) -> Optional[str]:
        return extract_region(
            fragments,
            self.label,
            self.right_bound,
            self.bottom_bound,
            self.direction,
        )


@dataclass(frozen=True, slots=True)
class ClosestField:
    """Value is the fragment nearest to the label."""

    label: str
    direction: Direction = RIGHT

    def extract(self, fragments: Sequence[Fragment]) -> Optional[str]:
        fragment = find_closest(fragments, self.label, self.direction)
        return None if fragment is None else fragment.text.strip()


FieldRule = Union[RegionField, ClosestField]

# Development register: several applications per page, each laid out as a
# block of "label  value" cells in two columns.
REGISTER_FIELDS: Mapping[str, FieldRule] = {
    "application_number": RegionField("Application No", "Application Date", "Applicants Name"),
    "received_date": RegionField("Application Date", "Planning Approval", "Application received"),
    "house_number": RegionField("Property House No", "Planning Conditions", "Lot"),
    "street": RegionField("Property street", "Planning Conditions", "Property suburb"),
    "suburb": RegionField("Property suburb", "Planning Conditions", "Title"),
    "description": RegionField("Development Description", "Relevant Authority", None, BELOW),
}

# Single notice per page: each value is simply the neighbour of its label.
NOTICE_FIELDS: Mapping[str, FieldRule] = {
    "application_number": ClosestField("Application No", RIGHT),
    "received_date": ClosestField("Application received", RIGHT),
    "house_number": ClosestField("Property House No", RIGHT),
    "street": ClosestField("Property Street", RIGHT),
    "suburb": ClosestField("Property Suburb", RIGHT),
    "description": ClosestField("Development Description", BELOW),
}


class Layout(str, Enum):
    REGISTER = "register"
    NOTICE = "notice"

    @property
    def fields(self) -> Mapping[str, FieldRule]:
        return REGISTER_FIELDS if self is Layout.REGISTER else NOTICE_FIELDS

    @property
    def marker(self) -> Optional[str]:
        """Text that starts every application section, for multi-record layouts."""
        return DEFAULT_MARKER if self is Layout.REGISTER else None


@dataclass(frozen=True, slots=True)
class ParseContext:
    information_url: str
    comment_url: str
    suburbs: SuburbLookup
    scrape_date: date


def extract_fields(
    fragments: Sequence[Fragment],
    schema: Mapping[str, FieldRule],
) -> dict[str, Optional[str]]:
    return {name: rule.extract(fragments) for name, rule in schema.items()}


def build_address(
    house_number: Optional[str],
    street: Optional[str],
    suburb: Optional[str],
    suburbs: SuburbLookup,
) -> str:
    """
    Return ``"<house> <street>, <suburb, SA postcode>"``.

    An empty string is returned when there is no suburb, which makes the
    application invalid.
    """
    suburb_name = clean_text(suburb)
    if not suburb_name:
        return ""
    street_part = " ".join(part for part in (clean_text(house_number), clean_text(street)) if part)
    resolved = suburbs.resolve(suburb_name)
    return ", ".join(part for part in (street_part, resolved) if part).strip()


def build_application(
    values: Mapping[str, Optional[str]],
    context: ParseContext,
) -> DevelopmentApplication:
    return DevelopmentApplication(
        application_number=normalize_application_number(values.get("application_number")),
        address=build_address(
            values.get("house_number"),
            values.get("street"),
            values.get("suburb"),
            context.suburbs,
        ),
        description=normalize_description(values.get("description")),
        information_url=context.information_url,
        comment_url=context.comment_url,
        scrape_date=context.scrape_date.isoformat(),
        received_date=parse_received_date(values.get("received_date")),
    )


def parse_application(
    fragments: Sequence[Fragment],
    context: ParseContext,
    layout: Layout = Layout.REGISTER,
) -> Optional[DevelopmentApplication]:
    """Map one page section onto an application; None when it is incomplete."""
    application = build_application(extract_fields(fragments, layout.fields), context)
    if not application.is_valid():
        logger.info(
            "application_ignored",
            reason="missing application number or address",
            application_number=application.application_number,
            address=application.address,
            url=context.information_url,
        )
        return None
    return application


def parse_page(
    fragments: Sequence[Fragment],
    context: ParseContext,
    layout: Layout = Layout.REGISTER,
) -> List[DevelopmentApplication]:
    sections = segment_page(fragments, layout.marker) if layout.marker else [list(fragments)]
    applications: List[DevelopmentApplication] = []
    for section in sections:
        application = parse_application(section, context, layout)
        if application is not None:
            applications.append(application)
    return applications


def parse_document(
    pages: Iterable[Sequence[Fragment]],
    context: ParseContext,
    layout: Layout = Layout.REGISTER,
) -> List[DevelopmentApplication]:
    """Parse every page in order; raises DocumentError for a document without pages."""
    applications: List[DevelopmentApplication] = []
    page_count = 0
    for page_number, fragments in enumerate(pages, start=1):
        page_count += 1
        parsed = parse_page(fragments, context, layout)
        logger.debug("parsed_page", page=page_number, applications=len(parsed))
        applications.extend(parsed)

    if page_count == 0:
        raise DocumentError(f"Document has no pages: {context.information_url}")

    logger.info(
        "parsed_document",
        url=context.information_url,
        pages=page_count,
        applications=len(applications),
        layout=layout.value,
    )
    return applications
