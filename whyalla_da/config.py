"""Configuration loader for the Whyalla development application scraper."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_LISTING_URL = "https://www.whyalla.sa.gov.au/page.aspx?u=1081"
DEFAULT_COMMENT_URL = "mailto:customer.service@whyalla.sa.gov.au"
DEFAULT_USER_AGENT = "whyalla-da/1.0 (+https://www.whyalla.sa.gov.au/)"
DEFAULT_SUBURB_NAMES_PATH = Path(__file__).parent / "data" / "suburbnames.txt"

LAYOUTS = ("register", "notice")


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def _get_float(key: str, default: float) -> float:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be a number") from exc


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if value_lower in {"0", "false", "f", "no", "n", "off"}:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


@dataclass(slots=True)
class AppConfig:
    database_url: str
    listing_url: str
    comment_url: str
    layout: str
    suburb_names_path: Path
    timezone: ZoneInfo
    http_timeout: float
    http_retries: int
    http_proxy: Optional[str]
    http_user_agent: str
    request_delay: float
    request_jitter: int
    select_all_documents: bool
    pdf_x_tolerance: float
    log_level: str

    @property
    def timezone_name(self) -> str:
        return self.timezone.key


def load_config() -> AppConfig:
    database_url = _get_env("DATABASE_URL", "sqlite:///data.sqlite")
    listing_url = _get_env("WHYALLA_LISTING_URL", DEFAULT_LISTING_URL)
    comment_url = _get_env("WHYALLA_COMMENT_URL", DEFAULT_COMMENT_URL)

    layout = _get_env("DOCUMENT_LAYOUT", "register").lower()
    if layout not in LAYOUTS:
        raise ValueError(
            f"Environment variable DOCUMENT_LAYOUT must be one of {', '.join(LAYOUTS)}"
        )

    suburb_names_path = Path(_get_env("SUBURB_NAMES_PATH", str(DEFAULT_SUBURB_NAMES_PATH)))

    tz_name = _get_env("TIMEZONE", "Australia/Adelaide")
    try:
        timezone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unable to load timezone '{tz_name}'") from exc

    return AppConfig(
        database_url=database_url,
        listing_url=listing_url,
        comment_url=comment_url,
        layout=layout,
        suburb_names_path=suburb_names_path,
        timezone=timezone,
        http_timeout=_get_float("HTTP_TIMEOUT_SECONDS", 30.0),
        http_retries=max(1, _get_int("HTTP_RETRIES", 3)),
        http_proxy=_get_env("HTTP_PROXY"),
        http_user_agent=_get_env("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
        request_delay=max(0.0, _get_float("REQUEST_DELAY_SECONDS", 2.0)),
        request_jitter=max(0, _get_int("REQUEST_JITTER_SECONDS", 5)),
        select_all_documents=_get_bool("SCRAPER_SELECT_ALL", False),
        pdf_x_tolerance=_get_float("PDF_X_TOLERANCE", 3.0),
        log_level=_get_env("LOG_LEVEL", "INFO").upper(),
    )
