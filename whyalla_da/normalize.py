"""Clean-up helpers for text lifted out of council PDFs."""

from __future__ import annotations

import re
from typing import Optional

import dateparser

__all__ = [
    "ARTIFACT_REPLACEMENTS",
    "DESCRIPTION_PREFIXES",
    "NO_DESCRIPTION",
    "clean_text",
    "collapse_whitespace",
    "normalize_application_number",
    "normalize_description",
    "parse_received_date",
    "strip_prefix",
]

# Mis-decoded characters that show up in address cells, applied in order.
ARTIFACT_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("Ã¼", " "),
    ("ü", " "),
)

DESCRIPTION_PREFIXES: tuple[str, ...] = (
    "(PROPOSED) ",
    "(APPLICATION NOT REQUIRED) ",
    "(PLANNING ONLY) ",
    "(PLANNING) ",
)

NO_DESCRIPTION = "NO DESCRIPTION PROVIDED"

RECEIVED_DATE_FORMATS = ["%d/%m/%Y"]

# strptime alone would also accept a single-digit month.
_RECEIVED_DATE_SHAPE = re.compile(r"^\d{1,2}/\d{2}/\d{4}$")

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def clean_text(text: Optional[str]) -> str:
    """Replace known decoding artifacts with spaces and tidy whitespace."""
    if not text:
        return ""
    for artifact, replacement in ARTIFACT_REPLACEMENTS:
        text = text.replace(artifact, replacement)
    return collapse_whitespace(text)


def strip_prefix(description: Optional[str]) -> str:
    """Remove a single leading qualifier such as ``(PROPOSED) ``."""
    if not description:
        return ""
    for prefix in DESCRIPTION_PREFIXES:
        if description.startswith(prefix):
            return description[len(prefix):]
    return description


def normalize_description(description: Optional[str]) -> str:
    text = strip_prefix(collapse_whitespace(description or ""))
    return text.strip() or NO_DESCRIPTION


def normalize_application_number(raw: Optional[str]) -> str:
    """Council references never contain spaces; drop any the PDF introduced."""
    if not raw:
        return ""
    return _WHITESPACE.sub("", raw)


def parse_received_date(raw: Optional[str]) -> str:
    """
    Parse a ``D/MM/YYYY`` date into ISO format.

    The leading zero of the day may be omitted; the month always has two
    digits and the year four. Anything else, including impossible dates,
    yields an empty string.
    """
    if not raw:
        return ""
    text = raw.strip()
    if not _RECEIVED_DATE_SHAPE.match(text):
        return ""
    parsed = dateparser.parse(
        text,
        date_formats=RECEIVED_DATE_FORMATS,
        languages=["en"],
        settings={"PARSERS": ["custom-formats"], "STRICT_PARSING": True},
    )
    if parsed is None:
        return ""
    return parsed.date().isoformat()
