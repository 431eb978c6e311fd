"""Turn PDF bytes into positioned text fragments, one list per page."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import pdfplumber

from .logging import get_logger
from .models import Fragment
from .parser import DocumentError

__all__ = ["DEFAULT_X_TOLERANCE", "decode_pdf", "words_to_fragments"]

logger = get_logger(__name__)

DEFAULT_X_TOLERANCE = 3.0


def words_to_fragments(words: Iterable[Dict[str, Any]]) -> List[Fragment]:
    """Convert pdfplumber word dicts (x0/x1/top/bottom) into fragments."""
    fragments: List[Fragment] = []
    for word in words:
        text = word.get("text") or ""
        if not text.strip():
            continue
        x0 = float(word["x0"])
        x1 = float(word["x1"])
        top = float(word["top"])
        bottom = float(word["bottom"])
        fragments.append(
            Fragment(
                text=text,
                x=x0,
                y=top,
                width=max(0.0, x1 - x0),
                height=max(0.0, bottom - top),
            )
        )
    return fragments


def decode_pdf(
    source: Union[bytes, str, Path],
    x_tolerance: float = DEFAULT_X_TOLERANCE,
) -> List[List[Fragment]]:
    """
    Extract the text runs of every page.

    Blank characters are kept inside words so that multi-word labels such as
    ``Property House No`` stay a single fragment; a gap wider than
    ``x_tolerance`` starts a new fragment.
    """
    handle = io.BytesIO(source) if isinstance(source, bytes) else str(source)
    try:
        pdf = pdfplumber.open(handle)
    except Exception as exc:
        raise DocumentError(f"Unable to open PDF: {exc}") from exc

    pages: List[List[Fragment]] = []
    with pdf:
        for page_index, page in enumerate(pdf.pages):
            words = page.extract_words(
                keep_blank_chars=True,
                use_text_flow=True,
                x_tolerance=x_tolerance,
            )
            fragments = words_to_fragments(words)
            logger.debug("decoded_page", page=page_index + 1, fragments=len(fragments))
            pages.append(fragments)
    return pages
