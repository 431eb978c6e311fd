"""Read-only lookup that adds the state and postcode to suburb names."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Optional

from .logging import get_logger

__all__ = ["SuburbLookup", "load_suburbs"]

logger = get_logger(__name__)


class SuburbLookup:
    """
    Maps bare suburb names to ``"Name, SA 5600"``.

    Keys are matched case-insensitively. Built once by the caller and passed
    to the parser; never modified afterwards.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, str]) -> None:
        self._entries = {name.strip().upper(): value for name, value in entries.items()}

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "SuburbLookup":
        """Build the lookup from ``Name,SA 5600`` lines, ignoring blanks."""
        entries: dict[str, str] = {}
        for line in lines:
            line = line.strip()
            if not line:
                continue
            name, _, region = line.partition(",")
            name = name.strip()
            region = region.strip()
            if not name:
                continue
            entries[name] = f"{name}, {region}" if region else name
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().upper() in self._entries

    def get(self, name: str) -> Optional[str]:
        return self._entries.get(name.strip().upper())

    def resolve(self, name: str) -> str:
        """
        Return the augmented suburb, falling back to ``name`` unchanged.

        Some documents print the suburb twice (``"Whyalla Whyalla"``); that
        form resolves to the single name's entry.
        """
        found = self.get(name)
        if found is not None:
            return found

        words = name.split()
        half = len(words) // 2
        if words and len(words) % 2 == 0 and words[:half] == words[half:]:
            found = self.get(" ".join(words[:half]))
            if found is not None:
                return found
        return name


def load_suburbs(path: Path) -> SuburbLookup:
    text = Path(path).read_text(encoding="utf-8")
    lookup = SuburbLookup.from_lines(text.splitlines())
    logger.info("suburbs_loaded", path=str(path), count=len(lookup))
    return lookup
