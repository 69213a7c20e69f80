"""
Release and catalog row models.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Tuple, Union

from ..core.exceptions import SkipReason


@dataclass(frozen=True)
class Release:
    """One music-catalog entry, immutable once parsed."""
    artist: str
    name: str
    release_date: date
    album_art_url: str = ""
    genres: Tuple[str, ...] = field(default_factory=tuple)
    release_type: str = ""
    release_date_text: str = ""  # raw catalog cell, drawn verbatim on the card

    @property
    def display_name(self) -> str:
        return f"{self.artist} - {self.name}"

    @property
    def display_details(self) -> str:
        return f"{self.release_type} ({', '.join(self.genres)})"


@dataclass(frozen=True)
class ParsedRow:
    """A catalog row that became a Release."""
    line: int
    release: Release


@dataclass(frozen=True)
class SkippedRow:
    """A catalog row left out of the run."""
    line: int
    reason: SkipReason
    detail: str = ""


RowResult = Union[ParsedRow, SkippedRow]
