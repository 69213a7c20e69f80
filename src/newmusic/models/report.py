"""
Run report models.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from .releases import Release, RowResult, ParsedRow, SkippedRow


@dataclass(frozen=True)
class DateWindow:
    """Inclusive date range used for selection."""
    start: date
    end: date

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class RenderedRelease:
    """A release drawn on the card, with the cursor before and after it."""
    release: Release
    start_y: int
    end_y: int
    clipped: bool = False


@dataclass(frozen=True)
class SkippedRelease:
    """A release left off the card because its art could not be loaded."""
    release: Release
    reason: str


ReleaseOutcome = Union[RenderedRelease, SkippedRelease]


@dataclass
class CardReport:
    """Result of one render pass."""
    file_name: str
    path: Optional[Path] = None
    cursor: int = 0
    outcomes: List[ReleaseOutcome] = field(default_factory=list)

    @property
    def rendered(self) -> List[RenderedRelease]:
        return [o for o in self.outcomes if isinstance(o, RenderedRelease)]

    @property
    def skipped(self) -> List[SkippedRelease]:
        return [o for o in self.outcomes if isinstance(o, SkippedRelease)]


@dataclass
class RunReport:
    """Everything one pipeline run did, from catalog rows to the card."""
    window: DateWindow
    rows: List[RowResult] = field(default_factory=list)
    selected: List[Release] = field(default_factory=list)
    card: Optional[CardReport] = None

    @property
    def parsed(self) -> List[ParsedRow]:
        return [r for r in self.rows if isinstance(r, ParsedRow)]

    @property
    def skipped_rows(self) -> List[SkippedRow]:
        return [r for r in self.rows if isinstance(r, SkippedRow)]

    @property
    def is_noop(self) -> bool:
        """True when nothing fell in the window and no card was produced."""
        return self.card is None
