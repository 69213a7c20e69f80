"""
Record parser: turns raw catalog rows into Release records.

One bad row never aborts a batch. Rows are parsed into a tagged result
(``ParsedRow`` or ``SkippedRow``) so callers can observe both outcomes; only
problems with the catalog stream as a whole raise ``CatalogReadError``.
"""

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.config import CATALOG_COLUMNS, CATALOG_FIELD_LIMIT
from ..core.exceptions import CatalogReadError, ParseError, SkipReason
from ..core.validation import DAY_FIRST, DateParsePolicy, decode_genre_array
from ..models.releases import ParsedRow, Release, RowResult, SkippedRow

logger = logging.getLogger(__name__)

# Index of the genres cell; older exports wrote JSON arrays unquoted, which
# spreads one genres cell over several CSV cells.
GENRES_INDEX = CATALOG_COLUMNS.index("genres")
TRAILING_COLUMNS = len(CATALOG_COLUMNS) - GENRES_INDEX - 1


def parse_genres(raw: Optional[str]) -> Tuple[str, ...]:
    """
    Normalize a genres cell.

    Tries a strict JSON array first, then falls back to a comma-separated
    list with each element trimmed. Never fails.

    Args:
        raw: Raw genres cell

    Returns:
        Tuple of genre names, empty when the cell is blank
    """
    raw = (raw or "").strip()
    if not raw:
        return ()

    decoded = decode_genre_array(raw)
    if decoded is not None:
        return tuple(genre for genre in decoded if genre)

    logger.debug(f"Genres are not a JSON array, splitting on commas: {raw!r}")
    body, strip_chars = raw, ""
    if raw.startswith("[") and raw.endswith("]"):
        # A bracketed list that lost some of its quotes on the way through CSV:
        # "[Pop, Rock]" gives ("Pop", "Rock"), not ("[Pop", "Rock]")
        body, strip_chars = raw[1:-1], "\"'"
    genres = tuple(
        part.strip().strip(strip_chars).strip()
        for part in body.split(",")
        if part.strip().strip(strip_chars).strip()
    )
    return genres or (raw,)


class RecordParser:
    """Parses catalog rows into Release records."""

    def __init__(self, date_policy: DateParsePolicy = DAY_FIRST):
        self.date_policy = date_policy

    def parse(self, row: Mapping[str, Optional[str]]) -> Release:
        """
        Parse one catalog row.

        Args:
            row: Mapping of catalog column name to raw cell text

        Returns:
            Release record

        Raises:
            ParseError: With reason INVALID_DATE or MISSING_FIELD
        """
        artist = (row.get("artist") or "").strip()
        name = (row.get("name") or "").strip()
        date_text = (row.get("release_date") or "").strip()

        try:
            release_date = self.date_policy.parse(date_text)
        except ValueError as e:
            raise ParseError(SkipReason.INVALID_DATE, str(e)) from e

        if not artist or not name:
            missing = [field for field, value in (("artist", artist), ("name", name)) if not value]
            raise ParseError(SkipReason.MISSING_FIELD, f"missing {', '.join(missing)}")

        return Release(
            artist=artist,
            name=name,
            release_date=release_date,
            album_art_url=(row.get("album_art_url") or "").strip(),
            genres=parse_genres(row.get("genres")),
            release_type=(row.get("type") or "").strip(),
            release_date_text=date_text,
        )

    def parse_row(self, line: int, row: Mapping[str, Optional[str]]) -> RowResult:
        """
        Parse one row into a tagged result instead of raising.

        Args:
            line: Line number in the catalog, for diagnostics
            row: Mapping of catalog column name to raw cell text

        Returns:
            ParsedRow on success, SkippedRow otherwise
        """
        label = f"{(row.get('artist') or '').strip()} - {(row.get('name') or '').strip()}"
        try:
            release = self.parse(row)
        except ParseError as e:
            logger.warning(f"Skipped line {line} ({label}): {e.reason.value}: {e}")
            return SkippedRow(line=line, reason=e.reason, detail=str(e))

        logger.debug(f"Parsed date {release.release_date.isoformat()} for {label}")
        return ParsedRow(line=line, release=release)

    def read_catalog(self, stream: Iterable[str]) -> List[RowResult]:
        """
        Read a whole catalog stream.

        Args:
            stream: Text lines of the catalog, header first

        Returns:
            One result per non-blank data row, in input order

        Raises:
            CatalogReadError: If the stream is unreadable or the header is wrong
        """
        results = []
        raise_field_limit()
        try:
            reader = csv.reader(stream)
            header = next(reader, None)
            validate_header(header)

            for cells in reader:
                if not cells or all(not cell.strip() for cell in cells):
                    continue
                line = reader.line_num
                row = cells_to_row(cells)
                if row is None:
                    logger.warning(f"Skipped line {line}: expected {len(CATALOG_COLUMNS)} columns, got {len(cells)}")
                    results.append(SkippedRow(
                        line=line,
                        reason=SkipReason.MALFORMED_ROW,
                        detail=f"{len(cells)} columns",
                    ))
                    continue
                results.append(self.parse_row(line, row))
        except (csv.Error, UnicodeDecodeError) as e:
            raise CatalogReadError(f"Catalog is unreadable: {e}") from e

        return results

    def load_catalog(self, path: Path) -> List[RowResult]:
        """
        Read the catalog file at ``path``.

        Raises:
            CatalogReadError: If the file cannot be opened or read
        """
        try:
            with open(path, "r", encoding="utf-8-sig", newline="") as handle:
                return self.read_catalog(handle)
        except OSError as e:
            raise CatalogReadError(f"Cannot read catalog {path}: {e}") from e


def raise_field_limit():
    """Let one oversized cell through instead of failing the whole catalog."""
    if csv.field_size_limit() < CATALOG_FIELD_LIMIT:
        csv.field_size_limit(CATALOG_FIELD_LIMIT)


def validate_header(header: Optional[Sequence[str]]):
    """Raise CatalogReadError unless ``header`` names the catalog columns in order."""
    if header is None:
        raise CatalogReadError("Catalog is empty: header row required")
    names = tuple(cell.strip().lstrip("\ufeff") for cell in header)
    if names != CATALOG_COLUMNS:
        raise CatalogReadError(
            f"Invalid headers {','.join(names)!r}. Expected: {','.join(CATALOG_COLUMNS)}"
        )


def cells_to_row(cells: Sequence[str]) -> Optional[dict]:
    """
    Map CSV cells onto catalog columns.

    Extra cells are folded back into the genres cell; too few cells cannot
    be mapped and return None.
    """
    if len(cells) < len(CATALOG_COLUMNS):
        return None
    if len(cells) > len(CATALOG_COLUMNS):
        head = list(cells[:GENRES_INDEX])
        tail = list(cells[len(cells) - TRAILING_COLUMNS:])
        genres = ",".join(cells[GENRES_INDEX:len(cells) - TRAILING_COLUMNS])
        cells = head + [genres] + tail
    return {column: cell.strip() for column, cell in zip(CATALOG_COLUMNS, cells)}
