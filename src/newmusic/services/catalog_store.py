"""
CSV catalog export.
"""

import csv
import logging
from pathlib import Path
from typing import Iterable, Mapping

from ..core.config import CATALOG_COLUMNS

logger = logging.getLogger(__name__)


def append_rows(path: Path, rows: Iterable[Mapping[str, str]]) -> int:
    """
    Append rows to the catalog, writing the header first if the file is new.

    Cells containing commas or quotes (JSON genre arrays, multi-artist
    names) are quoted so the row keeps exactly one cell per column.

    Returns:
        Number of rows written
    """
    path = Path(path)
    is_new = not path.exists() or path.stat().st_size == 0
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, "a", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=CATALOG_COLUMNS, extrasaction="ignore", lineterminator="\n")
        if is_new:
            writer.writeheader()
        for row in rows:
            writer.writerow({column: row.get(column, "") for column in CATALOG_COLUMNS})
            count += 1

    logger.debug(f"Appended {count} row(s) to {path}")
    return count
