"""
The weekly run: catalog -> window selection -> card.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional, Union

from ..core.config import PATHS
from ..models.releases import ParsedRow
from ..models.report import RunReport
from .card_composer import CardComposer
from .cover_art_fetcher import CoverArtFetcher
from .record_parser import RecordParser
from .surface import DrawingSurface, PillowSurface
from .window_filter import select, to_day, window_for

logger = logging.getLogger(__name__)


def run_pipeline(
    catalog_path: Optional[Path] = None,
    today: Optional[Union[date, datetime]] = None,
    output_dir: Optional[Path] = None,
    parser: Optional[RecordParser] = None,
    art_fetcher: Optional[CoverArtFetcher] = None,
    surface_factory: Callable[[], DrawingSurface] = PillowSurface,
) -> RunReport:
    """
    Run one full pass of the pipeline.

    Args:
        catalog_path: CSV catalog to read
        today: Last day of the selection window; defaults to the current date
        output_dir: Where the card is written
        parser: Record parser to use
        art_fetcher: Album art fetcher to use
        surface_factory: Builds the drawing surface for the card

    Returns:
        RunReport. ``report.card`` is None when no release fell in the window.

    Raises:
        CatalogReadError: If the catalog cannot be read
    """
    catalog_path = Path(catalog_path or PATHS["CATALOG_FILE"])
    today = to_day(today or date.today())
    parser = parser or RecordParser()

    logger.info(f"Reading catalog {catalog_path}")
    rows = parser.load_catalog(catalog_path)
    releases = [row.release for row in rows if isinstance(row, ParsedRow)]

    report = RunReport(window=window_for(today), rows=rows)
    report.selected = select(releases, today)

    if not report.selected:
        logger.info("No releases found for the previous week.")
        return report

    composer = CardComposer(output_dir=output_dir, art_fetcher=art_fetcher)
    report.card = composer.compose(report.selected, surface_factory(), today)
    return report
