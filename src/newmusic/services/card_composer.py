"""
Card composer: lays the selected releases out on a single card image.

The vertical cursor is a plain integer passed into and returned from every
layout step; nothing about a render pass lives on the composer between calls.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from ..core.config import CARD_CONFIG, FONT_PRESETS, PATHS
from ..core.exceptions import AssetLoadError
from ..models.releases import Release
from ..models.report import CardReport, RenderedRelease, SkippedRelease
from .cover_art_fetcher import ArtResult, CoverArtFetcher
from .surface import DrawingSurface, FontSpec
from .text_layout import wrap_text
from .window_filter import to_day

logger = logging.getLogger(__name__)

# English names regardless of the system locale, unlike strftime("%B")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def font_preset(name: str) -> FontSpec:
    size, bold = FONT_PRESETS[name]
    return FontSpec(size=size, bold=bold)


def card_file_name(today: Union[date, datetime]) -> str:
    """Deterministic card file name for ``today``, e.g. new-releases-20261019.jpg."""
    day = to_day(today)
    return f"{CARD_CONFIG['FILE_PREFIX']}{day:%Y%m%d}.{CARD_CONFIG['FILE_EXTENSION']}"


def long_date(today: Union[date, datetime]) -> str:
    """Long-form US English date, e.g. 'Monday, October 19, 2026'."""
    day = to_day(today)
    return f"{WEEKDAY_NAMES[day.weekday()]}, {MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


class CardComposer:
    """Composes the new releases card."""

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        art_fetcher: Optional[CoverArtFetcher] = None,
        config: Optional[dict] = None,
    ):
        self.output_dir = Path(output_dir) if output_dir is not None else PATHS["OUTPUT_DIR"]
        self.art_fetcher = art_fetcher or CoverArtFetcher()
        self.config = config or CARD_CONFIG

    def _write_text(self, surface: DrawingSurface, text: str, y: int, preset: str) -> int:
        surface.set_font(font_preset(preset))
        color = self.config["TEXT_COLOR"]
        return wrap_text(
            text,
            self.config["TEXT_X"],
            y,
            self.config["MAX_TEXT_WIDTH"],
            self.config["LINE_HEIGHT"],
            surface.measure_text,
            lambda line, x, line_y: surface.fill_text(line, x, line_y, color),
        )

    def paint_header(self, surface: DrawingSurface, today: Union[date, datetime]):
        """Background, title and the long-form date."""
        surface.fill_rect(0, 0, surface.width, surface.height, self.config["BACKGROUND_COLOR"])

        surface.set_font(font_preset("TITLE"))
        surface.fill_text(self.config["TITLE"], self.config["PADDING"], self.config["TITLE_Y"], self.config["TEXT_COLOR"])

        surface.set_font(font_preset("DATE"))
        surface.fill_text(long_date(today), self.config["PADDING"], self.config["DATE_Y"], self.config["TEXT_COLOR"])

    def layout_release(self, surface: DrawingSurface, release: Release, art: Any, y: int) -> int:
        """
        Draw one release starting at cursor ``y``.

        Art goes at (PADDING, y). The three text blocks each start one
        BLOCK_OFFSET below the last line of the previous block, and the next
        release starts a fixed 2 * PADDING below the last text line.

        Returns:
            Cursor for the next release
        """
        padding = self.config["PADDING"]
        offset = self.config["BLOCK_OFFSET"]
        art_size = self.config["ALBUM_ART_SIZE"]

        surface.draw_image(art, padding, y, art_size, art_size)

        y = self._write_text(surface, release.display_name, y + offset, "RELEASE_NAME")
        y = self._write_text(surface, release.display_details, y + offset, "RELEASE_DETAILS")
        y = self._write_text(surface, release.release_date_text, y + offset, "RELEASE_DATE")

        return y + padding * 2

    def render(
        self,
        releases: Sequence[Release],
        surface: DrawingSurface,
        today: Union[date, datetime],
        artwork: Optional[Sequence[ArtResult]] = None,
    ) -> CardReport:
        """
        Paint the card onto ``surface`` without persisting it.

        Args:
            releases: Releases to draw, in order
            surface: Drawing surface to paint on
            today: Date shown on the card and used for the file name
            artwork: Pre-loaded art aligned with ``releases``; fetched when None

        Returns:
            CardReport with the final cursor and one outcome per release
        """
        if artwork is None:
            artwork = self.art_fetcher.prefetch(releases)
        if len(artwork) != len(releases):
            raise ValueError(f"got {len(artwork)} artwork results for {len(releases)} releases")

        self.paint_header(surface, today)

        report = CardReport(file_name=card_file_name(today))
        y = self.config["CURSOR_START"]

        for release, art in zip(releases, artwork):
            if isinstance(art, AssetLoadError):
                logger.error(f"Error processing image for {release.display_name}: {art}")
                report.outcomes.append(SkippedRelease(release=release, reason=str(art)))
                continue

            start_y = y
            y = self.layout_release(surface, release, art, y)
            bottom = max(y - self.config["PADDING"] * 2, start_y + self.config["ALBUM_ART_SIZE"])
            clipped = bottom > surface.height
            if clipped:
                # Content past the canvas is clipped, not reflowed
                logger.warning(f"{release.display_name} runs past the bottom of the card and is clipped")
            report.outcomes.append(RenderedRelease(release=release, start_y=start_y, end_y=y, clipped=clipped))

        report.cursor = y
        return report

    def compose(
        self,
        releases: Sequence[Release],
        surface: DrawingSurface,
        today: Union[date, datetime],
        artwork: Optional[Sequence[ArtResult]] = None,
    ) -> CardReport:
        """
        Render the card and write it to the output directory.

        Returns:
            CardReport whose ``file_name`` is keyed on ``today``
        """
        report = self.render(releases, surface, today, artwork)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        report.path = self.output_dir / report.file_name
        report.path.write_bytes(surface.encode())

        logger.info(
            f"Wrote {report.path} ({len(report.rendered)} rendered, {len(report.skipped)} skipped)"
        )
        return report
