"""
Drawing surfaces for the card.

The composer only needs a handful of capabilities from a rendering backend:
fill a rectangle, pick a font, measure and write text, draw an image, and
encode the result. ``PillowSurface`` provides them on top of Pillow.
"""

import io
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Protocol, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..core.config import CARD_CONFIG, FONT_PATHS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontSpec:
    """A font preset: pixel size and weight."""
    size: int
    bold: bool = False


class DrawingSurface(Protocol):
    """Capabilities the card composer needs from a rendering backend."""

    width: int
    height: int

    def fill_rect(self, x: int, y: int, width: int, height: int, color: str) -> None: ...

    def set_font(self, font: FontSpec) -> None: ...

    def measure_text(self, text: str) -> float: ...

    def fill_text(self, text: str, x: int, y: int, color: str) -> None: ...

    def draw_image(self, asset: Any, x: int, y: int, width: int, height: int) -> None: ...

    def encode(self) -> bytes: ...


class FontLoader:
    """Loads and caches TrueType fonts, falling back to Pillow's default font."""

    _font_cache: Dict[Tuple[int, bool], ImageFont.ImageFont] = {}

    @classmethod
    def get_font(cls, spec: FontSpec):
        cache_key = (spec.size, spec.bold)
        if cache_key in cls._font_cache:
            return cls._font_cache[cache_key]

        font = None
        for font_path in FONT_PATHS["BOLD" if spec.bold else "REGULAR"]:
            if os.path.isabs(font_path) and not os.path.exists(font_path):
                continue
            try:
                font = ImageFont.truetype(font_path, spec.size)
                break
            except OSError:
                continue

        if font is None:
            logger.warning(f"No TrueType font found for size {spec.size}, using Pillow default")
            font = ImageFont.load_default(size=spec.size)

        cls._font_cache[cache_key] = font
        return font


class PillowSurface:
    """Drawing surface backed by a Pillow RGB image."""

    def __init__(
        self,
        width: int = CARD_CONFIG["WIDTH"],
        height: int = CARD_CONFIG["HEIGHT"],
        image_format: str = CARD_CONFIG["FILE_FORMAT"],
        quality: int = CARD_CONFIG["JPEG_QUALITY"],
    ):
        self.width = width
        self.height = height
        self.image_format = image_format
        self.quality = quality
        self.image = Image.new("RGB", (width, height), CARD_CONFIG["BACKGROUND_COLOR"])
        self.draw = ImageDraw.Draw(self.image)
        self.font = FontLoader.get_font(FontSpec(size=10))

    def fill_rect(self, x: int, y: int, width: int, height: int, color: str) -> None:
        self.draw.rectangle((x, y, x + width - 1, y + height - 1), fill=color)

    def set_font(self, font: FontSpec) -> None:
        self.font = FontLoader.get_font(font)

    def measure_text(self, text: str) -> float:
        return self.draw.textlength(text, font=self.font)

    def fill_text(self, text: str, x: int, y: int, color: str) -> None:
        # y is the baseline, as on an HTML canvas
        self.draw.text((x, y), text, fill=color, font=self.font, anchor="ls")

    def draw_image(self, asset: Image.Image, x: int, y: int, width: int, height: int) -> None:
        resized = asset.convert("RGB").resize((width, height), resample=Image.Resampling.LANCZOS)
        self.image.paste(resized, (x, y))

    def encode(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format=self.image_format, quality=self.quality)
        return buffer.getvalue()
