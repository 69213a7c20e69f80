"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import tempfile
import shutil
from datetime import date
from pathlib import Path
from unittest.mock import patch
from typing import Generator

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class RecordingSurface:
    """Drawing surface that records calls and measures text as len(text)."""

    def __init__(self, width: int = 1080, height: int = 2500):
        self.width = width
        self.height = height
        self.font = None
        self.calls = []

    @property
    def texts(self):
        return [call[1] for call in self.calls if call[0] == "text"]

    @property
    def images(self):
        return [call for call in self.calls if call[0] == "image"]

    def fill_rect(self, x, y, width, height, color):
        self.calls.append(("rect", x, y, width, height, color))

    def set_font(self, font):
        self.font = font

    def measure_text(self, text):
        return len(text)

    def fill_text(self, text, x, y, color):
        self.calls.append(("text", text, x, y, self.font))

    def draw_image(self, asset, x, y, width, height):
        self.calls.append(("image", asset, x, y, width, height))

    def encode(self):
        return b"card"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def today() -> date:
    """A fixed 'today' for window and file name tests (a Friday)."""
    return date(2026, 10, 16)


@pytest.fixture
def surface() -> RecordingSurface:
    """Recording drawing surface."""
    return RecordingSurface()


@pytest.fixture
def mock_requests_get():
    """Mock requests.get for API testing."""
    with patch('requests.get') as mock_get:
        yield mock_get


@pytest.fixture
def make_release():
    """Factory for Release records."""
    from newmusic.models.releases import Release

    def _make(artist="Test Artist", name="Test Album", release_date=date(2026, 10, 16), **kwargs):
        kwargs.setdefault("album_art_url", "https://i.scdn.co/image/test")
        kwargs.setdefault("genres", ("Pop", "Rock"))
        kwargs.setdefault("release_type", "album")
        kwargs.setdefault("release_date_text", release_date.strftime("%d/%m/%Y"))
        return Release(artist=artist, name=name, release_date=release_date, **kwargs)

    return _make


@pytest.fixture
def catalog_text() -> str:
    """A small catalog with a good row, a bad date and an unquoted genre array."""
    return (
        "artist,name,album_art_url,genres,type,release_date\n"
        'Test Artist,Fresh Album,https://i.scdn.co/image/a,"[""Pop"",""Rock""]",album,16/10/2026\n'
        "Other Artist,Bad Date,https://i.scdn.co/image/b,Indie,single,2026-10-16\n"
        'Third Artist,Old Album,https://i.scdn.co/image/c,["Jazz","Soul"],album,06/10/2026\n'
    )


@pytest.fixture
def catalog_file(temp_dir: Path, catalog_text: str) -> Path:
    """Catalog written to disk."""
    path = temp_dir / "input.csv"
    path.write_text(catalog_text, encoding="utf-8")
    return path
