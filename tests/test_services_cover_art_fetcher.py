"""
Tests for the cover art fetcher.
"""

import io
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

import requests
from PIL import Image

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from newmusic.core.exceptions import AssetLoadError
from newmusic.services.cover_art_fetcher import CoverArtFetcher


def png_bytes(color="red", size=4):
    buffer = io.BytesIO()
    Image.new("RGB", (size, size), color).save(buffer, format="PNG")
    return buffer.getvalue()


def response(status_code=200, content=b""):
    mock = Mock()
    mock.status_code = status_code
    mock.content = content
    return mock


class TestCoverArtFetcher:
    """Tests for CoverArtFetcher."""

    def test_load_decodes_image(self, mock_requests_get):
        mock_requests_get.return_value = response(content=png_bytes())

        image = CoverArtFetcher().load("https://i.scdn.co/image/a")

        assert image.size == (4, 4)
        _, kwargs = mock_requests_get.call_args
        assert kwargs["timeout"] == CoverArtFetcher().timeout

    def test_empty_url_raises(self, mock_requests_get):
        with pytest.raises(AssetLoadError):
            CoverArtFetcher().load("")
        mock_requests_get.assert_not_called()

    def test_http_error_raises(self, mock_requests_get):
        mock_requests_get.return_value = response(status_code=404)

        with pytest.raises(AssetLoadError, match="HTTP 404"):
            CoverArtFetcher().load("https://i.scdn.co/image/missing")

    def test_timeout_raises(self, mock_requests_get):
        mock_requests_get.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(AssetLoadError, match="timed out"):
            CoverArtFetcher(timeout=1).load("https://i.scdn.co/image/slow")

    def test_network_error_raises(self, mock_requests_get):
        mock_requests_get.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(AssetLoadError, match="network error"):
            CoverArtFetcher().load("https://i.scdn.co/image/a")

    def test_undecodable_bytes_raise(self, mock_requests_get):
        mock_requests_get.return_value = response(content=b"<html>not an image</html>")

        with pytest.raises(AssetLoadError, match="cannot decode"):
            CoverArtFetcher().load("https://i.scdn.co/image/a")

    def test_fetch_bytes_uses_cache(self, mock_requests_get):
        mock_requests_get.return_value = response(content=b"data")
        fetcher = CoverArtFetcher()

        fetcher.fetch_bytes("https://i.scdn.co/image/a")
        fetcher.fetch_bytes("https://i.scdn.co/image/a")

        assert mock_requests_get.call_count == 1

    def test_prefetch_keeps_input_order(self, mock_requests_get, make_release):
        def fake_get(url, **kwargs):
            if url.endswith("bad"):
                return response(status_code=500)
            return response(content=png_bytes())

        mock_requests_get.side_effect = fake_get
        releases = [
            make_release(name="One", album_art_url="https://i.scdn.co/image/one"),
            make_release(name="Two", album_art_url="https://i.scdn.co/image/bad"),
            make_release(name="Three", album_art_url=""),
            make_release(name="Four", album_art_url="https://i.scdn.co/image/four"),
        ]

        results = CoverArtFetcher(max_workers=3).prefetch(releases)

        assert len(results) == 4
        assert isinstance(results[0], Image.Image)
        assert isinstance(results[1], AssetLoadError)
        assert isinstance(results[2], AssetLoadError)
        assert isinstance(results[3], Image.Image)

    def test_prefetch_empty(self):
        assert CoverArtFetcher().prefetch([]) == []

    def test_decompression_bomb_raises_load_error(self, mock_requests_get, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
        mock_requests_get.return_value = response(content=png_bytes(size=100))

        with pytest.raises(AssetLoadError, match="cannot decode"):
            CoverArtFetcher().load("https://i.scdn.co/image/huge")

    def test_decompression_bomb_only_skips_its_release(self, mock_requests_get, monkeypatch, make_release):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

        def fake_get(url, **kwargs):
            return response(content=png_bytes(size=100 if url.endswith("huge") else 2))

        mock_requests_get.side_effect = fake_get
        releases = [
            make_release(name="Huge", album_art_url="https://i.scdn.co/image/huge"),
            make_release(name="Small", album_art_url="https://i.scdn.co/image/small"),
        ]

        results = CoverArtFetcher().prefetch(releases)

        assert isinstance(results[0], AssetLoadError)
        assert isinstance(results[1], Image.Image)
