"""
Tests for the ingestion service.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from newmusic.clients.spotify import SpotifyClient
from newmusic.core.exceptions import APIError, CatalogReadError, ConfigurationError
from newmusic.models.releases import ParsedRow
from newmusic.services.ingest_service import IngestService
from newmusic.services.record_parser import RecordParser
from newmusic.utils.retry import RetryError


def album(album_id):
    return {
        "name": f"Album {album_id}",
        "album_type": "album",
        "release_date": "2026-10-16",
        "artists": [{"name": "Test Artist"}],
        "images": [{"url": f"https://i.scdn.co/image/{album_id}"}],
        "genres": [],
    }


@pytest.fixture
def client():
    mock = Mock()
    mock.access_token = "token"
    mock.get_album.side_effect = album
    return mock


@pytest.fixture
def albums_file(temp_dir):
    path = temp_dir / "input.txt"
    path.write_text(
        "https://open.spotify.com/album/one\n"
        "\n"
        "spotify:album:two\n",
        encoding="utf-8",
    )
    return path


class TestIngestService:
    """Tests for IngestService."""

    def test_read_album_ids(self, client, albums_file):
        assert IngestService(client=client).read_album_ids(albums_file) == ["one", "two"]

    def test_missing_album_list(self, client, temp_dir):
        with pytest.raises(CatalogReadError):
            IngestService(client=client).read_album_ids(temp_dir / "missing.txt")

    def test_fetch_keeps_order_and_drops_failures(self, client):
        def get_album(album_id):
            if album_id == "bad":
                raise APIError("HTTP 404")
            if album_id == "flaky":
                raise RetryError("gave up")
            return album(album_id)

        client.get_album.side_effect = get_album

        albums = IngestService(client=client, max_workers=3).fetch_albums(["one", "bad", "flaky", "two"])

        assert [a["name"] for a in albums] == ["Album one", "Album two"]

    def test_ingest_appends_parseable_rows(self, client, albums_file, temp_dir):
        catalog = temp_dir / "input.csv"

        count = IngestService(client=client).ingest(albums_file, catalog)

        assert count == 2
        rows = RecordParser().load_catalog(catalog)
        assert all(isinstance(row, ParsedRow) for row in rows)
        assert [row.release.name for row in rows] == ["Album one", "Album two"]
        assert rows[0].release.release_date_text == "16/10/2026"
        assert rows[0].release.release_type == "Album"

    def test_ingest_without_token(self, client, albums_file, temp_dir):
        client.access_token = None

        with pytest.raises(ConfigurationError, match="SPOTIFY_API_TOKEN"):
            IngestService(client=client).ingest(albums_file, temp_dir / "input.csv")

    def test_ingest_nothing_fetched(self, client, albums_file, temp_dir):
        client.get_album.side_effect = APIError("down")
        catalog = temp_dir / "input.csv"

        assert IngestService(client=client).ingest(albums_file, catalog) == 0
        assert not catalog.exists()

    def test_unparseable_album_is_dropped(self, temp_dir, albums_file, mock_requests_get):
        def fake_get(url, **kwargs):
            reply = Mock(status_code=200)
            if url.endswith("/one"):
                reply.json.side_effect = ValueError("Expecting value")
            else:
                reply.json.return_value = album("two")
            return reply

        mock_requests_get.side_effect = fake_get
        catalog = temp_dir / "input.csv"

        count = IngestService(client=SpotifyClient(access_token="token")).ingest(albums_file, catalog)

        assert count == 1
        assert RecordParser().load_catalog(catalog)[0].release.name == "Album two"
