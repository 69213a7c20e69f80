"""
Ingestion: Spotify album URLs -> catalog rows.
"""

import concurrent.futures
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..clients.spotify import SpotifyClient, album_to_row, parse_album_id
from ..core.config import PATHS, SPOTIFY_CONFIG
from ..core.exceptions import APIError, CatalogReadError, ConfigurationError
from ..utils.retry import RetryError
from .catalog_store import append_rows

logger = logging.getLogger(__name__)


class IngestService:
    """Fetches albums listed in a text file and appends them to the catalog."""

    def __init__(self, client: Optional[SpotifyClient] = None, max_workers: int = SPOTIFY_CONFIG["MAX_WORKERS"]):
        self.client = client or SpotifyClient()
        self.max_workers = max_workers

    def read_album_ids(self, input_file: Path) -> List[str]:
        """One album URL per line; blank lines are ignored."""
        try:
            lines = Path(input_file).read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise CatalogReadError(f"Cannot read album list {input_file}: {e}") from e
        return [album_id for album_id in (parse_album_id(line) for line in lines) if album_id]

    def _fetch(self, album_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self.client.get_album(album_id)
        except (APIError, RetryError) as e:
            logger.error(f"Error fetching album {album_id}: {e}")
            return None

    def fetch_albums(self, album_ids: List[str]) -> List[Dict[str, Any]]:
        """Fetch albums concurrently; failures are logged and left out."""
        if not album_ids:
            return []
        workers = max(1, min(self.max_workers, len(album_ids)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            albums = list(executor.map(self._fetch, album_ids))
        return [album for album in albums if album]

    def ingest(self, input_file: Optional[Path] = None, catalog_path: Optional[Path] = None) -> int:
        """
        Fetch every album in ``input_file`` and append it to the catalog.

        Returns:
            Number of rows appended

        Raises:
            ConfigurationError: If no Spotify credentials are configured
            CatalogReadError: If the album list cannot be read
        """
        input_file = Path(input_file or PATHS["ALBUMS_FILE"])
        catalog_path = Path(catalog_path or PATHS["CATALOG_FILE"])

        if not self.client.access_token:
            raise ConfigurationError("SPOTIFY_API_TOKEN is not set.")

        albums = self.fetch_albums(self.read_album_ids(input_file))
        if not albums:
            logger.info("No new albums fetched.")
            return 0

        count = append_rows(catalog_path, [album_to_row(album) for album in albums])
        logger.info(f"Catalog {catalog_path} updated with {count} album(s)")
        return count
