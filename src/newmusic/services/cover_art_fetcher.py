"""
Cover art fetching service for the releases on a card.
"""

import concurrent.futures
import io
import logging
from typing import Dict, List, Optional, Sequence, Union

import requests
from PIL import Image, UnidentifiedImageError

from ..core.config import ARTWORK_CONFIG
from ..core.exceptions import AssetLoadError
from ..models.releases import Release

logger = logging.getLogger(__name__)

ArtResult = Union[Image.Image, AssetLoadError]


class CoverArtFetcher:
    """Service for fetching and decoding album art from URLs."""

    def __init__(
        self,
        timeout: float = ARTWORK_CONFIG["TIMEOUT"],
        max_workers: int = ARTWORK_CONFIG["MAX_WORKERS"],
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.max_workers = max_workers
        self.session = session or requests
        self.headers = {"User-Agent": ARTWORK_CONFIG["USER_AGENT"]}
        # Key: cover_art_url, Value: raw image bytes
        self._cover_art_cache: Dict[str, bytes] = {}

    def fetch_bytes(self, url: str) -> bytes:
        """
        Fetch raw cover art bytes from a URL.

        Args:
            url: URL to fetch cover art from

        Returns:
            Cover art data as bytes

        Raises:
            AssetLoadError: If the URL is empty, the request fails or times out
        """
        if not url:
            raise AssetLoadError("no album art URL")

        if url in self._cover_art_cache:
            return self._cover_art_cache[url]

        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise AssetLoadError(f"timed out after {self.timeout}s fetching {url}") from e
        except requests.exceptions.RequestException as e:
            raise AssetLoadError(f"network error fetching {url}: {e}") from e

        if response.status_code != 200:
            raise AssetLoadError(f"HTTP {response.status_code} fetching {url}")

        self._cover_art_cache[url] = response.content
        return response.content

    def load(self, url: str) -> Image.Image:
        """
        Fetch and decode the album art at ``url``.

        Raises:
            AssetLoadError: If fetching or decoding fails
        """
        data = self.fetch_bytes(url)
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise AssetLoadError(f"cannot decode image from {url}: {e}") from e
        logger.debug(f"Fetched cover art from {url} ({len(data)} bytes)")
        return image

    def _load_or_error(self, url: str) -> ArtResult:
        try:
            return self.load(url)
        except AssetLoadError as e:
            return e

    def prefetch(self, releases: Sequence[Release]) -> List[ArtResult]:
        """
        Load the art for every release concurrently.

        Fetches share no state besides the cache, and each result lands in
        the slot of its release, so the output order is the input order.

        Returns:
            One decoded image or AssetLoadError per release
        """
        if not releases:
            return []

        workers = max(1, min(self.max_workers, len(releases)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self._load_or_error, [r.album_art_url for r in releases]))
