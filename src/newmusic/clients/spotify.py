"""
Spotify Client Module
Fetches album data from the Spotify Web API and maps it onto catalog rows.
"""

import base64
import json
import os
import re
from datetime import date
from typing import Any, Dict, Optional

import requests

from ..core.config import SPOTIFY_CONFIG
from ..core.exceptions import APIError, ConfigurationError, NetworkError
from ..core.validation import DAY_FIRST, normalize_release_type
from ..utils.retry import retry_with_backoff

ALBUM_URL_PATTERN = re.compile(r"spotify\.com(?:/[^/]+)?/album/([a-zA-Z0-9]+)")


def parse_album_id(url: str) -> Optional[str]:
    """
    Extract the album ID from a Spotify album URL or URI.

    Supports:
    - https://open.spotify.com/album/{id}
    - https://open.spotify.com/intl-fr/album/{id}
    - spotify:album:{id}
    - anything else: the last path segment, query string dropped

    Returns:
        Album ID, or None for an empty input
    """
    url = (url or "").strip()
    if not url:
        return None

    if url.startswith("spotify:"):
        parts = url.split(":")
        return parts[-1] or None

    match = ALBUM_URL_PATTERN.search(url)
    if match:
        return match.group(1)

    return url.split("?")[0].rstrip("/").split("/")[-1] or None


def convert_release_date(value: Optional[str]) -> str:
    """
    Convert Spotify's YYYY[-MM[-DD]] release date into the catalog's DD/MM/YYYY.

    Missing month or day precision becomes the first of the month or year.
    Unrecognised values are returned unchanged so the audit can flag them.
    """
    value = (value or "").strip()
    parts = value.split("-")
    if not value or not all(part.isdigit() for part in parts) or len(parts) > 3:
        return value
    year, month, day = (list(map(int, parts)) + [1, 1])[:3]
    try:
        return DAY_FIRST.format(date(year, month, day))
    except ValueError:
        return value


def album_to_row(album: Dict[str, Any]) -> Dict[str, str]:
    """
    Map a Spotify album payload onto a catalog row.

    Args:
        album: Album object as returned by /v1/albums/{id}

    Returns:
        Dict keyed by catalog column name
    """
    images = album.get("images") or []
    genres = album.get("genres") or []
    return {
        "artist": ", ".join(a.get("name", "") for a in album.get("artists") or []),
        "name": album.get("name", ""),
        "album_art_url": images[0].get("url", "") if images else "",
        "genres": json.dumps(genres) if genres else "",
        "type": normalize_release_type(album.get("album_type")),
        "release_date": convert_release_date(album.get("release_date")),
    }


class SpotifyClient:
    """Spotify client for fetching album metadata."""

    def __init__(self, access_token: Optional[str] = None, market: Optional[str] = None):
        self.base_url = SPOTIFY_CONFIG["BASE_URL"]
        self.auth_url = SPOTIFY_CONFIG["AUTH_URL"]
        self.market = market or SPOTIFY_CONFIG["MARKET"]
        self.timeout = SPOTIFY_CONFIG["TIMEOUT"]

        self.client_id = os.getenv("SPOTIFY_CLIENT_ID")
        self.client_secret = os.getenv("SPOTIFY_CLIENT_SECRET")
        self.access_token = access_token or os.getenv("SPOTIFY_API_TOKEN")

        # Fall back to the client credentials flow
        if not self.access_token and self.client_id and self.client_secret:
            self._authenticate()

    def _authenticate(self) -> bool:
        """Authenticate with Spotify API using client credentials flow."""
        credentials = f"{self.client_id}:{self.client_secret}"
        encoded_credentials = base64.b64encode(credentials.encode()).decode()

        headers = {
            "Authorization": f"Basic {encoded_credentials}",
            "Content-Type": "application/x-www-form-urlencoded"
        }

        try:
            response = requests.post(
                self.auth_url,
                headers=headers,
                data={"grant_type": "client_credentials"},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException:
            return False

        if response.status_code != 200:
            return False

        self.access_token = response.json().get("access_token")
        return bool(self.access_token)

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for API requests."""
        if not self.access_token:
            raise ConfigurationError(
                "Spotify API authentication required. Set SPOTIFY_API_TOKEN, or "
                "SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET environment variables."
            )
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    @retry_with_backoff(exceptions=(NetworkError,))
    def get_album(self, album_id: str) -> Dict[str, Any]:
        """
        Fetch one album.

        Raises:
            ConfigurationError: If no access token is available
            APIError: If Spotify rejects the request
            RetryError: If Spotify stays unreachable or overloaded
        """
        headers = self._get_headers()
        url = f"{self.base_url}/albums/{album_id}"
        try:
            response = requests.get(url, headers=headers, params={"market": self.market}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Error fetching album {album_id}: {e}") from e

        if response.status_code == 429 or response.status_code >= 500:
            raise NetworkError(f"Spotify returned HTTP {response.status_code} for album {album_id}")
        if response.status_code != 200:
            raise APIError(f"Error fetching album {album_id}: HTTP {response.status_code} {response.text}")

        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON for album {album_id}: {e}") from e
