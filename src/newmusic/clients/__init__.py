"""
API clients for newmusic.
"""

from .spotify import SpotifyClient, album_to_row, parse_album_id

__all__ = [
    'SpotifyClient',
    'album_to_row',
    'parse_album_id',
]
