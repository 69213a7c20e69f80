"""
Custom exceptions for newmusic.
"""

from enum import Enum


class NewMusicError(Exception):
    """Base exception for newmusic."""
    pass


class SkipReason(str, Enum):
    """Why a catalog row was left out of a run."""
    INVALID_DATE = "invalid date"
    MISSING_FIELD = "missing field"
    MALFORMED_ROW = "malformed row"


class ParseError(NewMusicError):
    """Exception raised when a single catalog row cannot become a Release."""

    def __init__(self, reason: SkipReason, message: str = ""):
        super().__init__(message or reason.value)
        self.reason = reason


class AssetLoadError(NewMusicError):
    """Exception raised when an album art asset cannot be fetched or decoded."""
    pass


class CatalogReadError(NewMusicError):
    """Exception raised when the catalog stream itself is unreadable."""
    pass


class ConfigurationError(NewMusicError):
    """Exception raised when configuration is invalid."""
    pass


class APIError(NewMusicError):
    """Exception raised when API calls fail."""
    pass


class NetworkError(NewMusicError, ConnectionError):
    """Exception raised when network operations fail."""
    pass
