"""
Configuration for the New Music card generator.
Contains all constants, settings, and global parameters.
"""

import os
from pathlib import Path

# Project Information
PROJECT_NAME = "newmusic"
PROJECT_VERSION = "1.0.0"
PROJECT_DESCRIPTION = "Weekly new releases card generator"

# File Paths
BASE_DIR = Path(os.getenv("NEWMUSIC_PROJECT_ROOT", Path.cwd()))

PATHS = {
    "CATALOG_FILE": Path(os.getenv("NEWMUSIC_CATALOG", str(BASE_DIR / "input.csv"))),
    "ALBUMS_FILE": Path(os.getenv("NEWMUSIC_ALBUMS_FILE", str(BASE_DIR / "input.txt"))),
    "OUTPUT_DIR": Path(os.getenv("NEWMUSIC_OUTPUT_DIR", str(BASE_DIR / "output"))),
}

# Catalog schema, in column order
CATALOG_COLUMNS = (
    "artist",
    "name",
    "album_art_url",
    "genres",
    "type",
    "release_date",
)

# Largest single CSV cell accepted; the csv module default is 128 KiB
CATALOG_FIELD_LIMIT = 16 * 1024 * 1024

# Release dates in the catalog are day-first (export locale)
DATE_FORMAT = {
    "ORDER": "DMY",
    "SEPARATOR": "/",
}

# Selection window
WINDOW_CONFIG = {
    "DAYS": 7,  # inclusive of today
}

# Card layout
CARD_CONFIG = {
    "WIDTH": 1080,
    "HEIGHT": 2500,
    "BACKGROUND_COLOR": "#fafafa",
    "TEXT_COLOR": "#000000",
    "ALBUM_ART_SIZE": 150,
    "PADDING": 30,
    "LINE_HEIGHT": 45,
    "TEXT_GAP": 20,  # between art and text column
    "BLOCK_OFFSET": 35,
    "CURSOR_START": 220,
    "TITLE": "New Music Friday",
    "TITLE_Y": 90,
    "DATE_Y": 160,
    "FILE_PREFIX": "new-releases-",
    "FILE_FORMAT": "JPEG",
    "FILE_EXTENSION": "jpg",
    "JPEG_QUALITY": 90,
}

CARD_CONFIG["TEXT_X"] = CARD_CONFIG["PADDING"] + CARD_CONFIG["ALBUM_ART_SIZE"] + CARD_CONFIG["TEXT_GAP"]
CARD_CONFIG["MAX_TEXT_WIDTH"] = CARD_CONFIG["WIDTH"] - (CARD_CONFIG["PADDING"] * 3 + CARD_CONFIG["ALBUM_ART_SIZE"])

# Font presets: (size, bold)
FONT_PRESETS = {
    "TITLE": (60, True),
    "DATE": (45, False),
    "RELEASE_NAME": (40, True),
    "RELEASE_DETAILS": (32, False),
    "RELEASE_DATE": (28, False),
}

FONT_PATHS = {
    "REGULAR": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
        "/Library/Fonts/Arial.ttf",
        "C:/Windows/Fonts/arial.ttf",
        "arial.ttf",
    ],
    "BOLD": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSansBold.ttf",
        "/Library/Fonts/Arial Bold.ttf",
        "C:/Windows/Fonts/arialbd.ttf",
        "arialbd.ttf",
    ],
}

# Album art fetching
ARTWORK_CONFIG = {
    "USER_AGENT": f"{PROJECT_NAME}/{PROJECT_VERSION}",
    "TIMEOUT": 10,  # seconds, per asset
    "MAX_WORKERS": 4,
}

# Spotify Configuration
SPOTIFY_CONFIG = {
    "BASE_URL": "https://api.spotify.com/v1",
    "AUTH_URL": "https://accounts.spotify.com/api/token",
    "MARKET": os.getenv("SPOTIFY_MARKET", "AU"),
    "TIMEOUT": 30,
    "MAX_WORKERS": 4,
}

# API Limits
API_LIMITS = {
    "MAX_RETRIES": 3,
    "BACKOFF_FACTOR": 2,
}

# Logging Configuration
LOGGING_CONFIG = {
    "LEVEL": os.getenv("NEWMUSIC_LOG_LEVEL", "INFO").upper(),
    "FORMAT": "%(levelname)s - %(name)s - %(message)s",
}
