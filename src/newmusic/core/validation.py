"""
Validation utilities.

Holds the configuration checks and the catalog field rules. The field rules
are shared by the record parser, the catalog audit and the ingestion step so
there is exactly one definition of what a valid catalog row looks like.
"""

import importlib
import json
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import (
    ARTWORK_CONFIG,
    CARD_CONFIG,
    DATE_FORMAT,
    LOGGING_CONFIG,
    WINDOW_CONFIG,
)
from .exceptions import ConfigurationError

ART_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
REQUIRED_FIELDS = ("artist", "name", "release_date")


@dataclass(frozen=True)
class DateParsePolicy:
    """
    How a textual release date is split into calendar parts.

    ``order`` names the position of day, month and year in the text. The
    catalog export is day-first, so ``DAY_FIRST`` is the default everywhere;
    ``01/02/2024`` is the 1st of February, never January 2nd.
    """
    order: str = "DMY"
    separator: str = "/"

    def parse(self, text: Optional[str]) -> date:
        """
        Parse ``text`` into a date.

        Raises:
            ValueError: If the text is absent, non-numeric, has the wrong
                number of parts or does not name a real calendar day
        """
        if text is None or not text.strip():
            raise ValueError("release date is empty")

        parts = [part.strip() for part in text.strip().split(self.separator)]
        if len(parts) != len(self.order):
            raise ValueError(f"expected {len(self.order)} date parts, got {len(parts)}: {text!r}")
        if not all(part.isdigit() for part in parts):
            raise ValueError(f"non-numeric date: {text!r}")

        values = dict(zip(self.order, (int(part) for part in parts)))
        # date() rejects out-of-range months and days (31/02, 00/13, ...)
        return date(values["Y"], values["M"], values["D"])

    def format(self, value: date) -> str:
        """Render ``value`` back into this policy's textual form."""
        fields = {"D": f"{value.day:02d}", "M": f"{value.month:02d}", "Y": f"{value.year:04d}"}
        return self.separator.join(fields[key] for key in self.order)


DAY_FIRST = DateParsePolicy(order=DATE_FORMAT["ORDER"], separator=DATE_FORMAT["SEPARATOR"])


def is_valid_art_url(url: Optional[str]) -> bool:
    """Empty art URLs are allowed; anything else must be http(s)."""
    if not url:
        return True
    return bool(ART_URL_PATTERN.match(url.strip()))


def decode_genre_array(raw: Optional[str]) -> Optional[List[str]]:
    """
    Strictly decode a JSON array of genres.

    Returns:
        The decoded list, or None if ``raw`` is not a JSON array
    """
    if raw is None:
        return None
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(decoded, list):
        return None
    return [str(item).strip() for item in decoded]


def normalize_release_type(value: Optional[str]) -> str:
    """Capitalize a release type: 'album' -> 'Album', 'SINGLE' -> 'Single'."""
    value = (value or "").strip()
    if not value:
        return ""
    return value[0].upper() + value[1:].lower()


def validate_record(fields: Mapping[str, Any], policy: DateParsePolicy = DAY_FIRST) -> List[str]:
    """
    Check a catalog row against the field rules.

    Pure function: it only reports, it never repairs or raises.

    Args:
        fields: Mapping of catalog column name to raw cell text
        policy: Date policy for the release_date column

    Returns:
        List of human readable issues, empty when the row is valid
    """
    issues = []

    missing = [name for name in REQUIRED_FIELDS if not str(fields.get(name) or "").strip()]
    if missing:
        issues.append(f"Missing required fields: {', '.join(missing)}")

    art_url = str(fields.get("album_art_url") or "").strip()
    if not is_valid_art_url(art_url):
        issues.append(f"Invalid album art URL: {art_url}")

    genres = str(fields.get("genres") or "").strip()
    if genres and decode_genre_array(genres) is None:
        issues.append(f"Invalid genres format: {genres}")

    if not str(fields.get("type") or "").strip():
        issues.append("Missing type field")

    release_date = str(fields.get("release_date") or "").strip()
    if release_date:
        try:
            policy.parse(release_date)
        except ValueError as e:
            issues.append(f"Invalid release date: {e}")

    return issues


def check_dependencies() -> Tuple[bool, List[str]]:
    """
    Check if all required dependencies are installed.

    Returns:
        Tuple of (all_installed, list_of_missing_dependencies)
    """
    required_packages = {
        "requests": "requests",
        "PIL": "Pillow",
        "rich": "rich",
    }

    missing = []
    for module_name, package_name in required_packages.items():
        try:
            importlib.import_module(module_name)
        except ImportError:
            missing.append(package_name)

    return len(missing) == 0, missing


def validate_configuration() -> Tuple[bool, List[str]]:
    """
    Validate application configuration.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    deps_ok, missing_deps = check_dependencies()
    if not deps_ok:
        errors.append(
            f"Missing required dependencies: {', '.join(missing_deps)}. "
            f"Please install them with: pip install -e ."
        )

    if WINDOW_CONFIG["DAYS"] < 1:
        errors.append("WINDOW DAYS must be >= 1")

    for key in ("WIDTH", "HEIGHT", "ALBUM_ART_SIZE", "LINE_HEIGHT"):
        if CARD_CONFIG[key] < 1:
            errors.append(f"CARD {key} must be >= 1")

    if CARD_CONFIG["MAX_TEXT_WIDTH"] < 1:
        errors.append("CARD WIDTH leaves no room for text next to the album art")

    if not 1 <= CARD_CONFIG["JPEG_QUALITY"] <= 95:
        errors.append("JPEG_QUALITY must be between 1 and 95")

    if ARTWORK_CONFIG["TIMEOUT"] <= 0:
        errors.append("ARTWORK TIMEOUT must be > 0")

    if ARTWORK_CONFIG["MAX_WORKERS"] < 1:
        errors.append("ARTWORK MAX_WORKERS must be >= 1")

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if LOGGING_CONFIG["LEVEL"] not in valid_log_levels:
        errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

    is_valid = len(errors) == 0
    return is_valid, errors


def validate_and_raise():
    """
    Validate configuration and raise ConfigurationError if invalid.
    """
    is_valid, errors = validate_configuration()
    if not is_valid:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)


def summarize_issues(issues_by_line: Dict[int, List[str]]) -> List[str]:
    """Flatten per-line issues into 'Line N: issue' strings, ordered by line."""
    return [
        f"Line {line}: {issue}"
        for line in sorted(issues_by_line)
        for issue in issues_by_line[line]
    ]
