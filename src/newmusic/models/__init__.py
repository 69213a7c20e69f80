"""
Data models for newmusic.
"""

from .releases import Release, ParsedRow, SkippedRow, RowResult
from .report import (
    DateWindow,
    RenderedRelease,
    SkippedRelease,
    ReleaseOutcome,
    CardReport,
    RunReport,
)

__all__ = [
    'Release',
    'ParsedRow',
    'SkippedRow',
    'RowResult',
    'DateWindow',
    'RenderedRelease',
    'SkippedRelease',
    'ReleaseOutcome',
    'CardReport',
    'RunReport',
]
