"""
Core services for newmusic.
"""

from .record_parser import RecordParser, parse_genres
from .window_filter import select, window_for
from .text_layout import wrap_text
from .card_composer import CardComposer, card_file_name
from .cover_art_fetcher import CoverArtFetcher
from .pipeline import run_pipeline

__all__ = [
    'RecordParser',
    'parse_genres',
    'select',
    'window_for',
    'wrap_text',
    'CardComposer',
    'card_file_name',
    'CoverArtFetcher',
    'run_pipeline',
]
