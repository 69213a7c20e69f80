"""
User interface for newmusic.
"""

from .cli import NewMusicCLI
from .display import DisplayManager

__all__ = [
    'NewMusicCLI',
    'DisplayManager',
]
