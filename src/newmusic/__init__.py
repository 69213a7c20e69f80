"""
newmusic - render the week's new music releases as a single card image.
"""

from .core.config import PROJECT_VERSION as __version__
