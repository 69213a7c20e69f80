"""
Utility modules for newmusic.
"""

from .retry import retry_with_backoff, RetryError

__all__ = [
    'retry_with_backoff',
    'RetryError',
]
