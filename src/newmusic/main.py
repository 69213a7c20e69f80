"""
newmusic - weekly new releases card
Main entry point for the application.
"""

import sys

from .core import setup_logging
from .core.exceptions import NewMusicError
from .core.validation import validate_and_raise
from .ui.cli import NewMusicCLI

logger = setup_logging()


def main(argv=None) -> int:
    """Main entry point."""
    logger.debug("Starting newmusic")
    try:
        try:
            validate_and_raise()
            logger.debug("Configuration validation passed")
        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        return NewMusicCLI().run(argv)
    except KeyboardInterrupt:
        logger.debug("Application interrupted by user")
        raise
    except NewMusicError as e:
        logger.error(f"Error: {e}")
        return 1
    finally:
        logger.debug("Application shutting down")


if __name__ == "__main__":
    sys.exit(main())
