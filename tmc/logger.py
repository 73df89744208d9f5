import sys

from loguru import logger


# Silent unless the CLI asks for output
logger.remove()


def setup_logging(verbose=False, level="DEBUG", path="", rotation="1 week", retention="1 month"):
    logger.remove()

    # Log to console
    if verbose:
        logger.add(
            sys.stderr,
            level=level,
        )

    # Log to a file
    if path:
        logger.add(
            path,
            rotation=rotation,
            retention=retention,
            level=level,
        )
