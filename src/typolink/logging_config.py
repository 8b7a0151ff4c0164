import logging
import sys
from typing import Optional


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the ``typolink`` logger.

    Records go to stderr so that rendered links on stdout stay clean, and
    optionally to a file as well. The logger does not propagate to the root
    logger. Unknown level names fall back to WARNING.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also write records to this file
        format_string: Format for log records; a timestamped default is used if omitted
        force: Replace existing handlers instead of keeping them

    Returns:
        The configured ``typolink`` logger

    Raises:
        OSError: If the log file cannot be opened
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger("typolink")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(logging.Formatter(format_string))
            logger.addHandler(file_handler)

    logger.propagate = False

    return logger
