"""
Logging Configuration
Sets up the logger for the ``winding`` and ``stl2winding`` namespaces.

Library modules only create module loggers; call :func:`setup_logging` from
scripts or applications to see their output.
"""
import logging
import sys
from typing import Optional

_NAMESPACES = ("winding", "stl2winding")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the package loggers.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in _NAMESPACES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate output when called more than once
        for old in list(logger.handlers):
            old.close()
            logger.removeHandler(old)
        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger("winding").info("Logging initialized.")
