"""
Logging configuration for cleaner output.

Usage:
    from quoter_arb import logging_config
    logging_config.setup()
"""

import logging
import sys
from typing import Union


def setup(level: Union[str, int] = logging.INFO) -> None:
    """
    Configure logging for readable console output.

    - Uses shorter timestamp format (HH:MM:SS instead of full datetime)
    - Suppresses per-request HTTP logs from web3 and urllib3
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S"
        )
    )
    root.addHandler(console)

    # Suppress noisy loggers
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.getLogger("quoter_arb").setLevel(level)


def setup_debug() -> None:
    """
    Verbose logging for debugging.
    Shows per-quote detail and HTTP requests.
    """
    setup(level=logging.DEBUG)
    logging.getLogger("web3").setLevel(logging.DEBUG)
