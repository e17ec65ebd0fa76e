"""
TypeRig - Logging setup.

The interactive console owns stdout, so by default log records go to a
file. Passing an empty log_file sends them to stderr instead.
"""

import logging
import sys


def setup_logging(level: str = "INFO", log_file: str | None = None, verbose: bool = False) -> None:
    """Configure the root logger once per process."""
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)

    fmt = "%(asctime)s [%(name)s] %(levelname)s %(message)s"
    datefmt = "%H:%M:%S"

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=log_level,
        format=fmt,
        datefmt=datefmt,
        handlers=[handler],
        force=True,
    )
