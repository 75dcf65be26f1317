"""
Logging setup for the report service.

Log records go to the console and, when ``LOG_FILE`` is set, to a
file.  In debug mode the ``service_order_api`` loggers are lowered to
``DEBUG`` so rejected queries and the bound SQL parameters show up,
while third-party loggers stay at the configured level.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "service_order_api"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> None:
    """Configure the root logger once per process.

    Unknown level names fall back to ``INFO``.  Calling it again is a
    no-op as long as the root logger already has handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if debug:
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)
