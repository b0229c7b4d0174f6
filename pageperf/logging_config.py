"""Logging setup for the API and the queue workers.

Usage::

    from pageperf.logging_config import configure_logging
    configure_logging("DEBUG")
"""
from __future__ import annotations

import logging
import sys
from typing import Union


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    datefmt: str = "%Y-%m-%dT%H:%M:%S%z",
) -> None:
    """Install one stderr handler on the root logger.

    A no-op when the root logger already has handlers (uvicorn, pytest).
    """
    root = logging.getLogger()
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    root.setLevel(level)
    root.addHandler(handler)
