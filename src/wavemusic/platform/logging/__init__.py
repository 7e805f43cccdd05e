"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the package logger, setup helper, and the Rich request handler.
Why: Provide a single canonical import path for every module that logs.
"""

from __future__ import annotations

from .config import LOGGER_NAME, logger, setup_logger
from .handlers import WaveRichHandler

__all__ = [
    "LOGGER_NAME",
    "WaveRichHandler",
    "logger",
    "setup_logger",
]
