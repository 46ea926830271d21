"""
Logging setup shared by every vietfood module.

    from vietfood.logging import get_logger
    logger = get_logger(__name__)

LOG_LEVEL picks the level (INFO by default). On Vercel (VERCEL=1) timestamps
are dropped because the platform adds its own.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack")

# Characters that would let a product or line item id forge a new log line
_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""}


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        # Host application already configured logging
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    fmt = LOG_FORMAT_SIMPLE if os.environ.get("VERCEL") == "1" else LOG_FORMAT

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    root.setLevel(level)
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Module logger, cached by name."""
    return logging.getLogger(name)


def _escape_control_chars(value: str) -> str:
    for char, replacement in _CONTROL_ESCAPES.items():
        value = value.replace(char, replacement)
    return value


def sanitize_id_for_logging(id_value: str | None, max_length: int = 32) -> str:
    """
    Escape and truncate an identifier before it goes into a log line.

    Line item ids embed the product and variant ids, hence the 32-char default.
    Empty values render as "N/A".
    """
    if not id_value:
        return "N/A"
    return _escape_control_chars(str(id_value))[:max_length]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Like sanitize_id_for_logging, but marks truncated text with '...'."""
    if not value:
        return "N/A"
    text = _escape_control_chars(str(value))
    return text if len(text) <= max_length else text[:max_length] + "..."


__all__ = [
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
