"""
Logging for Kitchen Cart.

    from kitchen_cart.logging import get_logger, sanitize_string_for_logging
    logger = get_logger(__name__)
    logger.info(f"Saved cart for {sanitize_string_for_logging(username)}")

The root logger is configured once, on first import, from ``LOG_LEVEL`` and
``VERCEL`` (compact format when deployed).
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SERVERLESS = "%(levelname)s - %(name)s - %(message)s"

# Usernames and ingredient names are request data; these never reach a log line raw
_LOG_UNSAFE = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def _configure() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    fmt = LOG_FORMAT_SERVERLESS if os.environ.get("VERCEL") == "1" else LOG_FORMAT

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    root.setLevel(level)
    root.addHandler(handler)

    # upstash-redis goes over httpx; one line per REST call is noise
    logging.getLogger("httpx").setLevel(logging.WARNING)


_configure()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escape control characters (CWE-117) and cap the length of a user-supplied string."""
    if not value:
        return "N/A"
    safe_value = str(value).translate(_LOG_UNSAFE)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = ["get_logger", "sanitize_string_for_logging"]
