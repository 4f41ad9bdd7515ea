"""
Logging for the storefront.

    from storefront.logging import get_logger
    logger = get_logger(__name__)

Handlers are installed once on the root logger when this module is imported.
Ids, product names and phone numbers logged here come from browser storage or
shopper input, so they go through the sanitizers below first.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Vercel prefixes its own timestamp
LOG_FORMAT_SERVERLESS = "%(levelname)s - %(name)s - %(message)s"

QUIET_LOGGERS = ("httpx", "httpcore")

_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def configure_logging(level: str | None = None) -> None:
    """Attach a stdout handler to the root logger unless one is already there."""
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    serverless = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SERVERLESS if serverless else LOG_FORMAT))
    root.addHandler(handler)

    # httpx logs every WooCommerce request at INFO
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _clean(value) -> str:
    return str(value).translate(_ESCAPES)


def sanitize_id_for_logging(id_value) -> str:
    """Product or session id, escaped and cut to 16 chars ("N/A" if empty)."""
    if id_value in (None, ""):
        return "N/A"
    return _clean(id_value)[:16]


def sanitize_string_for_logging(value, max_length: int = 50) -> str:
    """Free text (product names, upstream error bodies), escaped and shortened."""
    if not value:
        return "N/A"
    text = _clean(value)
    return text if len(text) <= max_length else text[:max_length] + "..."


def mask_phone(phone) -> str:
    """Keep only the last four digits of a phone number."""
    digits = "".join(ch for ch in str(phone or "") if ch.isdigit())
    if not digits:
        return "N/A"
    return "*" * max(len(digits) - 4, 0) + digits[-4:]
