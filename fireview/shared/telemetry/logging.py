"""Logging setup: one stdout handler, level from settings.debug.

Firestore and Gemini requests carry the API key as a `key` query
parameter, so the handler masks it in every formatted record.
"""

import logging
import re
import sys

from fireview.core.config import get_settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_KEY_PARAM_RE = re.compile(r"([?&]key=)[^&\s'\"]+")


class RedactApiKeyFilter(logging.Filter):
    """Replace the value of any `key=` query parameter with ***."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _KEY_PARAM_RE.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging() -> None:
    """Configure the root logger once; repeated calls are no-ops."""
    root = logging.getLogger()
    if any(isinstance(f, RedactApiKeyFilter) for h in root.handlers for f in h.filters):
        return
    debug = get_settings().debug
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RedactApiKeyFilter())
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    # httpx logs one INFO line per request; only keep them when debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
