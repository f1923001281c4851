"""Shared utilities (datetime helpers, value formatting)."""

from fireview.shared.utils.datetime import (
    ensure_utc,
    parse_rfc3339,
    to_rfc3339,
    utc_now,
)
from fireview.shared.utils.serialization import (
    dumps_compact,
    json_default,
    stringify_value,
)

__all__ = [
    "dumps_compact",
    "ensure_utc",
    "json_default",
    "parse_rfc3339",
    "stringify_value",
    "to_rfc3339",
    "utc_now",
]
