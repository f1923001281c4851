"""JSON helpers for document field values.

Document data can hold datetimes and bytes decoded from the store; these
helpers render them as ISO-8601 strings and base64 so documents can be
serialized for summaries, filtering and API responses.
"""

import base64
import json
from datetime import datetime
from typing import Any

from fireview.shared.utils.datetime import ensure_utc


def json_default(value: Any) -> Any:
    """`default` hook for json.dumps covering store-specific value types."""
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps_compact(value: Any) -> str:
    """Serialize without whitespace (same shape a browser's JSON.stringify produces)."""
    return json.dumps(value, default=json_default, separators=(",", ":"), ensure_ascii=False)


def stringify_value(value: Any) -> str:
    """Render one field value as display text.

    Booleans are 'true'/'false', integral floats drop the '.0', timestamps
    are ISO-8601, lists and maps are compact JSON.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float, str)):
        return str(value)
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    if isinstance(value, (bytes, bytearray)):
        return json_default(value)
    return dumps_compact(value)
