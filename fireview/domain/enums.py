"""Domain enumerations for the Fireview console.

Enums represent fixed sets of domain values (e.g. connection status).
"""

from enum import Enum


class ConnectionStatus(str, Enum):
    """Connection lifecycle status.

    Only CONNECTED allows data operations.
    """

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CONNECT_FAILED = "connect_failed"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class OperationKind(str, Enum):
    """Kinds of in-flight operations tracked by the session."""

    FETCH = "fetch"
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    BULK_IMPORT = "bulk import"
    SUMMARY = "summary"


class NotificationVariant(str, Enum):
    """Visual variant of a console notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"
