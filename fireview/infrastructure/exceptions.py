"""Infrastructure exceptions for local state and external operations.

They extend FireviewException so presentation can map them to HTTP
responses consistently.
"""

from fireview.domain.exceptions import FireviewException


class StateStoreException(FireviewException):
    """Local console state could not be written."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to save console state: {file_path}",
            "STATE_STORE_ERROR",
            {"file_path": file_path, "reason": reason},
        )
