"""Domain exceptions for the Fireview console.

Defines the error taxonomy shared by the session, the adapters and the
HTTP layer. Presentation maps error_code to HTTP responses in
exception handlers; the session turns them into notifications.
"""

from typing import Any


class FireviewException(Exception):
    """Root of the console error taxonomy.

    Attributes:
        message: Human-readable error description (shown to the user verbatim).
        error_code: Stable code the HTTP layer maps to a status.
        details: Additional error context (e.g. field, collection).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(FireviewException):
    """Raised when required user input is empty or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ConfigException(FireviewException):
    """Raised when environment-sourced connection credentials are missing."""

    def __init__(self, missing_fields: list[str]) -> None:
        """Initialize with the names of the missing settings.

        Args:
            missing_fields: Config field names that were empty (e.g. 'api_key').
        """
        super().__init__(
            "Missing Firebase configuration: "
            + ", ".join(missing_fields)
            + ". Check your .env file for FIREBASE_* values.",
            "CONFIG_ERROR",
            {"missing_fields": missing_fields},
        )


class ImportParseException(FireviewException):
    """Raised when a bulk import payload is not a JSON array."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "IMPORT_PARSE_ERROR")


class ImportShapeException(FireviewException):
    """Raised when a bulk import array contains a non-object element."""

    def __init__(self, index: int) -> None:
        super().__init__(
            "Each item in the array must be an object.",
            "IMPORT_SHAPE_ERROR",
            {"index": index},
        )


class NotConnectedException(FireviewException):
    """Raised when a data operation is attempted without a connection."""

    def __init__(self, message: str = "Please connect to Firestore first.") -> None:
        super().__init__(message, "NOT_CONNECTED")


class OperationInProgressException(FireviewException):
    """Raised when the same operation is already running for a document."""

    def __init__(self, operation: str, document_id: str | None = None) -> None:
        """Initialize with the operation kind and optional document ID.

        Args:
            operation: Operation kind value (e.g. 'update').
            document_id: Target document, or None for collection-wide operations.
        """
        target = f" for document {document_id}" if document_id else ""
        details: dict[str, Any] = {"operation": operation}
        if document_id:
            details["document_id"] = document_id
        super().__init__(
            f"An {operation} is already in progress{target}.",
            "OPERATION_IN_PROGRESS",
            details,
        )


class EmptyCollectionException(FireviewException):
    """Raised when summarizing with no cached documents."""

    def __init__(self) -> None:
        super().__init__(
            "No documents to summarize. Fetch documents first or collection is empty.",
            "EMPTY_COLLECTION",
        )


class AuthenticationException(FireviewException):
    """Raised when the store rejects the request as unauthenticated."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class PermissionDeniedException(FireviewException):
    """Raised when security rules or IAM deny the operation."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, "PERMISSION_DENIED")


class ResourceNotFoundException(FireviewException):
    """The store has no document (or project) at the given path."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreException(FireviewException):
    """Raised for any other document store failure (transport, 5xx, bad response)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, "STORE_ERROR", details)


class PromptServiceException(FireviewException):
    """Raised when the prompt service fails or returns no usable completion."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "PROMPT_SERVICE_ERROR")
