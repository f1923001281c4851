"""Connection configuration entity.

The full client configuration is the user-supplied project ID merged with
credentials sourced from the process environment. It is validated as a
whole before anything is handed to the store adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fireview.domain.exceptions import ConfigException, ValidationException

if TYPE_CHECKING:
    from fireview.core.config import Settings

_REQUIRED_FIELDS = (
    "api_key",
    "auth_domain",
    "project_id",
    "storage_bucket",
    "messaging_sender_id",
    "app_id",
)


@dataclass(frozen=True)
class ConnectionConfig:
    """Firebase web app configuration for one project.

    All fields are required except measurement_id. Validation runs on
    construction and raises ConfigException naming every missing field.
    """

    project_id: str
    api_key: str
    auth_domain: str
    storage_bucket: str
    messaging_sender_id: str
    app_id: str
    measurement_id: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigException if any required field is empty."""
        missing = [
            name for name in _REQUIRED_FIELDS if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ConfigException(missing)

    @classmethod
    def from_settings(cls, project_id: str, settings: Settings) -> ConnectionConfig:
        """Merge a project ID with environment-sourced credentials.

        Raises:
            ValidationException: If project_id is empty.
            ConfigException: If any environment credential is missing.
        """
        project_id = (project_id or "").strip()
        if not project_id:
            raise ValidationException("Project ID cannot be empty.", field="project_id")
        return cls(
            project_id=project_id,
            api_key=settings.firebase_api_key.get_secret_value(),
            auth_domain=settings.firebase_auth_domain,
            storage_bucket=settings.firebase_storage_bucket,
            messaging_sender_id=settings.firebase_messaging_sender_id,
            app_id=settings.firebase_app_id,
            measurement_id=settings.firebase_measurement_id or None,
        )

    def public_dict(self) -> dict[str, str | None]:
        """Return the config without the API key (safe for responses and logs)."""
        return {
            "project_id": self.project_id,
            "auth_domain": self.auth_domain,
            "storage_bucket": self.storage_bucket,
            "messaging_sender_id": self.messaging_sender_id,
            "app_id": self.app_id,
            "measurement_id": self.measurement_id,
        }
