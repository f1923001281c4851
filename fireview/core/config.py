"""Console settings from the environment and an optional .env file.

Variable names are the upper-cased field names (FIREBASE_API_KEY,
GEMINI_API_KEY, STATE_FILE, ...). Firebase web credentials may be left
unset at startup; connecting reports them as missing.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Everything the console reads from its environment.

    Nothing here is required to start the console. Missing Firebase
    credentials surface as a ConfigException on connect, not at load time.
    """

    # App
    app_name: str = "fireview"
    app_version: str = "1.0.0"
    debug: bool = False

    # Firebase web app credentials, merged with the user-supplied project ID on connect.
    firebase_api_key: SecretStr = SecretStr("")
    firebase_auth_domain: str = ""
    firebase_storage_bucket: str = ""
    firebase_messaging_sender_id: str = ""
    firebase_app_id: str = ""
    firebase_measurement_id: str | None = None

    # Optional service account for privileged access (bypasses security rules).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    # Firestore REST transport
    firestore_timeout_seconds: float = 30.0
    firestore_page_size: int = 300

    # Prompt service (Gemini generateContent)
    gemini_api_key: SecretStr | None = None
    summary_model: str = "gemini-2.0-flash"
    prompt_timeout_seconds: float = 60.0
    summary_max_chars: int = 200_000

    # Local persisted console state (last project ID, registered collections)
    state_file: str = "~/.fireview/state.json"

    # Bulk import
    import_max_bytes: int = 5 * 1024 * 1024  # 5MB

    # Notification feed
    notification_limit: int = 50

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Validate numeric limits that would otherwise fail late."""
        if self.firestore_page_size < 1 or self.firestore_page_size > 1000:
            raise ValueError(
                f"firestore_page_size must be between 1 and 1000, got: {self.firestore_page_size}"
            )
        if self.import_max_bytes < 1:
            raise ValueError("import_max_bytes must be positive")
        if self.notification_limit < 1:
            raise ValueError("notification_limit must be positive")
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("telemetry_sample_rate must be between 0.0 and 1.0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, built on first use.

    Tests that change the environment call get_settings.cache_clear()
    before and after.
    """
    return Settings()
