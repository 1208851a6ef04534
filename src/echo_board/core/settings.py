"""Application settings and configuration.

This module defines all configuration options for the Echo Board application.
Settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADMIN_PASSWORD = "admin123"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Echo Board", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Snapshot store
    data_file: Path = Field(default=Path("data/db.json"), alias="DATA_FILE")
    legacy_banned_file: Path | None = Field(
        default=Path("data/banned.json"),
        alias="LEGACY_BANNED_FILE",
    )
    store_lock_timeout_seconds: float = Field(default=5.0, alias="STORE_LOCK_TIMEOUT_SECONDS")

    # Media uploads
    upload_dir: Path = Field(default=Path("uploads"), alias="UPLOAD_DIR")
    max_upload_files: int = Field(default=5, alias="MAX_UPLOAD_FILES")
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")
    allowed_upload_extensions: list[str] = Field(
        default=[
            "jpeg", "jpg", "png", "gif", "webp",
            "mp4", "webm", "mov",
            "pdf", "doc", "docx", "txt",
        ],
        alias="ALLOWED_UPLOAD_EXTENSIONS",
    )

    # Admin access
    admin_password: str = Field(default=DEFAULT_ADMIN_PASSWORD, alias="ADMIN_PASSWORD")
    secret_key: str = Field(default="change-me-in-production", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    admin_token_expire_minutes: int = Field(default=60 * 12, alias="ADMIN_TOKEN_EXPIRE_MINUTES")

    # Identity fingerprinting behind a reverse proxy
    trust_forwarded_for: bool = Field(default=False, alias="TRUST_FORWARDED_FOR")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3001"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def uses_default_admin_password(self) -> bool:
        """Return True when the admin password was never configured."""
        return self.admin_password == DEFAULT_ADMIN_PASSWORD


settings = Settings()
