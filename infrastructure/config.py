from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # make it absolute so reload/CWD doesn't break it
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="MiniGCS", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path = Field(
        default=Path(__file__).resolve().parents[1] / "logs",
        validation_alias="LOG_DIR",
    )

    # API
    api_host: str = Field(default="127.0.0.1", validation_alias="API_HOST")
    api_port: int = Field(default=8000, validation_alias="PORT")
    public_base_url: str | None = Field(
        default=None,
        validation_alias="BASE_URL",
        description="Scheme, host and port used in selfLink/mediaLink. Derived from host/port when unset.",
    )

    # Storage
    data_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "gcs-data",
        validation_alias="GCS_DIR",
    )
    auto_create_bucket: bool = Field(
        default=True,
        validation_alias="AUTO_CREATE_BUCKET",
        description="Create a missing bucket on first upload instead of returning 404.",
    )
    max_upload_bytes: int = Field(
        default=500 * 1024 * 1024,
        validation_alias="MAX_UPLOAD_BYTES",
    )

    @field_validator("data_dir")
    @classmethod
    def _resolve_data_dir(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @property
    def base_url(self) -> str:
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        return f"http://{self.api_host}:{self.api_port}"


# Global settings instance
settings = Settings()
