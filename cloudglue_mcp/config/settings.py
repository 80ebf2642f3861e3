from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, PrivateAttr, field_validator
from typing import Optional
from dotenv import load_dotenv, find_dotenv


class CloudglueConfig(BaseSettings):
    """Remote video platform configuration."""

    api_key: Optional[str] = Field(default=None, description="API key sent as a bearer token")
    base_url: str = Field(default="https://api.cloudglue.dev/v1")
    request_timeout: float = Field(default=60.0, gt=0)
    poll_interval: float = Field(default=5.0, gt=0)
    max_poll_attempts: int = Field(default=36, ge=1)
    job_timeout: float = Field(default=600.0, gt=0)
    max_retries: int = Field(default=3, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="CLOUDGLUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    file: Optional[str] = Field(default=None)
    enable_file: bool = Field(default=False)
    max_file_size: str = Field(default="10 MB")
    retention_days: int = Field(default=7)

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class AppConfig(BaseSettings):
    """Main configuration class."""

    app_name: str = Field(default="cloudglue-mcp-server")
    app_version: str = Field(default="0.3.0")
    video_provider: str = Field(default="cloudglue")

    _cloudglue: Optional[CloudglueConfig] = PrivateAttr(default=None)
    _logging: Optional[LoggingConfig] = PrivateAttr(default=None)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )

    def __init__(self, **kwargs):
        # Force load environment variables before initializing
        load_dotenv(find_dotenv())
        super().__init__(**kwargs)

    @property
    def cloudglue(self) -> CloudglueConfig:
        if self._cloudglue is None:
            self._cloudglue = CloudglueConfig()
        return self._cloudglue

    @property
    def logging(self) -> LoggingConfig:
        if self._logging is None:
            self._logging = LoggingConfig()
        return self._logging
