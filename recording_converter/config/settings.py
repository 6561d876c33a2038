"""
Configuration settings for the recording converter Lambda.

Environment-based settings for the AWS clients, the ffmpeg executables,
the local workspace and the published output keys.
"""
import tempfile
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConverterSettings(BaseSettings):
    """
    Converter configuration.
    Every field can be overridden through an environment variable of the same name.
    """

    # ENVIRONMENT
    environment: str = "development"
    log_level: str = "INFO"

    # AWS CORE CONFIGURATION
    aws_region: str = "us-east-1"
    aws_max_retry_attempts: int = 3
    aws_max_pool_connections: int = 10
    s3_endpoint_url: Optional[str] = None

    # TRANSCODER CONFIGURATION
    # Defaults match the ffmpeg Lambda layer mount point
    ffmpeg_path: str = "/opt/bin/ffmpeg"
    ffprobe_path: Optional[str] = "/opt/bin/ffprobe"

    # LOCAL WORKSPACE
    workspace_root: str = tempfile.gettempdir()

    # PUBLISHED OUTPUT
    output_prefix: str = "mp3/"
    output_content_type: str = "audio/mpeg"
    output_key_strategy: Literal["timestamp", "source"] = "timestamp"

    # BATCH POLICY
    fail_fast: bool = False

    model_config = SettingsConfigDict(
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("output_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip("/")
        return f"{value}/" if value else ""

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def use_local_s3(self) -> bool:
        """Check if should use local S3 (MinIO)."""
        return self.s3_endpoint_url is not None

    @property
    def is_production_env(self) -> bool:
        return self.environment.lower() == "production"


# Global converter settings instance
converter_settings = ConverterSettings()
