"""
Configuration management for the dental voice extraction service.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

from typing import List, Optional

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings.

    The URI is optional: without it the service runs without a consultation
    store and tooth records are only produced when the caller supplies a
    patient id.
    """

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    uri: str = Field(default="", description="MongoDB connection URI")
    db_name: str = Field(default="dentalvoice", description="MongoDB database name")

    @validator("uri")
    def validate_mongo_uri(cls, v: str) -> str:
        """Validate MongoDB URI format."""
        if v and not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MongoDB URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v

    @property
    def enabled(self) -> bool:
        return bool(self.uri)


class AzureOpenAISettings(BaseSettings):
    """Azure OpenAI configuration settings."""

    model_config = SettingsConfigDict(env_prefix="AZURE_OPENAI_")

    endpoint: str = Field(default="", description="Azure OpenAI endpoint URL")
    api_key: str = Field(default="", description="Azure OpenAI API key")
    api_version: str = Field(default="2024-12-01-preview", description="Azure OpenAI API version")
    deployment_name: str = Field(default="gpt-4o-mini", description="Azure OpenAI chat deployment name")
    temperature: float = Field(default=0.2, description="Temperature for clinical analysis")
    max_tokens: int = Field(default=3000, description="Maximum tokens for clinical analysis responses")

    @validator("endpoint")
    def validate_endpoint(cls, v: str) -> str:
        """Validate Azure OpenAI endpoint format."""
        if v and not (v.startswith("https://") and ".openai.azure.com" in v):
            raise ValueError("Invalid Azure OpenAI endpoint format. Must be: https://xxx.openai.azure.com/")
        return v

    @validator("temperature")
    def validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key)


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(default=["*"], description="Allowed HTTP headers")
    allow_credentials: bool = Field(default=True, description="Allow credentials in CORS")

    @validator("allowed_origins", pre=True)
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from a comma separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")

    @validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("format")
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class ExtractionSettings(BaseSettings):
    """Transcript extraction pipeline settings."""

    model_config = SettingsConfigDict(env_prefix="EXTRACTION_")

    analysis_timeout_seconds: float = Field(
        default=30.0, description="Upper bound for one clinical analysis call"
    )
    window_radius: int = Field(
        default=100, description="Characters kept on each side of a tooth mention"
    )
    simplified_penalty: int = Field(
        default=20, description="Confidence subtracted in the simplified fallback tier"
    )
    simplified_floor: int = Field(
        default=30, description="Lowest confidence the simplified fallback tier reports"
    )
    keyword_confidence: int = Field(
        default=25, description="Confidence reported by the keyword fallback tier"
    )

    @validator("analysis_timeout_seconds")
    def validate_timeout(cls, v: float) -> float:
        if v <= 0 or v > 300:
            raise ValueError("Analysis timeout must be between 0 and 300 seconds")
        return v

    @validator("window_radius")
    def validate_window_radius(cls, v: int) -> int:
        if not 10 <= v <= 1000:
            raise ValueError("Window radius must be between 10 and 1000 characters")
        return v

    @validator("simplified_penalty", "simplified_floor", "keyword_confidence")
    def validate_confidence_value(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("Confidence settings must be between 0 and 100")
        return v


class WebhookSettings(BaseSettings):
    """Outbound workflow webhook settings."""

    model_config = SettingsConfigDict(env_prefix="WEBHOOK_")

    url: str = Field(default="", description="Workflow webhook URL; empty disables notifications")
    timeout_seconds: float = Field(default=10.0, description="Webhook request timeout")

    @validator("url")
    def validate_url(cls, v: str) -> str:
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("Webhook URL must start with 'http://' or 'https://'")
        return v

    @property
    def enabled(self) -> bool:
        return bool(self.url)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Dental Voice Extraction", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8000, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    azure_openai: AzureOpenAISettings = Field(default_factory=AzureOpenAISettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    webhook: WebhookSettings = Field(default_factory=WebhookSettings)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Override sub-settings with environment variables
        self.database = DatabaseSettings()
        self.azure_openai = AzureOpenAISettings()
        self.cors = CORSSettings()
        self.logging = LoggingSettings()
        self.extraction = ExtractionSettings()
        self.webhook = self._webhook_with_fallback()

    @staticmethod
    def _webhook_with_fallback() -> WebhookSettings:
        """WEBHOOK_URL wins; N8N_WEBHOOK_URL is still honoured for older deployments."""
        webhook = WebhookSettings()
        if not webhook.url:
            legacy = os.getenv("N8N_WEBHOOK_URL", "")
            if legacy:
                logging.getLogger("dentalvoice").info("Using N8N_WEBHOOK_URL for workflow notifications")
                webhook = WebhookSettings(url=legacy)
        return webhook

    @validator("app_env")
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @validator("port")
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"


# Global settings instance (loaded after attempting to read .env)
_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env.local / .env by searching current and parent directories.

    This helps in environments where the working directory isn't the project
    root and pydantic's env_file doesn't get resolved as expected. The first
    directory holding either file wins; .env.local is read before .env and
    already-set variables are never overridden.
    """
    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidates = [parent / ".env.local", parent / ".env"]
        found = [candidate for candidate in candidates if candidate.exists()]
        if found:
            for candidate in found:
                load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
