"""
Configuration management using Pydantic Settings.

Environment variables are loaded from .env file or system environment.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings"""

    # Server Configuration
    host: str = Field(default="127.0.0.1", description="Server host")
    apollo_port: int = Field(default=4000, description="Server port")
    reload: bool = Field(default=False, description="Enable auto-reload in development")
    log_level: str = Field(default="INFO", description="Loguru sink level")

    # Request context
    user_id_header: str = Field(default="x-user-id", description="Header carrying the caller's user id")

    # Authorization Configuration
    authz_backend: Literal["oso", "local"] = Field(default="oso", description="Decision backend")
    oso_url: str = Field(default="https://cloud.osohq.com", description="Oso Cloud base URL")
    oso_auth: str | None = Field(default=None, description="Oso Cloud API key")
    authz_grants_path: str | None = Field(default=None, description="Grant table for the local backend; defaults to config/authz_grants.yaml")

    # Mock data
    variation_latency: float = Field(default=1.0, description="Simulated delay of Product.variation in seconds")

    # Telemetry (optional)
    apollo_otel_exporter_type: Literal["console", "zipkin", "collector"] | None = Field(default=None)
    apollo_otel_exporter_host: str = Field(default="localhost")
    apollo_otel_exporter_port: int = Field(default=4318)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Singleton instance
settings = Settings()
