"""
Configuration management using Pydantic Settings.
Loads from environment variables and .env file.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    app_env: str = Field(
        default="local",
        description="Application environment (local, testing, staging, production)"
    )

    # Bridge
    bridge_prefix: str = Field(
        default="/__playwright__",
        description="Path prefix for the bridge endpoints"
    )
    secret_key: str = Field(
        default="playwright-bridge-insecure-key",
        description="Key used to sign the session cookie"
    )
    user_model: str = Field(default="User", description="Model used for login")
    hidden_attributes: list[str] = Field(
        default_factory=lambda: ["password", "remember_token"],
        description="Attributes stripped from user payloads"
    )

    # Database
    database_path: str = Field(
        default="./data/bridge.db",
        description="SQLite database path"
    )

    # Server
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Browser
    base_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL the browser session targets"
    )
    headless: bool = Field(default=True, description="Run browser in headless mode")
    browser_timeout: int = Field(default=30000, description="Browser timeout in ms")


class BridgeConfig(BaseModel):
    """
    Explicit configuration handed to the bridge at startup.

    The bridge never reads global settings on its own; the application
    factory builds one of these and passes it to ``install_bridge``.
    """

    environment: str = "local"
    prefix: str = "/__playwright__"
    secret_key: str = "playwright-bridge-insecure-key"
    user_model: str = "User"
    hidden_attributes: list[str] = Field(
        default_factory=lambda: ["password", "remember_token"]
    )
    session_middleware: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "BridgeConfig":
        """Build a bridge configuration from application settings."""
        return cls(
            environment=settings.app_env,
            prefix=settings.bridge_prefix,
            secret_key=settings.secret_key,
            user_model=settings.user_model,
            hidden_attributes=list(settings.hidden_attributes),
        )

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


# Global settings instance
settings = Settings()
