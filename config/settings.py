"""
Procurement Intelligence - Configuration Management

Central configuration using Pydantic settings.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from agents.base import LLMConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # LLM Configuration
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_base_url: Optional[str] = Field(
        default=None,
        description="Override for OpenAI-compatible endpoints"
    )
    llm_model: str = Field(default="gpt-4o-mini", description="Completion model")
    llm_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Transport timeout in seconds (SDK default when unset)"
    )

    # Storage Configuration
    data_dir: Path = Field(
        default=Path("./data"),
        description="Data directory for local storage and logs"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=4000, description="API port")
    api_env: str = Field(default="development", description="API environment")
    cors_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="CORS origins (comma-separated)"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/procurement.db",
        description="Database connection URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL queries for debugging"
    )

    # SMTP (outgoing mail)
    email_host: Optional[str] = Field(default=None, description="SMTP host")
    email_port: int = Field(default=587, description="SMTP port")
    email_user: Optional[str] = Field(default=None, description="SMTP user, also the sender")
    email_pass: Optional[str] = Field(default=None, description="SMTP password")

    # IMAP (vendor replies)
    imap_host: Optional[str] = Field(default=None, description="IMAP host")
    imap_port: int = Field(default=993, description="IMAP port")
    imap_user: Optional[str] = Field(default=None, description="IMAP user")
    imap_pass: Optional[str] = Field(default=None, description="IMAP password")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def logs_dir(self) -> Path:
        """Directory for log files."""
        path = self.data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def llm_config(self) -> LLMConfig:
        """Build the explicit completion-service configuration."""
        return LLMConfig(
            api_key=self.openai_api_key,
            model=self.llm_model,
            base_url=self.openai_base_url,
            timeout=self.llm_timeout,
        )


# Global settings instance
settings = Settings()
