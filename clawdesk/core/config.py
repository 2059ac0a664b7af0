"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class OpenAIConfig(BaseModel):
    """OpenAI chat-completions endpoint configuration."""

    base_url: str = Field(
        default="https://api.openai.com/v1", alias="OPENAI_BASE_URL", description="OpenAI API base URL"
    )
    model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL", description="Default OpenAI model")

    model_config = {"populate_by_name": True}


class AnthropicConfig(BaseModel):
    """Anthropic messages endpoint configuration."""

    base_url: str = Field(
        default="https://api.anthropic.com/v1", alias="ANTHROPIC_BASE_URL", description="Anthropic API base URL"
    )
    model: str = Field(
        default="claude-3-haiku-20240307", alias="ANTHROPIC_MODEL", description="Default Anthropic model"
    )
    api_version: str = Field(
        default="2023-06-01", alias="ANTHROPIC_API_VERSION", description="Value of the anthropic-version header"
    )

    model_config = {"populate_by_name": True}


class SetupConfig(BaseModel):
    """Timing and port settings for the OpenClaw setup sequence."""

    install_delay_seconds: float = Field(default=1.5, alias="CLAWDESK_SETUP_INSTALL_DELAY", ge=0.0)
    onboard_delay_seconds: float = Field(default=1.2, alias="CLAWDESK_SETUP_ONBOARD_DELAY", ge=0.0)
    gateway_delay_seconds: float = Field(default=0.8, alias="CLAWDESK_SETUP_GATEWAY_DELAY", ge=0.0)
    gateway_port: int = Field(default=18789, alias="OPENCLAW_GATEWAY_PORT", description="OpenClaw gateway port")

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="127.0.0.1",
        description="Local API host address to bind to",
        alias="CLAWDESK_SERVER_HOST",
    )
    server_port: int = Field(
        default=8765,
        description="Local API port number",
        alias="CLAWDESK_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="CLAWDESK_LOG_LEVEL",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./clawdesk.db",
        description="Async SQLAlchemy URL for agents, logs, approvals, settings and chat sessions",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Inference Configuration
    # =====================================================================
    inference_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Deadline applied to every remote inference call",
        alias="CLAWDESK_INFERENCE_TIMEOUT",
    )
    history_window: int = Field(
        default=20,
        ge=1,
        description="Number of trailing conversation messages sent to remote providers",
        alias="CLAWDESK_HISTORY_WINDOW",
    )
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    anthropic_base_url: str = Field(default="https://api.anthropic.com/v1", alias="ANTHROPIC_BASE_URL")
    anthropic_model: str = Field(default="claude-3-haiku-20240307", alias="ANTHROPIC_MODEL")
    anthropic_api_version: str = Field(default="2023-06-01", alias="ANTHROPIC_API_VERSION")

    # =====================================================================
    # Setup Sequence Configuration
    # =====================================================================
    setup_install_delay: float = Field(default=1.5, ge=0.0, alias="CLAWDESK_SETUP_INSTALL_DELAY")
    setup_onboard_delay: float = Field(default=1.2, ge=0.0, alias="CLAWDESK_SETUP_ONBOARD_DELAY")
    setup_gateway_delay: float = Field(default=0.8, ge=0.0, alias="CLAWDESK_SETUP_GATEWAY_DELAY")
    gateway_port: int = Field(default=18789, alias="OPENCLAW_GATEWAY_PORT")

    shell_timeout_seconds: Optional[float] = Field(
        default=600.0,
        description="Upper bound for a single OpenClaw CLI invocation (None disables it)",
        alias="CLAWDESK_SHELL_TIMEOUT",
    )

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def openai(self) -> OpenAIConfig:
        """Get OpenAI configuration from environment variables."""
        return OpenAIConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def anthropic(self) -> AnthropicConfig:
        """Get Anthropic configuration from environment variables."""
        return AnthropicConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def setup(self) -> SetupConfig:
        """Get setup sequence configuration from environment variables."""
        return SetupConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
