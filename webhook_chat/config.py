"""Client configuration with environment variable loading.

Pydantic-based configuration for the chat client and its host server.
The webhook URL is always external configuration, never hardcoded behavior.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_URL = "http://localhost:5678/webhook/chat"


class ClientConfig(BaseModel):
    """Configuration for the chat client.

    Attributes:
        api_url: Webhook endpoint that receives every message.
        app_title: Brand shown in the page header and browser tab.
        host: Interface the host server binds to.
        port: Port the host server listens on.
        storage_secret: Secret for NiceGUI's browser storage.
    """

    # Values come from the environment through default factories
    model_config = ConfigDict(validate_default=True)

    api_url: str = Field(
        default_factory=lambda: os.getenv("CHAT_API_URL", DEFAULT_API_URL),
        description="Webhook endpoint URL",
    )
    app_title: str = Field(
        default_factory=lambda: os.getenv("APP_TITLE", "taahAI"),
        description="Application title",
    )
    host: str = Field(
        default_factory=lambda: os.getenv("HOST", "0.0.0.0"),
        description="Bind address for the host server",
    )
    port: int = Field(
        default_factory=lambda: os.getenv("PORT", "3000"),
        ge=1,
        le=65535,
        description="Listen port for the host server",
    )
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "webhook-chat-secret"),
        description="NiceGUI storage secret",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate that the webhook URL is an absolute http(s) URL."""
        v = v.strip()
        if not v:
            raise ValueError("Webhook URL required. Set CHAT_API_URL in .env")
        if not v.startswith(("http://", "https://")):
            raise ValueError("CHAT_API_URL must start with http:// or https://")
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValidationError: If an environment value is invalid.
    """
    return ClientConfig()
