"""Client configuration with environment variable loading.

Pydantic-based configuration for the backend client and the session UI.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the session client.

    Attributes:
        api_base_url: Root URL of the code-intelligence backend.
        request_timeout: HTTP timeout in seconds for every backend call.
        auto_navigate_delay: Seconds between a successful upload and the
            automatic switch back to the chat tab.
        ui_host: Interface the NiceGUI server binds to.
        ui_port: Port the NiceGUI server listens on.
        log_level: Root logging level.
    """

    model_config = ConfigDict(validate_default=True)

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8080"),
        description="Backend root URL",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "120.0")),
        gt=0.0,
        description="HTTP timeout in seconds",
    )
    auto_navigate_delay: float = Field(
        default_factory=lambda: float(os.getenv("AUTO_NAVIGATE_DELAY", "1.5")),
        ge=0.0,
        description="Delay before returning to chat after an upload",
    )
    ui_host: str = Field(default_factory=lambda: os.getenv("UI_HOST", "0.0.0.0"))
    ui_port: int = Field(
        default_factory=lambda: int(os.getenv("UI_PORT", "8000")),
        ge=1,
        le=65535,
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is invalid.
    """
    return ClientConfig()
