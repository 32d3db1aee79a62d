"""Relay configuration with environment variable loading.

Pydantic-based configuration for the upstream inference client.
Only the credential comes from the environment; the endpoint, model and
sampling temperature are fixed for every request.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.1-70b-versatile"
DEFAULT_TEMPERATURE = 0.1


class RelayConfig(BaseModel):
    """Configuration for the upstream chat-completions client.

    Attributes:
        api_key: API key for the inference provider.
        base_url: OpenAI-compatible API base URL.
        model_name: Model identifier sent with every completion request.
        temperature: Sampling temperature (low values favour reproducible output).
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GROQ_API_KEY", ""),
        description="API key for the inference provider",
    )
    base_url: str = Field(
        default=GROQ_BASE_URL,
        description="OpenAI-compatible API base URL",
    )
    model_name: str = Field(
        default=DEFAULT_MODEL,
        description="Model to use",
    )
    temperature: float = Field(
        default=DEFAULT_TEMPERATURE,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GROQ_API_KEY in .env")
        return v.strip()


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        ValueError: If GROQ_API_KEY is not set.
    """
    return RelayConfig()
