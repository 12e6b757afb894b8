"""Configuration management for Language Buddy."""

# This module centralizes environment variable loading for the tutor service,
# including the AI gateway credential, generation parameters, and server settings.

from dataclasses import dataclass
import os

from dotenv import load_dotenv

# Default gateway settings - use these constants for consistency
DEFAULT_GATEWAY_BASE_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-3-flash-preview"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT_SECONDS = 30.0

# Only the most recent messages are forwarded to the model
CONVERSATION_HISTORY_LIMIT = 10

# Shown to the learner when the model returns no usable text
FALLBACK_REPLY = "Sorry, I couldn't generate a response."


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # AI gateway
    gateway_api_key: str = ""
    gateway_base_url: str = DEFAULT_GATEWAY_BASE_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8000

    @staticmethod
    def _safe_int(value: str, default: int = 0) -> int:
        """Safely parse an integer, returning default if invalid."""
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    @staticmethod
    def _safe_float(value: str, default: float = 0.0) -> float:
        """Safely parse a float, returning default if invalid."""
        try:
            return float(value)
        except (ValueError, TypeError):
            return default

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Config":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            gateway_api_key=os.environ.get("LOVABLE_API_KEY", ""),
            gateway_base_url=os.environ.get("AI_GATEWAY_BASE_URL", DEFAULT_GATEWAY_BASE_URL),
            model=os.environ.get("AI_MODEL", DEFAULT_MODEL),
            max_tokens=cls._safe_int(
                os.environ.get("AI_MAX_TOKENS", str(DEFAULT_MAX_TOKENS)), DEFAULT_MAX_TOKENS
            ),
            temperature=cls._safe_float(
                os.environ.get("AI_TEMPERATURE", str(DEFAULT_TEMPERATURE)), DEFAULT_TEMPERATURE
            ),
            timeout_seconds=cls._safe_float(
                os.environ.get("AI_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
                DEFAULT_TIMEOUT_SECONDS,
            ),
            server_host=os.environ.get("SERVER_HOST", "0.0.0.0"),
            server_port=cls._safe_int(os.environ.get("SERVER_PORT", "8000"), 8000),
        )
