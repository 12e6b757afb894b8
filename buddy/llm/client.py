"""Client for the OpenAI-compatible AI gateway."""

import logging
from dataclasses import dataclass

import httpx
import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from buddy.config import (
    DEFAULT_GATEWAY_BASE_URL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT_SECONDS,
    Config,
)
from buddy.tutor.errors import RateLimited, UpstreamError, UsageLimitReached

logger = logging.getLogger(__name__)


@dataclass
class Message:
    """A chat completion message."""

    role: str  # "system", "user" or "assistant"
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


def _field(obj: object, name: str) -> object:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_reply_text(completion: object) -> str | None:
    """Return the first choice's message text, or None if there isn't any."""
    choices = _field(completion, "choices")
    if not isinstance(choices, list) or not choices:
        return None

    content = _field(_field(choices[0], "message"), "content")
    if isinstance(content, str) and content.strip():
        return content
    return None


class GatewayClient:
    """Sends chat completions to the AI gateway.

    Makes exactly one request per call. Retries are left to the caller.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_GATEWAY_BASE_URL,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self.http_client = http_client

    @classmethod
    def from_config(cls, config: Config, http_client: httpx.AsyncClient | None = None) -> "GatewayClient":
        return cls(
            base_url=config.gateway_base_url,
            model=config.model,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            timeout=config.timeout_seconds,
            http_client=http_client,
        )

    async def complete(self, messages: list[Message], api_key: str) -> str | None:
        """Request a completion for the message sequence.

        Returns:
            The reply text, or None if the gateway returned no usable text.

        Raises:
            RateLimited: gateway answered 429
            UsageLimitReached: gateway answered 402
            UpstreamError: any other gateway or transport failure
        """
        client = AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=0,
            http_client=self.http_client,
        )

        try:
            completion = await client.chat.completions.create(
                model=self.model,
                messages=[m.to_dict() for m in messages],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.APIStatusError as e:
            if e.status_code == 429:
                raise RateLimited("AI gateway rate limit exceeded") from e
            if e.status_code == 402:
                raise UsageLimitReached("AI gateway usage limit reached") from e
            logger.error(f"AI gateway error: {e.status_code} {e.body}")
            raise UpstreamError(f"AI gateway error: {e.status_code}") from e
        except openai.APIConnectionError as e:
            logger.error(f"AI gateway unreachable: {e}")
            raise UpstreamError("AI gateway unreachable") from e
        except (openai.APIError, ValueError) as e:
            logger.error(f"AI gateway returned an unusable response: {e}")
            raise UpstreamError("AI gateway returned an unusable response") from e
        finally:
            # An injected http client belongs to the caller
            if self.http_client is None:
                await client.close()

        # Non-JSON 2xx bodies come back from the SDK as raw text
        if not isinstance(completion, ChatCompletion):
            logger.error(f"AI gateway returned a non-completion body: {str(completion)[:200]!r}")
            raise UpstreamError("AI gateway returned an unusable response")

        return extract_reply_text(completion)
