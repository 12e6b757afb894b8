"""Turns a tutoring request into a tutor reply."""

from dataclasses import dataclass
from typing import Protocol

from buddy.config import CONVERSATION_HISTORY_LIMIT, FALLBACK_REPLY, Config
from buddy.llm.client import GatewayClient, Message
from buddy.tutor.errors import ConfigError
from buddy.tutor.models import HistoryMessage, TutoringRequest
from buddy.tutor.prompts import build_system_prompt


class CredentialProvider(Protocol):
    def get_api_key(self) -> str | None: ...


@dataclass(frozen=True)
class StaticCredentials:
    """Credential provider holding a key read once at startup."""

    api_key: str | None

    def get_api_key(self) -> str | None:
        return self.api_key


def build_messages(
    system_prompt: str,
    history: list[HistoryMessage],
    message: str,
    limit: int = CONVERSATION_HISTORY_LIMIT,
) -> list[Message]:
    """Assemble [system] + last `limit` history entries + [user message]."""
    recent = history[-limit:] if limit > 0 else []
    return [
        Message(role="system", content=system_prompt),
        *(Message(role=m.role, content=m.content) for m in recent),
        Message(role="user", content=message),
    ]


class TutorService:
    """Composes the prompt and asks the gateway for a reply."""

    def __init__(self, credentials: CredentialProvider, gateway: GatewayClient):
        self.credentials = credentials
        self.gateway = gateway

    @classmethod
    def from_config(cls, config: Config) -> "TutorService":
        return cls(
            credentials=StaticCredentials(config.gateway_api_key or None),
            gateway=GatewayClient.from_config(config),
        )

    async def reply(self, request: TutoringRequest) -> str:
        """Get the tutor's reply for one learner message.

        Raises:
            ConfigError: no gateway credential, checked before any network call
            TutorError: gateway failures, see GatewayClient.complete
        """
        api_key = self.credentials.get_api_key()
        if not api_key or not api_key.strip():
            raise ConfigError("LOVABLE_API_KEY is not configured")

        system_prompt = build_system_prompt(
            mode=request.mode,
            topic=request.topic,
            user_level=request.user_level,
            coach_style=request.coach_style,
            explain_in_english=request.explain_in_english,
            target_language=request.target_language,
        )
        messages = build_messages(system_prompt, request.conversation_history, request.message)

        text = await self.gateway.complete(messages, api_key=api_key)
        return text or FALLBACK_REPLY
