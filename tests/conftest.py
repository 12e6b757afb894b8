"""Shared pytest fixtures for the Language Buddy test suite."""

import json

import httpx
import pytest

from buddy.config import Config
from buddy.llm.client import GatewayClient
from buddy.tutor.models import HistoryMessage, TutoringRequest
from buddy.tutor.service import StaticCredentials, TutorService


TEST_BASE_URL = "https://gateway.test/v1"


class FakeGateway:
    """Records requests to the gateway and replies with a canned response."""

    def __init__(self, status_code: int = 200, body: object = None):
        self.status_code = status_code
        self.body = body if body is not None else completion_body("¡Hola! ¿Qué tal?")
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    def client(self) -> GatewayClient:
        return GatewayClient(
            base_url=TEST_BASE_URL,
            model="test-model",
            max_tokens=256,
            temperature=0.5,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
        )


def completion_body(content: str | None) -> dict:
    """Minimal OpenAI-style chat completion payload."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


@pytest.fixture
def config():
    """Test configuration with a fake gateway key."""
    return Config(
        gateway_api_key="test-gateway-key",
        gateway_base_url=TEST_BASE_URL,
        model="test-model",
    )


@pytest.fixture
def fake_gateway():
    """Gateway that answers every request with a successful completion."""
    return FakeGateway()


@pytest.fixture
def make_service():
    """Build a TutorService around a FakeGateway.

    Usage:
        service = make_service(gateway)
        service = make_service(gateway, api_key=None)
    """

    def _make(gateway: FakeGateway, api_key: str | None = "test-gateway-key") -> TutorService:
        return TutorService(StaticCredentials(api_key), gateway.client())

    return _make


@pytest.fixture
def sample_request():
    """Typical coach-mode request in Spanish."""
    return TutoringRequest(
        message="Yo soy cansado",
        mode="coach",
        topic="daily",
        user_level="beginner",
        coach_style="gentle",
        explain_in_english=True,
        target_language="spanish",
    )


@pytest.fixture
def long_history():
    """Fifteen alternating history messages, numbered in order."""
    return [
        HistoryMessage(role="user" if i % 2 == 0 else "assistant", content=f"message {i}")
        for i in range(15)
    ]
