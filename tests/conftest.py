"""Pytest configuration and fixtures for testing."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from anthroq.app import create_app
from anthroq.config_loader import ProxySettings
from anthroq.testing import FakeDownstream

DOWNSTREAM_URL = "http://downstream.local/openai/v1/chat/completions"


def build_settings(**overrides: Any) -> ProxySettings:
    """Settings pointing at the in-process fake downstream."""
    values: dict[str, Any] = {
        "downstream_url": DOWNSTREAM_URL,
        "downstream_model": "test-downstream-model",
    }
    values.update(overrides)
    return ProxySettings(**values)


@pytest.fixture
def downstream() -> FakeDownstream:
    return FakeDownstream()


@pytest.fixture
def make_client(
    downstream: FakeDownstream,
) -> Callable[..., httpx.AsyncClient]:
    """Factory for an async client talking to a proxy wired to ``downstream``.

    Usage:
        async def test_messages(downstream, make_client):
            downstream.enqueue_chat_response("Hello")
            async with make_client() as client:
                response = await client.post("/v1/messages", ...)
    """

    def _make(
        settings: ProxySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        app = create_app(
            settings or build_settings(),
            transport=transport or downstream.transport,
        )
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://proxy.local",
        )

    return _make


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": "Bearer gsk_test_key_123456"}
