"""
Test configuration and fixtures for pytest
"""

import asyncio
import json
from typing import Callable, Optional

import httpx
import pytest

from narrator_console.config import SessionConfig
from narrator_console.core.completion import CompletionClient, CompletionError
from narrator_console.models import Transcript


class FakeCompleter:
    """Stands in for the completion client; records every transcript it sees."""

    def __init__(self, reply: str = "hi there", error: Optional[CompletionError] = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[tuple[str, str]]] = []
        self.gate: Optional[asyncio.Event] = None

    async def complete(self, transcript: Transcript) -> str:
        self.calls.append([(turn.role.value, turn.content) for turn in transcript])
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def _clean_narrator_env(monkeypatch):
    """Keep tests independent of the developer's shell and .env file."""
    for name in (
        "NARRATOR_ENDPOINT",
        "NARRATOR_MODEL",
        "NARRATOR_API_KEY",
        "NARRATOR_LOG_LEVEL",
        "NARRATOR_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("narrator_console.config.load_dotenv", lambda *a, **k: False)


@pytest.fixture
def config() -> SessionConfig:
    return SessionConfig(endpoint="http://x/v1", model="m")


@pytest.fixture
def fake_completer() -> FakeCompleter:
    return FakeCompleter()


@pytest.fixture
def mock_endpoint(config) -> Callable[..., tuple[CompletionClient, list[httpx.Request]]]:
    """
    Build a ``CompletionClient`` whose transport answers with ``handler`` or a
    fixed status/body, returning the client and the list of captured requests.
    """

    def _factory(status: int = 200, body=None, handler=None, session_config: SessionConfig = None):
        seen: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if handler is not None:
                return handler(request)
            if isinstance(body, (dict, list)):
                return httpx.Response(status, content=json.dumps(body).encode(),
                                      headers={"content-type": "application/json"})
            return httpx.Response(status, text=body or "")

        http = httpx.AsyncClient(transport=httpx.MockTransport(_handle))
        return CompletionClient(session_config or config, http_client=http), seen

    return _factory
