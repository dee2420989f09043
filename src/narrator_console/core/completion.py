"""
Client for an OpenAI-compatible chat-completions endpoint.

One call per turn: the persona instruction plus the transcript go out, one
reply comes back. Every failure is raised as a ``CompletionError`` so the
session can tell the story of it instead of crashing.
"""

import logging
from typing import Any, Optional

import httpx
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    convert_to_openai_messages,
)

from narrator_console.config import SessionConfig
from narrator_console.core.domain import ChatMessage, ChatRequest
from narrator_console.core.persona import SYSTEM_PROMPT
from narrator_console.models import Role, Transcript

logger = logging.getLogger(__name__)

TEMPERATURE = 0.9
MAX_TOKENS = 512
DEFAULT_TIMEOUT = httpx.Timeout(None, connect=10.0)


class CompletionError(Exception):
    """Base class for a failed exchange with the endpoint."""


class ConnectionFailed(CompletionError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Connection failed: {detail}")
        self.detail = detail


class ApiError(CompletionError):
    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"API error {status}: {body}")
        self.status = status
        self.body = body


class ParseError(CompletionError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Parse error: {detail}")
        self.detail = detail


class EmptyResponse(CompletionError):
    def __init__(self) -> None:
        super().__init__("Empty response")


def _to_message(role: Role, content: str) -> Optional[BaseMessage]:
    if role is Role.USER:
        return HumanMessage(content=content)
    if role is Role.NARRATOR:
        return AIMessage(content=content)
    return None


def build_messages(transcript: Transcript) -> list[ChatMessage]:
    """
    Persona instruction first, then every non-system turn in order.
    """
    messages: list[BaseMessage] = [SystemMessage(content=SYSTEM_PROMPT)]
    for turn in transcript:
        msg = _to_message(turn.role, turn.content)
        if msg is not None:
            messages.append(msg)
    return convert_to_openai_messages(messages)


def build_request(transcript: Transcript, model: str) -> ChatRequest:
    return {
        'model': model,
        'messages': build_messages(transcript),
        'temperature': TEMPERATURE,
        'max_tokens': MAX_TOKENS,
    }


def parse_reply(payload: Any) -> str:
    """
    Pull the first choice's text out of a decoded response body.
    """
    if not isinstance(payload, dict):
        raise ParseError(f"expected a JSON object, got {type(payload).__name__}")
    choices = payload.get('choices')
    if not isinstance(choices, list):
        raise ParseError("missing field `choices`")

    contents: list[str] = []
    for index, choice in enumerate(choices):
        message = choice.get('message') if isinstance(choice, dict) else None
        content = message.get('content') if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise ParseError(f"choices[{index}].message.content is not a string")
        contents.append(content)

    if not contents:
        raise EmptyResponse()
    return contents[0]


class CompletionClient:
    def __init__(self, config: SessionConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.url = f"{config.endpoint.rstrip('/')}/chat/completions"
        self.headers: dict[str, str] = {}
        if config.api_key:
            self.headers['Authorization'] = f"Bearer {config.api_key}"
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)

    async def complete(self, transcript: Transcript) -> str:
        """
        Send the conversation and return the Narrator's reply.

        Raises:
            ConnectionFailed: the request never got a usable response
                (transport failure, undecodable body, redirect loop).
            ApiError: the endpoint answered with a non-success status.
            ParseError: the body was not the expected JSON.
            EmptyResponse: the body held no choices.
        """
        request = build_request(transcript, self.config.model)
        logger.debug(
            "POST %s model=%s messages=%d", self.url, self.config.model, len(request['messages'])
        )
        try:
            response = await self._http.post(self.url, json=request, headers=self.headers)
        except httpx.RequestError as exc:
            raise ConnectionFailed(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise ApiError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError(str(exc)) from exc
        return parse_reply(payload)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
