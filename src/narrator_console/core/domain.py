"""
Request shapes sent to the chat-completions endpoint.
"""

from typing import Literal, TypedDict


class ChatMessage(TypedDict):
    role: Literal['system', 'user', 'assistant']
    content: str


class ChatRequest(TypedDict):
    model: str
    messages: list[ChatMessage]
    temperature: float
    max_tokens: int
