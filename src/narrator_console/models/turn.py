"""
Data models for the Narrator's Console conversation.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Role(Enum):
    USER = "user"
    NARRATOR = "narrator"
    SYSTEM = "system"


@dataclass(frozen=True)
class Turn:
    """
    A single message in the conversation, attributed to one role.
    """
    role: Role
    content: str


class Transcript:
    """
    Append-only, ordered list of turns.

    A transcript always opens with a turn; it is never empty, reordered,
    or trimmed while a session is running.
    """

    def __init__(self, opening: Turn) -> None:
        self._turns: list[Turn] = [opening]

    def append(self, turn: Turn) -> None:
        self._turns.append(turn)

    @property
    def last(self) -> Turn:
        return self._turns[-1]

    def __iter__(self) -> Iterator[Turn]:
        return iter(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]
