"""
Session state and the update functions that drive it.

The whole session lives in one ``SessionState`` record. Key presses,
submissions and completion results mutate it through the functions below;
the Textual app only decides when to call them and when to redraw.

Phases::

    IDLE --enter (non-blank)--> AWAITING_REPLY --reply or error--> IDLE
      \\                               |
       `------------ ctrl+c -----------+--> TERMINATED
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Protocol

from narrator_console.core import scroll
from narrator_console.core.completion import CompletionError
from narrator_console.core.persona import (
    INTRO_TEXT,
    STATUS_GLITCHED,
    STATUS_IDLE,
    STATUS_PONDERING,
    failure_text,
)
from narrator_console.models import InputBuffer, Role, Transcript, Turn

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"ctrl+c"})


class SessionPhase(Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"
    TERMINATED = "terminated"


class KeyOutcome(Enum):
    IGNORED = "ignored"
    HANDLED = "handled"
    SUBMIT = "submit"
    QUIT = "quit"


class Completer(Protocol):
    async def complete(self, transcript: Transcript) -> str: ...


def new_transcript() -> Transcript:
    return Transcript(Turn(Role.NARRATOR, INTRO_TEXT))


@dataclass
class SessionState:
    transcript: Transcript = field(default_factory=new_transcript)
    input: InputBuffer = field(default_factory=InputBuffer)
    view: scroll.ViewState = field(default_factory=scroll.ViewState)
    phase: SessionPhase = SessionPhase.IDLE
    status: str = STATUS_IDLE

    @property
    def is_loading(self) -> bool:
        return self.phase is SessionPhase.AWAITING_REPLY


_EDIT_KEYS: dict[str, Callable[[InputBuffer], None]] = {
    "backspace": InputBuffer.backspace,
    "delete": InputBuffer.delete,
    "left": InputBuffer.move_left,
    "right": InputBuffer.move_right,
    "home": InputBuffer.home,
    "end": InputBuffer.end,
}

_SCROLL_KEYS: dict[str, tuple[Callable[[scroll.ViewState, int], None], int]] = {
    "up": (scroll.scroll_up, scroll.SCROLL_STEP),
    "down": (scroll.scroll_down, scroll.SCROLL_STEP),
    "pageup": (scroll.scroll_up, scroll.PAGE_STEP),
    "pagedown": (scroll.scroll_down, scroll.PAGE_STEP),
}


def handle_key(state: SessionState, key: str, character: Optional[str] = None) -> KeyOutcome:
    """
    Apply one key press.

    The quit key works in every phase. Everything else is only honoured
    while idle; a returned ``SUBMIT`` means a user turn was appended and the
    caller must now run the exchange.
    """
    if key in QUIT_KEYS:
        terminate(state)
        return KeyOutcome.QUIT
    if state.phase is not SessionPhase.IDLE:
        return KeyOutcome.IGNORED

    if key == "enter":
        return KeyOutcome.SUBMIT if begin_exchange(state) is not None else KeyOutcome.IGNORED
    if key in _EDIT_KEYS:
        _EDIT_KEYS[key](state.input)
        return KeyOutcome.HANDLED
    if key in _SCROLL_KEYS:
        move, amount = _SCROLL_KEYS[key]
        move(state.view, amount)
        return KeyOutcome.HANDLED
    if character is not None and len(character) == 1 and character.isprintable():
        state.input.insert(character)
        return KeyOutcome.HANDLED
    return KeyOutcome.IGNORED


def terminate(state: SessionState) -> None:
    state.phase = SessionPhase.TERMINATED


def scroll_by(state: SessionState, delta: int) -> bool:
    """Scroll from a pointer device; negative is up. Ignored unless idle."""
    if state.phase is not SessionPhase.IDLE or delta == 0:
        return False
    if delta < 0:
        scroll.scroll_up(state.view, -delta)
    else:
        scroll.scroll_down(state.view, delta)
    return True


def begin_exchange(state: SessionState) -> Optional[str]:
    """
    Move the typed text into the transcript and enter ``AWAITING_REPLY``.

    Returns the submitted text, or ``None`` (and changes nothing) when the
    buffer is blank or the session is not idle.
    """
    if state.phase is not SessionPhase.IDLE or state.input.is_blank():
        return None
    text = state.input.take()
    state.transcript.append(Turn(Role.USER, text))
    state.phase = SessionPhase.AWAITING_REPLY
    state.status = STATUS_PONDERING
    return text


def _settle(state: SessionState, content: str, status: str) -> None:
    state.transcript.append(Turn(Role.NARRATOR, content))
    if state.phase is SessionPhase.AWAITING_REPLY:
        state.phase = SessionPhase.IDLE
    state.status = status
    scroll.pin_to_bottom(state.view)


def settle_reply(state: SessionState, reply: str) -> None:
    _settle(state, reply, STATUS_IDLE)


def settle_failure(state: SessionState, error: CompletionError) -> None:
    _settle(state, failure_text(error), STATUS_GLITCHED)


async def run_exchange(state: SessionState, client: Completer) -> Turn:
    """
    Wait for the Narrator's answer to the last user turn and record it.

    Completion errors become an in-character Narrator turn; anything else
    propagates.
    """
    try:
        reply = await client.complete(state.transcript)
    except CompletionError as exc:
        logger.warning("completion failed: %s", exc)
        settle_failure(state, exc)
    else:
        settle_reply(state, reply)
    return state.transcript.last


def recompute_view(state: SessionState, viewport_height: int) -> None:
    scroll.recompute(state.view, state.transcript, viewport_height)
