"""
Scroll bookkeeping for the conversation viewport.

Bounds come from an estimate of the rendered height, not from the wrap
pass: every turn costs a fixed overhead plus its source line count. That
keeps recomputation proportional to the number of turns on every redraw.
"""
from dataclasses import dataclass

from narrator_console.models import Transcript

# header + spacing (3), paragraph padding (2), separator (3)
TURN_OVERHEAD = 8

SCROLL_STEP = 3
PAGE_STEP = 10


@dataclass
class ViewState:
    scroll_offset: int = 0
    pinned_to_bottom: bool = True
    max_scroll: int = 0


def estimate_line_count(transcript: Transcript) -> int:
    return sum(TURN_OVERHEAD + len(turn.content.splitlines()) for turn in transcript)


def recompute(view: ViewState, transcript: Transcript, viewport_height: int) -> None:
    """Refresh ``max_scroll`` for the viewport and bring the offset back in range."""
    view.max_scroll = max(0, estimate_line_count(transcript) - max(0, viewport_height))
    if view.pinned_to_bottom:
        view.scroll_offset = view.max_scroll
    else:
        view.scroll_offset = min(max(0, view.scroll_offset), view.max_scroll)


def scroll_up(view: ViewState, amount: int) -> None:
    view.pinned_to_bottom = False
    view.scroll_offset = max(0, view.scroll_offset - amount)


def scroll_down(view: ViewState, amount: int) -> None:
    view.scroll_offset = min(view.scroll_offset + amount, view.max_scroll)
    if view.scroll_offset >= view.max_scroll:
        view.pinned_to_bottom = True


def pin_to_bottom(view: ViewState) -> None:
    view.pinned_to_bottom = True
    view.scroll_offset = view.max_scroll
