"""
Scrolling conversation viewport.
"""
from rich.cells import cell_len
from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from narrator_console.core.render import render_transcript, scrollbar_column, text_width, visible_window
from narrator_console.core.scroll import SCROLL_STEP
from narrator_console.core.session import SessionState


class ConversationView(Widget):
    """Draws the visible slice of the transcript, plus a scrollbar when it overflows."""

    class Scrolled(Message, bubble=True):
        def __init__(self, delta: int) -> None:
            super().__init__()
            self.delta = delta

    def __init__(self, state: SessionState, id: str | None = None) -> None:
        super().__init__(id=id)
        self.state = state
        self.border_title = "conversation"

    @property
    def viewport_height(self) -> int:
        return self.content_size.height

    def render(self) -> Text:
        width = self.content_size.width
        height = self.content_size.height
        if width <= 0 or height <= 0:
            return Text()

        rendered = render_transcript(self.state.transcript, text_width(width))
        start, stop = visible_window(rendered.total, height, self.state.view.scroll_offset)
        bar: list[str] = []
        if rendered.total > height:
            exact_max = rendered.total - height
            bar = scrollbar_column(height, exact_max, start)

        out = Text(no_wrap=True, overflow="crop")
        for row in range(height):
            index = start + row
            if index < stop:
                line = rendered.lines[index]
                out.append(line.text, style=line.style or None)
                used = cell_len(line.text)
            else:
                used = 0
            if bar:
                out.append(" " * max(0, width - 1 - used))
                out.append(bar[row], style="bright_black")
            if row < height - 1:
                out.append("\n")
        return out

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self.post_message(self.Scrolled(-SCROLL_STEP))
        event.stop()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self.post_message(self.Scrolled(SCROLL_STEP))
        event.stop()
