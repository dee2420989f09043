"""
Input box and status line.
"""
from rich.text import Text
from textual.widget import Widget

from narrator_console.core.session import SessionState

PROMPT = "> "


class InputArea(Widget):
    """Shows the input buffer with its cursor, or an ellipsis while the Narrator thinks."""

    def __init__(self, state: SessionState, id: str | None = None) -> None:
        super().__init__(id=id)
        self.state = state
        self.border_title = "speak into the void"

    def render(self) -> Text:
        if self.state.is_loading:
            return Text("...", style="bright_black")

        buf = self.state.input
        out = Text(PROMPT, style="white", no_wrap=True, overflow="crop")
        out.append(buf.text[:buf.cursor], style="white")
        under_cursor = buf.text[buf.cursor:buf.cursor + 1] or " "
        out.append(under_cursor, style="reverse")
        out.append(buf.text[buf.cursor + 1:], style="white")
        return out


class StatusBar(Widget):
    def __init__(self, state: SessionState, id: str | None = None) -> None:
        super().__init__(id=id)
        self.state = state

    def render(self) -> Text:
        dot = "yellow" if self.state.is_loading else "green"
        return Text.assemble(
            ("● ", dot),
            (self.state.status, "bright_black"),
            (" │ Ctrl+C to exit │ PgUp/PgDn to scroll", "bright_black"),
        )
