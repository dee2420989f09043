"""
The Narrator's Console
"""

import logging
import sys
from typing import Optional, Sequence

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.events import Key
from textual.widgets import Static

from narrator_console.config import SessionConfig, parse_args
from narrator_console.core.completion import CompletionClient
from narrator_console.core.session import (
    Completer,
    KeyOutcome,
    SessionPhase,
    SessionState,
    handle_key,
    recompute_view,
    run_exchange,
    scroll_by,
    terminate,
)
from narrator_console.logging_utils import configure_logging
from narrator_console.widgets import ConversationView, InputArea, StatusBar

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1


def header_text() -> Text:
    return Text.assemble(
        ("🌀 ", ""),
        ("The Narrator's Console", "bold magenta"),
        (" — where reality gets playful", "bright_black"),
    )


class NarratorApp(App[None]):
    CSS = """
Screen {
    layout: vertical;
}
#header {
    height: 2;
    border-bottom: solid $panel;
}
ConversationView {
    height: 1fr;
    min-height: 10;
    border: round $panel;
    border-title-color: $text-muted;
}
InputArea {
    height: 3;
    border: round cyan;
    border-title-color: cyan;
}
InputArea.-loading {
    border: round $panel;
}
StatusBar {
    height: 1;
}
    """
    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]
    # every key other than quit goes through handle_key
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, config: SessionConfig, client: Optional[Completer] = None):
        """
        Args:
            config: endpoint, model and key for the whole session.
            client: completion backend; a ``CompletionClient`` for ``config``
                is created (and closed on exit) when omitted.
        """
        super().__init__()
        self.config = config
        self.state = SessionState()
        self._owned_client: Optional[CompletionClient] = None
        if client is None:
            client = self._owned_client = CompletionClient(config)
        self.client = client

    def compose(self) -> ComposeResult:
        yield Static(header_text(), id="header")
        yield ConversationView(self.state, id="conversation")
        yield InputArea(self.state, id="input")
        yield StatusBar(self.state, id="status")

    def on_mount(self) -> None:
        self.refresh_view()
        self.set_interval(POLL_INTERVAL, self.refresh_view)

    async def on_unmount(self) -> None:
        if self._owned_client is not None:
            await self._owned_client.aclose()

    def refresh_view(self) -> None:
        """Recompute scroll bounds for the current viewport, then redraw."""
        if self.state.phase is SessionPhase.TERMINATED:
            return
        conversation = self.query_one(ConversationView)
        recompute_view(self.state, conversation.viewport_height)
        input_area = self.query_one(InputArea)
        input_area.set_class(self.state.is_loading, "-loading")
        conversation.refresh()
        input_area.refresh()
        self.query_one(StatusBar).refresh()

    def on_key(self, event: Key) -> None:
        outcome = handle_key(self.state, event.key, event.character)
        if outcome is KeyOutcome.IGNORED:
            return
        event.stop()
        event.prevent_default()

        if outcome is KeyOutcome.QUIT:
            self.exit()
            return
        self.refresh_view()
        if outcome is KeyOutcome.SUBMIT:
            self.narrate()

    def on_conversation_view_scrolled(self, message: ConversationView.Scrolled) -> None:
        if scroll_by(self.state, message.delta):
            self.refresh_view()

    async def action_quit(self) -> None:
        terminate(self.state)
        self.exit()

    @work(exclusive=True, group='narrate')
    async def narrate(self) -> None:
        """
        Wait for the reply to the turn just submitted.

        Keys other than quit are ignored until this settles.
        """
        turn = await run_exchange(self.state, self.client)
        logger.debug("narrator replied with %d characters", len(turn.content))
        self.refresh_view()


def main(argv: Optional[Sequence[str]] = None) -> int:
    config, log_options = parse_args(argv)
    configure_logging(log_options)
    app = NarratorApp(config)
    try:
        app.run()
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
