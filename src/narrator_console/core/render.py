"""
Turns a transcript into display lines.

Every line carries a kind so the conversation widget can pick a style
without re-parsing the text. Classification looks at the wrapped line, so
a ``[ ... ]`` or ``*...*`` pair broken across a wrap boundary stays plain.
"""
from dataclasses import dataclass
from enum import Enum

from rich.cells import cell_len, chop_cells

from narrator_console.models import Role, Transcript

SEPARATOR_CHAR = "─"
SEPARATOR_MAX_WIDTH = 40
# columns kept clear on the right for the scrollbar
TEXT_MARGIN = 4


class LineKind(Enum):
    HEADER = "header"
    BLANK = "blank"
    STAGE_DIRECTION = "stage_direction"
    EMPHASIS = "emphasis"
    PLAIN = "plain"
    SEPARATOR = "separator"


ROLE_LABELS: dict[Role, tuple[str, str]] = {
    Role.USER: ("✦ You", "bold #f472b6"),
    Role.NARRATOR: ("🎭 Narrator", "bold #8b5cf6"),
    Role.SYSTEM: ("⚙ System", "bold bright_black"),
}

LINE_STYLES: dict[LineKind, str] = {
    LineKind.BLANK: "",
    LineKind.STAGE_DIRECTION: "italic bright_black",
    LineKind.EMPHASIS: "italic",
    LineKind.PLAIN: "white",
    LineKind.SEPARATOR: "bright_black",
}


@dataclass(frozen=True)
class DisplayLine:
    text: str
    kind: LineKind
    role: Role | None = None

    @property
    def style(self) -> str:
        if self.kind is LineKind.HEADER and self.role is not None:
            return ROLE_LABELS[self.role][1]
        return LINE_STYLES.get(self.kind, "")


@dataclass(frozen=True)
class RenderedTranscript:
    lines: list[DisplayLine]

    @property
    def total(self) -> int:
        return len(self.lines)


BLANK = DisplayLine("", LineKind.BLANK)


def classify_line(text: str) -> LineKind:
    if text.startswith("[") and text.endswith("]"):
        return LineKind.STAGE_DIRECTION
    if text.startswith("*") and text.endswith("*"):
        return LineKind.EMPHASIS
    return LineKind.PLAIN


def text_width(viewport_width: int) -> int:
    return max(1, viewport_width - TEXT_MARGIN)


def wrap_cells(text: str, width: int) -> list[str]:
    """
    Greedy word wrap measured in terminal cells.

    Wide glyphs (CJK, most emoji) take two cells. A word wider than ``width``
    is split across lines.
    """
    lines: list[str] = []
    current = ""
    for word in text.split():
        pieces = [p for p in chop_cells(word, width) if p] if cell_len(word) > width else [word]
        for piece in pieces:
            candidate = f"{current} {piece}" if current else piece
            if cell_len(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            current = piece
    if current:
        lines.append(current)
    return lines


def _wrap_content(content: str, width: int) -> list[DisplayLine]:
    lines: list[DisplayLine] = []
    for paragraph in content.split("\n\n"):
        for source_line in paragraph.splitlines():
            wrapped = wrap_cells(source_line, width)
            if not wrapped:
                lines.append(BLANK)
                continue
            lines.extend(DisplayLine(w, classify_line(w)) for w in wrapped)
        lines.append(BLANK)
    return lines


def render_transcript(transcript: Transcript, width: int) -> RenderedTranscript:
    """
    Lay out every turn at ``width`` columns.

    Each turn is a role header, a blank line, its wrapped paragraphs (each
    followed by a blank line), then a blank line, a separator rule and a
    final blank line.
    """
    width = max(1, width)
    rule = SEPARATOR_CHAR * min(width, SEPARATOR_MAX_WIDTH)
    lines: list[DisplayLine] = []
    for turn in transcript:
        label, _ = ROLE_LABELS[turn.role]
        lines.append(DisplayLine(label, LineKind.HEADER, turn.role))
        lines.append(BLANK)
        lines.extend(_wrap_content(turn.content, width))
        lines.append(BLANK)
        lines.append(DisplayLine(rule, LineKind.SEPARATOR))
        lines.append(BLANK)
    return RenderedTranscript(lines)


def visible_window(total: int, height: int, offset: int) -> tuple[int, int]:
    """Clamp ``offset`` to the exact content height and return ``(start, stop)``."""
    exact_max = max(0, total - height)
    start = min(max(0, offset), exact_max)
    return start, min(total, start + height)


def scrollbar_column(height: int, max_scroll: int, position: int) -> list[str]:
    """
    Characters for a vertical scrollbar ``height`` rows tall.

    Arrows cap both ends; the thumb is sized to the visible share of the
    content and placed proportionally to ``position``.
    """
    if height <= 0:
        return []
    if height < 3:
        return ["█"] * height
    track = height - 2
    content = max_scroll + height
    thumb = max(1, min(track, track * height // content))
    room = track - thumb
    start = round(room * min(position, max_scroll) / max_scroll) if max_scroll else 0
    cells = ["│"] * track
    for i in range(start, start + thumb):
        cells[i] = "█"
    return ["↑", *cells, "↓"]
