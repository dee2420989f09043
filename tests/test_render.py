from rich.cells import cell_len

from narrator_console.core.render import (
    LineKind,
    classify_line,
    render_transcript,
    scrollbar_column,
    text_width,
    visible_window,
    wrap_cells,
)
from narrator_console.models import Role, Transcript, Turn


def test_classify_stage_direction() -> None:
    assert classify_line("[ The void hums ]") is LineKind.STAGE_DIRECTION


def test_classify_emphasis() -> None:
    assert classify_line("*softly*") is LineKind.EMPHASIS


def test_classify_plain() -> None:
    assert classify_line("plain text") is LineKind.PLAIN
    assert classify_line("[half open") is LineKind.PLAIN
    assert classify_line("") is LineKind.PLAIN


def test_single_turn_layout() -> None:
    rendered = render_transcript(Transcript(Turn(Role.USER, "hello")), 20)
    assert [(line.text, line.kind) for line in rendered.lines] == [
        ("✦ You", LineKind.HEADER),
        ("", LineKind.BLANK),
        ("hello", LineKind.PLAIN),
        ("", LineKind.BLANK),
        ("", LineKind.BLANK),
        ("─" * 20, LineKind.SEPARATOR),
        ("", LineKind.BLANK),
    ]
    assert rendered.total == 7
    assert rendered.lines[0].role is Role.USER
    assert "#f472b6" in rendered.lines[0].style


def test_paragraphs_and_styles() -> None:
    content = "[ bows ]\n\nWelcome.\n*quietly*"
    rendered = render_transcript(Transcript(Turn(Role.NARRATOR, content)), 40)
    body = [(line.text, line.kind) for line in rendered.lines[2:-3]]
    assert body == [
        ("[ bows ]", LineKind.STAGE_DIRECTION),
        ("", LineKind.BLANK),
        ("Welcome.", LineKind.PLAIN),
        ("*quietly*", LineKind.EMPHASIS),
        ("", LineKind.BLANK),
    ]
    assert rendered.lines[0].text == "🎭 Narrator"


def test_bracket_pair_split_by_wrap_is_not_styled() -> None:
    rendered = render_transcript(Transcript(Turn(Role.NARRATOR, "[ The void hums loudly ]")), 10)
    wrapped = rendered.lines[2:5]
    assert [line.text for line in wrapped] == ["[ The void", "hums", "loudly ]"]
    assert all(line.kind is LineKind.PLAIN for line in wrapped)


def test_separator_is_capped() -> None:
    rendered = render_transcript(Transcript(Turn(Role.SYSTEM, "x")), 100)
    separators = [line for line in rendered.lines if line.kind is LineKind.SEPARATOR]
    assert [line.text for line in separators] == ["─" * 40]
    assert rendered.lines[0].text == "⚙ System"


def test_every_turn_is_rendered_in_order() -> None:
    t = Transcript(Turn(Role.NARRATOR, "one"))
    t.append(Turn(Role.USER, "two"))
    t.append(Turn(Role.NARRATOR, "three"))
    rendered = render_transcript(t, 30)
    headers = [line.role for line in rendered.lines if line.kind is LineKind.HEADER]
    assert headers == [Role.NARRATOR, Role.USER, Role.NARRATOR]
    assert rendered.total == 3 * 7


def test_text_width_never_below_one() -> None:
    assert text_width(84) == 80
    assert text_width(2) == 1


def test_visible_window_clamps_to_exact_total() -> None:
    assert visible_window(50, 10, 100) == (40, 50)
    assert visible_window(50, 10, 5) == (5, 15)
    assert visible_window(4, 10, 3) == (0, 4)


def test_scrollbar_thumb_tracks_position() -> None:
    top = scrollbar_column(10, 90, 0)
    bottom = scrollbar_column(10, 90, 90)
    assert len(top) == len(bottom) == 10
    assert top[0] == "↑" and top[-1] == "↓"
    assert top[1] == "█"
    assert bottom[-2] == "█"
    assert top.count("█") == 1


def test_scrollbar_degenerate_heights() -> None:
    assert scrollbar_column(0, 5, 0) == []
    assert scrollbar_column(2, 5, 0) == ["█", "█"]


def test_wide_glyphs_wrap_by_cell_width() -> None:
    rendered = render_transcript(Transcript(Turn(Role.NARRATOR, "夢" * 30)), 20)
    body = [line.text for line in rendered.lines if line.kind is LineKind.PLAIN]
    assert "".join(body) == "夢" * 30
    assert [cell_len(text) for text in body] == [20, 20, 20]


def test_every_line_fits_the_width() -> None:
    content = "🎭 The stage 舞台 trembles 🌀🌀🌀🌀🌀🌀🌀🌀 as 夢夢夢夢夢夢 drifts by"
    for width in (1, 5, 12, 20):
        rendered = render_transcript(Transcript(Turn(Role.NARRATOR, content)), width)
        for line in rendered.lines:
            if line.kind is not LineKind.HEADER:
                assert cell_len(line.text) <= max(width, 2)


def test_wrap_cells_keeps_words_together() -> None:
    assert wrap_cells("one two three", 7) == ["one two", "three"]
    assert wrap_cells("   ", 10) == []
    assert wrap_cells("abcdefghij", 4) == ["abcd", "efgh", "ij"]
