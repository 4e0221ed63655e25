import io

import pytest

from tetrolab.terminal import Color, Terminal


def _flushed(action):
    stream = io.StringIO()
    term = Terminal(stream)
    action(term)
    term.flush()
    return stream.getvalue()


def test_output_is_buffered_until_flush():
    stream = io.StringIO()
    term = Terminal(stream)
    term.write("abc").write(42)
    assert stream.getvalue() == ""
    term.flush()
    assert stream.getvalue() == "abc42"
    term.flush()
    assert stream.getvalue() == "abc42"


def test_methods_chain_on_same_terminal():
    stream = io.StringIO()
    term = Terminal(stream)
    result = term.reset_styles().set_bold().move_to(0, 0).write("x")
    assert result is term
    assert stream.getvalue() == ""


def test_move_to_sequence():
    assert _flushed(lambda t: t.move_to(2, 3)) == "\x1b[3;4H"


def test_set_fg_sequence():
    assert _flushed(lambda t: t.set_fg(Color.RED)) == "\x1b[38;2;255;0;0m"


def test_set_bg_uses_color_channels():
    output = _flushed(lambda t: t.set_bg(Color(1, 2, 3)))
    assert output.startswith("\x1b[48;2;")
    assert output.endswith("1;2;3m")


def test_cursor_visibility_sequences():
    hidden = _flushed(lambda t: t.hide_cursor())
    shown = _flushed(lambda t: t.show_cursor())
    assert hidden.startswith("\x1b[?25")
    assert shown.startswith("\x1b[?25")
    assert hidden != shown


def test_style_sequences_are_sgr():
    reset = _flushed(lambda t: t.reset_styles())
    bold = _flushed(lambda t: t.set_bold())
    for sequence in (reset, bold):
        assert sequence.startswith("\x1b[")
        assert sequence.endswith("m")
    assert reset != bold


def test_clear_screen_is_queued_in_order():
    output = _flushed(lambda t: t.clear_screen().write("after"))
    assert output.startswith("\x1b[")
    assert output.endswith("after")


def test_move_to_out_of_range():
    term = Terminal(io.StringIO())
    with pytest.raises(ValueError):
        term.move_to(70000, 0)
    with pytest.raises(ValueError):
        term.move_to(0, -1)


def test_color_constants():
    assert Color.ORANGE == Color(255, 127, 0)
    assert Color.GRAY == Color(127, 127, 127)


def test_color_channel_range():
    with pytest.raises(ValueError):
        Color(256, 0, 0)