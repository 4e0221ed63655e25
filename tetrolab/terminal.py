"""Buffered ANSI terminal output with a chainable, console-style interface."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, ClassVar, TextIO

_CSI = "\x1b["
_MAX_COORD = 0xFFFF


@dataclass(frozen=True)
class Color:
    """An RGB color."""

    r: int
    g: int
    b: int

    CYAN: ClassVar["Color"]
    YELLOW: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    RED: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    ORANGE: ClassVar["Color"]
    MAGENTA: ClassVar["Color"]
    GRAY: ClassVar["Color"]
    BLACK: ClassVar["Color"]
    WHITE: ClassVar["Color"]

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"color channel {channel} is outside 0..255")


Color.CYAN = Color(0, 255, 255)
Color.YELLOW = Color(255, 255, 0)
Color.GREEN = Color(0, 255, 0)
Color.RED = Color(255, 0, 0)
Color.BLUE = Color(0, 0, 255)
Color.ORANGE = Color(255, 127, 0)
Color.MAGENTA = Color(255, 0, 255)
Color.GRAY = Color(127, 127, 127)
Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)


class Terminal:
    """Queues escape sequences and text; nothing reaches the stream until flush()."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = sys.stdout if stream is None else stream
        self._buffer: list[str] = []

    def _queue(self, text: str) -> "Terminal":
        self._buffer.append(text)
        return self

    def clear_screen(self) -> "Terminal":
        return self._queue(f"{_CSI}2J")

    def hide_cursor(self) -> "Terminal":
        return self._queue(f"{_CSI}?25l")

    def show_cursor(self) -> "Terminal":
        return self._queue(f"{_CSI}?25h")

    def move_to(self, row: int, col: int) -> "Terminal":
        """Move the cursor to a 0-based row and column."""
        for name, value in (("row", row), ("col", col)):
            if not 0 <= value <= _MAX_COORD:
                raise ValueError(f"{name} {value} is outside 0..{_MAX_COORD}")
        return self._queue(f"{_CSI}{row + 1};{col + 1}H")

    def set_fg(self, color: Color) -> "Terminal":
        return self._queue(f"{_CSI}38;2;{color.r};{color.g};{color.b}m")

    def set_bg(self, color: Color) -> "Terminal":
        return self._queue(f"{_CSI}48;2;{color.r};{color.g};{color.b}m")

    def set_bold(self) -> "Terminal":
        return self._queue(f"{_CSI}1m")

    def reset_styles(self) -> "Terminal":
        return self._queue(f"{_CSI}0m")

    def write(self, text: Any) -> "Terminal":
        """Queue text at the cursor without changing colors."""
        return self._queue(str(text))

    def flush(self) -> "Terminal":
        """Send everything queued to the stream."""
        if self._buffer:
            self._stream.write("".join(self._buffer))
            self._buffer.clear()
        self._stream.flush()
        return self