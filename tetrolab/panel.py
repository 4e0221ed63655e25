"""Bordered screen panels and a row-by-row writer for their bodies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tetrolab.terminal import Color, Terminal

CHARS_PER_CELL = 2
PIECE_DISPLAY_WIDTH = 4 * CHARS_PER_CELL
PIECE_DISPLAY_HEIGHT = 2
LEFT_PANE_BODY_WIDTH = 16

TERMINAL_TOP = 0
TERMINAL_LEFT = 0
COMPONENT_TOP = TERMINAL_TOP + 1
COMPONENT_LEFT = TERMINAL_LEFT + 2


@dataclass(frozen=True)
class Panel:
    """A rectangular area with a one-cell border, padding and an optional title."""

    top: int
    left: int
    body_width: int
    body_height: int
    title: str = ""

    def width(self) -> int:
        """Total width including borders and padding."""
        return self.body_width + 4

    def height(self) -> int:
        """Total height including the top and bottom borders."""
        return self.body_height + 2

    def bottom(self) -> int:
        """Row just below the panel."""
        return self.top + self.height()

    def right(self) -> int:
        """Column just right of the panel."""
        return self.left + self.width()

    def body_top(self) -> int:
        """First row of the body."""
        return self.top + 1

    def body_left(self) -> int:
        """First column of the body."""
        return self.left + 2

    def draw_border(self, term: Terminal) -> None:
        """Draw the frame, with the title set into the top edge."""
        term.reset_styles().set_bg(Color.BLACK).set_fg(Color.WHITE)

        term.move_to(self.top, self.left).write("┌─").write(
            self.title.ljust(self.width() - 4, "─")
        ).write("─┐")

        for row in range(self.top + 1, self.bottom() - 1):
            term.move_to(row, self.left).write("│").move_to(
                row, self.right() - 1
            ).write("│")

        term.move_to(self.bottom() - 1, self.left).write("└").write(
            "─" * (self.width() - 2)
        ).write("┘")


HOLD_PANEL = Panel(
    top=COMPONENT_TOP,
    left=COMPONENT_LEFT,
    body_width=LEFT_PANE_BODY_WIDTH,
    body_height=PIECE_DISPLAY_HEIGHT,
    title="HOLD",
)

STATS_PANEL = Panel(
    top=HOLD_PANEL.bottom() + 1,
    left=COMPONENT_LEFT,
    body_width=LEFT_PANE_BODY_WIDTH,
    body_height=13,
    title="STATS",
)


class BodyWriter:
    """Writes successive rows into a panel's body; every write moves one row down."""

    def __init__(self, term: Terminal, panel: Panel, label_width: int) -> None:
        if not 0 <= label_width <= panel.body_width:
            raise ValueError(
                f"label width {label_width} does not fit body width {panel.body_width}"
            )
        self.term = term
        self.panel = panel
        self.label_width = label_width
        self.current_row = 0

    def _check_room(self) -> None:
        if self.current_row >= self.panel.body_height:
            raise ValueError("no rows left in the panel body")

    def _write_row(self, text: str) -> "BodyWriter":
        self._check_room()
        self.term.move_to(
            self.panel.body_top() + self.current_row, self.panel.body_left()
        ).write(text)
        self.current_row += 1
        return self

    def skip_rows(self, n: int) -> "BodyWriter":
        """Leave `n` rows blank."""
        if n < 0 or self.current_row + n > self.panel.body_height:
            raise ValueError(f"cannot skip {n} rows")
        self.current_row += n
        return self

    def write_text(self, content: Any) -> "BodyWriter":
        """Write left-aligned text across the body width."""
        return self._write_row(str(content).ljust(self.panel.body_width))

    def write_number(self, number: Any) -> "BodyWriter":
        """Write a right-aligned value across the body width."""
        return self._write_row(str(number).rjust(self.panel.body_width))

    def write_labeled_number(self, label: Any, number: Any) -> "BodyWriter":
        """Write a left-aligned label followed by a right-aligned value."""
        value_width = self.panel.body_width - self.label_width
        return self._write_row(
            str(label).ljust(self.label_width) + str(number).rjust(value_width)
        )

    def write_labeled_text(self, label: Any, text: Any) -> "BodyWriter":
        """Write a left-aligned label followed by left-aligned text."""
        text_width = self.panel.body_width - self.label_width
        return self._write_row(
            str(label).ljust(self.label_width) + str(text).ljust(text_width)
        )