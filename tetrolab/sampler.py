"""Adaptive board capture: favour rare and difficult board states when sampling."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol


class _RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True, order=True)
class DifficultyBin:
    """A coarse difficulty class from stack height and number of covered holes."""

    height_bin: int
    holes_bin: int

    NUM_BINS = 20
    HEIGHT_BIN_WIDTH = 4
    HOLES_BIN_WIDTH = 3
    MAX_HEIGHT_BIN = 4
    MAX_HOLES_BIN = 3

    @classmethod
    def from_board(cls, max_height: int, num_holes: int) -> "DifficultyBin":
        """Bin a board by its maximum column height and its hole count."""
        if max_height < 0 or num_holes < 0:
            raise ValueError("height and holes must be non-negative")
        return cls(
            height_bin=min(max_height // cls.HEIGHT_BIN_WIDTH, cls.MAX_HEIGHT_BIN),
            holes_bin=min(num_holes // cls.HOLES_BIN_WIDTH, cls.MAX_HOLES_BIN),
        )

    def label(self) -> str:
        """Lower bounds of height and holes covered by this bin."""
        height = self.height_bin * self.HEIGHT_BIN_WIDTH
        holes = self.holes_bin * self.HOLES_BIN_WIDTH
        return f"{height:2},{holes:2}"


def _turn_multiplier(completed_pieces: int) -> float:
    if completed_pieces < 30:
        return 0.5
    if completed_pieces < 100:
        return 1.0
    return 1.2


class AdaptiveSampler:
    """Decides which boards to capture, keeping difficulty bins roughly balanced."""

    def __init__(self) -> None:
        self.bin_counts: Counter[DifficultyBin] = Counter(
            {DifficultyBin(height, holes): 0 for height in range(4) for holes in range(4)}
        )
        self.total_captured = 0

    def capture_probability(
        self, max_height: int, num_holes: int, completed_pieces: int
    ) -> float:
        """Probability of capturing a board in the given state."""
        difficulty = DifficultyBin.from_board(max_height, num_holes)
        current = self.bin_counts.get(difficulty, 0)
        desired = math.ceil(self.total_captured / DifficultyBin.NUM_BINS)
        fill_ratio = 0.0 if desired == 0 else current / desired

        probability = 1.0 / (1.0 + fill_ratio)
        score = difficulty.height_bin + difficulty.holes_bin
        probability += (score / 7.0) ** 2.5 * 3.0
        probability *= _turn_multiplier(completed_pieces)
        probability *= 0.3
        return min(max(probability, 0.05), 1.0)

    def should_capture(
        self,
        max_height: int,
        num_holes: int,
        completed_pieces: int,
        rng: _RandomSource,
    ) -> bool:
        """Draw whether to capture this board, recording it when captured."""
        probability = self.capture_probability(max_height, num_holes, completed_pieces)
        captured = rng.random() < probability
        if captured:
            self.bin_counts[DifficultyBin.from_board(max_height, num_holes)] += 1
            self.total_captured += 1
        return captured

    def progress_lines(self) -> list[str]:
        """Report of boards captured so far and their spread over difficulty bins."""
        bins = sorted(self.bin_counts.items())
        return [
            f"Captured {self.total_captured} boards",
            "Height & Holes distribution:",
            *format_histogram((difficulty.label(), count) for difficulty, count in bins),
        ]


def format_histogram(data: Iterable[tuple[Any, int]]) -> list[str]:
    """Horizontal bar chart lines, the largest count drawn 50 characters wide."""
    rows = list(data)
    max_count = max((count for _, count in rows), default=1)
    max_bar_width = 50
    lines = []
    for label, count in rows:
        bar_width = count * max_bar_width // max_count if max_count else 0
        lines.append(f"{str(label):>15} | {count:<5} {'#' * bar_width}")
    return lines