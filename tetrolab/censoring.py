"""Censoring reports over captured sessions and KM-based normalization ranges.

A session that ended before its game was over is right-censored: the number of
turns a board would still have survived is only known to be at least the
recorded value. These reports show how strongly that skews naive averages.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence

from tetrolab.data import (
    FeatureNormalization,
    NormalizationRange,
    NormalizationStats,
    SessionData,
)

PERCENTILES = (0.0, 0.25, 0.5, 0.75, 1.0)


def _fixed(value: float, precision: int) -> str:
    if math.isnan(value):
        return "NaN"
    return f"{value:.{precision}f}"


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan
    return numerator / denominator


def _mean(values: Sequence[int]) -> float:
    return _ratio(sum(values), len(values))


def _remaining(session: SessionData, turn: int) -> int:
    remaining = session.survived_turns - turn
    if remaining < 0:
        raise ValueError(
            f"board at turn {turn} lies past the session end {session.survived_turns}"
        )
    return remaining


def overall_censoring_report(sessions: Sequence[SessionData]) -> list[str]:
    """Lines summarising complete and censored sessions."""
    total = len(sessions)
    censored = sum(1 for session in sessions if not session.is_game_over)
    complete = total - censored
    total_boards = sum(len(session.boards) for session in sessions)
    complete_pct = _fixed(100.0 * _ratio(complete, total), 1)
    censored_pct = _fixed(100.0 * _ratio(censored, total), 1)
    return [
        "Overall Statistics:",
        f"  Sessions: {total} total, {complete} complete ({complete_pct}%), "
        f"{censored} censored ({censored_pct}%)",
        f"  Total boards captured: {total_boards}",
    ]


def capture_phase_report(sessions: Sequence[SessionData], max_turns: int) -> list[str]:
    """Lines comparing censoring across four equal phases of the game."""
    lines = [
        "Censoring by Capture Phase:",
        f"  {'Phase':<20} {'Boards':>8} {'Censored%':>10} "
        f"{'Mean(Comp)':>12} {'Mean(All)':>12} {'Bias':>8}",
        "  " + "-" * 78,
    ]
    phase_size = max_turns // 4
    phases = (
        ("Early", 0, phase_size),
        ("Mid", phase_size, phase_size * 2),
        ("Late", phase_size * 2, phase_size * 3),
        ("Very Late", phase_size * 3, max_turns),
    )
    for name, start, end in phases:
        phase_boards = [
            (_remaining(session, board.turn), not session.is_game_over)
            for session in sessions
            for board in session.boards
            if start <= board.turn < end
        ]
        if not phase_boards:
            continue
        total = len(phase_boards)
        censored = sum(1 for _, is_censored in phase_boards if is_censored)
        rate = 100.0 * censored / total
        complete = [r for r, is_censored in phase_boards if not is_censored]
        mean_complete = _mean(complete) if complete else 0.0
        mean_all = _mean([r for r, _ in phase_boards])
        bias = f"{_fixed(_ratio(mean_all, mean_complete), 2)}x" if complete else "-"
        label = f"{name} ({start}-{end})"
        lines.append(
            f"  {label:<20} {total:>8} {_fixed(rate, 1):>9}% "
            f"{_fixed(mean_complete, 1):>12} {_fixed(mean_all, 1):>12} {bias:>8}"
        )
    return lines


def evaluator_report(sessions: Iterable[SessionData]) -> list[str]:
    """Lines giving censoring rate and mean survival per placement evaluator."""
    lines = [
        "Censoring by Evaluator:",
        f"  {'Evaluator':<15} {'Sessions':>10} {'Censored%':>10} {'Mean Surviv.':>12}",
        "  " + "-" * 50,
    ]
    survived: dict[str, list[int]] = defaultdict(list)
    censored: dict[str, int] = defaultdict(int)
    for session in sessions:
        survived[session.placement_evaluator].append(session.survived_turns)
        if not session.is_game_over:
            censored[session.placement_evaluator] += 1
    for name in sorted(survived):
        turns = survived[name]
        total = len(turns)
        rate = 100.0 * censored[name] / total
        lines.append(
            f"  {name:<15} {total:>10} {_fixed(rate, 1):>9}% "
            f"{_fixed(_mean(turns), 1):>12}"
        )
    return lines


def select_percentile_indices(counts: Sequence[int]) -> list[int]:
    """Indices of the values at P0, P25, P50, P75 and P100 by board count.

    `counts` holds the number of boards for each distinct feature value, in
    ascending value order. The last index is always included.
    """
    if not counts:
        raise ValueError("no feature values to select from")
    total = sum(counts)
    selected: list[int] = []
    pending = iter(PERCENTILES)
    target = next(pending, None)
    cumulative = 0
    for idx, count in enumerate(counts):
        cumulative += count
        current = _ratio(cumulative, total)
        while target is not None and current >= target:
            selected.append(idx)
            target = next(pending, None)
    last = len(counts) - 1
    if last not in selected:
        selected.append(last)
    return sorted(set(selected))


def feature_value_row(value: int, data: Sequence[tuple[int, bool]]) -> str:
    """Table row for one feature value from its (remaining turns, censored) pairs."""
    if not data:
        raise ValueError(f"no boards recorded for feature value {value}")
    total = len(data)
    censored = sum(1 for _, is_censored in data if is_censored)
    rate = 100.0 * censored / total
    complete = [r for r, is_censored in data if not is_censored]
    mean_complete = _mean(complete) if complete else 0.0
    mean_all = _mean([r for r, _ in data])
    if complete:
        bias_ratio = _ratio(mean_all, mean_complete)
        marker = "⚠" if bias_ratio > 1.5 else ""
        bias = f"{marker}{_fixed(bias_ratio, 2)}x"
    else:
        bias = "N/A"
    return (
        f"  {value:<8} {total:>8} {_fixed(rate, 1):>9}% "
        f"{_fixed(mean_complete, 1):>12} {_fixed(mean_all, 1):>12} {bias:>8}"
    )


def robust_normalization(
    value_km_data: Iterable[tuple[int, float, int]],
) -> FeatureNormalization:
    """Build a P05-P95 normalization from (raw value, KM median, board count) triples.

    The P05 value's median becomes the top of the range and the P95 value's
    median the bottom, so lower-risk feature values normalize towards 1.
    """
    entries = sorted(value_km_data, key=lambda entry: entry[0])
    if not entries:
        raise ValueError("no valid KM medians")
    total_boards = sum(count for _, _, count in entries)
    p05_count = int(total_boards * 0.05)
    p95_count = int(total_boards * 0.95)

    p05_value, p05_km, _ = entries[0]
    p95_value, p95_km = p05_value, p05_km
    cumulative = 0
    for value, km_median, count in entries:
        if cumulative <= p05_count:
            p05_value, p05_km = value, km_median
        if cumulative <= p95_count:
            p95_value, p95_km = value, km_median
        cumulative += count

    return FeatureNormalization(
        transform_mapping={value: km_median for value, km_median, _ in entries},
        normalization=NormalizationRange(km_min=p95_km, km_max=p05_km),
        stats=NormalizationStats(
            p05_feature_value=p05_value,
            p95_feature_value=p95_value,
            p05_km_median=p05_km,
            p95_km_median=p95_km,
            total_unique_values=len(entries),
        ),
    )