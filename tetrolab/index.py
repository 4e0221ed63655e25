"""Per-feature ranking of boards by normalized feature value."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable, Sequence


def _total_order_key(value: float) -> int:
    """Integer key giving IEEE total ordering (NaN above +inf, -0.0 below 0.0)."""
    bits = struct.unpack("<q", struct.pack("<d", value))[0]
    return bits ^ (((bits >> 63) & 0xFFFFFFFFFFFFFFFF) >> 1)


def _to_index(value: float) -> int:
    """Truncate towards zero, saturating negatives and NaN at zero."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return 2**63
    return int(value)


class BoardIndex:
    """Board indices sorted, per feature, by normalized value from highest to lowest."""

    def __init__(self, feature_vectors: Iterable[Sequence[float]]) -> None:
        vectors = [tuple(float(v) for v in vector) for vector in feature_vectors]
        num_features = len(vectors[0]) if vectors else 0
        if any(len(vector) != num_features for vector in vectors):
            raise ValueError("all feature vectors must have the same length")
        self._sorted_indices: list[list[int]] = []
        for feature_idx in range(num_features):
            keys = [_total_order_key(vector[feature_idx]) for vector in vectors]
            self._sorted_indices.append(
                sorted(range(len(vectors)), key=keys.__getitem__, reverse=True)
            )

    def _indices(self, feature_idx: int) -> list[int]:
        if not 0 <= feature_idx < len(self._sorted_indices):
            raise IndexError(f"feature index {feature_idx} out of range")
        return self._sorted_indices[feature_idx]

    def boards_at_percentile(self, feature_idx: int, percentile: float) -> list[int]:
        """Boards ranked within [percentile, percentile + 1) percent of the ordering."""
        indices = self._indices(feature_idx)
        total = float(len(indices))
        start = _to_index((percentile / 100.0) * total)
        end = min(_to_index(((percentile + 1.0) / 100.0) * total), len(indices))
        if start > end:
            raise IndexError(f"percentile {percentile} is out of range")
        return indices[start:end]

    def boards_in_rank_range(
        self, feature_idx: int, start_rank: int, end_rank: int
    ) -> list[int]:
        """Boards with ranks in [start_rank, end_rank); end_rank is clamped."""
        indices = self._indices(feature_idx)
        end_rank = min(end_rank, len(indices))
        if start_rank < 0 or start_rank > end_rank:
            raise IndexError(f"rank range {start_rank}..{end_rank} is out of range")
        return indices[start_rank:end_rank]

    def board_rank(self, feature_idx: int, board_idx: int) -> int | None:
        """Rank of a board for a feature, or None when the board is not indexed."""
        indices = self._indices(feature_idx)
        try:
            return indices.index(board_idx)
        except ValueError:
            return None