"""Data files: captured board sessions, trained models and normalization parameters."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_U32_MAX = 2**32 - 1


class DataError(ValueError):
    """A data file or document is malformed."""


def _object(data: Any, what: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise DataError(f"{what}: expected an object")
    return data


def _field(data: Mapping, key: str, what: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise DataError(f"{what}: missing field `{key}`") from None


def _uint(data: Mapping, key: str, what: str) -> int:
    value = _field(data, key, what)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DataError(f"{what}: `{key}` must be a non-negative integer")
    return value


def _float(data: Mapping, key: str, what: str) -> float:
    value = _field(data, key, what)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataError(f"{what}: `{key}` must be a number")
    return float(value)


def _bool(data: Mapping, key: str, what: str) -> bool:
    value = _field(data, key, what)
    if not isinstance(value, bool):
        raise DataError(f"{what}: `{key}` must be a boolean")
    return value


def _str(data: Mapping, key: str, what: str) -> str:
    value = _field(data, key, what)
    if not isinstance(value, str):
        raise DataError(f"{what}: `{key}` must be a string")
    return value


def _list(data: Mapping, key: str, what: str) -> list:
    value = _field(data, key, what)
    if not isinstance(value, list):
        raise DataError(f"{what}: `{key}` must be an array")
    return value


_TIMESTAMP = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:?\d{2})$"
)


def _parse_timestamp(text: Any) -> datetime:
    if not isinstance(text, str):
        raise DataError("model: `trained_at` must be a string")
    match = _TIMESTAMP.match(text)
    if match is None:
        raise DataError(f"model: invalid timestamp {text!r}")
    date, time, fraction, offset = match.groups()
    micro = ((fraction or "") + "000000")[:6]
    if offset in ("Z", "z"):
        offset = "+00:00"
    elif ":" not in offset:
        offset = f"{offset[:3]}:{offset[3:]}"
    try:
        parsed = datetime.fromisoformat(f"{date}T{time}.{micro}{offset}")
    except ValueError as exc:
        raise DataError(f"model: invalid timestamp {text!r}") from exc
    return parsed.astimezone(timezone.utc)


def _format_timestamp(stamp: datetime) -> str:
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    stamp = stamp.astimezone(timezone.utc)
    micro = stamp.microsecond
    if micro == 0:
        fraction = ""
    elif micro % 1000 == 0:
        fraction = f".{micro // 1000:03d}"
    else:
        fraction = f".{micro:06d}"
    return f"{stamp.strftime('%Y-%m-%dT%H:%M:%S')}{fraction}Z"


@dataclass
class BoardAndPlacement:
    """A captured board at a given turn and the piece placed on it.

    The board and placement are kept as their JSON documents.
    """

    turn: int
    board: Any
    placement: Any

    @classmethod
    def from_dict(cls, data: Any) -> "BoardAndPlacement":
        what = "board"
        data = _object(data, what)
        return cls(
            turn=_uint(data, "turn", what),
            board=_field(data, "board", what),
            placement=_field(data, "placement", what),
        )

    def to_dict(self) -> dict:
        return {"turn": self.turn, "board": self.board, "placement": self.placement}


@dataclass
class SessionData:
    """One played game and the boards captured from it."""

    placement_evaluator: str
    survived_turns: int
    is_game_over: bool
    boards: list[BoardAndPlacement] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SessionData":
        what = "session"
        data = _object(data, what)
        return cls(
            placement_evaluator=_str(data, "placement_evaluator", what),
            survived_turns=_uint(data, "survived_turns", what),
            is_game_over=_bool(data, "is_game_over", what),
            boards=[BoardAndPlacement.from_dict(b) for b in _list(data, "boards", what)],
        )

    def to_dict(self) -> dict:
        return {
            "placement_evaluator": self.placement_evaluator,
            "survived_turns": self.survived_turns,
            "is_game_over": self.is_game_over,
            "boards": [board.to_dict() for board in self.boards],
        }


@dataclass
class SessionCollection:
    """All sessions captured by one board generation run."""

    total_boards: int
    max_turns: int
    sessions: list[SessionData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SessionCollection":
        what = "session collection"
        data = _object(data, what)
        return cls(
            total_boards=_uint(data, "total_boards", what),
            max_turns=_uint(data, "max_turns", what),
            sessions=[SessionData.from_dict(s) for s in _list(data, "sessions", what)],
        )

    def to_dict(self) -> dict:
        return {
            "total_boards": self.total_boards,
            "max_turns": self.max_turns,
            "sessions": [session.to_dict() for session in self.sessions],
        }


@dataclass
class Model:
    """A trained placement model: a weight per board feature."""

    name: str
    trained_at: datetime
    final_fitness: float
    placement_weights: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Model":
        what = "model"
        data = _object(data, what)
        weights = _object(_field(data, "placement_weights", what), what)
        return cls(
            name=_str(data, "name", what),
            trained_at=_parse_timestamp(_field(data, "trained_at", what)),
            final_fitness=_float(data, "final_fitness", what),
            placement_weights={
                str(key): _float(weights, key, what) for key in sorted(weights)
            },
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "trained_at": _format_timestamp(self.trained_at),
            "final_fitness": self.final_fitness,
            "placement_weights": dict(sorted(self.placement_weights.items())),
        }


@dataclass
class NormalizationRange:
    """The KM-median interval mapped onto 0..1."""

    km_min: float
    km_max: float

    def normalize(self, km_median: float) -> float:
        """Map a KM median onto 0..1, clamped; 0.5 when the range is empty."""
        if self.km_max == self.km_min:
            return 0.5
        scaled = (km_median - self.km_min) / (self.km_max - self.km_min)
        return min(max(scaled, 0.0), 1.0)


@dataclass
class NormalizationStats:
    """Percentile summary behind a feature's normalization."""

    p05_feature_value: int
    p95_feature_value: int
    p05_km_median: float
    p95_km_median: float
    total_unique_values: int

    def km_range(self) -> float:
        """Difference in median survival between the P05 and P95 values."""
        return self.p05_km_median - self.p95_km_median


@dataclass
class FeatureNormalization:
    """Raw feature value to KM median mapping plus the range to normalize it."""

    transform_mapping: dict[int, float]
    normalization: NormalizationRange
    stats: NormalizationStats

    def transform_and_normalize(self, raw_value: int) -> float:
        """Map a raw value to its KM median (worst case if unknown), then to 0..1."""
        km_median = self.transform_mapping.get(raw_value, self.normalization.km_min)
        return self.normalization.normalize(km_median)

    @classmethod
    def from_dict(cls, data: Any) -> "FeatureNormalization":
        what = "feature normalization"
        data = _object(data, what)
        mapping_data = _object(_field(data, "transform_mapping", what), what)
        mapping: dict[int, float] = {}
        for key in mapping_data:
            try:
                raw = int(key)
            except (TypeError, ValueError):
                raise DataError(f"{what}: invalid mapping key {key!r}") from None
            if not 0 <= raw <= _U32_MAX:
                raise DataError(f"{what}: mapping key {key!r} out of range")
            mapping[raw] = _float(mapping_data, key, what)

        range_data = _object(_field(data, "normalization", what), what)
        stats_data = _object(_field(data, "stats", what), what)
        return cls(
            transform_mapping=dict(sorted(mapping.items())),
            normalization=NormalizationRange(
                km_min=_float(range_data, "km_min", what),
                km_max=_float(range_data, "km_max", what),
            ),
            stats=NormalizationStats(
                p05_feature_value=_uint(stats_data, "p05_feature_value", what),
                p95_feature_value=_uint(stats_data, "p95_feature_value", what),
                p05_km_median=_float(stats_data, "p05_km_median", what),
                p95_km_median=_float(stats_data, "p95_km_median", what),
                total_unique_values=_uint(stats_data, "total_unique_values", what),
            ),
        )

    def to_dict(self) -> dict:
        return {
            "transform_mapping": {
                str(key): value for key, value in sorted(self.transform_mapping.items())
            },
            "normalization": {
                "km_min": self.normalization.km_min,
                "km_max": self.normalization.km_max,
            },
            "stats": {
                "p05_feature_value": self.stats.p05_feature_value,
                "p95_feature_value": self.stats.p95_feature_value,
                "p05_km_median": self.stats.p05_km_median,
                "p95_km_median": self.stats.p95_km_median,
                "total_unique_values": self.stats.total_unique_values,
            },
        }


@dataclass
class NormalizationParams:
    """Normalization parameters for a set of features."""

    max_turns: int
    normalization_method: str
    features: dict[str, FeatureNormalization] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "NormalizationParams":
        what = "normalization parameters"
        data = _object(data, what)
        features = _object(_field(data, "features", what), what)
        return cls(
            max_turns=_uint(data, "max_turns", what),
            normalization_method=_str(data, "normalization_method", what),
            features={
                str(key): FeatureNormalization.from_dict(features[key])
                for key in sorted(features)
            },
        )

    def to_dict(self) -> dict:
        return {
            "max_turns": self.max_turns,
            "normalization_method": self.normalization_method,
            "features": {
                key: value.to_dict() for key, value in sorted(self.features.items())
            },
        }


def load_session_collection(path: str | Path) -> SessionCollection:
    """Load a boards file; raise DataError when it is malformed or has no sessions."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as stream:
            try:
                document = json.load(stream)
            except ValueError as exc:
                raise DataError(f"failed to parse {path}: {exc}") from exc
    except OSError as exc:
        raise OSError(f"failed to open {path}") from exc
    try:
        collection = SessionCollection.from_dict(document)
    except DataError as exc:
        raise DataError(f"failed to parse {path}: {exc}") from exc
    if not collection.sessions:
        raise DataError(f"{path} is empty")
    return collection


def load_model(path: str | Path) -> Model:
    """Load a trained model file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as stream:
            try:
                document = json.load(stream)
            except ValueError as exc:
                raise DataError(f"Failed to read model file: {path}: {exc}") from exc
    except OSError as exc:
        raise OSError(f"Failed to open model file: {path}") from exc
    try:
        return Model.from_dict(document)
    except DataError as exc:
        raise DataError(f"Failed to read model file: {path}: {exc}") from exc


def save_normalization_params(params: NormalizationParams, path: str | Path) -> None:
    """Write normalization parameters as indented JSON."""
    path = Path(path)
    document = json.dumps(params.to_dict(), indent=2, ensure_ascii=False)
    try:
        stream = path.open("w", encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Failed to create file: {path}") from exc
    with stream:
        try:
            stream.write(document)
        except OSError as exc:
            raise OSError(f"Failed to write to file: {path}") from exc