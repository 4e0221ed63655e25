"""Output helpers: stdout-or-file writers and compact float formatting."""

from __future__ import annotations

import json
import math
import struct
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, TextIO


def _to_f32(value: float) -> float:
    """Round a float to the nearest single-precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _debug_f32(value: float) -> str:
    """Shortest single-precision text that reads back to the same value."""
    number = _to_f32(float(value))
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    sign = "-" if math.copysign(1.0, number) < 0 else ""
    magnitude = abs(number)
    if magnitude == 0.0:
        return f"{sign}0.0"

    text = f"{magnitude:.8e}"
    for precision in range(9):
        candidate = f"{magnitude:.{precision}e}"
        if _to_f32(float(candidate)) == magnitude:
            text = candidate
            break
    mantissa, exponent_text = text.split("e")
    digits = mantissa.replace(".", "").rstrip("0") or "0"
    exponent = int(exponent_text)

    if magnitude >= 1e16 or magnitude < 1e-4:
        body = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        return f"{sign}{body}e{exponent}"

    decimal_text = format(Decimal(f"{digits}e{exponent - len(digits) + 1}"), "f")
    if "." not in decimal_text:
        decimal_text += ".0"
    return sign + decimal_text


def format_f32(value: float) -> str:
    """Format a single-precision float, grouping long fractions in threes with '_'."""
    text = _debug_f32(value)
    int_part, dot, frac_part = text.partition(".")
    if not dot or len(frac_part) <= 3:
        return text
    groups = [frac_part[start:start + 3] for start in range(0, len(frac_part), 3)]
    return f"{int_part}.{'_'.join(groups)}"


def _json_default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class Output:
    """A text sink that is either standard output or a file."""

    def __init__(self, stream: TextIO, path: Path | None = None) -> None:
        self._stream = stream
        self.path = path

    @classmethod
    def from_path(cls, path: str | Path | None) -> "Output":
        """Open `path` for writing, or use standard output when it is None."""
        if path is None:
            return cls(sys.stdout, None)
        path = Path(path)
        try:
            stream = path.open("w", encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Failed to create output file: {path}") from exc
        return cls(stream, path)

    def display_path(self) -> str:
        return "stdout" if self.path is None else str(self.path)

    def write(self, text: str) -> None:
        self._stream.write(text)

    def write_json(self, value: Any) -> None:
        """Write `value` as indented JSON followed by a newline."""
        document = json.dumps(value, indent=2, ensure_ascii=False, default=_json_default)
        try:
            self._stream.write(document)
        except OSError as exc:
            raise OSError(f"Failed to write JSON to {self.display_path()}") from exc
        try:
            self._stream.write("\n")
        except OSError as exc:
            raise OSError(
                f"Failed to write newline after JSON to {self.display_path()}"
            ) from exc

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        """Close the file; standard output is only flushed."""
        if self.path is None:
            self._stream.flush()
        else:
            self._stream.close()

    def __enter__(self) -> "Output":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def save_json(value: Any, path: str | Path | None) -> None:
    """Write `value` as JSON to `path`, or to standard output when it is None."""
    with Output.from_path(path) as output:
        output.write_json(value)