"""Command line entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from tetrolab.censoring import (
    capture_phase_report,
    evaluator_report,
    overall_censoring_report,
)
from tetrolab.data import DataError, load_session_collection


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tetrolab")
    modes = parser.add_subparsers(dest="mode", metavar="MODE")
    modes.required = True

    censoring = modes.add_parser(
        "analyze-censoring", help="Analyze censoring in board data"
    )
    censoring.add_argument("boards", type=Path, help="Path to the boards JSON file")
    return parser


def _analyze_censoring(boards: Path) -> None:
    collection = load_session_collection(boards)
    sessions = collection.sessions
    max_turns = collection.max_turns

    print(f"Censoring Analysis Report (MAX_TURNS={max_turns})")
    print("==========================================\n")
    for lines in (
        overall_censoring_report(sessions),
        capture_phase_report(sessions, max_turns),
        evaluator_report(sessions),
    ):
        print("\n".join(lines))
        print()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        if args.mode == "analyze-censoring":
            _analyze_censoring(args.boards)
    except (DataError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())