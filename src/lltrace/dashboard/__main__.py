"""
Trace viewer entry point.

Usage:
    python -m lltrace.dashboard trace.jsonl
    python -m lltrace.dashboard trace.jsonl --chrome-out trace.json
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QApplication

from lltrace.core.errors import TraceError
from lltrace.tracing import TraceIndex, dumps_chrome_trace, load_trace
from lltrace.utils.logger import error, info, setup_logging
from lltrace.utils.settings import get_settings

from .window import TraceViewerWindow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lltrace-view",
        description="Reconstruct a span trace from JSON-lines events and show it.",
    )
    parser.add_argument("trace", type=Path, help="JSON-lines trace file")
    parser.add_argument(
        "--chrome-out",
        type=Path,
        help="Write a Chrome trace-event file instead of opening the viewer",
    )
    parser.add_argument(
        "--expand-all", action="store_true", help="Start with every span expanded"
    )
    return parser


def run_viewer(trace: TraceIndex, title: str, expand_all: bool) -> int:
    """Run the viewer as a standalone Qt application."""
    app = QApplication(sys.argv)

    window = TraceViewerWindow(trace, title=title, settings=get_settings())
    if expand_all:
        window.model.expand_all()
    window.show()

    return app.exec()


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        trace = load_trace(args.trace)
    except (TraceError, OSError) as e:
        error(f"Failed to load {args.trace}: {e}")
        print(f"lltrace: {args.trace}: {e}", file=sys.stderr)
        return 1

    if args.chrome_out is not None:
        try:
            args.chrome_out.write_text(dumps_chrome_trace(trace), encoding="utf-8")
        except OSError as e:
            error(f"Failed to write {args.chrome_out}: {e}")
            print(f"lltrace: {args.chrome_out}: {e}", file=sys.stderr)
            return 1
        info(f"Wrote Chrome trace to {args.chrome_out}")
        return 0

    return run_viewer(trace, f"lltrace - {args.trace.name}", args.expand_all)


if __name__ == "__main__":
    sys.exit(main())
