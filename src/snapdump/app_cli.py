from __future__ import annotations

import argparse
import json
import logging
import sys

from .analysis import generate_summary_html, write_summary_to_console
from .config import build_source
from .console import console_writer, detect_color_mode
from .live_capture import capture_snapshot
from .snapshot_source import SnapshotLoadError


def report(args: argparse.Namespace) -> None:
    location = (args.location or "").strip()
    if not location:
        print("No file specified in the command line arguments")
        sys.exit(1)

    source = build_source(location)
    try:
        if args.html:
            content = generate_summary_html(source)
            if args.output:
                with open(args.output, "w", encoding="utf-8") as fh:
                    fh.write(content)
            else:
                sys.stdout.write(content)
        elif args.output:
            with open(args.output, "w", encoding="utf-8") as fh:
                write_summary_to_console(source, lambda line: print(line, file=fh))
        else:
            write_summary_to_console(source, console_writer(detect_color_mode(args.color)))
    except SnapshotLoadError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)


def capture(args: argparse.Namespace) -> None:
    snapshot = capture_snapshot()
    with open(args.output, "w", encoding="utf-8") as fh:
        json.dump(snapshot.to_dict(), fh)
    print(f"Captured: {args.output} ({len(snapshot.threads)} threads, {snapshot.heap_count} heaps)")


def serve(args: argparse.Namespace) -> None:
    import uvicorn

    from .web import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="snapdump",
        description="Diagnostic reports over memory snapshots of a Python process.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    rep = sub.add_parser("report", help="Render a snapshot report")
    rep.add_argument("location", nargs="?", default=None, help="Snapshot file, http(s) URL, or 'live'")
    rep.add_argument("--html", action="store_true", help="Emit an HTML fragment instead of plain text")
    rep.add_argument("--output", "-o", default=None, help="Write the report to a file")
    rep.add_argument("--color", choices=["auto", "always", "never"], default="auto", help="Color mode (default: auto)")

    cap = sub.add_parser("capture", help="Write a snapshot of this process as JSON")
    cap.add_argument("output")

    srv = sub.add_parser("serve", help="Serve HTML reports over HTTP")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    if args.command == "report":
        report(args)
    elif args.command == "capture":
        capture(args)
    elif args.command == "serve":
        serve(args)


if __name__ == "__main__":
    main()
