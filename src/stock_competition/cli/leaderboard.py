import argparse
import sys
from typing import Sequence

from stock_competition.commands.leaderboard import run_export, run_show
from stock_competition.logging import configure_logging


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", help="Published sheet CSV URL. Defaults to SHEET_URL.")
    source.add_argument("--csv", help="Path to a local CSV export of the sheet.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stock-competition")
    parser.add_argument("--log-level", help="Root log level (DEBUG, INFO, ...). Defaults to LOG_LEVEL or INFO.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print the ranked leaderboard and headline stats")
    _add_source_arguments(show)
    show.add_argument("--search", help="Only list participants whose name contains this text")
    show.set_defaults(handler=run_show)

    export = subparsers.add_parser("export", help="Write the leaderboard snapshot as JSON")
    _add_source_arguments(export)
    export.add_argument("--out", required=True, help="Output JSON path")
    export.set_defaults(handler=run_export)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    argv_list = list(argv) if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv_list)
    configure_logging(args.log_level)
    try:
        return int(args.handler(args) or 0)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    raise SystemExit(main())
