"""
Command line entry point for testrun-reporter.

Subcommands:
- ``replay``: drive a Reporter from a recorded host event log and write the
  consolidated coverage artifact.
- ``merge``: merge istanbul JSON coverage artifacts into one.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from testrun_reporter.config.settings import ReporterConfig
from testrun_reporter.core.dispatch import EventDispatcher
from testrun_reporter.coverage.istanbul import merge_coverage
from testrun_reporter.coverage.persistence import PersistenceBridge
from testrun_reporter.coverage.report import CoverageReport, JsonReport
from testrun_reporter.exceptions import ReporterError
from testrun_reporter.reporter import Reporter
from testrun_reporter.testing.replay import EventLogReplayer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="testrun-reporter",
        description="Aggregate multi-session test results and merge coverage.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    replay = sub.add_parser("replay", help="Replay a recorded event log through the reporter.")
    replay.add_argument("events", help="Path to a JSON-lines event log.")
    replay.add_argument("--file", help="Coverage artifact output path. Default: from environment.")
    replay.add_argument(
        "--mode",
        help="Reporter mode ('client' or 'runner'). Default: from environment.",
    )
    replay.add_argument("--summary", help="Also write a JSON run summary to this path.")

    merge = sub.add_parser("merge", help="Merge istanbul JSON coverage files.")
    merge.add_argument("inputs", nargs="+", help="Coverage JSON files to merge.")
    merge.add_argument("-o", "--output", required=True, help="Merged coverage output path.")
    return parser


def setup_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def print_coverage_summary(report: CoverageReport, console: Console) -> None:
    table = Table(title=f"Coverage ({report.path})")
    table.add_column("Metric")
    table.add_column("Covered", justify="right")
    table.add_column("Percent", justify="right")
    colours = {"low": "red", "medium": "yellow", "high": "green"}
    levels = report.levels()
    for metric, summary in report.summary.items():
        table.add_row(
            metric,
            f"{summary.covered}/{summary.total}",
            f"{summary.pct:.2f}%",
            style=colours[levels[metric]],
        )
    console.print(table)


def write_summary(path: str, reporter: Reporter) -> None:
    """Write run totals, captured failures and coverage levels as JSON."""
    failures = [
        entry.to_dict() for _session_id, entries in reporter.errors.drain_all() for entry in entries
    ]
    summary = {
        "totals": reporter.totals.to_dict(),
        "fatal": reporter.has_errors,
        "failures": failures,
        "coverage": reporter.coverage_report.to_dict(),
    }
    Path(path).write_text(json.dumps(summary, indent=2), encoding="utf-8")
    logger.info("Wrote run summary to %s", path)


def run_replay(args: argparse.Namespace, config: ReporterConfig) -> int:
    if args.file:
        config.file = args.file
    if args.mode:
        config.mode = args.mode.lower()
    reporter = Reporter(config)
    dispatcher = EventDispatcher()
    reporter.register(dispatcher)
    EventLogReplayer.from_file(args.events).replay(dispatcher)
    if reporter.totals is None:
        logger.warning("Event log ended without run_end; finalizing anyway")
        reporter.run_end()
    if args.summary:
        write_summary(args.summary, reporter)
    if reporter.totals.failed or reporter.has_errors:
        return EXIT_FAILED
    return EXIT_OK


def run_merge(args: argparse.Namespace, config: ReporterConfig) -> int:
    merged: dict = {}
    for path in args.inputs:
        bridge = PersistenceBridge(path)
        if not bridge.exists():
            raise ReporterError(f"Coverage file not found or unreadable: {path}")
        merge_coverage(merged, bridge.load())
    report = JsonReport(args.output, config.watermarks).write(merged)
    print_coverage_summary(report, Console())
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = ReporterConfig.from_env()
    setup_logging(config.log_level, args.verbose)
    commands = {"replay": run_replay, "merge": run_merge}
    try:
        return commands[args.command](args, config)
    except ReporterError as e:
        Console(stderr=True, highlight=False).print(Text.assemble(("error: ", "red"), str(e)))
        return EXIT_ERROR
