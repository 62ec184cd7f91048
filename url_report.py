#!/usr/bin/env python
"""Command-line interface for the per-day URL hit report.

Usage examples:
  # Report for a log of `<epoch-seconds>|<url>` lines
  python url_report.py access.log

  # Custom settings (delimiter, day order, encoding) and debug logging
  python url_report.py access.log --config configs/report.yml --verbose

Exit codes:
  0 success
  1 unreadable log file, invalid settings or interrupt
  2 missing or invalid arguments
"""
from __future__ import annotations
import argparse, logging, pathlib, sys
from typing import Optional, TextIO
from urlhits_core.aggregator import HitAggregator, HitIndex
from urlhits_core.config import ReportSettings, load_settings
from urlhits_core.exceptions import UrlHitsError
from urlhits_core.log_parser import read_log_lines
from urlhits_core.pipeline_timer import PipelineTimer
from urlhits_core.reporter import render

logger = logging.getLogger("urlhits")


def configure_logging(verbose: bool) -> None:
    """Diagnostics go to stderr; stdout carries only the report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)-8s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def run_report(log_path: pathlib.Path, settings: ReportSettings, out: Optional[TextIO] = None) -> HitIndex:
    """Aggregate the whole log, then write the report once."""
    timer = PipelineTimer()
    aggregator = HitAggregator(settings.delimiter, settings.skip_blank_lines)

    with timer.phase('parse'):
        index = aggregator.process_lines(read_log_lines(log_path, settings.encoding, settings.decode_errors))

    with timer.phase('report'):
        render(index, out, settings.day_order)

    timer.log_summary(logger)
    return index


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="url_report",
        description="Count URL hits per UTC day from a `<epoch-seconds>|<url>` log and print a report",
    )
    p.add_argument("log_file", type=pathlib.Path, help="Path to the hit log file")
    p.add_argument("--config", type=pathlib.Path, default=None, help="YAML settings file (delimiter, day_order, skip_blank_lines, encoding, decode_errors)")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        settings = load_settings(args.config)
        logger.debug("settings: %s", settings)
        run_report(args.log_file, settings)
        return 0
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 1
    except UrlHitsError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
