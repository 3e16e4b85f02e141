"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from alpine_phenology import __version__
from alpine_phenology.config import get_settings
from alpine_phenology.errors import PhenologyError
from alpine_phenology.flows.analyze import (
    analyze_all,
    load_calendar,
    load_station,
    normalize_station,
)
from alpine_phenology.flows.build import build_all
from alpine_phenology.indices import growing_season_bounds, growing_season_envelope
from alpine_phenology.reference.thresholds import DEFAULT_THRESHOLDS


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="alpine-phenology",
        description="Climate indices and seed-set statistics for an alpine phenology study",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_dirs(sub: argparse.ArgumentParser, data: bool = True) -> None:
        if data:
            sub.add_argument(
                "--data-dir",
                type=Path,
                default=None,
                help="Directory holding the input files (default: data_dir from settings)",
            )
        sub.add_argument(
            "--output-dir",
            type=Path,
            default=None,
            help="Directory for tables, figures and reports (default: output_dir from settings)",
        )

    # 'analyze' command - inputs -> stored tables
    add_dirs(subparsers.add_parser("analyze", help="Derive climate indices and statistics"))

    # 'build' command - stored tables -> figures and report
    add_dirs(subparsers.add_parser("build", help="Render figures and the HTML report"), data=False)

    # 'run' command - analyze then build
    add_dirs(subparsers.add_parser("run", help="Analyze the inputs and build the report"))

    # 'calibrate' command - growing-season envelope for the analysis window
    calibrate_parser = subparsers.add_parser(
        "calibrate", help="Show growing-season bounds per year and their envelope"
    )
    calibrate_parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the input files (default: data_dir from settings)",
    )

    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_analyze(args: argparse.Namespace) -> int:
    """Handle the 'analyze' command."""
    result = analyze_all(data_dir=args.data_dir, output_dir=args.output_dir)
    print(f"Analyzed {result['years']} year(s), wrote {len(result['tables'])} table(s).")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the 'build' command."""
    result = build_all(output_dir=args.output_dir)
    if result["report"] is None:
        print("No tables found. Run 'alpine-phenology analyze' first.", file=sys.stderr)
        return 1
    print(f"Report: {result['report']}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the 'run' command: analyze then build."""
    print("Analyzing...")
    analyze_all(data_dir=args.data_dir, output_dir=args.output_dir)

    print("Building report...")
    result = build_all(output_dir=args.output_dir)

    print(f"Done. Report: {result['report']}")
    return 0


def cmd_calibrate(args: argparse.Namespace) -> int:
    """Handle the 'calibrate' command."""
    settings = get_settings()
    if args.data_dir is not None:
        settings = settings.model_copy(update={"data_dir": args.data_dir})

    raw = load_station(settings.input_path(settings.station_file))
    calendar_path = settings.input_path(settings.calendar_file) if settings.calendar_file else None
    series_by_year = normalize_station(raw, load_calendar(calendar_path, raw))

    bounds = growing_season_bounds(series_by_year, DEFAULT_THRESHOLDS)
    for year in sorted(series_by_year):
        found = bounds.get(year)
        if found is None:
            print(f"{year}: no growing season")
        else:
            print(f"{year}: start day {found.start_doy}, end day {found.end_doy}")

    envelope = growing_season_envelope(bounds)
    if envelope is None:
        print("Envelope: undefined (no year has a growing season)")
    else:
        print(f"Envelope: day {envelope[0]} to day {envelope[1]}")
    print(
        f"Configured analysis window: day {DEFAULT_THRESHOLDS.window_first_doy} "
        f"to day {DEFAULT_THRESHOLDS.window_last_doy}"
    )
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Data directory: {settings.data_dir}")
    print(f"Output directory: {settings.output_dir}")
    print(f"Debug: {settings.debug}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    if args.debug or get_settings().debug:
        logging.basicConfig(level=logging.DEBUG)

    commands = {
        "analyze": cmd_analyze,
        "build": cmd_build,
        "run": cmd_run,
        "calibrate": cmd_calibrate,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if not handler:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except PhenologyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
