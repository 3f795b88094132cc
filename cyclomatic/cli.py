"""
Command-line interface for the complexity analyzer.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from cyclomatic import __version__
from cyclomatic.core.config import Config, dump_default_config
from cyclomatic.core.engine import AnalysisEngine
from cyclomatic.reporting import format_json, format_text


CONFIG_FILE = ".cyclomatic.yaml"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cyclomatic",
        description="Find the cyclomatic complexity of Rust source files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cyclomatic tree src/main.rs              # Per-function decision points
  cyclomatic graph src/lib.rs              # File-level E - N + 2P
  cyclomatic tree src --format json        # Every .rs file below src/
  cyclomatic tree . --max-complexity 10    # Exit 2 above the threshold
  cyclomatic init                          # Write a default config file
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for mode, help_text in (
        ("tree", "Report decision points per function and method"),
        ("graph", "Report the structural graph metric per file"),
    ):
        sub = subparsers.add_parser(mode, help=help_text)
        sub.add_argument("path", help="Rust file or directory to analyze")
        sub.add_argument("-c", "--config", dest="config_path", help="Path to YAML/JSON config file")
        sub.add_argument(
            "-f", "--format",
            choices=["text", "json"],
            help="Output format (overrides config)",
        )
        sub.add_argument("-o", "--output", help="Write output to file instead of stdout")
        sub.add_argument(
            "--max-complexity",
            type=int,
            help="Exit with status 2 when a result exceeds this value",
        )
        sub.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )
    return parser


def _configure_logging(config: Config, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def cmd_analyze(args: argparse.Namespace) -> int:
    config = Config.load(args.config_path).override(
        analysis={"mode": args.command},
        reporting={"format": args.format} if args.format else None,
        thresholds=(
            {"max_complexity": args.max_complexity} if args.max_complexity is not None else None
        ),
    )
    _configure_logging(config, args.verbose)

    engine = AnalysisEngine(config)
    reports = engine.analyze(args.path)

    if config.reporting().get("format", "text") == "json":
        output = format_json(reports) + "\n"
    else:
        output = format_text(reports)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        print(output, end="")

    if engine.exceeding(reports):
        return 2
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    if os.path.exists(CONFIG_FILE) and not args.force:
        print(f"Configuration file {CONFIG_FILE} already exists.")
        print("Use --force to overwrite.")
        return 1

    Path(CONFIG_FILE).write_text(dump_default_config(), encoding="utf-8")
    print(f"Created configuration file: {CONFIG_FILE}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command in ("tree", "graph"):
            return cmd_analyze(args)
        if args.command == "init":
            return cmd_init(args)
        parser.print_help()
        return 0

    except KeyboardInterrupt:
        print("\nAnalysis interrupted.")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
