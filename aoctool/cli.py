"""Command-line interface for aoctool.

Usage::

    aoctool init-year 2023 --implementation ./aoc2023
    aoctool init 5 --year 2023
    aoctool init 5 --year 2023 --skip-create
    aoctool input 5 --year 2023
    aoctool config --session <token>
    aoctool status --year 2023
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from rich.markup import escape

from aoctool import __version__
from aoctool.config import Config, PathOpts, default_config_path
from aoctool.errors import AocToolError
from aoctool.scaffolder.day import initialize_day
from aoctool.scaffolder.manifest import ManifestNotFoundError, load_manifest, workspace_members
from aoctool.scaffolder.year import initialize_year
from aoctool.utils import console, print_error, print_success, print_summary_table, print_warning
from aoctool.website import InputFetcher


def _add_year_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--year", "-y",
        type=int,
        default=datetime.now().year,
        help="Puzzle year (default: the current year)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aoctool",
        description="Scaffold Advent of Code workspaces and days",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  aoctool init-year 2023 --implementation ./aoc2023\n"
            "  aoctool init 5 --year 2023\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: {default_config_path()})",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    init_year = commands.add_parser("init-year", help="Set up paths and the workspace for a year")
    init_year.add_argument("year", type=int, help="Puzzle year")
    init_year.add_argument("--input-files", type=Path, default=None,
                           help="Path to input files (default: <implementation>/inputs)")
    init_year.add_argument("--implementation", type=Path, default=None,
                           help="Path to this year's implementation directory (default: $(pwd))")
    init_year.add_argument("--day-templates", type=Path, default=None,
                           help="Path to this year's day template files")

    init_day = commands.add_parser("init", help="Create a day package and fetch its input")
    init_day.add_argument("day", type=int, help="Puzzle day (1-25)")
    _add_year_option(init_day)
    init_day.add_argument("--skip-create", action="store_true",
                          help="Do not create the day package")
    init_day.add_argument("--skip-input", action="store_true",
                          help="Do not download the puzzle input")

    get_input = commands.add_parser("input", help="Download a day's puzzle input")
    get_input.add_argument("day", type=int, help="Puzzle day (1-25)")
    _add_year_option(get_input)

    config_cmd = commands.add_parser("config", help="Show or update the configuration")
    config_cmd.add_argument("--session", default=None, help="Store the adventofcode.com session token")
    config_cmd.add_argument("--template-base-url", default=None,
                            help="Base URL the day templates are fetched from")

    status = commands.add_parser("status", help="Show a year's paths and workspace members")
    _add_year_option(status)

    return parser


def _show_status(config: Config, year: int) -> None:
    data = {
        "implementation": str(config.implementation(year)),
        "input files": str(config.input_files(year)),
        "day templates": str(config.day_template(year)),
    }
    try:
        _, manifest = load_manifest(config, year)
    except ManifestNotFoundError as exc:
        print_warning(str(exc))
    else:
        members = workspace_members(manifest)
        data["members"] = ", ".join(members) if members else "(none)"
    print_summary_table(data, title=f"aoctool {year}")


def run(args: argparse.Namespace) -> None:
    """Execute the parsed command. Errors propagate to ``main``."""
    config_path: Path = args.config or default_config_path()
    config = Config.load_or_default(config_path)

    if args.command == "init-year":
        path_opts = PathOpts(
            input_files=args.input_files,
            implementation=args.implementation,
            day_template=args.day_templates,
        )
        initialize_year(config, args.year, path_opts)
        config.save(config_path)
    elif args.command == "init":
        initialize_day(
            config,
            args.year,
            args.day,
            skip_create=args.skip_create,
            skip_input=args.skip_input,
        )
    elif args.command == "input":
        path = InputFetcher.from_config(config, args.year).get_input(args.year, args.day)
        print_success(f"Input ready: {path}")
    elif args.command == "config":
        if args.session is not None:
            config.session = args.session
        if args.template_base_url is not None:
            config.template_base_url = args.template_base_url
        if args.session is not None or args.template_base_url is not None:
            print_success(f"Saved {config.save(config_path)}")
        console.print_json(config.model_dump_json(exclude={"session"}))
    elif args.command == "status":
        _show_status(config, args.year)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``aoctool`` and ``python -m aoctool``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        run(args)
    except (AocToolError, OSError, ValueError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
