"""Run the solutions for Advent of Code {year}, day {day}."""

import argparse
from pathlib import Path

from {package_name} import part1, part2

DEFAULT_INPUT = Path("inputs") / "input-{year}-{ "%02d"|format(day) }.txt"


def main() -> None:
    parser = argparse.ArgumentParser(description="Advent of Code {year}, day {day}")
    parser.add_argument("input", type=Path, nargs="?", default=DEFAULT_INPUT)
    parser.add_argument("--no-part1", action="store_true", help="Skip part 1")
    parser.add_argument("--part2", action="store_true", help="Run part 2")
    args = parser.parse_args()

    if not args.no_part1:
        part1(args.input)
    if args.part2:
        part2(args.input)


if __name__ == "__main__":
    main()
