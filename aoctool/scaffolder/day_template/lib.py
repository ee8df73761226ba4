"""Advent of Code {year}, day {day}."""

from pathlib import Path


class NoSolutionError(Exception):
    """Raised when the input admits no solution."""


def parse(input_path: Path) -> list[str]:
    return input_path.read_text().splitlines()


def part1(input_path: Path) -> None:
    raise NotImplementedError("part 1, input file: " + str(input_path))


def part2(input_path: Path) -> None:
    raise NotImplementedError("part 2, input file: " + str(input_path))
