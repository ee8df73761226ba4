"""aoctool: scaffolding for Advent of Code workspaces."""

__version__ = "0.1.0"
