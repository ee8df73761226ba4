"""aoctool configuration.

Typed configuration for the scaffolder. Settings use Pydantic v2 models so
they are validated at construction time and serialised to/from JSON without
boiler-plate. A single ``Config`` instance is loaded by the CLI and passed
explicitly to every initializer; nothing reads configuration from global
state.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

# Empty: day templates come from the copies shipped inside the package.
DEFAULT_TEMPLATE_BASE_URL = ""
DEFAULT_WEBSITE_URL = "https://adventofcode.com"


def default_config_path() -> Path:
    """Return ``$AOC_CONFIG`` or ``~/.config/aoctool/config.json``."""
    override = os.environ.get("AOC_CONFIG")
    if override:
        return Path(override)
    return Path.home() / ".config" / "aoctool" / "config.json"


class YearPaths(BaseModel):
    """Paths configured for a single puzzle year.

    ``None`` means "not configured"; the ``Config`` accessors then fall back
    to defaults derived from the implementation directory.
    """

    input_files: Path | None = None
    implementation: Path | None = None
    day_template: Path | None = None


class PathOpts(BaseModel):
    """Paths requested by the user when initialising a year."""

    input_files: Path | None = Field(
        default=None, description="Directory for input files. Default: <implementation>/inputs"
    )
    implementation: Path | None = Field(
        default=None, description="The year's implementation directory. Default: $(pwd)"
    )
    day_template: Path | None = Field(
        default=None, description="Local cache of day template files"
    )


class TemplateSyntax(BaseModel):
    """Placeholder delimiters used when rendering day templates."""

    variable_start: str = Field(default="{")
    variable_end: str = Field(default="}")


class Config(BaseModel):
    """Global aoctool configuration."""

    session: str = Field(default="", description="adventofcode.com session cookie")
    website_url: str = Field(default=DEFAULT_WEBSITE_URL)
    template_base_url: str = Field(
        default=DEFAULT_TEMPLATE_BASE_URL,
        description="Base URL serving the day templates; empty uses the packaged ones",
    )
    template_timeout: float = Field(default=5.0, gt=0, description="Seconds per template fetch")
    template: TemplateSyntax = Field(default_factory=TemplateSyntax)
    paths: dict[int, YearPaths] = Field(default_factory=dict)

    # ------------------------------------------------------------------
    # Per-year paths
    # ------------------------------------------------------------------

    def year_paths(self, year: int) -> YearPaths:
        """Return the ``YearPaths`` for *year*, creating an empty entry if needed."""
        return self.paths.setdefault(year, YearPaths())

    def implementation(self, year: int) -> Path:
        """Implementation directory for *year*. Defaults to the working directory."""
        paths = self.paths.get(year)
        if paths is not None and paths.implementation is not None:
            return paths.implementation
        return Path.cwd()

    def input_files(self, year: int) -> Path:
        """Input directory for *year*. Defaults to ``<implementation>/inputs``."""
        paths = self.paths.get(year)
        if paths is not None and paths.input_files is not None:
            return paths.input_files
        return self.implementation(year) / "inputs"

    def day_template(self, year: int) -> Path:
        """Day template cache for *year*. Defaults to ``<implementation>/.day-template``."""
        paths = self.paths.get(year)
        if paths is not None and paths.day_template is not None:
            return paths.day_template
        return self.implementation(year) / ".day-template"

    def input_path(self, year: int, day: int) -> Path:
        """Path of the puzzle input file for *year* / *day*."""
        return self.input_files(year) / f"input-{year}-{day:02}.txt"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``default_config_path()``.

        Returns:
            The path where the file was written.
        """
        target = path or default_config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "Config":
        """Load *path* if it exists, otherwise start from defaults.

        Environment overrides from ``from_env`` are applied on top either way.
        """
        target = path or default_config_path()
        config = cls.load(target) if target.exists() else cls()
        return config.with_env_overrides()

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            AOC_SESSION, AOC_TEMPLATE_BASE_URL, AOC_WEBSITE_URL.
        """
        return cls().with_env_overrides()

    def with_env_overrides(self) -> "Config":
        """Return a copy with any ``AOC_*`` environment variables applied."""
        updates: dict[str, str] = {}
        if os.environ.get("AOC_SESSION"):
            updates["session"] = os.environ["AOC_SESSION"]
        if os.environ.get("AOC_TEMPLATE_BASE_URL"):
            updates["template_base_url"] = os.environ["AOC_TEMPLATE_BASE_URL"]
        if os.environ.get("AOC_WEBSITE_URL"):
            updates["website_url"] = os.environ["AOC_WEBSITE_URL"]
        if not updates:
            return self
        return self.model_copy(update=updates)
