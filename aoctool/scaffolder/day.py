"""Initialisation of a single puzzle day.

Setting up a day entails:

- making sure we are in a workspace (the year's ``pyproject.toml`` exists)
- making sure the day templates are cached
- creating the ``dayNN`` package directory
- registering it as a workspace member
- rendering the templates into it
- downloading the puzzle input

Nothing is rolled back when a step fails. Re-running with ``skip_create``
or ``skip_input`` is the way to finish a partially completed day.
"""

from __future__ import annotations

from pathlib import Path

from aoctool.config import Config
from aoctool.utils import print_step, print_success
from aoctool.website import InputFetcher, InputSource

from .manifest import add_member, load_manifest
from .store import TemplateSource, ensure_template_dir, template_source_for
from .templates import DAY_TEMPLATES, TEMPLATE_NAMES, DayContext, TemplateRenderer


def day_name(day: int) -> str:
    """Return the package name for *day*, e.g. ``day05``."""
    return f"day{day:02}"


def render_templates_into(
    config: Config,
    day_dir: Path,
    template_dir: Path,
    year: int,
    day: int,
) -> list[Path]:
    """Render the cached day templates into *day_dir*."""
    context = DayContext(day=day, year=year, package_name=day_name(day))
    renderer = TemplateRenderer(
        template_dir,
        variable_start=config.template.variable_start,
        variable_end=config.template.variable_end,
    )
    return renderer.render_into(day_dir, context.model_dump(), DAY_TEMPLATES)


def initialize_day(
    config: Config,
    year: int,
    day: int,
    *,
    skip_create: bool = False,
    skip_input: bool = False,
    template_source: TemplateSource | None = None,
    input_source: InputSource | None = None,
) -> None:
    """Initialise *day* of *year*.

    Args:
        config: Loaded configuration; only read, never modified.
        year: Puzzle year.
        day: Puzzle day (1-25).
        skip_create: Do not create the day package.
        skip_input: Do not download the puzzle input.
        template_source: Where missing templates come from. Defaults to
            ``template_source_for(config)``.
        input_source: Input downloader. Defaults to ``InputFetcher.from_config``.

    Raises:
        ValueError: If *day* is outside 1-25.
        ManifestNotFoundError: If the year's workspace manifest is missing.
    """
    if not 1 <= day <= 25:
        raise ValueError(f"day must be between 1 and 25, got {day}")

    manifest_path, manifest = load_manifest(config, year)

    if not skip_create:
        # Templates first: a failed download must not leave a half-made day.
        if template_source is None:
            template_source = template_source_for(config)
        template_dir = ensure_template_dir(
            config.day_template(year), TEMPLATE_NAMES, template_source
        )

        name = day_name(day)
        day_dir = config.implementation(year) / name
        (day_dir / "src" / name).mkdir(parents=True, exist_ok=True)
        print_step(f"Created {day_dir}")

        add_member(manifest_path, manifest, name)
        render_templates_into(config, day_dir, template_dir, year, day)
        print_success(f"Created {name} for {year}")

    if not skip_input:
        if input_source is None:
            input_source = InputFetcher.from_config(config, year)
        input_source.get_input(year, day)
