"""aoctool scaffolder -- creates per-year workspaces and per-day packages.

Quick usage::

    from aoctool.config import Config, PathOpts
    from aoctool.scaffolder import initialize_day, initialize_year

    config = Config.load_or_default()
    initialize_year(config, 2023, PathOpts(implementation=Path("aoc2023")))
    config.save()
    initialize_day(config, 2023, 5)
"""

from aoctool.scaffolder.day import initialize_day
from aoctool.scaffolder.manifest import ManifestEditor, add_member, load_manifest
from aoctool.scaffolder.store import (
    HttpTemplateSource,
    PackagedTemplateSource,
    ensure_template_dir,
    template_source_for,
)
from aoctool.scaffolder.templates import DAY_TEMPLATES, TemplateRenderer
from aoctool.scaffolder.year import initialize_year

__all__ = [
    "DAY_TEMPLATES",
    "HttpTemplateSource",
    "ManifestEditor",
    "PackagedTemplateSource",
    "TemplateRenderer",
    "add_member",
    "ensure_template_dir",
    "initialize_day",
    "initialize_year",
    "load_manifest",
    "template_source_for",
]
