"""Initialisation of a puzzle year.

Setting up a year entails:

- configuring the input, implementation and day template paths as requested
- bootstrapping a new project in the implementation directory if it is new
- listing the input directory in the implementation's ``.gitignore`` when
  it lives inside the implementation directory

The caller owns persistence: ``config`` is mutated in place and should be
saved afterwards.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from aoctool.config import Config, PathOpts
from aoctool.utils import ensure_dir, print_step, print_success, strict_subpath

from .bootstrap import ProjectBootstrapper, UvBootstrapper


def _ensure_path(desired: Path | None, configured: Path | None) -> Path | None:
    """Return the value to store for one path role.

    A path that is already configured always wins. Otherwise a desired path
    is created if missing and stored resolved.
    """
    if desired is None or configured is not None:
        return configured
    return ensure_dir(desired)


def _planned_implementation(config: Config, year: int, path_opts: PathOpts) -> Path:
    """Return the implementation directory *year* will have after path setup."""
    paths = config.paths.get(year)
    if paths is not None and paths.implementation is not None:
        return paths.implementation
    if path_opts.implementation is not None:
        return path_opts.implementation
    return config.implementation(year)


def append_gitignore(implementation: Path, relative: Path) -> Path:
    """Append *relative* as a line of ``<implementation>/.gitignore``.

    The file is created if absent. Existing lines are not inspected, so
    calling this twice leaves two identical lines.
    """
    gitignore = implementation / ".gitignore"
    with gitignore.open("a", encoding="utf-8") as fh:
        fh.write(f"{relative.as_posix()}\n")
    print_step(f"Added {relative.as_posix()} to {gitignore}")
    return gitignore


def initialize_year(
    config: Config,
    year: int,
    path_opts: PathOpts | None = None,
    *,
    bootstrapper: ProjectBootstrapper | None = None,
) -> None:
    """Initialise *year*.

    Args:
        config: Configuration to update in place.
        year: Puzzle year.
        path_opts: Paths requested by the user; roles left ``None`` keep
            their configured or default value.
        bootstrapper: Creates the implementation project. Defaults to
            ``UvBootstrapper``.
    """
    path_opts = path_opts or PathOpts()

    # Checked before any directory is created: setting up the paths below
    # may create the implementation directory as a side effect.
    implementation_existed = _planned_implementation(config, year, path_opts).exists()

    paths = config.year_paths(year)
    paths.input_files = _ensure_path(path_opts.input_files, paths.input_files)
    paths.implementation = _ensure_path(path_opts.implementation, paths.implementation)
    paths.day_template = _ensure_path(path_opts.day_template, paths.day_template)

    impl_path = config.implementation(year)

    if not implementation_existed:
        if bootstrapper is None:
            bootstrapper = UvBootstrapper()
        bootstrapper.bootstrap(impl_path, f"aoc{year}")

        src_path = impl_path / "src"
        if src_path.is_dir():
            shutil.rmtree(src_path)

    relative_inputs = strict_subpath(config.input_files(year), impl_path)
    if relative_inputs is not None:
        append_gitignore(impl_path, relative_inputs)

    print_success(f"Initialised {year} in {impl_path}")
