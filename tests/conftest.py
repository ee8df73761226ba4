"""Shared pytest fixtures for the aoctool test suite.

Provides reusable fixtures for:
- An isolated environment (no real config file, no AOC_* variables)
- A temporary year workspace with a minimal manifest
- A ``Config`` pointing every path role into the temporary workspace
- A pre-populated template cache built from the packaged day templates
- Fake template and input sources recording their calls
"""

from __future__ import annotations

import shutil
import textwrap
from pathlib import Path

import pytest

from aoctool.config import Config, YearPaths
from aoctool.scaffolder.store import PACKAGED_TEMPLATE_DIR

MINIMAL_MANIFEST = textwrap.dedent(
    """\
    [project]
    name = "aoc2023"
    version = "0.1.0"

    [tool.uv.workspace]
    members = []
    """
)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the user's config file and AOC_* variables."""
    for var in ("AOC_SESSION", "AOC_TEMPLATE_BASE_URL", "AOC_WEBSITE_URL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("AOC_CONFIG", str(tmp_path / "home" / "config.json"))


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Implementation directory containing only a minimal manifest."""
    impl = tmp_path / "aoc2023"
    impl.mkdir()
    (impl / "pyproject.toml").write_text(MINIMAL_MANIFEST, encoding="utf-8")
    return impl.resolve()


@pytest.fixture
def config(workspace: Path, tmp_path: Path) -> Config:
    """Config for 2023 with every path role inside the temporary directory."""
    return Config(
        session="test-session",
        paths={
            2023: YearPaths(
                implementation=workspace,
                input_files=workspace / "inputs",
                day_template=tmp_path / "templates",
            )
        },
    )


@pytest.fixture
def template_cache(config: Config) -> Path:
    """The 2023 template cache, filled with the shipped day templates."""
    cache = config.day_template(2023)
    shutil.copytree(PACKAGED_TEMPLATE_DIR, cache)
    return cache


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakeTemplateSource:
    """Serves templates from a dict and records the names requested."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files = files or {}
        self.requested: list[str] = []

    def retrieve(self, name: str) -> bytes:
        self.requested.append(name)
        return self.files[name]


class FakeInputSource:
    """Records ``get_input`` calls instead of downloading anything."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def get_input(self, year: int, day: int) -> Path:
        self.calls.append((year, day))
        return Path(f"input-{year}-{day:02}.txt")


UNPACKAGED_MANIFEST = textwrap.dedent(
    """\
    [project]
    name = "{name}"
    version = "0.1.0"
    requires-python = ">=3.11"
    dependencies = []
    """
)


class FakeBootstrapper:
    """Writes the skeleton of ``uv init --app --no-package``.

    With ``with_src=True`` it also leaves a ``src/<name>`` package behind, as
    packaged project templates do.
    """

    def __init__(self, with_src: bool = False) -> None:
        self.with_src = with_src
        self.calls: list[tuple[Path, str]] = []

    def bootstrap(self, path: Path, name: str) -> None:
        self.calls.append((path, name))
        path.mkdir(parents=True, exist_ok=True)
        (path / "pyproject.toml").write_text(
            UNPACKAGED_MANIFEST.format(name=name), encoding="utf-8"
        )
        (path / "main.py").write_text("def main():\n    pass\n", encoding="utf-8")
        (path / ".gitignore").write_text(".venv\n", encoding="utf-8")
        if self.with_src:
            (path / "src" / name).mkdir(parents=True)
            (path / "src" / name / "__init__.py").write_text("", encoding="utf-8")


@pytest.fixture
def shipped_templates() -> dict[str, bytes]:
    """Contents of the packaged day templates keyed by template name."""
    return {
        path.name: path.read_bytes()
        for path in PACKAGED_TEMPLATE_DIR.iterdir()
        if path.is_file()
    }


@pytest.fixture
def template_source(shipped_templates: dict[str, bytes]) -> FakeTemplateSource:
    return FakeTemplateSource(shipped_templates)


@pytest.fixture
def input_source() -> FakeInputSource:
    return FakeInputSource()


@pytest.fixture
def bootstrapper() -> FakeBootstrapper:
    return FakeBootstrapper()
