"""Unit tests for day template rendering (aoctool.scaffolder.templates).

Tests cover:
- Single-brace placeholder substitution
- Raw blocks for literal braces
- Undefined variables and syntax errors raising TemplateRenderError
- render_into writing every template and refusing to overwrite
- The shipped day templates rendering to valid TOML and Python
"""

from __future__ import annotations

import ast
import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from aoctool.scaffolder.templates import (
    DAY_TEMPLATES,
    TEMPLATE_NAMES,
    DayContext,
    DayTemplate,
    TemplateRenderError,
    TemplateRenderer,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "templates"
    directory.mkdir()
    return directory


def _context(day: int = 7) -> dict:
    return DayContext(day=day, year=2023, package_name=f"day{day:02}").model_dump()


# ---------------------------------------------------------------------------
# DayContext
# ---------------------------------------------------------------------------


class TestDayContext:
    def test_fields(self):
        context = DayContext(day=7, year=2023, package_name="day07")
        assert context.model_dump() == {"day": 7, "year": 2023, "package_name": "day07"}

    @pytest.mark.parametrize("day", [0, 26])
    def test_day_out_of_range(self, day: int):
        with pytest.raises(ValidationError):
            DayContext(day=day, year=2023, package_name="day00")

    def test_empty_package_name_rejected(self):
        with pytest.raises(ValidationError):
            DayContext(day=1, year=2023, package_name="")


# ---------------------------------------------------------------------------
# TemplateRenderer.render
# ---------------------------------------------------------------------------


class TestRender:
    def test_substitutes_placeholders(self, template_dir: Path):
        (template_dir / "t.txt").write_text(
            "day {day} lives in {package_name}\n", encoding="utf-8"
        )
        rendered = TemplateRenderer(template_dir).render("t.txt", _context(7))

        assert rendered == "day 7 lives in day07\n"
        assert "{" not in rendered and "}" not in rendered

    def test_keeps_trailing_newline(self, template_dir: Path):
        (template_dir / "t.txt").write_text("{day}\n", encoding="utf-8")
        assert TemplateRenderer(template_dir).render("t.txt", _context()) == "7\n"

    def test_raw_block_keeps_literal_braces(self, template_dir: Path):
        (template_dir / "t.py").write_text(
            'x = {% raw %}{"a": 1}{% endraw %}  # {package_name}\n', encoding="utf-8"
        )
        rendered = TemplateRenderer(template_dir).render("t.py", _context())
        assert rendered == 'x = {"a": 1}  # day07\n'

    def test_filters_available(self, template_dir: Path):
        (template_dir / "t.txt").write_text('{ "%02d"|format(day) }', encoding="utf-8")
        assert TemplateRenderer(template_dir).render("t.txt", _context(3)) == "03"

    def test_custom_delimiters(self, template_dir: Path):
        (template_dir / "t.txt").write_text("{{ day }} {day}", encoding="utf-8")
        renderer = TemplateRenderer(template_dir, variable_start="{{", variable_end="}}")
        assert renderer.render("t.txt", _context(9)) == "9 {day}"

    def test_undefined_variable(self, template_dir: Path):
        (template_dir / "t.txt").write_text("{missing}", encoding="utf-8")
        with pytest.raises(TemplateRenderError) as excinfo:
            TemplateRenderer(template_dir).render("t.txt", _context())
        assert excinfo.value.template == "t.txt"
        assert "t.txt" in str(excinfo.value)

    def test_syntax_error(self, template_dir: Path):
        (template_dir / "broken.txt").write_text("{% if %}", encoding="utf-8")
        with pytest.raises(TemplateRenderError) as excinfo:
            TemplateRenderer(template_dir).render("broken.txt", _context())
        assert excinfo.value.template == "broken.txt"

    def test_missing_template(self, template_dir: Path):
        with pytest.raises(TemplateRenderError):
            TemplateRenderer(template_dir).render("absent.txt", _context())


# ---------------------------------------------------------------------------
# TemplateRenderer.render_into
# ---------------------------------------------------------------------------


class TestRenderInto:
    def test_writes_each_template(self, template_dir: Path, tmp_path: Path):
        (template_dir / "a.txt").write_text("{day}", encoding="utf-8")
        (template_dir / "b.txt").write_text("{package_name}", encoding="utf-8")
        templates = [
            DayTemplate("a.txt", "a.txt"),
            DayTemplate("b.txt", "src/{package_name}/b.txt"),
        ]
        out = tmp_path / "day07"

        written = TemplateRenderer(template_dir).render_into(out, _context(7), templates)

        assert written == [out / "a.txt", out / "src" / "day07" / "b.txt"]
        assert (out / "a.txt").read_text(encoding="utf-8") == "7"
        assert (out / "src" / "day07" / "b.txt").read_text(encoding="utf-8") == "day07"

    def test_refuses_to_overwrite(self, template_dir: Path, tmp_path: Path):
        (template_dir / "a.txt").write_text("{day}", encoding="utf-8")
        out = tmp_path / "day07"
        out.mkdir()
        (out / "a.txt").write_text("hand written", encoding="utf-8")

        with pytest.raises(FileExistsError):
            TemplateRenderer(template_dir).render_into(
                out, _context(7), [DayTemplate("a.txt", "a.txt")]
            )
        assert (out / "a.txt").read_text(encoding="utf-8") == "hand written"

    def test_render_error_names_template(self, template_dir: Path, tmp_path: Path):
        (template_dir / "good.txt").write_text("{day}", encoding="utf-8")
        (template_dir / "bad.txt").write_text("{nope}", encoding="utf-8")
        templates = [DayTemplate("good.txt", "good.txt"), DayTemplate("bad.txt", "bad.txt")]

        with pytest.raises(TemplateRenderError, match="bad.txt"):
            TemplateRenderer(template_dir).render_into(tmp_path / "out", _context(), templates)


# ---------------------------------------------------------------------------
# Shipped day templates
# ---------------------------------------------------------------------------


class TestShippedTemplates:
    def test_template_names(self):
        assert TEMPLATE_NAMES == ("pyproject.toml", "lib.py", "main.py")
        assert [t.name for t in DAY_TEMPLATES] == list(TEMPLATE_NAMES)

    def test_render_to_valid_files(self, template_cache: Path, tmp_path: Path):
        out = tmp_path / "day05"
        TemplateRenderer(template_cache).render_into(out, _context(5))

        pyproject = tomllib.loads((out / "pyproject.toml").read_text(encoding="utf-8"))
        assert pyproject["project"]["name"] == "day05"
        assert pyproject["project"]["scripts"]["day05"] == "day05.__main__:main"

        init_source = (out / "src" / "day05" / "__init__.py").read_text(encoding="utf-8")
        main_source = (out / "src" / "day05" / "__main__.py").read_text(encoding="utf-8")
        ast.parse(init_source)
        ast.parse(main_source)
        assert "from day05 import part1, part2" in main_source
        assert "input-2023-05.txt" in main_source
        assert "Advent of Code 2023, day 5" in init_source
