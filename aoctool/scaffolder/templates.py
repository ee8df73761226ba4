"""Jinja2 rendering of day templates.

Provides the TemplateRenderer class which loads templates from a year's
template cache and renders them with the day's context. Placeholders use
single braces by default (``{day}``, ``{package_name}``); a literal brace is
written inside ``{% raw %}...{% endraw %}``.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any, NamedTuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError
from pydantic import BaseModel, Field

from aoctool.errors import AocToolError
from aoctool.utils import print_step


class DayTemplate(NamedTuple):
    """A cached template file and where its rendering goes in a day directory.

    ``destination`` may contain ``str.format`` fields taken from the context.
    """

    name: str
    destination: str


DAY_TEMPLATES: tuple[DayTemplate, ...] = (
    DayTemplate("pyproject.toml", "pyproject.toml"),
    DayTemplate("lib.py", "src/{package_name}/__init__.py"),
    DayTemplate("main.py", "src/{package_name}/__main__.py"),
)

TEMPLATE_NAMES: tuple[str, ...] = tuple(template.name for template in DAY_TEMPLATES)


class TemplateRenderError(AocToolError):
    """Raised when a template fails to parse or render."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        super().__init__(f"template error for {template}: {reason}")


class DayContext(BaseModel):
    """Variables available inside day templates."""

    day: int = Field(..., ge=1, le=25)
    year: int = Field(..., ge=2015)
    package_name: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders cached day templates into a new day directory.

    Undefined variables are errors rather than empty strings, so a typo in a
    template surfaces as ``TemplateRenderError`` instead of a silently broken
    file.
    """

    def __init__(
        self,
        template_dir: str | Path,
        variable_start: str = "{",
        variable_end: str = "}",
    ) -> None:
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            variable_start_string=variable_start,
            variable_end_string=variable_end,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a single cached template with the provided context.

        Raises:
            TemplateRenderError: On a syntax error, an undefined variable or
                any other Jinja2 failure, naming the offending template.
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(template_name, str(exc)) from exc

    def render_into(
        self,
        destination: str | Path,
        context: dict[str, Any],
        templates: Iterable[DayTemplate] = DAY_TEMPLATES,
    ) -> list[Path]:
        """Render every template in *templates* under *destination*.

        Each output file is created exclusively: an existing file raises
        ``FileExistsError`` and is left untouched. Parent directories are
        created as needed.

        Returns:
            List of written file paths, in template order.
        """
        out_base = Path(destination)
        written: list[Path] = []

        for template in templates:
            content = self.render(template.name, context)
            output_file = out_base / template.destination.format(**context)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with output_file.open("x", encoding="utf-8") as fh:
                fh.write(content)
            print_step(f"Rendered {output_file}")
            written.append(output_file)

        return written
