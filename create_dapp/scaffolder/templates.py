"""Jinja2 rendering of the scaffolder's own text snippets.

Template *projects* are copied verbatim by the materializer and are never
rendered.  The snippets under ``scaffolder/snippets/`` are the only Jinja2
templates: the base ``.env`` block and the console messages printed around
dependency installation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


_DEFAULT_SNIPPET_DIR = Path(__file__).parent / "snippets"


class TemplateRenderer:
    """Renders ``.j2`` snippets with a context dictionary."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_SNIPPET_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single snippet with the provided context.

        Args:
            template_path: Path relative to the snippet directory (e.g.
                ``"env.j2"``).
            context: Dictionary of variables available inside the snippet.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)
