"""
Render todo items into the markup the bindings expect.

Used for previews and test fixtures. Item text is stored as label markup
(the update binding sends the label's inner HTML), so it is emitted
unescaped inside the label and tag-stripped inside ``data-original``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape

from api.models import TodoItemOut
from utils.config import MarkupConventions

TEMPLATES_DIR = Path(__file__).parent / "templates"

_env: Environment | None = None


def get_environment() -> Environment:
    global _env
    if _env is None:
        _env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
        )
    return _env


def render_todo_list(
    items: Iterable[TodoItemOut | Mapping[str, Any]],
    conventions: MarkupConventions | None = None,
) -> str:
    """Render ``items`` as a ``<ul>`` of bindable list items.

    Args:
        items: Response models or raw dicts shaped like
            ``{"id": {"value": 1}, "todo": "...", "completed": False}``.
        conventions: Markup names; defaults to ``MarkupConventions()``.
    """
    models = [
        item if isinstance(item, TodoItemOut) else TodoItemOut.model_validate(item)
        for item in items
    ]
    template = get_environment().get_template("todo_list.html")
    return template.render(items=models, conventions=conventions or MarkupConventions())
