"""
Item identifier → element handles.

The registry is built once from the rendered page. Response handlers look
items up here by the identifier the server returned instead of building
``#todo_<id>`` selectors and re-querying the document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ui.document import Document, Element
from utils.config import MarkupConventions

logger = logging.getLogger(__name__)


@dataclass
class ItemHandles:
    """Stable references to the elements of one rendered todo item."""

    item_id: str
    item: Element
    checkbox: Element | None = None
    label: Element | None = None
    delete_button: Element | None = None


class ItemRegistry:
    def __init__(self) -> None:
        self._items: dict[str, ItemHandles] = {}

    @classmethod
    def from_document(cls, document: Document,
                      conventions: MarkupConventions | None = None) -> "ItemRegistry":
        """Index every ``li`` that carries an item identifier.

        The identifier is read from the checkbox ``value``, falling back to
        the label's identifier attribute and then the button ``value``.
        """
        conventions = conventions or MarkupConventions()
        registry = cls()
        for li in document.select("li"):
            checkbox = _first(li.children('input[type="checkbox"]'))
            label = _first(li.children("label"))
            button = _first(li.children("button"))

            item_id = None
            if checkbox is not None:
                item_id = checkbox.get_attr("value")
            if item_id is None and label is not None:
                item_id = label.get_attr(conventions.item_id_attr)
            if item_id is None and button is not None:
                item_id = button.get_attr("value")
            if item_id is None:
                continue

            if checkbox is not None and checkbox.id != conventions.checkbox_id(item_id):
                logger.debug("checkbox for todo %s has unexpected id %r", item_id, checkbox.id)
            registry.add(ItemHandles(item_id, li, checkbox, label, button))
        return registry

    def add(self, handles: ItemHandles) -> None:
        self._items[handles.item_id] = handles

    def get(self, item_id: Any) -> ItemHandles | None:
        """Return live handles for ``item_id`` or None if unknown or detached."""
        handles = self._items.get(str(item_id))
        if handles is None:
            return None
        if not handles.item.is_attached:
            self.forget(item_id)
            return None
        return handles

    def forget(self, item_id: Any) -> ItemHandles | None:
        return self._items.pop(str(item_id), None)

    def __contains__(self, item_id: Any) -> bool:
        return self.get(item_id) is not None

    def __len__(self) -> int:
        return len(self._items)


def _first(elements: list[Element]) -> Element | None:
    return elements[0] if elements else None
