"""
Event bindings for the todo list page.

Each ``bind_*`` function registers handlers on a ``TodoPage``:

    bind_completion_toggle  input[type="checkbox"] change  → class + POST toggle
    bind_inline_edit        li > label dblclick/keyup      → edit, POST update
    bind_delete_reveal      li mouseenter/mouseleave       → show/hide button
    bind_delete             li > button click              → confirm, POST delete

Every network-backed binding applies its optimistic change first and patches
the page from the server response afterwards. Only the success path touches
the page again.
"""

from __future__ import annotations

import logging

from api.models import TodoItemOut
from ui.events import (
    CHANGE, CLICK, DBLCLICK, KEY_ENTER, KEY_ESCAPE, KEYUP, MOUSEENTER, MOUSELEAVE,
    Event,
)
from ui.page import TodoPage

logger = logging.getLogger(__name__)

CHECKBOX = 'input[type="checkbox"]'
LABEL = "li > label"
ITEM = "li"
DELETE_BUTTON = "li > button"


def bind_all(page: TodoPage) -> TodoPage:
    bind_completion_toggle(page)
    bind_inline_edit(page)
    bind_delete_reveal(page)
    bind_delete(page)
    return page


# ── Completion toggle ─────────────────────────────────────────────────────────

def bind_completion_toggle(page: TodoPage) -> None:
    """Two separate change handlers: the class flip, then the request.

    They are kept apart so the visual feedback never waits on, or depends
    on, the request handler.
    """
    completed = page.conventions.completed_class

    def mark_label(event: Event) -> None:
        checkbox = event.target
        for label in checkbox.siblings("label"):
            if checkbox.checked:
                label.add_class(completed)
            else:
                label.remove_class(completed)

    def send_toggle(event: Event) -> None:
        item_id = event.target.get_attr("value")

        def confirmed(item: TodoItemOut) -> None:
            handles = page.registry.get(item.key)
            if handles is None or handles.checkbox is None:
                logger.debug("toggle response for todo %s has no checkbox to update", item.key)
                return
            if item.completed is None:
                logger.debug("toggle response for todo %s carries no state", item.key)
                return
            handles.checkbox.checked = item.completed

        page.submit("toggle", item_id, lambda: page.api.toggle(item_id), confirmed)

    page.dispatcher.on(CHECKBOX, CHANGE, mark_label)
    page.dispatcher.on(CHECKBOX, CHANGE, send_toggle)


# ── Inline edit ───────────────────────────────────────────────────────────────

def bind_inline_edit(page: TodoPage) -> None:
    """Viewing → (dblclick) → Editing → (Enter: commit | Escape: revert)."""
    conv = page.conventions

    def begin(event: Event) -> None:
        event.target.set_attr(conv.editable_attr, "true")

    def on_key(event: Event) -> None:
        label = event.target
        if event.key_code == KEY_ENTER:
            label.remove_attr(conv.editable_attr)
            item_id = label.get_attr(conv.item_id_attr)
            markup = label.inner_html

            def confirmed(item: TodoItemOut) -> None:
                handles = page.registry.get(item.key)
                if handles is None or handles.label is None:
                    logger.debug("update response for todo %s has no label to update", item.key)
                    return
                if item.todo is None:
                    logger.debug("update response for todo %s carries no text", item.key)
                    return
                handles.label.inner_html = item.todo

            page.submit("update", item_id, lambda: page.api.update(item_id, markup), confirmed)
        elif event.key_code == KEY_ESCAPE:
            label.remove_attr(conv.editable_attr)
            label.text = label.get_attr(conv.original_attr) or ""

    page.dispatcher.on(LABEL, DBLCLICK, begin)
    page.dispatcher.on(LABEL, KEYUP, on_key)


# ── Delete control ────────────────────────────────────────────────────────────

def bind_delete_reveal(page: TodoPage) -> None:
    invisible = page.conventions.invisible_class

    def reveal(event: Event) -> None:
        for button in event.target.children("button"):
            button.remove_class(invisible)

    def conceal(event: Event) -> None:
        for button in event.target.children("button"):
            button.add_class(invisible)

    page.dispatcher.on(ITEM, MOUSEENTER, reveal)
    page.dispatcher.on(ITEM, MOUSELEAVE, conceal)


def bind_delete(page: TodoPage) -> None:
    def on_click(event: Event) -> None:
        if not page.confirm(page.conventions.confirm_message):
            return
        item_id = event.target.get_attr("value")

        def confirmed(item: TodoItemOut) -> None:
            handles = page.registry.get(item.key)
            if handles is None:
                logger.debug("delete response for todo %s matches no item", item.key)
                return
            handles.item.remove()
            page.registry.forget(item.key)

        page.submit("delete", item_id, lambda: page.api.delete(item_id), confirmed)

    page.dispatcher.on(DELETE_BUTTON, CLICK, on_click)
