"""
TodoPage — a bound, headless todo list page.

Ties together the parsed ``Document``, the ``EventDispatcher``, the
``ItemRegistry`` and a ``TodoApiClient``. Network calls are submitted with
``submit()``: the blocking request runs on a worker thread and the success
handler is called back on the event-loop thread, so every DOM mutation
happens on one thread. Failures are logged and otherwise ignored; nothing is
rolled back and nothing is retried.

Usage::

    async def session():
        page = TodoPage.from_html(markup, TodoApiClient("http://localhost:3000"))
        bind_all(page)
        page.click_checkbox("42")
        await page.drain()
"""

from __future__ import annotations

import asyncio
import logging
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Protocol, TypeVar

from api.models import TodoItemOut
from ui.document import Document, Element
from ui.events import (
    CHANGE, CLICK, DBLCLICK, KEY_ENTER, KEY_ESCAPE, KEYUP, MOUSEENTER, MOUSELEAVE,
    Event, EventDispatcher,
)
from ui.registry import ItemHandles, ItemRegistry
from utils.config import DEFAULT_MAX_IN_FLIGHT, MarkupConventions

logger = logging.getLogger(__name__)

T = TypeVar("T")

ConfirmFn = Callable[[str], bool]


class TodoApi(Protocol):
    def toggle(self, item_id: Any) -> TodoItemOut: ...
    def update(self, item_id: Any, todo: str) -> TodoItemOut: ...
    def delete(self, item_id: Any) -> TodoItemOut: ...


def _decline(message: str) -> bool:
    return False


class TodoPage:
    """A rendered todo list plus the machinery its bindings run on."""

    def __init__(
        self,
        document: Document,
        api: TodoApi,
        conventions: MarkupConventions | None = None,
        confirm: ConfirmFn | None = None,
        executor: Executor | None = None,
        max_in_flight: int | None = None,
    ) -> None:
        self.document = document
        self.api = api
        self.conventions = conventions or MarkupConventions()
        # Without a prompt every delete is declined
        self.confirm: ConfirmFn = confirm or _decline
        self.dispatcher = EventDispatcher(document)
        self.registry = ItemRegistry.from_document(document, self.conventions)
        if max_in_flight is None:
            # One worker per pooled connection of the client
            max_in_flight = getattr(api, "max_in_flight", DEFAULT_MAX_IN_FLIGHT)
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_in_flight, thread_name_prefix="todo-api",
        )
        self._owns_executor = executor is None
        self._pending: set[asyncio.Future] = set()

    @classmethod
    def from_html(cls, markup: str, api: TodoApi, **kwargs: Any) -> "TodoPage":
        return cls(Document.from_html(markup), api, **kwargs)

    # ── Requests ──────────────────────────────────────────────────────────────

    def submit(
        self,
        action: str,
        item_id: Any,
        request: Callable[[], T],
        on_success: Callable[[T], None],
    ) -> asyncio.Future:
        """Run ``request`` off the loop and call ``on_success`` back on it.

        Must be called from a coroutine or callback running on the event
        loop. Returns immediately; the returned future resolves to the
        request's result (or its exception).
        """
        loop = asyncio.get_running_loop()
        started = time.monotonic()
        future = loop.run_in_executor(self._executor, request)
        self._pending.add(future)
        logger.debug("submitted %s for todo %s", action, item_id,
                     extra={"action": action, "item_id": str(item_id)})

        def settle(done: asyncio.Future) -> None:
            self._pending.discard(done)
            if done.cancelled():
                return
            exc = done.exception()
            if exc is not None:
                logger.warning("%s request for todo %s failed: %s", action, item_id, exc,
                               extra={"action": action, "item_id": str(item_id)})
                return
            logger.debug(
                "%s for todo %s confirmed", action, item_id,
                extra={
                    "action": action,
                    "item_id": str(item_id),
                    "duration_ms": round((time.monotonic() - started) * 1000, 1),
                },
            )
            on_success(done.result())

        future.add_done_callback(settle)
        return future

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every submitted request and its callback has run."""
        while self._pending:
            await asyncio.wait(set(self._pending))
            # Done callbacks are scheduled with call_soon; let them run.
            await asyncio.sleep(0)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    # ── Lookups ───────────────────────────────────────────────────────────────

    def item(self, item_id: Any) -> ItemHandles:
        handles = self.registry.get(item_id)
        if handles is None:
            raise KeyError(f"no todo item {item_id!r} on the page")
        return handles

    # ── User gestures ─────────────────────────────────────────────────────────

    def dispatch(self, target: Element, event_type: str, key_code: int | None = None) -> Event:
        return self.dispatcher.dispatch(target, event_type, key_code)

    def click_checkbox(self, item_id: Any) -> Event:
        """Flip the checkbox the way a click does, then fire ``change``."""
        checkbox = _require(self.item(item_id).checkbox, "checkbox", item_id)
        checkbox.checked = not checkbox.checked
        return self.dispatch(checkbox, CHANGE)

    def start_edit(self, item_id: Any) -> Event:
        label = _require(self.item(item_id).label, "label", item_id)
        return self.dispatch(label, DBLCLICK)

    def edit_label(self, item_id: Any, markup: str) -> Event:
        """Double-click the label, type ``markup`` into it and press Enter."""
        label = _require(self.item(item_id).label, "label", item_id)
        self.dispatch(label, DBLCLICK)
        label.inner_html = markup
        return self.dispatch(label, KEYUP, KEY_ENTER)

    def cancel_edit(self, item_id: Any, markup: str | None = None) -> Event:
        """Double-click the label, optionally type, then press Escape."""
        label = _require(self.item(item_id).label, "label", item_id)
        self.dispatch(label, DBLCLICK)
        if markup is not None:
            label.inner_html = markup
        return self.dispatch(label, KEYUP, KEY_ESCAPE)

    def hover(self, item_id: Any) -> Event:
        return self.dispatch(self.item(item_id).item, MOUSEENTER)

    def unhover(self, item_id: Any) -> Event:
        return self.dispatch(self.item(item_id).item, MOUSELEAVE)

    def click_delete(self, item_id: Any) -> Event:
        button = _require(self.item(item_id).delete_button, "delete button", item_id)
        return self.dispatch(button, CLICK)


def _require(element: Element | None, what: str, item_id: Any) -> Element:
    if element is None:
        raise KeyError(f"todo item {item_id!r} has no {what}")
    return element
