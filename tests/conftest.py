"""
Pytest fixtures for the todo UI binding tests.

Provides rendered page markup, a recording fake of the REST client, and a
helper that builds a bound ``TodoPage`` around them. Binding tests drive the
event loop with ``asyncio.run`` and call ``page.drain()`` to wait for
responses.
"""

import sys
import threading
from pathlib import Path
from typing import Any

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from api.client import TodoApiError  # noqa: E402
from api.models import TodoItemOut  # noqa: E402
from ui.bindings import bind_all  # noqa: E402
from ui.page import TodoPage  # noqa: E402
from ui.render import render_todo_list  # noqa: E402

SAMPLE_ITEMS = [
    {"id": {"value": 42}, "todo": "Buy milk", "completed": False},
    {"id": {"value": 7}, "todo": "Walk the <em>dog</em>", "completed": True},
    {"id": {"value": "a1"}, "todo": "Write report", "completed": False},
]


class FakeTodoApi:
    """Stands in for TodoApiClient; records calls made from worker threads.

    By default it answers like a well-behaved backend. Tests can queue a
    canned response or an exception per action, and can hold responses
    behind ``gate`` to observe the page before confirmation arrives.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.responses: dict[str, list[Any]] = {"toggle": [], "update": [], "delete": []}
        self.completed: dict[str, bool] = {
            str(i["id"]["value"]): i["completed"] for i in SAMPLE_ITEMS
        }
        self.gate = threading.Event()
        self.gate.set()
        self._lock = threading.Lock()

    def queue(self, action: str, response: Any) -> None:
        self.responses[action].append(response)

    def calls_for(self, action: str) -> list[tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] == action]

    def _answer(self, action: str, item_id: str, default: dict) -> TodoItemOut:
        self.gate.wait(timeout=5)
        with self._lock:
            queued = self.responses[action].pop(0) if self.responses[action] else None
        if isinstance(queued, Exception):
            raise queued
        return TodoItemOut.model_validate(queued if queued is not None else default)

    def toggle(self, item_id: Any) -> TodoItemOut:
        key = str(item_id)
        with self._lock:
            self.calls.append(("toggle", key, None))
            self.completed[key] = not self.completed.get(key, False)
            state = self.completed[key]
        return self._answer("toggle", key, {"id": {"value": key}, "completed": state})

    def update(self, item_id: Any, todo: str) -> TodoItemOut:
        key = str(item_id)
        with self._lock:
            self.calls.append(("update", key, todo))
        return self._answer("update", key, {"id": {"value": key}, "todo": todo})

    def delete(self, item_id: Any) -> TodoItemOut:
        key = str(item_id)
        with self._lock:
            self.calls.append(("delete", key, None))
        return self._answer("delete", key, {"id": {"value": key}})


def api_error(action: str, item_id: str) -> TodoApiError:
    return TodoApiError(action, item_id, "500 Server Error")


@pytest.fixture
def page_markup() -> str:
    return "<html><body>" + render_todo_list(SAMPLE_ITEMS) + "</body></html>"


@pytest.fixture
def fake_api() -> FakeTodoApi:
    return FakeTodoApi()


@pytest.fixture
def make_page(page_markup, fake_api):
    """Factory for bound pages; closes their executors afterwards."""
    pages: list[TodoPage] = []

    def _make(confirm=None, markup: str | None = None) -> TodoPage:
        page = TodoPage.from_html(markup or page_markup, fake_api, confirm=confirm)
        bind_all(page)
        pages.append(page)
        return page

    yield _make
    for page in pages:
        page.close()
