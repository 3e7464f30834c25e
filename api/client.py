"""
REST client for the todo backend.

Endpoints consumed:
    GET  {page_path}                  → server-rendered list markup
    POST {collection}/{id}/toggle     → {"id": {"value": ...}, "completed": ...}
    POST {collection}/{id}/update     → {"id": {"value": ...}, "todo": ...}
    POST {collection}/{id}/delete     → {"id": {"value": ...}}

Calls are synchronous; ui.page.TodoPage runs them on worker threads so the
event loop never blocks.
"""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import requests
from pydantic import ValidationError

from api.models import TodoItemOut, TodoUpdateIn, empty_body
from utils.config import DEFAULT_MAX_IN_FLIGHT, AppConfig
from utils.http import SessionManager

logger = logging.getLogger(__name__)


class TodoApiError(Exception):
    """A todo request failed in transport, status or payload shape."""

    def __init__(self, action: str, item_id: str | None, message: str) -> None:
        self.action = action
        self.item_id = item_id
        target = f"{action} {item_id}" if item_id else action
        super().__init__(f"{target}: {message}")


class TodoApiClient:
    """Thin wrapper around the three item endpoints and the page fetch."""

    def __init__(
        self,
        base_url: str,
        collection_path: str = "/todos",
        timeout: float = 10.0,
        session_manager: SessionManager | None = None,
        max_in_flight: int = DEFAULT_MAX_IN_FLIGHT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.collection_path = "/" + collection_path.strip("/")
        self.timeout = timeout
        # TodoPage sizes its worker pool from this, one connection per worker
        self.max_in_flight = max_in_flight
        self._sessions = session_manager or SessionManager(
            pool_connections=max_in_flight, pool_maxsize=max_in_flight,
        )

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "TodoApiClient":
        return cls(cfg.base_url, cfg.collection_path, cfg.http_timeout,
                   max_in_flight=cfg.max_in_flight)

    def item_url(self, item_id: Any, action: str) -> str:
        """URL of ``action`` on one item; the identifier is path-quoted."""
        return f"{self.base_url}{self.collection_path}/{quote(str(item_id), safe='')}/{action}"

    # ── Item operations ───────────────────────────────────────────────────────

    def toggle(self, item_id: Any) -> TodoItemOut:
        return self._post(item_id, "toggle", empty_body(), required="completed")

    def update(self, item_id: Any, todo: str) -> TodoItemOut:
        return self._post(item_id, "update", TodoUpdateIn(todo=todo).model_dump(), required="todo")

    def delete(self, item_id: Any) -> TodoItemOut:
        return self._post(item_id, "delete", empty_body())

    # ── Page ──────────────────────────────────────────────────────────────────

    def fetch_page(self, path: str = "/todos") -> str:
        """Return the server-rendered list page as HTML text."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self._sessions.session.get(
                url, timeout=self.timeout, headers={"Accept": "text/html"},
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise TodoApiError("fetch_page", None, str(exc)) from exc
        return resp.text

    def close(self) -> None:
        self._sessions.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ── Internals ─────────────────────────────────────────────────────────────

    def _post(self, item_id: Any, action: str, payload: dict[str, Any],
              required: str | None = None) -> TodoItemOut:
        url = self.item_url(item_id, action)
        key = str(item_id)
        start = time.monotonic()
        try:
            resp = self._sessions.session.post(url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            raise TodoApiError(action, key, str(exc)) from exc
        except ValueError as exc:
            # Body was not JSON
            raise TodoApiError(action, key, f"invalid JSON response: {exc}") from exc

        try:
            item = TodoItemOut.model_validate(data)
        except ValidationError as exc:
            raise TodoApiError(action, key, f"unexpected response shape: {exc}") from exc
        if required is not None and getattr(item, required) is None:
            raise TodoApiError(action, key, f"response has no '{required}' field")

        logger.debug(
            "%s %s -> %s", action, key, resp.status_code,
            extra={
                "action": action,
                "item_id": key,
                "status": resp.status_code,
                "duration_ms": round((time.monotonic() - start) * 1000, 1),
            },
        )
        return item
