"""
Pydantic models for the todo REST payloads.

Only the fields the bindings consume are declared; anything else the backend
returns is ignored. Identifiers arrive wrapped as ``{"value": <token>}`` and
may be strings or numbers, so lookups go through ``TodoId.key``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TodoId(BaseModel):
    """Opaque item identifier as the backend serializes it."""
    model_config = ConfigDict(extra="ignore")

    value: str | int = Field(..., description="Identifier token", examples=[42])

    @property
    def key(self) -> str:
        """String form used in URLs, markup attributes and registry lookups."""
        return str(self.value)


class TodoItemOut(BaseModel):
    """A todo item as returned by toggle, update and delete."""
    model_config = ConfigDict(extra="ignore")

    id: TodoId
    todo: str | None = Field(None, description="Item text; may contain inline markup", examples=["Buy <b>milk</b>"])
    completed: bool | None = Field(None, description="Completion flag", examples=[True])

    @property
    def key(self) -> str:
        return self.id.key


class TodoUpdateIn(BaseModel):
    """Body of ``POST /todos/{id}/update``."""
    todo: str = Field(..., description="Edited label markup")


def empty_body() -> dict[str, Any]:
    """Body sent with toggle and delete."""
    return {}
