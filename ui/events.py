"""
Selector-based event bindings.

``EventDispatcher.on(selector, event_type, handler)`` registers a handler for
every element matching ``selector``. ``dispatch`` runs the matching handlers
synchronously, in registration order, on the caller's thread. Handlers are
matched when the event fires, and events aimed at detached elements are
dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ui.document import Document, Element

logger = logging.getLogger(__name__)

# Legacy key codes carried by keyup events
KEY_ENTER = 13
KEY_ESCAPE = 27

CHANGE = "change"
CLICK = "click"
DBLCLICK = "dblclick"
KEYUP = "keyup"
MOUSEENTER = "mouseenter"
MOUSELEAVE = "mouseleave"


@dataclass
class Event:
    """One dispatched UI event."""

    type: str
    target: Element
    key_code: int | None = None


Handler = Callable[[Event], None]


@dataclass(frozen=True)
class Binding:
    selector: str
    event_type: str
    handler: Handler


class EventDispatcher:
    """Routes events on a document's elements to bound handlers."""

    def __init__(self, document: Document) -> None:
        self.document = document
        self._bindings: list[Binding] = []

    def on(self, selector: str, event_type: str, handler: Handler) -> None:
        self._bindings.append(Binding(selector, event_type, handler))

    def bindings(self, event_type: str | None = None) -> list[Binding]:
        return [b for b in self._bindings if event_type is None or b.event_type == event_type]

    def dispatch(self, target: Element, event_type: str, key_code: int | None = None) -> Event:
        """Fire ``event_type`` at ``target`` and return the event."""
        event = Event(event_type, target, key_code)
        if not target.is_attached:
            logger.debug("dropping %s on detached %r", event_type, target)
            return event
        for binding in list(self._bindings):
            if binding.event_type == event_type and target.matches(binding.selector):
                binding.handler(event)
        return event
