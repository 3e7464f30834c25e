"""
Headless document model over BeautifulSoup.

``Document`` owns the parsed page; ``Element`` wraps a single tag and exposes
the handful of DOM operations the bindings need (classes, attributes, the
``checked`` state, text and inner markup, removal). Two ``Element`` wrappers
of the same tag compare equal, so handles can be stored and compared freely.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

PARSER = "html.parser"


class Element:
    """A live handle on one tag of a ``Document``."""

    __slots__ = ("_tag", "_document")

    def __init__(self, tag: Tag, document: "Document") -> None:
        self._tag = tag
        self._document = document

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Element) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"<Element {self._tag.name} id={self.id!r}>"

    # ── Identity / structure ─────────────────────────────────────────────────

    @property
    def tag_name(self) -> str:
        return self._tag.name

    @property
    def id(self) -> str | None:
        return self.get_attr("id")

    @property
    def parent(self) -> "Element | None":
        parent = self._tag.parent
        if parent is None or parent is self._document.soup:
            return None
        return Element(parent, self._document)

    def children(self, selector: str | None = None) -> list["Element"]:
        """Direct child elements, optionally filtered by a CSS selector."""
        found = []
        for child in self._tag.find_all(True, recursive=False):
            if selector is None or child.css.match(selector):
                found.append(Element(child, self._document))
        return found

    def siblings(self, selector: str | None = None) -> list["Element"]:
        parent = self._tag.parent
        if parent is None:
            return []
        return [
            Element(tag, self._document)
            for tag in parent.find_all(True, recursive=False)
            if tag is not self._tag and (selector is None or tag.css.match(selector))
        ]

    def matches(self, selector: str) -> bool:
        return bool(self._tag.css.match(selector))

    @property
    def is_attached(self) -> bool:
        """True while the element is still part of its document."""
        return any(p is self._document.soup for p in self._tag.parents)

    def remove(self) -> None:
        """Detach the element (and its subtree) from the document."""
        self._tag.extract()

    # ── Attributes ────────────────────────────────────────────────────────────

    def get_attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def set_attr(self, name: str, value: str) -> None:
        self._tag[name] = value

    def remove_attr(self, name: str) -> None:
        if name in self._tag.attrs:
            del self._tag[name]

    def has_attr(self, name: str) -> bool:
        return name in self._tag.attrs

    # ── Classes ───────────────────────────────────────────────────────────────

    @property
    def classes(self) -> list[str]:
        value = self._tag.get("class") or []
        if isinstance(value, str):
            value = value.split()
        return list(value)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, name: str) -> None:
        classes = self.classes
        if name not in classes:
            self._tag["class"] = classes + [name]

    def remove_class(self, name: str) -> None:
        classes = [c for c in self.classes if c != name]
        if classes:
            self._tag["class"] = classes
        else:
            self.remove_attr("class")

    # ── Form state ────────────────────────────────────────────────────────────

    @property
    def checked(self) -> bool:
        return self.has_attr("checked")

    @checked.setter
    def checked(self, value: bool) -> None:
        if value:
            self._tag["checked"] = ""
        else:
            self.remove_attr("checked")

    # ── Content ───────────────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        return self._tag.get_text()

    @text.setter
    def text(self, value: str) -> None:
        # Assigned as a string node, so markup characters are escaped on output
        self._tag.string = value

    @property
    def inner_html(self) -> str:
        return self._tag.decode_contents()

    @inner_html.setter
    def inner_html(self, markup: str) -> None:
        fragment = BeautifulSoup(markup, PARSER)
        self._tag.clear()
        for node in list(fragment.contents):
            self._tag.append(node.extract())


class Document:
    """A parsed HTML page."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup

    @classmethod
    def from_html(cls, markup: str) -> "Document":
        return cls(BeautifulSoup(markup, PARSER))

    def select(self, selector: str) -> list[Element]:
        return [Element(tag, self) for tag in self.soup.select(selector)]

    def select_one(self, selector: str) -> Element | None:
        tag = self.soup.select_one(selector)
        return Element(tag, self) if tag is not None else None

    def get_element_by_id(self, element_id: str) -> Element | None:
        tag = self.soup.find(id=element_id)
        return Element(tag, self) if isinstance(tag, Tag) else None

    def to_html(self) -> str:
        return str(self.soup)
