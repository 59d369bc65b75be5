"""DOM capability interface used by the synthesizer, extractor and reducer.

The core only needs a handful of traversal operations. They are described by
the ``Node`` and ``Document`` protocols so another HTML library can be plugged
in; ``SoupDocument`` implements them on top of BeautifulSoup and soupsieve.
"""

from typing import Protocol

import soupsieve
from bs4 import BeautifulSoup, Tag

from feedsmith.utils.exceptions import InvalidSelectorError

_SELECTOR_ERRORS = (soupsieve.SelectorSyntaxError, NotImplementedError, ValueError, TypeError)


class Node(Protocol):
    """An element in a parsed document."""

    @property
    def tag_name(self) -> str: ...

    @property
    def id(self) -> str | None: ...

    @property
    def classes(self) -> list[str]: ...

    @property
    def parent(self) -> 'Node | None': ...

    def element_children(self) -> list['Node']: ...

    def attribute(self, name: str) -> str | None: ...

    def text(self) -> str: ...

    def inner_html(self) -> str: ...

    def select(self, selector: str) -> list['Node']: ...

    def select_one(self, selector: str) -> 'Node | None': ...

    def closest(self, selector: str) -> 'Node | None': ...


class Document(Protocol):
    """A parsed page."""

    def select(self, selector: str) -> list[Node]: ...

    def select_one(self, selector: str) -> Node | None: ...


class SoupNode:
    """``Node`` implementation wrapping a BeautifulSoup ``Tag``."""

    __slots__ = ('tag',)

    def __init__(self, tag: Tag):
        self.tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and other.tag is self.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        return f'SoupNode(<{self.tag_name}>)'

    @property
    def tag_name(self) -> str:
        return self.tag.name.lower()

    @property
    def id(self) -> str | None:
        value = self.attribute('id')
        return value or None

    @property
    def classes(self) -> list[str]:
        value = self.tag.get('class') or []
        if isinstance(value, str):
            return value.split()
        return list(value)

    @property
    def parent(self) -> 'SoupNode | None':
        parent = self.tag.parent
        # The BeautifulSoup object itself is the document, not an element
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return SoupNode(parent)

    def element_children(self) -> list['SoupNode']:
        return [SoupNode(child) for child in self.tag.children if isinstance(child, Tag)]

    def attribute(self, name: str) -> str | None:
        value = self.tag.get(name)
        if value is None:
            return None
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return ' '.join(value)
        return value

    def text(self) -> str:
        return self.tag.get_text()

    def inner_html(self) -> str:
        return self.tag.decode_contents()

    def select(self, selector: str) -> list['SoupNode']:
        return [SoupNode(tag) for tag in _select(self.tag, selector)]

    def select_one(self, selector: str) -> 'SoupNode | None':
        matches = _select(self.tag, selector, limit=1)
        return SoupNode(matches[0]) if matches else None

    def closest(self, selector: str) -> 'SoupNode | None':
        try:
            match = soupsieve.closest(selector, self.tag)
        except _SELECTOR_ERRORS as e:
            raise InvalidSelectorError(selector, str(e)) from e
        return SoupNode(match) if match is not None else None


class SoupDocument:
    """``Document`` implementation backed by BeautifulSoup.

    Attributes:
        soup: The parsed tree
        url: URL the HTML was fetched from, if known

    """

    def __init__(self, html: str, url: str | None = None, parser: str = 'lxml'):
        self.soup = BeautifulSoup(html, parser)
        self.url = url

    def select(self, selector: str) -> list[SoupNode]:
        return [SoupNode(tag) for tag in _select(self.soup, selector)]

    def select_one(self, selector: str) -> SoupNode | None:
        matches = _select(self.soup, selector, limit=1)
        return SoupNode(matches[0]) if matches else None


def parse_document(html: str, url: str | None = None) -> SoupDocument:
    """Parse HTML into a document the core components can query."""
    return SoupDocument(html, url=url)


def _select(tag: Tag, selector: str, limit: int = 0) -> list[Tag]:
    if not selector or not selector.strip():
        raise InvalidSelectorError(selector, 'empty selector')
    try:
        return list(soupsieve.select(selector, tag, limit=limit))
    except _SELECTOR_ERRORS as e:
        raise InvalidSelectorError(selector, str(e)) from e
