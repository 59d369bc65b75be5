"""Interactive selector picking as an explicit state machine.

A presentation layer (iframe overlay, TUI, test) feeds discrete pointer events
into a ``SelectorSession``; the session turns clicks into selectors and keeps
the ``SelectorSet`` being built. It never touches the document itself, so any
highlighting stays on the caller's side.
"""

import logging
from dataclasses import dataclass

from feedsmith.core.dom import Document, Node
from feedsmith.core.extraction.extractor import FieldExtractor
from feedsmith.core.synthesis.synthesizer import SelectorSynthesizer
from feedsmith.models import FieldKey, Record, SelectorSet
from feedsmith.utils.exceptions import InvalidSelectorError

PREVIEW_LIMIT = 10


@dataclass(frozen=True)
class Idle:
    """No field is being picked."""


@dataclass(frozen=True)
class Listening:
    """Waiting for a click that will define ``field_key``."""

    field_key: FieldKey


@dataclass(frozen=True)
class Selected:
    """A click produced ``selector`` for ``field_key``."""

    field_key: FieldKey
    selector: str


SessionState = Idle | Listening | Selected


class SelectorSession:
    """Builds a SelectorSet one field at a time from pointer events.

    Only one field is listened for at a time. Hover tracking is kept so the
    caller knows which node to outline, and clicks inside a container are
    scoped to it so field selectors work for every item.

    Attributes:
        document: Parsed list page the user is clicking on
        source_url: URL of that page, used to resolve preview links
        selectors: Selectors picked so far
        state: Current state of the machine
        hovered: Node under the pointer while listening

    """

    def __init__(
        self,
        document: Document,
        source_url: str | None = None,
        selectors: SelectorSet | None = None,
        synthesizer: SelectorSynthesizer | None = None,
        extractor: FieldExtractor | None = None,
    ):
        self.document = document
        self.source_url = source_url
        self.selectors = selectors or SelectorSet()
        self.synthesizer = synthesizer or SelectorSynthesizer()
        self.extractor = extractor or FieldExtractor()
        self.state: SessionState = Idle()
        self.hovered: Node | None = None
        self.logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def listen(self, field_key: FieldKey | str) -> SessionState:
        """Start picking a field. Replaces any field being listened for."""
        self.state = Listening(FieldKey(field_key))
        self.hovered = None
        return self.state

    def cancel(self) -> SessionState:
        """Stop listening without changing any selector."""
        self.state = Idle()
        self.hovered = None
        return self.state

    def set_selector(self, field_key: FieldKey | str, selector: str | None) -> SelectorSet:
        """Set a selector by hand, as typed in a text box."""
        self.selectors = self.selectors.with_selector(field_key, selector)
        return self.selectors

    def clear(self, field_key: FieldKey | str) -> SelectorSet:
        """Remove a field's selector."""
        self.selectors = self.selectors.without(field_key)
        return self.selectors

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def pointer_enter(self, node: Node) -> SessionState:
        if isinstance(self.state, Listening) and node.tag_name not in ('html', 'body'):
            self.hovered = node
        return self.state

    def pointer_leave(self, node: Node) -> SessionState:
        if self.hovered is not None and self.hovered == node:
            self.hovered = None
        return self.state

    def pointer_click(self, node: Node) -> SessionState:
        """Turn a click into a selector for the field being listened for.

        Clicks outside the Listening state are ignored.
        """
        if not isinstance(self.state, Listening):
            return self.state

        field_key = self.state.field_key
        stop_ancestor = None
        if field_key is not FieldKey.CONTAINER:
            stop_ancestor = self._enclosing_container(node)

        selector = self.synthesizer.synthesize(node, stop_ancestor=stop_ancestor)
        self.selectors = self.selectors.with_selector(field_key, selector)
        self.hovered = None
        self.state = Selected(field_key, selector)
        self.logger.debug(f'Picked {field_key.value} selector: {selector}')
        return self.state

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def matches(self, field_key: FieldKey | str | None = None) -> list[Node]:
        """Nodes matched by a field's selector, for highlighting.

        Defaults to the field of the current state. Invalid selectors match nothing.
        """
        if field_key is None:
            if isinstance(self.state, Idle):
                return []
            field_key = self.state.field_key

        selector = self.selectors.get(field_key)
        if not selector:
            return []

        try:
            return self.document.select(selector)
        except InvalidSelectorError:
            return []

    def test_selectors(self, limit: int = PREVIEW_LIMIT) -> list[Record]:
        """Run the extractor with the selectors picked so far."""
        return self.extractor.extract(self.document, self.selectors, max_records=limit, source_url=self.source_url)

    def _enclosing_container(self, node: Node) -> Node | None:
        container = self.selectors.container
        if not container:
            return None
        try:
            return node.closest(container)
        except InvalidSelectorError:
            return None


class ContentSelectorSession:
    """Picks the single content selector on an item's page."""

    def __init__(self, synthesizer: SelectorSynthesizer | None = None):
        self.synthesizer = synthesizer or SelectorSynthesizer()
        self.selector: str | None = None
        self.hovered: Node | None = None

    def pointer_enter(self, node: Node) -> None:
        if node.tag_name not in ('html', 'body'):
            self.hovered = node

    def pointer_leave(self, node: Node) -> None:
        if self.hovered is not None and self.hovered == node:
            self.hovered = None

    def pointer_click(self, node: Node) -> str:
        self.selector = self.synthesizer.simple_selector(node)
        return self.selector
