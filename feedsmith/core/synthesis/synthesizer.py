"""Builds CSS selectors from clicked elements."""

import soupsieve

from feedsmith.core.dom import Node

# Classes starting with this prefix are added by the highlighting layer
RESERVED_CLASS_PREFIX = '__'

# Elements the path walk never includes
ROOT_TAGS = frozenset({'html', 'body'})


class SelectorSynthesizer:
    """Derives a selector that identifies an element and its repeated siblings.

    Attributes:
        max_segments: Maximum number of path segments kept (innermost win)
        max_classes: Maximum number of classes used per segment

    """

    def __init__(self, max_segments: int = 4, max_classes: int = 2):
        self.max_segments = max_segments
        self.max_classes = max_classes

    def synthesize(self, element: Node, stop_ancestor: Node | None = None) -> str:
        """Build a child-combinator path from ``element`` upwards.

        Args:
            element: The clicked element
            stop_ancestor: Walk stops before this element, e.g. the item container
                when picking a field inside it

        Returns:
            A selector such as ``div.list > article.post:nth-child(2) > h2``.

        """
        segments: list[str] = []
        current: Node | None = element

        while current is not None and current.tag_name not in ROOT_TAGS:
            if stop_ancestor is not None and current == stop_ancestor:
                break

            if current.id:
                # Identifiers are assumed unique on the page
                segments.append(f'#{soupsieve.escape(current.id)}')
                break

            segments.append(self._segment(current))
            current = current.parent

        if not segments:
            # Clicked the root itself, or the stop ancestor
            segments.append(self.simple_selector(element))

        segments.reverse()
        return ' > '.join(segments[-self.max_segments :])

    def simple_selector(self, element: Node) -> str:
        """Return ``tag.class1.class2`` without any path, used for content pages."""
        classes = self._usable_classes(element)
        return element.tag_name + ''.join(f'.{soupsieve.escape(name)}' for name in classes)

    def _segment(self, element: Node) -> str:
        segment = self.simple_selector(element)

        parent = element.parent
        if parent is None:
            return segment

        children = parent.element_children()
        same_tag = [child for child in children if child.tag_name == element.tag_name]
        if len(same_tag) > 1:
            position = children.index(element) + 1
            segment += f':nth-child({position})'

        return segment

    def _usable_classes(self, element: Node) -> list[str]:
        usable = [name for name in element.classes if name and not name.startswith(RESERVED_CLASS_PREFIX)]
        return usable[: self.max_classes]
