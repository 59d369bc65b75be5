"""Reduces an item's own page to a single content value."""

import logging

from feedsmith.core.dom import Document
from feedsmith.models import ContentFormat
from feedsmith.utils.exceptions import InvalidSelectorError

logger = logging.getLogger(__name__)


def reduce_content(
    document: Document,
    content_selector: str | None,
    content_format: ContentFormat | str = ContentFormat.TEXT,
) -> str:
    """Pull the full content out of a content page.

    Content is optional, so every miss returns an empty string.

    Args:
        document: Parsed content page (not the list page)
        content_selector: Selector for the content element
        content_format: ``text`` for trimmed visible text, ``html`` for inner markup

    Returns:
        The content, or an empty string.

    """
    if not content_selector:
        return ''

    try:
        element = document.select_one(content_selector)
    except InvalidSelectorError as e:
        logger.warning(f'Content selector unusable: {e}')
        return ''

    if element is None:
        return ''

    if ContentFormat(content_format) is ContentFormat.HTML:
        return element.inner_html()
    return element.text().strip()
