"""Extracts list items from a page using container and field selectors."""

import logging

import logfire

from feedsmith.core.dom import Document, Node
from feedsmith.core.extraction.normalizer import clean_text, resolve_url
from feedsmith.models import FieldKey, Record, SelectorSet
from feedsmith.utils.exceptions import InvalidSelectorError

DEFAULT_MAX_RECORDS = 10


def _check_limit(max_records: int) -> int:
    if max_records < 0:
        raise ValueError(f'max_records must not be negative, got {max_records}')
    return max_records


class FieldExtractor:
    """Turns repeated container elements into records.

    Attributes:
        max_records: Default cap on containers read per page

    """

    def __init__(self, max_records: int = DEFAULT_MAX_RECORDS):
        self.max_records = _check_limit(max_records)
        self.logger = logging.getLogger(__name__)

    def extract(
        self,
        document: Document,
        selectors: SelectorSet,
        max_records: int | None = None,
        source_url: str | None = None,
    ) -> list[Record]:
        """Extract one record per matched container.

        Never raises for selector problems: an unusable container selector gives
        an empty list, an unusable field selector drops that field.

        Args:
            document: Parsed list page
            selectors: Container and field selectors
            max_records: Cap on containers read. Defaults to the extractor's cap.
            source_url: Page URL used to make links and images absolute

        Returns:
            Records in document order, at most ``max_records`` of them.

        """
        limit = self.max_records if max_records is None else _check_limit(max_records)
        base_url = source_url or getattr(document, 'url', None)

        containers = self._containers(document, selectors.container)
        records = []
        for container in containers[:limit]:
            record = self._extract_record(container, selectors, base_url)
            if record.is_empty():
                continue
            records.append(record)

        logfire.info(
            'Extracted records',
            containers=len(containers),
            records=len(records),
            limit=limit,
        )
        return records

    def _containers(self, document: Document, selector: str | None) -> list[Node]:
        if not selector:
            self.logger.info('No container selector configured')
            return []
        try:
            return document.select(selector)
        except InvalidSelectorError as e:
            self.logger.warning(f'Container selector unusable: {e}')
            return []

    def _extract_record(self, container: Node, selectors: SelectorSet, base_url: str | None) -> Record:
        values: dict[str, str] = {}

        for key in selectors.fields():
            value = self._extract_field(container, key, selectors.get(key), base_url)
            if value:
                values[key.value] = value

        # Cards wrapped in a single <a> carry their own link
        if not selectors.link and container.tag_name == 'a':
            link = resolve_url(container.attribute('href'), base_url)
            if link:
                values[FieldKey.LINK.value] = link

        return Record(**values)

    def _extract_field(self, container: Node, key: FieldKey, selector: str, base_url: str | None) -> str | None:
        try:
            element = container.select_one(selector)
        except InvalidSelectorError as e:
            self.logger.debug(f'{key.value}: {e}')
            return None

        if element is None:
            return None

        if key is FieldKey.LINK:
            href = resolve_url(element.attribute('href'), base_url)
            return href or clean_text(element.text())

        if key is FieldKey.IMAGE:
            return resolve_url(element.attribute('src'), base_url)

        return clean_text(element.text())


def extract(
    document: Document,
    selectors: SelectorSet,
    max_records: int = DEFAULT_MAX_RECORDS,
    source_url: str | None = None,
) -> list[Record]:
    """Module-level shortcut for ``FieldExtractor().extract``."""
    return FieldExtractor(max_records).extract(document, selectors, source_url=source_url)
