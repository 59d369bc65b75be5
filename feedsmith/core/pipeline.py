"""Feed build pipeline.

Fetches the list page, extracts records, optionally expands the first record
with content from its own page, and serializes the result.
"""

import logging

import logfire
from rich.console import Console
from rich.theme import Theme

from feedsmith.core.dom import SoupDocument, parse_document
from feedsmith.core.extraction import DEFAULT_MAX_RECORDS, FieldExtractor, reduce_content
from feedsmith.core.fetcher import HTMLFetcher
from feedsmith.models import FeedConfig, OutputFormat, Record
from feedsmith.outputs import resolve_format, serialize
from feedsmith.storage import FeedStorage
from feedsmith.utils.exceptions import FetchError
from feedsmith.utils.files import normalize_source_url

CONSOLE_THEME = Theme(
    {
        'info': 'dim cyan',
        'warning': 'magenta',
        'danger': 'bold red',
        'success': 'bold green',
        'step': 'bold blue',
    }
)


class FeedPipeline:
    """Builds feeds from configurations or stored feed records.

    Attributes:
        fetcher: Retrieves list and content pages
        extractor: Turns the list page into records
        storage: Feed records, needed only for building stored feeds
        max_records: Cap on records per build
        console: Rich console for progress output (quiet unless one is passed in)
        logger: Logger instance for detailed run tracking

    """

    def __init__(
        self,
        fetcher: HTMLFetcher,
        storage: FeedStorage | None = None,
        max_records: int = DEFAULT_MAX_RECORDS,
        console: Console | None = None,
    ):
        self.fetcher = fetcher
        self.storage = storage
        self.max_records = max_records
        self.extractor = FieldExtractor(max_records)
        self.console = console or Console(theme=CONSOLE_THEME, quiet=True)
        self.logger = logging.getLogger(__name__)

    def build(self, config: FeedConfig, max_records: int | None = None) -> list[Record]:
        """Scrape the list page and return its records.

        Args:
            config: Feed configuration
            max_records: Overrides the pipeline's cap

        Returns:
            Records in page order. Empty if nothing matched.

        Raises:
            FetchError: If the list page cannot be fetched.

        """
        url = normalize_source_url(config.source_url)

        with logfire.span('build_feed', url=url, name=config.name):
            self.console.print(f'[step]Fetching list page {url}...[/step]')
            document = self._fetch_document(url)

            records = self.extractor.extract(document, config.selectors, max_records=max_records, source_url=url)
            self.console.print(f'[success]Extracted {len(records)} records[/success]')

            if config.content_selector and records and records[0].link:
                records[0] = self._with_content(records[0], config)

            return records

    def render(
        self,
        config: FeedConfig,
        output_format: OutputFormat | str = OutputFormat.XML,
        feed_url: str | None = None,
    ) -> tuple[str, OutputFormat, int]:
        """Build and serialize a feed from an unsaved configuration.

        The feed links to the normalized source URL, the same one fetched.

        Returns:
            Tuple of (body, resolved format, record count).

        Raises:
            UnsupportedFormatError: Before any fetch, for unknown formats.
            FetchError: If the list page cannot be fetched.

        """
        fmt = resolve_format(output_format)
        config = config.model_copy(update={'source_url': normalize_source_url(config.source_url)})
        records = self.build(config)
        return serialize(records, config, fmt, feed_url=feed_url), fmt, len(records)

    def render_feed(
        self,
        feed_id: str,
        output_format: OutputFormat | str = OutputFormat.XML,
        feed_url: str | None = None,
    ) -> tuple[str, OutputFormat]:
        """Build a stored feed and record the scrape on it.

        Raises:
            FeedNotFoundError: Unknown feed id.
            UnsupportedFormatError: Unknown format.
            FetchError: If the list page cannot be fetched.

        """
        if self.storage is None:
            raise RuntimeError('FeedPipeline.render_feed needs a FeedStorage')

        feed = self.storage.get(feed_id)
        body, fmt, count = self.render(feed.to_config(), output_format, feed_url=feed_url)
        self.storage.record_scrape(feed_id, count)
        logfire.info('Rendered stored feed', feed_id=feed_id, format=fmt.value, items=count)
        return body, fmt

    def _fetch_document(self, url: str) -> SoupDocument:
        with logfire.span('fetch_page', url=url):
            result = self.fetcher.fetch(url)

        if not result.success or result.html is None:
            reason = result.block_reason or 'no HTML received'
            logfire.error('Fetch failed', url=url, reason=reason)
            raise FetchError(url, reason)

        self.logger.info(f'Fetched {len(result.html):,} characters from {url} ({result.fetch_time:.2f}s)')
        return parse_document(result.html, url=url)

    def _with_content(self, record: Record, config: FeedConfig) -> Record:
        """Attach the content page's content to a record. Failures leave it unchanged."""
        self.console.print(f'[step]Fetching content page {record.link}...[/step]')
        try:
            document = self._fetch_document(record.link)
        except FetchError as e:
            self.console.print(f'[warning]Content page unavailable: {e.reason}[/warning]')
            logfire.warn('Content page fetch failed', url=e.url, reason=e.reason)
            return record

        content = reduce_content(document, config.content_selector, config.content_format)
        return record.model_copy(update={'content': content or None})
