"""feedsmith - Turn any list page into a feed.

Click once to derive selectors, then serve RSS, JSON Feed or CSV.
"""

from feedsmith.core.dom import SoupDocument, parse_document
from feedsmith.core.extraction import FieldExtractor, clean_text, extract, parse_date, reduce_content, resolve_url
from feedsmith.core.fetcher import FirecrawlFetcher, HTMLFetcher, PlaywrightFetcher, SimpleFetcher, create_fetcher
from feedsmith.core.pipeline import FeedPipeline
from feedsmith.core.synthesis import ContentSelectorSession, SelectorSession, SelectorSynthesizer
from feedsmith.models import (
    ContentFormat,
    Feed,
    FeedConfig,
    FetchResult,
    FieldKey,
    OutputFormat,
    Record,
    SavedSelectorTemplate,
    SelectorSet,
)
from feedsmith.outputs import format_csv, format_json_feed, format_rss, serialize
from feedsmith.storage import FeedStorage, TemplateStorage
from feedsmith.utils import (
    BotDetectionError,
    FeedNotFoundError,
    FeedsmithError,
    FetchError,
    InvalidSelectorError,
    UnsupportedFormatError,
    init_feedsmith,
)

__version__ = '0.1.0'

__all__ = [
    # Selector synthesis
    'SelectorSynthesizer',
    'SelectorSession',
    'ContentSelectorSession',
    # Extraction
    'FieldExtractor',
    'extract',
    'reduce_content',
    'clean_text',
    'parse_date',
    'resolve_url',
    'SoupDocument',
    'parse_document',
    # Serialization
    'serialize',
    'format_rss',
    'format_json_feed',
    'format_csv',
    # Pipeline, fetchers and storage
    'FeedPipeline',
    'HTMLFetcher',
    'SimpleFetcher',
    'PlaywrightFetcher',
    'FirecrawlFetcher',
    'create_fetcher',
    'FeedStorage',
    'TemplateStorage',
    # Models
    'ContentFormat',
    'Feed',
    'FeedConfig',
    'FetchResult',
    'FieldKey',
    'OutputFormat',
    'Record',
    'SavedSelectorTemplate',
    'SelectorSet',
    # Errors
    'FeedsmithError',
    'InvalidSelectorError',
    'FetchError',
    'BotDetectionError',
    'UnsupportedFormatError',
    'FeedNotFoundError',
    # Utilities
    'init_feedsmith',
]
