"""Pydantic models for selectors, records and stored feeds."""

from feedsmith.models.feeds import Feed, OutputFormat, SavedSelectorTemplate
from feedsmith.models.results import RECORD_FIELDS, FetchResult, Record
from feedsmith.models.selectors import ITEM_FIELDS, ContentFormat, FeedConfig, FieldKey, SelectorSet

__all__ = [
    'ContentFormat',
    'Feed',
    'FeedConfig',
    'FetchResult',
    'FieldKey',
    'ITEM_FIELDS',
    'OutputFormat',
    'RECORD_FIELDS',
    'Record',
    'SavedSelectorTemplate',
    'SelectorSet',
]
