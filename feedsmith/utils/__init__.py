"""Utility components for feedsmith."""

from feedsmith.utils.exceptions import (
    BotDetectionError,
    FeedNotFoundError,
    FeedsmithError,
    FetchError,
    InvalidSelectorError,
    UnsupportedFormatError,
)
from feedsmith.utils.files import init_feedsmith, normalize_source_url
from feedsmith.utils.headers import browser_headers, pick_user_agent
from feedsmith.utils.retry import fetch_retryer

__all__ = [
    'BotDetectionError',
    'FeedNotFoundError',
    'FeedsmithError',
    'FetchError',
    'InvalidSelectorError',
    'UnsupportedFormatError',
    'browser_headers',
    'fetch_retryer',
    'init_feedsmith',
    'normalize_source_url',
    'pick_user_agent',
]
