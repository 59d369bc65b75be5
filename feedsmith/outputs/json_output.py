"""JSON Feed output formatter."""

import hashlib
import json

from feedsmith.core.extraction.normalizer import parse_date
from feedsmith.models import ContentFormat, FeedConfig, Record


def item_id(record: Record, index: int, source_url: str) -> str:
    """Stable item identifier: the link, else a hash of position and title."""
    if record.link:
        return record.link
    seed = f'{source_url}|{index}|{record.title or ""}'
    return hashlib.sha256(seed.encode('utf-8')).hexdigest()[:16]


def format_item(record: Record, index: int, config: FeedConfig) -> dict:
    """Build one JSON Feed item. Absent values are left out."""
    item: dict = {'id': item_id(record, index, config.source_url)}

    if record.link:
        item['url'] = record.link
    if record.title:
        item['title'] = record.title

    body = record.content or record.description
    if body:
        key = 'content_html' if config.content_format is ContentFormat.HTML else 'content_text'
        item[key] = body
    if record.content and record.description:
        item['summary'] = record.description

    if record.image:
        item['image'] = record.image

    published = parse_date(record.date)
    if published is not None:
        item['date_published'] = published.isoformat()

    return item


def format_json_feed(records: list[Record], config: FeedConfig, feed_url: str | None = None) -> dict:
    """Build the JSON Feed document as a dict.

    Args:
        records: Extracted records, in feed order
        config: Feed metadata
        feed_url: Public URL of this feed, when known

    Returns:
        Dictionary ready for ``json.dumps``.

    """
    feed: dict = {'title': config.name, 'home_page_url': config.source_url}
    if feed_url:
        feed['feed_url'] = feed_url
    feed['items'] = [format_item(record, index, config) for index, record in enumerate(records)]
    return feed


def dump_json_feed(records: list[Record], config: FeedConfig, feed_url: str | None = None) -> str:
    """Serialize a JSON Feed compactly."""
    return json.dumps(format_json_feed(records, config, feed_url), ensure_ascii=False, separators=(',', ':'))
