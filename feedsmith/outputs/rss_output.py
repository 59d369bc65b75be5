"""RSS 2.0 output formatter."""

import mimetypes
import re
from email.utils import format_datetime
from xml.sax.saxutils import escape

from feedsmith.core.extraction.normalizer import parse_date
from feedsmith.models import FeedConfig, Record

# Characters that XML 1.0 does not allow anywhere in a document
_INVALID_XML_CHARS = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]')
_QUOTE_ENTITIES = {'"': '&quot;', "'": '&apos;'}


def xml_escape(value: str | None) -> str:
    """Escape ``& < > " '`` and drop characters XML cannot carry."""
    if not value:
        return ''
    return escape(_INVALID_XML_CHARS.sub('', value), _QUOTE_ENTITIES)


def channel_description(config: FeedConfig) -> str:
    return config.description or f'Feed generated from {config.source_url}'


def _element(name: str, value: str | None, indent: str) -> str:
    return f'{indent}<{name}>{xml_escape(value)}</{name}>'


def _item(record: Record) -> list[str]:
    indent = '      '
    lines = ['    <item>']
    lines.append(_element('title', record.title, indent))
    lines.append(_element('description', record.content or record.description, indent))
    lines.append(_element('link', record.link, indent))

    if record.link:
        lines.append(f'{indent}<guid isPermaLink="true">{xml_escape(record.link)}</guid>')

    published = parse_date(record.date)
    if published is not None:
        lines.append(_element('pubDate', format_datetime(published), indent))

    if record.image:
        mime_type = mimetypes.guess_type(record.image)[0] or 'image/jpeg'
        lines.append(f'{indent}<enclosure url="{xml_escape(record.image)}" type="{mime_type}" length="0" />')

    lines.append('    </item>')
    return lines


def format_rss(records: list[Record], config: FeedConfig) -> str:
    """Render records as an RSS 2.0 document.

    Args:
        records: Extracted records, in feed order
        config: Feed metadata

    Returns:
        XML text. Items without a parsable date have no pubDate.

    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0">',
        '  <channel>',
        _element('title', config.name, '    '),
        _element('link', config.source_url, '    '),
        _element('description', channel_description(config), '    '),
    ]
    for record in records:
        lines.extend(_item(record))
    lines.extend(['  </channel>', '</rss>'])
    return '\n'.join(lines) + '\n'
