"""Feed serialization: RSS 2.0, JSON Feed and CSV."""

from feedsmith.outputs.csv_output import format_csv
from feedsmith.outputs.json_output import dump_json_feed, format_json_feed
from feedsmith.outputs.rss_output import format_rss, xml_escape
from feedsmith.outputs.utils import resolve_format, serialize

__all__ = [
    'dump_json_feed',
    'format_csv',
    'format_json_feed',
    'format_rss',
    'resolve_format',
    'serialize',
    'xml_escape',
]
