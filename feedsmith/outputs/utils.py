"""Dispatch to the format-specific serializers."""

import logfire

from feedsmith.models import FeedConfig, OutputFormat, Record
from feedsmith.outputs.csv_output import format_csv
from feedsmith.outputs.json_output import dump_json_feed
from feedsmith.outputs.rss_output import format_rss
from feedsmith.utils.exceptions import UnsupportedFormatError


def resolve_format(value: OutputFormat | str | None) -> OutputFormat:
    """Turn a user-supplied format name into an OutputFormat.

    Args:
        value: Format name such as 'xml'. None means xml.

    Returns:
        The matching OutputFormat.

    Raises:
        UnsupportedFormatError: For unknown names.

    """
    if value is None:
        return OutputFormat.XML
    if isinstance(value, OutputFormat):
        return value
    try:
        return OutputFormat(value.strip().lower())
    except ValueError as e:
        raise UnsupportedFormatError(value, [f.value for f in OutputFormat]) from e


def serialize(
    records: list[Record],
    config: FeedConfig,
    output_format: OutputFormat | str = OutputFormat.XML,
    feed_url: str | None = None,
) -> str:
    """Serialize records in the requested format.

    Output is deterministic for a given input, so repeated calls give identical text.

    Args:
        records: Extracted records
        config: Feed metadata
        output_format: 'xml', 'json' or 'csv'
        feed_url: Public URL of the feed, used by JSON Feed

    Returns:
        The serialized feed.

    """
    fmt = resolve_format(output_format)
    with logfire.span('serialize_feed', format=fmt.value, records=len(records)):
        if fmt is OutputFormat.JSON:
            return dump_json_feed(records, config, feed_url)
        if fmt is OutputFormat.CSV:
            return format_csv(records)
        return format_rss(records, config)
