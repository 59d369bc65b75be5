"""CSV output formatter."""

import csv
import io

from feedsmith.models import RECORD_FIELDS, Record


def csv_columns(records: list[Record]) -> list[str]:
    """Columns present in at least one record, in the standard order.

    With no records every column is used so the header still describes the feed.
    """
    if not records:
        return list(RECORD_FIELDS)
    present = {name for record in records for name in record.present_fields()}
    return [name for name in RECORD_FIELDS if name in present]


def format_csv(records: list[Record]) -> str:
    """Render records as CSV with a header row.

    Fields containing a comma, quote or newline are quoted, with embedded
    quotes doubled.
    """
    columns = csv_columns(records)
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(columns)
    for record in records:
        writer.writerow([record.get(name) or '' for name in columns])
    return buffer.getvalue()
