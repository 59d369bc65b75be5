"""Value cleanup for extracted fields."""

import re
from datetime import datetime, timezone
from urllib.parse import urljoin

from dateutil import parser as date_parser

DATE_DELIMITERS = ('|', '•', '·', ' / ', ' — ', ' – ')
NUMERIC_DATE_PATTERN = re.compile(r'\d{1,4}[./-]\d{1,2}[./-]\d{1,4}(?:\s+\d{1,2}:\d{2}(?::\d{2})?)?')

# Two unrelated fill-in dates. A candidate that parses differently under each
# was missing its year, month or day.
FILL_IN_DATES = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def clean_text(value: str | None) -> str | None:
    """Strip surrounding whitespace. Empty strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_url(value: str | None, base_url: str | None) -> str | None:
    """Resolve a possibly relative URL against the page it came from.

    Malformed URLs are returned trimmed but otherwise untouched.

    Args:
        value: Raw href/src attribute
        base_url: URL of the page the attribute was found on

    Returns:
        Absolute URL, the original value when it cannot be resolved, or None.

    """
    value = clean_text(value)
    if value is None or not base_url:
        return value
    try:
        return urljoin(base_url, value)
    except ValueError:
        return value


def _date_candidates(raw: str) -> list[str]:
    collapsed = ' '.join(raw.replace('\xa0', ' ').split())
    candidates = [raw]
    if collapsed != raw:
        candidates.append(collapsed)

    # "12 March 2024 | News" style bylines
    for delimiter in DATE_DELIMITERS:
        if delimiter in collapsed:
            head = collapsed.split(delimiter, 1)[0].strip()
            if head and head not in candidates:
                candidates.append(head)

    match = NUMERIC_DATE_PATTERN.search(collapsed)
    if match and match.group(0) not in candidates:
        candidates.append(match.group(0))

    return candidates


def parse_date(raw: str | None) -> datetime | None:
    """Parse scraped date text, best effort.

    Naive results are taken as UTC. Text without a full calendar date
    ("2024", "March 12", "10:30") does not parse, so the result never
    depends on today's date.

    Args:
        raw: Date text as extracted from the page

    Returns:
        Timezone-aware datetime, or None if nothing parsed.

    """
    raw = clean_text(raw)
    if raw is None:
        return None

    for candidate in _date_candidates(raw):
        try:
            parsed, check = [date_parser.parse(candidate, default=default) for default in FILL_IN_DATES]
        except (ValueError, OverflowError):
            continue
        if parsed.date() != check.date():
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    return None
