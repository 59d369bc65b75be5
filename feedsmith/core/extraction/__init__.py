"""Record extraction, value normalization and content reduction."""

from feedsmith.core.extraction.content import reduce_content
from feedsmith.core.extraction.extractor import DEFAULT_MAX_RECORDS, FieldExtractor, extract
from feedsmith.core.extraction.normalizer import clean_text, parse_date, resolve_url

__all__ = [
    'DEFAULT_MAX_RECORDS',
    'FieldExtractor',
    'clean_text',
    'extract',
    'parse_date',
    'reduce_content',
    'resolve_url',
]
