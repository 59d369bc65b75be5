"""Models for extracted records and fetch results."""

from dataclasses import dataclass

from pydantic import BaseModel

from feedsmith.models.selectors import ITEM_FIELDS, FieldKey

# Column order shared by every output format
RECORD_FIELDS: tuple[str, ...] = tuple(key.value for key in ITEM_FIELDS) + ('content',)


class Record(BaseModel):
    """One list item extracted from a container.

    Attributes:
        title: Trimmed title text
        description: Trimmed summary text
        date: Raw date text, parsed only when serializing
        link: Absolute item URL
        image: Absolute image URL
        content: Full content from the item's page, if fetched

    """

    title: str | None = None
    description: str | None = None
    date: str | None = None
    link: str | None = None
    image: str | None = None
    content: str | None = None

    def get(self, key: FieldKey | str) -> str | None:
        """Return a field value by key name."""
        name = key.value if isinstance(key, FieldKey) else key
        return getattr(self, name)

    def present_fields(self) -> list[str]:
        """Names of fields holding a non-empty value, in column order."""
        return [name for name in RECORD_FIELDS if getattr(self, name)]

    def is_empty(self) -> bool:
        """True if no field holds a value."""
        return not self.present_fields()


@dataclass
class FetchResult:
    """Result of an HTML fetch operation.

    Attributes:
        url: URL that was requested
        html: HTML content, or None on failure
        status_code: HTTP status code, when known
        is_blocked: True if the page looked like a bot block
        block_reason: Why the fetch failed or was blocked
        fetch_time: Seconds spent fetching

    """

    url: str
    html: str | None = None
    status_code: int | None = None
    is_blocked: bool = False
    block_reason: str | None = None
    fetch_time: float = 0.0

    @property
    def success(self) -> bool:
        """Whether the fetch returned usable HTML."""
        return self.html is not None and not self.is_blocked
