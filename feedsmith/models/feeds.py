"""Persisted feed and selector template records."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from feedsmith.models.selectors import ContentFormat, FeedConfig, SelectorSet


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


class OutputFormat(str, Enum):
    """Serialized feed formats."""

    XML = 'xml'
    JSON = 'json'
    CSV = 'csv'

    @property
    def content_type(self) -> str:
        """HTTP content type for this format."""
        return {
            OutputFormat.XML: 'application/rss+xml; charset=utf-8',
            OutputFormat.JSON: 'application/feed+json; charset=utf-8',
            OutputFormat.CSV: 'text/csv; charset=utf-8',
        }[self]


class Feed(BaseModel):
    """A saved feed.

    Attributes:
        id: Unique feed identifier
        name: Feed title
        source_url: List page URL
        selectors: List selectors
        content_selector: Content page selector
        content_format: Content extraction format
        item_count: Number of records in the last build
        last_scraped_at: When the feed was last built
        created_at: Creation timestamp
        updated_at: Last modification timestamp

    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    name: str
    source_url: str
    selectors: SelectorSet = Field(default_factory=SelectorSet, alias='list_selectors')
    content_selector: str | None = None
    content_format: ContentFormat = ContentFormat.TEXT
    item_count: int = 0
    last_scraped_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def to_config(self) -> FeedConfig:
        """Build the immutable configuration used by the pipeline."""
        return FeedConfig(
            name=self.name,
            source_url=self.source_url,
            selectors=self.selectors,
            content_selector=self.content_selector,
            content_format=self.content_format,
        )

    @classmethod
    def from_config(cls, config: FeedConfig) -> 'Feed':
        return cls(
            name=config.name,
            source_url=config.source_url,
            selectors=config.selectors,
            content_selector=config.content_selector,
            content_format=config.content_format,
        )


class SavedSelectorTemplate(BaseModel):
    """Selectors saved for reuse on other pages of the same domain.

    Unique on (domain, name).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    domain: str
    name: str
    selectors: SelectorSet = Field(default_factory=SelectorSet, alias='list_selectors')
    content_selector: str | None = None
    content_format: ContentFormat = ContentFormat.TEXT
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
