"""Pydantic models for selector configuration."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldKey(str, Enum):
    """Logical role of an element inside a list page."""

    CONTAINER = 'container'
    TITLE = 'title'
    DESCRIPTION = 'description'
    DATE = 'date'
    LINK = 'link'
    IMAGE = 'image'


# Fields looked up inside a container, in selection order
ITEM_FIELDS: tuple[FieldKey, ...] = (
    FieldKey.TITLE,
    FieldKey.DESCRIPTION,
    FieldKey.DATE,
    FieldKey.LINK,
    FieldKey.IMAGE,
)


class ContentFormat(str, Enum):
    """How full content is taken from the content page."""

    TEXT = 'text'
    HTML = 'html'


class SelectorSet(BaseModel):
    """CSS selector per field of a list item.

    Attributes:
        container: Selector for the repeating item element
        title: Selector for the item title, scoped to the container
        description: Selector for the summary text, scoped to the container
        date: Selector for the date text, scoped to the container
        link: Selector for the item link, scoped to the container
        image: Selector for the thumbnail, scoped to the container

    """

    model_config = ConfigDict(frozen=True)

    container: str | None = Field(default=None, description='Repeating item selector')
    title: str | None = Field(default=None, description='Title selector')
    description: str | None = Field(default=None, description='Description selector')
    date: str | None = Field(default=None, description='Date selector')
    link: str | None = Field(default=None, description='Link selector')
    image: str | None = Field(default=None, description='Image selector')

    @field_validator('*', mode='before')
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def get(self, key: FieldKey | str) -> str | None:
        """Return the selector configured for a field, or None."""
        return getattr(self, FieldKey(key).value)

    def with_selector(self, key: FieldKey | str, selector: str | None) -> 'SelectorSet':
        """Return a copy with one field's selector replaced."""
        data = self.model_dump()
        data[FieldKey(key).value] = selector
        return SelectorSet(**data)

    def without(self, key: FieldKey | str) -> 'SelectorSet':
        """Return a copy with one field's selector removed."""
        return self.with_selector(key, None)

    def fields(self) -> list[FieldKey]:
        """Configured item fields (container excluded), in selection order."""
        return [key for key in ITEM_FIELDS if self.get(key)]


class FeedConfig(BaseModel):
    """Everything needed to turn a list page into a feed.

    Attributes:
        name: Feed title
        source_url: URL of the list page
        selectors: Selectors for the list items
        content_selector: Selector for the full content on an item's page
        content_format: Whether full content is taken as text or HTML
        description: Optional channel description

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    source_url: str
    selectors: SelectorSet = Field(default_factory=SelectorSet, alias='list_selectors')
    content_selector: str | None = None
    content_format: ContentFormat = ContentFormat.TEXT
    description: str | None = None

    @field_validator('content_selector', mode='before')
    @classmethod
    def _blank_content_selector(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator('content_format', mode='before')
    @classmethod
    def _default_content_format(cls, value):
        # Stored rows may carry null or an empty string
        return value or ContentFormat.TEXT
