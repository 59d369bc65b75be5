"""Handles saving and loading feed records to/from JSON files."""

import json
import logging
import os
from datetime import datetime

from pydantic import ValidationError

from feedsmith.models import Feed, FeedConfig
from feedsmith.models.feeds import utcnow
from feedsmith.utils.exceptions import FeedNotFoundError
from feedsmith.utils.files import init_feedsmith


class FeedStorage:
    """Manages feed records stored as one JSON file per feed.

    Attributes:
        storage_dir: Directory path where feed files are stored

    """

    def __init__(self, storage_dir: str | None = None):
        """Initialize the storage manager.

        Args:
            storage_dir: Directory for feed files. Defaults to .feedsmith/feeds.

        """
        if storage_dir is None:
            storage_dir = str(init_feedsmith('feeds'))
        os.makedirs(storage_dir, exist_ok=True)
        self.storage_dir = storage_dir
        self.logger = logging.getLogger(__name__)

    def create(self, config: FeedConfig) -> Feed:
        """Persist a new feed built from a configuration.

        Args:
            config: The feed configuration to save

        Returns:
            The stored Feed with its new id.

        """
        feed = Feed.from_config(config)
        self._write(feed)
        self.logger.info(f'Created feed {feed.id} ({feed.name})')
        return feed

    def get(self, feed_id: str) -> Feed:
        """Load a feed by id.

        Raises:
            FeedNotFoundError: If no readable feed has that id.

        """
        if not self.exists(feed_id):
            raise FeedNotFoundError('Feed', feed_id)

        try:
            with open(self._get_filepath(feed_id), encoding='utf-8') as f:
                return Feed.model_validate(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            self.logger.error(f'Error loading feed {feed_id}: {e}')
            raise FeedNotFoundError('Feed', feed_id) from e

    def exists(self, feed_id: str) -> bool:
        """Whether a feed file with this id is stored. Its contents are not checked."""
        return os.path.exists(self._get_filepath(feed_id))

    def update(self, feed_id: str, config: FeedConfig) -> Feed:
        """Replace a feed's configuration, keeping its id and scrape stats."""
        feed = self.get(feed_id)
        updated = feed.model_copy(
            update={
                'name': config.name,
                'source_url': config.source_url,
                'selectors': config.selectors,
                'content_selector': config.content_selector,
                'content_format': config.content_format,
                'updated_at': utcnow(),
            }
        )
        self._write(updated)
        return updated

    def record_scrape(self, feed_id: str, item_count: int, scraped_at: datetime | None = None) -> Feed:
        """Store the outcome of the latest build."""
        feed = self.get(feed_id)
        updated = feed.model_copy(update={'item_count': item_count, 'last_scraped_at': scraped_at or utcnow()})
        self._write(updated)
        return updated

    def delete(self, feed_id: str) -> None:
        if not self.exists(feed_id):
            raise FeedNotFoundError('Feed', feed_id)
        os.remove(self._get_filepath(feed_id))
        self.logger.info(f'Deleted feed {feed_id}')

    def list_feeds(self) -> list[Feed]:
        """All readable feeds, newest first."""
        feeds = []
        for filename in os.listdir(self.storage_dir):
            if not (filename.startswith('feed_') and filename.endswith('.json')):
                continue
            try:
                feeds.append(self.get(filename[5:-5]))
            except FeedNotFoundError:
                continue
        return sorted(feeds, key=lambda feed: feed.created_at, reverse=True)

    def _write(self, feed: Feed) -> str:
        filepath = self._get_filepath(feed.id)
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(feed.model_dump(mode='json'), f, indent=2, ensure_ascii=False)
        return filepath

    def _get_filepath(self, feed_id: str) -> str:
        safe_id = feed_id.replace('/', '_').replace('.', '_')
        return os.path.join(self.storage_dir, f'feed_{safe_id}.json')
