"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from feedsmith.core.fetcher import FETCHERS, HTMLFetcher, create_fetcher


@dataclass
class Settings:
    """Configuration for the CLI and HTTP app.

    Attributes:
        fetcher: Fetcher type ('simple', 'playwright', 'firecrawl')
        firecrawl_api_key: API key, required for the firecrawl fetcher
        max_records: Cap on items per feed build
        fetch_timeout: Request timeout in seconds
        logfire_token: Enables logfire export when set
        log_level: Level for the local log file
        storage_dir: Overrides the .feedsmith/feeds location
        templates_dir: Overrides the .feedsmith/templates location

    """

    fetcher: str = 'simple'
    firecrawl_api_key: str | None = None
    max_records: int = 10
    fetch_timeout: int = 30
    logfire_token: str | None = None
    log_level: str = 'INFO'
    storage_dir: str | None = None
    templates_dir: str | None = None

    def __post_init__(self) -> None:
        """Validate settings.

        Raises:
            ValueError: On an unknown fetcher, a missing Firecrawl key or bad limits.

        """
        if self.fetcher not in FETCHERS:
            raise ValueError(f'Unknown fetcher: {self.fetcher}. Choose from: {list(FETCHERS.keys())}')
        if self.fetcher == 'firecrawl' and not self.firecrawl_api_key:
            raise ValueError('FIRECRAWL_API_KEY is required for the firecrawl fetcher')
        if self.max_records < 1:
            raise ValueError('max_records must be at least 1')
        if self.fetch_timeout < 1:
            raise ValueError('fetch_timeout must be at least 1 second')

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> 'Settings':
        """Build settings from FEEDSMITH_* variables, after loading a .env file."""
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))

        return cls(
            fetcher=os.getenv('FEEDSMITH_FETCHER', 'simple'),
            firecrawl_api_key=os.getenv('FIRECRAWL_API_KEY') or None,
            max_records=int(os.getenv('FEEDSMITH_MAX_RECORDS', '10')),
            fetch_timeout=int(os.getenv('FEEDSMITH_FETCH_TIMEOUT', '30')),
            logfire_token=os.getenv('LOGFIRE_TOKEN') or None,
            log_level=os.getenv('FEEDSMITH_LOG_LEVEL', 'INFO'),
            storage_dir=os.getenv('FEEDSMITH_STORAGE_DIR') or None,
            templates_dir=os.getenv('FEEDSMITH_TEMPLATES_DIR') or None,
        )

    def build_fetcher(self) -> HTMLFetcher:
        """Create the configured fetcher."""
        if self.fetcher == 'firecrawl':
            return create_fetcher('firecrawl', api_key=self.firecrawl_api_key, timeout=self.fetch_timeout)
        if self.fetcher == 'playwright':
            return create_fetcher('playwright', timeout=self.fetch_timeout * 1000)
        return create_fetcher('simple', timeout=self.fetch_timeout)
