"""Fetcher factory and exports."""

from feedsmith.core.fetcher.base import HTMLFetcher
from feedsmith.core.fetcher.firecrawl import FirecrawlFetcher
from feedsmith.core.fetcher.playwright import PlaywrightFetcher
from feedsmith.core.fetcher.simple import SimpleFetcher

FETCHERS: dict[str, type[HTMLFetcher]] = {
    'simple': SimpleFetcher,
    'playwright': PlaywrightFetcher,
    'firecrawl': FirecrawlFetcher,
}


def create_fetcher(fetcher_type: str = 'simple', **kwargs) -> HTMLFetcher:
    """Create an HTML fetcher.

    Args:
        fetcher_type: Type of fetcher ('simple', 'playwright', 'firecrawl')
        **kwargs: Additional arguments for the fetcher

    Returns:
        HTMLFetcher instance

    """
    if fetcher_type not in FETCHERS:
        raise ValueError(f'Unknown fetcher type: {fetcher_type}. Choose from: {list(FETCHERS.keys())}')

    return FETCHERS[fetcher_type](**kwargs)


__all__ = ['FETCHERS', 'FirecrawlFetcher', 'HTMLFetcher', 'PlaywrightFetcher', 'SimpleFetcher', 'create_fetcher']
