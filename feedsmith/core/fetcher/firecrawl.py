"""Fetcher backed by the Firecrawl scrape API, which renders pages remotely."""

import logging
import time

import requests

from feedsmith.core.fetcher.base import HTMLFetcher
from feedsmith.models import FetchResult
from feedsmith.utils.retry import fetch_retryer

FIRECRAWL_SCRAPE_URL = 'https://api.firecrawl.dev/v1/scrape'


class FirecrawlFetcher(HTMLFetcher):
    """Asks Firecrawl for the rendered HTML of a page.

    Only ``data.html`` of the response is used.

    Attributes:
        api_key: Firecrawl API key
        formats: Output formats requested from Firecrawl
        only_main_content: Let Firecrawl strip navigation and footers
        wait_for: Milliseconds Firecrawl waits before capturing the page
        timeout: Request timeout in seconds

    """

    def __init__(
        self,
        api_key: str,
        formats: list[str] | None = None,
        only_main_content: bool = False,
        wait_for: int | None = None,
        timeout: int = 60,
        max_attempts: int = 2,
        session: requests.Session | None = None,
    ):
        if not api_key:
            raise ValueError('Firecrawl API key required (set FIRECRAWL_API_KEY)')
        self.api_key = api_key
        self.formats = formats or ['html']
        self.only_main_content = only_main_content
        self.wait_for = wait_for
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    def fetch(self, url: str) -> FetchResult:
        start_time = time.time()
        payload: dict = {
            'url': url,
            'formats': self.formats,
            'onlyMainContent': self.only_main_content,
        }
        if self.wait_for is not None:
            payload['waitFor'] = self.wait_for

        try:
            response = self._post(payload)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            self.logger.warning(f'Firecrawl request for {url} failed: {e}')
            return FetchResult(url=url, block_reason=str(e), fetch_time=time.time() - start_time)

        if not response.ok or not data.get('success', True):
            reason = data.get('error') or f'Request failed with status {response.status_code}'
            return FetchResult(
                url=url,
                status_code=response.status_code,
                block_reason=reason,
                fetch_time=time.time() - start_time,
            )

        html = (data.get('data') or {}).get('html')
        if not html:
            return FetchResult(
                url=url,
                status_code=response.status_code,
                block_reason='No HTML in Firecrawl response',
                fetch_time=time.time() - start_time,
            )

        return FetchResult(url=url, html=html, status_code=response.status_code, fetch_time=time.time() - start_time)

    def _post(self, payload: dict) -> requests.Response:
        for attempt in fetch_retryer(self.max_attempts):
            with attempt:
                return self.session.post(
                    FIRECRAWL_SCRAPE_URL,
                    json=payload,
                    headers={'Authorization': f'Bearer {self.api_key}', 'Content-Type': 'application/json'},
                    timeout=self.timeout,
                )
        raise AssertionError('unreachable')

    def close(self) -> None:
        self.session.close()
