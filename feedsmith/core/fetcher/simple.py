"""Plain HTTP fetcher with browser-like headers."""

import logging
import time

import requests

from feedsmith.core.fetcher.base import HTMLFetcher
from feedsmith.models import FetchResult
from feedsmith.utils.exceptions import BotDetectionError
from feedsmith.utils.headers import browser_headers, pick_user_agent
from feedsmith.utils.retry import fetch_retryer


class SimpleFetcher(HTMLFetcher):
    """Fetches pages with requests. Does not run JavaScript.

    Attributes:
        timeout: Request timeout in seconds
        rotate_user_agent: Whether to pick a random user agent per request
        max_attempts: Attempts for connection errors and timeouts
        session: Shared requests session

    """

    def __init__(
        self,
        timeout: int = 30,
        rotate_user_agent: bool = True,
        max_attempts: int = 2,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout
        self.rotate_user_agent = rotate_user_agent
        self.max_attempts = max_attempts
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    def fetch(self, url: str) -> FetchResult:
        """Fetch HTML over HTTP.

        Args:
            url: The page URL

        Returns:
            FetchResult; ``success`` is False on network errors and non-2xx responses.

        """
        start_time = time.time()
        headers = browser_headers(user_agent=pick_user_agent(self.rotate_user_agent))

        try:
            response = self._get(url, headers)
        except requests.RequestException as e:
            self.logger.warning(f'Request to {url} failed: {e}')
            return FetchResult(url=url, block_reason=str(e), fetch_time=time.time() - start_time)

        html = response.text
        status_code = response.status_code

        is_blocked, indicators = self._check_for_bot_detection(html, status_code)
        if is_blocked:
            raise BotDetectionError(url, status_code, indicators)

        if not response.ok:
            return FetchResult(
                url=url,
                status_code=status_code,
                block_reason=f'HTTP {status_code}',
                fetch_time=time.time() - start_time,
            )

        return FetchResult(url=url, html=html, status_code=status_code, fetch_time=time.time() - start_time)

    def _get(self, url: str, headers: dict[str, str]) -> requests.Response:
        for attempt in fetch_retryer(self.max_attempts, wait_min=0.5, wait_max=5):
            with attempt:
                return self.session.get(url, headers=headers, timeout=self.timeout, allow_redirects=True)
        raise AssertionError('unreachable')

    def close(self) -> None:
        self.session.close()
