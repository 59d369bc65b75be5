"""Playwright-based fetcher for pages that render client-side."""

import time

from feedsmith.core.fetcher.base import HTMLFetcher
from feedsmith.models import FetchResult
from feedsmith.utils.exceptions import BotDetectionError


class PlaywrightFetcher(HTMLFetcher):
    """Loads pages in headless Chromium and returns the rendered DOM.

    Slower than SimpleFetcher, needed for sites that build their lists in JavaScript.
    """

    def __init__(self, timeout: int = 60000, headless: bool = True, settle_ms: int = 1000):
        """Initialize Playwright fetcher.

        Args:
            timeout: Page load timeout in milliseconds
            headless: Run browser in headless mode
            settle_ms: Extra wait after network idle for late rendering

        """
        self.timeout = timeout
        self.headless = headless
        self.settle_ms = settle_ms

    def fetch(self, url: str) -> FetchResult:
        start_time = time.time()

        try:
            from playwright.sync_api import Error as PlaywrightError
            from playwright.sync_api import sync_playwright
        except ImportError as err:
            raise ImportError(
                'Playwright not installed. Install with: pip install "feedsmith[browser]" && playwright install chromium'
            ) from err

        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(headless=self.headless)
                try:
                    page = browser.new_page(viewport={'width': 1440, 'height': 900}, locale='en-US')
                    response = page.goto(url, wait_until='networkidle', timeout=self.timeout)
                    page.wait_for_timeout(self.settle_ms)
                    html = page.content()
                    status_code = response.status if response else None
                finally:
                    browser.close()
        except PlaywrightError as e:
            return FetchResult(url=url, block_reason=str(e), fetch_time=time.time() - start_time)

        is_blocked, indicators = self._check_for_bot_detection(html, status_code or 200)
        if is_blocked:
            raise BotDetectionError(url, status_code or 0, indicators)

        return FetchResult(url=url, html=html, status_code=status_code, fetch_time=time.time() - start_time)
