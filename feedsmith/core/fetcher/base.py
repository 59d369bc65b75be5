"""Abstract base class for HTML fetchers."""

from abc import ABC, abstractmethod

from feedsmith.models import FetchResult

BLOCK_STATUS_CODES = (403, 429, 503)

# Only checked near the top of the page, where challenge pages put them
BLOCK_PAGE_MARKERS = {
    'challenge-form': 'Cloudflare challenge',
    'cf-captcha': 'Cloudflare CAPTCHA',
    'access denied</title>': 'Access denied page',
    'rate limit exceeded': 'Rate limit',
    'please verify you are human': 'Human verification',
}


class HTMLFetcher(ABC):
    """Retrieves raw page HTML for the pipeline.

    Implementations return an unsuccessful ``FetchResult`` for network and
    HTTP failures and raise ``BotDetectionError`` for block pages. Rendering and
    JavaScript execution are entirely their concern.
    """

    @abstractmethod
    def fetch(self, url: str) -> FetchResult:
        """Fetch HTML from a URL.

        Args:
            url: URL to fetch

        Returns:
            FetchResult with HTML and status

        Raises:
            BotDetectionError: If the response is a block page

        """

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _check_for_bot_detection(self, html: str, status_code: int) -> tuple[bool, list[str]]:
        """Check whether a response is a bot block page.

        Args:
            html: Response body
            status_code: HTTP status code

        Returns:
            Tuple of (is_blocked, indicators).

        """
        if status_code in BLOCK_STATUS_CODES:
            return True, [f'HTTP {status_code}']

        head = html[:2000].lower()
        found = [message for marker, message in BLOCK_PAGE_MARKERS.items() if marker in head]
        return bool(found), found
