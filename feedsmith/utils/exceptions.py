"""Custom exceptions for feedsmith."""


class FeedsmithError(Exception):
    """Base class for all feedsmith exceptions."""

    pass


class InvalidSelectorError(FeedsmithError):
    """Raised when a CSS selector cannot be parsed or evaluated."""

    def __init__(self, selector: str, reason: str):
        """Initialize invalid selector error.

        Args:
            selector: The CSS selector that failed
            reason: Why the selector could not be used

        """
        self.selector = selector
        self.reason = reason
        super().__init__(f"Invalid selector '{selector}': {reason}")


class FetchError(FeedsmithError):
    """Raised when a page could not be retrieved."""

    def __init__(self, url: str, reason: str):
        """Initialize fetch error.

        Args:
            url: URL that could not be fetched
            reason: Short human-readable failure reason

        """
        self.url = url
        self.reason = reason
        super().__init__(f'Could not fetch {url}: {reason}')


class BotDetectionError(FetchError):
    """Raised when bot detection is triggered."""

    def __init__(self, url: str, status_code: int, indicators: list[str]):
        """Initialize bot detection error.

        Args:
            url: URL where bot detection was triggered
            status_code: HTTP status code received
            indicators: List of bot detection indicators found

        """
        self.status_code = status_code
        self.indicators = indicators
        super().__init__(url, f'bot detection triggered (status={status_code}): {", ".join(indicators)}')


class UnsupportedFormatError(FeedsmithError):
    """Raised when an unknown output format is requested."""

    def __init__(self, requested: str, supported: list[str]):
        self.requested = requested
        self.supported = supported
        super().__init__(f"Unsupported format '{requested}'. Choose from: {', '.join(supported)}")


class FeedNotFoundError(FeedsmithError):
    """Raised when a stored feed or template does not exist."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f'{kind} not found: {identifier}')
