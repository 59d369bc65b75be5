"""Browser-like request headers for list and content page fetches."""

import random

USER_AGENTS = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
    'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15',
)

ACCEPT_HTML = 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8'


def pick_user_agent(rotate: bool = True) -> str:
    """Return a user agent string, random when rotating, otherwise the first Chrome one."""
    if rotate:
        return random.choice(USER_AGENTS)
    return USER_AGENTS[0]


def browser_headers(user_agent: str | None = None, referer: str | None = None) -> dict[str, str]:
    """Build headers that look like a regular browser navigation.

    Args:
        user_agent: User agent to send. A random one is picked when None.
        referer: Page we pretend to come from, used for content-page fetches.

    Returns:
        Header dictionary for requests.

    """
    user_agent = user_agent or pick_user_agent()
    headers = {
        'User-Agent': user_agent,
        'Accept': ACCEPT_HTML,
        'Accept-Language': 'en-US,en;q=0.9',
        'Accept-Encoding': 'gzip, deflate',
        'Connection': 'keep-alive',
        'Upgrade-Insecure-Requests': '1',
    }

    # Sec-Fetch-* is only sent by Chromium browsers
    if 'Chrome' in user_agent:
        headers.update(
            {
                'Sec-Fetch-Dest': 'document',
                'Sec-Fetch-Mode': 'navigate',
                'Sec-Fetch-Site': 'same-origin' if referer else 'none',
                'Sec-Fetch-User': '?1',
            }
        )

    if referer:
        headers['Referer'] = referer

    return headers
