import pytest

from feedsmith.core.dom import parse_document
from feedsmith.models import FeedConfig, FetchResult, SelectorSet


@pytest.fixture
def list_page_html():
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Example Blog</title>
    </head>
    <body>
        <main id="posts">
            <article class="post featured">
                <h2 class="post-title">First post</h2>
                <p class="summary">The very first one.</p>
                <time class="date">2024-01-15</time>
                <a class="more" href="/posts/first">Read more</a>
                <img class="thumb" src="/img/first.jpg">
            </article>
            <article class="post">
                <h2 class="post-title">Second post</h2>
                <p class="summary">Another one.</p>
                <time class="date">January 20, 2024</time>
                <a class="more" href="https://other.example.org/second">Read more</a>
            </article>
            <article class="post">
                <h2 class="post-title">Third post</h2>
                <p class="summary">Yet another.</p>
                <time class="date">not a date</time>
                <a class="more" href="/posts/third">Read more</a>
            </article>
        </main>
    </body>
    </html>
    """


@pytest.fixture
def content_page_html():
    return """
    <html>
    <body>
        <header>Site header</header>
        <div class="article-body">
            <p>Full <b>story</b> here.</p>
        </div>
    </body>
    </html>
    """


@pytest.fixture
def list_document(list_page_html):
    return parse_document(list_page_html, url='https://blog.example.com/')


@pytest.fixture
def blog_selectors():
    return SelectorSet(
        container='article.post',
        title='h2.post-title',
        description='p.summary',
        date='time.date',
        link='a.more',
        image='img.thumb',
    )


@pytest.fixture
def blog_config(blog_selectors):
    return FeedConfig(name='Example Blog', source_url='https://blog.example.com/', selectors=blog_selectors)


@pytest.fixture
def page_fetcher(mocker):
    """Fetcher mock serving HTML by URL; unknown URLs fail like an HTTP 404."""

    def build(pages: dict[str, str]):
        def fetch(url):
            if url in pages:
                return FetchResult(url=url, html=pages[url], status_code=200)
            return FetchResult(url=url, status_code=404, block_reason='HTTP 404')

        fetcher = mocker.Mock()
        fetcher.fetch.side_effect = fetch
        return fetcher

    return build


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line('markers', 'integration: marks tests as integration tests')
    config.addinivalue_line('markers', 'unit: marks tests as unit tests')


def pytest_collection_modifyitems(config, items):
    """Apply directory-based marks to collected test items."""

    for item in items:
        # Get the test file path
        if hasattr(item, 'fspath'):
            file_path = str(item.fspath)

            # Add marks based on directory
            if '/tests/integration/' in file_path:
                item.add_marker(pytest.mark.integration)
            elif '/tests/unit/' in file_path:
                item.add_marker(pytest.mark.unit)
