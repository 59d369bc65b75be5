import pytest

from feedsmith.core.dom import parse_document
from feedsmith.core.extraction import reduce_content
from feedsmith.models import ContentFormat


@pytest.fixture
def content_document(content_page_html):
    return parse_document(content_page_html)


def test_text_mode(content_document):
    assert reduce_content(content_document, 'div.article-body', ContentFormat.TEXT) == 'Full story here.'


def test_html_mode(content_document):
    html = reduce_content(content_document, 'div.article-body', 'html')

    assert '<p>Full <b>story</b> here.</p>' in html


def test_first_match_only():
    document = parse_document('<p class="c">one</p><p class="c">two</p>')

    assert reduce_content(document, 'p.c') == 'one'


@pytest.mark.parametrize('selector', [None, '', 'section.missing', 'div['])
def test_misses_give_empty_string(content_document, selector):
    assert reduce_content(content_document, selector) == ''
