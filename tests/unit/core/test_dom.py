import pytest

from feedsmith.core.dom import SoupNode, parse_document
from feedsmith.utils.exceptions import InvalidSelectorError


def test_node_properties(list_document):
    article = list_document.select_one('article.featured')

    assert isinstance(article, SoupNode)
    assert article.tag_name == 'article'
    assert article.classes == ['post', 'featured']
    assert article.id is None
    assert article.parent.id == 'posts'


def test_parent_stops_at_html():
    document = parse_document('<html><body><p>x</p></body></html>')
    html = document.select_one('html')

    assert html.parent is None


def test_element_children_skip_text_nodes(list_document):
    main = list_document.select_one('#posts')
    children = main.element_children()

    assert [child.tag_name for child in children] == ['article', 'article', 'article']


def test_attribute_joins_multi_valued():
    document = parse_document('<a rel="nofollow noopener" href="/x">x</a>')
    link = document.select_one('a')

    assert link.attribute('rel') == 'nofollow noopener'
    assert link.attribute('href') == '/x'
    assert link.attribute('title') is None


def test_text_and_inner_html():
    document = parse_document('<div class="c"><p>Hello <b>world</b></p></div>')
    div = document.select_one('div.c')

    assert div.text() == 'Hello world'
    assert div.inner_html() == '<p>Hello <b>world</b></p>'


def test_nodes_compare_by_element(list_document):
    first = list_document.select('article')[0]
    again = list_document.select_one('article.featured')

    assert first == again
    assert hash(first) == hash(again)
    assert first != list_document.select('article')[1]


def test_select_scoped_to_node(list_document):
    second = list_document.select('article')[1]

    assert second.select_one('h2').text() == 'Second post'
    assert len(second.select('a')) == 1


def test_closest(list_document):
    title = list_document.select('h2.post-title')[2]

    container = title.closest('article.post')
    assert container == list_document.select('article.post')[2]
    assert title.closest('section') is None


@pytest.mark.parametrize('selector', ['', '   ', 'div[', '!!', 'a:not('])
def test_invalid_selectors_raise(list_document, selector):
    with pytest.raises(InvalidSelectorError):
        list_document.select(selector)


def test_invalid_selector_in_closest(list_document):
    title = list_document.select_one('h2')

    with pytest.raises(InvalidSelectorError):
        title.closest('article[')
