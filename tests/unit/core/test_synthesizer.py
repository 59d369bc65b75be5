import pytest

from feedsmith.core.dom import parse_document
from feedsmith.core.synthesis import SelectorSynthesizer


@pytest.fixture
def synthesizer():
    return SelectorSynthesizer()


def test_id_short_circuits(synthesizer):
    document = parse_document('<div id="main"><section><span class="x">a</span></section></div>')
    span = document.select_one('span')

    assert synthesizer.synthesize(span) == '#main > section > span.x'


def test_clicked_element_with_id(synthesizer):
    document = parse_document('<div><p id="lead">a</p></div>')

    assert synthesizer.synthesize(document.select_one('p')) == '#lead'


def test_nth_child_for_repeated_siblings(synthesizer, list_document):
    second = list_document.select('article.post')[1]

    assert synthesizer.synthesize(second) == '#posts > article.post:nth-child(2)'


def test_nth_child_counts_all_element_children(synthesizer):
    document = parse_document('<div class="list"><h3>t</h3><p>a</p><p>b</p></div>')
    second_p = document.select('p')[1]

    selector = synthesizer.synthesize(second_p)

    assert selector == 'div.list > p:nth-child(3)'
    assert document.select(selector) == [second_p]


def test_no_nth_child_for_unique_tag(synthesizer):
    document = parse_document('<div class="card"><h2>t</h2><p>a</p></div>')

    assert synthesizer.synthesize(document.select_one('h2')) == 'div.card > h2'


def test_stop_ancestor_scopes_field(synthesizer, list_document):
    title = list_document.select('h2.post-title')[1]
    container = title.closest('article.post')

    selector = synthesizer.synthesize(title, stop_ancestor=container)

    assert selector == 'h2.post-title'
    assert all(article.select_one(selector) for article in list_document.select('article.post'))


def test_reserved_classes_are_skipped(synthesizer):
    document = parse_document('<div><span class="__highlight title __hover">x</span></div>')

    assert synthesizer.synthesize(document.select_one('span')) == 'div > span.title'


def test_at_most_two_classes(synthesizer):
    document = parse_document('<p class="a b c d">x</p>')

    assert synthesizer.synthesize(document.select_one('p')) == 'p.a.b'


def test_caps_segments_keeping_innermost(synthesizer):
    document = parse_document(
        '<div class="l1"><div class="l2"><div class="l3"><div class="l4"><em>x</em></div></div></div></div>'
    )

    selector = synthesizer.synthesize(document.select_one('em'))

    assert selector == 'div.l2 > div.l3 > div.l4 > em'


def test_escapes_identifiers(synthesizer):
    document = parse_document('<div><p id="1st:item">a</p><span class="md:flex">b</span></div>')
    p = document.select_one('p')
    span = document.select_one('span')

    p_selector = synthesizer.synthesize(p)
    span_selector = synthesizer.synthesize(span)

    assert document.select(p_selector) == [p]
    assert document.select(span_selector) == [span]


def test_body_click_falls_back_to_simple_selector(synthesizer):
    document = parse_document('<html><body class="home"><p>x</p></body></html>')

    assert synthesizer.synthesize(document.select_one('body')) == 'body.home'


def test_clicking_stop_ancestor_itself(synthesizer, list_document):
    article = list_document.select_one('article.featured')

    assert synthesizer.synthesize(article, stop_ancestor=article) == 'article.post.featured'


def test_simple_selector(synthesizer):
    document = parse_document('<div class="article-body __outline main extra">x</div>')

    assert synthesizer.simple_selector(document.select_one('div')) == 'div.article-body.main'
