import pytest

from feedsmith.core.dom import parse_document
from feedsmith.core.extraction import FieldExtractor, extract
from feedsmith.models import SelectorSet


def test_extracts_all_fields(list_document, blog_selectors):
    records = extract(list_document, blog_selectors, source_url='https://blog.example.com/')

    assert len(records) == 3
    first = records[0]
    assert first.title == 'First post'
    assert first.description == 'The very first one.'
    assert first.date == '2024-01-15'
    assert first.link == 'https://blog.example.com/posts/first'
    assert first.image == 'https://blog.example.com/img/first.jpg'
    assert first.content is None


def test_absolute_links_kept(list_document, blog_selectors):
    records = extract(list_document, blog_selectors)

    assert records[1].link == 'https://other.example.org/second'


def test_missing_field_is_omitted(list_document, blog_selectors):
    records = extract(list_document, blog_selectors)

    assert records[1].image is None
    assert 'image' not in records[1].present_fields()


def test_raw_date_text_is_preserved(list_document, blog_selectors):
    records = extract(list_document, blog_selectors)

    assert records[2].date == 'not a date'


@pytest.mark.parametrize(
    'selectors',
    [
        SelectorSet(title='h2'),
        SelectorSet(container='section.nothing', title='h2'),
        SelectorSet(container='article[', title='h2'),
    ],
)
def test_unusable_container_gives_nothing(list_document, selectors):
    assert extract(list_document, selectors) == []


def test_max_records_keeps_document_order():
    html = ''.join(f'<div class="item"><span>{n}</span></div>' for n in range(25))
    document = parse_document(html)

    records = extract(document, SelectorSet(container='div.item', title='span'), max_records=10)

    assert [record.title for record in records] == [str(n) for n in range(10)]


def test_extractor_default_cap():
    html = ''.join(f'<li><b>{n}</b></li>' for n in range(15))
    extractor = FieldExtractor(max_records=4)

    records = extractor.extract(parse_document(html), SelectorSet(container='li', title='b'))

    assert len(records) == 4
    assert len(extractor.extract(parse_document(html), SelectorSet(container='li', title='b'), max_records=12)) == 12


def test_empty_containers_are_dropped():
    html = """
    <article class="post"><h2>One</h2><a href="/1">1</a></article>
    <article class="post"><h2>Two</h2><a href="/2">2</a></article>
    <article class="post"><p>Neither</p></article>
    """
    document = parse_document(html, url='https://x.com/')

    records = extract(document, SelectorSet(container='article.post', title='h2', link='a'))

    assert [record.title for record in records] == ['One', 'Two']
    assert [record.link for record in records] == ['https://x.com/1', 'https://x.com/2']


def test_anchor_container_supplies_link():
    html = '<a class="card" href="/x"><h3>Card</h3></a>'
    document = parse_document(html)

    records = extract(document, SelectorSet(container='a.card', title='h3'), source_url='https://x.com/blog')

    assert records[0].link == 'https://x.com/x'


def test_link_selector_beats_anchor_container():
    html = '<a class="card" href="/outer"><span data-href="/inner" class="go">Go</span></a>'
    document = parse_document(html)

    records = extract(document, SelectorSet(container='a.card', link='span.go'), source_url='https://x.com/')

    # No href on the matched element, so its text is used
    assert records[0].link == 'Go'


def test_invalid_field_selector_drops_field(list_document):
    selectors = SelectorSet(container='article.post', title='h2', date='time[')

    records = extract(list_document, selectors)

    assert len(records) == 3
    assert all(record.date is None for record in records)
    assert records[0].title == 'First post'


def test_whitespace_only_text_is_absent():
    html = '<div class="i"><h2>   </h2><p> Body </p></div>'

    records = extract(parse_document(html), SelectorSet(container='div.i', title='h2', description='p'))

    assert records[0].title is None
    assert records[0].description == 'Body'


def test_text_includes_nested_markup():
    html = '<div class="i"><h2>Hello <em>there</em></h2></div>'

    records = extract(parse_document(html), SelectorSet(container='div.i', title='h2'))

    assert records[0].title == 'Hello there'


def test_base_url_falls_back_to_document_url():
    document = parse_document('<div class="i"><img src="pic.png"></div>', url='https://x.com/news/')

    records = extract(document, SelectorSet(container='div.i', image='img'))

    assert records[0].image == 'https://x.com/news/pic.png'


def test_negative_cap_is_rejected(list_document, blog_selectors):
    with pytest.raises(ValueError, match='max_records must not be negative'):
        extract(list_document, blog_selectors, max_records=-1)

    with pytest.raises(ValueError, match='max_records must not be negative'):
        FieldExtractor().extract(list_document, blog_selectors, max_records=-1)


def test_zero_cap_reads_nothing(list_document, blog_selectors):
    assert extract(list_document, blog_selectors, max_records=0) == []
