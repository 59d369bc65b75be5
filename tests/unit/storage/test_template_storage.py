import pytest

from feedsmith.models import ContentFormat, SelectorSet
from feedsmith.storage import TemplateStorage, extract_domain
from feedsmith.utils.exceptions import FeedNotFoundError


@pytest.fixture
def storage(tmp_path):
    return TemplateStorage(str(tmp_path / 'templates'))


@pytest.mark.parametrize(
    ('url', 'expected'),
    [
        ('https://www.example.com/news', 'example.com'),
        ('http://blog.example.com:8080/x', 'blog.example.com'),
        ('not a url', ''),
        ('http://[broken', ''),
    ],
)
def test_extract_domain(url, expected):
    assert extract_domain(url) == expected


def test_save_and_get(storage):
    selectors = SelectorSet(container='article', title='h2')

    template = storage.save('example.com', 'news', selectors, content_selector='div.body')

    loaded = storage.get('example.com', 'news')
    assert loaded.id == template.id
    assert loaded.selectors == selectors
    assert loaded.content_selector == 'div.body'
    assert loaded.content_format is ContentFormat.TEXT


def test_save_upserts_on_domain_and_name(storage):
    first = storage.save('example.com', 'news', SelectorSet(container='article'))

    second = storage.save('example.com', 'news', SelectorSet(container='li.item'), content_format=ContentFormat.HTML)

    templates = storage.list_for_domain('example.com')
    assert len(templates) == 1
    assert second.id == first.id
    assert second.created_at == first.created_at
    assert templates[0].selectors.container == 'li.item'
    assert templates[0].content_format is ContentFormat.HTML


def test_list_is_per_domain_newest_first(storage):
    storage.save('example.com', 'old', SelectorSet(container='a'))
    storage.save('other.org', 'elsewhere', SelectorSet(container='b'))
    storage.save('example.com', 'new', SelectorSet(container='c'))
    storage.save('example.com', 'old', SelectorSet(container='d'))

    assert [t.name for t in storage.list_for_domain('example.com')] == ['old', 'new']
    assert [t.name for t in storage.list_for_domain('other.org')] == ['elsewhere']
    assert storage.list_for_domain('unknown.net') == []


def test_delete(storage):
    keep = storage.save('example.com', 'keep', SelectorSet(container='a'))
    drop = storage.save('example.com', 'drop', SelectorSet(container='b'))

    storage.delete(drop.id)

    assert [t.id for t in storage.list_for_domain('example.com')] == [keep.id]
    with pytest.raises(FeedNotFoundError):
        storage.delete(drop.id)


def test_get_unknown(storage):
    with pytest.raises(FeedNotFoundError, match='Template not found: example.com/none'):
        storage.get('example.com', 'none')
