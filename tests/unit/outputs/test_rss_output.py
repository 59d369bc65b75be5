import xml.etree.ElementTree as ET

import pytest

from feedsmith.models import FeedConfig, Record
from feedsmith.outputs import format_rss, xml_escape


@pytest.fixture
def config():
    return FeedConfig(name='Example Blog', source_url='https://blog.example.com/')


@pytest.fixture
def records():
    return [
        Record(
            title='First post',
            description='Summary',
            date='2024-01-15',
            link='https://blog.example.com/posts/first',
            image='https://blog.example.com/img/first.png',
        ),
        Record(title='No link', date='not a date'),
        Record(description='Only a description', content='<p>Full</p>'),
    ]


def test_document_structure(records, config):
    xml = format_rss(records, config)

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<rss version="2.0">')
    root = ET.fromstring(xml.encode('utf-8'))
    channel = root.find('channel')
    assert channel.findtext('title') == 'Example Blog'
    assert channel.findtext('link') == 'https://blog.example.com/'
    assert channel.findtext('description') == 'Feed generated from https://blog.example.com/'
    assert len(channel.findall('item')) == len(records)


def test_channel_description_from_config(records):
    config = FeedConfig(name='N', source_url='https://x.com', description='Hand written')

    channel = ET.fromstring(format_rss(records, config).encode('utf-8')).find('channel')

    assert channel.findtext('description') == 'Hand written'


def test_item_fields(records, config):
    items = ET.fromstring(format_rss(records, config).encode('utf-8')).findall('channel/item')
    first = items[0]

    assert first.findtext('title') == 'First post'
    assert first.findtext('description') == 'Summary'
    assert first.findtext('link') == 'https://blog.example.com/posts/first'
    assert first.findtext('pubDate') == 'Mon, 15 Jan 2024 00:00:00 +0000'
    guid = first.find('guid')
    assert guid.text == 'https://blog.example.com/posts/first'
    assert guid.get('isPermaLink') == 'true'
    enclosure = first.find('enclosure')
    assert enclosure.get('url') == 'https://blog.example.com/img/first.png'
    assert enclosure.get('type') == 'image/png'


def test_missing_values(records, config):
    items = ET.fromstring(format_rss(records, config).encode('utf-8')).findall('channel/item')
    second = items[1]

    assert second.find('guid') is None
    assert second.find('pubDate') is None
    assert second.find('enclosure') is None
    assert second.findtext('description') == ''
    assert second.findtext('link') == ''


def test_content_replaces_description(records, config):
    items = ET.fromstring(format_rss(records, config).encode('utf-8')).findall('channel/item')

    assert items[2].findtext('description') == '<p>Full</p>'
    assert items[2].findtext('title') == ''


def test_escaping(config):
    record = Record(title='Tom & "Jerry" <3 \'it\'', link='https://x.com/?a=1&b=2')

    xml = format_rss([record], config)

    assert '<title>Tom &amp; &quot;Jerry&quot; &lt;3 &apos;it&apos;</title>' in xml
    item = ET.fromstring(xml.encode('utf-8')).find('channel/item')
    assert item.findtext('title') == 'Tom & "Jerry" <3 \'it\''
    assert item.findtext('link') == 'https://x.com/?a=1&b=2'


def test_control_characters_dropped(config):
    xml = format_rss([Record(title='bad\x0bchar\x00s')], config)

    assert ET.fromstring(xml.encode('utf-8')).findtext('channel/item/title') == 'badchars'


def test_empty_feed(config):
    channel = ET.fromstring(format_rss([], config).encode('utf-8')).find('channel')

    assert channel.findall('item') == []
    assert channel.findtext('title') == 'Example Blog'


def test_xml_escape_none():
    assert xml_escape(None) == ''
