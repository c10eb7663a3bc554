"""
Unit tests for RSS feed parsing.

Feature: show-note-search
Tests conversion of RSS 2.0 items into FeedItem objects.
"""

import pytest
from datetime import datetime, timezone
from typing import List, Dict, Any
import xml.etree.ElementTree as ET

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from shownote_search.errors import FeedParseError
from shownote_search.rss.parser import parse_feed


def generate_rss_xml(items_data: List[Dict[str, Any]], channel_link: str = "https://example.com") -> str:
    """
    Generate a valid RSS feed XML string from item data.
    
    Args:
        items_data: List of dictionaries containing item information
        channel_link: Channel <link> value
        
    Returns:
        Valid RSS 2.0 XML string
    """
    rss = ET.Element('rss', version='2.0')
    rss.set('xmlns:itunes', 'http://www.itunes.com/dtds/podcast-1.0.dtd')
    
    channel = ET.SubElement(rss, 'channel')
    ET.SubElement(channel, 'title').text = 'Test Podcast'
    ET.SubElement(channel, 'description').text = 'Test podcast description'
    ET.SubElement(channel, 'link').text = channel_link
    
    for item_data in items_data:
        item = ET.SubElement(channel, 'item')
        
        ET.SubElement(item, 'title').text = item_data['title']
        if item_data.get('guid') is not None:
            guid = ET.SubElement(item, 'guid')
            guid.set('isPermaLink', 'false')
            guid.text = item_data['guid']
        if item_data.get('description') is not None:
            ET.SubElement(item, 'description').text = item_data['description']
        if item_data.get('pub_date'):
            ET.SubElement(item, 'pubDate').text = item_data['pub_date']
        if item_data.get('link'):
            ET.SubElement(item, 'link').text = item_data['link']
        if item_data.get('duration'):
            ET.SubElement(item, 'itunes:duration').text = item_data['duration']
        if item_data.get('audio_url'):
            enclosure = ET.SubElement(item, 'enclosure')
            enclosure.set('url', item_data['audio_url'])
            enclosure.set('length', '1000')
            enclosure.set('type', 'audio/mpeg')
        for category in item_data.get('categories', []):
            ET.SubElement(item, 'category').text = category
    
    return ET.tostring(rss, encoding='unicode')


class TestParseFeed:
    """Test parse_feed on generated documents."""
    
    def test_item_fields(self):
        xml = generate_rss_xml([{
            'title': '123. Foo',
            'guid': 'ossan-123',
            'description': '<h2>リンク</h2><a href="https://x.io">サイトX</a>',
            'pub_date': 'Mon, 01 Jan 2024 10:00:00 +0900',
            'link': 'https://example.com/ep/123',
            'duration': '1:02:03',
            'audio_url': 'https://cdn.example.com/123.mp3',
            'categories': ['Tech', 'Career'],
        }])
        
        document = parse_feed(xml)
        
        assert document.channel_link == "https://example.com"
        assert len(document.items) == 1
        item = document.items[0]
        assert item.guid == "ossan-123"
        assert item.title == "123. Foo"
        assert "<h2>リンク</h2>" in item.description
        assert "サイトX</a>" in item.description
        assert item.pub_date == datetime(2024, 1, 1, 1, 0, tzinfo=timezone.utc)
        assert item.link == "https://example.com/ep/123"
        assert item.duration == "1:02:03"
        assert item.audio_url == "https://cdn.example.com/123.mp3"
        assert item.categories == ["Tech", "Career"]
        assert item.channel_link == "https://example.com"
    
    def test_single_category_is_a_list(self):
        xml = generate_rss_xml([{'title': 'A', 'guid': 'a', 'categories': ['Solo']}])
        
        assert parse_feed(xml).items[0].categories == ["Solo"]
    
    def test_items_keep_document_order(self):
        xml = generate_rss_xml([
            {'title': 'Second', 'guid': '2'},
            {'title': 'First', 'guid': '1'},
        ])
        
        assert [item.guid for item in parse_feed(xml).items] == ["2", "1"]
    
    def test_missing_guid_falls_back_to_link(self):
        xml = generate_rss_xml([{'title': 'A', 'link': 'https://example.com/a'}])
        
        assert parse_feed(xml).items[0].guid == "https://example.com/a"
    
    def test_missing_pub_date_is_aware_now(self):
        xml = generate_rss_xml([{'title': 'A', 'guid': 'a'}])
        
        pub_date = parse_feed(xml).items[0].pub_date
        
        assert pub_date.tzinfo is not None
        assert abs((datetime.now(timezone.utc) - pub_date).total_seconds()) < 60
    
    def test_missing_optional_fields(self):
        xml = generate_rss_xml([{'title': 'A', 'guid': 'a'}])
        
        item = parse_feed(xml).items[0]
        
        assert item.description == ""
        assert item.audio_url == ""
        assert item.duration == ""
        assert item.categories == []
    
    def test_empty_channel(self):
        document = parse_feed(generate_rss_xml([]))
        
        assert document.items == []
    
    def test_not_a_feed(self):
        with pytest.raises(FeedParseError):
            parse_feed("this is not a feed")
