"""RSS feed parsing logic."""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

import feedparser
from dateutil import parser as date_parser

from ..errors import FeedParseError
from ..models.feed_item import FeedDocument, FeedItem
from ..utils.logging import get_logger, log_with_context


logger = get_logger("RSSParser")


def parse_feed(xml_text: str) -> FeedDocument:
    """
    Parse RSS XML text into feed items.
    
    Args:
        xml_text: Raw RSS 2.0 document
        
    Returns:
        FeedDocument with items in document order
        
    Raises:
        FeedParseError: If the document has no recognisable feed shape
    """
    feed = feedparser.parse(xml_text)

    # No recognised feed format and nothing to ingest
    if not feed.get('version') and not feed.entries:
        error_msg = getattr(feed, 'bozo_exception', 'unrecognised document')
        raise FeedParseError(f"Not an RSS feed: {error_msg}")

    if feed.bozo:
        error_msg = getattr(feed, 'bozo_exception', 'Unknown parsing error')
        log_with_context(
            logger,
            logging.WARNING,
            "RSS feed parsing warning",
            context={"error": str(error_msg)}
        )
    
    channel_link = feed.feed.get('link', '') if feed.feed else ''
    
    items = []
    failed_count = 0
    for entry in feed.entries:
        try:
            items.append(parse_item(entry, channel_link))
        except (ValueError, TypeError, OverflowError) as e:
            failed_count += 1
            log_with_context(
                logger,
                logging.WARNING,
                "Failed to parse feed item",
                context={
                    "error": str(e),
                    "entry_title": entry.get('title', 'Unknown')
                }
            )
    
    if failed_count > 0:
        log_with_context(
            logger,
            logging.WARNING,
            "Some feed items failed to parse",
            context={
                "failed_count": failed_count,
                "success_count": len(items),
                "total_entries": len(feed.entries)
            }
        )
    
    logger.info(f"Successfully parsed {len(items)} feed items")
    return FeedDocument(channel_link=channel_link, items=items)


def parse_item(entry: Any, channel_link: Optional[str] = None) -> FeedItem:
    """
    Convert a feedparser entry into a FeedItem.
    
    Args:
        entry: feedparser entry object
        channel_link: Channel <link>, used later for episode URL fallback
        
    Returns:
        FeedItem
    """
    title = entry.get('title', '')
    
    return FeedItem(
        guid=extract_guid(entry),
        title=title,
        description=entry.get('description', '') or entry.get('summary', ''),
        pub_date=parse_pub_date(entry.get('published', '')),
        audio_url=extract_audio_url(entry),
        duration=entry.get('itunes_duration', ''),
        link=entry.get('link', ''),
        categories=extract_categories(entry),
        channel_link=channel_link
    )


def extract_guid(entry: Any) -> str:
    """
    Textual guid of the item.
    
    feedparser exposes <guid> text as ``id``; fall back to the raw guid
    token, then link, then title.
    """
    guid = entry.get('id') or entry.get('guid')
    if isinstance(guid, dict):
        guid = guid.get('value') or guid.get('#text')
    if guid:
        return str(guid).strip()
    return entry.get('link', '') or entry.get('title', '')


def parse_pub_date(value: str) -> datetime:
    """Parse pubDate; naive values are taken as UTC, missing ones become now."""
    if not value:
        logger.warning("Feed item missing publication date")
        return datetime.now(timezone.utc)
    
    parsed = date_parser.parse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def extract_audio_url(entry: Any) -> str:
    enclosures = entry.get('enclosures') or []
    if enclosures:
        enclosure = enclosures[0]
        return enclosure.get('href', '') or enclosure.get('url', '')
    return ''


def extract_categories(entry: Any) -> List[str]:
    """Category terms of the item; feedparser already lists a single one."""
    categories = []
    for tag in entry.get('tags') or []:
        term = (tag.get('term') or '').strip()
        if term:
            categories.append(term)
    return categories
