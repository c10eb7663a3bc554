"""Feed transport and RSS parsing."""

from .fetcher import FeedFetcher
from .feed_manager import FeedManager, RefreshResult
from .parser import parse_feed, parse_item

__all__ = ["FeedFetcher", "FeedManager", "RefreshResult", "parse_feed", "parse_item"]
