"""Data models for episodes, show notes, feed items and search results."""

from .episode import Episode, ExtractedLink, NewEpisode, NewShowNote, ShowNote
from .feed_item import FeedDocument, FeedItem
from .search_result import Highlight, SearchResult, ShowNoteMatch

__all__ = [
    "Episode",
    "ExtractedLink",
    "FeedDocument",
    "FeedItem",
    "Highlight",
    "NewEpisode",
    "NewShowNote",
    "SearchResult",
    "ShowNote",
    "ShowNoteMatch",
]
