"""Raw feed item as read from the RSS document."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union


@dataclass
class FeedItem:
    """One <item> of the podcast feed, before it becomes an Episode."""
    
    guid: str
    title: str
    description: str
    pub_date: datetime
    audio_url: str = ""
    duration: str = ""
    link: str = ""
    # A single category may arrive as a bare string
    categories: Union[List[str], str, None] = field(default_factory=list)
    channel_link: Optional[str] = None


@dataclass
class FeedDocument:
    """Parsed feed: channel-level link plus its items in document order."""
    
    channel_link: str
    items: List[FeedItem] = field(default_factory=list)
