"""Data models for podcast episodes and their show notes."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional


@dataclass
class ExtractedLink:
    """A link pulled out of a show-note HTML fragment. Never persisted."""
    
    text: str
    url: str
    source: str = "anchor"  # "anchor" or "bare"
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert ExtractedLink to dictionary for JSON serialization."""
        return {
            "text": self.text,
            "url": self.url
        }


@dataclass
class ShowNote:
    """A titled section of an episode description."""
    
    id: int
    title: str
    content: str  # HTML fragment
    timestamp: Optional[str]  # "H:MM:SS" marker, if any
    episode_id: int
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert ShowNote to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "timestamp": self.timestamp,
            "episodeId": self.episode_id
        }


@dataclass
class Episode:
    """Represents a podcast episode ingested from the feed."""
    
    id: int
    guid: str
    number: Optional[str]  # None until derived or repaired
    title: str
    description: str  # raw HTML
    audio_url: str
    publication_date: datetime
    duration: str
    url: str
    tags: List[str] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert Episode to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "guid": self.guid,
            "number": self.number,
            "title": self.title,
            "description": self.description,
            "audioUrl": self.audio_url,
            "publicationDate": self.publication_date.isoformat(),
            "duration": self.duration,
            "url": self.url,
            "tags": list(self.tags)
        }


@dataclass
class NewEpisode:
    """Episode fields supplied by the ingestor before the store assigns an id."""
    
    guid: str
    number: Optional[str]
    title: str
    description: str
    audio_url: str
    publication_date: datetime
    duration: str
    url: str
    tags: List[str] = field(default_factory=list)


@dataclass
class NewShowNote:
    """Show-note fields supplied by the ingestor before the store assigns an id."""
    
    title: str
    content: str
    timestamp: Optional[str]
    episode_id: int
