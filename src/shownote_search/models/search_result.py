"""Data models for search results. Response-only, never stored."""

from dataclasses import dataclass, field
from typing import Dict, Any, List

from .episode import Episode, ShowNote


@dataclass
class Highlight:
    """Which fields of a result matched the query."""
    
    episode_title: bool = False
    link_texts: List[str] = field(default_factory=list)
    query: str = ""
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "episodeTitle": self.episode_title,
            "linkTexts": list(self.link_texts),
            "query": self.query
        }


@dataclass
class ShowNoteMatch:
    """A show note paired with its query-relative match flag."""
    
    note: ShowNote
    matched: bool = False
    
    def to_dict(self) -> Dict[str, Any]:
        data = self.note.to_dict()
        data["matched"] = self.matched
        return data


@dataclass
class SearchResult:
    """One episode in a search or listing response."""
    
    episode: Episode
    show_notes: List[ShowNoteMatch] = field(default_factory=list)
    highlighted: Highlight = field(default_factory=Highlight)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert SearchResult to dictionary for JSON serialization."""
        return {
            "episode": self.episode.to_dict(),
            "showNotes": [match.to_dict() for match in self.show_notes],
            "highlighted": self.highlighted.to_dict()
        }
