"""Search and listing over the stored episode corpus."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import EpisodeNotFoundError
from ..extraction.links import extract_anchor_links, extract_links
from ..models.episode import Episode, ShowNote
from ..models.search_result import SearchResult, ShowNoteMatch
from ..storage.base import Storage
from ..utils.logging import get_logger, log_with_context
from .matcher import SearchMatcher, normalize_query
from .ranker import paginate, rank


logger = get_logger("SearchEngine")


# An empty query lists this many of the latest episodes
LATEST_EPISODES_LIMIT = 10


@dataclass
class EpisodeInspection:
    """Debug view of one episode: its notes, every link, and query hits."""
    
    episode: Episode
    show_notes: List[ShowNote]
    links: List[Dict[str, Any]] = field(default_factory=list)
    query: str = ""
    contains_query: Optional[Dict[str, bool]] = None
    
    def to_dict(self) -> Dict[str, Any]:
        data = {
            "episode": self.episode.to_dict(),
            "showNotes": [note.to_dict() for note in self.show_notes],
            "links": self.links
        }
        if self.contains_query is not None:
            data["query"] = self.query
            data["containsQuery"] = self.contains_query
        return data


class SearchEngine:
    """
    Runs queries against the store.
    
    Match flags and highlights are computed per call and never stored.
    """
    
    def __init__(self, storage: Storage, matcher: Optional[SearchMatcher] = None):
        self.storage = storage
        self.matcher = matcher or SearchMatcher()
    
    def search(self, query: str) -> List[SearchResult]:
        """
        Find episodes whose title or show-note link text contains query.
        
        A blank query is not a wildcard: it returns the latest episodes
        without highlighting.
        
        Args:
            query: Search text
            
        Returns:
            Matching results, newest first
        """
        if not query or not query.strip():
            return self.get_latest_episodes(LATEST_EPISODES_LIMIT, 0)
        
        start_time = time.time()
        results = []
        for episode in self.storage.get_episodes():
            notes = self.storage.get_show_notes(episode.id)
            result = self.matcher.match(episode, notes, query)
            if result is not None:
                results.append(result)
        
        ranked = rank(results)
        log_with_context(
            logger,
            logging.INFO,
            "Search completed",
            context={
                "result_count": len(ranked),
                "episode_numbers": [result.episode.number for result in ranked]
            },
            execution_time_ms=(time.time() - start_time) * 1000,
            query=query
        )
        return ranked
    
    def get_latest_episodes(self, limit: int, offset: int) -> List[SearchResult]:
        """
        Most recent episodes first, sliced by offset/limit.
        
        Raises:
            ValueError: If limit < 1 or offset < 0
        """
        listing = [
            SearchResult(
                episode=episode,
                show_notes=[
                    ShowNoteMatch(note=note)
                    for note in self.storage.get_show_notes(episode.id)
                ]
            )
            for episode in self.storage.get_episodes()
        ]
        return paginate(rank(listing), limit, offset)
    
    def inspect_episode(self, number: str, query: str = "") -> EpisodeInspection:
        """
        Everything the extractor sees for one episode.
        
        Args:
            number: Episode display number
            query: Optional query to test each searchable field against
            
        Raises:
            EpisodeNotFoundError: If no episode has that number
        """
        episode = self.storage.get_episode_by_number(number)
        if episode is None:
            raise EpisodeNotFoundError(f"Episode #{number} not found")
        
        notes = self.storage.get_show_notes(episode.id)
        links = []
        for note in notes:
            for link in extract_links(note.content or "", include_bare_urls=True):
                links.append({
                    "title": note.title,
                    "url": link.url,
                    "linkText": link.text,
                    "source": link.source
                })
        
        inspection = EpisodeInspection(episode=episode, show_notes=notes, links=links)
        
        if query:
            normalized = normalize_query(query)
            anchor_texts = [
                link.text
                for note in notes
                for link in extract_anchor_links(note.content or "")
            ]
            inspection.query = query
            inspection.contains_query = {
                "title": normalized in episode.title.lower(),
                "showNoteTitles": any(normalized in note.title.lower() for note in notes),
                "showNoteContents": any(
                    normalized in (note.content or "").lower() for note in notes
                ),
                "links": any(normalized in text.lower() for text in anchor_texts)
            }
        
        return inspection
