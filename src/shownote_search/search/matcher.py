"""Decides which episodes and notes hit a query, and what to highlight."""

from typing import List, Optional

from ..extraction.links import extract_anchor_links
from ..models.episode import Episode, ShowNote
from ..models.search_result import Highlight, SearchResult, ShowNoteMatch


def normalize_query(query: str) -> str:
    return query.lower()


class SearchMatcher:
    """
    Case-insensitive substring matching over episode titles and the link
    text of anchors in show notes.
    
    Note titles, free note text and bare URLs are not searchable. A note is
    matched only when one of its own anchors has a matched link text.
    """
    
    def match(
        self,
        episode: Episode,
        notes: List[ShowNote],
        query: str
    ) -> Optional[SearchResult]:
        """
        Match one episode against a non-empty query.
        
        Args:
            episode: Episode to test
            notes: The episode's show notes
            query: Raw query as typed
            
        Returns:
            SearchResult with match flags, or None when nothing matched
        """
        normalized = normalize_query(query)
        
        title_match = normalized in episode.title.lower()
        
        # Each note is its own extraction pass so anchors never span notes
        note_link_texts = [
            [link.text for link in extract_anchor_links(note.content or "")]
            for note in notes
        ]
        matched_link_texts: List[str] = []
        for texts in note_link_texts:
            for text in texts:
                if normalized in text.lower() and text not in matched_link_texts:
                    matched_link_texts.append(text)
        
        if not title_match and not matched_link_texts:
            return None
        
        matched_set = set(matched_link_texts)
        show_notes = [
            ShowNoteMatch(
                note=note,
                matched=any(text in matched_set for text in texts)
            )
            for note, texts in zip(notes, note_link_texts)
        ]
        
        return SearchResult(
            episode=episode,
            show_notes=show_notes,
            highlighted=Highlight(
                episode_title=title_match,
                link_texts=matched_link_texts,
                query=query
            )
        )
