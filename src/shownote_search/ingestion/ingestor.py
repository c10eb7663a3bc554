"""Turns feed items into stored episodes and show notes."""

import logging
import re
from typing import Iterable, List, Optional, Tuple, Union

from ..errors import DuplicateEpisodeError
from ..extraction.sections import sectionize
from ..models.episode import Episode, NewEpisode, NewShowNote
from ..models.feed_item import FeedItem
from ..storage.base import Storage
from ..utils.logging import get_logger, log_with_context


logger = get_logger("EpisodeIngestor")


# "123. Title"
DOT_NUMBER_PATTERN = re.compile(r'^(\d+)\.')
# "Title #123"
HASH_NUMBER_PATTERN = re.compile(r'#(\d+)')


def derive_episode_number(title: str) -> Optional[str]:
    """
    Episode number from the title, or None.
    
    A leading "123." wins over a "#123" anywhere in the title.
    """
    title = (title or "").strip()
    
    match = DOT_NUMBER_PATTERN.match(title)
    if match:
        return match.group(1)
    
    match = HASH_NUMBER_PATTERN.search(title)
    if match:
        return match.group(1)
    
    return None


def normalize_categories(categories: Union[List[str], str, None]) -> List[str]:
    if not categories:
        return []
    if isinstance(categories, str):
        categories = [categories]
    return [str(category).strip() for category in categories if str(category).strip()]


def episode_url(item: FeedItem, number: Optional[str]) -> str:
    if item.link:
        return item.link
    base = (item.channel_link or "").rstrip("/")
    if base and number:
        return f"{base}/ep/{number}"
    return base


class EpisodeIngestor:
    """
    Creates one Episode per distinct guid, plus its show notes.
    
    Already-seen guids are skipped entirely; their notes are not re-synced.
    Creating the episode and its notes is not atomic.
    """
    
    def __init__(self, storage: Storage):
        self.storage = storage
    
    def ingest(self, item: FeedItem) -> Episode:
        """
        Ingest one feed item.
        
        Args:
            item: Parsed feed item
            
        Returns:
            The new episode, or the existing one for a known guid
        """
        episode, _ = self._ingest(item)
        return episode
    
    def ingest_all(self, items: Iterable[FeedItem]) -> int:
        """Ingest items in order; returns how many episodes were created."""
        created_count = 0
        for item in items:
            _, created = self._ingest(item)
            if created:
                created_count += 1
        return created_count
    
    def _ingest(self, item: FeedItem) -> Tuple[Episode, bool]:
        existing = self.storage.get_episode_by_guid(item.guid)
        if existing is not None:
            logger.debug(f"Episode already ingested: {item.guid}")
            return existing, False
        
        number = derive_episode_number(item.title)
        
        try:
            episode = self.storage.create_episode(NewEpisode(
                guid=item.guid,
                number=number,
                title=item.title,
                description=item.description or "",
                audio_url=item.audio_url or "",
                publication_date=item.pub_date,
                duration=item.duration or "",
                url=episode_url(item, number),
                tags=normalize_categories(item.categories)
            ))
        except DuplicateEpisodeError:
            # Another refresh created it between the lookup and the insert
            return self.storage.get_episode_by_guid(item.guid), False
        
        sections = sectionize(episode.description)
        for section in sections:
            self.storage.create_show_note(NewShowNote(
                title=section.title,
                content=section.content,
                timestamp=section.timestamp,
                episode_id=episode.id
            ))
        
        log_with_context(
            logger,
            logging.INFO,
            "Episode ingested",
            context={
                "episode_id": episode.id,
                "guid": episode.guid,
                "show_note_count": len(sections)
            },
            episode=episode.number or episode.guid
        )
        return episode, True
    
    def repair_episode_numbers(self) -> int:
        """
        Fill in numbers for stored episodes that have none.
        
        The title is re-scanned first; the episode id is the last resort.
        
        Returns:
            Number of episodes updated
        """
        repaired = 0
        for episode in self.storage.get_episodes():
            if episode.number:
                continue
            
            number = derive_episode_number(episode.title)
            if number is None:
                log_with_context(
                    logger,
                    logging.WARNING,
                    "No episode number in title, using episode id",
                    context={"episode_id": episode.id, "title": episode.title},
                    episode=str(episode.id)
                )
                number = str(episode.id)
            
            self.storage.update_episode_number(episode.id, number)
            repaired += 1
        
        if repaired:
            logger.info(f"Repaired {repaired} episode number(s)")
        return repaired
