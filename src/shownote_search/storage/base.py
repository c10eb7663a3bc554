"""Storage interface for episodes and show notes."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.episode import Episode, NewEpisode, NewShowNote, ShowNote


class Storage(ABC):
    """
    Abstract base class for episode and show-note persistence.
    
    Implementations must serialize their own mutations: two refresh cycles
    may call create_episode() concurrently, and guid uniqueness has to hold
    regardless.
    """
    
    @abstractmethod
    def get_episodes(self) -> List[Episode]:
        """Return every stored episode, in insertion order."""
    
    @abstractmethod
    def get_episode(self, episode_id: int) -> Optional[Episode]:
        """Return the episode with this id, or None."""
    
    @abstractmethod
    def get_episode_by_guid(self, guid: str) -> Optional[Episode]:
        """Return the episode with this feed guid, or None."""
    
    @abstractmethod
    def get_episode_by_number(self, number: str) -> Optional[Episode]:
        """Return the first episode whose display number equals number, or None."""
    
    @abstractmethod
    def create_episode(self, data: NewEpisode) -> Episode:
        """
        Store a new episode and assign its id.
        
        Raises:
            DuplicateEpisodeError: If an episode with the same guid exists
        """
    
    @abstractmethod
    def update_episode_number(self, episode_id: int, number: str) -> Episode:
        """
        Set the display number of a stored episode.
        
        Raises:
            EpisodeNotFoundError: If the episode does not exist
        """
    
    @abstractmethod
    def get_show_notes(self, episode_id: int) -> List[ShowNote]:
        """Return the notes of one episode, in insertion order."""
    
    @abstractmethod
    def create_show_note(self, data: NewShowNote) -> ShowNote:
        """
        Store a new show note and assign its id.
        
        Raises:
            EpisodeNotFoundError: If data.episode_id does not reference an episode
        """
    
    def count_episodes(self) -> int:
        return len(self.get_episodes())
