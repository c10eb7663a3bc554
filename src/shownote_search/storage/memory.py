"""In-memory storage with incrementing id counters."""

import threading
from dataclasses import replace
from typing import Dict, List, Optional

from ..errors import DuplicateEpisodeError, EpisodeNotFoundError
from ..models.episode import Episode, NewEpisode, NewShowNote, ShowNote
from .base import Storage


class MemoryStorage(Storage):
    """
    Dict-backed store. All mutations run under a single lock so id counters
    and the guid uniqueness check cannot race.
    """
    
    def __init__(self):
        self._episodes: Dict[int, Episode] = {}
        self._show_notes: Dict[int, ShowNote] = {}
        self._guid_index: Dict[str, int] = {}
        self._episode_id_counter = 1
        self._show_note_id_counter = 1
        self._lock = threading.Lock()
    
    def get_episodes(self) -> List[Episode]:
        return list(self._episodes.values())
    
    def get_episode(self, episode_id: int) -> Optional[Episode]:
        return self._episodes.get(episode_id)
    
    def get_episode_by_guid(self, guid: str) -> Optional[Episode]:
        episode_id = self._guid_index.get(guid)
        return self._episodes.get(episode_id) if episode_id is not None else None
    
    def get_episode_by_number(self, number: str) -> Optional[Episode]:
        for episode in self._episodes.values():
            if episode.number == number:
                return episode
        return None
    
    def create_episode(self, data: NewEpisode) -> Episode:
        with self._lock:
            if data.guid in self._guid_index:
                raise DuplicateEpisodeError(data.guid)
            
            episode_id = self._episode_id_counter
            self._episode_id_counter += 1
            
            episode = Episode(
                id=episode_id,
                guid=data.guid,
                number=data.number,
                title=data.title,
                description=data.description,
                audio_url=data.audio_url,
                publication_date=data.publication_date,
                duration=data.duration,
                url=data.url,
                tags=list(data.tags)
            )
            self._episodes[episode_id] = episode
            self._guid_index[data.guid] = episode_id
            return episode
    
    def update_episode_number(self, episode_id: int, number: str) -> Episode:
        with self._lock:
            episode = self._episodes.get(episode_id)
            if episode is None:
                raise EpisodeNotFoundError(f"Episode {episode_id} not found")
            
            updated = replace(episode, number=number)
            self._episodes[episode_id] = updated
            return updated
    
    def get_show_notes(self, episode_id: int) -> List[ShowNote]:
        return [
            note for note in self._show_notes.values()
            if note.episode_id == episode_id
        ]
    
    def create_show_note(self, data: NewShowNote) -> ShowNote:
        with self._lock:
            if data.episode_id not in self._episodes:
                raise EpisodeNotFoundError(f"Episode {data.episode_id} not found")
            
            note_id = self._show_note_id_counter
            self._show_note_id_counter += 1
            
            note = ShowNote(
                id=note_id,
                title=data.title,
                content=data.content,
                timestamp=data.timestamp,
                episode_id=data.episode_id
            )
            self._show_notes[note_id] = note
            return note
    
    def count_episodes(self) -> int:
        return len(self._episodes)
