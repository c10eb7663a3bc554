"""SQLite-backed durable storage with the same contract as MemoryStorage."""

import json
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..errors import DuplicateEpisodeError, EpisodeNotFoundError
from ..models.episode import Episode, NewEpisode, NewShowNote, ShowNote
from ..utils.logging import get_logger
from .base import Storage


logger = get_logger("SQLiteStorage")


SCHEMA = """
CREATE TABLE IF NOT EXISTS episodes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    guid TEXT UNIQUE NOT NULL,
    number TEXT,
    title TEXT NOT NULL,
    description TEXT,
    audio_url TEXT,
    publication_date TEXT NOT NULL,
    duration TEXT,
    url TEXT NOT NULL,
    tags TEXT NOT NULL DEFAULT '[]'
);

CREATE TABLE IF NOT EXISTS show_notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    content TEXT,
    timestamp TEXT,
    episode_id INTEGER NOT NULL,
    FOREIGN KEY (episode_id) REFERENCES episodes (id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_show_notes_episode ON show_notes(episode_id);
CREATE INDEX IF NOT EXISTS idx_episodes_number ON episodes(number);
"""

EPISODE_COLUMNS = (
    "id, guid, number, title, description, audio_url, "
    "publication_date, duration, url, tags"
)


def _row_to_episode(row: sqlite3.Row) -> Episode:
    return Episode(
        id=row["id"],
        guid=row["guid"],
        number=row["number"],
        title=row["title"],
        description=row["description"] or "",
        audio_url=row["audio_url"] or "",
        publication_date=datetime.fromisoformat(row["publication_date"]),
        duration=row["duration"] or "",
        url=row["url"],
        tags=json.loads(row["tags"] or "[]")
    )


def _row_to_show_note(row: sqlite3.Row) -> ShowNote:
    return ShowNote(
        id=row["id"],
        title=row["title"],
        content=row["content"] or "",
        timestamp=row["timestamp"],
        episode_id=row["episode_id"]
    )


class SQLiteStorage(Storage):
    """
    Durable store on a single SQLite connection.
    
    Writes go through one lock; the connection is shared across threads.
    """
    
    def __init__(self, db_path: str = "shownotes.db"):
        """
        Initialize the database.
        
        Args:
            db_path: Path to the SQLite file, or ":memory:"
        """
        self.db_path = db_path
        self._lock = threading.Lock()
        
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        with self._lock, self._conn:
            self._conn.executescript(SCHEMA)
        
        logger.debug("SQLite storage initialized at %s", db_path)
    
    def close(self) -> None:
        self._conn.close()
    
    def _query(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(sql, params).fetchall()
    
    def get_episodes(self) -> List[Episode]:
        rows = self._query(f"SELECT {EPISODE_COLUMNS} FROM episodes ORDER BY id")
        return [_row_to_episode(row) for row in rows]
    
    def get_episode(self, episode_id: int) -> Optional[Episode]:
        rows = self._query(
            f"SELECT {EPISODE_COLUMNS} FROM episodes WHERE id = ?",
            (episode_id,)
        )
        return _row_to_episode(rows[0]) if rows else None
    
    def get_episode_by_guid(self, guid: str) -> Optional[Episode]:
        rows = self._query(
            f"SELECT {EPISODE_COLUMNS} FROM episodes WHERE guid = ?",
            (guid,)
        )
        return _row_to_episode(rows[0]) if rows else None
    
    def get_episode_by_number(self, number: str) -> Optional[Episode]:
        rows = self._query(
            f"SELECT {EPISODE_COLUMNS} FROM episodes WHERE number = ? ORDER BY id LIMIT 1",
            (number,)
        )
        return _row_to_episode(rows[0]) if rows else None
    
    def create_episode(self, data: NewEpisode) -> Episode:
        with self._lock:
            try:
                with self._conn:
                    cursor = self._conn.execute(
                        """
                        INSERT INTO episodes (
                            guid, number, title, description, audio_url,
                            publication_date, duration, url, tags
                        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            data.guid,
                            data.number,
                            data.title,
                            data.description,
                            data.audio_url,
                            data.publication_date.isoformat(),
                            data.duration,
                            data.url,
                            json.dumps(list(data.tags), ensure_ascii=False)
                        )
                    )
            except sqlite3.IntegrityError as e:
                raise DuplicateEpisodeError(data.guid) from e
            episode_id = cursor.lastrowid
        
        return Episode(
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
    
    def update_episode_number(self, episode_id: int, number: str) -> Episode:
        with self._lock, self._conn:
            cursor = self._conn.execute(
                "UPDATE episodes SET number = ? WHERE id = ?",
                (number, episode_id)
            )
            if cursor.rowcount == 0:
                raise EpisodeNotFoundError(f"Episode {episode_id} not found")
        
        return self.get_episode(episode_id)
    
    def get_show_notes(self, episode_id: int) -> List[ShowNote]:
        rows = self._query(
            "SELECT id, title, content, timestamp, episode_id FROM show_notes "
            "WHERE episode_id = ? ORDER BY id",
            (episode_id,)
        )
        return [_row_to_show_note(row) for row in rows]
    
    def create_show_note(self, data: NewShowNote) -> ShowNote:
        with self._lock:
            try:
                with self._conn:
                    cursor = self._conn.execute(
                        "INSERT INTO show_notes (title, content, timestamp, episode_id) "
                        "VALUES (?, ?, ?, ?)",
                        (data.title, data.content, data.timestamp, data.episode_id)
                    )
            except sqlite3.IntegrityError as e:
                raise EpisodeNotFoundError(f"Episode {data.episode_id} not found") from e
            note_id = cursor.lastrowid
        
        return ShowNote(
            id=note_id,
            title=data.title,
            content=data.content,
            timestamp=data.timestamp,
            episode_id=data.episode_id
        )
    
    def count_episodes(self) -> int:
        rows = self._query("SELECT COUNT(*) AS total FROM episodes")
        return rows[0]["total"]
