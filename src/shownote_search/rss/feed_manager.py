"""Feed refresh cycle with a time-to-live cache in front of the upstream feed."""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from ..ingestion.ingestor import EpisodeIngestor
from ..utils.logging import get_logger, log_with_context
from .fetcher import FeedFetcher
from .parser import parse_feed


logger = get_logger("FeedManager")


@dataclass
class RefreshResult:
    """Outcome of one refresh() call."""
    
    refreshed: bool  # False when the cache was still fresh
    ingested_count: int
    episode_count: int
    fetched_at: Optional[datetime]
    
    def to_dict(self):
        return {
            "refreshed": self.refreshed,
            "ingestedCount": self.ingested_count,
            "episodeCount": self.episode_count,
            "fetchedAt": self.fetched_at.isoformat() if self.fetched_at else None
        }


class FeedManager:
    """
    Fetches, parses and ingests the feed at most once per TTL window.
    
    The cache value is the timestamp of the last successful cycle. A failed
    fetch leaves both the timestamp and the store untouched, so the next
    call retries. Refresh cycles are serialized.
    """
    
    def __init__(
        self,
        fetcher: FeedFetcher,
        ingestor: EpisodeIngestor,
        cache_ttl: int,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize Feed Manager.
        
        Args:
            fetcher: Feed transport
            ingestor: Episode ingestor writing to the store
            cache_ttl: Cache time-to-live in seconds
            clock: Time source in seconds
        """
        self.fetcher = fetcher
        self.ingestor = ingestor
        self.cache_ttl = cache_ttl
        self._clock = clock
        self._cache_timestamp: Optional[float] = None
        self._lock = threading.Lock()
    
    @property
    def last_fetched_at(self) -> Optional[datetime]:
        if self._cache_timestamp is None:
            return None
        return datetime.fromtimestamp(self._cache_timestamp, tz=timezone.utc)
    
    def is_stale(self) -> bool:
        return (
            self._cache_timestamp is None or
            (self._clock() - self._cache_timestamp) >= self.cache_ttl
        )
    
    def refresh(self, force: bool = False) -> RefreshResult:
        """
        Run a fetch + ingest cycle if the cache is stale.
        
        Args:
            force: Ignore the TTL
            
        Returns:
            RefreshResult
            
        Raises:
            FeedFetchError: If the feed could not be fetched
            FeedParseError: If the document is not a feed
        """
        with self._lock:
            storage = self.ingestor.storage
            
            if not force and not self.is_stale():
                logger.debug("Feed cache is fresh, skipping refresh")
                return RefreshResult(
                    refreshed=False,
                    ingested_count=0,
                    episode_count=storage.count_episodes(),
                    fetched_at=self.last_fetched_at
                )
            
            start_time = self._clock()
            log_with_context(
                logger,
                logging.INFO,
                "Refreshing feed",
                context={
                    "feed_url": self.fetcher.feed_url,
                    "forced": force,
                    "cache_ttl_seconds": self.cache_ttl
                }
            )
            
            # Fetch and parse fully before touching the store
            document = parse_feed(self.fetcher.fetch())
            
            ingested = self.ingestor.ingest_all(document.items)
            self.ingestor.repair_episode_numbers()
            self._cache_timestamp = start_time
            
            episode_count = storage.count_episodes()
            log_with_context(
                logger,
                logging.INFO,
                "Feed refreshed",
                context={
                    "item_count": len(document.items),
                    "ingested_count": ingested,
                    "episode_count": episode_count
                },
                execution_time_ms=(self._clock() - start_time) * 1000
            )
            
            return RefreshResult(
                refreshed=True,
                ingested_count=ingested,
                episode_count=episode_count,
                fetched_at=self.last_fetched_at
            )
