"""Configuration management for the Show Note Search server."""

import os
from dataclasses import dataclass


STORAGE_BACKENDS = ("memory", "sqlite")


@dataclass
class ServerConfig:
    """Configuration for the Show Note Search server."""
    
    rss_feed_url: str = "https://ossan.fm/feed.xml"
    cache_ttl_seconds: int = 1800  # Feed cache TTL (30 minutes)
    fetch_timeout_seconds: float = 30.0
    max_fetch_retries: int = 3
    default_page_size: int = 10
    max_page_size: int = 50
    storage_backend: str = "memory"  # "memory" or "sqlite"
    sqlite_path: str = "shownotes.db"
    
    def validate(self) -> None:
        """
        Validate required configuration fields.
        
        Raises:
            ValueError: If required fields are missing or invalid
        """
        if not self.rss_feed_url:
            raise ValueError("rss_feed_url is required")
        
        if self.cache_ttl_seconds <= 0:
            raise ValueError("cache_ttl_seconds must be positive")
        
        if self.fetch_timeout_seconds <= 0:
            raise ValueError("fetch_timeout_seconds must be positive")
        
        if self.max_fetch_retries <= 0:
            raise ValueError("max_fetch_retries must be positive")
        
        if self.default_page_size <= 0 or self.max_page_size <= 0:
            raise ValueError("page sizes must be positive")
        
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"storage_backend must be one of {', '.join(STORAGE_BACKENDS)}"
            )
        
        if self.storage_backend == "sqlite" and not self.sqlite_path:
            raise ValueError("sqlite_path is required for the sqlite backend")
    
    @classmethod
    def from_environment(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        config = cls(
            rss_feed_url=os.getenv("RSS_FEED_URL", "https://ossan.fm/feed.xml"),
            cache_ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", "1800")),
            fetch_timeout_seconds=float(os.getenv("FETCH_TIMEOUT_SECONDS", "30")),
            max_fetch_retries=int(os.getenv("MAX_FETCH_RETRIES", "3")),
            default_page_size=int(os.getenv("DEFAULT_PAGE_SIZE", "10")),
            max_page_size=int(os.getenv("MAX_PAGE_SIZE", "50")),
            storage_backend=os.getenv("STORAGE_BACKEND", "memory").lower(),
            sqlite_path=os.getenv("SQLITE_PATH", "shownotes.db")
        )
        config.validate()
        return config
