"""Exception types shared across components."""

from typing import Optional


class FeedFetchError(RuntimeError):
    """The feed could not be fetched (network failure or non-success status)."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FeedParseError(RuntimeError):
    """The fetched document does not look like an RSS feed at all."""


class EpisodeNotFoundError(LookupError):
    """No episode matches the requested id or number."""


class DuplicateEpisodeError(ValueError):
    """An episode with the same guid is already stored."""
    
    def __init__(self, guid: str):
        super().__init__(f"Episode with guid {guid!r} already exists")
        self.guid = guid
