"""Ordering and offset/limit pagination of results."""

from typing import List, Sequence, TypeVar

from ..models.search_result import SearchResult


T = TypeVar("T")


def rank(results: Sequence[SearchResult]) -> List[SearchResult]:
    """Newest publication date first; ties keep their incoming order."""
    return sorted(
        results,
        key=lambda result: result.episode.publication_date,
        reverse=True
    )


def paginate(items: Sequence[T], limit: int, offset: int) -> List[T]:
    """
    Plain slice of an already sorted sequence.
    
    Raises:
        ValueError: If limit < 1 or offset < 0
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if offset < 0:
        raise ValueError("offset must be non-negative")
    return list(items[offset:offset + limit])
