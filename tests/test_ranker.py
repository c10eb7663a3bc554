"""
Unit tests for result ordering and pagination.
"""

import pytest
from datetime import datetime, timezone

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from shownote_search.models.episode import Episode
from shownote_search.models.search_result import SearchResult
from shownote_search.search.ranker import paginate, rank


def result(guid: str, day: int) -> SearchResult:
    return SearchResult(episode=Episode(
        id=int(day),
        guid=guid,
        number=guid,
        title=guid,
        description="",
        audio_url="",
        publication_date=datetime(2024, 1, day, tzinfo=timezone.utc),
        duration="",
        url=""
    ))


class TestRank:
    """Test descending publication-date order."""
    
    def test_newest_first(self):
        ranked = rank([result("a", 1), result("c", 3), result("b", 2)])
        
        assert [r.episode.guid for r in ranked] == ["c", "b", "a"]
    
    def test_ties_keep_incoming_order(self):
        ranked = rank([result("x", 5), result("y", 5), result("old", 1), result("z", 5)])
        
        assert [r.episode.guid for r in ranked] == ["x", "y", "z", "old"]
    
    def test_empty(self):
        assert rank([]) == []


class TestPaginate:
    """Test offset/limit slicing."""
    
    @pytest.mark.parametrize("limit,offset,expected", [
        (2, 0, [0, 1]),
        (2, 3, [3, 4]),
        (10, 4, [4]),
        (5, 5, []),
    ])
    def test_slices(self, limit, offset, expected):
        assert paginate(list(range(5)), limit, offset) == expected
    
    def test_rejects_bad_limit(self):
        with pytest.raises(ValueError):
            paginate([1, 2], 0, 0)
    
    def test_rejects_negative_offset(self):
        with pytest.raises(ValueError):
            paginate([1, 2], 1, -1)
