"""
Tests for the MCP tool implementations.

Each *_impl function returns a JSON envelope; these tests decode it and
check status, payload shape and error typing.
"""

import json
import pytest
import threading
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from shownote_search.errors import FeedFetchError, FeedParseError
from shownote_search.models.episode import NewEpisode, NewShowNote
from shownote_search.rss.feed_manager import FeedManager, RefreshResult
from shownote_search.search.engine import SearchEngine
from shownote_search.storage.memory import MemoryStorage
from shownote_search.tools.search_episodes import search_episodes_impl
from shownote_search.tools.get_latest_episodes import get_latest_episodes_impl
from shownote_search.tools.refresh_feed import refresh_feed_impl
from shownote_search.tools.get_episode_details import get_episode_details_impl


BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def search_engine():
    storage = MemoryStorage()
    for i in range(1, 6):
        episode = storage.create_episode(NewEpisode(
            guid=f"guid-{i}",
            number=str(i),
            title=f"#{i} Episode",
            description="",
            audio_url="",
            publication_date=BASE_DATE + timedelta(days=i),
            duration="",
            url=f"https://example.com/ep/{i}",
            tags=[]
        ))
        storage.create_show_note(NewShowNote(
            "Links", f'<a href="https://tool{i}.dev">Tool {i}</a>', "0:10:00", episode.id
        ))
    return SearchEngine(storage)


class TestSearchEpisodesTool:
    
    @pytest.mark.asyncio
    async def test_link_text_hit(self, search_engine):
        response = json.loads(await search_episodes_impl("tool 3", search_engine))
        
        assert response["status"] == "success"
        assert response["count"] == 1
        assert response["results"][0]["highlighted"]["linkTexts"] == ["Tool 3"]
        assert "tool 3" in response["message"]
    
    @pytest.mark.asyncio
    async def test_empty_query_lists_latest(self, search_engine):
        response = json.loads(await search_episodes_impl("", search_engine))
        
        assert response["status"] == "success"
        assert response["count"] == 5
        assert response["results"][0]["episode"]["number"] == "5"
    
    @pytest.mark.asyncio
    async def test_no_hits(self, search_engine):
        response = json.loads(await search_episodes_impl("nothing-like-this", search_engine))
        
        assert response["status"] == "success"
        assert response["count"] == 0
        assert response["results"] == []
    
    @pytest.mark.asyncio
    async def test_engine_failure(self):
        engine = Mock(spec=SearchEngine)
        engine.search.side_effect = RuntimeError("store offline")
        
        response = json.loads(await search_episodes_impl("x", engine))
        
        assert response["status"] == "error"
        assert response["error_type"] == "ServerError"
        assert "store offline" in response["message"]


class TestGetLatestEpisodesTool:
    
    @pytest.mark.asyncio
    async def test_page(self, search_engine):
        response = json.loads(await get_latest_episodes_impl(2, 1, search_engine))
        
        assert response["status"] == "success"
        assert [r["episode"]["number"] for r in response["results"]] == ["4", "3"]
        assert response["message"] == "Episodes 2 to 3"
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit,offset", [(0, 0), (51, 0), (10, -1)])
    async def test_invalid_arguments(self, search_engine, limit, offset):
        response = json.loads(await get_latest_episodes_impl(limit, offset, search_engine))
        
        assert response["status"] == "error"
        assert response["error_type"] == "ValidationError"
    
    @pytest.mark.asyncio
    async def test_custom_max_page_size(self, search_engine):
        response = json.loads(
            await get_latest_episodes_impl(5, 0, search_engine, max_page_size=3)
        )
        
        assert response["error_type"] == "ValidationError"


class TestRefreshFeedTool:
    
    @pytest.mark.asyncio
    async def test_refreshed(self):
        manager = Mock(spec=FeedManager)
        manager.refresh.return_value = RefreshResult(True, 3, 40, BASE_DATE)
        
        response = json.loads(await refresh_feed_impl(True, manager))
        
        assert response["status"] == "success"
        assert response["count"] == 40
        assert response["results"][0]["ingestedCount"] == 3
        manager.refresh.assert_called_once_with(True)
    
    @pytest.mark.asyncio
    async def test_cache_fresh(self):
        manager = Mock(spec=FeedManager)
        manager.refresh.return_value = RefreshResult(False, 0, 40, BASE_DATE)
        
        response = json.loads(await refresh_feed_impl(False, manager))
        
        assert response["status"] == "success"
        assert response["results"][0]["refreshed"] is False
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        FeedFetchError("HTTP 500", status_code=500),
        FeedParseError("Not an RSS feed"),
    ])
    async def test_feed_errors(self, error):
        manager = Mock(spec=FeedManager)
        manager.refresh.side_effect = error
        
        response = json.loads(await refresh_feed_impl(False, manager))
        
        assert response["status"] == "error"
        assert response["error_type"] == "FeedError"


class TestGetEpisodeDetailsTool:
    
    @pytest.mark.asyncio
    async def test_found(self, search_engine):
        response = json.loads(await get_episode_details_impl("#2", "tool", search_engine))
        
        assert response["status"] == "success"
        details = response["results"][0]
        assert details["episode"]["number"] == "2"
        assert details["showNotes"][0]["timestamp"] == "0:10:00"
        assert details["links"][0]["linkText"] == "Tool 2"
        assert details["containsQuery"]["links"] is True
    
    @pytest.mark.asyncio
    async def test_not_found(self, search_engine):
        response = json.loads(await get_episode_details_impl("99", "", search_engine))
        
        assert response["status"] == "error"
        assert response["error_type"] == "NotFoundError"
    
    @pytest.mark.asyncio
    async def test_blank_number(self, search_engine):
        response = json.loads(await get_episode_details_impl("  ", "", search_engine))
        
        assert response["error_type"] == "ValidationError"


@pytest.mark.asyncio
async def test_search_tool_runs_engine_in_worker_thread():
    engine = Mock(spec=SearchEngine)
    threads = []
    engine.search.side_effect = lambda query: threads.append(threading.get_ident()) or []
    
    response = json.loads(await search_episodes_impl("x", engine))
    
    assert response["status"] == "success"
    assert threads and threads[0] != threading.get_ident()
