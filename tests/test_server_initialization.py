"""
Unit tests for server initialization.

Tests component wiring, the best-effort initial refresh, and startup
failure handling.
"""

import pytest
from unittest.mock import Mock, patch

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from shownote_search.config import ServerConfig
from shownote_search.errors import FeedFetchError, FeedParseError
from shownote_search.rss.feed_manager import FeedManager, RefreshResult
from shownote_search.search.engine import SearchEngine
from shownote_search.server import build_components, initialize_server
from shownote_search.storage import MemoryStorage, SQLiteStorage


def make_components():
    storage = MemoryStorage()
    feed_manager = Mock(spec=FeedManager)
    feed_manager.refresh.return_value = RefreshResult(True, 5, 5, None)
    return storage, feed_manager, SearchEngine(storage)


class TestServerInitialization:
    
    @patch('shownote_search.server.build_components')
    @patch('shownote_search.server.ServerConfig.from_environment')
    def test_successful_initialization(self, mock_from_env, mock_build):
        config = ServerConfig()
        mock_from_env.return_value = config
        storage, feed_manager, engine = make_components()
        mock_build.return_value = (storage, feed_manager, engine)
        
        result = initialize_server()
        
        assert result == (config, storage, feed_manager, engine)
        mock_build.assert_called_once_with(config)
        feed_manager.refresh.assert_called_once_with()
    
    @pytest.mark.parametrize("error", [
        FeedFetchError("connection refused"),
        FeedParseError("Not an RSS feed"),
    ])
    @patch('shownote_search.server.build_components')
    @patch('shownote_search.server.ServerConfig.from_environment')
    def test_initial_refresh_failure_is_not_fatal(self, mock_from_env, mock_build, error):
        mock_from_env.return_value = ServerConfig()
        storage, feed_manager, engine = make_components()
        feed_manager.refresh.side_effect = error
        mock_build.return_value = (storage, feed_manager, engine)
        
        config, storage_out, manager_out, engine_out = initialize_server()
        
        assert storage_out is storage
        assert engine_out.search("") == []
    
    @patch('shownote_search.server.ServerConfig.from_environment')
    def test_invalid_configuration_exits(self, mock_from_env):
        mock_from_env.side_effect = ValueError("cache_ttl_seconds must be positive")
        
        with pytest.raises(SystemExit) as exc_info:
            initialize_server()
        
        assert exc_info.value.code == 1
    
    @patch('shownote_search.server.build_components')
    @patch('shownote_search.server.ServerConfig.from_environment')
    def test_component_failure_exits(self, mock_from_env, mock_build):
        mock_from_env.return_value = ServerConfig()
        mock_build.side_effect = OSError("unable to open database file")
        
        with pytest.raises(SystemExit):
            initialize_server()


class TestBuildComponents:
    
    def test_memory_backend(self):
        config = ServerConfig(rss_feed_url="https://example.com/feed.xml", cache_ttl_seconds=60)
        
        storage, feed_manager, engine = build_components(config)
        
        assert isinstance(storage, MemoryStorage)
        assert feed_manager.cache_ttl == 60
        assert feed_manager.fetcher.feed_url == "https://example.com/feed.xml"
        assert engine.storage is storage
    
    def test_sqlite_backend(self, tmp_path):
        config = ServerConfig(storage_backend="sqlite", sqlite_path=str(tmp_path / "notes.db"))
        
        storage, _, _ = build_components(config)
        
        try:
            assert isinstance(storage, SQLiteStorage)
        finally:
            storage.close()
