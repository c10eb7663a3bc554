"""MCP server initialization, tool registration and HTTP routes."""

import logging
import os
import sys
from typing import Optional

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from .api.handlers import (
    debug_episode_handler,
    episodes_handler,
    health_handler,
    refresh_handler,
    search_handler,
)
from .config import ServerConfig
from .errors import FeedFetchError, FeedParseError
from .ingestion.ingestor import EpisodeIngestor
from .rss.feed_manager import FeedManager
from .rss.fetcher import FeedFetcher
from .search.engine import SearchEngine
from .storage import Storage, create_storage
from .tools.get_episode_details import get_episode_details_impl
from .tools.get_latest_episodes import get_latest_episodes_impl
from .tools.refresh_feed import refresh_feed_impl
from .tools.search_episodes import search_episodes_impl
from .utils.logging import configure_logging, get_logger, log_with_context


# Create FastMCP server instance
mcp = FastMCP("Show Note Search")

# Logger for server component
logger = get_logger("Server")

# Global components (initialized in initialize_server)
_config: Optional[ServerConfig] = None
_storage: Optional[Storage] = None
_feed_manager: Optional[FeedManager] = None
_search_engine: Optional[SearchEngine] = None


def build_components(
    config: ServerConfig
) -> tuple[Storage, FeedManager, SearchEngine]:
    """Wire storage, feed transport, ingestion and search from config."""
    storage = create_storage(config)
    fetcher = FeedFetcher(
        config.rss_feed_url,
        timeout=config.fetch_timeout_seconds,
        max_retries=config.max_fetch_retries
    )
    feed_manager = FeedManager(fetcher, EpisodeIngestor(storage), config.cache_ttl_seconds)
    search_engine = SearchEngine(storage)
    return storage, feed_manager, search_engine


def initialize_server() -> tuple[ServerConfig, Storage, FeedManager, SearchEngine]:
    """
    Initialize the server with configuration and components.
    
    The initial feed refresh is best effort: a failure is logged and the
    server starts with whatever the store already holds.
    
    Returns:
        Tuple of (ServerConfig, Storage, FeedManager, SearchEngine)
        
    Raises:
        SystemExit: If configuration or component setup fails
    """
    try:
        configure_logging(os.getenv("LOG_LEVEL", "INFO"))

        config = ServerConfig.from_environment()

        logger.info("Starting Show Note Search server initialization")
        log_with_context(
            logger,
            logging.INFO,
            "Configuration loaded",
            context={
                "rss_feed_url": config.rss_feed_url,
                "cache_ttl_seconds": config.cache_ttl_seconds,
                "storage_backend": config.storage_backend
            }
        )
        
        storage, feed_manager, search_engine = build_components(config)
        
    except Exception as e:
        logger.error(
            "Failed to initialize server",
            exc_info=True,
            extra={"context": {"error": str(e)}}
        )
        sys.exit(1)
    
    logger.info("Running initial feed refresh")
    try:
        result = feed_manager.refresh()
        log_with_context(
            logger,
            logging.INFO,
            "Initial feed refresh complete",
            context=result.to_dict()
        )
    except (FeedFetchError, FeedParseError) as e:
        logger.warning(
            "Initial feed refresh failed, starting without fresh data",
            extra={"context": {"error": str(e)}}
        )
    
    logger.info("Show Note Search server initialization complete")
    return config, storage, feed_manager, search_engine


# MCP Tool Implementations

@mcp.tool()
async def search_episodes(query: str) -> str:
    """
    Search podcast episodes by episode title and show-note link text.
    
    Matching is a case-insensitive substring test. An empty query returns
    the 10 most recent episodes.
    
    Args:
        query: Search text (e.g., a product or site name mentioned in the notes)
        
    Returns:
        JSON string with matching episodes, newest first, with highlight data
    """
    return await search_episodes_impl(query, _search_engine)


@mcp.tool()
async def get_latest_episodes(limit: int = 10, offset: int = 0) -> str:
    """
    List the most recent episodes.
    
    Args:
        limit: Number of episodes (1-50)
        offset: Number of episodes to skip
        
    Returns:
        JSON string with one page of episodes, newest first
    """
    max_page_size = _config.max_page_size if _config else 50
    return await get_latest_episodes_impl(limit, offset, _search_engine, max_page_size)


@mcp.tool()
async def refresh_feed(force: bool = False) -> str:
    """
    Fetch the RSS feed and ingest new episodes.
    
    Args:
        force: Refresh even if the cached feed is still fresh
        
    Returns:
        JSON string with the number of stored episodes
    """
    return await refresh_feed_impl(force, _feed_manager)


@mcp.tool()
async def get_episode_details(number: str, query: str = "") -> str:
    """
    Get one episode with its show notes and every link found in them.
    
    Args:
        number: Episode number (e.g., "123")
        query: Optional text to check against the episode's searchable fields
        
    Returns:
        JSON string with episode details or error message
    """
    return await get_episode_details_impl(number, query, _search_engine)


# HTTP routes

@mcp.custom_route("/api/search", methods=["GET"])
async def api_search(request: Request) -> JSONResponse:
    return await search_handler(request, _search_engine)


@mcp.custom_route("/api/episodes", methods=["GET"])
async def api_episodes(request: Request) -> JSONResponse:
    config = _config or ServerConfig()
    return await episodes_handler(
        request, _search_engine, config.default_page_size, config.max_page_size
    )


@mcp.custom_route("/api/refresh", methods=["GET"])
async def api_refresh(request: Request) -> JSONResponse:
    return await refresh_handler(request, _feed_manager)


@mcp.custom_route("/api/debug-episode/{number}", methods=["GET"])
async def api_debug_episode(request: Request) -> JSONResponse:
    return await debug_episode_handler(request, _search_engine)


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> JSONResponse:
    return await health_handler(request)


def get_server():
    """Get the FastMCP server instance."""
    return mcp


def set_components(
    config: ServerConfig,
    storage: Storage,
    feed_manager: FeedManager,
    search_engine: SearchEngine
):
    """
    Set global component references.
    
    Args:
        config: Server configuration
        storage: Episode store
        feed_manager: Feed Manager instance
        search_engine: Search Engine instance
    """
    global _config, _storage, _feed_manager, _search_engine
    _config = config
    _storage = storage
    _feed_manager = feed_manager
    _search_engine = search_engine
