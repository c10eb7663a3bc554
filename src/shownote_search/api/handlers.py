"""HTTP handlers for the /api endpoints.

Each handler takes its component explicitly; server.py binds them to the
running instances and registers them as FastMCP custom routes.
"""

import asyncio
from typing import TYPE_CHECKING, List, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..errors import EpisodeNotFoundError
from ..utils.logging import get_logger

if TYPE_CHECKING:
    from ..config import ServerConfig
    from ..rss.feed_manager import FeedManager
    from ..search.engine import SearchEngine


logger = get_logger("HTTPApi")


def _parse_int(raw: Optional[str], default: int, minimum: int, maximum: Optional[int] = None) -> int:
    """
    Parse a query-string integer within bounds.
    
    Raises:
        ValueError: If raw is not an integer or is out of range
    """
    if raw is None or raw == "":
        return default
    value = int(raw)
    if value < minimum or (maximum is not None and value > maximum):
        raise ValueError(f"{value} is out of range")
    return value


async def search_handler(request: Request, search_engine: "SearchEngine") -> JSONResponse:
    """GET /api/search?q=... -> list of SearchResult."""
    query = request.query_params.get("q", "")
    try:
        results = await asyncio.to_thread(search_engine.search, query)
        return JSONResponse([result.to_dict() for result in results])
    except Exception:
        logger.error(
            "Search request failed",
            exc_info=True,
            extra={"context": {"query": query}}
        )
        return JSONResponse({"message": "Failed to execute search"}, status_code=500)


async def episodes_handler(
    request: Request,
    search_engine: "SearchEngine",
    default_page_size: int = 10,
    max_page_size: int = 50
) -> JSONResponse:
    """GET /api/episodes?limit=&offset= -> latest episodes, newest first."""
    try:
        limit = _parse_int(
            request.query_params.get("limit"), default_page_size, 1, max_page_size
        )
        offset = _parse_int(request.query_params.get("offset"), 0, 0)
        results = await asyncio.to_thread(search_engine.get_latest_episodes, limit, offset)
        return JSONResponse([result.to_dict() for result in results])
    except Exception:
        logger.error(
            "Episode listing request failed",
            exc_info=True,
            extra={"context": {"query_params": dict(request.query_params)}}
        )
        return JSONResponse({"message": "Failed to fetch episodes"}, status_code=500)


async def refresh_handler(request: Request, feed_manager: "FeedManager") -> JSONResponse:
    """GET /api/refresh -> fetch and ingest the feed if the cache is stale."""
    force = request.query_params.get("force", "").lower() in ("1", "true", "yes")
    try:
        result = await asyncio.to_thread(feed_manager.refresh, force)
        return JSONResponse({
            "success": True,
            "message": "Podcast data refreshed successfully",
            "episodeCount": result.episode_count
        })
    except Exception:
        logger.error("Refresh request failed", exc_info=True)
        return JSONResponse(
            {"success": False, "message": "Failed to refresh podcast data"},
            status_code=500
        )


async def debug_episode_handler(request: Request, search_engine: "SearchEngine") -> JSONResponse:
    """GET /api/debug-episode/{number}?q= -> notes, links and query hits."""
    number = request.path_params["number"]
    query = request.query_params.get("q", "")
    try:
        inspection = await asyncio.to_thread(search_engine.inspect_episode, number, query)
        return JSONResponse(inspection.to_dict())
    except EpisodeNotFoundError:
        return JSONResponse({"message": f"Episode #{number} not found"}, status_code=404)
    except Exception:
        logger.error(
            "Debug request failed",
            exc_info=True,
            extra={"context": {"number": number}}
        )
        return JSONResponse({"message": "Failed to load episode details"}, status_code=500)


async def health_handler(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_routes(
    search_engine: "SearchEngine",
    feed_manager: "FeedManager",
    config: "ServerConfig"
) -> List[Route]:
    """Routes bound to concrete components, for a standalone Starlette app."""
    
    async def search(request: Request) -> JSONResponse:
        return await search_handler(request, search_engine)
    
    async def episodes(request: Request) -> JSONResponse:
        return await episodes_handler(
            request, search_engine, config.default_page_size, config.max_page_size
        )
    
    async def refresh(request: Request) -> JSONResponse:
        return await refresh_handler(request, feed_manager)
    
    async def debug_episode(request: Request) -> JSONResponse:
        return await debug_episode_handler(request, search_engine)
    
    return [
        Route("/api/search", search, methods=["GET"]),
        Route("/api/episodes", episodes, methods=["GET"]),
        Route("/api/refresh", refresh, methods=["GET"]),
        Route("/api/debug-episode/{number}", debug_episode, methods=["GET"]),
        Route("/health", health_handler, methods=["GET"]),
    ]
