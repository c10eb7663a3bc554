"""Tool for listing the most recent episodes."""

import asyncio
import json
from typing import TYPE_CHECKING

from ..utils.logging import get_logger

if TYPE_CHECKING:
    from ..search.engine import SearchEngine


logger = get_logger("GetLatestEpisodesTool")


async def get_latest_episodes_impl(
    limit: int,
    offset: int,
    search_engine: "SearchEngine",
    max_page_size: int = 50
) -> str:
    """
    List episodes, newest first.
    
    Args:
        limit: Page size (1..max_page_size)
        offset: Number of episodes to skip (>= 0)
        search_engine: Search Engine instance
        max_page_size: Upper bound for limit
        
    Returns:
        JSON string with one page of episodes
    """
    if not isinstance(limit, int) or not 1 <= limit <= max_page_size:
        return json.dumps({
            "status": "error",
            "error_type": "ValidationError",
            "message": f"Invalid limit: {limit}. Must be between 1 and {max_page_size}.",
            "suggested_action": f"Use a limit between 1 and {max_page_size}"
        })
    
    if not isinstance(offset, int) or offset < 0:
        return json.dumps({
            "status": "error",
            "error_type": "ValidationError",
            "message": f"Invalid offset: {offset}. Must be zero or positive.",
            "suggested_action": "Use an offset of 0 or more"
        })
    
    try:
        results = await asyncio.to_thread(search_engine.get_latest_episodes, limit, offset)
        
        return json.dumps({
            "status": "success",
            "count": len(results),
            "results": [result.to_dict() for result in results],
            "message": f"Episodes {offset + 1} to {offset + len(results)}" if results else "No episodes on this page"
        }, ensure_ascii=False)
        
    except Exception as e:
        logger.error(
            "get_latest_episodes tool failed",
            exc_info=True,
            extra={"context": {"limit": limit, "offset": offset, "error": str(e)}}
        )
        return json.dumps({
            "status": "error",
            "error_type": "ServerError",
            "message": f"Failed to list episodes: {str(e)}",
            "suggested_action": "Check server logs for details"
        })
