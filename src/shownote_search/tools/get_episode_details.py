"""Tool for inspecting one episode's show notes and links."""

import asyncio
import json
import logging
import time
from typing import TYPE_CHECKING

from ..errors import EpisodeNotFoundError
from ..utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from ..search.engine import SearchEngine


logger = get_logger("GetEpisodeDetailsTool")


async def get_episode_details_impl(
    number: str,
    query: str,
    search_engine: "SearchEngine"
) -> str:
    """
    Get an episode with its notes, every extracted link and, when a query
    is given, which searchable fields contain it.
    
    Args:
        number: Episode display number (e.g., "123")
        query: Optional query to check against the episode
        search_engine: Search Engine instance
        
    Returns:
        JSON string with episode details or error message
    """
    start_time = time.time()
    number = str(number).strip().lstrip("#")
    
    if not number:
        return json.dumps({
            "status": "error",
            "error_type": "ValidationError",
            "message": "Episode number is required",
            "suggested_action": "Provide an episode number (e.g., 123)"
        })
    
    try:
        inspection = await asyncio.to_thread(search_engine.inspect_episode, number, query or "")
        
        log_with_context(
            logger,
            logging.INFO,
            "get_episode_details tool completed",
            context={"link_count": len(inspection.links)},
            execution_time_ms=(time.time() - start_time) * 1000,
            episode=number
        )
        return json.dumps({
            "status": "success",
            "count": 1,
            "results": [inspection.to_dict()]
        }, ensure_ascii=False)
        
    except EpisodeNotFoundError:
        return json.dumps({
            "status": "error",
            "error_type": "NotFoundError",
            "message": f"Episode #{number} not found",
            "suggested_action": "Check the episode number and try again"
        })
    except Exception as e:
        logger.error(
            "get_episode_details tool failed",
            exc_info=True,
            extra={"context": {"number": number, "error": str(e)}}
        )
        return json.dumps({
            "status": "error",
            "error_type": "ServerError",
            "message": f"Failed to load episode: {str(e)}",
            "suggested_action": "Check server logs for details"
        })
