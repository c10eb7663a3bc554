"""Tool for keyword search over episode titles and show-note links."""

import asyncio
import json
import logging
import time
from typing import TYPE_CHECKING

from ..utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from ..search.engine import SearchEngine


logger = get_logger("SearchEpisodesTool")


async def search_episodes_impl(query: str, search_engine: "SearchEngine") -> str:
    """
    Search episodes by title or show-note link text.
    
    Args:
        query: Search text; blank returns the latest episodes
        search_engine: Search Engine instance
        
    Returns:
        JSON string with search results
    """
    start_time = time.time()
    
    try:
        log_with_context(
            logger,
            logging.INFO,
            "search_episodes tool invoked",
            query=query
        )
        
        results = await asyncio.to_thread(search_engine.search, query or "")
        
        execution_time_ms = (time.time() - start_time) * 1000
        log_with_context(
            logger,
            logging.INFO,
            "search_episodes tool completed",
            context={"result_count": len(results)},
            execution_time_ms=execution_time_ms,
            query=query
        )
        
        if query and query.strip():
            message = f"Found {len(results)} episode(s) matching '{query}'"
        else:
            message = f"Showing the {len(results)} latest episode(s)"
        
        return json.dumps({
            "status": "success",
            "count": len(results),
            "results": [result.to_dict() for result in results],
            "message": message
        }, ensure_ascii=False)
        
    except Exception as e:
        execution_time_ms = (time.time() - start_time) * 1000
        logger.error(
            "search_episodes tool failed",
            exc_info=True,
            extra={
                "context": {"query": query, "error": str(e)},
                "execution_time_ms": execution_time_ms
            }
        )
        return json.dumps({
            "status": "error",
            "error_type": "ServerError",
            "message": f"Search failed: {str(e)}",
            "suggested_action": "Try rephrasing your query or check server logs"
        })
