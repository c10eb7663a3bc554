"""Tool for triggering a feed fetch + ingest cycle."""

import asyncio
import json
import logging
import time
from typing import TYPE_CHECKING

from ..errors import FeedFetchError, FeedParseError
from ..utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from ..rss.feed_manager import FeedManager


logger = get_logger("RefreshFeedTool")


async def refresh_feed_impl(force: bool, feed_manager: "FeedManager") -> str:
    """
    Refresh episodes from the RSS feed.
    
    Args:
        force: Refresh even if the cache is still fresh
        feed_manager: Feed Manager instance
        
    Returns:
        JSON string with the refresh outcome
    """
    start_time = time.time()
    
    try:
        result = await asyncio.to_thread(feed_manager.refresh, force)
        
        log_with_context(
            logger,
            logging.INFO,
            "refresh_feed tool completed",
            context=result.to_dict(),
            execution_time_ms=(time.time() - start_time) * 1000
        )
        
        return json.dumps({
            "status": "success",
            "count": result.episode_count,
            "results": [result.to_dict()],
            "message": (
                f"Ingested {result.ingested_count} new episode(s)"
                if result.refreshed
                else "Feed cache is still fresh, nothing fetched"
            )
        })
        
    except (FeedFetchError, FeedParseError) as e:
        logger.error(
            "refresh_feed tool failed",
            exc_info=True,
            extra={"context": {"error": str(e)}}
        )
        return json.dumps({
            "status": "error",
            "error_type": "FeedError",
            "message": f"Failed to refresh podcast data: {str(e)}",
            "suggested_action": "Check RSS_FEED_URL and network access, then retry"
        })
