"""Feed transport: fetch the raw RSS document over HTTP."""

import logging
import time
from typing import Optional

import httpx

from ..errors import FeedFetchError
from ..utils.logging import get_logger, log_with_context


logger = get_logger("FeedFetcher")


class FeedFetcher:
    """
    Fetches the feed XML with retries and exponential backoff.
    
    A non-success HTTP status counts as a failed attempt.
    """
    
    def __init__(
        self,
        feed_url: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        client: Optional[httpx.Client] = None
    ):
        """
        Initialize Feed Fetcher.
        
        Args:
            feed_url: URL of the RSS feed
            timeout: Per-request timeout in seconds
            max_retries: Number of attempts before giving up
            client: Optional preconfigured httpx client
        """
        self.feed_url = feed_url
        self.timeout = timeout
        self._max_retries = max_retries
        self._base_backoff = 1.0  # seconds
        self._client = client
    
    def _get(self) -> httpx.Response:
        if self._client is not None:
            return self._client.get(self.feed_url, timeout=self.timeout)
        with httpx.Client(follow_redirects=True, timeout=self.timeout) as client:
            return client.get(self.feed_url)
    
    def fetch(self) -> str:
        """
        Fetch the feed document.
        
        Returns:
            Raw RSS/XML text
            
        Raises:
            FeedFetchError: If all attempts fail
        """
        last_error: Optional[Exception] = None
        status_code: Optional[int] = None
        
        for attempt in range(self._max_retries):
            try:
                log_with_context(
                    logger,
                    logging.INFO,
                    "Fetching RSS feed",
                    context={
                        "feed_url": self.feed_url,
                        "attempt": attempt + 1,
                        "max_retries": self._max_retries
                    }
                )
                
                response = self._get()
                response.raise_for_status()
                return response.text
                
            except httpx.HTTPStatusError as e:
                last_error = e
                status_code = e.response.status_code
            except httpx.HTTPError as e:
                last_error = e
            
            log_with_context(
                logger,
                logging.ERROR,
                "RSS feed fetch failed",
                context={
                    "attempt": attempt + 1,
                    "max_retries": self._max_retries,
                    "status_code": status_code,
                    "error": str(last_error)
                }
            )
            
            if attempt < self._max_retries - 1:
                backoff_time = self._base_backoff * (2 ** attempt)
                logger.info(f"Retrying in {backoff_time} seconds...")
                time.sleep(backoff_time)
        
        raise FeedFetchError(
            f"Failed to fetch RSS feed after {self._max_retries} attempts. "
            f"Last error: {str(last_error)}",
            status_code=status_code
        )
