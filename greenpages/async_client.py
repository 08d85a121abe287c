"""Async HTTP client for fetching CSV sources in parallel."""
import asyncio
import httpx
from typing import List, Optional
import logging

from greenpages.models import BookRecord
from greenpages.parse import parse_records

logger = logging.getLogger(__name__)


class AsyncBooksSourceClient:
    """Async client for fetching one or more books CSV files."""

    def __init__(
        self,
        timeout: int = 10,
        max_concurrent: int = 5,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize async client.

        Args:
            timeout: Request timeout
            max_concurrent: Maximum concurrent requests
            transport: Optional httpx transport (used by tests)
        """
        self.timeout = timeout
        self.semaphore = asyncio.Semaphore(max_concurrent)

        # Create async HTTP client
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def fetch_text(self, url: str) -> Optional[str]:
        """
        Fetch CSV text asynchronously.

        Args:
            url: CSV location

        Returns:
            Response text or None
        """
        # Use semaphore to limit concurrency
        async with self.semaphore:
            try:
                logger.info(f"Async request: {url}")
                response = await self.client.get(url)

                if response.status_code == 200:
                    return response.text
                else:
                    logger.warning(f"Status {response.status_code} for {url}")
                    return None

            except httpx.HTTPError as e:
                logger.error(f"Async request failed: {e}")
                return None

    async def fetch_many(self, urls: List[str]) -> List[str]:
        """
        Fetch several sources in parallel.

        Args:
            urls: CSV locations

        Returns:
            Texts of the sources that could be fetched, in input order
        """
        tasks = [self.fetch_text(url) for url in urls]

        results = await asyncio.gather(*tasks)
        return [r for r in results if r is not None]

    async def load_records(self, url: str) -> List[BookRecord]:
        """Fetch one source and parse it; a failed fetch gives no records."""
        text = await self.fetch_text(url)
        if text is None:
            return []
        return parse_records(text)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
