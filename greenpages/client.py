"""Load the books CSV from disk or over HTTP with resilience patterns."""
import time
import random
import requests
from pathlib import Path
from typing import Optional, List
import logging

from greenpages.models import BookRecord
from greenpages.parse import parse_records

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    """True for http(s) sources."""
    return source.startswith(("http://", "https://"))


class BooksSourceClient:
    """Fetches raw CSV text with timeouts, retries, and backoff."""

    def __init__(
        self,
        timeout: int = 10,
        max_retries: int = 3,
        base_backoff: float = 1.0
    ):
        """
        Initialize the source client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            base_backoff: Base delay for exponential backoff
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_backoff = base_backoff

        # Create session for connection pooling
        self.session = requests.Session()

    def load_text(self, source: str) -> Optional[str]:
        """
        Read CSV text from a local path or URL.

        Args:
            source: File path or http(s) URL

        Returns:
            The text, or None if it could not be read
        """
        if is_url(source):
            return self.fetch_text(source)

        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.error(f"Source file not found: {path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {path}: {e}")
            return None

        logger.info(f"Read {len(text)} characters from {path}")
        return text

    def fetch_text(self, url: str) -> Optional[str]:
        """
        Make HTTP request with retry logic.

        Args:
            url: CSV location

        Returns:
            Response text or None if all retries exhausted
        """
        for attempt in range(self.max_retries):
            try:
                logger.info(f"Request attempt {attempt + 1}/{self.max_retries}: {url}")

                response = self.session.get(url, timeout=self.timeout)

                if response.status_code == 200:
                    logger.info(f"Success: {response.status_code}")
                    # text/* without a charset would decode as latin-1
                    if "charset" not in response.headers.get("Content-Type", ""):
                        response.encoding = "utf-8"
                    return response.text

                elif response.status_code == 429:
                    # Rate limited - must retry with backoff
                    logger.warning(f"Rate limited (429) on attempt {attempt + 1}")
                    if attempt < self.max_retries - 1:
                        self._backoff(attempt)
                        continue

                elif response.status_code >= 500:
                    # Server error - retryable
                    logger.warning(f"Server error ({response.status_code}) on attempt {attempt + 1}")
                    if attempt < self.max_retries - 1:
                        self._backoff(attempt)
                        continue

                elif response.status_code >= 400:
                    # Client error - don't retry
                    logger.error(f"Client error ({response.status_code}) for {url}")
                    return None

                else:
                    # Redirects are followed by requests; anything else is not a CSV body
                    logger.error(f"Unexpected status ({response.status_code}) for {url}")
                    return None

            except requests.exceptions.Timeout:
                logger.warning(f"Timeout on attempt {attempt + 1}")
                if attempt < self.max_retries - 1:
                    self._backoff(attempt)
                    continue

            except requests.exceptions.ConnectionError as e:
                logger.warning(f"Connection error on attempt {attempt + 1}: {e}")
                if attempt < self.max_retries - 1:
                    self._backoff(attempt)
                    continue

            except requests.exceptions.RequestException as e:
                logger.error(f"Unexpected request error: {e}")
                return None

        logger.error(f"All {self.max_retries} attempts failed")
        return None

    def _backoff(self, attempt: int):
        """
        Sleep with exponential backoff and jitter.

        Args:
            attempt: Current attempt number (0-indexed)
        """
        delay = self.base_backoff * (2 ** attempt)
        jitter = random.uniform(0, delay)
        total_delay = delay + jitter

        logger.info(f"Backing off for {total_delay:.2f} seconds")
        time.sleep(total_delay)

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def load_records(source: str, client: Optional[BooksSourceClient] = None) -> List[BookRecord]:
    """
    Load and parse a books CSV.

    A source that cannot be read gives an empty list.
    """
    if client is not None:
        text = client.load_text(source)
    else:
        with BooksSourceClient() as owned:
            text = owned.load_text(source)

    if text is None:
        logger.warning(f"No data loaded from {source}")
        return []
    return parse_records(text)
