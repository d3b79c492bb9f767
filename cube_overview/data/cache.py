"""Local caching of HTTP responses."""

import hashlib
import logging
import time
from pathlib import Path
from typing import Callable, Optional

import requests

from cube_overview import __version__
from cube_overview.errors import FetchError

logger = logging.getLogger(__name__)


class ResponseCache:
    """Fetches URLs, keeping every response body on disk forever."""

    RATE_LIMIT = 0.1  # 10 requests per second -> 100ms between requests

    def __init__(
        self,
        cache_dir: str = ".cache",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize response cache.

        Args:
            cache_dir: Directory for cache files
            timeout: Request timeout in seconds
            session: Optional HTTP session (a new one is created if omitted)
        """
        self.cache_dir = Path(cache_dir)
        self.timeout = timeout
        self.last_request_time = 0.0
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": f"CubeOverview/{__version__}",
        })
        self._ensure_cache_dir()

    def _ensure_cache_dir(self) -> None:
        """Create cache directory if it doesn't exist."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _get_cache_key(self, url: str) -> str:
        return hashlib.sha512(url.encode("utf-8")).hexdigest()

    def _get_cache_path(self, url: str) -> Path:
        return self.cache_dir / self._get_cache_key(url)

    def _cache_files(self) -> list[Path]:
        # SHA-512 hex digests are 128 characters long
        return [
            f for f in self.cache_dir.iterdir()
            if f.is_file() and len(f.name) == 128
        ]

    def is_cached(self, url: str) -> bool:
        """Check whether a response for url is stored."""
        return self._get_cache_path(url).is_file()

    def _rate_limit(self) -> None:
        """Ensure rate limiting between network requests."""
        elapsed = time.time() - self.last_request_time
        if elapsed < self.RATE_LIMIT:
            time.sleep(self.RATE_LIMIT - elapsed)
        self.last_request_time = time.time()

    def _decode(self, url: str, content: bytes) -> str:
        # Both CubeCobra and Scryfall serve UTF-8, with or without a charset
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Response from {url} is not valid UTF-8")
            raise FetchError(url, reason=f"invalid UTF-8: {e}") from e

    def fetch(self, url: str, validate: Optional[Callable[[str], object]] = None) -> str:
        """
        Return the response body for url, from cache if present.

        Args:
            url: URL to GET
            validate: Optional check run on a fresh body before it is cached;
                a ValueError means the body is unusable

        Returns:
            Raw response body

        Raises:
            FetchError: If the request fails, returns a non-success status,
                or returns a body that fails decoding or validation
        """
        cache_path = self._get_cache_path(url)

        if cache_path.is_file():
            logger.debug(f"Cache hit for {url}")
            return self._decode(url, cache_path.read_bytes())

        logger.info(f"Fetching {url}")
        self._rate_limit()

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP error {status} for {url}")
            raise FetchError(url, status_code=status, reason=str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise FetchError(url, reason=str(e)) from e

        body = self._decode(url, response.content)

        if validate is not None:
            try:
                validate(body)
            except ValueError as e:
                logger.error(f"Unusable response from {url}: {e}")
                raise FetchError(url, reason=f"unusable response: {e}") from e

        cache_path.write_bytes(response.content)

        return body

    def invalidate(self, url: str) -> bool:
        """
        Invalidate the cached response for url.

        Returns:
            True if an entry was removed, False if none existed
        """
        cache_path = self._get_cache_path(url)

        if cache_path.exists():
            cache_path.unlink()
            return True
        return False

    def clear_all(self) -> int:
        """
        Clear all cached responses.

        Returns:
            Number of cache files deleted
        """
        count = 0
        for cache_file in self._cache_files():
            cache_file.unlink()
            count += 1
        return count

    def get_stats(self) -> dict:
        """Get cache statistics."""
        cache_files = self._cache_files()
        total_size = sum(f.stat().st_size for f in cache_files)

        return {
            "total_entries": len(cache_files),
            "total_size_bytes": total_size,
            "total_size_mb": round(total_size / (1024 * 1024), 2),
            "cache_dir": str(self.cache_dir),
        }
