"""Transport abstractions."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
import logging
import os
from pathlib import Path
from typing import Mapping, TYPE_CHECKING, Union

from cachecontrol import CacheControlAdapter
from cachecontrol.caches.file_cache import FileCache

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)

CACHE_MAX_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class HttpRequest:
    """Outgoing HTTP request as seen by interceptors and transports."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def with_headers(self, headers: Mapping[str, str]) -> "HttpRequest":
        """Return a copy with ``headers`` set, replacing existing values."""
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)


class Transport(ABC):
    """Abstract transport interface."""

    @abstractmethod
    def send(self, request: HttpRequest) -> "requests.Response":  # noqa: D401
        """Send a request and return the response."""
        raise NotImplementedError


class BoundedFileCache(FileCache):
    """``FileCache`` that evicts the oldest entries beyond ``max_bytes``."""

    def __init__(self, directory: Union[str, Path], max_bytes: int = CACHE_MAX_BYTES) -> None:
        super().__init__(str(directory))
        self.root = Path(directory)
        self.max_bytes = max_bytes

    def set(self, key, value, expires=None) -> None:  # type: ignore[override]
        super().set(key, value, expires)
        self._prune(keep=Path(self._fn(key)))

    def _prune(self, keep: Path) -> None:
        entries = []
        for path in self.root.rglob("*"):
            if path.suffix == ".lock":
                continue
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            if not path.is_file():
                continue
            entries.append((stat.st_mtime_ns, stat.st_size, path))
        total = sum(size for _, size, _ in entries)
        for _, size, path in sorted(entries, key=lambda entry: entry[0]):
            if total <= self.max_bytes:
                break
            if path == keep:
                continue
            path.unlink(missing_ok=True)
            total -= size
            logger.debug("Evicted cache entry %s", path.name)


class RequestsTransport(Transport):
    """Transport using the requests library.

    Args:
        timeout: Connect and read timeout in seconds. Defaults to the
            ``SHOPIFY_STOREFRONT_TIMEOUT`` env var or ``30``.
        cache_dir: Directory for an HTTP response cache bounded to 10 MB.
            No cache is installed when omitted.
        session: Pre-configured ``requests.Session`` to send through.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        cache_dir: Union[str, Path, None] = None,
        session: "requests.Session | None" = None,
    ) -> None:
        import requests
        from requests.adapters import HTTPAdapter

        self.timeout = timeout if timeout is not None else float(
            os.getenv("SHOPIFY_STOREFRONT_TIMEOUT", "30")
        )
        if session is None:
            session = requests.Session()
            if cache_dir is not None:
                adapter: HTTPAdapter = CacheControlAdapter(cache=BoundedFileCache(cache_dir))
            else:
                adapter = HTTPAdapter()
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.cache_dir = cache_dir
        self._session = session

    @property
    def session(self) -> "requests.Session":
        return self._session

    def send(self, request: HttpRequest) -> "requests.Response":
        return self._session.request(
            request.method,
            request.url,
            headers=dict(request.headers),
            data=request.body,
            timeout=(self.timeout, self.timeout),
        )
