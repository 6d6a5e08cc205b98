"""Request interceptors composed around a transport call."""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence, TYPE_CHECKING

from .errors import ResponseError, TransportError
from .transport import HttpRequest

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)

Chain = Callable[[HttpRequest], "requests.Response"]
Interceptor = Callable[[HttpRequest, Chain], "requests.Response"]

SDK_VARIANT_HEADER = "X-SDK-Variant"
ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"


def build_chain(interceptors: Sequence[Interceptor], send: Chain) -> Chain:
    """Compose ``interceptors`` around ``send``.

    The first interceptor is the outermost: it sees the request first and
    the response last.
    """
    call = send
    for interceptor in reversed(interceptors):
        call = _bind(interceptor, call)
    return call


def _bind(interceptor: Interceptor, proceed: Chain) -> Chain:
    def call(request: HttpRequest) -> "requests.Response":
        return interceptor(request, proceed)

    return call


def backoff_delay(attempt: int) -> float:
    """Seconds to wait before the next attempt: ``2**attempt * 100`` ms."""
    return (2 ** attempt) * 100 / 1000


class RetryInterceptor:
    """Retry server errors and I/O failures with exponential backoff.

    Successful and 4xx responses are returned untouched. A 5xx response or
    an ``OSError`` (``requests`` exceptions included) counts as a failed
    attempt; after ``max_retries`` attempts the last failure is raised.
    """

    def __init__(self, max_retries: int = 3) -> None:
        self.max_retries = max_retries

    def __call__(self, request: HttpRequest, proceed: Chain) -> "requests.Response":
        attempt = 0
        last_exc: Optional[OSError] = None
        last_status_error: Optional[ResponseError] = None

        while attempt < self.max_retries:
            try:
                response = proceed(request)
            except OSError as exc:
                last_exc, last_status_error = exc, None
                logger.warning("Request to %s failed: %s", request.url, exc)
            else:
                status = response.status_code
                if 200 <= status < 300 or 400 <= status < 500:
                    return response
                try:
                    last_status_error = ResponseError(
                        status,
                        getattr(response, "reason", "") or "",
                        getattr(response, "text", "") or "",
                    )
                finally:
                    response.close()
                last_exc = None
                logger.warning("Request to %s returned HTTP %s", request.url, status)

            attempt += 1
            if attempt < self.max_retries:
                delay = backoff_delay(attempt)
                logger.warning(
                    "Retrying in %.1fs (attempt %d of %d)", delay, attempt + 1, self.max_retries
                )
                time.sleep(delay)

        if last_status_error is not None:
            raise last_status_error
        if last_exc is not None:
            raise TransportError(str(last_exc) or type(last_exc).__name__) from last_exc
        raise TransportError(f"Failed after {self.max_retries} retries")


class AuthInterceptor:
    """Add the SDK variant and storefront access token headers."""

    def __init__(self, access_token: str, sdk_variant: str = "python") -> None:
        self._headers = {
            SDK_VARIANT_HEADER: sdk_variant,
            ACCESS_TOKEN_HEADER: access_token,
        }

    def __call__(self, request: HttpRequest, proceed: Chain) -> "requests.Response":
        return proceed(request.with_headers(self._headers))
