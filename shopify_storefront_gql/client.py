"""Storefront GraphQL client and its builder."""
from __future__ import annotations

import asyncio
from contextlib import closing
import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union, TYPE_CHECKING

from .config import DEFAULT_MAX_RETRIES, DEFAULT_SDK_VARIANT, ClientConfig, endpoint_url
from .errors import ConfigurationError, MalformedResponseError, ResponseError
from .interceptors import AuthInterceptor, RetryInterceptor, build_chain
from .payload import build_json_payload
from .transport import HttpRequest, RequestsTransport, Transport

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)

CACHE_CONTROL = "max-age=3600"


def normalize_shop_domain(shop_domain: str) -> str:
    """Return the bare host for ``shop_domain``.

    A leading ``https://`` or ``http://`` and trailing slashes are dropped;
    anything else that is not a host name is rejected.
    """
    host = shop_domain.strip()
    for scheme in ("https://", "http://"):
        if host.lower().startswith(scheme):
            host = host[len(scheme):]
            break
    host = host.rstrip("/")
    if not host or any(ch in host for ch in "/:?#@") or any(ch.isspace() for ch in host):
        raise ConfigurationError(f"Shop domain must be a host name, got {shop_domain!r}")
    return host


class GraphClient:
    """Executes GraphQL queries against a single Storefront endpoint.

    Instances are created by :class:`ClientBuilder` and are safe to share
    between threads and tasks; nothing on the client changes after build.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._call = build_chain(
            [
                RetryInterceptor(config.max_retries),
                AuthInterceptor(config.access_token, config.sdk_variant),
            ],
            config.transport.send,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def endpoint_url(self) -> str:
        return self._config.endpoint_url

    @property
    def transport(self) -> Transport:
        return self._config.transport

    def build_request(self, query: str, variables: Mapping[str, Any] | None = None) -> HttpRequest:
        """Build the POST request for ``query`` before interceptors run."""
        return HttpRequest(
            method="POST",
            url=self._config.endpoint_url,
            headers={
                "Content-Type": "application/json",
                "Cache-Control": CACHE_CONTROL,
            },
            body=build_json_payload(query, variables).encode("utf-8", errors="replace"),
        )

    def execute(self, query: str, variables: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query and block until the parsed response is ready.

        Args:
            query: The GraphQL document to send
            variables: Optional mapping of variables for the query

        Returns:
            dict: The response body, a JSON object

        Raises:
            ResponseError: The final response was not 2xx
            TransportError: The request failed on every attempt
            MalformedResponseError: The body is not a JSON object

        Example:
            >>> client = ClientBuilder("shop.myshopify.com", token, "2025-01").build()
            >>> client.execute("{ shop { name } }")["data"]["shop"]["name"]
        """
        request = self.build_request(query, variables)
        logger.debug("POST %s", request.url)
        response = self._call(request)
        with closing(response):
            return _handle_response(response)

    async def execute_query(
        self, query: str, variables: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Coroutine version of :meth:`execute`.

        The request, including backoff sleeps and body parsing, runs in a
        worker thread so the event loop is never blocked. Cancelling the
        awaiting task stops waiting for the result, but the HTTP call already
        in flight runs until it completes or hits the transport timeout.
        """
        return await asyncio.to_thread(self.execute, query, variables)

    def __repr__(self) -> str:
        return f"GraphClient(endpoint_url={self.endpoint_url!r})"


def _handle_response(response: "requests.Response") -> dict[str, Any]:
    status = response.status_code
    if not 200 <= status < 300:
        raise ResponseError(
            status,
            getattr(response, "reason", "") or "",
            getattr(response, "text", "") or "",
        )
    try:
        data = json.loads(response.content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        snippet = response.content[:300].decode("utf-8", errors="replace")
        raise MalformedResponseError(f"Invalid JSON body: {snippet}", status) from exc
    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(data).__name__}", status
        )
    return data


class ClientBuilder:
    """Collects settings and builds an immutable :class:`GraphClient`.

    Args:
        shop_domain: Shop host name, e.g. ``your-store.myshopify.com``
        access_token: Storefront API access token
        api_version: Storefront API version, e.g. ``2025-01``
        cache_dir: Directory for a 10 MB HTTP response cache. Only used
            when no ``transport`` is supplied.
        transport: Custom transport. Defaults to :class:`RequestsTransport`.
        max_retries: Attempts for server errors and I/O failures. Defaults to
            the ``SHOPIFY_STOREFRONT_MAX_RETRIES`` env var or ``3``.
    """

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str,
        *,
        cache_dir: Union[str, Path, None] = None,
        transport: Optional[Transport] = None,
        max_retries: Optional[int] = None,
    ) -> None:
        self._shop_domain = shop_domain
        self._access_token = access_token
        self._api_version = api_version
        self._cache_dir = cache_dir
        self._transport = transport
        self._max_retries = max_retries
        self._sdk_variant = DEFAULT_SDK_VARIANT

    @classmethod
    def from_env(cls) -> "ClientBuilder":
        """Create a builder from ``SHOPIFY_STOREFRONT_*`` environment variables."""
        return cls(
            os.getenv("SHOPIFY_STOREFRONT_DOMAIN", ""),
            os.getenv("SHOPIFY_STOREFRONT_ACCESS_TOKEN", ""),
            os.getenv("SHOPIFY_STOREFRONT_API_VERSION", ""),
            cache_dir=os.getenv("SHOPIFY_STOREFRONT_CACHE_DIR") or None,
        )

    def shop_domain(self, shop_domain: str) -> "ClientBuilder":
        self._shop_domain = shop_domain
        return self

    def access_token(self, access_token: str) -> "ClientBuilder":
        self._access_token = access_token
        return self

    def api_version(self, api_version: str) -> "ClientBuilder":
        self._api_version = api_version
        return self

    def cache_dir(self, cache_dir: Union[str, Path]) -> "ClientBuilder":
        self._cache_dir = cache_dir
        return self

    def transport(self, transport: Transport) -> "ClientBuilder":
        self._transport = transport
        return self

    def max_retries(self, max_retries: int) -> "ClientBuilder":
        self._max_retries = max_retries
        return self

    def sdk_variant(self, sdk_variant: str) -> "ClientBuilder":
        self._sdk_variant = sdk_variant
        return self

    def default_transport(self) -> RequestsTransport:
        """Transport used when none is supplied: 30s timeouts, optional cache."""
        return RequestsTransport(cache_dir=self._cache_dir)

    def _resolve_max_retries(self) -> int:
        if self._max_retries is not None:
            value = self._max_retries
        else:
            raw = os.getenv("SHOPIFY_STOREFRONT_MAX_RETRIES", str(DEFAULT_MAX_RETRIES))
            try:
                value = int(raw)
            except ValueError as exc:
                raise ConfigurationError(
                    f"SHOPIFY_STOREFRONT_MAX_RETRIES must be an integer, got {raw!r}"
                ) from exc
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigurationError(f"max_retries must be a positive integer, got {value!r}")
        return value

    def _validate(self) -> None:
        for name, value in (
            ("Shop domain", self._shop_domain),
            ("Access token", self._access_token),
            ("API version", self._api_version),
        ):
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"{name} must be provided")
        normalize_shop_domain(self._shop_domain)

    def build(self) -> GraphClient:
        """Validate the settings and create the client.

        Raises:
            ConfigurationError: A required setting is blank or ``max_retries``
                is not a positive integer.
        """
        self._validate()
        max_retries = self._resolve_max_retries()
        transport = self._transport if self._transport is not None else self.default_transport()
        config = ClientConfig(
            endpoint_url=endpoint_url(normalize_shop_domain(self._shop_domain), self._api_version.strip()),
            access_token=self._access_token,
            transport=transport,
            max_retries=max_retries,
            sdk_variant=self._sdk_variant,
        )
        logger.debug("Built client for %s", config.endpoint_url)
        return GraphClient(config)
