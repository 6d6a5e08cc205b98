"""Immutable client configuration."""
from __future__ import annotations

from dataclasses import dataclass

from .transport import Transport

DEFAULT_MAX_RETRIES = 3
DEFAULT_SDK_VARIANT = "python"


def endpoint_url(shop_domain: str, api_version: str) -> str:
    """Return the Storefront GraphQL endpoint for a shop and API version."""
    return f"https://{shop_domain}/api/{api_version}/graphql"


@dataclass(frozen=True)
class ClientConfig:
    """Resolved settings for a :class:`~shopify_storefront_gql.client.GraphClient`.

    Attributes:
        endpoint_url: Full GraphQL URL, e.g.
            ``https://your-store.myshopify.com/api/2025-01/graphql``
        access_token: Storefront API access token
        max_retries: Attempts made for server errors and I/O failures
        transport: Transport the interceptor chain sends through
        sdk_variant: Value of the ``X-SDK-Variant`` header
    """

    endpoint_url: str
    access_token: str
    transport: Transport
    max_retries: int = DEFAULT_MAX_RETRIES
    sdk_variant: str = DEFAULT_SDK_VARIANT

    def __repr__(self) -> str:
        return (
            f"ClientConfig(endpoint_url={self.endpoint_url!r}, access_token='***', "
            f"max_retries={self.max_retries}, transport={self.transport!r}, "
            f"sdk_variant={self.sdk_variant!r})"
        )
