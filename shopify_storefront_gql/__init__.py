"""Public API exports."""
from .client import ClientBuilder, GraphClient
from .config import ClientConfig
from .dates import parse_utc_datetime
from .errors import (
    ConfigurationError,
    GraphClientError,
    InvalidDateFormatError,
    MalformedResponseError,
    ResponseError,
    TransportError,
)
from .payload import build_json_payload
from .transport import HttpRequest, RequestsTransport, Transport
from .values import to_json_value

__all__ = [
    "ClientBuilder",
    "GraphClient",
    "ClientConfig",
    "parse_utc_datetime",
    "build_json_payload",
    "to_json_value",
    "HttpRequest",
    "Transport",
    "RequestsTransport",
    "GraphClientError",
    "ConfigurationError",
    "ResponseError",
    "TransportError",
    "MalformedResponseError",
    "InvalidDateFormatError",
]
