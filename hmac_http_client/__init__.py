"""
HMAC HTTP Client Library

A Python client library that signs every request with a timestamp and an
HMAC-SHA256 hash of the timestamp's tick count, keyed by a shared secret.

Example usage:
    from hmac_http_client import HMACClient, ClientCredentials

    credentials = ClientCredentials("acme-client", "your-secret-key")
    with HMACClient("https://localhost:1234", credentials) as client:
        widget = client.get("api/widgets/1")
"""

from .client import HMACClient
from .codec import JsonCodec
from .config import ClientConfig
from .credentials import ClientCredentials
from .exceptions import (
    HMACClientError,
    ConfigurationError,
    InvalidCredentialsError,
    HTTPStatusError
)
from .signer import (
    RequestSigner,
    SignedHeaders,
    compute_hash,
    format_timestamp,
    sign,
    to_ticks
)
from .transport import RequestsTransport, TransportResponse
from .constants import (
    HEADER_HASH,
    HEADER_TIMESTAMP,
    DEFAULT_CONFIG
)

__version__ = "1.0.0"
__all__ = [
    "HMACClient",
    "JsonCodec",
    "ClientConfig",
    "ClientCredentials",
    "HMACClientError",
    "ConfigurationError",
    "InvalidCredentialsError",
    "HTTPStatusError",
    "RequestSigner",
    "SignedHeaders",
    "compute_hash",
    "format_timestamp",
    "sign",
    "to_ticks",
    "RequestsTransport",
    "TransportResponse",
    "HEADER_HASH",
    "HEADER_TIMESTAMP",
    "DEFAULT_CONFIG"
]
