"""
HMAC HTTP client.

Signs every outgoing request with a timestamp header and an HMAC hash
header and offers JSON helpers for GET, POST, PUT and DELETE.
"""

import logging
from typing import Any, Dict, Optional

from .codec import JsonCodec
from .config import ClientConfig
from .constants import (
    CONTENT_TYPE_JSON,
    HEADER_ACCEPT,
    HEADER_CONTENT_TYPE,
    HEADER_HASH,
    HEADER_TIMESTAMP,
)
from .credentials import ClientCredentials
from .exceptions import HTTPStatusError
from .signer import RequestSigner
from .transport import RequestsTransport, TransportResponse

logger = logging.getLogger(__name__)


class HMACClient:
    """
    HMAC client for making authenticated JSON requests.

    Signed headers are built as a fresh dict for each request and handed to
    the transport; the client keeps no default headers, so one instance can
    be shared by concurrent callers.
    """

    def __init__(
        self,
        base_address: str,
        credentials,
        hash_header_name: str = HEADER_HASH,
        timestamp_header_name: str = HEADER_TIMESTAMP,
        codec=None,
        transport=None,
        clock=None,
        **config
    ):
        """
        Initialize HMAC client.

        Args:
            base_address: Base URL for HTTP requests (trailing slashes stripped)
            credentials: ClientCredentials or a (client_id, client_secret) pair
            hash_header_name: Header carrying "<client_id>:<hash>"
            timestamp_header_name: Header carrying the signed timestamp
            codec: Object with encode()/decode(); defaults to JsonCodec
            transport: Object with send(); defaults to RequestsTransport
            clock: Zero-argument callable returning the current UTC datetime
            **config: Configuration options (timeout)

        Raises:
            ConfigurationError: If any setting is empty or invalid
            InvalidCredentialsError: If client id or secret is empty
        """
        self.credentials = ClientCredentials.coerce(credentials)
        self.config = ClientConfig.build(
            base_address,
            hash_header_name=hash_header_name,
            timestamp_header_name=timestamp_header_name,
            **config
        )
        self.signer = RequestSigner(
            self.credentials,
            hash_header_name=self.config.hash_header_name,
            timestamp_header_name=self.config.timestamp_header_name,
            clock=clock
        )
        self.codec = codec or JsonCodec()
        self.transport = transport or RequestsTransport()

    @property
    def base_address(self) -> str:
        return self.config.base_address

    def initialize_request(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Build the headers for one request.

        Caller headers are copied; any existing timestamp, hash or Accept
        entries (matched case-insensitively) are dropped and replaced with
        freshly signed values.

        Args:
            headers: Extra headers for this request

        Returns:
            New header dict
        """
        signed = self.signer.signed_headers()
        replaced = {
            signed.timestamp_header_name.lower(),
            signed.hash_header_name.lower(),
            HEADER_ACCEPT.lower(),
        }

        request_headers = {
            name: value for name, value in (headers or {}).items()
            if name.lower() not in replaced
        }
        request_headers.update(signed.as_dict())
        request_headers[HEADER_ACCEPT] = CONTENT_TYPE_JSON

        logger.debug(
            "Signed request for client %s at %s",
            self.credentials.client_id, signed.timestamp_value
        )
        return request_headers

    def send(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        """
        Sign and send a request.

        Args:
            method: HTTP method
            path: URL path (relative to base_address)
            body: Encoded request body
            headers: Extra headers for this request

        Returns:
            TransportResponse with status code and raw body
        """
        url = self.config.url_for(path)
        request_headers = self.initialize_request(headers)
        if body is not None:
            request_headers = {
                name: value for name, value in request_headers.items()
                if name.lower() != HEADER_CONTENT_TYPE.lower()
            }
            request_headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON

        logger.debug("%s %s", method, url)
        return self.transport.send(
            method, url, request_headers, body, timeout=self.config.timeout
        )

    def get(self, path: str, into=None, headers: Optional[Dict[str, str]] = None) -> Any:
        """
        GET a resource and decode the body.

        Usage: client.get("api/widget/1", into=Widget) or
        client.get("api/widgets", into=list[Widget])
        """
        response = self.send('GET', path, headers=headers)
        return self.codec.decode(response.body, into)

    def post(self, path: str, item: Any, into=None, headers: Optional[Dict[str, str]] = None) -> Any:
        """
        POST an item as JSON. Usage: client.post("api/widgets", widget, into=Widget)

        Raises:
            HTTPStatusError: If the response status is not 2xx
        """
        return self._send_item('POST', path, item, into, headers)

    def put(self, path: str, item: Any, into=None, headers: Optional[Dict[str, str]] = None) -> Any:
        """
        PUT an item as JSON. Usage: client.put("api/widgets/1", widget, into=Widget)

        Raises:
            HTTPStatusError: If the response status is not 2xx
        """
        return self._send_item('PUT', path, item, into, headers)

    def delete(self, path: str, headers: Optional[Dict[str, str]] = None) -> int:
        """DELETE a resource and return the raw status code."""
        response = self.send('DELETE', path, headers=headers)
        return response.status_code

    def _send_item(self, method, path, item, into, headers):
        response = self.send(method, path, body=self.codec.encode(item), headers=headers)
        if not response.ok:
            logger.warning("%s %s returned status %s", method, path, response.status_code)
            raise HTTPStatusError(response.status_code, response.body)
        return self.codec.decode(response.body, into)

    def close(self):
        """Close the underlying transport."""
        close = getattr(self.transport, 'close', None)
        if close is not None:
            close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
