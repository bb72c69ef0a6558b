"""
HTTP transport used by the client.

The client only needs send(); any object providing it can be injected.
Connection pooling, TLS and proxies are left to requests.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import requests


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of a completed request."""

    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class RequestsTransport:
    """Transport backed by a requests.Session."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
        timeout: Optional[float] = None
    ) -> TransportResponse:
        """
        Send a request and read the full response body.

        requests.RequestException propagates unchanged to the caller.
        """
        kwargs = {'headers': headers}
        if body is not None:
            kwargs['data'] = body
        if timeout is not None:
            kwargs['timeout'] = timeout

        response = self.session.request(method, url, **kwargs)
        return TransportResponse(response.status_code, response.content or b"")

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()
