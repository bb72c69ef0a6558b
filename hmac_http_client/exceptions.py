"""
Custom exceptions for HMAC HTTP client library.
"""


class HMACClientError(Exception):
    """Base exception for HMAC client errors."""
    pass


class ConfigurationError(HMACClientError):
    """Raised when client configuration is invalid."""
    pass


class InvalidCredentialsError(ConfigurationError):
    """Raised when the client id or client secret is empty."""
    pass


class HTTPStatusError(HMACClientError):
    """Raised when a POST or PUT response carries a non-success status."""

    def __init__(self, status_code: int, body: bytes = b""):
        super().__init__(f"Request failed with status {status_code}")
        self.status_code = status_code
        self.body = body
