"""
Client configuration.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from .constants import DEFAULT_CONFIG, HEADER_HASH, HEADER_TIMESTAMP
from .exceptions import ConfigurationError


def normalize_base_address(base_address: Optional[str]) -> str:
    """Strip trailing slashes so paths join with exactly one separator."""
    if not base_address or not base_address.strip():
        raise ConfigurationError("base_address cannot be empty")

    normalized = base_address.strip().rstrip('/')
    parts = urlsplit(normalized)
    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(f"base_address is not a valid address: {base_address!r}")
    return normalized


def normalize_header_name(name: Optional[str], setting: str) -> str:
    if name is None or not name.strip():
        raise ConfigurationError(f"{setting} cannot be empty")
    return name.strip()


@dataclass(frozen=True)
class ClientConfig:
    """Validated, read-only client settings."""

    base_address: str
    hash_header_name: str = HEADER_HASH
    timestamp_header_name: str = HEADER_TIMESTAMP
    timeout: float = DEFAULT_CONFIG['timeout']

    def __post_init__(self):
        # frozen dataclass: write normalized values through object.__setattr__
        object.__setattr__(self, 'base_address', normalize_base_address(self.base_address))
        object.__setattr__(
            self, 'hash_header_name',
            normalize_header_name(self.hash_header_name, 'hash_header_name')
        )
        object.__setattr__(
            self, 'timestamp_header_name',
            normalize_header_name(self.timestamp_header_name, 'timestamp_header_name')
        )

        if self.hash_header_name.lower() == self.timestamp_header_name.lower():
            raise ConfigurationError("hash_header_name and timestamp_header_name must differ")

        if self.timeout is None or self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    @classmethod
    def build(
        cls,
        base_address: str,
        hash_header_name: str = HEADER_HASH,
        timestamp_header_name: str = HEADER_TIMESTAMP,
        **config
    ) -> "ClientConfig":
        """
        Build configuration from constructor arguments.

        Args:
            base_address: Base URL for HTTP requests
            hash_header_name: Name of the hash header
            timestamp_header_name: Name of the timestamp header
            **config: Overrides for DEFAULT_CONFIG (timeout)

        Raises:
            ConfigurationError: If any value is empty or invalid
        """
        unknown = set(config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"Unknown configuration options: {', '.join(sorted(unknown))}")

        # Merge default config with user overrides
        merged = {**DEFAULT_CONFIG, **config}

        return cls(
            base_address=base_address,
            hash_header_name=hash_header_name,
            timestamp_header_name=timestamp_header_name,
            timeout=merged['timeout'],
        )

    def url_for(self, path: str) -> str:
        """Join a request path onto the base address."""
        if not path:
            return self.base_address
        return f"{self.base_address}/{path.lstrip('/')}"
