"""
Request signing for the HMAC HTTP client.

Every request carries a timestamp header and a hash header. The hash is an
HMAC-SHA256 over the decimal tick count of the timestamp (100ns intervals
since 0001-01-01T00:00:00Z), keyed with the shared secret and base64
encoded. The verifying service parses the timestamp header, recomputes the
tick count and compares hashes, so both sides must derive byte-identical
hash input from the same instant.
"""

import base64
import datetime
import hashlib
import hmac
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .constants import (
    HEADER_HASH,
    HEADER_TIMESTAMP,
    TICKS_PER_DAY,
    TICKS_PER_MICROSECOND,
    TICKS_PER_SECOND,
    TIMESTAMP_FORMAT,
)
from .credentials import ClientCredentials
from .exceptions import InvalidCredentialsError

TICKS_EPOCH = datetime.datetime(1, 1, 1, tzinfo=datetime.timezone.utc)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _as_utc(moment: datetime.datetime) -> datetime.datetime:
    # Naive datetimes are taken to be UTC already
    if moment.tzinfo is None:
        return moment.replace(tzinfo=datetime.timezone.utc)
    return moment.astimezone(datetime.timezone.utc)


def to_ticks(moment: datetime.datetime) -> int:
    """
    Convert a datetime to ticks.

    Args:
        moment: Point in time; naive values are treated as UTC

    Returns:
        Number of 100ns intervals since 0001-01-01T00:00:00Z
    """
    delta = _as_utc(moment) - TICKS_EPOCH
    return (
        delta.days * TICKS_PER_DAY
        + delta.seconds * TICKS_PER_SECOND
        + delta.microseconds * TICKS_PER_MICROSECOND
    )


def format_timestamp(moment: datetime.datetime) -> str:
    """
    Format a datetime for the timestamp header.

    Round-trip UTC with seven fractional digits, e.g.
    ``2024-03-01T12:00:00.1234560Z``. Python datetimes stop at
    microseconds, so the seventh digit is always 0.
    """
    return _as_utc(moment).strftime(TIMESTAMP_FORMAT) + "0Z"


def compute_hash(client_secret: str, ticks: int) -> str:
    """
    Compute the HMAC hash for a tick count.

    Args:
        client_secret: Shared secret (UTF-8 encoded as the HMAC key)
        ticks: Tick count of the request timestamp

    Returns:
        Standard base64 encoded HMAC-SHA256 digest
    """
    mac = hmac.new(
        client_secret.encode('utf-8'),
        str(ticks).encode('utf-8'),
        hashlib.sha256
    )
    return base64.b64encode(mac.digest()).decode('ascii')


def sign(
    client_secret: str,
    client_id: str,
    now: Optional[datetime.datetime] = None
) -> Tuple[str, str]:
    """
    Sign a single request.

    The instant is captured once; the same value feeds both the tick count
    and the formatted timestamp.

    Args:
        client_secret: Shared secret
        client_id: Client identifier, sent in clear before the hash
        now: Instant to sign (defaults to the current UTC time)

    Returns:
        Tuple of (timestamp_value, hash_payload)

    Raises:
        InvalidCredentialsError: If client_id or client_secret is empty
    """
    if not client_id or not isinstance(client_id, str):
        raise InvalidCredentialsError("client_id must be a non-empty string")

    if ":" in client_id:
        raise InvalidCredentialsError("client_id cannot contain ':'")

    if not client_secret or not isinstance(client_secret, str):
        raise InvalidCredentialsError("client_secret must be a non-empty string")

    timestamp = now if now is not None else utc_now()
    hash_value = compute_hash(client_secret, to_ticks(timestamp))
    hash_payload = f"{client_id}:{hash_value}"

    return format_timestamp(timestamp), hash_payload


@dataclass(frozen=True)
class SignedHeaders:
    """Authentication header values for exactly one request."""

    timestamp_header_name: str
    timestamp_value: str
    hash_header_name: str
    hash_payload: str

    def as_dict(self) -> Dict[str, str]:
        return {
            self.timestamp_header_name: self.timestamp_value,
            self.hash_header_name: self.hash_payload,
        }


class RequestSigner:
    """
    Produces fresh SignedHeaders for a fixed set of credentials.

    Holds no per-request state; each call to signed_headers() reads the
    clock once and returns a new immutable value.
    """

    def __init__(
        self,
        credentials: ClientCredentials,
        hash_header_name: str = HEADER_HASH,
        timestamp_header_name: str = HEADER_TIMESTAMP,
        clock: Optional[Callable[[], datetime.datetime]] = None
    ):
        self.credentials = credentials
        self.hash_header_name = hash_header_name
        self.timestamp_header_name = timestamp_header_name
        self.clock = clock or utc_now

    def signed_headers(self) -> SignedHeaders:
        timestamp_value, hash_payload = sign(
            self.credentials.client_secret,
            self.credentials.client_id,
            self.clock()
        )
        return SignedHeaders(
            timestamp_header_name=self.timestamp_header_name,
            timestamp_value=timestamp_value,
            hash_header_name=self.hash_header_name,
            hash_payload=hash_payload,
        )
