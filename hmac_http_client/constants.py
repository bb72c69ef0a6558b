"""
Constants for HMAC HTTP client library.
Header names and wire formats shared with the verifying service.
"""

# HTTP Headers (defaults, overridable per client)
HEADER_HASH = "Hash"
HEADER_TIMESTAMP = "Timestamp"
HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"

CONTENT_TYPE_JSON = "application/json"

# Ticks are 100ns intervals since 0001-01-01T00:00:00Z
TICKS_PER_MICROSECOND = 10
TICKS_PER_SECOND = 10_000_000
TICKS_PER_DAY = 86_400 * TICKS_PER_SECOND

# Round-trip UTC format, seven fractional digits
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
}
