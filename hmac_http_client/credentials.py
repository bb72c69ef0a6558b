"""
Client credentials shared with the verifying service.
"""

from dataclasses import dataclass, field

from .exceptions import InvalidCredentialsError


@dataclass(frozen=True)
class ClientCredentials:
    """
    Client identifier and shared secret.

    Both values are checked when the object is created so that a
    misconfigured client fails before any request is attempted.
    """

    client_id: str
    client_secret: str = field(repr=False)

    def __post_init__(self):
        if not self.client_id or not isinstance(self.client_id, str):
            raise InvalidCredentialsError("client_id must be a non-empty string")

        # the verifier splits the hash header on the first ':'
        if ":" in self.client_id:
            raise InvalidCredentialsError("client_id cannot contain ':'")

        if not self.client_secret or not isinstance(self.client_secret, str):
            raise InvalidCredentialsError("client_secret must be a non-empty string")

    @classmethod
    def coerce(cls, value) -> "ClientCredentials":
        """Accept either ClientCredentials or a (client_id, client_secret) pair."""
        if isinstance(value, cls):
            return value
        if value is None:
            raise InvalidCredentialsError("credentials cannot be empty")
        try:
            client_id, client_secret = value
        except (TypeError, ValueError):
            raise InvalidCredentialsError(
                "credentials must be ClientCredentials or a (client_id, client_secret) pair"
            )
        return cls(client_id, client_secret)
