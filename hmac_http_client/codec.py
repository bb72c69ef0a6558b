"""
JSON codec used by the client for request and response bodies.

Any object with compatible encode() and decode() methods can be passed to
HMACClient in place of JsonCodec.
"""

import dataclasses
import json
import typing
from typing import Any, Optional


class JsonCodec:
    """Encode request items to JSON bytes and decode responses into types."""

    def __init__(self, separators=(',', ':')):
        self.separators = separators

    def encode(self, item: Any) -> bytes:
        if dataclasses.is_dataclass(item) and not isinstance(item, type):
            item = dataclasses.asdict(item)
        return json.dumps(item, separators=self.separators).encode('utf-8')

    def decode(self, data: Optional[bytes], into=None) -> Any:
        """
        Decode a response body.

        Args:
            data: Raw response body
            into: Target type. None returns plain JSON values; ``list[Cls]``
                builds each element; a class receives JSON objects as keyword
                arguments; any other callable gets the decoded value.

        Returns:
            Decoded value, or None for an empty body

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        if not data:
            return None

        value = json.loads(data)
        if into is None:
            return value
        return self._build(value, into)

    def _build(self, value: Any, into) -> Any:
        if typing.get_origin(into) is list:
            (item_type,) = typing.get_args(into) or (None,)
            if item_type is None:
                return list(value)
            return [self._build(item, item_type) for item in value]

        if into in (dict, list, str, int, float, bool):
            return into(value)

        if isinstance(value, dict) and isinstance(into, type):
            return into(**value)

        return into(value)
