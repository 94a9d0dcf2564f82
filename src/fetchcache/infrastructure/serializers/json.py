"""JSON serializer for durable records."""

import json
from datetime import date, datetime
from typing import Any


class SerializationError(Exception):
    """Raised when a record cannot be encoded or decoded."""

    pass


class RecordEncoder(json.JSONEncoder):
    """Encoder accepting the values API responses are usually turned into.

    Dates become ISO strings, sets and tuples become lists and plain
    objects are written as their attribute dict. None of these survive a
    round trip as their original type.
    """

    def default(self, o: Any) -> Any:
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, (set, frozenset, tuple)):
            return list(o)
        if hasattr(o, "__dict__"):
            return vars(o)
        return super().default(o)


class JsonSerializer:
    """Compact JSON encoding of durable records."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._encoder = RecordEncoder(separators=(",", ":"), ensure_ascii=False)

    def serialize(self, value: Any) -> bytes:
        """Encode a record to bytes.

        Raises:
            SerializationError: If the record holds something JSON cannot
                represent, or a circular reference.
        """
        try:
            return self._encoder.encode(value).encode(self._encoding)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot encode record: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        """Decode bytes written by ``serialize``.

        Raises:
            SerializationError: If the bytes are not valid JSON text.
        """
        try:
            return json.loads(data.decode(self._encoding))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SerializationError(f"Corrupt record: {e}") from e
