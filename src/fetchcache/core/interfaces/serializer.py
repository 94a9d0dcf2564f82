"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Contract for encoding durable records.

    The durable store hands a ``{"value": ..., "expiresAt": ...}``
    record to the serializer before writing it to the storage medium and
    reads it back through ``deserialize``.
    """

    def serialize(self, value: Any) -> bytes:
        """Encode a record.

        Raises:
            SerializationError: If the value cannot be encoded.
        """
        ...

    def deserialize(self, data: bytes) -> Any:
        """Decode a record previously produced by ``serialize``.

        Raises:
            SerializationError: If the data is corrupt.
        """
        ...
