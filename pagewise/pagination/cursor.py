"""Opaque cursor tokens for bidirectional pagination."""

import base64
import binascii
import json
from datetime import datetime
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class Direction(str, Enum):
    """Traversal direction encoded in a cursor."""

    FORWARD = "forward"
    BACKWARD = "backward"


class KeyStrategy(NamedTuple):
    """Converts a cursor key value to and from its string form."""

    serialize: Callable[[Any], str]
    deserialize: Callable[[str], Any]


def _deserialize_string(value: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected a string cursor value, got {type(value).__name__}")
    return value


def _serialize_datetime(value: datetime) -> str:
    if not isinstance(value, datetime):
        raise TypeError(f"Expected a datetime cursor value, got {type(value).__name__}")
    return value.isoformat()


def _deserialize_datetime(value: str) -> datetime:
    # Python < 3.11 does not parse a trailing "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


STRING_KEY = KeyStrategy(serialize=str, deserialize=_deserialize_string)
DATETIME_KEY = KeyStrategy(serialize=_serialize_datetime, deserialize=_deserialize_datetime)
UUID_KEY = KeyStrategy(serialize=str, deserialize=UUID)


class Cursor(BaseModel):
    """A pagination position: a key value plus a traversal direction.

    Cursors are value objects. Two cursors with the same value and
    direction compare equal, and instances cannot be modified.
    """

    value: Any = Field(description="Key value of the record the cursor points at")
    direction: Direction = Field(description="Direction to continue traversal in")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def forward(cls, value: Any) -> "Cursor":
        """Create a cursor that continues forward from value."""
        return cls(value=value, direction=Direction.FORWARD)

    @classmethod
    def backward(cls, value: Any) -> "Cursor":
        """Create a cursor that continues backward from value."""
        return cls(value=value, direction=Direction.BACKWARD)

    def with_direction(self, direction: Direction) -> "Cursor":
        """Return a copy of this cursor pointing the other way (or the same way)."""
        return Cursor(value=self.value, direction=direction)

    def __str__(self) -> str:
        return f"Cursor({self.direction.value}: {self.value})"


class CursorPayload(BaseModel):
    """Decoded token body. Unknown fields are ignored."""

    v: str
    d: Direction

    model_config = ConfigDict(extra="ignore")


class CursorCodec:
    """Encodes cursors to URL-safe tokens and decodes them back.

    Tokens are ``base64url(json({"v": <serialized value>, "d": <direction>}))``
    with padding stripped. They are obfuscated, not signed: clients can
    read and forge them, so the server must never trust a cursor beyond
    using it as a query position.
    """

    def __init__(self, strategy: KeyStrategy = STRING_KEY):
        self.strategy = strategy

    def encode(self, value: Any, direction: Direction) -> str:
        """Encode a key value and direction into an opaque token.

        Args:
            value: Key value of the record the cursor points at
            direction: Direction the next request should traverse in

        Returns:
            URL-safe base64 token without padding

        Raises:
            ValueError: If the serialized value is not valid Unicode, e.g. a
                string holding a lone surrogate
        """
        payload = {
            "v": self.strategy.serialize(value),
            "d": Direction(direction).value,
        }
        raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        try:
            data = raw.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValueError(f"Cursor value cannot be encoded as UTF-8: {e.reason}") from e
        return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")

    def decode(self, token: Optional[str]) -> Optional[Cursor]:
        """Decode a token produced by encode.

        Args:
            token: Opaque token received from a client

        Returns:
            The decoded cursor, or None if the token is malformed in any way
        """
        if not token or not isinstance(token, str):
            return None

        try:
            padded = token + "=" * (-len(token) % 4)
            raw = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
            payload = CursorPayload.model_validate_json(raw.decode("utf-8"))
            value = self.strategy.deserialize(payload.v)
        except (binascii.Error, UnicodeError, ValidationError, ValueError, TypeError):
            return None

        return Cursor(value=value, direction=payload.d)


_default_codec = CursorCodec()


def encode_cursor(value: str, direction: Direction = Direction.FORWARD) -> str:
    """Encode a string key cursor with the default codec."""
    return _default_codec.encode(value, direction)


def decode_cursor(token: Optional[str]) -> Optional[Cursor]:
    """Decode a string key cursor with the default codec."""
    return _default_codec.decode(token)
