"""
Request and response payload codecs

Decoding and encoding are two separate contracts so that a type can
support either direction independently. ``Json``, ``Text`` and ``Empty``
cover the common cases; domain specific payloads implement the protocols
directly.
"""

import json
from typing import Any, Generic, Protocol, Type, TypeVar, runtime_checkable

T = TypeVar('T')
P = TypeVar('P', bound='FromPayload')


class PayloadError(Exception):
    """Error raised by a payload codec"""
    pass


@runtime_checkable
class FromPayload(Protocol):
    """Protocol for types that can be parsed from a payload"""

    @classmethod
    def parse_from_bytes(cls: Type[P], data: bytes) -> P:
        """Parse the payload into an instance, raising PayloadError on failure"""
        ...


@runtime_checkable
class ToPayload(Protocol):
    """Protocol for types that can be converted to a payload"""

    def to_bytes(self) -> bytes:
        """Convert this object to the payload, raising PayloadError on failure"""
        ...


class Json(Generic[T]):
    """A JSON payload"""

    __slots__ = ('value',)

    def __init__(self, value: T):
        self.value = value

    @classmethod
    def parse_from_bytes(cls, data: bytes) -> 'Json[Any]':
        try:
            return cls(json.loads(data))
        except (ValueError, TypeError, RecursionError) as e:
            raise PayloadError(str(e)) from e

    def to_bytes(self) -> bytes:
        try:
            return json.dumps(self.value, separators=(',', ':'), ensure_ascii=False).encode('utf-8')
        except (ValueError, TypeError, RecursionError) as e:
            raise PayloadError(str(e)) from e

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Json) and self.value == other.value

    def __repr__(self) -> str:
        return f"Json({self.value!r})"


class Text:
    """A raw UTF-8 string payload"""

    __slots__ = ('value',)

    def __init__(self, value: str):
        self.value = value

    @classmethod
    def parse_from_bytes(cls, data: bytes) -> 'Text':
        try:
            return cls(data.decode('utf-8'))
        except UnicodeDecodeError as e:
            raise PayloadError(str(e)) from e

    def to_bytes(self) -> bytes:
        try:
            return self.value.encode('utf-8')
        except (UnicodeEncodeError, AttributeError) as e:
            raise PayloadError(str(e)) from e

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Text) and self.value == other.value

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Text({self.value!r})"


class Empty:
    """The empty payload: no bytes in, no bytes out"""

    __slots__ = ()

    @classmethod
    def parse_from_bytes(cls, data: bytes) -> 'Empty':
        return cls()

    def to_bytes(self) -> bytes:
        return b''

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Empty)

    def __repr__(self) -> str:
        return "Empty()"
