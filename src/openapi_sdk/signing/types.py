"""
Type definitions for request signing functionality

This module provides the data classes consumed by the request signer:
the timestamp used as an anti-replay input and the full set of signed
request attributes.
"""

import time
from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from dataclasses import dataclass
from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods supported by the request pipeline"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class Timestamp:
    """
    Point in time used for request freshness and as a signed input.

    The value is held as integer milliseconds since the Unix epoch and
    rendered as seconds with a three digit fraction, e.g. ``1700000000.123``.

    Attributes:
        millis: Milliseconds since the Unix epoch
    """
    millis: int

    @classmethod
    def now(cls) -> 'Timestamp':
        """Current wall-clock time."""
        return cls(int(time.time() * 1000))

    @classmethod
    def parse(cls, text: str) -> 'Timestamp':
        """
        Parse a decimal number of seconds.

        Raises:
            ValueError: If the text is not a finite, non-negative number
        """
        try:
            seconds = Decimal(text.strip())
        except (InvalidOperation, AttributeError) as e:
            raise ValueError(f"Invalid timestamp: {text!r}") from e

        if not seconds.is_finite() or seconds < 0:
            raise ValueError(f"Invalid timestamp: {text!r}")

        return cls(int(seconds * 1000))

    @classmethod
    def try_parse(cls, text: Optional[str]) -> Optional['Timestamp']:
        """Parse a timestamp, returning None when the text is missing or invalid."""
        if text is None:
            return None
        try:
            return cls.parse(text)
        except ValueError:
            return None

    def __str__(self) -> str:
        seconds, millis = divmod(self.millis, 1000)
        return f"{seconds}.{millis:03d}"


@dataclass
class SignatureParams:
    """
    Request attributes covered by the signature

    Attributes:
        method: HTTP method
        url: Full request URL including the query string
        body: Encoded request body (empty when the request has no body)
        app_key: API key sent as X-Api-Key
        access_token: Access token sent as Authorization
        app_secret: Shared secret used as the HMAC key
        timestamp: Timestamp sent as X-Timestamp
    """
    method: Union[HttpMethod, str]
    url: str
    body: bytes
    app_key: str
    access_token: str
    app_secret: str
    timestamp: Timestamp

    def __post_init__(self):
        """Validate signature parameters"""
        if not self.url:
            raise ValueError("Request URL cannot be empty")

        if not isinstance(self.body, bytes):
            raise ValueError("Body must be bytes")

