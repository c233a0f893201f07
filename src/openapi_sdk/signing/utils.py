"""
Utility functions for request signing

This module provides header validation, query string encoding and
small digest helpers shared by the signer and the request pipeline.
"""

import re
import dataclasses
from enum import Enum
from typing import Any, Iterable, List, Mapping, Tuple
from urllib.parse import urlencode, urlsplit

from cryptography.hazmat.primitives import hashes

# RFC 7230 token
_HEADER_NAME_PATTERN = re.compile(r'^[!#$%&\'*+\-.0-9A-Z^_`a-z|~]+$')

# Visible ASCII, space and tab
_HEADER_VALUE_PATTERN = re.compile(r'^[\t\x20-\x7e]*$')


def validate_header_name(name: Any) -> bool:
    """
    Validate header name.

    Args:
        name: Header name to validate

    Returns:
        bool: True if header name is a valid RFC 7230 token
    """
    if not isinstance(name, str):
        return False

    return bool(_HEADER_NAME_PATTERN.match(name))


def validate_header_value(value: Any) -> bool:
    """
    Validate header value.

    Args:
        value: Header value to validate

    Returns:
        bool: True if the value can be sent as an HTTP header value
    """
    if not isinstance(value, str):
        return False

    return bool(_HEADER_VALUE_PATTERN.match(value))


def normalize_header_name(name: str) -> str:
    """Normalize header name to lowercase for case-insensitive lookup."""
    return name.lower().strip()


def is_query_value(value: Any) -> bool:
    """Check whether a value can be encoded as a query string."""
    if isinstance(value, Mapping):
        return True

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True

    if isinstance(value, (list, tuple)):
        return all(isinstance(item, (list, tuple)) and len(item) == 2 for item in value)

    return False


def _format_query_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _query_items(value: Any) -> Iterable[Tuple[str, Any]]:
    if isinstance(value, Mapping):
        return value.items()

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return ((f.name, getattr(value, f.name)) for f in dataclasses.fields(value))

    return value


def encode_query(value: Any) -> str:
    """
    Encode query parameters into a URL query string.

    Mappings and dataclasses are encoded in field order, None values are
    skipped, booleans become ``true``/``false``, enums use their value and
    lists or tuples are encoded as repeated keys.

    Args:
        value: Mapping, dataclass instance or sequence of key/value pairs

    Returns:
        str: Query string without the leading ``?``

    Raises:
        TypeError: If the value cannot be encoded
    """
    if not is_query_value(value):
        raise TypeError(f"Unsupported query parameters type: {type(value).__name__}")

    pairs: List[Tuple[str, str]] = []
    for key, item in _query_items(value):
        if item is None:
            continue
        if isinstance(item, (list, tuple)):
            pairs.extend((str(key), _format_query_scalar(v)) for v in item if v is not None)
        else:
            pairs.append((str(key), _format_query_scalar(item)))

    return urlencode(pairs)


def split_url(url: str) -> Tuple[str, str]:
    """
    Split a URL into the path and query parts covered by the signature.

    Returns:
        Tuple of (path, query); path defaults to ``/`` and query to ``""``
    """
    parsed = urlsplit(url)
    return parsed.path or "/", parsed.query


def sha1_hex(data: bytes) -> str:
    """SHA-1 digest of data as lowercase hex."""
    digest = hashes.Hash(hashes.SHA1())
    digest.update(data)
    return to_hex(digest.finalize())


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hex string.

    Args:
        data: Bytes to convert

    Returns:
        str: Lowercase hex string
    """
    return data.hex().lower()
