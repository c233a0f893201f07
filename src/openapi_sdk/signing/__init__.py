"""
OpenAPI Python SDK - Request Signing Module

HMAC-SHA256 request signatures, timestamps and the query string codec
whose output is covered by the signature.
"""

from .types import (
    HttpMethod,
    SignatureParams,
    Timestamp,
)

from .signer import (
    SIGNATURE_ALGORITHM,
    SIGNED_HEADERS,
    build_canonical_request,
    signature,
)

from .utils import (
    encode_query,
    is_query_value,
    normalize_header_name,
    sha1_hex,
    split_url,
    validate_header_name,
    validate_header_value,
)

# Public API exports
__all__ = [
    # Types
    'HttpMethod',
    'SignatureParams',
    'Timestamp',
    # Signer
    'SIGNATURE_ALGORITHM',
    'SIGNED_HEADERS',
    'build_canonical_request',
    'signature',
    # Utilities
    'encode_query',
    'is_query_value',
    'normalize_header_name',
    'sha1_hex',
    'split_url',
    'validate_header_name',
    'validate_header_value',
]
