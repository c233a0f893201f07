"""
OpenAPI Python SDK
Signed HTTP requests against the OpenAPI trading gateway
"""

from .version import __version__
from .config import HttpClientConfig, RetryPolicy
from .exceptions import (
    OpenApiSdkError,
    ValidationError,
    HttpClientError,
    InvalidApiKeyError,
    InvalidAccessTokenError,
    SerializeRequestBodyError,
    DeserializeResponseBodyError,
    RequestTimeoutError,
    HttpError,
    BadStatusError,
    OpenApiError,
    UnexpectedResponseError,
)
from .http_clients import (
    HttpClient,
    RequestBuilder,
    create_client,
    is_cn,
    FromPayload,
    ToPayload,
    Json,
    Text,
    Empty,
    PayloadError,
    Transport,
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    RequestsTransport,
)
from .signing import (
    HttpMethod,
    SignatureParams,
    Timestamp,
    signature,
    encode_query,
)

# Public API exports
__all__ = [
    '__version__',
    # Configuration
    'HttpClientConfig',
    'RetryPolicy',
    # Exceptions
    'OpenApiSdkError',
    'ValidationError',
    'HttpClientError',
    'InvalidApiKeyError',
    'InvalidAccessTokenError',
    'SerializeRequestBodyError',
    'DeserializeResponseBodyError',
    'RequestTimeoutError',
    'HttpError',
    'BadStatusError',
    'OpenApiError',
    'UnexpectedResponseError',
    # HTTP Client
    'HttpClient',
    'RequestBuilder',
    'create_client',
    'is_cn',
    # Payloads
    'FromPayload',
    'ToPayload',
    'Json',
    'Text',
    'Empty',
    'PayloadError',
    # Transports
    'Transport',
    'HttpRequest',
    'HttpResponse',
    'HttpxTransport',
    'RequestsTransport',
    # Request Signing
    'HttpMethod',
    'SignatureParams',
    'Timestamp',
    'signature',
    'encode_query',
]
