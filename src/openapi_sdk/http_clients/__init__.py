"""
HTTP client for the OpenAPI gateway

Signed request building, sending with per-attempt timeouts, response
envelope classification and rate-limit retries.
"""

from .client import HttpClient, RegionPredicate, create_client
from .payload import Empty, FromPayload, Json, PayloadError, Text, ToPayload
from .region import is_cn
from .request import (
    HTTP_URL,
    HTTP_URL_CN,
    USER_AGENT,
    RequestBuilder,
)
from .transport import (
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    RequestsTransport,
    Transport,
)

__all__ = [
    # Client
    'HttpClient',
    'RegionPredicate',
    'create_client',
    'is_cn',
    # Request builder
    'RequestBuilder',
    'HTTP_URL',
    'HTTP_URL_CN',
    'USER_AGENT',
    # Payload codecs
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
]
