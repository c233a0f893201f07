"""
OpenAPI HTTP client

The client owns the read-only configuration, the default headers, the
transport and the jurisdiction predicate. Requests are created per call
through ``request`` (or the method shortcuts) and sent with
``RequestBuilder.send``.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional, Union

from ..config import HttpClientConfig
from ..exceptions import ValidationError
from ..signing import HttpMethod, normalize_header_name, validate_header_name, validate_header_value
from .payload import Empty
from .region import is_cn
from .request import RequestBuilder
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

RegionPredicate = Callable[[], Awaitable[bool]]


class HttpClient:
    """
    HTTP client for the OpenAPI gateway

    Features:
    - Signed requests with fresh timestamps on every attempt
    - Domestic/international endpoint selection or a fixed base URL
    - Automatic backoff for rate-limited responses
    - Pluggable transports (httpx by default, requests optional)
    """

    def __init__(
        self,
        config: HttpClientConfig,
        transport: Optional[Transport] = None,
        region_predicate: Optional[RegionPredicate] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            config: Client configuration
            transport: Optional transport (an HttpxTransport is created if omitted)
            region_predicate: Optional async predicate selecting the domestic endpoint

        Raises:
            ValidationError: If a default header is not a valid header
        """
        self.config = config
        self.transport: Transport = transport or HttpxTransport()
        self.region_predicate: RegionPredicate = region_predicate or is_cn
        self.default_headers = self._build_default_headers(config.default_headers)

        logger.info(f"Initialized OpenAPI HTTP client for: {config.http_url or 'auto-selected endpoint'}")

    @staticmethod
    def _build_default_headers(headers: Dict[str, str]) -> Dict[str, str]:
        default_headers = {}
        for name, value in headers.items():
            if not validate_header_name(name) or not validate_header_value(value):
                raise ValidationError(f"Invalid default header: {name!r}")
            default_headers[normalize_header_name(name)] = value
        return default_headers

    @classmethod
    def from_env(cls, **kwargs) -> 'HttpClient':
        """Create a client from environment configuration."""
        return cls(HttpClientConfig.from_env(), **kwargs)

    def request(self, method: Union[HttpMethod, str], path: str) -> RequestBuilder[None, None, Empty]:
        """
        Create a new request builder.

        Args:
            method: HTTP method
            path: Request path, e.g. ``/v1/trade/order``

        Returns:
            RequestBuilder: Builder with no body, no query and an empty response type
        """
        return RequestBuilder(self, method, path)

    def get(self, path: str) -> RequestBuilder[None, None, Empty]:
        return self.request(HttpMethod.GET, path)

    def post(self, path: str) -> RequestBuilder[None, None, Empty]:
        return self.request(HttpMethod.POST, path)

    def put(self, path: str) -> RequestBuilder[None, None, Empty]:
        return self.request(HttpMethod.PUT, path)

    def delete(self, path: str) -> RequestBuilder[None, None, Empty]:
        return self.request(HttpMethod.DELETE, path)

    async def close(self) -> None:
        """Close the transport and release connections"""
        await self.transport.close()
        logger.debug("OpenAPI HTTP client closed")

    async def __aenter__(self) -> 'HttpClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_client(
    app_key: str,
    app_secret: str,
    access_token: str,
    http_url: Optional[str] = None,
    timeout: float = 30.0,
    **kwargs
) -> HttpClient:
    """
    Create an HTTP client with default configuration.

    Args:
        app_key: API key
        app_secret: App secret used to sign requests
        access_token: Access token
        http_url: Optional base URL overriding endpoint selection
        timeout: Per-attempt timeout in seconds
        **kwargs: Passed to HttpClient (transport, region_predicate)

    Returns:
        HttpClient: Configured HTTP client
    """
    config = HttpClientConfig(
        app_key=app_key,
        app_secret=app_secret,
        access_token=access_token,
        http_url=http_url,
        timeout=timeout,
    )
    return HttpClient(config, **kwargs)
