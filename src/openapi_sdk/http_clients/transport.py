"""
HTTP transports for the request pipeline

A transport executes one fully prepared request and returns the status,
headers and body text. Connection management, TLS and DNS are owned by the
transport; library errors are translated into ``HttpError`` here so the
pipeline never sees a library specific exception.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, runtime_checkable

import httpx
import requests

from ..exceptions import HttpError

logger = logging.getLogger(__name__)


@dataclass
class HttpRequest:
    """A signed request ready to be sent"""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


@dataclass
class HttpResponse:
    """Response returned by a transport; header names are lowercase"""
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ""

    def header(self, name: str, default: str = "") -> str:
        return self.headers.get(name.lower(), default)


@runtime_checkable
class Transport(Protocol):
    """Protocol for HTTP transports"""

    async def execute(self, request: HttpRequest) -> HttpResponse:
        """Send the request, raising HttpError on transport failure"""
        ...

    async def close(self) -> None:
        """Release pooled connections"""
        ...


class HttpxTransport:
    """Async transport backed by httpx.AsyncClient"""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, verify_ssl: bool = True):
        # The pipeline bounds each attempt, so the client timeout is disabled.
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=None, verify=verify_ssl)

    async def execute(self, request: HttpRequest) -> HttpResponse:
        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as e:
            raise HttpError(str(e) or type(e).__name__, {'url': request.url}) from e

        return HttpResponse(
            status=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            text=response.text,
        )

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()
            logger.debug("httpx transport closed")


class RequestsTransport:
    """
    Transport backed by a blocking requests.Session.

    Each request runs in a worker thread. When an attempt is cancelled the
    thread is abandoned and finishes on its own.
    """

    def __init__(self, session: Optional[requests.Session] = None, verify_ssl: bool = True):
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.verify_ssl = verify_ssl

    def _send(self, request: HttpRequest) -> HttpResponse:
        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                verify=self.verify_ssl,
            )
            text = response.text
        except requests.exceptions.RequestException as e:
            raise HttpError(str(e) or type(e).__name__, {'url': request.url}) from e

        return HttpResponse(
            status=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            text=text,
        )

    async def execute(self, request: HttpRequest) -> HttpResponse:
        return await asyncio.to_thread(self._send, request)

    async def close(self) -> None:
        if self._owns_session:
            self.session.close()
            logger.debug("requests transport closed")
