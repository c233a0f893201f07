"""
Shared fixtures for the OpenAPI SDK test suite
"""

import json
from typing import Any, List, Optional, Union

import pytest

from openapi_sdk.config import HttpClientConfig
from openapi_sdk.http_clients import HttpClient, HttpRequest, HttpResponse


def make_response(status: int = 200, body: Union[str, dict, None] = None, headers: Optional[dict] = None) -> HttpResponse:
    """Build a transport response; dict bodies are JSON encoded."""
    text = json.dumps(body) if isinstance(body, dict) else (body or "")
    return HttpResponse(status=status, headers={k.lower(): v for k, v in (headers or {}).items()}, text=text)


def envelope(data: Any = None, code: int = 0, message: str = "success") -> dict:
    return {"code": code, "message": message, "data": data}


class ScriptedTransport:
    """Transport replaying scripted responses; the last entry repeats."""

    def __init__(self, *responses: Union[HttpResponse, Exception]):
        self.responses: List[Union[HttpResponse, Exception]] = list(responses)
        self.requests: List[HttpRequest] = []
        self.closed = False

    async def execute(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def config():
    return HttpClientConfig(
        app_key="test-app-key",
        app_secret="test-app-secret",
        access_token="test-access-token",
        http_url="https://openapi.example.com",
    )


@pytest.fixture
def make_client(config):
    """Factory creating a client around a scripted transport."""

    def factory(*responses, client_config=None, **kwargs):
        transport = ScriptedTransport(*responses)
        client = HttpClient(client_config or config, transport=transport, **kwargs)
        return client, transport

    return factory
