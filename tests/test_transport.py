"""
Unit tests for the httpx and requests transports
"""

from unittest.mock import Mock

import httpx
import pytest
import requests

from openapi_sdk.exceptions import HttpError
from openapi_sdk.http_clients import HttpRequest, HttpxTransport, RequestsTransport, Transport


def make_request(body=None):
    return HttpRequest(
        method="POST" if body else "GET",
        url="https://openapi.example.com/v1/ping?x=1",
        headers={"x-api-key": "key", "content-type": "application/json; charset=utf-8"},
        body=body,
    )


class TestHttpxTransport:
    """Test the httpx transport"""

    @pytest.mark.asyncio
    async def test_execute(self):
        """Test request fields are passed through and the response is captured"""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen['method'] = request.method
            seen['url'] = str(request.url)
            seen['api_key'] = request.headers["x-api-key"]
            seen['body'] = request.content
            return httpx.Response(200, headers={"X-Trace-Id": "t-1"}, text='{"code":0,"data":{}}')

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = HttpxTransport(client=client)

        response = await transport.execute(make_request(body=b'{"a":1}'))

        assert seen == {
            'method': "POST",
            'url': "https://openapi.example.com/v1/ping?x=1",
            'api_key': "key",
            'body': b'{"a":1}',
        }
        assert response.status == 200
        assert response.header("X-Trace-Id") == "t-1"
        assert response.text == '{"code":0,"data":{}}'

        await client.aclose()

    @pytest.mark.asyncio
    async def test_connection_error(self):
        """Test httpx errors are translated to HttpError"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = HttpxTransport(client=client)

        with pytest.raises(HttpError, match="connection refused") as exc_info:
            await transport.execute(make_request())

        assert exc_info.value.details == {'url': "https://openapi.example.com/v1/ping?x=1"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_close_leaves_external_client_open(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(204)))
        transport = HttpxTransport(client=client)

        await transport.close()
        assert not client.is_closed

        await client.aclose()

    @pytest.mark.asyncio
    async def test_close_owned_client(self):
        transport = HttpxTransport()
        await transport.close()
        assert transport.client.is_closed

    def test_implements_protocol(self):
        assert isinstance(HttpxTransport(client=Mock()), Transport)


class TestRequestsTransport:
    """Test the requests transport"""

    def make_session(self, status=200, text="", headers=None):
        session = Mock(spec=requests.Session)
        response = Mock()
        response.status_code = status
        response.text = text
        response.headers = headers or {}
        session.request.return_value = response
        return session

    @pytest.mark.asyncio
    async def test_execute(self):
        session = self.make_session(429, "Too Many Requests", {"X-Trace-Id": "t-2"})
        transport = RequestsTransport(session=session, verify_ssl=False)

        response = await transport.execute(make_request(body=b'{}'))

        session.request.assert_called_once_with(
            "POST",
            "https://openapi.example.com/v1/ping?x=1",
            headers={"x-api-key": "key", "content-type": "application/json; charset=utf-8"},
            data=b'{}',
            verify=False,
        )
        assert response.status == 429
        assert response.headers == {"x-trace-id": "t-2"}
        assert response.text == "Too Many Requests"

    @pytest.mark.asyncio
    async def test_connection_error(self):
        """Test requests errors are translated to HttpError"""
        session = self.make_session()
        session.request.side_effect = requests.exceptions.ConnectionError("Connection refused")
        transport = RequestsTransport(session=session)

        with pytest.raises(HttpError, match="Connection refused"):
            await transport.execute(make_request())

    @pytest.mark.asyncio
    async def test_close(self):
        external = self.make_session()
        await RequestsTransport(session=external).close()
        external.close.assert_not_called()

        transport = RequestsTransport()
        transport.session = self.make_session()
        await transport.close()
        transport.session.close.assert_called_once()
