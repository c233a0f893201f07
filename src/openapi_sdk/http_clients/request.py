"""
Request builder and send pipeline

A ``RequestBuilder`` accumulates method, path, headers, body, query
parameters and the response payload type. Every setter consumes the builder
and returns a new one, and ``send`` consumes it for good. Each attempt made
by ``send`` resolves the endpoint, stamps and signs the request, executes it
under the configured timeout and classifies the response envelope.
Responses with HTTP 429 are retried with exponential backoff.
"""

import re
import json
import time
import asyncio
import logging
from typing import (
    Any, Dict, Generic, Optional, Tuple, Type, TypeVar, Union, TYPE_CHECKING
)

from ..exceptions import (
    BadStatusError,
    DeserializeResponseBodyError,
    InvalidAccessTokenError,
    InvalidApiKeyError,
    OpenApiError,
    RequestTimeoutError,
    SerializeRequestBodyError,
    UnexpectedResponseError,
)
from ..signing import (
    HttpMethod,
    SignatureParams,
    Timestamp,
    encode_query,
    is_query_value,
    normalize_header_name,
    signature,
    validate_header_name,
    validate_header_value,
)
from .payload import Empty, FromPayload, PayloadError, ToPayload
from .transport import HttpRequest, HttpResponse

if TYPE_CHECKING:
    from .client import HttpClient

logger = logging.getLogger(__name__)

HTTP_URL = "https://openapi.longportapp.com"
HTTP_URL_CN = "https://openapi.longportapp.cn"

USER_AGENT = "openapi-sdk"
CONTENT_TYPE = "application/json; charset=utf-8"
TRACE_ID_HEADER = "x-trace-id"
TIMESTAMP_HEADER = "x-timestamp"
SIGNATURE_HEADER = "x-api-signature"

T = TypeVar('T')
Q = TypeVar('Q')
R = TypeVar('R')
T2 = TypeVar('T2')
Q2 = TypeVar('Q2')
R2 = TypeVar('R2')


_decoder = json.JSONDecoder()
_WHITESPACE = re.compile(r'[ \t\n\r]*')


def _skip_whitespace(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()


def _is_payload_type(payload_type: Any) -> bool:
    return isinstance(payload_type, type) and issubclass(payload_type, FromPayload)


def _parse_envelope(text: str) -> Tuple[int, str, Optional[str]]:
    """
    Parse the ``{code, message, data}`` response envelope.

    ``data`` is returned as its exact source text so numbers reach the
    response codec unchanged. It is None when the field is absent or null.

    Raises:
        ValueError: If the text is not a well-formed envelope
        RecursionError: If a value is nested too deeply to decode
    """
    fields: Dict[str, Any] = {}
    raw: Dict[str, str] = {}

    pos = _skip_whitespace(text, 0)
    if text[pos:pos + 1] != '{':
        raise ValueError("response envelope must be a JSON object")
    pos = _skip_whitespace(text, pos + 1)

    if text[pos:pos + 1] == '}':
        pos += 1
    else:
        while True:
            if text[pos:pos + 1] != '"':
                raise ValueError(f"expected object key at position {pos}")
            key, pos = _decoder.raw_decode(text, pos)
            pos = _skip_whitespace(text, pos)
            if text[pos:pos + 1] != ':':
                raise ValueError(f"expected ':' at position {pos}")

            start = _skip_whitespace(text, pos + 1)
            fields[key], pos = _decoder.raw_decode(text, start)
            raw[key] = text[start:pos]

            pos = _skip_whitespace(text, pos)
            separator = text[pos:pos + 1]
            pos = _skip_whitespace(text, pos + 1)
            if separator == '}':
                break
            if separator != ',':
                raise ValueError(f"expected ',' or '}}' at position {pos}")

    if _skip_whitespace(text, pos) != len(text):
        raise ValueError("unexpected data after response envelope")

    code = fields.get('code')
    if not isinstance(code, int) or isinstance(code, bool):
        raise ValueError("missing or invalid field `code`")

    message = fields.get('message', "")
    if message is None:
        message = ""
    if not isinstance(message, str):
        raise ValueError("invalid field `message`")

    data = raw['data'] if fields.get('data') is not None else None
    return code, message, data


class RequestBuilder(Generic[T, Q, R]):
    """
    A request builder

    Type parameters:
        T: Request body type (implements ToPayload)
        Q: Query parameters type (mapping, dataclass or key/value pairs)
        R: Response payload type (implements FromPayload)
    """

    def __init__(
        self,
        client: 'HttpClient',
        method: Union[HttpMethod, str],
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[T] = None,
        query_params: Optional[Q] = None,
        response_type: Type[R] = Empty,
    ):
        self._client = client
        self._method = method.value if isinstance(method, HttpMethod) else str(method).upper()
        self._path = path
        self._headers: Dict[str, str] = dict(headers or {})
        self._body = body
        self._query_params = query_params
        self._response_type = response_type
        self._consumed = False

    @property
    def method(self) -> str:
        return self._method

    @property
    def path(self) -> str:
        return self._path

    @property
    def headers(self) -> Dict[str, str]:
        """Per-request headers keyed by lowercase name"""
        return dict(self._headers)

    @property
    def response_type(self) -> Type[R]:
        return self._response_type

    def _take(self) -> None:
        if self._consumed:
            raise RuntimeError("request builder has already been consumed")
        self._consumed = True

    def _replace(self, **changes: Any) -> 'RequestBuilder':
        self._take()
        fields = {
            'headers': self._headers,
            'body': self._body,
            'query_params': self._query_params,
            'response_type': self._response_type,
        }
        fields.update(changes)
        return RequestBuilder(self._client, self._method, self._path, **fields)

    def body(self, body: T2) -> 'RequestBuilder[T2, Q, R]':
        """Set the request body"""
        if not isinstance(body, ToPayload):
            raise TypeError(f"Request body must implement to_bytes(), got {type(body).__name__}")
        return self._replace(body=body)

    def header(self, name: str, value: str) -> 'RequestBuilder[T, Q, R]':
        """
        Set a header.

        An invalid name or value is ignored and the current headers are kept.
        Setting the same name again replaces the previous value.
        """
        headers = self._headers
        if validate_header_name(name) and validate_header_value(value):
            headers = dict(headers)
            headers[normalize_header_name(name)] = value
        return self._replace(headers=headers)

    def query_params(self, params: Q2) -> 'RequestBuilder[T, Q2, R]':
        """Set the query string"""
        if not is_query_value(params):
            raise TypeError(f"Unsupported query parameters type: {type(params).__name__}")
        return self._replace(query_params=params)

    def response(self, response_type: Type[R2]) -> 'RequestBuilder[T, Q, R2]':
        """Set the response body type"""
        if not _is_payload_type(response_type):
            raise TypeError(f"Response type must implement parse_from_bytes(), got {response_type!r}")
        return self._replace(response_type=response_type)

    async def _http_url(self) -> str:
        http_url = self._client.config.http_url
        if http_url:
            return http_url

        return HTTP_URL_CN if await self._client.region_predicate() else HTTP_URL

    async def _do_send(self) -> R:
        client = self._client
        config = client.config

        timestamp = Timestamp.try_parse(self._headers.get(TIMESTAMP_HEADER)) or Timestamp.now()
        if not validate_header_value(config.app_key):
            raise InvalidApiKeyError()
        if not validate_header_value(config.access_token):
            raise InvalidAccessTokenError()

        url = f"{await self._http_url()}{self._path}"

        headers = dict(client.default_headers)
        headers.update(self._headers)
        headers.update({
            'user-agent': USER_AGENT,
            'x-api-key': config.app_key,
            'authorization': config.access_token,
            TIMESTAMP_HEADER: str(timestamp),
            'content-type': CONTENT_TYPE,
        })

        # set the request body
        body: Optional[bytes] = None
        if self._body is not None:
            try:
                body = self._body.to_bytes()
            except PayloadError as e:
                raise SerializeRequestBodyError(str(e)) from e

        # set the query string
        if self._query_params is not None:
            query_string = encode_query(self._query_params)
            if query_string:
                url = f"{url}?{query_string}"

        headers[SIGNATURE_HEADER] = signature(SignatureParams(
            method=self._method,
            url=url,
            body=body or b'',
            app_key=config.app_key,
            access_token=config.access_token,
            app_secret=config.app_secret,
            timestamp=timestamp,
        ))

        if self._body is not None:
            logger.info(
                "http request: %s %s", self._method, url,
                extra={'method': self._method, 'url': url, 'body': repr(self._body)}
            )
        else:
            logger.info("http request: %s %s", self._method, url, extra={'method': self._method, 'url': url})
        if config.debug_logging:
            logger.debug("http request headers: %s", sorted(headers))

        start = time.perf_counter()
        try:
            response: HttpResponse = await asyncio.wait_for(
                client.transport.execute(HttpRequest(self._method, url, headers, body)),
                timeout=config.timeout,
            )
        except asyncio.TimeoutError:
            raise RequestTimeoutError(config.timeout)

        duration_ms = (time.perf_counter() - start) * 1000
        trace_id = response.header(TRACE_ID_HEADER)
        logger.info(
            "http response: status=%s duration=%.2fms", response.status, duration_ms,
            extra={
                'status': response.status,
                'duration_ms': duration_ms,
                'trace_id': trace_id,
                'body': response.text,
            }
        )

        try:
            code, message, data = _parse_envelope(response.text)
        except (ValueError, RecursionError) as e:
            if response.status == 200:
                raise DeserializeResponseBodyError(str(e)) from e
            raise BadStatusError(response.status) from e

        if code != 0:
            raise OpenApiError(code, message, trace_id)
        if data is None:
            raise UnexpectedResponseError()

        try:
            return self._response_type.parse_from_bytes(data.encode('utf-8'))
        except (PayloadError, ValueError, TypeError, RecursionError) as e:
            raise DeserializeResponseBodyError(str(e)) from e

    async def send(self) -> R:
        """
        Send request and get the response

        Rate-limited attempts (HTTP 429) are retried according to the
        client's retry policy; every other error is raised immediately.

        Returns:
            The decoded response payload

        Raises:
            HttpClientError: On any request, transport or response failure
        """
        self._take()

        delays = self._client.config.retry.delays()
        attempt = 1
        while True:
            try:
                return await self._do_send()
            except BadStatusError as e:
                if not e.is_rate_limited:
                    raise
                delay = next(delays, None)
                if delay is None:
                    raise
                logger.warning(
                    "rate limited: %s %s, retrying in %.0fms (attempt %d)",
                    self._method, self._path, delay * 1000, attempt + 1,
                    extra={'method': self._method, 'path': self._path, 'delay_ms': delay * 1000, 'attempt': attempt + 1}
                )
                await asyncio.sleep(delay)
                attempt += 1
