"""
Exception classes for the OpenAPI Python SDK
"""

from typing import Optional, Dict, Any


class OpenApiSdkError(Exception):
    """Base exception for all OpenAPI SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(OpenApiSdkError):
    """Exception raised for configuration validation failures"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class HttpClientError(OpenApiSdkError):
    """Base exception for errors raised while sending a request"""
    pass


class InvalidApiKeyError(HttpClientError):
    """The configured API key is not a legal header value"""

    def __init__(self):
        super().__init__("Invalid api key", "INVALID_API_KEY")


class InvalidAccessTokenError(HttpClientError):
    """The configured access token is not a legal header value"""

    def __init__(self):
        super().__init__("Invalid access token", "INVALID_ACCESS_TOKEN")


class SerializeRequestBodyError(HttpClientError):
    """Exception raised when the request body cannot be encoded"""

    def __init__(self, reason: str):
        super().__init__(f"Serialize request body: {reason}", "SERIALIZE_REQUEST_BODY", {'reason': reason})
        self.reason = reason


class DeserializeResponseBodyError(HttpClientError):
    """Exception raised when the response envelope or payload cannot be decoded"""

    def __init__(self, reason: str):
        super().__init__(f"Deserialize response body: {reason}", "DESERIALIZE_RESPONSE_BODY", {'reason': reason})
        self.reason = reason


class RequestTimeoutError(HttpClientError):
    """Exception raised when a single attempt exceeds its timeout"""

    def __init__(self, timeout: float):
        super().__init__(f"Request timeout after {timeout} seconds", "REQUEST_TIMEOUT", {'timeout': timeout})
        self.timeout = timeout


class HttpError(HttpClientError):
    """Exception raised for transport level failures (connection, TLS, DNS)"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Http error: {message}", "HTTP_ERROR", details)


class BadStatusError(HttpClientError):
    """Exception raised for a non-200 response whose body is not an envelope"""

    def __init__(self, status: int):
        super().__init__(f"Bad status: {status}", "BAD_STATUS", {'status_code': status})
        self.status = status

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429


class OpenApiError(HttpClientError):
    """Error reported by the remote service in the response envelope"""

    def __init__(self, code: int, message: str, trace_id: str = ""):
        super().__init__(
            f"OpenApi error: code={code}: {message}",
            "OPENAPI_ERROR",
            {'code': code, 'trace_id': trace_id}
        )
        self.code = code
        self.message = message
        self.trace_id = trace_id


class UnexpectedResponseError(HttpClientError):
    """Exception raised when a success envelope carries no data"""

    def __init__(self):
        super().__init__("Unexpected response", "UNEXPECTED_RESPONSE")
