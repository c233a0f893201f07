"""
Configuration management for the OpenAPI Python SDK
"""

from .http_config import (
    HttpClientConfig,
    RetryPolicy,
    ENV_APP_KEY,
    ENV_APP_SECRET,
    ENV_ACCESS_TOKEN,
    ENV_HTTP_URL,
    ENV_HTTP_TIMEOUT,
)

__all__ = [
    'HttpClientConfig',
    'RetryPolicy',
    'ENV_APP_KEY',
    'ENV_APP_SECRET',
    'ENV_ACCESS_TOKEN',
    'ENV_HTTP_URL',
    'ENV_HTTP_TIMEOUT',
]
