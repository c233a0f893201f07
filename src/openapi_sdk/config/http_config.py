"""
HTTP client configuration

Credentials, endpoint override, timeout and retry settings for the request
pipeline. Configuration is read-only once a client has been created.
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

from dotenv import find_dotenv, load_dotenv

from ..exceptions import ValidationError

ENV_APP_KEY = "OPENAPI_APP_KEY"
ENV_APP_SECRET = "OPENAPI_APP_SECRET"
ENV_ACCESS_TOKEN = "OPENAPI_ACCESS_TOKEN"
ENV_HTTP_URL = "OPENAPI_HTTP_URL"
ENV_HTTP_TIMEOUT = "OPENAPI_HTTP_TIMEOUT"


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff applied to rate-limited (HTTP 429) responses"""
    max_retries: int = 5
    initial_delay: float = 0.1
    factor: float = 2.0

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValidationError("Retry attempts must be non-negative")

        if self.initial_delay < 0:
            raise ValidationError("Retry delay must be non-negative")

        if self.factor < 1.0:
            raise ValidationError("Retry factor must be at least 1.0")

    def delays(self):
        """Yield the delay in seconds before each retry."""
        delay = self.initial_delay
        for _ in range(self.max_retries):
            yield delay
            delay *= self.factor


@dataclass
class HttpClientConfig:
    """Configuration for the OpenAPI HTTP client."""
    app_key: str
    app_secret: str
    access_token: str
    http_url: Optional[str] = None
    timeout: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    default_headers: Dict[str, str] = field(default_factory=dict)
    debug_logging: bool = False

    def __post_init__(self):
        """Validate client configuration."""
        if not self.app_key:
            raise ValidationError("App key cannot be empty")

        if not self.app_secret:
            raise ValidationError("App secret cannot be empty")

        if not self.access_token:
            raise ValidationError("Access token cannot be empty")

        if self.http_url:
            self.http_url = self.http_url.rstrip('/')
            parsed = urlparse(self.http_url)
            if not parsed.scheme or not parsed.netloc:
                raise ValidationError(f"Invalid http url format: {self.http_url}")
        else:
            self.http_url = None

        if self.timeout <= 0:
            raise ValidationError("Timeout must be positive")

        if not isinstance(self.retry, RetryPolicy):
            raise ValidationError("Retry must be a RetryPolicy instance")

    @classmethod
    def from_env(cls, **overrides: Any) -> 'HttpClientConfig':
        """
        Load configuration from environment variables.

        A ``.env`` file in the working directory (or a parent) is loaded first
        without overriding variables that are already set.

        Args:
            **overrides: Field values taking precedence over the environment

        Returns:
            HttpClientConfig: Loaded configuration

        Raises:
            ValidationError: If a required variable is missing or invalid
        """
        dotenv_path = find_dotenv('.env', usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path, override=False)

        values: Dict[str, Any] = {
            'app_key': os.getenv(ENV_APP_KEY, ''),
            'app_secret': os.getenv(ENV_APP_SECRET, ''),
            'access_token': os.getenv(ENV_ACCESS_TOKEN, ''),
            'http_url': os.getenv(ENV_HTTP_URL) or None,
        }

        timeout = os.getenv(ENV_HTTP_TIMEOUT)
        if timeout:
            try:
                values['timeout'] = float(timeout)
            except ValueError:
                raise ValidationError(f"Invalid {ENV_HTTP_TIMEOUT}: {timeout}")

        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_json(cls, json_string: str) -> 'HttpClientConfig':
        """Load configuration from a JSON string."""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Failed to parse configuration JSON: {e}")

        if not isinstance(data, dict):
            raise ValidationError("Configuration JSON must be an object")

        try:
            retry = data.pop('retry', None)
            if retry is not None:
                data['retry'] = RetryPolicy(**retry)
            return cls(**data)
        except TypeError as e:
            raise ValidationError(f"Invalid configuration format: {e}")

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'HttpClientConfig':
        """Load configuration from a JSON file."""
        try:
            with open(Path(file_path), 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ValidationError(f"Failed to read configuration file: {e}")

        return cls.from_json(json_string)
