"""
Unit tests for HTTP client configuration
"""

import json

import pytest

from openapi_sdk.config import HttpClientConfig, RetryPolicy
from openapi_sdk.exceptions import ValidationError


def make_config(**kwargs):
    values = {'app_key': "key", 'app_secret': "secret", 'access_token': "token"}
    values.update(kwargs)
    return HttpClientConfig(**values)


class TestHttpClientConfig:
    """Test HTTP client configuration"""

    def test_defaults(self):
        """Test default configuration values"""
        config = make_config()
        assert config.http_url is None
        assert config.timeout == 30.0
        assert config.retry == RetryPolicy()
        assert config.default_headers == {}
        assert config.debug_logging is False

    def test_validation(self):
        """Test configuration validation"""
        with pytest.raises(ValidationError, match="App key cannot be empty"):
            make_config(app_key="")

        with pytest.raises(ValidationError, match="App secret cannot be empty"):
            make_config(app_secret="")

        with pytest.raises(ValidationError, match="Access token cannot be empty"):
            make_config(access_token="")

        with pytest.raises(ValidationError, match="Invalid http url format"):
            make_config(http_url="invalid-url")

        with pytest.raises(ValidationError, match="Timeout must be positive"):
            make_config(timeout=0)

    def test_url_normalization(self):
        """Test trailing slash is removed from the base URL"""
        assert make_config(http_url="https://openapi.example.com/").http_url == "https://openapi.example.com"
        assert make_config(http_url="").http_url is None

    def test_from_env(self, monkeypatch, tmp_path):
        """Test loading configuration from environment variables"""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("OPENAPI_APP_KEY", "env-key")
        monkeypatch.setenv("OPENAPI_APP_SECRET", "env-secret")
        monkeypatch.setenv("OPENAPI_ACCESS_TOKEN", "env-token")
        monkeypatch.setenv("OPENAPI_HTTP_URL", "https://openapi.example.com")
        monkeypatch.setenv("OPENAPI_HTTP_TIMEOUT", "12.5")

        config = HttpClientConfig.from_env()
        assert config.app_key == "env-key"
        assert config.app_secret == "env-secret"
        assert config.access_token == "env-token"
        assert config.http_url == "https://openapi.example.com"
        assert config.timeout == 12.5

    def test_from_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("OPENAPI_APP_KEY", "env-key")
        monkeypatch.setenv("OPENAPI_APP_SECRET", "env-secret")
        monkeypatch.setenv("OPENAPI_ACCESS_TOKEN", "env-token")
        monkeypatch.delenv("OPENAPI_HTTP_URL", raising=False)
        monkeypatch.delenv("OPENAPI_HTTP_TIMEOUT", raising=False)

        config = HttpClientConfig.from_env(timeout=5.0)
        assert config.http_url is None
        assert config.timeout == 5.0

    def test_from_env_missing(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("OPENAPI_APP_KEY", "OPENAPI_APP_SECRET", "OPENAPI_ACCESS_TOKEN"):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(ValidationError):
            HttpClientConfig.from_env()

    def test_from_env_invalid_timeout(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("OPENAPI_APP_KEY", "k")
        monkeypatch.setenv("OPENAPI_APP_SECRET", "s")
        monkeypatch.setenv("OPENAPI_ACCESS_TOKEN", "t")
        monkeypatch.setenv("OPENAPI_HTTP_TIMEOUT", "soon")

        with pytest.raises(ValidationError, match="OPENAPI_HTTP_TIMEOUT"):
            HttpClientConfig.from_env()

    def test_from_json(self):
        config = HttpClientConfig.from_json(json.dumps({
            "app_key": "k",
            "app_secret": "s",
            "access_token": "t",
            "default_headers": {"Accept-Language": "en"},
            "retry": {"max_retries": 2, "initial_delay": 0.5},
        }))
        assert config.default_headers == {"Accept-Language": "en"}
        assert config.retry == RetryPolicy(max_retries=2, initial_delay=0.5)

    def test_from_json_errors(self):
        with pytest.raises(ValidationError, match="Failed to parse configuration JSON"):
            HttpClientConfig.from_json("{not json")

        with pytest.raises(ValidationError, match="must be an object"):
            HttpClientConfig.from_json("[]")

        with pytest.raises(ValidationError, match="Invalid configuration format"):
            HttpClientConfig.from_json('{"app_key": "k", "unknown": 1}')

    def test_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"app_key": "k", "app_secret": "s", "access_token": "t"}), encoding='utf-8')
        assert HttpClientConfig.from_file(path).app_key == "k"

        with pytest.raises(ValidationError, match="Failed to read configuration file"):
            HttpClientConfig.from_file(tmp_path / "missing.json")


class TestRetryPolicy:
    """Test retry policy"""

    def test_default_delays(self):
        """Test default backoff is 100ms doubling for five retries"""
        assert list(RetryPolicy().delays()) == pytest.approx([0.1, 0.2, 0.4, 0.8, 1.6])

    def test_custom_delays(self):
        assert list(RetryPolicy(max_retries=3, initial_delay=1.0, factor=3.0).delays()) == [1.0, 3.0, 9.0]
        assert list(RetryPolicy(max_retries=0).delays()) == []

    def test_validation(self):
        with pytest.raises(ValidationError, match="Retry attempts must be non-negative"):
            RetryPolicy(max_retries=-1)

        with pytest.raises(ValidationError):
            RetryPolicy(initial_delay=-0.1)

        with pytest.raises(ValidationError):
            RetryPolicy(factor=0.5)
