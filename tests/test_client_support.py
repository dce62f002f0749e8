"""
Tests for client configuration, session providers and error reporting.
"""

import logging
from unittest.mock import Mock

from api.config import AuthConfig, CorsConfig
from client.api_client import ApiClient
from client.config import DEFAULT_API_URL, DEFAULT_TIMEOUT_MS, ClientConfig
from client.errors import api_error, network_error
from client.reporting import LoggingErrorReporter, report_error
from client.session import CallbackSessionProvider, StaticSessionProvider


class TestClientConfig:
    """Test environment based client configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("API_URL", raising=False)
        monkeypatch.delenv("API_TIMEOUT_MS", raising=False)
        monkeypatch.delenv("API_ACCESS_TOKEN", raising=False)
        assert ClientConfig.get_api_url() == DEFAULT_API_URL
        assert ClientConfig.get_timeout_ms() == DEFAULT_TIMEOUT_MS
        assert ClientConfig.get_access_token() is None

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("API_URL", "https://api.example.com/")
        monkeypatch.setenv("API_TIMEOUT_MS", "5000")
        monkeypatch.setenv("API_ACCESS_TOKEN", "abc")
        assert ClientConfig.get_api_url() == "https://api.example.com"
        assert ClientConfig.get_timeout_ms() == 5000
        assert ClientConfig.get_access_token() == "abc"

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("API_TIMEOUT_MS", "soon")
        assert ClientConfig.get_timeout_ms() == DEFAULT_TIMEOUT_MS
        monkeypatch.setenv("API_TIMEOUT_MS", "-1")
        assert ClientConfig.get_timeout_ms() == DEFAULT_TIMEOUT_MS

    def test_client_from_env(self, monkeypatch):
        monkeypatch.setenv("API_URL", "https://api.example.com")
        monkeypatch.setenv("API_TIMEOUT_MS", "1000")
        monkeypatch.setenv("API_ACCESS_TOKEN", "abc")
        client = ApiClient.from_env(http=Mock())
        assert client.base_url == "https://api.example.com"
        assert client.timeout_ms == 1000
        assert client.session_provider.get_access_token() == "abc"
        assert client.url_for("grocery-list") == "https://api.example.com/grocery-list"


class TestBackendConfig:
    """Test backend configuration parsing."""

    def test_token_users(self, monkeypatch):
        monkeypatch.setenv("API_AUTH_TOKENS", "t1:alice, t2:bob,bad,:nobody")
        assert AuthConfig.get_token_users() == {"t1": "alice", "t2": "bob"}

    def test_token_users_unset(self, monkeypatch):
        monkeypatch.delenv("API_AUTH_TOKENS", raising=False)
        assert AuthConfig.get_token_users() == {}

    def test_cors_origins(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
        assert CorsConfig.get_origins() == ["https://a.example", "https://b.example"]


class TestSessionProviders:
    """Test the bundled session providers."""

    def test_static(self):
        provider = StaticSessionProvider("abc")
        assert provider.get_access_token() == "abc"
        assert provider.refresh_session() == "abc"
        provider.set_token("")
        assert provider.get_access_token() is None

    def test_guest(self):
        provider = StaticSessionProvider()
        assert provider.get_access_token() is None
        assert provider.refresh_session() is None

    def test_callback(self):
        provider = CallbackSessionProvider(lambda: "", lambda: "fresh")
        assert provider.get_access_token() is None
        assert provider.refresh_session() == "fresh"

    def test_callback_without_refresh(self):
        assert CallbackSessionProvider(lambda: "abc").refresh_session() is None


class TestReporting:
    """Test error reporters."""

    def test_logging_reporter_levels(self, caplog):
        reporter = LoggingErrorReporter()
        context = {"url": "http://api.test/grocery-list", "method": "GET"}

        with caplog.at_level(logging.WARNING, logger="client.reporting"):
            reporter.report(network_error(), context)
            reporter.report(api_error(500, "boom"), context)

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.WARNING, logging.ERROR]
        assert "GET http://api.test/grocery-list" in caplog.records[1].getMessage()
        assert caplog.records[1].error["status_code"] == 500

    def test_report_error_swallows_reporter_failure(self):
        reporter = Mock()
        reporter.report.side_effect = RuntimeError("down")
        report_error(reporter, api_error(500), {"url": "u", "method": "GET"})
        reporter.report.assert_called_once()

    def test_report_error_without_reporter(self):
        report_error(None, api_error(500), {})
