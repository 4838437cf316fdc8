"""Tests for the config module."""

import logging

import pytest

from proofed_engine.config import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PRODUCT_API_URL,
    configure_logging,
    get_http_timeout,
    get_log_level,
    get_product_api_url,
)


@pytest.fixture
def clear_env(monkeypatch):
    """Clear any Proofed environment settings."""
    for name in ("PROOFED_PRODUCT_API_URL", "PROOFED_HTTP_TIMEOUT", "PROOFED_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_logging():
    """Restore root logger state changed by configure_logging."""
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestProductApiUrl:
    """Tests for get_product_api_url function."""

    def test_default(self, clear_env):
        assert get_product_api_url() == DEFAULT_PRODUCT_API_URL

    def test_from_environment(self, clear_env, monkeypatch):
        monkeypatch.setenv("PROOFED_PRODUCT_API_URL", "https://mirror.example/api/v2/")
        assert get_product_api_url() == "https://mirror.example/api/v2"


class TestHttpTimeout:
    """Tests for get_http_timeout function."""

    def test_default(self, clear_env):
        assert get_http_timeout() == DEFAULT_HTTP_TIMEOUT

    def test_from_environment(self, clear_env, monkeypatch):
        monkeypatch.setenv("PROOFED_HTTP_TIMEOUT", "2.5")
        assert get_http_timeout() == 2.5

    @pytest.mark.parametrize("value", ["soon", "0", "-3"])
    def test_invalid_falls_back(self, clear_env, monkeypatch, value):
        monkeypatch.setenv("PROOFED_HTTP_TIMEOUT", value)
        assert get_http_timeout() == DEFAULT_HTTP_TIMEOUT


class TestLogging:
    """Tests for log level and logging setup."""

    def test_default_level(self, clear_env):
        assert get_log_level() == logging.WARNING

    def test_level_name_case_insensitive(self, clear_env, monkeypatch):
        monkeypatch.setenv("PROOFED_LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    def test_unknown_level(self, clear_env, monkeypatch):
        monkeypatch.setenv("PROOFED_LOG_LEVEL", "chatty")
        assert get_log_level() == logging.WARNING

    def test_configure_logging(self, clear_env, restore_logging):
        configure_logging(logging.DEBUG)

        assert restore_logging.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_configure_logging_from_environment(self, clear_env, monkeypatch, restore_logging):
        monkeypatch.setenv("PROOFED_LOG_LEVEL", "INFO")

        configure_logging()

        assert restore_logging.level == logging.INFO
