"""
Tests for configuration helpers and the server entry point.
"""
import logging

import pytest

from app import __main__ as server
from app import config


class TestEnvHelpers:

    def test_float_env(self, monkeypatch):
        monkeypatch.setenv("TIDES_TEST_FLOAT", "2.5")
        assert config._get_float_env("TIDES_TEST_FLOAT", 10.0) == 2.5

    def test_float_env_invalid_uses_default(self, monkeypatch):
        monkeypatch.setenv("TIDES_TEST_FLOAT", "ten")
        assert config._get_float_env("TIDES_TEST_FLOAT", 10.0) == 10.0

    def test_int_env_missing_uses_default(self, monkeypatch):
        monkeypatch.delenv("TIDES_TEST_INT", raising=False)
        assert config._get_int_env("TIDES_TEST_INT", 7) == 7


class TestSetupLogging:

    def test_single_console_handler(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            config.setup_logging("DEBUG")
            config.setup_logging("DEBUG")
            assert len(root.handlers) == 1
            assert root.level == logging.DEBUG
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestEntryPoint:

    @pytest.fixture
    def runs(self, monkeypatch):
        calls = []
        monkeypatch.setattr(server.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
        monkeypatch.setattr(server, "setup_logging", lambda: None)
        return calls

    def test_defaults(self, runs):
        server.main([])
        app, kwargs = runs[0]
        assert app == "app.main:app"
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8080

    def test_hostname_and_port(self, runs):
        server.main(["-H", "0.0.0.0", "--port", "5010"])
        _, kwargs = runs[0]
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 5010
