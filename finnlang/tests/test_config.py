"""
Tests for environment configuration.
"""
import pytest

from finnlang import config


def test_defaults(monkeypatch):
    for name in ("FINNDEBUG", "FINN_HOST", "PORT", "FINN_PORT", "FINN_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    assert not config.debug_enabled()
    assert config.server_host() == "0.0.0.0"
    assert config.server_port() == 3000
    assert config.run_timeout() == 5.0


def test_overrides(monkeypatch):
    monkeypatch.setenv("FINNDEBUG", "1")
    monkeypatch.setenv("FINN_HOST", "127.0.0.1")
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.setenv("FINN_PORT", "8080")
    monkeypatch.setenv("FINN_TIMEOUT", "2.5")
    assert config.debug_enabled()
    assert config.server_host() == "127.0.0.1"
    assert config.server_port() == 8080
    assert config.run_timeout() == 2.5

    monkeypatch.setenv("PORT", "9000")
    assert config.server_port() == 9000


@pytest.mark.parametrize("value", ["abc", "0", "70000"])
def test_invalid_port(monkeypatch, value):
    monkeypatch.setenv("PORT", value)
    with pytest.raises(ValueError, match="PORT must be"):
        config.server_port()


@pytest.mark.parametrize("value", ["soon", "-1", "0"])
def test_invalid_timeout(monkeypatch, value):
    monkeypatch.setenv("FINN_TIMEOUT", value)
    with pytest.raises(ValueError, match="FINN_TIMEOUT must be"):
        config.run_timeout()
