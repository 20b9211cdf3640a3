import pytest

from wcag_inspector import config
from wcag_inspector.criteria import DEFAULT_SELF_HOSTNAMES


@pytest.mark.parametrize(
    "raw, expected",
    [("15000", 15000), (" 500 ", 500), ("0", None), ("-10", None), ("fast", None), ("1.5", None), ("", None)],
)
def test_fetch_timeout_ms(monkeypatch, raw, expected):
    monkeypatch.setenv("ANALYSIS_FETCH_TIMEOUT_MS", raw)
    assert config.fetch_timeout_ms() == expected


def test_fetch_timeout_ms_unset(monkeypatch):
    monkeypatch.delenv("ANALYSIS_FETCH_TIMEOUT_MS", raising=False)
    assert config.fetch_timeout_ms() is None


def test_cors_origins(monkeypatch):
    monkeypatch.delenv("CORS_ALLOWED_ORIGIN", raising=False)
    assert config.cors_allow_origins() == ["*"]
    monkeypatch.setenv("CORS_ALLOWED_ORIGIN", "https://a.example, https://b.example,")
    assert config.cors_allow_origins() == ["https://a.example", "https://b.example"]
    monkeypatch.setenv("CORS_ALLOWED_ORIGIN", " , ")
    assert config.cors_allow_origins() == ["*"]


def test_self_hostnames(monkeypatch):
    monkeypatch.delenv("WCAG_SELF_HOSTNAMES", raising=False)
    assert config.self_hostnames() == DEFAULT_SELF_HOSTNAMES
    monkeypatch.setenv("WCAG_SELF_HOSTNAMES", "Inspector.Example, localhost")
    assert config.self_hostnames() == frozenset({"inspector.example", "localhost"})


def test_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert config.log_level() == "DEBUG"
