"""Tests for configuration loading."""

from memobook.shared.config import Settings
from memobook.shared.db import make_engine


def test_defaults(monkeypatch):
    for key in ["ENV", "DATABASE_URL", "OPENAI_API_KEY", "SUMMARY_MODEL", "SUMMARY_MAX_TOKENS", "SUMMARY_TEMPERATURE"]:
        monkeypatch.delenv(key, raising=False)
    s = Settings()
    assert s.ENV == "dev"
    assert s.DATABASE_URL is None
    assert s.OPENAI_API_KEY is None
    assert s.SUMMARY_MAX_TOKENS == 500
    assert s.SUMMARY_TEMPERATURE == 0.3


def test_env_override(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    monkeypatch.setenv("SUMMARY_MAX_TOKENS", "200")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    s = Settings()
    assert s.OPENAI_API_KEY == "sk-abc"
    assert s.SUMMARY_MAX_TOKENS == 200
    assert s.DATABASE_URL == "sqlite://"


def test_make_engine_file_url(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'x.db'}")
    assert eng.url.database.endswith("x.db")
    eng.dispose()
