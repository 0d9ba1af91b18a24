from pathlib import Path

import pytest

from hanzi_kb.config import DEFAULT_CORS_ORIGINS, Settings


def test_defaults(monkeypatch):
    for name in ("DATA_DIR", "COMMON_WORDS_LIMIT", "STARTUP_TIMEOUT_S", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.data_dir == Path("data").resolve()
    assert settings.common_words_limit == 6
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS
    assert settings.log_level == "INFO"


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("COMMON_WORDS_LIMIT", "4")
    monkeypatch.setenv("STARTUP_TIMEOUT_S", "2.5")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.data_dir == tmp_path.resolve()
    assert settings.common_words_limit == 4
    assert settings.startup_timeout_s == 2.5
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.log_level == "DEBUG"
    assert settings.lexical_path == tmp_path.resolve() / "cldb-small.csv"


@pytest.mark.parametrize(
    "name, value",
    [("COMMON_WORDS_LIMIT", "six"), ("COMMON_WORDS_LIMIT", "-1"), ("STARTUP_TIMEOUT_S", "0")],
)
def test_bad_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        Settings.from_env()
