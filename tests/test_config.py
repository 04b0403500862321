"""Tests for settings loading."""

import logging

import pytest

from stylemorph.config import GeminiConfig, configure_logging, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from any real .env file or credentials."""
    monkeypatch.chdir(tmp_path)
    for name in ("GEMINI_API_KEY", "API_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    """Tests for credential resolution."""

    def test_defaults(self):
        config = load_config()

        assert config.gemini.model == "gemini-2.5-flash-image"
        assert config.gemini.api_key is None
        assert not config.gemini.is_configured
        assert config.log_level == "INFO"

    def test_gemini_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
        assert load_config().gemini.api_key == "gem-key"

    def test_legacy_api_key_fallback(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "legacy-key")
        assert load_config().gemini.api_key == "legacy-key"

    def test_gemini_key_preferred(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
        monkeypatch.setenv("API_KEY", "legacy-key")
        assert load_config().gemini.api_key == "gem-key"

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("GEMINI_API_KEY=from-file\nLOG_LEVEL=DEBUG\n")

        config = load_config()

        assert config.gemini.api_key == "from-file"
        assert config.log_level == "DEBUG"

    def test_explicit_gemini_config(self):
        assert GeminiConfig(api_key="k").is_configured


def test_configure_logging_sets_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("warning")
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
