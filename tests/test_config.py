"""
Settings and Gemini configuration tests.
"""

import pytest

from chart_synthesizer.core import settings
from chart_synthesizer.core.config import get_chat_config, get_embedding_config


class TestChatConfig:
    def test_defaults_come_from_settings(self):
        config = get_chat_config()

        assert config.model == settings.CHAT_MODEL
        assert config.temperature == settings.TEMPERATURE
        assert config.max_retries == settings.LLM_MAX_RETRIES

    def test_overrides(self):
        config = get_chat_config(model="gemini-2.5-pro", temperature=0.3)

        assert config.model == "gemini-2.5-pro"
        assert config.temperature == 0.3

    def test_gemini_kwargs(self):
        config = get_chat_config(api_key="secret", timeout=None)

        kwargs = config.to_gemini_kwargs()

        assert kwargs["google_api_key"] == "secret"
        assert "timeout" not in kwargs
        assert "api_key" not in kwargs

    def test_timeout_is_forwarded(self):
        assert get_chat_config(timeout=30.0).to_gemini_kwargs()["timeout"] == 30.0

    def test_embedding_config(self):
        kwargs = get_embedding_config(model="models/text-embedding-004", api_key=None).to_gemini_kwargs()
        assert kwargs == {"model": "models/text-embedding-004"}


class TestValidateSettings:
    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", None)

        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            settings.validate_settings()

    def test_valid(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "secret")
        assert settings.validate_settings() is True

    def test_invalid_image_format(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "secret")
        monkeypatch.setattr(settings, "IMAGE_FORMAT", "gif")

        with pytest.raises(ValueError, match="CHART_IMAGE_FORMAT"):
            settings.validate_settings()

    def test_invalid_retrieval_k(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "secret")
        monkeypatch.setattr(settings, "RETRIEVAL_K", 0)

        with pytest.raises(ValueError, match="RETRIEVAL_K"):
            settings.validate_settings()
