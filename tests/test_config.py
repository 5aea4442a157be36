"""
Tests for settings loading.
"""

import os
from pathlib import Path

import pytest

from matchfeed.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings, load_settings
from matchfeed.env import load_env


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings({})
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == DEFAULT_TIMEOUT
        assert settings.log_level == "INFO"
        assert settings.log_dir == Path("logs")

    def test_from_environment(self):
        settings = load_settings({
            "MATCHFEED_BASE_URL": "https://match.example/",
            "MATCHFEED_TIMEOUT": "3",
            "MATCHFEED_LOG_LEVEL": "debug",
            "MATCHFEED_LOG_DIR": "/tmp/mf",
        })
        assert settings.base_url == "https://match.example"
        assert settings.timeout == 3.0
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == Path("/tmp/mf")

    def test_bad_timeout(self):
        with pytest.raises(SystemExit):
            load_settings({"MATCHFEED_TIMEOUT": "soon"})

    def test_bad_log_level(self):
        with pytest.raises(SystemExit):
            load_settings({"MATCHFEED_LOG_LEVEL": "verbose"})

    def test_log_level_is_normalised(self):
        assert load_settings({"MATCHFEED_LOG_LEVEL": " warning "}).log_level == "WARNING"

    def test_overrides_skip_none(self):
        settings = Settings().with_overrides(base_url="http://x/", timeout=None)
        assert settings.base_url == "http://x"
        assert settings.timeout == DEFAULT_TIMEOUT


class TestLoadEnv:
    def test_reads_dotenv_from_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("MATCHFEED_BASE_URL=http://from-dotenv\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MATCHFEED_BASE_URL", raising=False)

        try:
            load_env()
            assert load_settings().base_url == "http://from-dotenv"
        finally:
            os.environ.pop("MATCHFEED_BASE_URL", None)

    def test_missing_dotenv_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        load_env()
