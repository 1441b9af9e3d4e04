import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from httpbind import Config
from httpbind.models.errors import BaseUrlMissingError


class TestConfigFromEnv:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("HTTPBIND_BASE_URL", "https://env.example.com/")
        monkeypatch.setenv("HTTPBIND_TIMEOUT", "2.5")
        monkeypatch.setenv("HTTPBIND_MAX_RETRIES", "5")

        config = Config.from_env(dotenv_path=str(tmp_path / ".env"))

        assert config.base_url == "https://env.example.com/"
        assert config.timeout == 2.5
        assert config.max_retries == 5

    def test_reads_dotenv_file(self, tmp_path: Path):
        dotenv = tmp_path / ".env"
        dotenv.write_text("HTTPBIND_BASE_URL=https://dotenv.example.com/\n")

        try:
            config = Config.from_env(dotenv_path=str(dotenv))
        finally:
            os.environ.pop("HTTPBIND_BASE_URL", None)

        assert config.base_url == "https://dotenv.example.com/"
        assert config.timeout == 30.0

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("HTTPBIND_BASE_URL", "https://env.example.com/")

        config = Config.from_env(
            dotenv_path=str(tmp_path / ".env"), base_url="https://override.example.com/"
        )

        assert config.base_url == "https://override.example.com/"

    def test_missing_base_url(self, tmp_path: Path):
        with pytest.raises(BaseUrlMissingError, match="HTTPBIND_BASE_URL"):
            Config.from_env(dotenv_path=str(tmp_path / ".env"))

    def test_negative_retries_rejected(self):
        with pytest.raises(ValidationError):
            Config(base_url="https://api.example.com/", max_retries=-1)
