import sys
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

# Ensure local source package (src/httpbind) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from httpbind._config import Config  # noqa: E402
from httpbind._http import RequestBody, RequestBuilder  # noqa: E402
from httpbind.converters import ConverterRegistry  # noqa: E402
from httpbind.models.errors import ConversionError  # noqa: E402


class RecordingConverter:
    """Converter that encodes ``repr(value)`` and remembers what it saw."""

    def __init__(self, content_type: str = "text/plain") -> None:
        self.content_type = content_type
        self.values: list[Any] = []

    def convert(self, value: Any) -> RequestBody:
        self.values.append(value)
        return RequestBody(content=repr(value).encode(), content_type=self.content_type)


class FailingConverter:
    def convert(self, value: Any) -> RequestBody:
        raise ConversionError(f"cannot encode {value!r}")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("HTTPBIND_BASE_URL", raising=False)
    monkeypatch.delenv("HTTPBIND_TIMEOUT", raising=False)
    monkeypatch.delenv("HTTPBIND_MAX_RETRIES", raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com/v1/"


@pytest.fixture
def config(base_url: str) -> Config:
    return Config(base_url=base_url, max_retries=0)


@pytest.fixture
def registry() -> ConverterRegistry:
    return ConverterRegistry()


@pytest.fixture
def builder() -> Mock:
    """A RequestBuilder spy; ``builder.mock_calls`` lists mutations in order."""
    return Mock(spec=RequestBuilder)


@pytest.fixture
def converter() -> RecordingConverter:
    return RecordingConverter()


@pytest.fixture
def failing_converter() -> FailingConverter:
    return FailingConverter()
