import sys
import threading
from pathlib import Path
from typing import Any, Generator

import pytest
from click.testing import CliRunner

# Ensure local source package (src/httpresource) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from httpresource import Config, ConfigurationManager  # noqa: E402


class HandlerRecorder:
    """Response handler that records every invocation and its thread."""

    def __init__(self) -> None:
        self.calls: list[tuple[bool, dict[str, Any]]] = []
        self.threads: list[str] = []

    def __call__(self, success: bool, body: dict[str, Any]) -> None:
        self.calls.append((success, body))
        self.threads.append(threading.current_thread().name)

    @property
    def last(self) -> tuple[bool, dict[str, Any]]:
        return self.calls[-1]


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clean environment variables and cached configuration before each test."""
    for name in (
        "HTTPRESOURCE_TIMEOUT",
        "HTTPRESOURCE_PRIORITY",
        "HTTPRESOURCE_FOLLOW_REDIRECTS",
        "HTTPRESOURCE_DISABLE_SSL_VERIFY",
    ):
        monkeypatch.delenv(name, raising=False)
    ConfigurationManager().reset()
    yield
    ConfigurationManager().reset()


@pytest.fixture
def config() -> Config:
    return Config(timeout=5.0)


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def handler() -> HandlerRecorder:
    return HandlerRecorder()



@pytest.fixture
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio, which the async tests rely on."""
    return "asyncio"
