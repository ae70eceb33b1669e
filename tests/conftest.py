"""
Pytest configuration and shared fixtures.
"""
import io
import os
from typing import Callable

import httpx
import pytest
from rich.console import Console

from core.config import AppSettings
from core.domain.models import ProbeResult


class SleepRecorder:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class ScriptedProber:
    """StreamProber returning canned results per URL and recording calls."""

    def __init__(self, results: dict[str, ProbeResult]):
        self.results = results
        self.calls: list[str] = []

    async def probe(self, url: str) -> ProbeResult:
        self.calls.append(url)
        return self.results[url]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep project/user .env files and M3U_CHECKER_* variables out of tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in list(os.environ):
        if name.upper().startswith("M3U_CHECKER_"):
            monkeypatch.delenv(name)


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def mock_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def scripted_prober() -> Callable[[dict[str, ProbeResult]], ScriptedProber]:
    return ScriptedProber
