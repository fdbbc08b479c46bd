"""Shared pytest fixtures and test helpers for clash-cli tests."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import requests
from loguru import logger
from typer.testing import CliRunner

from clash_cli.core.config import ClashConfig

API_URL = "http://clash.test:9090"
DELAY_QUERY = "timeout=5000&url=http://www.gstatic.com/generate_204"


def make_response(status_code: int = 200, body: Any = "") -> requests.Response:
    """Build a ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    text = body if isinstance(body, str) else json.dumps(body)
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    return response


@dataclass
class FakeController:
    """Stand-in for the Clash external controller.

    Routes are keyed by ``(method, path)`` where ``path`` includes the query
    string. Unknown routes behave like a controller that is not running.
    """

    routes: dict[tuple[str, str], requests.Response | Exception] = field(default_factory=dict)
    calls: list[tuple[str, str, Any]] = field(default_factory=list)

    def add(self, method: str, path: str, status_code: int = 200, body: Any = "") -> None:
        self.routes[(method, path)] = make_response(status_code, body)

    def fail(self, method: str, path: str, error: Exception | None = None) -> None:
        self.routes[(method, path)] = error or requests.ConnectionError("Connection refused")

    def handle(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        assert url.startswith(API_URL), url
        path = url[len(API_URL) :]
        self.calls.append((method, path, kwargs.get("json")))
        route = self.routes.get((method, path))
        if route is None:
            raise requests.ConnectionError(f"Connection refused: {method} {path}")
        if isinstance(route, Exception):
            raise route
        return route

    def paths(self) -> list[str]:
        return [path for _, path, _ in self.calls]


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point logs, profiles and the controller URL at test locations."""
    config_dir = tmp_path / "clash"
    config_dir.mkdir()
    monkeypatch.setenv("CLASH_CLI_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("CLASH_CLI_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("CLASH_CLI_API_URL", API_URL)
    yield
    logger.remove()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    return tmp_path / "clash"


@pytest.fixture
def config(config_dir: Path) -> ClashConfig:
    return ClashConfig(config_dir=config_dir, api_base_url=API_URL)


@pytest.fixture
def controller(monkeypatch: pytest.MonkeyPatch) -> FakeController:
    """Route every ``requests.Session`` call to a fake controller."""
    fake = FakeController()

    def request(session: requests.Session, method: str, url: str, **kwargs: Any) -> requests.Response:
        return fake.handle(method, url, **kwargs)

    monkeypatch.setattr(requests.Session, "request", request)
    return fake


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def proxies_body() -> dict[str, Any]:
    """A ``GET /proxies`` body with two Selector groups and plain proxies."""
    return {
        "proxies": {
            "GLOBAL": {"type": "Selector", "now": "Proxy", "all": ["DIRECT", "Proxy", "HK 01"]},
            "Proxy": {"type": "Selector", "now": "HK 01", "all": ["HK 01", "JP 02", "US 03"]},
            "Auto": {"type": "URLTest", "now": "JP 02", "all": ["HK 01", "JP 02"]},
            "HK 01": {"type": "Shadowsocks"},
            "JP 02": {"type": "Vmess"},
            "US 03": {"type": "Trojan"},
            "DIRECT": {"type": "Direct"},
        }
    }
