from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from pytest_socket import disable_socket, enable_socket

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tests.fixtures.favqs_payloads import API_KEY, API_ROOT, USER_TOKEN  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "network: test may open real sockets")


@pytest.fixture(autouse=True)
def _disable_network(request: pytest.FixtureRequest):
    """Block real sockets unless a test is marked ``network``."""

    if os.getenv("PYTEST_ALLOW_NETWORK", "0") == "1" or request.node.get_closest_marker("network"):
        yield
        return
    disable_socket()
    try:
        yield
    finally:
        enable_socket()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Start every test from a known FavQs environment."""

    for name in ("FAVQS_BASE_URL", "FAVQS_TIMEOUT", "FAVQS_LOGIN", "FAVQS_PASSWORD", "FAVQS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FAVQS_APIKEY", API_KEY)


@pytest.fixture
def session_endpoint(requests_mock):
    """Mock a successful ``POST /session``."""

    return requests_mock.post(
        f"{API_ROOT}/session",
        json={"User-Token": USER_TOKEN, "login": "reader"},
    )
