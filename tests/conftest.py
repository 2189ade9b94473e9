"""Shared test fixtures and configuration.

HTTP is stubbed with httpx.MockTransport so no test touches the network.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from buffer_cli.cli.core.session import ApiSession

TOKEN = "test-token-123"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client() -> Callable[[Handler], httpx.AsyncClient]:
    """Factory for an AsyncClient whose requests are answered by `handler`.

    Usage:
        client = make_client(lambda request: httpx.Response(200, json={}))
    """
    def _make(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """List that handlers append to, for asserting on what was sent."""
    return []


@pytest.fixture
def make_session(make_client) -> Callable[..., ApiSession]:
    """Factory for an ApiSession backed by a mock transport."""
    def _make(handler: Handler, **kwargs) -> ApiSession:
        return ApiSession(token=TOKEN, client=make_client(handler), **kwargs)

    return _make


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated config directory with no ambient access token."""
    directory = tmp_path / "buffer-config"
    monkeypatch.setenv("BUFFER_CONFIG_DIR", str(directory))
    monkeypatch.delenv("BUFFER_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("BUFFER_MAX_RETRIES", raising=False)
    return directory
