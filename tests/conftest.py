"""
Shared pytest fixtures for the portal test suite.

Architecture
------------
The template registry and identity config live on ``app.state``.  Endpoint
tests never trigger the FastAPI lifespan; they inject a registry built from
the real ``templates/`` directory and use ``ASGITransport`` (which skips
lifespan).  Lifespan tests go through ``asgi-lifespan.LifespanManager``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

import config
from portal_templates import TemplateRegistry, init_templates

APP_DIR      = Path(__file__).parent.parent
TEMPLATE_DIR = APP_DIR / "templates"

TEST_EXTERNAL_URL = "https://portal.test"

ALICE_HEADERS = {
    "x-current-user":  "alice",
    "x-user-role":     "admin, editor",
    "x-user-metadata": "allowed",
}


def make_request(
    path: str = "/",
    headers: Optional[Dict[str, str]] = None,
    method: str = "GET",
) -> Request:
    """A bare Starlette request; header names are lowercased as ASGI servers do."""
    raw = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
    return Request({
        "type":         "http",
        "method":       method,
        "path":         path,
        "query_string": b"",
        "headers":      raw,
    })


def write_templates(directory: Path, **sources: str) -> Path:
    """Write ``name=source`` pairs as ``name.html`` files under *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, source in sources.items():
        (directory / f"{name}.html").write_text(source)
    return directory


@pytest.fixture
def registry() -> TemplateRegistry:
    return init_templates(TEMPLATE_DIR)


@pytest.fixture
def identity_config() -> dict:
    return {
        "external_url": TEST_EXTERNAL_URL,
        "realm":        config.DEFAULT_REALM,
        "client_id":    config.DEFAULT_CLIENT_ID,
    }


@pytest.fixture
def portal_app(registry: TemplateRegistry, identity_config: dict):
    """``main.app`` with state injected directly; restored afterwards."""
    from main import app

    app.state.templates       = registry
    app.state.identity_config = identity_config
    app.state.started_at      = 0.0
    yield app
    app.state.templates       = None
    app.state.identity_config = None
    app.state.started_at      = None


@pytest_asyncio.fixture
async def client(portal_app) -> AsyncClient:
    async with AsyncClient(
        transport=ASGITransport(app=portal_app),
        base_url="http://test",
    ) as c:
        yield c
