"""Shared test fixtures for template-video-mcp."""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


@pytest.fixture(autouse=True, scope="session")
def _unwrap_fastmcp_tools():
    """Patch tool modules so FunctionTool objects become directly callable.

    Tests can then ``await tool_func(...)`` regardless of FastMCP version.
    """
    import importlib
    import pkgutil

    import template_video_mcp.tools as tools_pkg

    modules = []
    for info in pkgutil.walk_packages(tools_pkg.__path__, tools_pkg.__name__ + "."):
        modules.append(importlib.import_module(info.name))

    for mod in modules:
        for name in list(vars(mod)):
            obj = getattr(mod, name, None)
            if obj is not None and hasattr(obj, "fn") and not callable(obj):
                setattr(mod, name, obj.fn)


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure tests never hit real Gemini or knowledge APIs."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key-not-real")
    monkeypatch.delenv("KNOWLEDGE_API_KEY", raising=False)
    monkeypatch.delenv("SENSO_API_KEY", raising=False)
    monkeypatch.delenv("KNOWLEDGE_SYNC_TAXONOMY", raising=False)


@pytest.fixture(autouse=True)
def _disable_tracing(monkeypatch):
    """Disable MLflow tracing in all tests to avoid real tracking-server calls.

    ``test_tracing.py`` patches the tracing module directly and does not
    rely on this fixture.
    """
    monkeypatch.setenv("TEMPLATE_VIDEO_TRACING_ENABLED", "false")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Prevent tests from loading the user's real ~/.config/template-video-mcp/.env."""
    monkeypatch.setattr(
        "template_video_mcp.config.DOTENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton between tests."""
    import template_video_mcp.config as cfg_mod

    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture()
def recorded_spans(monkeypatch):
    """Replace ``tracing.span`` with a recorder returning ``{name: [attribute dicts]}``.

    Each opened span gets a MagicMock whose ``set_attributes`` calls are
    merged into the recorded dict, so tests can assert what a step reported.
    """
    import template_video_mcp.tracing as tracing_mod

    spans: dict[str, list[dict]] = {}

    @contextmanager
    def fake_span(name, span_type="CHAIN", attributes=None):
        recorded = dict(attributes or {})
        spans.setdefault(name, []).append(recorded)
        live = MagicMock()
        live.set_attributes.side_effect = recorded.update
        yield live

    monkeypatch.setattr(tracing_mod, "span", fake_span)
    return spans


@pytest.fixture()
def mock_gemini_client():
    """Patch GeminiClient.get() and .generate() for unit tests."""
    with (
        patch("template_video_mcp.client.GeminiClient.get") as mock_get,
        patch(
            "template_video_mcp.client.GeminiClient.generate", new_callable=AsyncMock
        ) as mock_gen,
    ):
        client = MagicMock()
        mock_get.return_value = client
        yield {
            "get": mock_get,
            "generate": mock_gen,
            "client": client,
        }


def make_knowledge_transport(
    *,
    search: dict | None = None,
    generate: dict | None = None,
    status: int = 200,
    calls: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Build an ``httpx.MockTransport`` imitating the knowledge service.

    Every request is appended to *calls* when given. A non-200 *status*
    applies to all endpoints.
    """
    search = search if search is not None else {"results": [{"content_id": "c1"}, {"content_id": "c1"}]}
    generate = generate if generate is not None else {"generated_text": "", "sources": []}

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if status != 200:
            return httpx.Response(status, json={"error": "boom"})
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json=search)
        if request.url.path.endswith("/generate"):
            return httpx.Response(200, json=generate)
        return httpx.Response(404, json={"error": "not found"})

    return httpx.MockTransport(handler)


def request_json(request: httpx.Request) -> dict:
    """Decode the JSON body of a captured request."""
    return json.loads(request.content.decode())
