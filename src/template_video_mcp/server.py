"""Main FastMCP server — mounts the template video sub-server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import tracing
from .client import GeminiClient
from .tools.templates import templates_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook — tracing setup, then client and trace teardown."""
    tracing.setup()
    yield {}
    closed = await GeminiClient.close_all()
    tracing.shutdown()
    logger.info("Lifespan shutdown: closed %d client(s)", closed)


app = FastMCP(
    "template-video",
    instructions=(
        "Template-based marketing video generator — turns a short prompt into a "
        "multi-scene composition of animated templates, transitions and audio cues."
    ),
    lifespan=_lifespan,
)

app.mount(templates_server)


def main() -> None:
    """Entry-point for ``template-video-mcp`` console script."""
    app.run()


if __name__ == "__main__":
    main()
