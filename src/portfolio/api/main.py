"""Portfolio — FastAPI Application.

This module is the single entry point for the web service.  It defines the
FastAPI ``app`` instance, the REST API routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
The application is stateless per request:

- **The unit registry** is built and frozen once in the startup lifespan,
  before any request is served, and shared read-only by every request.
- **The image transform resolver** is built from configuration at startup.
  It performs no I/O; it only computes URLs for the image-delivery service.
- **Gallery records** arrive in the request body exactly as the content
  backend returns them.  Nothing is persisted.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/api/health``               Version and delivery-service status
GET       ``/api/registry``             Registered content-unit types
POST      ``/api/gallery/layout``       Lay out and render a gallery
POST      ``/api/images/resolve``       Resolve a single image reference
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    portfolio

Direct invocation::

    python -m portfolio.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from portfolio import __version__
from portfolio.api.models import LayoutRequest, ResolveImageRequest
from portfolio.core.config import config
from portfolio.core.gallery import render_gallery
from portfolio.core.image_transform import ImageTransformResolver
from portfolio.core.unit_registry import build_default_registry
from portfolio.core.units import parse_content_units

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application lifecycle: registry and resolver setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the shared, read-only render dependencies.

    On startup:
        Builds and freezes the unit registry and creates the image transform
        resolver, storing both (and the configuration) on ``app.state``.
        Requests are only served after this completes, so every render pass
        sees a fully populated registry.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.config = config
    app.state.registry = build_default_registry()
    app.state.resolver = ImageTransformResolver(config)
    logger.info(
        f"Registry ready with {len(app.state.registry)} unit types; "
        f"delivery service configured: {app.state.resolver.configured}"
    )

    yield


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Portfolio",
    description="Gallery layout and image reference resolution for a photo portfolio.",
    version=__version__,
    lifespan=lifespan,
)

# The rendering frontend is served from a different origin during
# development.  In production, restrict ``allow_origins`` to the site domain.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/health")
async def health(request: Request) -> dict:
    """Return service version and whether image transformation is active.

    Returns:
        Dictionary with ``version`` and ``delivery_configured`` keys.
    """
    return {
        "version": __version__,
        "delivery_configured": request.app.state.resolver.configured,
    }


@app.get("/api/registry")
async def get_registry(request: Request) -> dict:
    """List the registered content-unit types.

    Returns:
        Dictionary with a ``types`` list of entry descriptions.
    """
    registry = request.app.state.registry
    return {"types": [registry.get_entry_info(tag) for tag in registry.registered_tags()]}


@app.post("/api/gallery/layout")
async def gallery_layout(req: LayoutRequest, request: Request) -> dict:
    """Lay out a gallery and resolve every photo's image references.

    Unknown or unrenderable records are dropped (and logged) rather than
    failing the request; an empty ``sections`` list is a valid response.

    Args:
        req: Validated :class:`LayoutRequest` payload.

    Returns:
        Dictionary with ``sections`` (render-ready views) and ``stats``.
    """
    state = request.app.state
    units = parse_content_units(req.items)
    layout = render_gallery(units, state.registry, state.resolver, state.config)
    return layout.to_dict()


@app.post("/api/images/resolve")
async def resolve_image(req: ResolveImageRequest, request: Request) -> dict:
    """Resolve one image reference.

    Args:
        req: Validated :class:`ResolveImageRequest` payload.

    Returns:
        Dictionary with ``url``, ``tokens`` and ``transformed`` keys.
    """
    descriptor = request.app.state.resolver.resolve(req.source, req.to_options())
    return {
        "url": descriptor.url,
        "tokens": list(descriptor.tokens),
        "transformed": descriptor.is_transformed,
    }


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~portfolio.core.config.config`
    (``PORTFOLIO_SERVER_HOST``, ``PORTFOLIO_SERVER_PORT``,
    ``PORTFOLIO_LOG_LEVEL``).  Defaults to ``0.0.0.0:8000``.

    This function is registered as the ``portfolio`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "portfolio.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
