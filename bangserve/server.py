"""
HTTP Server - Redirect search and suggestion requests.

Routes:
  GET /search?q=...    → 303 to the resolved engine's search URL
  GET /suggest?q=...   → 303 to the suggestion URL
  GET /opensearch.xml  → OpenSearch descriptor (so browsers can add us)
  GET /                → landing page

The resolver lives on app.state, so tests can build an app around a
custom registry and a fake network provider.
"""

from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, RedirectResponse
from loguru import logger

from bangserve import __version__
from bangserve.search.resolver import QueryResolver

OPENSEARCH_MEDIA_TYPE = "application/opensearchdescription+xml"


def _static_file(static_dir: Path, filename: str, media_type: str) -> FileResponse:
    path = static_dir / filename
    if not path.is_file():
        logger.warning(f"Static file not found: {path}")
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(path, media_type=media_type)


def create_app(resolver: QueryResolver, static_dir: Path) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        resolver: Shared, read-only QueryResolver
        static_dir: Directory containing index.html and opensearch.xml
    """
    app = FastAPI(
        title="bangserve",
        description="Bang search shortcuts with network-aware default engines.",
        version=__version__,
    )
    app.state.resolver = resolver
    app.state.static_dir = Path(static_dir)

    @app.get("/search", summary="Search redirect", tags=["Search"])
    def search(request: Request, q: str):
        url = request.app.state.resolver.search_url(q)
        logger.debug(f"search {q!r} → {url}")
        return RedirectResponse(url, status_code=303)

    @app.get("/suggest", summary="Suggestion redirect", tags=["Search"])
    def suggest(request: Request, q: str):
        url = request.app.state.resolver.suggest_url(q)
        logger.debug(f"suggest {q!r} → {url}")
        return RedirectResponse(url, status_code=303)

    @app.get("/opensearch.xml", summary="OpenSearch descriptor", tags=["Static"])
    def opensearch(request: Request):
        return _static_file(request.app.state.static_dir, "opensearch.xml", OPENSEARCH_MEDIA_TYPE)

    @app.get("/", summary="Landing page", tags=["Static"])
    def index(request: Request):
        return _static_file(request.app.state.static_dir, "index.html", "text/html")

    return app
