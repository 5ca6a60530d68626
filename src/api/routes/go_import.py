"""
Go-import Routes.

Answers every request under the configured import root with ``go get``
metadata and a redirect to the documentation viewer.

Key behaviors:
- Paths ending in ".ping" answer "pong" before any matching
- Resolved paths render an HTML page with go-import and refresh meta tags,
  or a 302 to the docs when the redirect strategy is configured
- The bare wildcard root always redirects (302) to the docs
- Anything outside the import root is a 404
- Rendering failures answer 500 with the error text
"""

from __future__ import annotations

import html
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from src.api.deps import get_redirect_config
from src.components.goimport import (
    ExactWildcardRoot,
    RedirectConfig,
    RenderStrategy,
    Resolved,
    ResolvedRedirect,
    ResolveInput,
    run_resolve,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

PING_BODY = "pong"


class RenderError(Exception):
    """The go-import page could not be rendered."""


# --- HTML Rendering ---


PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>
<meta name="go-import" content="{import_root} {vcs} {repo_root}">
<meta http-equiv="refresh" content="0; url={doc_url}">
</head>
<body>
Redirecting to docs at <a href="{doc_url}">{doc_url}</a>...
</body>
</html>
"""


def render_go_import_page(redirect: ResolvedRedirect, vcs: str) -> str:
    """
    Render the go-import HTML page.

    Raises:
        RenderError: If a value cannot be rendered.
    """
    try:
        return PAGE_TEMPLATE.format(
            import_root=html.escape(redirect.import_root),
            vcs=html.escape(vcs),
            repo_root=html.escape(redirect.repo_root),
            doc_url=html.escape(redirect.doc_url),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise RenderError(str(e)) from e


def cache_headers(config: RedirectConfig) -> dict[str, str]:
    """Response headers for a rendered page."""
    if not config.cache_control:
        return {}
    return {"Cache-Control": f"public, max-age={config.cache_max_age}"}


# --- Routes ---


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
def handle_go_import(
    request: Request,
    config: RedirectConfig = Depends(get_redirect_config),
) -> Response:
    """
    Handle a go-import request.

    The request path is the Host header followed by the decoded URL path,
    taken whole from the ASGI scope so escaped "?" or "#" stay in it.
    """
    inp = ResolveInput(host=request.headers.get("host", ""), path=request.scope["path"])
    result = run_resolve(inp, config=config)

    if result.health_check:
        return PlainTextResponse(PING_BODY)

    outcome = result.outcome
    if isinstance(outcome, ExactWildcardRoot):
        return RedirectResponse(url=outcome.doc_url, status_code=status.HTTP_302_FOUND)

    if not isinstance(outcome, Resolved):
        logger.debug("No import root for %s", inp.request_path)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    redirect = outcome.redirect
    if config.render_strategy == RenderStrategy.REDIRECT:
        return RedirectResponse(url=redirect.doc_url, status_code=status.HTTP_302_FOUND)

    try:
        body = render_go_import_page(redirect, config.vcs)
    except RenderError as e:
        logger.error("Render failed for %s: %s", inp.request_path, e)
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTMLResponse(content=body, headers=cache_headers(config))
