import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.deps import get_env_redirect_config
from src.app_shell.config import ConfigurationError, log_config
from src.components.goimport import RedirectConfig

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Load config from the environment on startup (fail-fast)
    if getattr(app.state, "redirect_config", None) is None:
        try:
            app.state.redirect_config = get_env_redirect_config()
        except ConfigurationError as e:
            logger.critical("Config load failed: %s", e)
            sys.exit(1)
        log_config(app.state.redirect_config)

    yield


def create_app(config: RedirectConfig | None = None) -> FastAPI:
    """
    Create the redirector app.

    Without an explicit config, it is loaded from REDIRECTOR_* environment
    variables at startup.
    """
    # Every path belongs to the import root, so no docs/openapi routes
    app = FastAPI(
        title="go-import-redirector",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.redirect_config = config

    # --- Routers ---
    from src.api.routes import go_import

    app.include_router(go_import.router, prefix="", tags=["Go Import"])
    return app


app = create_app()
