from functools import lru_cache

from fastapi import Request

from src.app_shell.config import build_redirect_config, load_config_from_env
from src.components.goimport import RedirectConfig


# --- Settings ---
@lru_cache
def get_env_redirect_config() -> RedirectConfig:
    """Redirect config built from REDIRECTOR_* environment variables."""
    return build_redirect_config(load_config_from_env())


# --- Redirect Config ---
def get_redirect_config(request: Request) -> RedirectConfig:
    """Redirect config attached to the app, falling back to the environment."""
    config: RedirectConfig | None = getattr(request.app.state, "redirect_config", None)
    return config if config is not None else get_env_redirect_config()
