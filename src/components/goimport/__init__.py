"""
Go-import component - vanity import path resolution for ``go get``.
"""

from ._impl import (
    HEALTH_CHECK_SUFFIX,
    LATEST_MARKER,
    WILDCARD_MARKER,
    is_health_check,
    match_path,
    normalize_request_path,
    resolve,
    resolve_wildcard,
    split_wildcard,
    tls_host,
)
from .component import run, run_resolve
from .models import (
    ExactWildcardRoot,
    HealthCheck,
    NotFound,
    Outcome,
    RedirectConfig,
    RenderStrategy,
    Resolved,
    ResolvedRedirect,
    ResolveInput,
    ResolveOutput,
)

__all__ = [
    # Entry points
    "run",
    "run_resolve",
    # Input models
    "ResolveInput",
    # Output models
    "ExactWildcardRoot",
    "HealthCheck",
    "NotFound",
    "Outcome",
    "Resolved",
    "ResolvedRedirect",
    "ResolveOutput",
    # Configuration
    "RedirectConfig",
    "RenderStrategy",
    # _impl re-exports
    "HEALTH_CHECK_SUFFIX",
    "LATEST_MARKER",
    "WILDCARD_MARKER",
    "is_health_check",
    "match_path",
    "normalize_request_path",
    "resolve",
    "resolve_wildcard",
    "split_wildcard",
    "tls_host",
]
