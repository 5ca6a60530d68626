"""
Go-import component - vanity import path resolution.

Resolves requests under a configured import root to ``go get`` metadata
and documentation links.

Invariants:
- I1: Resolution is a pure function of (config, request path)
- I2: Health checks short-circuit before any matching
- I3: In wildcard mode exactly one path element is substituted
- I4: The import root never ends with "/"
"""

from __future__ import annotations

from ._impl import is_health_check, resolve
from .models import HealthCheck, RedirectConfig, ResolveInput, ResolveOutput

# --- Component Entry Points ---


def run_resolve(inp: ResolveInput, *, config: RedirectConfig) -> ResolveOutput:
    """
    Resolve an incoming request.

    Args:
        inp: Input containing the request host and URL path.
        config: Redirector configuration.

    Returns:
        ResolveOutput with the outcome; health checks get a HealthCheck outcome.
    """
    if is_health_check(inp.path):
        return ResolveOutput(outcome=HealthCheck())

    return ResolveOutput(outcome=resolve(inp.request_path, config))


def run(inp: ResolveInput, *, config: RedirectConfig) -> ResolveOutput:
    """
    Main entry point for the go-import component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ResolveInput):
        return run_resolve(inp, config=config)
    raise ValueError(f"Unknown input type: {type(inp)}")
