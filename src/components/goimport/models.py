"""
Go-import component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# --- Configuration ---


class RenderStrategy(str, Enum):
    """How a resolved import path is answered."""

    HTML = "html"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class RedirectConfig:
    """
    Redirector configuration.

    Built once at startup. When ``wildcard`` is set, the ``/*`` marker has
    already been stripped from both ``import_path`` and ``repo_path``.
    """

    import_path: str
    repo_path: str
    vcs: str = "git"
    wildcard: bool = False
    doc_base_url: str = "https://pkg.go.dev/"
    render_strategy: RenderStrategy = RenderStrategy.HTML
    cache_control: bool = True
    cache_max_age: int = 300


# --- Resolution Results ---


@dataclass(frozen=True)
class ResolvedRedirect:
    """Per-request resolution of an import path."""

    import_root: str
    repo_root: str
    suffix: str  # "" or starts with "/"
    doc_url: str


@dataclass(frozen=True)
class Resolved:
    """Request falls under the import root."""

    redirect: ResolvedRedirect


@dataclass(frozen=True)
class ExactWildcardRoot:
    """Bare wildcard root requested; answered with a redirect to the docs."""

    doc_url: str


@dataclass(frozen=True)
class NotFound:
    """Request path is outside the import root."""


@dataclass(frozen=True)
class HealthCheck:
    """Health-check request; answered before any matching."""


Outcome = Resolved | ExactWildcardRoot | NotFound | HealthCheck


# --- Input Models ---


@dataclass(frozen=True)
class ResolveInput:
    """Input for resolving a request."""

    host: str
    path: str

    @property
    def request_path(self) -> str:
        return self.host + self.path


# --- Output Models ---


@dataclass(frozen=True)
class ResolveOutput:
    """Output of a resolve operation."""

    outcome: Outcome

    @property
    def health_check(self) -> bool:
        return isinstance(self.outcome, HealthCheck)

    @property
    def found(self) -> bool:
        return isinstance(self.outcome, (Resolved, ExactWildcardRoot))
