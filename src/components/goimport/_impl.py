"""
Go-import path resolution.

Maps a request path (host + URL path) onto the configured import root and
computes the ``go-import`` repository root and documentation URL.

Key behaviors:
- Plain mode: the whole import root maps to a single repository
- Wildcard mode: the first path element after the root is substituted into
  both the import root and the repository root
- Trailing "/" and "@latest" are ignored
- Paths ending in ".ping" are health checks and never reach matching
"""

from __future__ import annotations

from .models import (
    ExactWildcardRoot,
    NotFound,
    Outcome,
    RedirectConfig,
    Resolved,
    ResolvedRedirect,
)

WILDCARD_MARKER = "/*"
LATEST_MARKER = "@latest"
HEALTH_CHECK_SUFFIX = ".ping"


# --- Health Check ---


def is_health_check(url_path: str) -> bool:
    """Check if a URL path is a health-check probe."""
    return url_path.endswith(HEALTH_CHECK_SUFFIX)


# --- Path Matcher ---


def normalize_request_path(request_path: str) -> str:
    """Strip a trailing "@latest" marker, then a single trailing slash."""
    path = request_path.removesuffix(LATEST_MARKER)
    return path.removesuffix("/")


def match_path(request_path: str, import_path: str) -> tuple[bool, str]:
    """
    Match a request path against a plain import root.

    Returns:
        Tuple of (matched, suffix). Suffix is empty on an exact match and
        otherwise starts with "/".
    """
    path = normalize_request_path(request_path)
    if path != import_path and not path.startswith(import_path + "/"):
        return False, ""
    return True, path[len(import_path) :]


# --- Wildcard Resolver ---


def resolve_wildcard(
    request_path: str,
    import_path: str,
    repo_path: str,
) -> tuple[bool, str, str, str]:
    """
    Resolve a request path against a wildcard import root.

    ``import_path`` and ``repo_path`` must already have the wildcard marker
    stripped. Only the first element after the root is captured; anything
    deeper is returned as the suffix.

    Returns:
        Tuple of (matched, import_root, repo_root, suffix). An exact match
        on the bare root returns the unsubstituted paths with an empty suffix.
    """
    path = normalize_request_path(request_path)
    if path == import_path:
        return True, import_path, repo_path, ""
    if not path.startswith(import_path + "/"):
        return False, "", "", ""

    elem, sep, rest = path[len(import_path) + 1 :].partition("/")
    suffix = sep + rest
    return True, f"{import_path}/{elem}", f"{repo_path}/{elem}", suffix


# --- Redirect Resolver ---


def resolve(request_path: str, config: RedirectConfig) -> Outcome:
    """Resolve a request path to an outcome under the given configuration."""
    if config.wildcard:
        matched, import_root, repo_root, suffix = resolve_wildcard(
            request_path, config.import_path, config.repo_path
        )
        if not matched:
            return NotFound()
        if import_root == config.import_path:
            return ExactWildcardRoot(doc_url=config.doc_base_url + config.import_path)
    else:
        matched, suffix = match_path(request_path, config.import_path)
        if not matched:
            return NotFound()
        import_root = config.import_path
        repo_root = config.repo_path

    return Resolved(
        ResolvedRedirect(
            import_root=import_root,
            repo_root=repo_root,
            suffix=suffix,
            doc_url=config.doc_base_url + import_root + suffix,
        )
    )


# --- Configuration Helpers ---


def split_wildcard(import_path: str, repo_path: str) -> tuple[str, str, bool] | None:
    """
    Detect and strip the wildcard marker from both paths.

    Returns:
        Tuple of (import_path, repo_path, wildcard), or None when exactly one
        of the two paths carries the marker.
    """
    import_wild = import_path.endswith(WILDCARD_MARKER)
    repo_wild = repo_path.endswith(WILDCARD_MARKER)
    if import_wild != repo_wild:
        return None
    if import_wild:
        return (
            import_path.removesuffix(WILDCARD_MARKER),
            repo_path.removesuffix(WILDCARD_MARKER),
            True,
        )
    return import_path, repo_path, False


def tls_host(import_path: str) -> str:
    """Host portion of an import path, used to name certificate files."""
    return import_path.split("/", 1)[0]
