"""
Startup configuration for the redirector.

Turns validated rules into the immutable RedirectConfig and listener
settings, failing fast on anything that would make the server misbehave.
"""

import logging
import os
import socket
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.components.goimport import (
    RedirectConfig,
    RenderStrategy,
    split_wildcard,
    tls_host,
)
from src.rules.loader import read_rules_file, validate_rules
from src.rules.models import RedirectorRules

logger = logging.getLogger(__name__)

# Environment variables read by the ASGI entry point
ENV_CONFIG = "REDIRECTOR_CONFIG"
ENV_OVERRIDES = {
    "REDIRECTOR_IMPORT_PATH": "import",
    "REDIRECTOR_REPO_PATH": "repo",
    "REDIRECTOR_VCS": "vcs",
    "REDIRECTOR_DOC_BASE_URL": "godoc",
}

SERVICE_PORTS = {"http": 80, "https": 443}
HTTPS_PORT = 443


class ConfigurationError(Exception):
    """Configuration is structurally invalid; the server must not start."""


@dataclass(frozen=True)
class ListenConfig:
    """Where and how to listen."""

    host: str
    port: int
    tls: bool = False
    certfile: Path | None = None
    keyfile: Path | None = None


# --- Loading ---


def merge_overrides(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge override values into a raw config mapping.

    Nested mappings are merged key by key; None values are ignored so that
    unset flags do not clobber file values.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_overrides(merged[key], value)
        elif isinstance(value, Mapping):
            merged[key] = merge_overrides({}, value)
        else:
            merged[key] = value
    return merged


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect config overrides from the environment."""
    env = os.environ if environ is None else environ
    return {key: env[name] for name, key in ENV_OVERRIDES.items() if env.get(name)}


def load_config(
    config_path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> RedirectorRules:
    """
    Load rules from an optional YAML file plus overrides.

    Raises:
        ConfigurationError: If the file is missing or the result is invalid.
    """
    data: dict[str, Any] = {}
    try:
        if config_path is not None:
            data = read_rules_file(config_path)
        return validate_rules(merge_overrides(data, overrides or {}))
    except (FileNotFoundError, ValueError) as e:
        raise ConfigurationError(str(e)) from e


def load_config_from_env(environ: Mapping[str, str] | None = None) -> RedirectorRules:
    """Load rules the way the ASGI entry point does."""
    env = os.environ if environ is None else environ
    config_path = env.get(ENV_CONFIG)
    return load_config(
        Path(config_path) if config_path else None,
        env_overrides(env),
    )


# --- Building ---


def build_redirect_config(rules: RedirectorRules) -> RedirectConfig:
    """
    Build the immutable redirect configuration.

    Raises:
        ConfigurationError: If only one of import and repo ends in "/*".
    """
    split = split_wildcard(rules.import_path, rules.repo_path)
    if split is None:
        raise ConfigurationError("either both import and repo must have /* or neither")
    import_path, repo_path, wildcard = split

    import_path = import_path.rstrip("/")
    if not import_path:
        raise ConfigurationError("import path must not be empty")

    return RedirectConfig(
        import_path=import_path,
        repo_path=repo_path,
        vcs=rules.vcs,
        wildcard=wildcard,
        doc_base_url=rules.godoc,
        render_strategy=RenderStrategy(rules.response.strategy),
        cache_control=rules.response.cache_control,
        cache_max_age=rules.response.cache_max_age,
    )


def parse_listen_address(addr: str) -> tuple[str, int]:
    """
    Parse a "host:port" listen address.

    The host may be empty (all interfaces) and the port may be a service
    name such as "http".
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not port:
        raise ConfigurationError(f"invalid listen address {addr!r}: missing port")

    host = host.strip("[]") or "0.0.0.0"
    if port.isdigit():
        return host, int(port)
    if port in SERVICE_PORTS:
        return host, SERVICE_PORTS[port]
    try:
        return host, socket.getservbyname(port, "tcp")
    except OSError as e:
        raise ConfigurationError(f"invalid listen address {addr!r}: unknown port {port!r}") from e


def build_listen_configs(rules: RedirectorRules, config: RedirectConfig) -> list[ListenConfig]:
    """
    Build the listener list: plain HTTP, plus HTTPS on :443 when TLS is on.

    Certificates are read from "<host>.crt" and "<host>.key" in the
    certificate directory, where host is the first element of the import path.

    Raises:
        ConfigurationError: If the address is invalid or certificate files are missing.
    """
    host, port = parse_listen_address(rules.listen.addr)
    listeners = [ListenConfig(host=host, port=port)]

    if rules.listen.tls:
        name = tls_host(config.import_path)
        cert_dir = Path(rules.listen.cert_dir)
        certfile = cert_dir / f"{name}.crt"
        keyfile = cert_dir / f"{name}.key"
        missing = [str(p) for p in (certfile, keyfile) if not p.is_file()]
        if missing:
            raise ConfigurationError(f"missing TLS files: {', '.join(missing)}")
        listeners.append(
            ListenConfig(
                host="0.0.0.0",
                port=HTTPS_PORT,
                tls=True,
                certfile=certfile,
                keyfile=keyfile,
            )
        )

    return listeners


def log_config(config: RedirectConfig) -> None:
    """Log the effective configuration."""
    root = config.import_path + ("/*" if config.wildcard else "")
    repo = config.repo_path + ("/*" if config.wildcard else "")
    logger.info("Serving %s -> %s (%s)", root, repo, config.vcs)
    logger.info(
        "Docs at %s, strategy=%s, cache_control=%s",
        config.doc_base_url,
        config.render_strategy.value,
        config.cache_control,
    )
