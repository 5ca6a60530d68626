from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.rules.models import RedirectorRules


def read_rules_file(path: Path) -> dict[str, Any]:
    """
    Read the raw mapping from a YAML config file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML is malformed or not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in config file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}")
    return data


def validate_rules(data: dict[str, Any]) -> RedirectorRules:
    """Validate a raw mapping against the config schema."""
    try:
        return RedirectorRules.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clear message for the caller/logs
        raise ValueError(f"Config validation failed:\n{e}") from e


def load_rules(path: Path) -> RedirectorRules:
    """
    Load and validate the config file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if schema invalid.
    """
    return validate_rules(read_rules_file(path))
