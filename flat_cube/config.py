"""YAML configuration for the flat cube CLI."""

from __future__ import annotations

from pathlib import Path

import yaml

from .state_codec import CubeValidationError

SECTIONS = ("cube", "server", "gui")


def load_config(path: str | Path) -> dict:
    """Load YAML config. Returns dict with optional 'cube', 'server' and 'gui' keys."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise CubeValidationError(f"Config {path} must be a mapping at the top level")
    for section in SECTIONS:
        value = data.get(section)
        if value is None:
            data[section] = {}
        elif not isinstance(value, dict):
            raise CubeValidationError(f"Config section '{section}' must be a mapping")
    return data
