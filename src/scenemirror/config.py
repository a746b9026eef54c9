"""Configuration loader — engine credentials, persistence endpoint, timeline.

Config schema (every key optional, merged over DEFAULT_CONFIG):
  engine:
    mode: interactive            # "interactive" or "player"
    token: "..."                 # overridden by $SCENEMIRROR_ENGINE_TOKEN
  persistence:
    base_url: "http://localhost:3000"
    path: "/api/videos"
    timeout: 30                  # seconds, > 0
  timeline:
    scale: 100                   # pixels per second, > 0
  paths:
    assets: "/data/assets"
  source: "${assets}/default.yaml"   # default source document
"""

import copy
import os
from pathlib import Path

import yaml

from .common import resolve_path_vars
from .engine import VALID_MODES


TOKEN_ENV = "SCENEMIRROR_ENGINE_TOKEN"

DEFAULT_CONFIG = {
    "engine": {"mode": "interactive", "token": None},
    "persistence": {
        "base_url": "http://localhost:3000",
        "path": "/api/videos",
        "timeout": 30,
    },
    "timeline": {"scale": 100},
    "paths": {},
    "source": None,
}

_SECTIONS = ("engine", "persistence", "timeline")


def load_config(config_path: str | Path | None = None, environ=None) -> dict:
    """Load, validate, and normalize a config file.

    Processing pipeline:
      1. Parse YAML (no file means all defaults).
      2. Merge each section over DEFAULT_CONFIG.
      3. Resolve ${path} variables in ``source``.
      4. Apply the token environment override.
      5. Validate engine mode, timeout and timeline scale.

    Args:
        config_path: Path to the YAML config, or None.
        environ: Mapping used for the env override (defaults to os.environ).

    Returns:
        Normalized config dict.

    Raises:
        ValueError: Unknown key or invalid value.
        FileNotFoundError: Missing config file.
    """
    raw = {}
    if config_path is not None:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError("Config: top level must be a mapping")

    unknown = set(raw) - set(DEFAULT_CONFIG)
    if unknown:
        raise ValueError(
            f"Config: unknown key(s) {sorted(unknown)}. Valid: {sorted(DEFAULT_CONFIG)}"
        )

    config = copy.deepcopy(DEFAULT_CONFIG)
    for section in _SECTIONS:
        value = raw.get(section, {})
        if not isinstance(value, dict):
            raise ValueError(f"Config: '{section}' must be a mapping")
        config[section].update(value)

    paths = raw.get("paths", {})
    if not isinstance(paths, dict):
        raise ValueError("Config: 'paths' must be a mapping")
    config["paths"] = paths

    source = raw.get("source")
    if source is not None:
        config["source"] = resolve_path_vars(str(source), paths)

    environ = os.environ if environ is None else environ
    if environ.get(TOKEN_ENV):
        config["engine"]["token"] = environ[TOKEN_ENV]

    _validate(config)
    return config


def _validate(config: dict) -> None:
    mode = config["engine"]["mode"]
    if mode not in VALID_MODES:
        raise ValueError(
            f"Config: invalid engine.mode '{mode}'. Valid: {sorted(VALID_MODES)}"
        )

    timeout = config["persistence"]["timeout"]
    if not _is_positive_number(timeout):
        raise ValueError(f"Config: persistence.timeout must be > 0, got {timeout!r}")

    scale = config["timeline"]["scale"]
    if not _is_positive_number(scale):
        raise ValueError(f"Config: timeline.scale must be > 0, got {scale!r}")

    for key in ("base_url", "path"):
        if not isinstance(config["persistence"][key], str):
            raise ValueError(f"Config: persistence.{key} must be a string")


def _is_positive_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
