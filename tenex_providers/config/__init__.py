"""Unified configuration layer.

Goals
-----
* Centralize defaults (base directory, models.dev URL, staleness threshold).
* Merge sources in a predictable order:
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) pointed to by
       ``TENEX_CONFIG_FILE``
    3. Environment variables
* Provide the ``get_config_path(subpath)`` collaborator the cache uses to
  locate its file.

Environment Variables
---------------------
TENEX_BASE_DIR
    Global TENEX directory (default ``~/.tenex``).
TENEX_MODELS_DEV_URL
    Override for the models.dev catalogue URL.
TENEX_MODELS_DEV_STALE_SECONDS
    Age (seconds) after which a cached snapshot is refreshed in background.

External Config File (Optional)
-------------------------------
Structure example::

    base_dir: ~/.tenex
    models_dev:
      api_url: https://models.dev/api.json
      stale_after_seconds: 43200

Public API
----------
* get_base_dir() -> str
* get_config_path(subpath: str) -> str
* get_models_dev_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    MODELS_DEV_DEFAULT_API_URL,
    MODELS_DEV_STALE_AFTER_SECONDS,
    TENEX_DEFAULT_BASE_DIR,
)

CONFIG_FILE_ENV = "TENEX_CONFIG_FILE"
BASE_DIR_ENV = "TENEX_BASE_DIR"

MODELS_DEV_DEFAULTS: Dict[str, Any] = {
    "api_url": MODELS_DEV_DEFAULT_API_URL,
    "stale_after_seconds": MODELS_DEV_STALE_AFTER_SECONDS,
}

ENV_FIELD_MAP = {
    "api_url": "TENEX_MODELS_DEV_URL",
    "stale_after_seconds": "TENEX_MODELS_DEV_STALE_SECONDS",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and memoize the optional external config file.

    Missing files and unparsable content yield an empty mapping.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(os.path.expanduser(path))
    if not p.is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        _FILE_CACHE = {}
        return _FILE_CACHE
    data: Any
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def reset_config_cache() -> None:
    """Forget the memoized external config file (tests, config reloads)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _positive_float(value: Any, default: float) -> float:
    try:
        val = float(value)
    except (TypeError, ValueError):
        return default
    return val if val > 0 else default


def get_base_dir() -> str:
    """Return the global TENEX directory with ``~`` expanded.

    Precedence (later wins): default -> config file ``base_dir`` -> env.
    """
    base = TENEX_DEFAULT_BASE_DIR
    file_base = _load_external_config().get("base_dir")
    if isinstance(file_base, str) and file_base.strip():
        base = file_base.strip()
    env_base = os.getenv(BASE_DIR_ENV)
    if env_base and env_base.strip():
        base = env_base.strip()
    return os.path.expanduser(base)


def get_config_path(subpath: str = "") -> str:
    """Return ``<base dir>/<subpath>`` (the base dir itself when empty)."""
    base = get_base_dir()
    return os.path.join(base, subpath) if subpath else base


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, env_name in ENV_FIELD_MAP.items():
        val = os.getenv(env_name)
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


def get_models_dev_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for the models.dev cache.

    Merge order (later wins): defaults -> external config ``models_dev``
    section -> env vars -> overrides. ``stale_after_seconds`` is normalized
    to a positive float; invalid values fall back to the default.
    """
    cfg: Dict[str, Any] = dict(MODELS_DEV_DEFAULTS)

    file_cfg = _load_external_config().get("models_dev")
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides()

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    cfg["stale_after_seconds"] = _positive_float(cfg.get("stale_after_seconds"), MODELS_DEV_STALE_AFTER_SECONDS)
    if not isinstance(cfg.get("api_url"), str) or not cfg["api_url"]:
        cfg["api_url"] = MODELS_DEV_DEFAULT_API_URL
    return cfg


__all__ = [
    "get_base_dir",
    "get_config_path",
    "get_models_dev_config",
    "reset_config_cache",
    "MODELS_DEV_DEFAULTS",
]
