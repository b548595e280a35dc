"""tenex_providers.config.defaults
===============================

Central place for small, stable default values. These can be overridden via
environment variables or the optional external config file (see
``tenex_providers.config``) but provide sensible fallbacks for local use and
tests.

This module intentionally imports nothing from the rest of the package to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Filesystem layout ----
# Global TENEX directory; the cache lives under <base>/cache.
TENEX_DEFAULT_BASE_DIR = "~/.tenex"
MODELS_DEV_CACHE_SUBDIR = "cache"
MODELS_DEV_CACHE_FILE_NAME = "models-dev.json"

# ---- models.dev ----
MODELS_DEV_DEFAULT_API_URL = "https://models.dev/api.json"
# 24 hours
MODELS_DEV_STALE_AFTER_SECONDS = 24 * 60 * 60.0

# ---- CLI defaults ----
MODELS_CLI_DEFAULT_LIST_LIMIT = 25


__all__ = [
    "TENEX_DEFAULT_BASE_DIR",
    "MODELS_DEV_CACHE_SUBDIR",
    "MODELS_DEV_CACHE_FILE_NAME",
    "MODELS_DEV_DEFAULT_API_URL",
    "MODELS_DEV_STALE_AFTER_SECONDS",
    "MODELS_CLI_DEFAULT_LIST_LIMIT",
]
