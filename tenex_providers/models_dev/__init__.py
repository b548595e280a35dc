"""models.dev model metadata cache.

Module-level functions operate on a lazily constructed process-wide
:class:`ModelsDevCache`. Code that needs isolation (tests, embedding
applications) constructs its own instance or installs one with
:func:`set_default_cache`.

Typical use::

    from tenex_providers import models_dev

    models_dev.ensure_cache_loaded()
    window = models_dev.get_context_window_from_modelsdev("anthropic", "claude-opus-4-5-20251101")
    if window is None:
        ...  # unknown model: proceed without a context-window guard
"""

from __future__ import annotations

import threading
from typing import List, Optional

from ..base.models import ModelInfo, ModelLimits
from .cache import ModelsDevCache
from .fetcher import fetch_models_dev
from .provider_mapping import PROVIDER_MAPPING, map_provider
from .resolver import ResolvedModel, resolve_model_data
from .store import DiskCacheStore, default_cache_file

_DEFAULT: Optional[ModelsDevCache] = None
_DEFAULT_LOCK = threading.Lock()


def get_default_cache() -> ModelsDevCache:
    """Return the process-wide cache, creating it on first use."""
    global _DEFAULT
    cache = _DEFAULT
    if cache is not None:
        return cache
    with _DEFAULT_LOCK:
        if _DEFAULT is None:
            _DEFAULT = ModelsDevCache()
        return _DEFAULT


def set_default_cache(cache: Optional[ModelsDevCache]) -> None:
    """Install ``cache`` as the process-wide instance (``None`` resets it)."""
    global _DEFAULT
    with _DEFAULT_LOCK:
        _DEFAULT = cache


def ensure_cache_loaded() -> None:
    get_default_cache().ensure_cache_loaded()


def refresh_cache() -> None:
    get_default_cache().refresh_cache()


def clear_models_dev_cache() -> None:
    """Clear the default instance's in-memory state (disk file untouched)."""
    cache = _DEFAULT
    if cache is not None:
        cache.clear_cache()


def get_model_limits(provider_id: str, model_id: str) -> Optional[ModelLimits]:
    return get_default_cache().get_model_limits(provider_id, model_id)


def get_context_window_from_modelsdev(provider_id: str, model_id: str) -> Optional[int]:
    return get_default_cache().get_context_window(provider_id, model_id)


get_context_window = get_context_window_from_modelsdev


def get_model_info(provider_id: str, model_id: str) -> Optional[ModelInfo]:
    return get_default_cache().get_model_info(provider_id, model_id)


def get_provider_models(provider_id: str) -> List[ModelInfo]:
    return get_default_cache().get_provider_models(provider_id)


__all__ = [
    "ModelsDevCache",
    "DiskCacheStore",
    "ResolvedModel",
    "PROVIDER_MAPPING",
    "default_cache_file",
    "fetch_models_dev",
    "map_provider",
    "resolve_model_data",
    "get_default_cache",
    "set_default_cache",
    "ensure_cache_loaded",
    "refresh_cache",
    "clear_models_dev_cache",
    "get_model_limits",
    "get_context_window",
    "get_context_window_from_modelsdev",
    "get_model_info",
    "get_provider_models",
]
