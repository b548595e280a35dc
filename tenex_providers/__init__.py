"""tenex_providers package

Model metadata for TENEX's LLM providers: a stale-while-revalidate cache of
the models.dev catalogue plus resolvers that map TENEX provider/model ids to
context windows, output limits and pricing.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - DTOs: :class:`ModelLimits`, :class:`ModelInfo`
    - Cache: :class:`ModelsDevCache` and the module-level functions operating
      on the default instance (``ensure_cache_loaded``, ``refresh_cache``,
      ``clear_models_dev_cache``, ``get_model_limits``,
      ``get_context_window_from_modelsdev``, ``get_model_info``,
      ``get_provider_models``)
"""

from .base.errors import ErrorCode, ProviderError
from .base.models import ModelInfo, ModelLimits
from .models_dev import (
    ModelsDevCache,
    clear_models_dev_cache,
    ensure_cache_loaded,
    get_context_window_from_modelsdev,
    get_default_cache,
    get_model_info,
    get_model_limits,
    get_provider_models,
    refresh_cache,
    set_default_cache,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "ProviderError",
    "ModelInfo",
    "ModelLimits",
    "ModelsDevCache",
    "get_default_cache",
    "set_default_cache",
    "ensure_cache_loaded",
    "refresh_cache",
    "clear_models_dev_cache",
    "get_model_limits",
    "get_context_window_from_modelsdev",
    "get_model_info",
    "get_provider_models",
]
