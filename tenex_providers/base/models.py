"""
Domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``tenex_providers.base.models_parts``.
"""

from .models_parts.model_limits import ModelLimits
from .models_parts.model_info import ModelInfo
from .models_parts.cache_envelope import CacheEnvelope

__all__ = [
    "ModelLimits",
    "ModelInfo",
    "CacheEnvelope",
]
