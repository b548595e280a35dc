"""One-class-per-file DTOs re-exported by ``tenex_providers.base.models``."""

from .model_limits import ModelLimits
from .model_info import ModelInfo
from .cache_envelope import CacheEnvelope

__all__ = ["ModelLimits", "ModelInfo", "CacheEnvelope"]
