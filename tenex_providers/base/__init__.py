"""
Base Package

Provider-agnostic building blocks shared by the models.dev cache and the
maintenance CLI:

- Errors: normalized ``ErrorCode`` taxonomy and ``ProviderError``
- Models (DTOs): ``ModelLimits``, ``ModelInfo``, ``CacheEnvelope``
- Infrastructure: pooled HTTP clients, timeouts, structured logging, fs helpers
"""

from .errors import ErrorCode, ProviderError, classify_exception
from .models import CacheEnvelope, ModelInfo, ModelLimits

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "CacheEnvelope",
    "ModelInfo",
    "ModelLimits",
]
