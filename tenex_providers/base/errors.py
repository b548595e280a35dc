"""Unified provider error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``tenex_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception

__all__ = ["ErrorCode", "RETRYABLE_CODES", "ProviderError", "classify_exception"]
