"""
Disk Cache Store for models.dev snapshots.

Persists a :class:`CacheEnvelope` as a single JSON file. Reads are lenient:
a missing, unreadable, malformed or schema-invalid file all mean "no disk
cache" so the loader falls through to the network. Writes propagate their
errors; the loader decides whether they matter.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..base.logging import LogContext, get_logger, log_event
from ..base.models import CacheEnvelope
from ..base.utils.fs import read_json_file, resolve_path, write_json_file
from ..config import get_config_path
from ..config.defaults import MODELS_DEV_CACHE_FILE_NAME, MODELS_DEV_CACHE_SUBDIR

_logger = get_logger("tenex.models_dev.store")


def default_cache_file() -> str:
    """Return ``<base dir>/cache/models-dev.json``."""
    return os.path.join(get_config_path(MODELS_DEV_CACHE_SUBDIR), MODELS_DEV_CACHE_FILE_NAME)


class DiskCacheStore:
    """Read and write the persisted models.dev envelope at ``path``."""

    def __init__(self, path: "str | os.PathLike[str]") -> None:
        self._path = resolve_path(path)

    @classmethod
    def default(cls) -> "DiskCacheStore":
        return cls(default_cache_file())

    @property
    def path(self) -> str:
        return str(self._path)

    def load(self) -> Optional[CacheEnvelope]:
        """Return the persisted envelope, or ``None`` when unusable."""
        try:
            raw = read_json_file(self._path)
        except (OSError, ValueError) as exc:
            self._log_unusable(exc)
            return None
        if raw is None:
            return None
        try:
            return CacheEnvelope.model_validate(raw)
        except ValidationError as exc:
            self._log_unusable(exc)
            return None

    def save(self, data: Dict[str, Any], fetched_at_ms: int) -> CacheEnvelope:
        """Persist ``data`` stamped with ``fetched_at_ms`` and return the envelope."""
        envelope = CacheEnvelope(fetchedAt=fetched_at_ms, data=data)
        write_json_file(self._path, envelope.to_json_dict())
        return envelope

    def _log_unusable(self, exc: Exception) -> None:
        log_event(
            _logger,
            "models_dev.store.unusable",
            LogContext(source="disk"),
            level=logging.WARNING,
            path=self.path,
            failure_class=type(exc).__name__,
            detail=str(exc)[:300],
        )


__all__ = ["DiskCacheStore", "default_cache_file"]
