"""
models.dev metadata cache (stale-while-revalidate).

Purpose
-------
Serve model capability data (context window, output limit, pricing) from an
in-memory snapshot that is loaded from disk when possible and from
https://models.dev/api.json otherwise. Once any snapshot is available,
callers never wait on the network again: stale data is served while a
background thread refreshes it.

Concurrency
-----------
- All state transitions happen under one ``threading.RLock``.
- A cold-start load is represented by a single shared
  ``concurrent.futures.Future``; concurrent callers wait on it instead of
  starting their own, so at most one cold load runs per instance.
- At most one background refresh thread runs per instance and generation.
  Its failures are caught and logged inside the thread.
- The snapshot is replaced by a single reference assignment, never mutated,
  so lookups see either the old or the new snapshot in full.
- ``clear_cache`` bumps a generation counter; loads and refreshes started
  before the clear do not repopulate the cache afterwards.

Failure semantics
-----------------
- ``ensure_cache_loaded`` never raises. Without metadata every lookup
  returns ``None`` ("capability unknown").
- ``refresh_cache`` is the only operation that surfaces errors, as
  :class:`ProviderError`.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..base.errors import RETRYABLE_CODES, ProviderError, classify_exception
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ModelInfo, ModelLimits
from ..config import get_models_dev_config
from . import resolver
from .fetcher import SOURCE, fetch_models_dev
from .store import DiskCacheStore

Fetcher = Callable[[], Dict[str, Any]]
Clock = Callable[[], float]

_logger = get_logger("tenex.models_dev")


class ModelsDevCache:
    """In-memory models.dev snapshot with disk persistence and background refresh.

    Parameters
    ----------
    store:
        Disk cache store; defaults to ``<base dir>/cache/models-dev.json``.
    fetcher:
        Zero-argument callable returning a fresh snapshot and raising on
        failure; defaults to :func:`fetch_models_dev`.
    stale_after_seconds:
        Age beyond which a snapshot is refreshed in the background; defaults
        to the configured value (24h).
    clock:
        Wall-clock source in seconds since the epoch.
    """

    def __init__(
        self,
        store: Optional[DiskCacheStore] = None,
        fetcher: Optional[Fetcher] = None,
        *,
        stale_after_seconds: Optional[float] = None,
        clock: Clock = time.time,
    ) -> None:
        if stale_after_seconds is None:
            stale_after_seconds = get_models_dev_config()["stale_after_seconds"]
        self._store = store if store is not None else DiskCacheStore.default()
        self._fetcher: Fetcher = fetcher if fetcher is not None else fetch_models_dev
        self._stale_after = float(stale_after_seconds)
        self._clock = clock

        self._lock = threading.RLock()
        self._snapshot: Optional[Dict[str, Any]] = None
        self._fetched_at: Optional[float] = None
        self._inflight: Optional[Future] = None
        self._refresh_thread: Optional[threading.Thread] = None
        self._refresh_generation = 0
        self._generation = 0

    # ------------------------------------------------------------------ state
    @property
    def store(self) -> DiskCacheStore:
        return self._store

    @property
    def snapshot(self) -> Optional[Mapping[str, Any]]:
        """The current snapshot (treat as read-only), or ``None``."""
        return self._snapshot

    @property
    def fetched_at(self) -> Optional[float]:
        """Fetch time of the current snapshot in epoch seconds."""
        return self._fetched_at

    @property
    def stale_after_seconds(self) -> float:
        return self._stale_after

    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def is_stale(self) -> bool:
        """True when no fetch time is known or it is older than the threshold."""
        with self._lock:
            return self._is_stale_locked()

    def _is_stale_locked(self) -> bool:
        if self._fetched_at is None:
            return True
        return (self._clock() - self._fetched_at) > self._stale_after

    def _adopt_locked(self, data: Dict[str, Any], fetched_at: float) -> None:
        self._snapshot = data
        self._fetched_at = fetched_at

    # ---------------------------------------------------------------- loading
    def ensure_cache_loaded(self) -> None:
        """Make sure a snapshot is available, loading or refreshing as needed.

        - Load in flight: wait for it.
        - Snapshot present: return at once, starting a background refresh
          first when it is stale.
        - Cold: adopt the disk snapshot (even if stale, refreshing it in the
          background) or, with nothing on disk, fetch synchronously.

        Never raises; failures are logged and leave the cache empty.
        """
        with self._lock:
            inflight = self._inflight
            owner = inflight is None
            if owner:
                if self._snapshot is not None:
                    if self._is_stale_locked():
                        self._start_background_refresh_locked()
                    return
                inflight = Future()
                self._inflight = inflight
                generation = self._generation

        if not owner:
            inflight.result()
            return

        try:
            self._cold_load(generation)
        except Exception as exc:  # noqa: BLE001 - cold load must not raise
            self._log_failure("cold_start", exc)
        finally:
            with self._lock:
                if self._inflight is inflight:
                    self._inflight = None
            inflight.set_result(None)

    def _cold_load(self, generation: int) -> None:
        envelope = self._store.load()
        if envelope is not None:
            with self._lock:
                if generation != self._generation:
                    return
                self._adopt_locked(envelope.data, envelope.fetched_at_seconds)
                stale = self._is_stale_locked()
                if stale:
                    self._start_background_refresh_locked()
            log_event(
                _logger,
                "models_dev.cache.load",
                LogContext(source="disk"),
                level=logging.DEBUG,
                path=self._store.path,
                providers=len(envelope.data),
                stale=stale,
            )
            return

        log_event(
            _logger,
            "models_dev.cache.miss",
            LogContext(source="disk"),
            level=logging.DEBUG,
            path=self._store.path,
        )
        try:
            data = self._fetcher()
        except Exception as exc:  # noqa: BLE001 - degrade to "no metadata"
            self._log_failure("cold_start", exc)
            log_event(
                _logger,
                "models_dev.cache.unavailable",
                LogContext(source=SOURCE),
                level=logging.WARNING,
                detail="model limits will be unavailable",
            )
            return

        fetched_at = self._clock()
        with self._lock:
            if generation != self._generation:
                return
            self._adopt_locked(data, fetched_at)
        try:
            self._store.save(data, _to_millis(fetched_at))
        except OSError as exc:
            self._log_write_failure("cold_start", exc)
        log_event(
            _logger,
            "models_dev.cache.load",
            LogContext(source=SOURCE),
            level=logging.DEBUG,
            providers=len(data),
        )

    # -------------------------------------------------------------- refreshing
    def _start_background_refresh_locked(self) -> None:
        running = self._refresh_thread
        if (
            running is not None
            and running.is_alive()
            and self._refresh_generation == self._generation
        ):
            return
        thread = threading.Thread(
            target=self._background_refresh,
            args=(self._generation,),
            name="models-dev-refresh",
            daemon=True,
        )
        self._refresh_thread = thread
        self._refresh_generation = self._generation
        thread.start()

    def _background_refresh(self, generation: int) -> None:
        try:
            data = self._fetcher()
        except Exception as exc:  # noqa: BLE001 - detached thread; previous snapshot stays
            self._log_failure("background_refresh", exc)
            return
        fetched_at = self._clock()
        with self._lock:
            if generation != self._generation:
                return
            self._adopt_locked(data, fetched_at)
        try:
            self._store.save(data, _to_millis(fetched_at))
        except Exception as exc:  # noqa: BLE001 - detached thread; snapshot already adopted
            self._log_write_failure("background_refresh", exc)
        log_event(
            _logger,
            "models_dev.cache.refresh",
            LogContext(source=SOURCE),
            level=logging.DEBUG,
            mode="background",
            providers=len(data),
        )

    def wait_for_background_refresh(self, timeout: Optional[float] = None) -> bool:
        """Join the running background refresh, if any.

        Returns ``True`` when no refresh is running anymore.
        """
        thread = self._refresh_thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def refresh_cache(self) -> None:
        """Fetch, adopt and persist a fresh snapshot synchronously.

        Raises
        ------
        ProviderError
            When the fetch fails; the current snapshot is left untouched.
        OSError
            When the snapshot was fetched and adopted but could not be
            written to disk.
        """
        try:
            data = self._fetcher()
        except Exception as exc:
            code = classify_exception(exc)
            self._log_failure("forced_refresh", exc)
            raise ProviderError(
                code=code,
                message=f"Failed to refresh models.dev cache: {exc}",
                provider=SOURCE,
                retryable=code in RETRYABLE_CODES,
                raw=exc,
            ) from exc
        fetched_at = self._clock()
        with self._lock:
            self._adopt_locked(data, fetched_at)
        try:
            self._store.save(data, _to_millis(fetched_at))
        except OSError as exc:
            self._log_write_failure("forced_refresh", exc)
            raise
        log_event(
            _logger,
            "models_dev.cache.refresh",
            LogContext(source=SOURCE),
            mode="forced",
            providers=len(data),
            path=self._store.path,
        )

    def clear_cache(self) -> None:
        """Drop the in-memory snapshot and any in-flight load marker.

        The disk file is left in place; the next ``ensure_cache_loaded``
        reloads from it.
        """
        with self._lock:
            self._snapshot = None
            self._fetched_at = None
            self._inflight = None
            self._generation += 1

    # ----------------------------------------------------------------- lookups
    def get_model_limits(self, provider_id: str, model_id: str) -> Optional[ModelLimits]:
        return resolver.get_model_limits(self._snapshot, provider_id, model_id)

    def get_context_window(self, provider_id: str, model_id: str) -> Optional[int]:
        return resolver.get_context_window(self._snapshot, provider_id, model_id)

    def get_model_info(self, provider_id: str, model_id: str) -> Optional[ModelInfo]:
        return resolver.get_model_info(self._snapshot, provider_id, model_id)

    def get_provider_models(self, provider_id: str) -> List[ModelInfo]:
        return resolver.get_provider_models(self._snapshot, provider_id)

    # ----------------------------------------------------------------- helpers
    def _log_failure(self, operation: str, exc: Exception) -> None:
        log_event(
            _logger,
            "models_dev.fetch.failed",
            LogContext(source=SOURCE),
            level=logging.WARNING,
            operation=operation,
            error_code=classify_exception(exc).value,
            failure_class=type(exc).__name__,
            detail=str(exc)[:300],
        )

    def _log_write_failure(self, operation: str, exc: Exception) -> None:
        log_event(
            _logger,
            "models_dev.store.write_failed",
            LogContext(source="disk"),
            level=logging.WARNING,
            operation=operation,
            path=self._store.path,
            failure_class=type(exc).__name__,
            detail=str(exc)[:300],
        )


def _to_millis(seconds: float) -> int:
    return int(seconds * 1000)


__all__ = ["ModelsDevCache"]
