"""Pytest configuration for the tenex_providers test suite.

Isolates every test from the user's real ``~/.tenex`` directory and from the
process-wide default cache, and wires test doubles from
``tenex_providers.tests.helpers`` into fixtures.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List

import pytest

from tenex_providers.tests.helpers import FakeClock, FakeFetcher, RecordingStore, make_snapshot


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point TENEX at a temp dir and reset process-wide caches around each test."""
    from tenex_providers import models_dev
    from tenex_providers.base.http import close_all_clients
    from tenex_providers.base.logging import configure_logger
    from tenex_providers.config import reset_config_cache

    monkeypatch.setenv("TENEX_BASE_DIR", str(tmp_path / "tenex-home"))
    for name in (
        "TENEX_CONFIG_FILE",
        "TENEX_MODELS_DEV_URL",
        "TENEX_MODELS_DEV_STALE_SECONDS",
        "TENEX_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    models_dev.set_default_cache(None)
    yield
    models_dev.set_default_cache(None)
    reset_config_cache()
    close_all_clients()
    configure_logger(level=logging.INFO)


@pytest.fixture()
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Collect records reaching the shared ``tenex`` logger (it does not propagate to root)."""
    from tenex_providers.base.logging import get_logger

    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = records.append  # type: ignore[method-assign]
    base = get_logger()
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)


@pytest.fixture()
def snapshot() -> Dict[str, Any]:
    return make_snapshot()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def cache_file(tmp_path):
    return tmp_path / "cache" / "models-dev.json"


@pytest.fixture()
def store(cache_file) -> RecordingStore:
    from tenex_providers.models_dev.store import DiskCacheStore

    return RecordingStore(DiskCacheStore(cache_file))


@pytest.fixture()
def make_cache(store, fetcher, clock):
    """Factory building a ModelsDevCache wired to the test doubles."""
    from tenex_providers.models_dev.cache import ModelsDevCache

    created = []

    def _make(**kwargs):
        kwargs.setdefault("store", store)
        kwargs.setdefault("fetcher", fetcher)
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("stale_after_seconds", 24 * 60 * 60)
        cache = ModelsDevCache(**kwargs)
        created.append(cache)
        return cache

    yield _make
    if fetcher.gate is not None:
        fetcher.gate.set()
    for cache in created:
        cache.wait_for_background_refresh(timeout=5)
