"""Shared test doubles: a sample models.dev snapshot, a fake fetcher, a
fake clock and a recording wrapper around the disk store.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from typing import Any, Dict, List, Optional


SAMPLE_SNAPSHOT: Dict[str, Any] = {
    "anthropic": {
        "id": "anthropic",
        "name": "Anthropic",
        "models": {
            "claude-opus-4-5-20251101": {
                "id": "claude-opus-4-5-20251101",
                "name": "Claude Opus 4.5",
                "cost": {"input": 5, "output": 25},
                "limit": {"context": 200000, "output": 64000},
                "last_updated": "2025-11-01",
            },
            "claude-haiku-4-5": {
                "name": "Claude Haiku 4.5",
                "limit": {"context": 200000, "output": 64000},
                "last_updated": "2025-10-15",
            },
            "claude-partial": {
                "id": "claude-partial",
                "name": "Partial limits",
                "limit": {"context": 100000},
            },
        },
    },
    "openai": {
        "id": "openai",
        "models": {
            "gpt-4o": {
                "id": "gpt-4o",
                "name": "GPT-4o",
                "cost": {"input": 2.5, "output": 10},
                "limit": {"context": 128000, "output": 16384},
                "last_updated": "2024-08-06",
            },
            "gpt-5": {
                "id": "gpt-5",
                "name": "GPT-5",
                "limit": {"context": 400000, "output": 128000},
                "last_updated": "2025-08-07",
            },
        },
    },
    "openrouter": {
        "id": "openrouter",
        "models": {
            "anthropic/claude-sonnet-4": {
                "id": "anthropic/claude-sonnet-4",
                "name": "Claude Sonnet 4 (OpenRouter)",
                "limit": {"context": 200000, "output": 64000},
            },
        },
    },
    "google": {
        "id": "google",
        "models": {
            "gemini-2.5-pro": {
                "id": "gemini-2.5-pro",
                "name": "Gemini 2.5 Pro",
                "limit": {"context": 1048576, "output": 65536},
            },
        },
    },
}


def make_snapshot() -> Dict[str, Any]:
    """Return a deep copy of the sample snapshot safe to mutate per test."""
    return copy.deepcopy(SAMPLE_SNAPSHOT)


class FakeClock:
    """Manually advanced wall clock (seconds since the epoch)."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Thread-safe fetcher double counting calls.

    ``gate`` (when set) blocks each call until released; ``started`` is set
    as soon as a call begins; ``error`` makes every call raise it.
    """

    def __init__(self, payload: Optional[Dict[str, Any]] = None, *, error: Optional[Exception] = None) -> None:
        self.payload = payload if payload is not None else make_snapshot()
        self.error = error
        self.gate: Optional[threading.Event] = None
        self.started = threading.Event()
        self.calls = 0
        self._lock = threading.Lock()

    def hold(self) -> threading.Event:
        self.gate = threading.Event()
        return self.gate

    def __call__(self) -> Dict[str, Any]:
        with self._lock:
            self.calls += 1
        self.started.set()
        if self.gate is not None:
            assert self.gate.wait(timeout=5), "fetch gate was never released"
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.payload)


class RecordingStore:
    """Wraps a real DiskCacheStore and records loads and saves.

    ``save_error`` (when set) is raised by every save after it is recorded.
    """

    def __init__(self, inner) -> None:
        self.inner = inner
        self.loads = 0
        self.saves: List[int] = []
        self.save_error: Optional[Exception] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self.inner.path

    def load(self):
        with self._lock:
            self.loads += 1
        return self.inner.load()

    def save(self, data, fetched_at_ms):
        with self._lock:
            self.saves.append(fetched_at_ms)
        if self.save_error is not None:
            raise self.save_error
        return self.inner.save(data, fetched_at_ms)


def logged_events(records: List[logging.LogRecord]) -> List[Dict[str, Any]]:
    """Decode the JSON payloads emitted by ``log_event``."""
    events = []
    for record in records:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            continue
        if isinstance(payload, dict):
            events.append(payload)
    return events
