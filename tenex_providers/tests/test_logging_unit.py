"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging

import pytest

from tenex_providers.base.log_support import JsonFormatter
from tenex_providers.base.logging import LogContext, configure_logger, get_logger, log_event


@pytest.fixture()
def console():
    """Swap the shared console handler for an in-memory stream."""
    base_logger = get_logger()
    saved = list(base_logger.handlers)
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, "_tenex_console_handler", True)
    handler.setLevel(base_logger.level)
    base_logger.handlers[:] = [handler]
    yield stream
    base_logger.handlers[:] = saved


def test_log_event_payload_drops_none_fields(console):
    logger = get_logger("tenex.test.events")

    log_event(
        logger,
        "models_dev.cache.load",
        LogContext(source="disk", extra={"attempt": 1}),
        providers=3,
        path=None,
    )

    payload = json.loads(console.getvalue().strip())
    assert payload == {"event": "models_dev.cache.load", "source": "disk", "attempt": 1, "providers": 3}


def test_log_event_respects_level(console):
    logger = get_logger("tenex.test.levels")
    configure_logger(level="WARNING")

    log_event(logger, "models_dev.cache.load", level=logging.DEBUG)
    assert console.getvalue() == ""

    log_event(logger, "models_dev.fetch.failed", level=logging.WARNING, detail="boom")
    assert json.loads(console.getvalue().strip())["detail"] == "boom"


def test_env_overrides_level(monkeypatch):
    monkeypatch.setenv("TENEX_LOG_LEVEL", "ERROR")
    logger = get_logger("tenex.test.env")
    assert not logger.isEnabledFor(logging.WARNING)
    assert logger.isEnabledFor(logging.ERROR)


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="tenex.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"source": "models.dev", "event": "models_dev.cache.refresh"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["source"] == "models.dev"
    assert payload["logger"] == "tenex.test.json"
    assert "msg" in payload


def test_json_formatter_drops_msg_for_cli_events() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="tenex.cli",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"event": "cli.models_dev", "command": "refresh"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["command"] == "refresh"
    assert "msg" not in payload


def test_child_logger_uses_parent_handler_without_duplicates(console) -> None:
    logger = get_logger("tenex.test.child")

    logger.info("alpha")
    lines = [ln for ln in console.getvalue().splitlines() if ln]
    assert lines == ["alpha"]


def test_configure_logger_file_handler(tmp_path) -> None:
    log_file = tmp_path / "logs" / "tenex.log"
    logger = configure_logger(level=logging.INFO, file_path=str(log_file))
    try:
        log_event(get_logger("tenex.test.file"), "models_dev.cache.refresh", mode="forced")
        for h in logger.handlers:
            h.flush()
        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["mode"] == "forced"
    finally:
        configure_logger(file_path=None)
