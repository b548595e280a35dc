"""
models.dev catalogue fetcher (Remote Metadata Source).

Downloads ``api.json`` through the shared pooled ``httpx`` client. The
function raises on every failure (transport error, non-2xx status, non-JSON
or non-object payload); deciding whether a failure is fatal is the cache's
job, not the fetcher's.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..config import get_models_dev_config

SOURCE = "models.dev"
_logger = get_logger("tenex.models_dev.fetcher")


def fetch_models_dev(url: Optional[str] = None) -> Dict[str, Any]:
    """Fetch the full models.dev snapshot.

    Parameters
    ----------
    url:
        Optional override for the catalogue URL; defaults to the configured
        ``api_url``.

    Returns
    -------
    Dict[str, Any]
        Mapping of provider id -> provider section, in document order.

    Raises
    ------
    httpx.HTTPError
        On transport failures or non-2xx responses.
    ValueError
        When the body is not JSON or not a JSON object.
    """
    target = url or get_models_dev_config()["api_url"]
    client = get_httpx_client(None, purpose="models_dev")
    response = client.get(target, headers={"Accept": "application/json"})
    if response.is_error:
        log_event(
            _logger,
            "models_dev.fetch.http_error",
            LogContext(source=SOURCE),
            level=logging.WARNING,
            status=response.status_code,
            reason=response.reason_phrase,
            url=target,
        )
        response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError(f"models.dev payload is {type(payload).__name__}, expected object")
    log_event(
        _logger,
        "models_dev.fetch.ok",
        LogContext(source=SOURCE),
        level=logging.DEBUG,
        providers=len(payload),
    )
    return payload


__all__ = ["fetch_models_dev", "SOURCE"]
