"""
Model Resolver: pure lookups against a models.dev snapshot.

Every function takes the snapshot as an argument and performs no I/O, so a
caller that reads the cache's snapshot reference once gets a consistent view
even while a refresh swaps in a new one.

Resolution order for ``(provider_id, model_id)``, first match wins:

1. Direct: the provider's mapped section contains ``model_id`` verbatim.
2. Vendor split: ``"vendor/bare"`` ids look up ``bare`` under the section
   literally named ``vendor``. Handles proxies (OpenRouter, agent runtimes)
   whose model ids embed the upstream vendor namespace.
3. Global scan: the first section, in snapshot order, containing
   ``model_id``. Cross-vendor collisions resolve to whichever section the
   catalogue lists first; there is no stronger precedence.

A miss is not an error; callers treat ``None`` as "capability unknown".
"""

from __future__ import annotations

from typing import Any, List, Mapping, NamedTuple, Optional

from ..base.models import ModelInfo, ModelLimits
from .provider_mapping import map_provider

Snapshot = Mapping[str, Any]


class ResolvedModel(NamedTuple):
    """A matched catalogue record and how it was found."""

    model_id: str
    data: Mapping[str, Any]
    via: str


def _section_models(snapshot: Snapshot, section_key: str) -> Optional[Mapping[str, Any]]:
    section = snapshot.get(section_key)
    if not isinstance(section, Mapping):
        return None
    models = section.get("models")
    return models if isinstance(models, Mapping) else None


def _lookup(models: Optional[Mapping[str, Any]], model_id: str) -> Optional[Mapping[str, Any]]:
    if models is None:
        return None
    record = models.get(model_id)
    return record if isinstance(record, Mapping) else None


def resolve_model_data(snapshot: Optional[Snapshot], provider_id: str, model_id: str) -> Optional[ResolvedModel]:
    """Return the best matching record for ``(provider_id, model_id)``."""
    if not snapshot or not model_id:
        return None

    mapped = map_provider(provider_id)
    if mapped is not None:
        record = _lookup(_section_models(snapshot, mapped), model_id)
        if record is not None:
            return ResolvedModel(model_id, record, "direct")

    if "/" in model_id:
        vendor, bare = model_id.split("/", 1)
        record = _lookup(_section_models(snapshot, vendor), bare)
        if record is not None:
            return ResolvedModel(bare, record, "vendor")

    for section_key in snapshot:
        record = _lookup(_section_models(snapshot, section_key), model_id)
        if record is not None:
            return ResolvedModel(model_id, record, "scan")

    return None


def _as_token_count(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _optional_mapping(value: Any) -> Optional[dict]:
    return dict(value) if isinstance(value, Mapping) else None


def _to_model_info(model_id: str, data: Mapping[str, Any]) -> ModelInfo:
    raw_id = data.get("id")
    raw_name = data.get("name")
    last_updated = data.get("last_updated")
    return ModelInfo(
        id=str(raw_id) if raw_id is not None else model_id,
        name=str(raw_name) if raw_name is not None else model_id,
        cost=_optional_mapping(data.get("cost")),
        limit=_optional_mapping(data.get("limit")),
        last_updated=last_updated if isinstance(last_updated, str) else None,
    )


def get_model_limits(snapshot: Optional[Snapshot], provider_id: str, model_id: str) -> Optional[ModelLimits]:
    """Return ``ModelLimits`` only when both ``context`` and ``output`` are known."""
    resolved = resolve_model_data(snapshot, provider_id, model_id)
    if resolved is None:
        return None
    limit = resolved.data.get("limit")
    if not isinstance(limit, Mapping):
        return None
    context = _as_token_count(limit.get("context"))
    output = _as_token_count(limit.get("output"))
    if context is None or output is None:
        return None
    return ModelLimits(context=context, output=output)


def get_context_window(snapshot: Optional[Snapshot], provider_id: str, model_id: str) -> Optional[int]:
    limits = get_model_limits(snapshot, provider_id, model_id)
    return limits.context if limits is not None else None


def get_model_info(snapshot: Optional[Snapshot], provider_id: str, model_id: str) -> Optional[ModelInfo]:
    """Return the full record; ``id``/``name`` default to the matched key."""
    resolved = resolve_model_data(snapshot, provider_id, model_id)
    if resolved is None:
        return None
    return _to_model_info(resolved.model_id, resolved.data)


def get_provider_models(snapshot: Optional[Snapshot], provider_id: str) -> List[ModelInfo]:
    """Return every model in the provider's mapped section, newest first.

    Only the direct mapping applies here. Ordering is ``last_updated``
    descending by plain string comparison, missing dates last; ties keep
    catalogue order.
    """
    if not snapshot:
        return []
    mapped = map_provider(provider_id)
    if mapped is None:
        return []
    models = _section_models(snapshot, mapped)
    if models is None:
        return []
    infos = [
        _to_model_info(str(model_id), data)
        for model_id, data in models.items()
        if isinstance(data, Mapping)
    ]
    return sorted(infos, key=lambda info: info.last_updated or "", reverse=True)


__all__ = [
    "ResolvedModel",
    "resolve_model_data",
    "get_model_limits",
    "get_context_window",
    "get_model_info",
    "get_provider_models",
]
