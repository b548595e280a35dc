"""Static translation from TENEX provider ids to models.dev provider ids.

``None`` marks providers that have no models.dev section (local daemons and
agent runtimes that proxy other vendors). The mapping is read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

PROVIDER_MAPPING: Mapping[str, Optional[str]] = MappingProxyType(
    {
        "anthropic": "anthropic",
        "openai": "openai",
        "openrouter": "openrouter",
        "ollama": None,
        "claude-code": None,
        "codex-app-server": None,
    }
)


def normalize_provider_id(provider_id: Optional[str]) -> str:
    return (provider_id or "").strip().lower()


def map_provider(provider_id: Optional[str]) -> Optional[str]:
    """Return the models.dev section key for ``provider_id``.

    Unknown providers and providers explicitly mapped to ``None`` both
    return ``None``.
    """
    return PROVIDER_MAPPING.get(normalize_provider_id(provider_id))


__all__ = ["PROVIDER_MAPPING", "normalize_provider_id", "map_provider"]
