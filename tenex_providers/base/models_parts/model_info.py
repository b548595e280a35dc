"""
ModelInfo DTO for models.dev catalogue entries.

Represents a single model record as published by models.dev. ``cost`` and
``limit`` are carried exactly as published (``limit`` may be partial); use
``ModelsDevCache.get_model_limits`` when both limits are required.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class ModelInfo:
    """A single model catalogue entry.

    Attributes:
        id: Model identifier (defaults to the catalogue key when absent).
        name: Human-friendly display name (defaults to the catalogue key).
        cost: Optional ``{"input": float, "output": float}`` prices per
            million tokens.
        limit: Optional ``{"context": int, "output": int}`` mapping; either
            key may be missing.
        last_updated: Optional ``YYYY-MM-DD`` string from the catalogue.
    """

    id: str
    name: str
    cost: Optional[Dict[str, Any]] = None
    limit: Optional[Dict[str, Any]] = None
    last_updated: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = [
    "ModelInfo",
]
