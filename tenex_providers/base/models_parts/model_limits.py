"""
ModelLimits DTO: a model's token capability ceiling.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass(frozen=True)
class ModelLimits:
    """Context window and maximum output tokens for a single model.

    Attributes:
        context: Context window size in tokens.
        output: Maximum output tokens.
    """

    context: int
    output: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


__all__ = ["ModelLimits"]
