"""
CacheEnvelope: the persisted form of a models.dev snapshot.

On disk the envelope is ``{"fetchedAt": <unix ms>, "data": <snapshot>}``.
``fetchedAt`` is the only input to staleness decisions; the file's mtime is
never consulted since copies and backups rewrite it.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` validates envelopes read back from disk so a
  truncated or foreign file is rejected instead of half-adopted.
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class CacheEnvelope(BaseModel):
    """Snapshot plus the wall-clock time (milliseconds) it was fetched."""

    model_config = ConfigDict(populate_by_name=True)

    fetched_at: int = Field(alias="fetchedAt", ge=0)
    data: Dict[str, Any]

    @property
    def fetched_at_seconds(self) -> float:
        return self.fetched_at / 1000.0

    def to_json_dict(self) -> Dict[str, Any]:
        """Return the on-disk representation (camelCase keys)."""
        return self.model_dump(by_alias=True)


__all__ = ["CacheEnvelope"]
