"""Filesystem helpers used by the disk cache store.

All functions accept ``str`` or ``os.PathLike`` paths and expand ``~``.
Absent paths are reported as ``False``/``None`` rather than raised; every
other ``OSError`` (permissions, I/O) propagates to the caller, as do JSON
decoding errors from :func:`read_json_file`.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


def resolve_path(path: PathLike) -> Path:
    return Path(os.path.expanduser(os.fspath(path)))


def ensure_directory(path: PathLike) -> None:
    """Create ``path`` (and parents) if it does not already exist."""
    resolve_path(path).mkdir(parents=True, exist_ok=True)


def file_exists(path: PathLike) -> bool:
    """Return True when ``path`` exists and is a regular file."""
    return resolve_path(path).is_file()


def get_file_stats(path: PathLike) -> Optional[os.stat_result]:
    """Return ``os.stat`` for ``path`` or ``None`` when it does not exist."""
    try:
        return resolve_path(path).stat()
    except FileNotFoundError:
        return None


def read_json_file(path: PathLike) -> Optional[Any]:
    """Load and decode a JSON file.

    Returns:
        The decoded value, or ``None`` when the file does not exist.

    Raises:
        json.JSONDecodeError / UnicodeDecodeError: When the file is not valid
            UTF-8 JSON.
        OSError: For any filesystem error other than a missing file.
    """
    try:
        with resolve_path(path).open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        return None


def write_json_file(path: PathLike, value: Any, *, indent: Optional[int] = 2) -> None:
    """Serialize ``value`` as JSON and atomically replace ``path``.

    The payload is written to a temporary sibling file first and then moved
    into place with ``os.replace`` so concurrent readers never observe a
    partially written document.
    """
    target = resolve_path(path)
    ensure_directory(target.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(value, fh, indent=indent, ensure_ascii=False)
        os.replace(tmp_name, target)
    except BaseException:
        _discard_temp(tmp_name)
        raise


def _discard_temp(path: str) -> None:
    """Remove a leftover temporary file, ignoring a concurrent removal."""
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


__all__ = [
    "resolve_path",
    "ensure_directory",
    "file_exists",
    "get_file_stats",
    "read_json_file",
    "write_json_file",
]
