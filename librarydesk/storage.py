"""Reading and writing the JSON files that hold resources, history and users."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from .models import HistoryEntry, Resource, User


class StorageError(Exception):
    """A data file could not be read or written."""


def _write_array(path: str | Path, items: list[dict[str, Any]]) -> None:
    try:
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(items, handle, indent=4, ensure_ascii=False)
            handle.write("\n")
    except OSError as exc:
        raise StorageError(f"Could not open {path} for writing.") from exc


def _read_array(path: str | Path, what: str) -> list[Any]:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(f"Could not open {path} for reading.") from exc
    try:
        data = json.loads(text)
    except ValueError:
        data = None
    if not isinstance(data, list):
        raise StorageError(f"Invalid or corrupted {what} file.")
    return data


def _as_object(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def save_resources(path: str | Path, resources: Iterable[Resource]) -> None:
    """Write resources as a JSON array."""
    _write_array(path, [resource.to_json() for resource in resources])


def load_resources(path: str | Path) -> list[Resource]:
    """Read resources, skipping entries whose category is unknown."""
    resources = []
    for value in _read_array(path, "resource"):
        try:
            resources.append(Resource.from_json(_as_object(value)))
        except ValueError:
            continue
    return resources


def save_history(path: str | Path, history: Iterable[HistoryEntry]) -> None:
    """Write history entries as a JSON array."""
    _write_array(path, [entry.to_json() for entry in history])


def load_history(path: str | Path) -> list[HistoryEntry]:
    """Read history entries."""
    return [HistoryEntry.from_json(_as_object(value)) for value in _read_array(path, "history")]


def save_users(path: str | Path, users: Iterable[User]) -> None:
    """Write users as a JSON array."""
    _write_array(path, [user.to_json() for user in users])


def load_users(path: str | Path) -> list[User]:
    """Read users; a missing or malformed file yields an empty list."""
    try:
        data = _read_array(path, "user")
    except StorageError:
        return []
    return [User.from_json(_as_object(value)) for value in data]