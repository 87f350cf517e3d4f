"""Durable, synchronous, namespaced key-value persistence.

Each namespace holds one JSON document: an array of records, or a single
object for singletons such as the profile. Writes replace the whole
document; merging happens in memory before ``write`` is called.
"""

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from enum import Enum
from typing import Any, Callable, Iterable, Protocol

from ..errors import StorageCorrupt, StorageWriteError
from .namespaces import MIGRATED_NAMESPACES

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def storage_key(namespace: str) -> str:
    """Plain string key for a namespace (enum members use their value)."""
    return namespace.value if isinstance(namespace, Enum) else namespace


class KeyValueBackend(Protocol):
    """Minimal string key-value storage (the shape of browser localStorage)."""

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def keys(self) -> list[str]:
        ...


class MemoryBackend:
    """In-process backend; contents vanish with the object."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class FileBackend:
    """One ``<key>.json`` file per key inside ``directory``.

    ``set_item`` writes a temporary file and renames it over the target, so
    a key is either fully replaced or left untouched.
    """

    suffix = ".json"

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}{self.suffix}"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{self.suffix}"))


class LocalStore:
    """Namespaced JSON persistence on top of a key-value backend."""

    def __init__(self, backend: KeyValueBackend | None = None):
        self.backend = backend if backend is not None else MemoryBackend()

    @classmethod
    def open(cls, directory: Path) -> "LocalStore":
        """Create a store persisted under ``directory``."""
        return cls(FileBackend(directory))

    # Reads

    def _load(self, namespace: str) -> Any:
        try:
            raw = self.backend.get_item(storage_key(namespace))
            if raw is None:
                return None
            return json.loads(raw)
        except (ValueError, TypeError, OSError) as e:
            raise StorageCorrupt(f"Namespace '{storage_key(namespace)}' is unreadable: {e}") from e

    def read(self, namespace: str) -> list[dict]:
        """Return the records stored under ``namespace``.

        Never fails: absent, malformed, or unexpectedly shaped data reads as
        an empty list. A stored single object reads as a one-element list.
        """
        try:
            value = self._load(namespace)
        except StorageCorrupt as e:
            logger.debug("Treating corrupt namespace as empty: %s", e)
            return []
        if isinstance(value, list):
            records = [r for r in value if isinstance(r, dict)]
            if len(records) != len(value):
                logger.debug(
                    "Dropped %d non-object entries from namespace '%s'",
                    len(value) - len(records),
                    storage_key(namespace),
                )
            return records
        if isinstance(value, dict):
            return [value]
        if value is not None:
            logger.debug(
                "Namespace '%s' holds a %s, treating as empty",
                storage_key(namespace),
                type(value).__name__,
            )
        return []

    def read_object(self, namespace: str) -> dict | None:
        """Return the single object stored under ``namespace``, if any."""
        try:
            value = self._load(namespace)
        except StorageCorrupt as e:
            logger.debug("Treating corrupt namespace as empty: %s", e)
            return None
        return value if isinstance(value, dict) else None

    def has(self, namespace: str) -> bool:
        try:
            return self.backend.get_item(storage_key(namespace)) is not None
        except (ValueError, OSError):
            # Present but unreadable
            return True

    # Writes

    def _dump(self, namespace: str, value: Any) -> None:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(f"Cannot serialize namespace '{storage_key(namespace)}': {e}") from e
        try:
            self.backend.set_item(storage_key(namespace), raw)
        except OSError as e:
            raise StorageWriteError(f"Cannot write namespace '{storage_key(namespace)}': {e}") from e

    def write(self, namespace: str, records: Iterable[dict]) -> None:
        """Replace the namespace with ``records``."""
        self._dump(namespace, list(records))

    def write_object(self, namespace: str, obj: dict) -> None:
        """Replace the namespace with a single object."""
        self._dump(namespace, obj)

    def upsert_by_key(
        self,
        namespace: str,
        record: dict,
        key_fn: Callable[[dict], Any],
        sort_key: Callable[[dict], Any] | None = None,
    ) -> None:
        """Replace the record whose key matches ``record``'s, or append it."""
        records = self.read(namespace)
        key = key_fn(record)
        for index, existing in enumerate(records):
            if key_fn(existing) == key:
                records[index] = record
                break
        else:
            records.append(record)

        if sort_key is not None:
            records.sort(key=sort_key)
        self.write(namespace, records)

    def remove(self, namespace: str, predicate: Callable[[dict], bool]) -> int:
        """Drop every record matching ``predicate``; returns how many."""
        records = self.read(namespace)
        kept = [r for r in records if not predicate(r)]
        removed = len(records) - len(kept)
        if removed:
            self.write(namespace, kept)
        return removed

    def clear(self, namespaces: Iterable[str]) -> None:
        """Delete the given namespace keys outright."""
        for namespace in namespaces:
            self.backend.remove_item(storage_key(namespace))

    # Export / import

    def export_json(self, namespaces: Iterable[str]) -> str:
        """Serialize the given namespaces into one JSON document."""
        data = {}
        for namespace in namespaces:
            key = storage_key(namespace)
            try:
                value = self._load(key)
            except StorageCorrupt:
                value = None
            if value is not None:
                data[key] = value
        return json.dumps(data, indent=2)

    def import_json(
        self, text: str, namespaces: Iterable[str] = MIGRATED_NAMESPACES
    ) -> list[str]:
        """Restore namespaces from an ``export_json`` document.

        Only keys listed in ``namespaces`` are restored; any other key is
        skipped. Returns the namespaces written.
        """
        allowed = {storage_key(ns) for ns in namespaces}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError("Invalid data format") from e
        if not isinstance(data, dict):
            raise ValueError("Invalid data format")

        written = []
        for key, value in data.items():
            if not isinstance(value, (list, dict)):
                raise ValueError("Invalid data format")
            if key not in allowed:
                logger.warning("Skipping unknown namespace '%s' on import", key)
                continue
            self._dump(key, value)
            written.append(key)
        return written
