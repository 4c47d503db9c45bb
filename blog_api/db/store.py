"""
Flat-file storage: one JSON document per resource collection.

Every read returns the whole collection and every write replaces the whole
file. Writers to the same resource are serialized with a per-resource lock so
a load -> mutate -> save sequence cannot lose a concurrent update inside this
process. New ids come from a per-resource counter file that never goes back,
so a session token naming a deleted user cannot resolve to a newer account.
"""

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

from blog_api.core.config import settings
from blog_api.core.errors import StorageError
from blog_api.core.logging import get_logger

logger = get_logger(__name__)

Record = Dict[str, Any]


class JsonFileStore:
    """
    Persists resource collections as ``<base_path>/<resource>.json``.

    Each file holds a top-level JSON array of records.
    """

    def __init__(self, base_path: Path | str):
        self.base_path = Path(base_path)
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def path_for(self, resource: str) -> Path:
        return self.base_path / f"{resource}.json"

    def exists(self, resource: str) -> bool:
        return self.path_for(resource).is_file()

    def load(self, resource: str) -> List[Record]:
        """
        Read the full collection for a resource.

        Args:
            resource: Collection name (users, posts, comments)

        Returns:
            List of records; empty if the file does not exist yet

        Raises:
            StorageError: If the file cannot be read or is not a JSON array
        """
        path = self.path_for(resource)
        if not path.exists():
            return []

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed JSON in {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Expected a JSON array in {path}, got {type(data).__name__}")
        return data

    def save(self, resource: str, records: List[Record]) -> None:
        """
        Replace the persisted collection for a resource.

        The data is written to a temporary file first and moved over the
        target, so readers never observe a half-written document.

        Raises:
            StorageError: If serialization or the write fails
        """
        path = self.path_for(resource)
        self._write(path, records, prefix=f".{resource}.")
        logger.debug(f"Saved {len(records)} record(s) to {path}")

    def _write(self, path: Path, data: Any, prefix: str) -> None:
        try:
            payload = json.dumps(data, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialize {path.name}: {e}") from e

        tmp_name = None
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=prefix, suffix=".tmp", dir=self.base_path)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def meta_path_for(self, resource: str) -> Path:
        return self.base_path / f"{resource}.meta.json"

    def last_id(self, resource: str) -> int:
        """Highest id ever issued for a resource (0 before the first one)."""
        path = self.meta_path_for(resource)
        if not path.exists():
            return 0
        try:
            with path.open("r", encoding="utf-8") as f:
                meta = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed JSON in {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

        value = meta.get("lastId") if isinstance(meta, dict) else None
        if not isinstance(value, int):
            raise StorageError(f"Expected an integer lastId in {path}")
        return value

    def allocate_id(self, resource: str, records: List[Record]) -> int:
        """
        Issue the next id for a resource.

        Ids only move forward: a deleted record's id is never handed out
        again, even when it was the highest one. The counter lives in
        ``<resource>.meta.json``; call this while holding ``locked(resource)``.

        Args:
            resource: Collection name
            records: Current collection, so ids written by hand are skipped too

        Raises:
            StorageError: If the counter file is unreadable or cannot be written
        """
        new_id = max(self.last_id(resource), max_id(records)) + 1
        self._write(self.meta_path_for(resource), {"lastId": new_id}, prefix=f".{resource}.meta.")
        return new_id

    @contextmanager
    def locked(self, resource: str) -> Iterator[None]:
        """Hold the write lock of one resource for a read-modify-write."""
        with self._locks_guard:
            lock = self._locks.setdefault(resource, threading.Lock())
        with lock:
            yield

    def ping(self) -> bool:
        """Check that the data directory exists (or can be created) and is writable."""
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.base_path, os.W_OK)


_store = JsonFileStore(settings.data_path)


def get_store() -> JsonFileStore:
    """
    Dependency that provides the process-wide store for FastAPI routes.

    Tests override it with a store rooted in a temporary directory.
    """
    return _store


def max_id(records: List[Record]) -> int:
    """Largest integer id present in a collection, 0 when there is none."""
    ids = [r["id"] for r in records if isinstance(r.get("id"), int)]
    return max(ids, default=0)
