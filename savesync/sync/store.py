# Savesync Record Store
# Durable keyed storage for saved-item records

import fcntl
import logging
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Protocol

import yaml

from savesync.errors import StoreError
from savesync.sync.item import SavedItem
from savesync.utils.paths import atomic_write, ensure_dir

logger = logging.getLogger(__name__)

STORE_VERSION = "1.0"


class RecordStore(Protocol):
    """Operations the engine needs from the local record store."""

    def find_by_id(self, item_id: str) -> Optional[SavedItem]: ...

    def update(self, item: SavedItem) -> None: ...

    def delete_by_id(self, item_id: str) -> None: ...

    def all(self) -> list[SavedItem]: ...

    def pending(self) -> list[SavedItem]: ...


class YamlRecordStore:
    """
    Record store persisted to a single YAML file.

    Every write rewrites the file atomically, so records survive process
    restarts and a crash never leaves a half-written file. Writes hold an
    exclusive lock on a sidecar ``.lock`` file and re-read the store file
    before applying the change, so several processes sharing one store
    never overwrite each other's records. Reads pick up the file again
    whenever another writer has replaced it. Records handed out are copies
    of the stored ones.
    """

    def __init__(self, path: Path):
        """
        Initialize store.

        Args:
            path: Path to the YAML store file. Created on first write.
        """
        self.path = path
        self.lock_path = path.with_name(f"{path.name}.lock")
        self._lock = threading.RLock()
        self._items: Optional[dict[str, SavedItem]] = None
        self._loaded_from: Optional[tuple[int, int, int]] = None

    @property
    def items(self) -> dict[str, SavedItem]:
        """Get stored records, loading from disk if the file changed."""
        with self._lock:
            signature = self._signature()
            if self._items is None or signature != self._loaded_from:
                self._items = self._load()
                self._loaded_from = signature
            return self._items

    def _signature(self) -> Optional[tuple[int, int, int]]:
        # Atomic replace gives every write a new inode
        try:
            stat = os.stat(self.path)
        except FileNotFoundError:
            return None
        return (stat.st_ino, stat.st_mtime_ns, stat.st_size)

    def _load(self) -> dict[str, SavedItem]:
        """Load records from file."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise StoreError(f"Corrupt store file {self.path}: {e}") from e
        except OSError as e:
            raise StoreError(f"Cannot read store file {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise StoreError(f"Store file {self.path} does not contain a mapping")

        items: dict[str, SavedItem] = {}
        for item_id, item_data in (data.get("items") or {}).items():
            item = SavedItem.from_dict({"id": item_id, **(item_data or {})})
            items[item.id] = item

        logger.debug("Loaded %d records from %s", len(items), self.path)
        return items

    def _save(self, items: dict[str, SavedItem]) -> None:
        """Write all records to file."""
        data = {
            "version": STORE_VERSION,
            "items": {
                item_id: {k: v for k, v in item.to_dict().items() if k != "id"}
                for item_id, item in sorted(items.items())
            },
        }
        try:
            atomic_write(
                self.path,
                yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True),
            )
        except OSError as e:
            raise StoreError(f"Cannot write store file {self.path}: {e}") from e

    @contextmanager
    def _writing(self) -> Iterator[dict[str, SavedItem]]:
        """
        Hold the store exclusively and yield records freshly read from disk.

        Changes made to the yielded mapping become the cached state only if
        the block completes; on any error the cache is dropped so the next
        access reads what is actually on disk.
        """
        with self._lock:
            try:
                ensure_dir(self.path.parent)
                handle = open(self.lock_path, "a")
            except OSError as e:
                raise StoreError(f"Cannot open lock file {self.lock_path}: {e}") from e

            with handle:
                fcntl.flock(handle, fcntl.LOCK_EX)
                try:
                    items = self._load()
                    try:
                        yield items
                    except BaseException:
                        self._items = None
                        raise
                    self._items = items
                    self._loaded_from = self._signature()
                finally:
                    fcntl.flock(handle, fcntl.LOCK_UN)

    def find_by_id(self, item_id: str) -> Optional[SavedItem]:
        """Get a copy of a record, or None if absent."""
        with self._lock:
            item = self.items.get(item_id)
            return item.copy() if item else None

    def update(self, item: SavedItem) -> None:
        """Replace (or insert) a record and persist."""
        with self._writing() as items:
            items[item.id] = item.copy()
            self._save(items)

    def delete_by_id(self, item_id: str) -> None:
        """Remove a record and persist. Deleting an absent id is a no-op."""
        with self._writing() as items:
            if items.pop(item_id, None) is not None:
                self._save(items)

    def all(self) -> list[SavedItem]:
        """Get copies of all records, ordered by id."""
        with self._lock:
            items = self.items
            return [items[key].copy() for key in sorted(items)]

    def pending(self) -> list[SavedItem]:
        """Get copies of records with outstanding remote work."""
        return [item for item in self.all() if item.is_pending]
