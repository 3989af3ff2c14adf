"""
rentshop/core/local_storage.py
Durable key/value storage for store snapshots: one JSON file per key under a directory.

Behaviour
- `LocalStorage(None)` (or an empty path) is "unavailable": reads return None, writes are dropped.
- Writes go through a temp file + os.replace so a crash never leaves half a snapshot.
- Snapshots are a best-effort cache, not a source of truth: unreadable or unwritable
  files are logged and treated as missing.
"""
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger("rentshop.storage")

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class LocalStorage:
    def __init__(self, directory: Optional[str]):
        self._root: Optional[Path] = Path(directory) if directory else None
        if self._root is not None:
            try:
                self._root.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.warning("Local storage disabled, cannot create %s: %s", self._root, exc)
                self._root = None

    @property
    def available(self) -> bool:
        return self._root is not None

    def _path(self, key: str) -> Path:
        return self._root / f"{_SAFE_KEY.sub('_', key)}.json"

    def get_item(self, key: str) -> Optional[Any]:
        if self._root is None:
            return None
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable snapshot %r: %s", key, exc)
            return None

    def set_item(self, key: str, value: Any) -> None:
        if self._root is None:
            return
        path = self._path(key)
        tmp = None
        try:
            fd, tmp = tempfile.mkstemp(dir=self._root, prefix=f".{path.stem}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(value, fh, ensure_ascii=False)
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Snapshot %r not written: %s", key, exc)
            if tmp is not None:
                try:
                    os.unlink(tmp)
                except FileNotFoundError:
                    pass

    def remove_item(self, key: str) -> None:
        if self._root is None:
            return
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Snapshot %r not removed: %s", key, exc)
