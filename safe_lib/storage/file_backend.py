"""Simple file-backed storage backend.

This backend stores each value as UTF-8 text under `<data_dir>/<key>.slot`
and backs the local scope, so slots survive process restarts. It provides
atomic writes by writing to a temporary file then renaming.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import quote, unquote

from .base import QuotaExceededError, StorageBackend

logger = logging.getLogger(__name__)

SUFFIX = ".slot"


class FileStorageBackend(StorageBackend):
    def __init__(self, data_dir: str | Path = "./data/safe", quota_bytes: Optional[int] = None) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.quota_bytes = quota_bytes

    def _path_for(self, key: str) -> Path:
        # quote everything so keys containing separators map to one file
        return self.data_dir / f"{quote(key, safe='')}{SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        data = value.encode("utf-8")
        if self.quota_bytes is not None:
            used = self.usage()
            if path.exists():
                used -= path.stat().st_size
            needed = used + len(data)
            if needed > self.quota_bytes:
                raise QuotaExceededError(key, needed, self.quota_bytes)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with open(tmp, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)
        logger.debug("FileStorageBackend wrote %s (%d bytes)", path, len(data))

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        if path.exists():
            path.unlink()

    def keys(self) -> Iterable[str]:
        for p in self.data_dir.iterdir():
            if p.is_file() and p.suffix == SUFFIX:
                yield unquote(p.stem)

    def usage(self) -> int:
        return sum(
            p.stat().st_size
            for p in self.data_dir.iterdir()
            if p.is_file() and p.suffix == SUFFIX
        )
