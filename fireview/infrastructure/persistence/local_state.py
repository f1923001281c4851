"""Local key-value console state (last project ID, registered collections).

JsonFileStateStore keeps one JSON object on disk and rewrites it atomically
(temp file + rename) on every change. MemoryStateStore is used when
persistence is disabled (empty STATE_FILE).
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from fireview.infrastructure.exceptions import StateStoreException

logger = logging.getLogger(__name__)


class MemoryStateStore:
    """In-process state store (IStateStore); lost on restart."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    async def get(self, key: str) -> Any:
        return self._data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStateStore:
    """File-backed state store (IStateStore) with atomic writes.

    A missing file is an empty store. An unreadable or corrupt file is
    logged and treated as empty; it is replaced on the next write.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser().resolve()
        self._lock = asyncio.Lock()

    async def _read_all(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            async with aiofiles.open(self.path, encoding="utf-8") as f:
                raw = await f.read()
            data = json.loads(raw) if raw.strip() else {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: top-level value is not an object", self.path)
            return {}
        return data

    async def _write_all(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=".tmp_", suffix=".json"
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                    await f.write(json.dumps(data, indent=2))
                os.chmod(temp_path, 0o600)
                os.replace(temp_path, self.path)
            finally:
                if Path(temp_path).exists():
                    await aiofiles.os.remove(temp_path)
        except OSError as e:
            raise StateStoreException(str(self.path), str(e)) from e

    async def get(self, key: str) -> Any:
        async with self._lock:
            return (await self._read_all()).get(key)

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            data = await self._read_all()
            data[key] = value
            await self._write_all(data)

    async def remove(self, key: str) -> None:
        async with self._lock:
            data = await self._read_all()
            if key not in data:
                return
            del data[key]
            await self._write_all(data)


def create_state_store(state_file: str) -> JsonFileStateStore | MemoryStateStore:
    """Return a file-backed store, or an in-memory one when state_file is empty."""
    if not state_file.strip():
        logger.info("STATE_FILE is empty; console state will not survive restarts")
        return MemoryStateStore()
    return JsonFileStateStore(state_file)
