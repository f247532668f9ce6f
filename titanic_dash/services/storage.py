from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """
    Abstract interface for key/value byte storage.

    Two lifetimes are used by the app:
    - durable (LocalFileSystemStorage): survives restarts
    - session (InMemoryStorage): lives as long as the running process
    """

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        pass

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove the entry; no-op if it does not exist."""
        pass


class LocalFileSystemStorage(StorageBackend):
    """
    Durable local filesystem implementation.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        # Prevent path traversal attacks
        full_path = (self.root / path).resolve()
        if not full_path.is_relative_to(self.root):
            raise ValueError(f"Access denied: {path}")
        return full_path

    def write_bytes(self, path: str, data: bytes) -> None:
        p = self._resolve(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        # Write-then-rename so a crash never leaves a half-written file
        tmp = p.with_name(p.name + ".tmp")
        tmp.write_bytes(data)
        tmp.replace(p)

    def read_bytes(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def delete(self, path: str) -> None:
        self._resolve(path).unlink(missing_ok=True)


class InMemoryStorage(StorageBackend):
    """
    Session-scope storage: a dict held by the process.
    """

    def __init__(self) -> None:
        self._data: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def write_bytes(self, path: str, data: bytes) -> None:
        with self._lock:
            self._data[path] = bytes(data)

    def read_bytes(self, path: str) -> bytes:
        with self._lock:
            try:
                return self._data[path]
            except KeyError:
                raise FileNotFoundError(path) from None

    def exists(self, path: str) -> bool:
        with self._lock:
            return path in self._data

    def delete(self, path: str) -> None:
        with self._lock:
            self._data.pop(path, None)


class StateStore:
    """
    Restore-on-init / persist-on-mutation port over a StorageBackend.

    State is a JSON object stored under a single key. Failures never reach
    the caller: a state that cannot be read is treated as absent and a state
    that cannot be written is logged (the in-memory copy stays authoritative).
    """

    def __init__(self, backend: StorageBackend, key: str):
        self.backend = backend
        self.key = key

    def load(self) -> Optional[Dict[str, Any]]:
        try:
            if not self.backend.exists(self.key):
                return None
            data = json.loads(self.backend.read_bytes(self.key))
        except Exception:
            logger.exception("Failed to restore state", extra={"key": self.key})
            return None

        if not isinstance(data, dict):
            logger.warning(
                "Ignoring stored state that is not a JSON object",
                extra={"key": self.key, "type": type(data).__name__},
            )
            return None
        return data

    def save(self, state: Dict[str, Any]) -> None:
        try:
            json_bytes = json.dumps(state, indent=2, allow_nan=False).encode("utf-8")
            self.backend.write_bytes(self.key, json_bytes)
        except Exception:
            logger.exception("Failed to persist state", extra={"key": self.key})

    def clear(self) -> None:
        try:
            self.backend.delete(self.key)
        except Exception:
            logger.exception("Failed to clear state", extra={"key": self.key})
