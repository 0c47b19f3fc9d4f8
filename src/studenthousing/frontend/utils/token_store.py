"""
Client-side Persisted Storage

A small JSON key/value file that keeps the access token for a browser
session, the way a browser keeps it in its own storage.

The file is shared by every session on the Streamlit server, so each store
reads and writes only its own namespace. Two stores see each other's values
only when built with the same namespace.
"""
import json
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from config.settings import settings
from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)

TOKEN_KEY = "token"

# One lock per storage file, shared by all namespaces writing to it.
_file_locks: Dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _file_locks_guard:
        return _file_locks.setdefault(path, threading.Lock())


class TokenStore:
    """JSON-file backed key/value store, partitioned by browser session."""

    def __init__(self, path: Optional[str] = None, namespace: Optional[str] = None):
        """
        Args:
            path: Storage file (default from settings)
            namespace: Browser session identifier; a fresh one is generated if omitted
        """
        self.path = Path(path or settings.client_storage_path).expanduser().resolve()
        self.namespace = namespace or uuid.uuid4().hex
        self._lock = _lock_for(self.path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("local_storage_unreadable", path=str(self.path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        tmp_path.replace(self.path)

    def _entries(self, data: Dict[str, Any]) -> Dict[str, Any]:
        entries = data.get(self.namespace)
        return entries if isinstance(entries, dict) else {}

    def get(self, key: str = TOKEN_KEY) -> Optional[Any]:
        """Return the stored value for ``key``, or None."""
        with self._lock:
            return self._entries(self._read()).get(key)

    def set(self, value: Any, key: str = TOKEN_KEY) -> None:
        """Store ``value`` under ``key``."""
        with self._lock:
            data = self._read()
            entries = self._entries(data)
            entries[key] = value
            data[self.namespace] = entries
            self._write(data)
        logger.debug("local_storage_set", key=key)

    def remove(self, key: str = TOKEN_KEY) -> None:
        """Delete ``key`` if present. Empty namespaces are dropped from the file."""
        with self._lock:
            data = self._read()
            entries = self._entries(data)
            if key in entries:
                del entries[key]
                if entries:
                    data[self.namespace] = entries
                else:
                    data.pop(self.namespace, None)
                self._write(data)
        logger.debug("local_storage_removed", key=key)
