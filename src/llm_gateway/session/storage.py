"""
Key-value storage backends for the session store.
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)

_VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStorage(Protocol):
    """Narrow persistence capability: opaque bytes by key."""

    def load(self, key: str) -> Optional[bytes]:
        ...

    def save(self, key: str, data: bytes) -> None:
        ...


class InMemoryStorage:
    """Storage kept in a dict; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def load(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def save(self, key: str, data: bytes) -> None:
        self._data[key] = bytes(data)


class FileStorage:
    """
    One file per key under a directory.

    Writes go to a temporary file first and are moved into place, so a
    crash never leaves a half-written value behind.
    """

    def __init__(self, directory: Union[str, Path]):
        """
        Initialize file storage.

        Args:
            directory: Directory holding the files; created on first save
        """
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        if not _VALID_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def save(self, key: str, data: bytes) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_bytes(data)
        os.replace(tmp, path)
        logger.debug(f"Saved {len(data)} bytes to {path}")
