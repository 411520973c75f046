"""Key-value stores for the persisted selection."""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal string key-value storage, in the spirit of browser local storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key. Must be durable when this returns."""


class MemoryStore(KeyValueStore):
    """Store that lives only as long as the process."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """Store kept as a single JSON object on disk.

    Every write replaces the file atomically, so a reader never observes a
    half-written state.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable state file %s: %s", self._path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: top level is not an object", self._path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
