"""Key-value stores used to persist game state between runs."""

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Optional, Union

from ..config import DATA_DIR

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class StorageError(Exception):
    """Raised when the underlying store cannot be read or written."""

    pass


class KeyValueStore(ABC):
    """
    Durable string key-value store.

    Values are JSON text. Subclasses decide where the text lives.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        pass

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over stored keys."""
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> int:
        """
        Remove every stored key.

        Returns:
            Number of keys removed.
        """
        removed = list(self.keys())
        for key in removed:
            self.delete(key)
        return len(removed)


class MemoryStore(KeyValueStore):
    """Store that keeps values in a dict for the life of the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(list(self._data))


class JsonFileStore(KeyValueStore):
    """
    Store each key as a JSON file in a data directory.

    A key "players" lives in <data_dir>/players.json. Files that do not
    contain valid JSON are treated as absent and removed.
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the store.

        Args:
            data_dir: Directory for the key files (defaults to DATA_DIR).
        """
        self.data_dir = Path(data_dir) if data_dir is not None else Path(DATA_DIR)

    def _key_path(self, key: str) -> Path:
        """Get the file path for a key."""
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._key_path(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
            json.loads(content)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Discarding corrupt value for %s", key)
            path.unlink(missing_ok=True)
            return None
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e

        return content

    def set(self, key: str, value: str) -> None:
        path = self._key_path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(value)
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e
        logger.debug("Wrote %s (%d bytes)", key, len(value))

    def delete(self, key: str) -> None:
        path = self._key_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not delete {path}: {e}") from e

    def keys(self) -> Iterator[str]:
        if not self.data_dir.exists():
            return iter([])
        return iter(sorted(p.stem for p in self.data_dir.glob("*.json")))
