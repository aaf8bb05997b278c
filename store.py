import json
import logging
import threading
from pathlib import Path

from errors import PersistenceFailure

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    Collections stored as one pretty-printed JSON array per file.

    read/write raise PersistenceFailure; load/save log the failure and carry on
    with an empty list / a False return value.
    """

    def __init__(self, root):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self._locks = {}
        self._locks_guard = threading.Lock()

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}.json"

    def lock(self, name: str) -> threading.RLock:
        with self._locks_guard:
            if name not in self._locks:
                self._locks[name] = threading.RLock()
            return self._locks[name]

    def read(self, name: str) -> list:
        path = self.path_for(name)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug("File not found: %s. Starting with an empty collection.", path)
            return []
        except (OSError, ValueError) as e:
            raise PersistenceFailure(name, f"cannot read {path}: {e}") from e
        if not isinstance(data, list):
            raise PersistenceFailure(name, f"{path} does not hold a JSON array")
        return data

    def write(self, name: str, records: list) -> None:
        path = self.path_for(name)
        try:
            payload = json.dumps(records, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceFailure(name, f"cannot serialize records: {e}") from e
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(payload)
        except OSError as e:
            raise PersistenceFailure(name, f"cannot write {path}: {e}") from e

    def load(self, name: str) -> list:
        try:
            return self.read(name)
        except PersistenceFailure as e:
            logger.error("Error reading collection %s", e)
            return []

    def save(self, name: str, records: list) -> bool:
        try:
            self.write(name, records)
        except PersistenceFailure as e:
            logger.error("Error writing collection %s", e)
            return False
        return True
