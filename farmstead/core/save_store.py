import os
from typing import Dict, Optional
from farmstead.core.exceptions import PersistenceError
from farmstead.utils.logger import Logger

AUTOSAVE_KEY = "autoSave"

def slot_key(slot) -> str:
    return f"saveSlot{slot}"

class SaveStore:
    """Synchronous string key/value storage for save payloads."""
    def read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write(self, key: str, text: str):
        raise NotImplementedError

    def delete(self, key: str):
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        return self.read(key) is not None

class MemoryStore(SaveStore):
    def __init__(self):
        self.entries: Dict[str, str] = {}

    def read(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def write(self, key: str, text: str):
        self.entries[key] = text

    def delete(self, key: str):
        self.entries.pop(key, None)

class JsonFileStore(SaveStore):
    """One <key>.json file per key under root_dir, replaced atomically."""
    def __init__(self, root_dir: str):
        self.root_dir = root_dir

    def path_for(self, key: str) -> str:
        if not key or os.sep in key or (os.altsep and os.altsep in key) or key.startswith("."):
            raise PersistenceError(f"Invalid save key: {key!r}")
        return os.path.join(self.root_dir, f"{key}.json")

    def exists(self, key: str) -> bool:
        return os.path.exists(self.path_for(key))

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, text: str):
        path = self.path_for(key)
        tmp_path = path + ".tmp"
        try:
            os.makedirs(self.root_dir, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {path}: {e}") from e
        Logger.debug(f"Wrote {path}")

    def delete(self, key: str):
        path = self.path_for(key)
        if os.path.exists(path):
            os.remove(path)
