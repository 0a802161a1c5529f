import json
import os
import time
from typing import Any, Callable, Dict, List, Optional
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from farmstead.core.exceptions import ConfigLoadError
from farmstead.utils.logger import Logger, LogCategory

class ConfigHandler(FileSystemEventHandler):
    def __init__(self, filename: str, callback):
        self.filename = filename
        self.callback = callback

    def on_modified(self, event):
        if not event.is_directory and os.path.basename(event.src_path) == self.filename:
            # Give file system a moment to flush
            time.sleep(0.1)
            self.callback()

def read_document(path: str) -> Dict[str, Any]:
    """Read a JSON document whose top level must be an object."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigLoadError(f"{path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigLoadError(f"{path}: top level is not an object")
    return data

def load_document(path: Optional[str]) -> Optional[Dict[str, Any]]:
    """Fail-soft variant of read_document: logs and returns None on any error."""
    if not path:
        return None
    try:
        return read_document(path)
    except ConfigLoadError as e:
        Logger.warning(f"Falling back to defaults, could not load {e}")
        return None

class ConfigManager:
    def __init__(self, config_path: Optional[str] = None, watch: bool = False,
                 overrides: Optional[Dict[str, Any]] = None):
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self.overrides: Dict[str, Any] = dict(overrides or {})
        self.observer = None
        self._listeners: List[Callable[[], None]] = []

        # Initial load
        if config_path:
            self.load_config()

        if watch and config_path:
            directory = os.path.dirname(os.path.abspath(config_path))
            handler = ConfigHandler(os.path.basename(config_path), self._reload)
            self.observer = Observer()
            self.observer.schedule(handler, directory, recursive=False)
            self.observer.start()
            Logger.info(f"ConfigManager watching: {config_path}")

    def load_config(self):
        try:
            self.config = read_document(self.config_path)
            Logger.log(LogCategory.CONFIG, "Config loaded successfully")
        except ConfigLoadError as e:
            Logger.error(f"Failed to load config: {e}")

    def on_reload(self, callback: Callable[[], None]):
        self._listeners.append(callback)

    def _reload(self):
        self.load_config()
        for callback in self._listeners:
            callback()

    def set(self, key_path: str, value: Any):
        """Runtime override that wins over the file contents."""
        self.overrides[key_path] = value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get config value using dot notation (e.g. "crops.potato.water_cost")
        """
        if key_path in self.overrides:
            return self.overrides[key_path]

        keys = key_path.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def stop(self):
        if self.observer is not None:
            self.observer.stop()
            self.observer.join()
            self.observer = None
