from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, List

from loguru import logger

from .loader import LoadedConfig, load_config
from .logging_utils import log_operation
from .schema import Configuration

Subscriber = Callable[[Configuration], None]


class ConfigStore:
    """Owns the live configuration of one host process.

    Pass the store to the components that need settings instead of reaching
    for a module-level instance. ``reload`` replaces the configuration
    wholesale; a failed reload leaves the previous one in place and raises.
    """

    def __init__(self, path: str | Path | None = None, **load_kwargs: Any):
        self.path = Path(path) if path is not None else None
        self._load_kwargs = load_kwargs
        self._lock = threading.Lock()
        self._loaded: LoadedConfig | None = None
        self._subscribers: List[Subscriber] = []

    @property
    def loaded(self) -> LoadedConfig:
        if self._loaded is None:
            with self._lock:
                if self._loaded is None:
                    self._loaded = load_config(self.path, **self._load_kwargs)
        return self._loaded

    @property
    def current(self) -> Configuration:
        return self.loaded.config

    def subscribe(self, callback: Subscriber) -> None:
        """Call ``callback`` with the new configuration after every successful reload."""
        self._subscribers.append(callback)

    def reload(self) -> Configuration:
        with log_operation("reload configuration", path=str(self.path)):
            with self._lock:
                fresh = load_config(self.path, **self._load_kwargs)
                previous = self._loaded
                self._loaded = fresh
        if previous is not None and previous.config == fresh.config:
            logger.debug("Reloaded configuration is unchanged")
        for callback in list(self._subscribers):
            callback(fresh.config)
        return fresh.config
