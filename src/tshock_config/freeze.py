from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from .schema import Configuration


class FrozenMapping(Mapping[str, Any]):
    """Read-only mapping whose nested dicts and lists are frozen as well."""

    def __init__(self, data: Dict[str, Any]):
        self._data = {key: _freeze(value) for key, value in data.items()}

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        value: Any = self._data
        for part in key.split('.'):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return default
        return value

    def to_dict(self) -> Dict[str, Any]:
        return {key: _unfreeze(value) for key, value in self._data.items()}

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{type(self).__name__}({self._data!r})"


class FrozenConfig(FrozenMapping):
    """Immutable view of a loaded configuration, keyed by persisted names.

    ``frozen.get("Server.Port")`` resolves dotted paths.
    """

    def section(self, name: str) -> FrozenMapping:
        return self[name]


def _freeze(value: Any) -> Any:
    if isinstance(value, FrozenMapping):
        return value
    if isinstance(value, dict):
        return FrozenMapping(value)
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _unfreeze(item: Any) -> Any:
    if isinstance(item, FrozenMapping):
        return {k: _unfreeze(v) for k, v in item.items()}
    if isinstance(item, tuple):
        return [_unfreeze(v) for v in item]
    return item


def freeze(model: Configuration) -> FrozenConfig:
    return FrozenConfig(model.model_dump(by_alias=True, mode="json"))
