from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from copy import deepcopy
from typing import Any, Dict, Tuple

import os
import re

import yaml

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


def deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Deeply merge two dictionaries returning a new dict."""
    result = deepcopy(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, Mapping)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


def expand_env(data: Any) -> Any:
    """Recursively expand ${VAR} placeholders using environment variables."""
    if isinstance(data, str):
        def _replace(match: re.Match[str]) -> str:
            var = match.group(1)
            return os.environ.get(var, "")

        return _ENV_PATTERN.sub(_replace, data)
    if isinstance(data, list):
        return [expand_env(item) for item in data]
    if isinstance(data, dict):
        return {key: expand_env(value) for key, value in data.items()}
    return data


def set_path(data: MutableMapping[str, Any], path: Tuple[str, ...], value: Any) -> None:
    current: MutableMapping[str, Any] = data
    for key in path[:-1]:
        next_val = current.get(key)
        if not isinstance(next_val, MutableMapping):
            next_val = {}
            current[key] = next_val
        current = next_val  # type: ignore[assignment]
    current[path[-1]] = value


def parse_override(expression: str) -> Dict[str, Any]:
    """Turn ``Server.Port=7778`` into ``{"Server": {"Port": 7778}}``.

    The right-hand side is parsed as a YAML scalar so ``true``, ``null`` and
    numbers keep their types.
    """
    if "=" not in expression:
        raise ValueError(f"Override must look like Group.Key=value, got {expression!r}")
    dotted, raw_value = expression.split("=", 1)
    path = tuple(part for part in dotted.strip().split(".") if part)
    if not path:
        raise ValueError(f"Override has an empty key: {expression!r}")
    value = yaml.safe_load(raw_value) if raw_value.strip() else ""
    result: Dict[str, Any] = {}
    set_path(result, path, value)
    return result
