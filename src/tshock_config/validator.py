from __future__ import annotations

import os
from typing import Any, Dict, Iterable, Mapping, Set, Tuple

from loguru import logger

from .errors import ConfigError
from .retired import retired_owner
from .schema import Configuration, group_models

Path = Tuple[str, ...]

STRICT_ENV_VAR = "TSHOCK_CONFIG_STRICT"


class UnknownKeysError(ConfigError):
    """Raised in strict mode when the input carries keys the schema does not define."""


def _accepted_names(model: type) -> Set[str]:
    names: Set[str] = set()
    for name, field in model.model_fields.items():
        names.add(name)
        if field.alias:
            names.add(field.alias)
    return names


_ROOT_NAMES = _accepted_names(Configuration)
_GROUP_NAMES: Dict[str, Set[str]] = {}
for _alias, _model in group_models().items():
    _GROUP_NAMES[_alias] = _accepted_names(_model)
for _name, _field in Configuration.model_fields.items():
    _GROUP_NAMES[_name] = _GROUP_NAMES[_field.alias or _name]


def validate_and_check_unknowns(
    cfg: Mapping[str, Any],
    diagnostics: Dict[str, Any] | None = None,
    *,
    strict: bool | None = None,
) -> Dict[str, Any]:
    """Record unknown and retired keys of ``cfg`` in ``diagnostics``.

    Raises UnknownKeysError in strict mode when any are found; otherwise logs a
    warning and leaves the keys in place so they survive a write-back.
    """
    diagnostics = diagnostics if diagnostics is not None else {}
    unknown: list[str] = []
    retired: Dict[str, str] = {}
    for path in _find_unknown_paths(cfg):
        dotted = ".".join(path)
        owner = retired_owner(path[-1])
        if owner is None:
            unknown.append(dotted)
        else:
            retired[dotted] = owner

    diagnostics["unknown_keys"] = sorted(unknown)
    diagnostics["retired_keys"] = dict(sorted(retired.items()))

    if not unknown and not retired:
        return diagnostics

    message_parts = []
    if unknown:
        message_parts.append(f"unknown keys {sorted(unknown)}")
    if retired:
        message_parts.append(
            "retired keys " + ", ".join(f"{key} (now {owner})" for key, owner in sorted(retired.items()))
        )
    message = "Configuration contains " + "; ".join(message_parts)
    if _determine_strict_mode(strict):
        raise UnknownKeysError(message)
    logger.warning(message)
    return diagnostics


def _find_unknown_paths(data: Mapping[str, Any]) -> Iterable[Path]:
    for key, value in data.items():
        if key not in _ROOT_NAMES:
            yield (key,)
            continue
        if not isinstance(value, Mapping):
            continue
        allowed = _GROUP_NAMES[key]
        for field_key in value:
            if field_key not in allowed:
                yield (key, field_key)


def _determine_strict_mode(strict: bool | None) -> bool:
    if strict is not None:
        return strict

    env_override = os.getenv(STRICT_ENV_VAR)
    if env_override is not None:
        value = env_override.strip().lower()
        if value in {"1", "true", "yes", "on", "strict", "fail", "error"}:
            return True
        if value in {"0", "false", "no", "off", "lenient", "warn", "warning"}:
            return False
        logger.warning(f"Ignoring unrecognised {STRICT_ENV_VAR}={env_override!r}")
    return False
