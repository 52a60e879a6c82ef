from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from loguru import logger

from .errors import ConfigError
from .loader import JSON_SUFFIXES, YAML_SUFFIXES, LoadedConfig, load_config_from_mapping, read_layer
from .schema import Configuration


def dump_config(config: Configuration) -> Dict[str, Any]:
    """Persisted form: PascalCase keys, enum names, ``None`` for unset optionals.

    Keys the schema does not know about but which were kept on load are
    written back unchanged.
    """
    return config.model_dump(by_alias=True, mode="json")


def save_config(config: Configuration, path: str | Path) -> Path:
    """Write ``config`` to ``path`` as JSON or YAML, replacing the file atomically."""
    target = Path(path)
    suffix = target.suffix.lower()
    data = dump_config(config)
    if suffix in JSON_SUFFIXES:
        text = json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    elif suffix in YAML_SUFFIXES:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    else:
        raise ConfigError(f"Unsupported configuration format for {target}: expected .json, .yaml or .yml")

    tmp = target.with_name(target.name + ".tmp")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp, target)
    except OSError as exc:
        raise ConfigError(f"Cannot write configuration file {target}: {exc}") from exc
    finally:
        tmp.unlink(missing_ok=True)
    logger.info(f"Configuration written to {target}")
    return target


def upgrade_file(path: str | Path, *, strict: bool | None = None) -> LoadedConfig:
    """Load a single file and write it back with every new key at its default.

    A missing file is created with all defaults.
    """
    target = Path(path)
    data = read_layer(target) if target.exists() else {}
    loaded = load_config_from_mapping(data, strict=strict, layers=[str(target)] if data else [])
    save_config(loaded.config, target)
    return loaded
