from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

import yaml
from loguru import logger
from pydantic import ValidationError

from .errors import ConfigError
from .freeze import FrozenConfig, freeze
from .normalizer import normalize
from .schema import Configuration
from .utils import deep_merge, expand_env
from .validator import validate_and_check_unknowns

DEFAULT_CONFIG_PATH = Path("tshock") / "config.json"

# Layer file names relative to the base file, lowest priority first.
PRIORITY: Tuple[str, ...] = (
    "{STEM}{SUFFIX}",
    "{STEM}.{PROFILE}{SUFFIX}",
    "{STEM}.local{SUFFIX}",
)

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass(frozen=True)
class LoadedConfig:
    """Result of a load: the model, its frozen view and what was found on the way."""

    config: Configuration
    frozen: FrozenConfig
    diagnostics: Dict[str, Any] = field(default_factory=dict)
    layers: List[str] = field(default_factory=list)


def read_layer(path: Path) -> Dict[str, Any]:
    """Parse one JSON or YAML file into a mapping; an empty file is ``{}``."""
    suffix = path.suffix.lower()
    if suffix not in JSON_SUFFIXES | YAML_SUFFIXES:
        raise ConfigError(f"Unsupported configuration format for {path}: expected .json, .yaml or .yml")
    try:
        with path.open("r", encoding="utf-8-sig") as handle:
            if suffix in JSON_SUFFIXES:
                text = handle.read()
                layer = json.loads(text) if text.strip() else {}
            else:
                layer = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Malformed configuration file {path}: {exc}") from exc
    if not isinstance(layer, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping at the top level")
    return layer


def layer_paths(base: Path, profile: str | None = None) -> List[Path]:
    paths: List[Path] = []
    for template in PRIORITY:
        if "{PROFILE}" in template and not profile:
            continue
        name = template.format(STEM=base.stem, SUFFIX=base.suffix, PROFILE=profile)
        paths.append(base.with_name(name))
    return paths


def load_config(
    path: str | Path | None = None,
    *,
    profile: str | None = None,
    extra_layers: Iterable[str | Path] | None = None,
    inline_overrides: Mapping[str, Any] | None = None,
    strict: bool | None = None,
) -> LoadedConfig:
    """Load the configuration from its layered files.

    The base file (``tshock/config.json`` by default) is read first, then the
    profile and local override files next to it, then ``extra_layers`` and
    finally ``inline_overrides``. Missing files are skipped, so a fresh
    install loads as all defaults.
    """
    base = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    merged: Dict[str, Any] = {}
    resolved_layers: List[str] = []

    candidates = layer_paths(base, profile) + [Path(extra) for extra in extra_layers or []]
    for candidate in candidates:
        if not candidate.exists():
            logger.debug(f"Configuration layer {candidate} not found, skipping")
            continue
        layer = expand_env(read_layer(candidate))
        merged = deep_merge(merged, layer)
        resolved_layers.append(str(candidate))

    if inline_overrides:
        merged = deep_merge(merged, inline_overrides)

    loaded = load_config_from_mapping(merged, strict=strict, layers=resolved_layers)
    logger.info(f"Loaded configuration from {len(resolved_layers)} layer(s): {resolved_layers}")
    return loaded


def load_config_from_mapping(
    data: Mapping[str, Any],
    *,
    strict: bool | None = None,
    layers: Iterable[str] | None = None,
) -> LoadedConfig:
    """Build a configuration from an already parsed mapping; absent keys keep their defaults."""
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

    diagnostics: Dict[str, Any] = {}
    validate_and_check_unknowns(data, diagnostics, strict=strict)
    try:
        model = Configuration.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    model = normalize(model, diagnostics)
    return LoadedConfig(
        config=model,
        frozen=freeze(model),
        diagnostics=diagnostics,
        layers=list(layers or []),
    )
