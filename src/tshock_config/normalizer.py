from __future__ import annotations

from typing import Any, Dict, List, Tuple

from loguru import logger

from .schema import Configuration

PASSWORD_LENGTH_FLOOR = 4

# (group attribute, field attribute) pairs that are counts, intervals or sizes.
NON_NEGATIVE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("server", "port"),
    ("save", "backup_interval"),
    ("save", "backup_expire_interval"),
    ("game", "maximum_mob_spawns"),
    ("game", "spawn_rate"),
    ("game", "statue_spawn_200"),
    ("game", "statue_spawn_600"),
    ("game", "statue_spawn_world"),
    ("game", "invasion_multiplier"),
    ("protection", "spawn_protection_radius"),
    ("authentication", "bcrypt_work_factor"),
    ("authentication", "maximum_login_attempts"),
    ("server_side_characters", "save_interval"),
    ("server_side_characters", "starting_hp"),
    ("server_side_characters", "starting_mp"),
)


def persisted_path(group: str, field: str) -> str:
    """Dotted persisted name, e.g. ``("save", "backup_interval")`` -> ``Save.BackupInterval``."""
    group_field = Configuration.model_fields[group]
    group_model = group_field.annotation
    member = group_model.model_fields[field]
    return f"{group_field.alias or group}.{member.alias or field}"


def normalize(config: Configuration, diagnostics: Dict[str, Any] | None = None) -> Configuration:
    """Return a copy of ``config`` with documented floors applied.

    Adjustments land in ``diagnostics["adjusted"]``; values that are out of
    their documented range but left alone land in ``diagnostics["warnings"]``.
    """
    data = config.model_copy(deep=True)
    diagnostics = diagnostics if diagnostics is not None else {}
    adjusted: List[str] = diagnostics.setdefault("adjusted", [])
    warnings: List[str] = diagnostics.setdefault("warnings", [])

    _apply_password_floor(data, adjusted)
    _check_non_negative(data, warnings)
    _check_reserved_slots(data, warnings)
    return data


def _apply_password_floor(config: Configuration, adjusted: List[str]) -> None:
    current = config.authentication.minimum_password_length
    if current >= PASSWORD_LENGTH_FLOOR:
        return
    config.authentication.minimum_password_length = PASSWORD_LENGTH_FLOOR
    note = (
        f"{persisted_path('authentication', 'minimum_password_length')}: "
        f"{current} raised to {PASSWORD_LENGTH_FLOOR}"
    )
    adjusted.append(note)
    logger.warning(f"Adjusted configuration value {note}")


def _check_non_negative(config: Configuration, warnings: List[str]) -> None:
    for group, field in NON_NEGATIVE_FIELDS:
        value = getattr(getattr(config, group), field)
        if value is None or value >= 0:
            continue
        note = f"{persisted_path(group, field)} is negative ({value})"
        warnings.append(note)
        logger.warning(note)


def _check_reserved_slots(config: Configuration, warnings: List[str]) -> None:
    if config.server.reserved_slots and not config.authentication.enable_login_before_join:
        note = (
            f"{persisted_path('server', 'reserved_slots')} has no effect while "
            f"{persisted_path('authentication', 'enable_login_before_join')} is disabled"
        )
        warnings.append(note)
        logger.warning(note)
