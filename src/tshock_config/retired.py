from typing import Dict

_LOGGING = "logging configuration"
_PERMISSION = "permission system"

# Keys from older configuration files whose concern moved elsewhere. They are
# reported on load and never converted into the grouped layout.
RETIRED_KEYS: Dict[str, str] = {
    "LogPath": _LOGGING,
    "DebugLogs": _LOGGING,
    "LogRest": _LOGGING,
    "MaxHP": f"{_PERMISSION} (player.hp.<value>)",
    "MaxMP": f"{_PERMISSION} (player.mp.<value>)",
    "MaxDamage": f"{_PERMISSION} (player.damage.<value>)",
    "MaxProjDamage": f"{_PERMISSION} (player.projdamage.<value>)",
    "BombExplosionRadius": f"{_PERMISSION} (player.bombradius.<value>)",
    "MaxRangeForDisabled": f"{_PERMISSION} (player.disableradius.<value>)",
    "TileKillThreshold": f"{_PERMISSION} (player.threshold.tilekill.<value>)",
    "TilePlaceThreshold": f"{_PERMISSION} (player.threshold.tileplace.<value>)",
    "TileLiquidThreshold": f"{_PERMISSION} (player.threshold.liquid.<value>)",
    "TilePaintThreshold": f"{_PERMISSION} (player.threshold.paint.<value>)",
    "ProjectileThreshold": f"{_PERMISSION} (player.threshold.projectile.<value>)",
    "HealOtherThreshold": f"{_PERMISSION} (player.threshold.healother.<value>)",
    "RangeChecks": _PERMISSION,
    "DisableBuild": _PERMISSION,
    "DisableInvisPvP": _PERMISSION,
    "IgnoreProjUpdate": _PERMISSION,
    "IgnoreProjKill": _PERMISSION,
    "AllowIce": _PERMISSION,
    "AllowCutTilesAndBreakables": _PERMISSION,
    "PreventBannedItemSpawn": _PERMISSION,
    "PreventDeadModification": _PERMISSION,
    "PreventInvalidPlaceStyle": _PERMISSION,
    "AllowAllowedGroupsToSpawnBannedItems": _PERMISSION,
}


def retired_owner(key: str) -> str | None:
    """Return where a retired key's concern lives now, or None for live keys."""
    return RETIRED_KEYS.get(key)
