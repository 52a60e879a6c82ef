from __future__ import annotations

from enum import Enum


class ServerPvpMode(str, Enum):
    """PVP state enforced by the server."""

    VANILLA = "Vanilla"
    ALWAYS = "Always"
    ALWAYS_WITHOUT_TEAMS = "AlwaysWithoutTeams"
    DISABLED = "Disabled"


class ServerCharacterMode(str, Enum):
    """Which character difficulties may join the server."""

    VANILLA = "Vanilla"
    SOFTCORE_ONLY = "SoftcoreOnly"
    MEDIUMCORE_ONLY = "MediumcoreOnly"
    HARDCORE_ONLY = "HardcoreOnly"


class ServerTimeMode(str, Enum):
    """How world time advances on the server."""

    VANILLA = "Vanilla"
    ALWAYS_DAY = "AlwaysDay"
    ALWAYS_NIGHT = "AlwaysNight"
    FROZEN = "Frozen"
