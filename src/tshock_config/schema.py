from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, conint

from .types import ServerCharacterMode, ServerPvpMode, ServerTimeMode

# Persisted keys are PascalCase aliases; attributes stay snake_case.
_GROUP_CONFIG = ConfigDict(
    populate_by_name=True,
    validate_assignment=True,
    extra="allow",
)


class SettingsModel(BaseModel):
    """Shared base: unknown keys are kept on load, but only known settings can be assigned."""

    model_config = _GROUP_CONFIG

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_") and name not in type(self).model_fields:
            raise AttributeError(f"{type(self).__name__} has no setting named {name!r}")
        super().__setattr__(name, value)


class SettingsGroup(SettingsModel):
    """Base for a flat group of settings persisted under one top-level key."""


class ServerSettings(SettingsGroup):
    """Settings specific to the setup of the server, such as password and port."""

    port: StrictInt = Field(
        7777,
        alias="Port",
        description="The port that the server will open under. This port cannot be already in use.",
    )
    max_player_slots: conint(strict=True, ge=0, le=255) = Field(
        8,
        alias="MaxPlayerSlots",
        description="The maximum number of players who can join the server. Max: 255.",
    )
    reserved_slots: conint(strict=True, ge=0, le=255) = Field(
        0,
        alias="ReservedSlots",
        description=(
            "Slots reserved for players with the reserved slot permission. Requires "
            "Authentication.EnableLoginBeforeJoin and counts against MaxPlayerSlots."
        ),
    )
    server_name: Optional[StrictStr] = Field(
        None,
        alias="ServerName",
        description="Overrides the world name while the server is running, if set.",
    )
    password: Optional[StrictStr] = Field(
        None,
        alias="Password",
        description=(
            "Server password, if set. Overridden by Authentication.EnableLoginBeforeJoin "
            "for users who already have an account."
        ),
    )


class SaveSettings(SettingsGroup):
    """Settings specific to saving and backups."""

    auto_save: StrictBool = Field(True, alias="AutoSave", description="Enable the built in world auto-save.")
    auto_save_on_crash: StrictBool = Field(
        True,
        alias="AutoSaveOnCrash",
        description="Save the world if the server crashes unexpectedly.",
    )
    auto_save_on_last_player_exit: StrictBool = Field(
        True,
        alias="AutoSaveOnLastPlayerExit",
        description="Save the world when the last player disconnects.",
    )
    save_message: Optional[StrictStr] = Field(
        None,
        alias="SaveMessage",
        description="Message broadcast to the server when the world saves, if set.",
    )
    backup_interval: StrictInt = Field(
        10,
        alias="BackupInterval",
        description="How frequently to save world file backups, in minutes.",
    )
    backup_expire_interval: StrictInt = Field(
        240,
        alias="BackupExpireInterval",
        description="How long backups are kept before being deleted, in minutes.",
    )


class GameSettings(SettingsGroup):
    """Settings specific to how the game operates."""

    maximum_mob_spawns: StrictInt = Field(
        5,
        alias="MaximumMobSpawns",
        description="Default maximum number of mobs spawned during a wave.",
    )
    spawn_rate: StrictInt = Field(
        600,
        alias="SpawnRate",
        description="Interval between mob spawn waves. Lower means more frequent waves.",
    )
    statue_spawn_200: StrictInt = Field(
        3,
        alias="StatueSpawn200",
        description="NPCs a statue can spawn within 200 pixels of itself before it stops spawning.",
    )
    statue_spawn_600: StrictInt = Field(
        6,
        alias="StatueSpawn600",
        description="NPCs a statue can spawn within 600 pixels of itself before it stops spawning.",
    )
    statue_spawn_world: StrictInt = Field(
        10,
        alias="StatueSpawnWorld",
        description="NPCs a statue can spawn in total before it stops spawning.",
    )
    invasion_multiplier: StrictInt = Field(
        1,
        alias="InvasionMultiplier",
        description="Invasion size is 100 + (multiplier * online player count).",
    )
    enable_infinite_invasion: StrictBool = Field(False, alias="EnableInfiniteInvasion")
    pvp_mode: ServerPvpMode = Field(
        ServerPvpMode.VANILLA,
        alias="PvpMode",
        description="PVP state enforced by the server.",
    )
    character_mode: ServerCharacterMode = Field(
        ServerCharacterMode.VANILLA,
        alias="CharacterMode",
        description="Which types of characters may join the server.",
    )
    time_mode: ServerTimeMode = Field(
        ServerTimeMode.VANILLA,
        alias="TimeMode",
        description="How time works in the server.",
    )
    enable_crimson_spread: StrictBool = Field(True, alias="EnableCrimsonSpread")
    enable_hallow_spread: StrictBool = Field(True, alias="EnableHallowSpread")
    enable_corruption_spread: StrictBool = Field(True, alias="EnableCorruptionSpread")
    force_christmas: StrictBool = Field(
        False,
        alias="ForceChristmas",
        description="Allow Christmas events year-round.",
    )
    force_halloween: StrictBool = Field(
        False,
        alias="ForceHalloween",
        description="Allow Halloween events year-round.",
    )
    enable_clown_bombs: StrictBool = Field(False, alias="EnableClownBombs")
    enable_snowballs: StrictBool = Field(False, alias="EnableSnowballs")
    enable_tombstones: StrictBool = Field(
        False,
        alias="EnableTombstones",
        description="Drop tombstones when players die.",
    )
    enable_prime_bombs: StrictBool = Field(
        True,
        alias="EnablePrimeBombs",
        description="Allow Skeletron Prime's bomb projectiles.",
    )
    enable_boss_spawn_announcements: StrictBool = Field(
        False,
        alias="EnableBossSpawnAnnouncements",
        description="World-wide announcements when a boss or invasion is spawned.",
    )
    enable_dungeon_guardian: StrictBool = Field(
        True,
        alias="EnableDungeonGuardian",
        description=(
            "Spawn the dungeon guardian when a player delves too deep. If disabled the "
            "player is teleported back to their spawn point instead."
        ),
    )
    enable_hardmode: StrictBool = Field(
        True,
        alias="EnableHardmode",
        description="Activate hardmode when the Wall of Flesh is killed.",
    )
    remember_last_location: StrictBool = Field(
        False,
        alias="RememberLastLocation",
        description="Respawn reconnecting players where they disconnected.",
    )


class ProtectionSettings(SettingsGroup):
    """Settings specific to the tile and world protection systems."""

    spawn_protection_radius: Optional[StrictInt] = Field(
        10,
        alias="SpawnProtectionRadius",
        description="Tiles around the world spawn point that are protected, if set.",
    )
    enable_chest_protection_in_regions: StrictBool = Field(True, alias="EnableChestProtectionInRegions")
    enable_gem_lock_protection_in_regions: StrictBool = Field(True, alias="EnableGemLockProtectionInRegions")


class GroupSettings(SettingsGroup):
    """Settings specific to user groups."""

    default_user_group: StrictStr = Field(
        "default",
        alias="DefaultUserGroup",
        description="Group newly registered users are placed into.",
    )
    guest_group: StrictStr = Field(
        "guest",
        alias="GuestGroup",
        description="Group unregistered users are placed in.",
    )


class AuthenticationSettings(SettingsGroup):
    """Settings specific to user account authentication."""

    enable_require_login: StrictBool = Field(
        False,
        alias="EnableRequireLogin",
        description="All players must be logged in to play.",
    )
    enable_login_with_any_username: StrictBool = Field(
        True,
        alias="EnableLoginWithAnyUsername",
        description="Players may login with usernames that do not match their character name.",
    )
    enable_register_with_any_username: StrictBool = Field(
        False,
        alias="EnableRegisterWithAnyUsername",
        description="Players may register accounts that do not match their character name.",
    )
    enable_uuid_login: StrictBool = Field(
        True,
        alias="EnableUuidLogin",
        description="Players may authenticate with their UUID. Not a secure mechanism.",
    )
    enable_login_before_join: StrictBool = Field(
        True,
        alias="EnableLoginBeforeJoin",
        description=(
            "Users may login before they finish connecting. Overrides the server password "
            "for users who already have an account."
        ),
    )
    minimum_password_length: StrictInt = Field(
        4,
        alias="MinimumPasswordLength",
        description="Minimum length of an account password. Cannot be lower than 4.",
    )
    bcrypt_work_factor: StrictInt = Field(
        7,
        alias="BCryptWorkFactor",
        description=(
            "BCrypt work factor. Increases upgrade stored passwords to the new factor as "
            "they are used."
        ),
    )
    maximum_login_attempts: Optional[StrictInt] = Field(
        3,
        alias="MaximumLoginAttempts",
        description="Failed logins a player may attempt before being kicked, if set.",
    )
    enable_allowlist: StrictBool = Field(
        False,
        alias="EnableAllowlist",
        description="Enable the IP address allow list.",
    )


class PunishmentSettings(SettingsGroup):
    """Settings specific to auto-kick and ban rules."""

    kick_proxy_users: StrictBool = Field(
        False,
        alias="KickProxyUsers",
        description="Kick players who connect via a proxy, when detected by GeoIP.",
    )
    kick_empty_uuid: StrictBool = Field(
        False,
        alias="KickEmptyUuid",
        description="Kick players who do not present a UUID when connecting.",
    )
    kick_on_tile_place_threshold_exceeded: StrictBool = Field(False, alias="KickOnTilePlaceThresholdExceeded")
    kick_on_tile_kill_threshold_exceeded: StrictBool = Field(False, alias="KickOnTileKillThresholdExceeded")
    kick_on_paint_threshold_exceeded: StrictBool = Field(False, alias="KickOnPaintThresholdExceeded")
    kick_on_liquid_threshold_exceeded: StrictBool = Field(False, alias="KickOnLiquidThresholdExceeded")
    kick_on_projectile_threshold_exceeded: StrictBool = Field(False, alias="KickOnProjectileThresholdExceeded")
    kick_on_heal_other_threshold_exceeded: StrictBool = Field(False, alias="KickOnHealOtherThresholdExceeded")
    kick_on_damage_threshold_exceeded: StrictBool = Field(False, alias="KickOnDamageThresholdExceeded")
    kick_on_mediumcore_death: StrictBool = Field(False, alias="KickOnMediumcoreDeath")
    kick_on_hardcore_death: StrictBool = Field(False, alias="KickOnHardcoreDeath")
    ban_on_mediumcore_death: StrictBool = Field(False, alias="BanOnMediumcoreDeath")
    ban_on_hardcore_death: StrictBool = Field(False, alias="BanOnHardcoreDeath")


class AntiCheatSettings(SettingsGroup):
    """Settings specific to anti-cheat functions."""

    enable_modified_zenith: StrictBool = Field(
        True,
        alias="EnableModifiedZenith",
        description="Allow the Zenith projectile with objects other than weapons.",
    )
    enable_custom_death_messages: StrictBool = Field(
        False,
        alias="EnableCustomDeathMessages",
        description="Clients may send their own death messages, with any content, at any time.",
    )


class CommandSettings(SettingsGroup):
    """Settings specific to command handling."""

    command_prefix: StrictStr = Field(
        "/",
        alias="CommandPrefix",
        description="Messages beginning with this are treated as commands.",
    )
    silent_command_prefix: StrictStr = Field(
        ".",
        alias="SilentCommandPrefix",
        description="Messages beginning with this are treated as commands run silently.",
    )


class MessageSettings(SettingsGroup):
    """Settings specific to formatting of in-game messages.

    Placeholders: {0} group name, {1} group prefix, {2} player name,
    {3} group suffix, {4} chat message (chat box format only).
    """

    message_format: StrictStr = Field(
        "{1}{2}{3}: {4}",
        alias="MessageFormat",
        description="Format of messages displayed in the chat box.",
    )
    overhead_message_format: StrictStr = Field(
        "{2}",
        alias="OverheadMessageFormat",
        description='Format of messages over a player\'s head, shown as "({format}) {message}".',
    )
    enable_overhead_messages: StrictBool = Field(False, alias="EnableOverheadMessages")


class ServerSideCharacterSettings(SettingsGroup):
    """Settings specific to server-side characters."""

    enable_server_side_characters: StrictBool = Field(
        False,
        alias="EnableServerSideCharacters",
        description="Store character data on the server instead of on players' computers.",
    )
    save_interval: StrictInt = Field(
        5,
        alias="SaveInterval",
        description="Interval at which character data is saved, in minutes.",
    )
    starting_hp: StrictInt = Field(100, alias="StartingHp", description="HP given to new server-side characters.")
    starting_mp: StrictInt = Field(0, alias="StartingMp", description="MP given to new server-side characters.")


class Configuration(SettingsModel):
    """Typed root of the server configuration tree."""

    server: ServerSettings = Field(default_factory=ServerSettings, alias="Server")
    save: SaveSettings = Field(default_factory=SaveSettings, alias="Save")
    game: GameSettings = Field(default_factory=GameSettings, alias="Game")
    protection: ProtectionSettings = Field(default_factory=ProtectionSettings, alias="Protection")
    groups: GroupSettings = Field(default_factory=GroupSettings, alias="Groups")
    authentication: AuthenticationSettings = Field(default_factory=AuthenticationSettings, alias="Authentication")
    punishments: PunishmentSettings = Field(default_factory=PunishmentSettings, alias="Punishments")
    anti_cheat: AntiCheatSettings = Field(default_factory=AntiCheatSettings, alias="AntiCheat")
    commands: CommandSettings = Field(default_factory=CommandSettings, alias="Commands")
    messages: MessageSettings = Field(default_factory=MessageSettings, alias="Messages")
    server_side_characters: ServerSideCharacterSettings = Field(
        default_factory=ServerSideCharacterSettings, alias="ServerSideCharacters"
    )


DEFAULT_CONFIG: Dict[str, Any] = Configuration().model_dump(by_alias=True, mode="json")


def group_models() -> Dict[str, type[SettingsGroup]]:
    """Map each persisted group key to its model class."""
    groups: Dict[str, type[SettingsGroup]] = {}
    for name, field in Configuration.model_fields.items():
        groups[field.alias or name] = field.annotation  # type: ignore[assignment]
    return groups
