import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tshock_config import Configuration, DEFAULT_CONFIG, load_config_from_mapping
from tshock_config.types import ServerCharacterMode, ServerPvpMode, ServerTimeMode


EXPECTED_DEFAULTS = {
    "Server": {
        "Port": 7777,
        "MaxPlayerSlots": 8,
        "ReservedSlots": 0,
        "ServerName": None,
        "Password": None,
    },
    "Save": {
        "AutoSave": True,
        "AutoSaveOnCrash": True,
        "AutoSaveOnLastPlayerExit": True,
        "SaveMessage": None,
        "BackupInterval": 10,
        "BackupExpireInterval": 240,
    },
    "Game": {
        "MaximumMobSpawns": 5,
        "SpawnRate": 600,
        "StatueSpawn200": 3,
        "StatueSpawn600": 6,
        "StatueSpawnWorld": 10,
        "InvasionMultiplier": 1,
        "EnableInfiniteInvasion": False,
        "PvpMode": "Vanilla",
        "CharacterMode": "Vanilla",
        "TimeMode": "Vanilla",
        "EnableCrimsonSpread": True,
        "EnableHallowSpread": True,
        "EnableCorruptionSpread": True,
        "ForceChristmas": False,
        "ForceHalloween": False,
        "EnableClownBombs": False,
        "EnableSnowballs": False,
        "EnableTombstones": False,
        "EnablePrimeBombs": True,
        "EnableBossSpawnAnnouncements": False,
        "EnableDungeonGuardian": True,
        "EnableHardmode": True,
        "RememberLastLocation": False,
    },
    "Protection": {
        "SpawnProtectionRadius": 10,
        "EnableChestProtectionInRegions": True,
        "EnableGemLockProtectionInRegions": True,
    },
    "Groups": {
        "DefaultUserGroup": "default",
        "GuestGroup": "guest",
    },
    "Authentication": {
        "EnableRequireLogin": False,
        "EnableLoginWithAnyUsername": True,
        "EnableRegisterWithAnyUsername": False,
        "EnableUuidLogin": True,
        "EnableLoginBeforeJoin": True,
        "MinimumPasswordLength": 4,
        "BCryptWorkFactor": 7,
        "MaximumLoginAttempts": 3,
        "EnableAllowlist": False,
    },
    "Punishments": {
        "KickProxyUsers": False,
        "KickEmptyUuid": False,
        "KickOnTilePlaceThresholdExceeded": False,
        "KickOnTileKillThresholdExceeded": False,
        "KickOnPaintThresholdExceeded": False,
        "KickOnLiquidThresholdExceeded": False,
        "KickOnProjectileThresholdExceeded": False,
        "KickOnHealOtherThresholdExceeded": False,
        "KickOnDamageThresholdExceeded": False,
        "KickOnMediumcoreDeath": False,
        "KickOnHardcoreDeath": False,
        "BanOnMediumcoreDeath": False,
        "BanOnHardcoreDeath": False,
    },
    "AntiCheat": {
        "EnableModifiedZenith": True,
        "EnableCustomDeathMessages": False,
    },
    "Commands": {
        "CommandPrefix": "/",
        "SilentCommandPrefix": ".",
    },
    "Messages": {
        "MessageFormat": "{1}{2}{3}: {4}",
        "OverheadMessageFormat": "{2}",
        "EnableOverheadMessages": False,
    },
    "ServerSideCharacters": {
        "EnableServerSideCharacters": False,
        "SaveInterval": 5,
        "StartingHp": 100,
        "StartingMp": 0,
    },
}


@pytest.mark.parametrize(
    "group,key,expected",
    [
        (group, key, value)
        for group, fields in EXPECTED_DEFAULTS.items()
        for key, value in fields.items()
    ],
)
def test_documented_default(group, key, expected):
    assert DEFAULT_CONFIG[group][key] == expected


def test_default_config_has_no_extra_keys():
    assert DEFAULT_CONFIG == EXPECTED_DEFAULTS


def test_every_group_is_populated_on_construction():
    config = Configuration()
    for name in Configuration.model_fields:
        assert getattr(config, name) is not None


def test_attribute_access_uses_typed_values():
    config = Configuration()
    assert config.server.port == 7777
    assert config.save.auto_save is True
    assert config.authentication.bcrypt_work_factor == 7
    assert config.commands.command_prefix == "/"
    assert config.game.pvp_mode is ServerPvpMode.VANILLA
    assert config.game.character_mode is ServerCharacterMode.VANILLA
    assert config.game.time_mode is ServerTimeMode.VANILLA


def test_empty_input_equals_defaults():
    loaded = load_config_from_mapping({})
    assert loaded.config == Configuration()
    assert loaded.config.server.port == 7777
    assert loaded.config.save.auto_save is True
    assert loaded.config.authentication.bcrypt_work_factor == 7
    assert loaded.config.commands.command_prefix == "/"


def test_groups_are_independent_instances():
    first = Configuration()
    second = Configuration()
    first.server.port = 1234
    assert second.server.port == 7777


def test_assignment_is_type_checked():
    config = Configuration()
    config.server.max_player_slots = 255
    assert config.server.max_player_slots == 255
    with pytest.raises(ValueError):
        config.server.max_player_slots = 256


def test_construct_by_attribute_name():
    config = Configuration(server={"port": 8888})
    assert config.server.port == 8888
    assert config.server.max_player_slots == 8


def test_misspelled_attribute_is_rejected():
    config = Configuration()
    with pytest.raises(AttributeError):
        config.server.prot = 1
    with pytest.raises(AttributeError):
        config.bogus = 1
    config.server.port = 1
    assert config.server.port == 1
    assert "prot" not in config.model_dump(by_alias=True)["Server"]


def test_assignment_does_not_coerce_types():
    config = Configuration()
    with pytest.raises(ValueError):
        config.server.port = "7778"
    with pytest.raises(ValueError):
        config.save.auto_save = "no"
    assert config.server.port == 7777
    assert config.save.auto_save is True
