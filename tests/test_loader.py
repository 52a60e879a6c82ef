import json
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tshock_config import ConfigError, Configuration, load_config, load_config_from_mapping
from tshock_config.types import ServerPvpMode, ServerTimeMode


def _write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_missing_base_file_loads_defaults(tmp_path):
    loaded = load_config(tmp_path / "config.json")
    assert loaded.config == Configuration()
    assert loaded.layers == []


def test_partial_group_keeps_other_defaults():
    loaded = load_config_from_mapping({"Server": {"Port": 7778}})
    config = loaded.config
    assert config.server.port == 7778
    assert config.server.max_player_slots == 8
    assert config.server.reserved_slots == 0
    assert config.server.server_name is None
    expected = Configuration()
    expected.server.port = 7778
    assert config == expected


def test_optional_fields_absent_and_null():
    omitted = load_config_from_mapping({}).config
    assert omitted.server.server_name is None
    assert omitted.server.password is None
    assert omitted.protection.spawn_protection_radius == 10
    assert omitted.authentication.maximum_login_attempts == 3

    nulled = load_config_from_mapping(
        {
            "Protection": {"SpawnProtectionRadius": None},
            "Authentication": {"MaximumLoginAttempts": None},
        }
    ).config
    assert nulled.protection.spawn_protection_radius is None
    assert nulled.authentication.maximum_login_attempts is None


@pytest.mark.parametrize("slots", [0, 1, 128, 255])
def test_max_player_slots_accepts_full_byte_range(slots):
    config = load_config_from_mapping({"Server": {"MaxPlayerSlots": slots, "ReservedSlots": slots}}).config
    assert config.server.max_player_slots == slots
    assert config.server.reserved_slots == slots


@pytest.mark.parametrize("slots", [-1, 256, 1000, 12.5])
def test_max_player_slots_rejects_out_of_range(slots):
    with pytest.raises(ConfigError):
        load_config_from_mapping({"Server": {"MaxPlayerSlots": slots}})


def test_enums_parse_by_name():
    config = load_config_from_mapping({"Game": {"PvpMode": "Always", "TimeMode": "Frozen"}}).config
    assert config.game.pvp_mode is ServerPvpMode.ALWAYS
    assert config.game.time_mode is ServerTimeMode.FROZEN


def test_unknown_enum_value_is_rejected():
    with pytest.raises(ConfigError) as excinfo:
        load_config_from_mapping({"Game": {"PvpMode": "Sometimes"}})
    assert "PvpMode" in str(excinfo.value)


def test_null_group_is_rejected():
    with pytest.raises(ConfigError):
        load_config_from_mapping({"Server": None})


def test_non_mapping_input_is_rejected():
    with pytest.raises(ConfigError):
        load_config_from_mapping(["Server"])


def test_layers_merge_in_priority_order(tmp_path):
    base = _write_json(tmp_path / "config.json", {"Server": {"Port": 7000, "MaxPlayerSlots": 16}})
    _write_json(tmp_path / "config.event.json", {"Server": {"MaxPlayerSlots": 32}, "Game": {"ForceHalloween": True}})
    _write_json(tmp_path / "config.local.json", {"Server": {"Port": 7001}})

    loaded = load_config(base, profile="event")

    assert loaded.config.server.port == 7001
    assert loaded.config.server.max_player_slots == 32
    assert loaded.config.game.force_halloween is True
    assert loaded.layers == [
        str(tmp_path / "config.json"),
        str(tmp_path / "config.event.json"),
        str(tmp_path / "config.local.json"),
    ]


def test_profile_layer_skipped_without_profile(tmp_path):
    base = _write_json(tmp_path / "config.json", {})
    _write_json(tmp_path / "config.event.json", {"Server": {"Port": 9999}})
    loaded = load_config(base)
    assert loaded.config.server.port == 7777
    assert loaded.layers == [str(base)]


def test_extra_layers_and_inline_overrides(tmp_path):
    base = _write_json(tmp_path / "config.json", {"Commands": {"CommandPrefix": "!"}})
    extra = tmp_path / "extra.yaml"
    extra.write_text("Commands:\n  SilentCommandPrefix: '~'\nServer:\n  Port: 7100\n", encoding="utf-8")

    loaded = load_config(
        base,
        extra_layers=[extra, tmp_path / "missing.yaml"],
        inline_overrides={"Server": {"Port": 7200}},
    )

    assert loaded.config.commands.command_prefix == "!"
    assert loaded.config.commands.silent_command_prefix == "~"
    assert loaded.config.server.port == 7200
    assert loaded.layers == [str(base), str(extra)]


def test_yaml_base_file(tmp_path):
    base = tmp_path / "config.yaml"
    base.write_text(
        "Server:\n  ServerName: My World\nServerSideCharacters:\n  EnableServerSideCharacters: true\n",
        encoding="utf-8",
    )
    config = load_config(base).config
    assert config.server.server_name == "My World"
    assert config.server_side_characters.enable_server_side_characters is True


def test_environment_placeholders_are_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("TSHOCK_TEST_PASSWORD", "hunter22")
    base = _write_json(tmp_path / "config.json", {"Server": {"Password": "${TSHOCK_TEST_PASSWORD}"}})
    assert load_config(base).config.server.password == "hunter22"


def test_empty_files_load_as_defaults(tmp_path):
    (tmp_path / "config.json").write_text("", encoding="utf-8")
    assert load_config(tmp_path / "config.json").config == Configuration()


def test_malformed_json_raises_config_error(tmp_path):
    base = tmp_path / "config.json"
    base.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        load_config(base)
    assert str(base) in str(excinfo.value)


def test_top_level_list_raises_config_error(tmp_path):
    base = tmp_path / "config.yaml"
    base.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(base)


def test_unsupported_suffix_raises_config_error(tmp_path):
    base = tmp_path / "config.toml"
    base.write_text("", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(base)


def test_loaded_config_exposes_frozen_view():
    loaded = load_config_from_mapping({"Server": {"Port": 7778}})
    assert loaded.frozen.get("Server.Port") == 7778
    assert loaded.frozen["Authentication"]["BCryptWorkFactor"] == 7


def test_undecodable_bytes_raise_config_error(tmp_path):
    base = tmp_path / "config.json"
    base.write_bytes(b'{"Server": {"ServerName": "\xff\xfe"}}')
    with pytest.raises(ConfigError) as excinfo:
        load_config(base)
    assert str(base) in str(excinfo.value)


def test_byte_order_mark_is_accepted(tmp_path):
    base = tmp_path / "config.json"
    base.write_bytes(b'\xef\xbb\xbf{"Server": {"Port": 7778}}')
    assert load_config(base).config.server.port == 7778


@pytest.mark.parametrize(
    "data",
    [
        {"Server": {"Port": True}},
        {"Server": {"Port": "7778"}},
        {"Server": {"MaxPlayerSlots": 8.0}},
        {"Authentication": {"EnableRequireLogin": "yes"}},
        {"Save": {"AutoSave": 1}},
        {"Commands": {"CommandPrefix": 1}},
    ],
)
def test_values_of_the_wrong_type_are_rejected(data):
    with pytest.raises(ConfigError):
        load_config_from_mapping(data)
