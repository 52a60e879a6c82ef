"""Configuration schema and loading pipeline for a TShock server."""

from .schema import Configuration, DEFAULT_CONFIG  # noqa: F401
from .loader import ConfigError, LoadedConfig, load_config, load_config_from_mapping, PRIORITY  # noqa: F401
from .writer import dump_config, save_config, upgrade_file  # noqa: F401
from .freeze import FrozenConfig  # noqa: F401
from .store import ConfigStore  # noqa: F401
from .types import ServerCharacterMode, ServerPvpMode, ServerTimeMode  # noqa: F401
