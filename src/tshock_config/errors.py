class ConfigError(ValueError):
    """A configuration source could not be read or does not fit the schema."""
