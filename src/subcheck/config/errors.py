"""Configuration error types."""

from pathlib import Path


class ConfigError(Exception):
    """Base class for configuration failures."""


class ConfigurationError(ConfigError):
    """Raised when the configuration itself is unusable (unset path, bad YAML)."""


class ConfigFileError(ConfigError):
    """Raised when the config file cannot be read or written."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {path}")
