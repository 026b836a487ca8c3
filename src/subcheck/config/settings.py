"""Configuration schema and YAML loader.

Every tunable of the checker lives on ``Config``. The on-disk file uses
kebab-case keys (``sub-urls``); attributes use snake_case (``sub_urls``).

Usage:
    from subcheck.config.settings import load_config

    config = load_config(Path("config/config.yaml"))
    print(config.sub_urls)
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import structlog
import yaml

from subcheck.config.errors import ConfigFileError, ConfigurationError

logger = structlog.get_logger(__name__)

# Default config file path (relative to working directory)
DEFAULT_CONFIG_PATH = Path("config/config.yaml")

DEFAULT_PLATFORMS = ["openai", "youtube", "netflix", "disney", "gemini", "iprisk"]


@dataclass
class Config:
    """All settings of the checker, one attribute per YAML key."""

    print_progress: bool = False
    concurrent: int = 0
    check_interval: int = 0
    cron_expression: str = ""
    alive_test_url: str = "http://gstatic.com/generate_204"
    speed_test_url: str = ""
    download_timeout: int = 0
    download_mb: int = 20
    total_speed_limit: int = 0
    min_speed: int = 0
    timeout: int = 0
    filter_regex: str = ""

    # Result storage
    save_method: str = ""
    webdav_url: str = ""
    webdav_username: str = ""
    webdav_password: str = ""
    github_token: str = ""
    github_gist_id: str = ""
    github_api_mirror: str = ""
    worker_url: str = ""
    worker_token: str = ""
    s3_endpoint: str = ""
    s3_access_id: str = ""
    s3_secret_key: str = ""
    s3_bucket: str = ""
    s3_use_ssl: bool = False
    s3_bucket_lookup: str = ""

    # Subscriptions
    sub_urls_retry: int = 0
    sub_urls_retry_interval: int = 0
    sub_urls_timeout: int = 0
    sub_urls_get_ua: str = "clash.meta (https://github.com/beck-8/subs-check)"
    sub_urls_remote: list[str] = field(default_factory=list)
    sub_urls: list[str] = field(default_factory=list)
    success_rate: float = 0.0

    mihomo_api_url: str = ""
    mihomo_api_secret: str = ""
    listen_port: str = ":8199"
    rename_node: bool = False
    keep_success_proxies: bool = False
    output_dir: str = ""

    # Notifications
    apprise_api_server: str = ""
    recipient_url: list[str] = field(default_factory=list)
    notify_title: str = "🔔 节点状态更新"

    # Sub-Store
    sub_store_port: str = ""
    sub_store_path: str = ""
    sub_store_sync_cron: str = ""
    sub_store_push_service: str = ""
    sub_store_produce_cron: str = ""
    mihomo_overwrite_url: str = "http://127.0.0.1:8199/sub/ACL4SSR_Online_Full.yaml"

    media_check: bool = False
    platforms: list[str] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))
    success_limit: int = 0
    node_prefix: str = ""
    node_type: list[str] = field(default_factory=list)
    enable_web_ui: bool = False
    api_key: str = ""
    github_proxy: str = ""
    proxy: str = ""
    callback_script: str = ""
    remove_failed_sub: bool = False

    @classmethod
    def yaml_keys(cls) -> list[str]:
        """YAML keys in declaration order."""
        return [attr_to_key(f.name) for f in fields(cls)]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a mapping keyed by YAML key."""
        return {attr_to_key(f.name): getattr(self, f.name) for f in fields(self)}


def key_to_attr(key: str) -> str:
    """``sub-urls`` -> ``sub_urls``."""
    return key.replace("-", "_")


def attr_to_key(attr: str) -> str:
    """``sub_urls`` -> ``sub-urls``."""
    return attr.replace("_", "-")


def _scalar_to_str(key: str, value: Any) -> str:
    """Render a YAML scalar as a string (unquoted ports, numeric tokens)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigurationError(
        f"Invalid value for {key}: expected a string, got {type(value).__name__}"
    )


def _coerce_value(key: str, value: Any, type_name: str) -> Any:
    """Check a YAML value against the declared field type.

    Raises:
        ConfigurationError: If the value cannot stand in for the field type.
    """
    if type_name == "list[str]":
        if not isinstance(value, list):
            raise ConfigurationError(
                f"Invalid value for {key}: expected a list, got {type(value).__name__}"
            )
        return [_scalar_to_str(key, item) for item in value]
    if type_name == "str":
        return _scalar_to_str(key, value)
    if type_name == "bool":
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"Invalid value for {key}: expected true/false, got {value!r}"
            )
        return value
    if type_name == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(
                f"Invalid value for {key}: expected an integer, got {value!r}"
            )
        return value
    if type_name == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(
                f"Invalid value for {key}: expected a number, got {value!r}"
            )
        return float(value)
    return value


def parse_config(data: dict[str, Any]) -> Config:
    """Parse a YAML mapping into a Config.

    Unknown keys are ignored. Keys present with an empty value (``None``)
    keep their default. Numeric scalars given for string fields are kept
    as text, so ``listen-port: 8199`` reads as ``"8199"``.

    Raises:
        ConfigurationError: If a value does not match its field type.
    """
    field_types = {f.name: str(f.type) for f in fields(Config)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        attr = key_to_attr(str(key))
        if attr not in field_types:
            logger.debug("unknown_config_key", key=key)
            continue
        if value is None:
            continue
        kwargs[attr] = _coerce_value(str(key), value, field_types[attr])
    return Config(**kwargs)


def load_config(path: Path | str) -> Config:
    """Load a config file from disk.

    Args:
        path: Path to the YAML config file.

    Returns:
        Config with file values applied over the defaults.

    Raises:
        ConfigFileError: If the file cannot be read.
        ConfigurationError: If the file is not a valid YAML mapping.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(path, "Failed to read config file") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config must be a YAML mapping: {path}")

    config = parse_config(data)
    logger.debug("config_loaded", path=str(path), sub_urls=len(config.sub_urls))
    return config
