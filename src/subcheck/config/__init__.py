"""Configuration package for subcheck."""

from subcheck.config.editor import (
    filter_section_lines,
    remove_list_entry,
    remove_sub_url,
)
from subcheck.config.errors import (
    ConfigError,
    ConfigFileError,
    ConfigurationError,
)
from subcheck.config.handle import ConfigHandle
from subcheck.config.settings import (
    Config,
    load_config,
    parse_config,
)
from subcheck.config.template import (
    default_template,
    write_default_config,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigFileError",
    "ConfigHandle",
    "ConfigurationError",
    "default_template",
    "filter_section_lines",
    "load_config",
    "parse_config",
    "remove_list_entry",
    "remove_sub_url",
    "write_default_config",
]
