"""Default configuration template.

The template ships as package data (``config.example.yaml``) and documents
every setting with its default value. It is only used to seed new config
files.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import structlog

from subcheck.config.errors import ConfigFileError

logger = structlog.get_logger(__name__)

TEMPLATE_NAME = "config.example.yaml"


def default_template() -> str:
    """Return the text of the bundled default config."""
    return resources.files("subcheck.config").joinpath(TEMPLATE_NAME).read_text(
        encoding="utf-8"
    )


def write_default_config(path: Path | str, overwrite: bool = False) -> bool:
    """Seed a config file from the default template.

    Args:
        path: Destination config file.
        overwrite: Replace an existing file.

    Returns:
        True if the file was written, False if it already existed.
    """
    path = Path(path)
    if path.exists() and not overwrite:
        logger.debug("config_exists_skip_template", path=str(path))
        return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(default_template(), encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(path, "Failed to write default config") from e

    logger.info("default_config_written", path=str(path))
    return True
