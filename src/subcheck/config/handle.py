"""Handle on the active configuration file.

Components that need to locate or edit the config file receive a
``ConfigHandle`` instead of reading a process-wide path.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog

from subcheck.config.editor import SUB_URLS_KEY, remove_list_entry
from subcheck.config.errors import ConfigurationError
from subcheck.config.settings import Config, load_config

logger = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "SUBCHECK_CONFIG"


@dataclass
class ConfigHandle:
    """The config file in use by the running application."""

    path: Path | None = None
    atomic: bool = True

    @classmethod
    def from_env(cls) -> "ConfigHandle":
        """Build a handle from the SUBCHECK_CONFIG environment variable."""
        value = os.environ.get(CONFIG_ENV_VAR)
        return cls(path=Path(value) if value else None)

    def require_path(self) -> Path:
        """Return the config path, or raise if none was set."""
        if self.path is None or str(self.path) == "":
            raise ConfigurationError("Config file path is not set")
        return self.path

    def load(self) -> Config:
        return load_config(self.require_path())

    def remove_sub_url(self, sub_url: str) -> int:
        """Remove a subscription URL from the file's ``sub-urls`` list."""
        return remove_list_entry(
            self.require_path(), SUB_URLS_KEY, sub_url, atomic=self.atomic
        )

    def prune_failed_subs(
        self, failed_urls: list[str], config: Config | None = None
    ) -> list[str]:
        """Drop failed subscriptions from the file when remove-failed-sub is on.

        Only URLs listed under ``sub-urls`` are touched; remote
        subscription lists are left alone.

        Returns:
            The URLs that were removed.
        """
        if config is None:
            config = self.load()
        if not config.remove_failed_sub:
            return []

        listed = set(config.sub_urls)
        removed: list[str] = []
        for url in dict.fromkeys(failed_urls):
            if url not in listed:
                continue
            if self.remove_sub_url(url):
                removed.append(url)

        if removed:
            logger.info("pruned_failed_subs", count=len(removed))
        return removed
