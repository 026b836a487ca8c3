"""Tests for ConfigHandle."""

import pytest

from subcheck.config.errors import ConfigurationError
from subcheck.config.handle import CONFIG_ENV_VAR, ConfigHandle
from subcheck.config.settings import parse_config


class TestConfigHandlePath:
    """Tests for path resolution."""

    def test_unset_path_raises(self):
        with pytest.raises(ConfigurationError):
            ConfigHandle().require_path()

    def test_remove_without_path_raises(self):
        with pytest.raises(ConfigurationError):
            ConfigHandle().remove_sub_url("http://a.example/sub")

    def test_from_env(self, monkeypatch, config_file):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert ConfigHandle.from_env().require_path() == config_file

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert ConfigHandle.from_env().path is None

    def test_load(self, config_file):
        config = ConfigHandle(path=config_file).load()
        assert config.sub_urls == ["http://a.example/sub", "http://b.example/sub"]


class TestConfigHandleEdits:
    """Tests for edits through the handle."""

    def test_remove_sub_url(self, config_file):
        handle = ConfigHandle(path=config_file)

        assert handle.remove_sub_url("http://a.example/sub") == 1
        assert handle.load().sub_urls == ["http://b.example/sub"]

    def test_prune_disabled_is_noop(self, config_file, sample_config_text):
        handle = ConfigHandle(path=config_file)

        removed = handle.prune_failed_subs(["http://a.example/sub"])

        assert removed == []
        assert config_file.read_text(encoding="utf-8") == sample_config_text

    def test_prune_enabled(self, write_config):
        path = write_config(
            "remove-failed-sub: true\n"
            "sub-urls-remote:\n"
            "  - http://remote.example/list\n"
            "sub-urls:\n"
            "  - http://a.example/sub\n"
            "  - http://b.example/sub\n"
        )
        handle = ConfigHandle(path=path)

        removed = handle.prune_failed_subs(
            ["http://a.example/sub", "http://remote.example/list", "http://a.example/sub"]
        )

        assert removed == ["http://a.example/sub"]
        config = handle.load()
        assert config.sub_urls == ["http://b.example/sub"]
        assert config.sub_urls_remote == ["http://remote.example/list"]

    def test_prune_with_explicit_config(self, config_file):
        """A caller-supplied Config decides whether pruning happens."""
        handle = ConfigHandle(path=config_file)
        config = parse_config(
            {"remove-failed-sub": True, "sub-urls": ["http://b.example/sub"]}
        )

        assert handle.prune_failed_subs(["http://b.example/sub"], config) == [
            "http://b.example/sub"
        ]
        assert handle.load().sub_urls == ["http://a.example/sub"]
