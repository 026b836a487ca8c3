"""Shared fixtures for subcheck tests."""

from pathlib import Path

import pytest

SAMPLE_CONFIG = """\
# subcheck config
concurrent: 20
sub-urls:
  - http://a.example/sub
  # a comment
  - http://b.example/sub
timeout: 30
"""


@pytest.fixture
def sample_config_text() -> str:
    """Config text with a short sub-urls list."""
    return SAMPLE_CONFIG


@pytest.fixture
def config_file(tmp_path: Path, sample_config_text: str) -> Path:
    """Sample config written to a temporary file."""
    path = tmp_path / "config.yaml"
    path.write_text(sample_config_text, encoding="utf-8")
    return path


@pytest.fixture
def write_config(tmp_path: Path):
    """Factory writing arbitrary config text, returning the path."""

    def _write(text: str, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write
