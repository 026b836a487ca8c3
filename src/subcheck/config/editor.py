"""Line-based editing of list sections in the config file.

Removes entries from a top-level YAML list (``sub-urls`` and friends)
without a parse/serialize round trip, so comments, blank lines and
formatting of every other line survive byte for byte.

Scanning rules:
- A line whose stripped text is ``<key>:`` or ``<key>: []`` opens the section.
- Inside the section, a line starting with a space is an item candidate:
  if its first non-blank character is ``-``, the rest of the line
  (stripped) is the entry value.
- Blank lines and ``#`` comments never close the section.
- Any other non-empty line is a new top-level key and closes it.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

import structlog

from subcheck.config.errors import ConfigFileError, ConfigurationError

logger = structlog.get_logger(__name__)

SUB_URLS_KEY = "sub-urls"
ITEM_MARKER = "-"
COMMENT_MARKER = "#"


def _header_forms(section_key: str) -> tuple[str, str]:
    """Return the bare and empty-list header lines for a section key."""
    key = section_key.strip()
    if key.endswith("[]"):
        key = key[:-2].rstrip()
    key = key.rstrip(":").rstrip()
    if not key:
        raise ConfigurationError("Section key must not be empty")
    return f"{key}:", f"{key}: []"


def _entry_value(body: str) -> str | None:
    """Value of a list entry line, or None if the line is not an entry."""
    content = body.lstrip()
    if not content.startswith(ITEM_MARKER):
        return None
    return content[len(ITEM_MARKER):].strip()


def filter_section_lines(
    lines: list[str], section_key: str, target: str
) -> tuple[list[str], list[int]]:
    """Drop every entry of ``section_key`` whose value equals ``target``.

    Args:
        lines: Lines of the document, each with its original terminator.
        section_key: List key, with or without the trailing colon.
        target: Exact entry value to remove.

    Returns:
        (kept lines, 1-based numbers of the removed lines)
    """
    headers = _header_forms(section_key)
    kept: list[str] = []
    removed: list[int] = []
    inside = False

    for lineno, line in enumerate(lines, start=1):
        body = line.rstrip("\r\n")

        if not inside and body.strip() in headers:
            inside = True
            kept.append(line)
            continue

        if inside:
            if body.startswith(" "):
                if _entry_value(body) == target:
                    removed.append(lineno)
                    continue
            elif body and not body.startswith(COMMENT_MARKER):
                inside = False

        kept.append(line)

    return kept, removed


def _read_lines(path: Path) -> list[str]:
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            return f.readlines()
    except FileNotFoundError as e:
        raise ConfigFileError(path, "Config file not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(path, "Failed to read config file") from e


def _write_in_place(path: Path, content: str) -> None:
    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise ConfigFileError(path, "Failed to save config file") from e


def _write_atomic(path: Path, content: str) -> None:
    # Write next to the target so os.replace stays on one filesystem.
    target = path.resolve()
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
    except OSError as e:
        raise ConfigFileError(path, "Failed to save config file") from e

    tmp_path = Path(tmp_name)
    try:
        try:
            f = os.fdopen(fd, "w", encoding="utf-8", newline="")
        except OSError:
            os.close(fd)
            raise
        with f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        shutil.copymode(target, tmp_path)
        os.replace(tmp_path, target)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise ConfigFileError(path, "Failed to save config file") from e


def remove_list_entry(
    path: Path | str | None,
    section_key: str,
    target: str,
    *,
    atomic: bool = True,
) -> int:
    """Remove matching entries from a list section of a config file.

    Every entry of the section whose value equals ``target`` is dropped;
    all other lines are written back unchanged. No match rewrites the file
    with identical content.

    Args:
        path: Config file to edit in place.
        section_key: List key, e.g. ``"sub-urls"``.
        target: Exact entry value to remove.
        atomic: Replace the file through a temporary sibling instead of
            truncating and rewriting it.

    Returns:
        Number of lines removed.

    Raises:
        ConfigurationError: If the path or section key is empty.
        ConfigFileError: If the file cannot be read or written.
    """
    if path is None or str(path) == "":
        raise ConfigurationError("Config file path is not set")
    path = Path(path)

    lines = _read_lines(path)
    kept, removed = filter_section_lines(lines, section_key, target)

    for lineno in removed:
        logger.info(
            "removed_list_entry",
            path=str(path),
            section=section_key,
            value=target,
            line=lineno,
        )

    content = "".join(kept)
    if atomic:
        _write_atomic(path, content)
    else:
        _write_in_place(path, content)

    return len(removed)


def remove_sub_url(path: Path | str | None, sub_url: str, *, atomic: bool = True) -> int:
    """Remove a subscription URL from the ``sub-urls`` list."""
    return remove_list_entry(path, SUB_URLS_KEY, sub_url, atomic=atomic)
