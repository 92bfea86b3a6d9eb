"""
Shared utility helpers.

This module contains small, reusable helpers that do not belong
to directive parsing, redaction, or tree synchronization.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def split_lines(text: str) -> List[str]:
    """
    Split text on newlines, keeping each line's terminator.

    Joining the result gives back the original text exactly.
    """
    parts = text.split("\n")
    tail = parts.pop()
    lines = [part + "\n" for part in parts]
    if tail:
        lines.append(tail)
    return lines


def strip_eol(line: str) -> str:
    """Return the line without its trailing line terminator."""
    return line.rstrip("\r\n")


def is_blank(line: str) -> bool:
    """Return True if the line holds only whitespace."""
    return not line.strip()


def leading_whitespace(line: str) -> str:
    """Return the indentation of a line."""
    content = strip_eol(line)
    return content[: len(content) - len(content.lstrip())]


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory of a file exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
