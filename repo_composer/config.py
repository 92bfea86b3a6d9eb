"""
Global constants and defaults.

This module is responsible for:
- Naming the config file and the workspace descriptor
- Defining the directive syntax recognized in source comments
- Defining the placeholder text substituted for private regions

Nothing in this file should depend on:
- the filesystem
- the config file structure
- redaction or traversal
- CLI arguments

If something here changes, every generated skeleton changes.
"""

from __future__ import annotations

from typing import Final, Tuple

# ---------------------------------------------------------------------------
# Tool versioning
# ---------------------------------------------------------------------------

TOOL_VERSION: Final[str] = "0.1.0"

# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------

CONFIG_NAME: Final[str] = ".compose.yml"

# ---------------------------------------------------------------------------
# Directive syntax
# ---------------------------------------------------------------------------

DEFAULT_COMMENT_MARKER: Final[str] = "//"
DEFAULT_DIRECTIVE_PREFIX: Final[str] = "compose::"

# Files are redacted only when their name ends with one of these
DEFAULT_SOURCE_SUFFIXES: Final[Tuple[str, ...]] = (".rs",)

# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------

HINT_TEXT: Final[str] = "TODO: your code here."
DEFAULT_UNIMPLEMENTED: Final[str] = "unimplemented!()"

# ---------------------------------------------------------------------------
# Workspace manifest
# ---------------------------------------------------------------------------

DEFAULT_PACKAGE_DESCRIPTOR: Final[str] = "Cargo.toml"


def default_hint(comment_marker: str = DEFAULT_COMMENT_MARKER) -> str:
    """Return the placeholder comment for the given comment marker."""
    return f"{comment_marker} {HINT_TEXT}"
