"""
Config loading, validation, and normalization.

This module answers one question:
    "What should the public tree contain?"

Responsibilities:
- Load the .compose.yml file
- Validate structure and entry paths
- Normalize defaults
- Expose a clean Python representation

This module does NOT:
- Parse directives
- Redact sources
- Walk the filesystem
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .config import (
    DEFAULT_COMMENT_MARKER,
    DEFAULT_DIRECTIVE_PREFIX,
    DEFAULT_PACKAGE_DESCRIPTOR,
    DEFAULT_SOURCE_SUFFIXES,
    DEFAULT_UNIMPLEMENTED,
    default_hint,
)


class ManifestError(RuntimeError):
    """Raised when the config file is missing or malformed."""


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SyntaxConfig:
    suffixes: Tuple[str, ...] = DEFAULT_SOURCE_SUFFIXES
    comment: str = DEFAULT_COMMENT_MARKER
    prefix: str = DEFAULT_DIRECTIVE_PREFIX
    hint: str = default_hint()
    unimplemented: str = DEFAULT_UNIMPLEMENTED
    package_descriptor: str = DEFAULT_PACKAGE_DESCRIPTOR

    def is_source(self, name: str) -> bool:
        return any(name.endswith(suffix) for suffix in self.suffixes)


@dataclass
class Manifest:
    entries: List[str]
    no_copy: List[str] = field(default_factory=list)
    no_remove: List[str] = field(default_factory=list)
    workspace_tools: List[str] = field(default_factory=list)
    syntax: SyntaxConfig = field(default_factory=SyntaxConfig)

    _LIST_KEYS = ("entries", "no_copy", "no_remove", "workspace_tools")
    _SYNTAX_KEYS = ("suffixes", "comment", "prefix", "hint", "unimplemented", "package_descriptor")

    # ------------------------------------------------------------------
    # Loading API
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path) -> "Manifest":
        """
        Load and validate a config file.

        Args:
            path: Path to the .compose.yml file

        Raises:
            ManifestError: if the file is missing or invalid

        Returns:
            Manifest
        """

        try:
            with open(path, "r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except FileNotFoundError as exc:
            raise ManifestError(f"config file not found: {path}") from exc
        except OSError as exc:
            raise ManifestError(f"failed to open {path}") from exc
        except yaml.YAMLError as exc:
            raise ManifestError(f"failed to parse {path}") from exc

        return cls.from_dict(raw if raw is not None else {})

    @classmethod
    def from_dict(cls, data: Any) -> "Manifest":
        if not isinstance(data, dict):
            raise ManifestError("config must be a mapping")

        unknown = set(data) - set(cls._LIST_KEYS) - {"syntax"}
        if unknown:
            raise ManifestError(f"unknown config keys: {', '.join(sorted(unknown))}")

        if "entries" not in data:
            raise ManifestError("config is missing 'entries'")

        lists = {key: cls._parse_names(data, key) for key in cls._LIST_KEYS}

        for entry in lists["entries"] + lists["workspace_tools"]:
            cls._check_relative(entry)

        return cls(syntax=cls._parse_syntax(data.get("syntax")), **lists)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_names(data: Dict[str, Any], key: str) -> List[str]:
        value = data.get(key)
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ManifestError(f"'{key}' must be a list of strings")
        return [PurePosixPath(item).as_posix() for item in value]

    @staticmethod
    def _check_relative(entry: str) -> None:
        path = PurePosixPath(entry)
        if path.is_absolute() or ".." in path.parts:
            raise ManifestError(f"entry must be a relative path inside the tree: {entry}")

    @classmethod
    def _parse_syntax(cls, data: Optional[Dict[str, Any]]) -> SyntaxConfig:
        if data is None:
            return SyntaxConfig()
        if not isinstance(data, dict):
            raise ManifestError("'syntax' must be a mapping")

        unknown = set(data) - set(cls._SYNTAX_KEYS)
        if unknown:
            raise ManifestError(f"unknown syntax keys: {', '.join(sorted(unknown))}")

        for key, value in data.items():
            if key == "suffixes":
                continue
            if not isinstance(value, str) or not value:
                raise ManifestError(f"syntax '{key}' must be a non-empty string")

        suffixes = data.get("suffixes", list(DEFAULT_SOURCE_SUFFIXES))
        if isinstance(suffixes, str):
            suffixes = [suffixes]
        if not isinstance(suffixes, list) or not all(isinstance(s, str) and s for s in suffixes):
            raise ManifestError("syntax 'suffixes' must be a list of strings")

        comment = data.get("comment", DEFAULT_COMMENT_MARKER)

        return SyntaxConfig(
            suffixes=tuple(suffixes),
            comment=comment,
            prefix=data.get("prefix", DEFAULT_DIRECTIVE_PREFIX),
            hint=data.get("hint", default_hint(comment)),
            unimplemented=data.get("unimplemented", DEFAULT_UNIMPLEMENTED),
            package_descriptor=data.get("package_descriptor", DEFAULT_PACKAGE_DESCRIPTOR),
        )

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def spare_set(self, extra=()) -> set:
        """
        Return the names never pruned from the output root.
        """

        return set(self.entries) | set(self.no_remove) | {PurePosixPath(name).as_posix() for name in extra}
