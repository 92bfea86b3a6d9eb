"""
Tree mirroring and pruning.

This module is responsible for:
- walking the declared entries of the private tree
- redacting recognized source files into the public tree
- copying every other file byte-for-byte
- pruning top-level public entries that are no longer declared

This module does NOT:
- parse directives or decide what is private
- load configuration files
- write the workspace manifest
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .manifest import SyntaxConfig
from .transformer import RedactionError, Transformer
from .utils import ensure_parent_dir, remove_path


class SyncError(RuntimeError):
    """Raised when mirroring or pruning fails."""


@dataclass
class SyncReport:
    redacted: List[Path] = field(default_factory=list)
    copied: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.redacted) + len(self.copied)


class TreeSynchronizer:
    def __init__(
        self,
        in_root: str | Path,
        out_root: str | Path,
        transformer: Optional[Transformer] = None,
        excluded: Iterable[str] = (),
    ):
        self.in_root = Path(in_root)
        self.out_root = Path(out_root)
        self.transformer = transformer or Transformer()
        self.syntax: SyntaxConfig = self.transformer.syntax
        self.excluded = frozenset(excluded)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def walk(
        self, entries: Iterable[str], report: Optional[SyncReport] = None
    ) -> Iterator[Tuple[Path, Path]]:
        """
        Walk the declared entries and yield (input file, output file) pairs.

        Entries are paths relative to the input root. Exclusion matches
        bare names, at every depth, the entries themselves included.
        """

        for entry in entries:
            yield from self._walk(self.in_root / entry, self.out_root / entry, report)

    def sync(self, entries: Iterable[str]) -> SyncReport:
        """
        Mirror each declared entry of the input tree into the output tree.
        """

        report = SyncReport()
        for in_path, out_path in self.walk(entries, report):
            self.copy_file(in_path, out_path, report)
        return report

    def check(self, entries: Iterable[str]) -> int:
        """
        Validate the directives of every source file without writing.

        Returns:
            Number of private regions found
        """

        regions = 0
        for in_path, _ in self.walk(entries):
            if not in_path.is_file():
                raise SyncError(f"failed to read {in_path}")
            if not self.syntax.is_source(in_path.name):
                continue
            try:
                regions += self.transformer.check_file(in_path)
            except (OSError, UnicodeError, RedactionError) as exc:
                raise SyncError(f"failed to process file {in_path}") from exc
        return regions

    def copy_file(self, in_path: Path, out_path: Path, report: SyncReport) -> None:
        try:
            ensure_parent_dir(out_path)
        except OSError as exc:
            raise SyncError(f"failed to create dir {out_path.parent}") from exc

        if self.syntax.is_source(in_path.name):
            try:
                self.transformer.redact_file(in_path, out_path)
            except (OSError, UnicodeError, RedactionError) as exc:
                raise SyncError(f"failed to process file {in_path}") from exc
            report.redacted.append(out_path)
        else:
            try:
                shutil.copy(in_path, out_path)
            except OSError as exc:
                raise SyncError(f"failed to copy {in_path} to {out_path}") from exc
            report.copied.append(out_path)

    def prune(self, spare: Iterable[str]) -> List[Path]:
        """
        Remove every top-level output entry whose name is not spared.

        Kept directories are not descended into.

        Returns:
            The removed paths
        """

        spare = set(spare)
        try:
            children = sorted(self.out_root.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise SyncError(f"failed to read dir {self.out_root}") from exc

        removed: List[Path] = []
        for child in children:
            if child.name in spare:
                continue
            try:
                remove_path(child)
            except OSError as exc:
                raise SyncError(f"failed to remove {child}") from exc
            removed.append(child)

        return removed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _walk(
        self, in_path: Path, out_path: Path, report: Optional[SyncReport]
    ) -> Iterator[Tuple[Path, Path]]:
        if in_path.name in self.excluded:
            if report is not None:
                report.skipped.append(in_path)
            return

        if not in_path.is_dir():
            yield in_path, out_path
            return

        # Output directories are created lazily, when a file lands in them
        try:
            children = sorted(in_path.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise SyncError(f"failed to read dir {in_path}") from exc

        for child in children:
            yield from self._walk(child, out_path / child.name, report)
