"""
Source redaction: hiding private regions.

This module performs the actual source transformation based on
directives found in comments. It is intentionally dumb about
configuration and filesystem traversal.

A private region is either the single line carrying a `private`
directive, or every line from a `begin_private` directive through
the matching `end_private` directive. Each region is replaced by
a placeholder comment (plus an optional failing statement), or
dropped entirely when the directive carries `no_hint`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .directives import Directive, DirectiveError, DirectiveKind, DirectiveParser
from .manifest import SyntaxConfig
from .utils import ensure_parent_dir, is_blank, leading_whitespace, split_lines


class RedactionError(RuntimeError):
    """Raised when a source file's directives are malformed or unbalanced."""


@dataclass(frozen=True)
class PrivateRegion:
    begin: int
    end: int
    directive: Directive
    indent: str = ""


class Transformer:
    def __init__(self, syntax: Optional[SyntaxConfig] = None):
        self.syntax = syntax or SyntaxConfig()
        self.parser = DirectiveParser(self.syntax.comment, self.syntax.prefix)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def redact(self, text: str) -> str:
        """
        Return the text with every private region hidden or replaced.
        """
        return "".join(self.redact_lines(split_lines(text)))

    def redact_lines(self, lines: List[str]) -> List[str]:
        output: List[str] = []
        cursor = 0

        for region in self.regions(lines):
            output.extend(lines[cursor:region.begin])
            output.extend(self.placeholder(region))
            cursor = self._resume_at(lines, region)

        output.extend(lines[cursor:])
        return output

    def redact_file(self, in_path: Path, out_path: Path) -> None:
        """
        Redact a source file, writing the result to out_path.
        """

        content = self.redact(self._read(in_path))

        ensure_parent_dir(out_path)
        with open(out_path, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)

    def check_file(self, path: Path) -> int:
        """
        Validate a source file's directives.

        Returns:
            Number of private regions in the file
        """
        return sum(1 for _ in self.regions(split_lines(self._read(path))))

    def regions(self, lines: List[str]) -> Iterator[PrivateRegion]:
        """
        Yield every private region of a file, in order.

        Raises:
            RedactionError: on the first malformed or unbalanced directive
        """

        cursor = 0
        while True:
            found = self.find_directive(lines, cursor)
            if found is None:
                return

            begin, directive = found
            region = self.resolve_region(lines, begin, directive)
            yield region
            cursor = self._resume_at(lines, region)

    def find_directive(self, lines: List[str], start: int) -> Optional[Tuple[int, Directive]]:
        """Return the first directive at or after line `start`."""
        for idx in range(start, len(lines)):
            try:
                directive = self.parser.parse(lines[idx])
            except DirectiveError as exc:
                raise RedactionError(f"failed to parse directive on line {idx + 1}") from exc

            if directive is not None:
                return idx, directive

        return None

    def resolve_region(self, lines: List[str], begin: int, directive: Directive) -> PrivateRegion:
        """
        Work out the line range covered by the directive on line `begin`.
        """

        if directive.kind is DirectiveKind.END_PRIVATE:
            raise RedactionError(f"unpaired 'end_private' on line {begin + 1}")

        indent = leading_whitespace(lines[begin])

        if directive.kind is DirectiveKind.PRIVATE:
            return PrivateRegion(begin, begin + 1, directive, indent)

        pos = begin + 1
        while True:
            found = self.find_directive(lines, pos)
            if found is None:
                raise RedactionError(f"unclosed 'begin_private' on line {begin + 1}")

            idx, inner = found
            if inner.kind is DirectiveKind.BEGIN_PRIVATE:
                raise RedactionError(f"nested 'begin_private' on line {idx + 1}")
            if inner.kind is DirectiveKind.END_PRIVATE:
                return PrivateRegion(begin, idx + 1, directive, indent)

            # A `private` line inside a block is ordinary block content
            pos = idx + 1

    def placeholder(self, region: PrivateRegion) -> List[str]:
        """Return the lines that stand in for a private region."""
        if region.directive.no_hint:
            return []

        lines = [f"{region.indent}{self.syntax.hint}\n"]
        if region.directive.unimplemented:
            lines.append(f"{region.indent}{self.syntax.unimplemented}\n")
        return lines

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _read(path: Path) -> str:
        # newline="" keeps line endings untouched
        with open(path, "r", encoding="utf-8", newline="") as fh:
            return fh.read()

    @staticmethod
    def _resume_at(lines: List[str], region: PrivateRegion) -> int:
        # Dropping a region between two blank lines would leave a double gap
        if (
            region.directive.no_hint
            and region.begin > 0
            and is_blank(lines[region.begin - 1])
            and region.end < len(lines)
            and is_blank(lines[region.end])
        ):
            return region.end + 1
        return region.end
