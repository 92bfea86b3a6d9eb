"""
Directive parsing.

Given a single line of source text, this module decides:
- whether the line carries a compose directive
- which directive it is
- which properties modify it

Directives DO NOT redact anything. They only describe what was found.

Syntax (inside a comment):

    // compose::<keyword>[(<property>[,<property>...])]

keywords:   private | begin_private | end_private
properties: no_hint | unimplemented
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .config import DEFAULT_COMMENT_MARKER, DEFAULT_DIRECTIVE_PREFIX
from .utils import strip_eol


class DirectiveError(RuntimeError):
    """Raised when a line carries a malformed directive."""


class DirectiveKind(Enum):
    PRIVATE = "private"
    BEGIN_PRIVATE = "begin_private"
    END_PRIVATE = "end_private"


class DirectiveProperty(Enum):
    NO_HINT = "no_hint"
    UNIMPLEMENTED = "unimplemented"


_PROPERTIES = {prop.value: prop for prop in DirectiveProperty}


@dataclass(frozen=True)
class Directive:
    kind: DirectiveKind
    properties: FrozenSet[DirectiveProperty] = frozenset()

    @property
    def no_hint(self) -> bool:
        return DirectiveProperty.NO_HINT in self.properties

    @property
    def unimplemented(self) -> bool:
        return DirectiveProperty.UNIMPLEMENTED in self.properties


class DirectiveParser:
    def __init__(
        self,
        comment_marker: str = DEFAULT_COMMENT_MARKER,
        prefix: str = DEFAULT_DIRECTIVE_PREFIX,
    ):
        self.comment_marker = comment_marker
        self.prefix = prefix

    def parse(self, line: str) -> Optional[Directive]:
        """
        Decode the directive carried by a line.

        Returns:
            Directive, or None if the line has no directive

        Raises:
            DirectiveError: if the directive is malformed
        """

        pos = line.find(self.comment_marker)
        if pos < 0:
            return None
        comment = line[pos + len(self.comment_marker):]

        pos = comment.find(self.prefix)
        if pos < 0:
            return None
        command = strip_eol(comment[pos + len(self.prefix):])

        kind, rest = self._parse_kind(command)
        return Directive(kind=kind, properties=self._parse_properties(rest))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_kind(command: str) -> Tuple[DirectiveKind, str]:
        for kind in DirectiveKind:
            if not command.startswith(kind.value):
                continue

            rest = command[len(kind.value):]
            # The keyword must end at a word boundary: "privateX" is not "private"
            if not rest or rest[0].isspace() or rest[0] == "(":
                return kind, rest

        raise DirectiveError(f"unknown compose command: {command.strip()}")

    @staticmethod
    def _parse_properties(rest: str) -> FrozenSet[DirectiveProperty]:
        open_pos = rest.find("(")
        if open_pos < 0:
            return frozenset()
        if rest[:open_pos].strip():
            raise DirectiveError(f"unexpected text before '(': {rest[:open_pos].strip()}")

        trimmed = rest.rstrip()
        if not trimmed.endswith(")"):
            raise DirectiveError("unclosed '('")

        inner = trimmed[open_pos + 1 : -1]
        if not inner.strip():
            return frozenset()

        properties = set()
        for token in inner.split(","):
            token = token.strip()
            if token not in _PROPERTIES:
                raise DirectiveError(f"unknown property: {token}")
            properties.add(_PROPERTIES[token])

        return frozenset(properties)
