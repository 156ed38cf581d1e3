"""
Exceptions raised by the token layer.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from LexkitUserError.

Grammar definition mistakes (bad patterns, bad declarations) are programming
errors: they raise PatternDefinitionError and propagate with full tracebacks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .location import Location
    from .token import TokenType


class LexkitUserError(Exception):
    """
    Base class for all user-facing errors in lexkit.

    These errors indicate problems with the input text being lexed or parsed,
    not with the grammar itself.
    """
    pass


class PatternDefinitionError(ValueError):
    """
    Malformed token declaration.

    Raised for a regular expression that fails to compile, a capture group index
    that does not exist in the pattern, or an inconsistent declaration.
    Fatal for the grammar that contains it.
    """

    def __init__(self, message: str, pattern: str | None = None):
        super().__init__(message)
        self.pattern = pattern


def _describe_expected(expected: Sequence["TokenType"]) -> str:
    names = [kind.display_name() for kind in expected]
    if not names:
        return "nothing"
    if len(names) == 1:
        return names[0]
    return "one of " + ", ".join(names)


class LexError(LexkitUserError):
    """No token kind of a table matched at a location."""

    def __init__(self, location: "Location", expected: Sequence["TokenType"]):
        super().__init__(
            f"Unexpected input at offset {location.position}: expected {_describe_expected(expected)}"
        )
        self.location = location
        self.expected = tuple(expected)


class ParseError(LexkitUserError):
    """A grammar rule could not be parsed; reports the furthest failure."""

    def __init__(self, location: "Location", expected: Sequence["TokenType"]):
        super().__init__(
            f"Parse error at offset {location.position}: expected {_describe_expected(expected)}"
        )
        self.location = location
        self.expected = tuple(expected)


__all__ = ["LexkitUserError", "PatternDefinitionError", "LexError", "ParseError"]
