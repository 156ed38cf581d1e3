"""
Grammar-rule adapters for token kinds.

Only the productions that token kinds need to plug into a grammar are defined
here: consume one token, discard a value but keep its range, and parse two
productions in sequence. Matching and tree construction are interleaved, one
rule at a time; there is no separate tokenization pass.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Set, Union

from .errors import ParseError
from .location import Location, LocationRange

if TYPE_CHECKING:
    from .token import AnyToken, TokenType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parsed:
    """Value produced by a production together with the range it covers."""
    value: Any
    range: LocationRange


class ParseContext:
    """
    State shared by the productions of a single parse.

    Holds the source text, the optional skip kind (whitespace, comments)
    consumed before every token, and the furthest failure seen so far
    with the set of kinds that were expected there.
    """

    def __init__(self, src: str, skip: Optional["TokenType"] = None):
        self.src = src
        self.skip = skip
        self.furthest = Location(0)
        self._expected: Set["TokenType"] = set()

    def skip_trivia(self, location: Location) -> Location:
        """Advances past consecutive matches of the skip kind."""
        if self.skip is None:
            return location
        while True:
            token = self.skip.match_against(self.src, location)
            # An empty skip match would never advance
            if token is None or token.range.end == location:
                return location
            location = token.range.end

    def lex(self, kind: "TokenType", location: Location) -> Optional["AnyToken"]:
        """Matches one token of ``kind`` after skipping trivia."""
        location = self.skip_trivia(location)
        token = kind.match_against(self.src, location)
        if token is None:
            self._record_failure(kind, location)
        return token

    def _record_failure(self, kind: "TokenType", location: Location) -> None:
        if location > self.furthest:
            self.furthest = location
            self._expected = {kind}
        elif location == self.furthest:
            self._expected.add(kind)

    @property
    def expected(self) -> List["TokenType"]:
        """Kinds expected at the furthest failure, in handle order."""
        return sorted(self._expected)

    def error(self) -> ParseError:
        return ParseError(self.furthest, self.expected)


class Production(ABC):
    """A parsing step producing a ``Parsed`` value or ``None``."""

    @abstractmethod
    def parse(self, cx: ParseContext, location: Location) -> Optional[Parsed]:
        pass


@dataclass(frozen=True)
class TokenRule(Production):
    """Consumes exactly one token of a kind; the value is the ``AnyToken``."""
    kind: "TokenType"

    def parse(self, cx: ParseContext, location: Location) -> Optional[Parsed]:
        token = cx.lex(self.kind, location)
        if token is None:
            return None
        return Parsed(token, token.range)


@dataclass(frozen=True)
class Discard(Production):
    """Drops the inner value, keeps its range."""
    inner: Production

    def parse(self, cx: ParseContext, location: Location) -> Optional[Parsed]:
        parsed = self.inner.parse(cx, location)
        if parsed is None:
            return None
        return Parsed(None, parsed.range)


@dataclass(frozen=True)
class DualParse(Production):
    """Parses ``first`` then ``second`` at the remaining input; the value is a pair."""
    first: Production
    second: Production

    def parse(self, cx: ParseContext, location: Location) -> Optional[Parsed]:
        left = self.first.parse(cx, location)
        if left is None:
            return None
        right = self.second.parse(cx, left.range.end)
        if right is None:
            return None
        return Parsed((left.value, right.value), left.range.join(right.range))


@dataclass(frozen=True)
class RuleRef(Production):
    """Delegates to a ``TransformRule`` class."""
    rule: type

    def parse(self, cx: ParseContext, location: Location) -> Optional[Parsed]:
        return self.rule.parse(cx, location)


class TransformRule:
    """
    A grammar rule defined by an inner production and a conversion.

    Subclasses provide ``inner()`` (the production to run) and
    ``from_inner()`` (turning its value into an instance of the rule).
    """

    @classmethod
    def inner(cls) -> Production:
        raise NotImplementedError(f"{cls.__name__} does not define an inner production")

    @classmethod
    def from_inner(cls, inner: Any, range: LocationRange) -> Any:
        raise NotImplementedError(f"{cls.__name__} does not define from_inner")

    @classmethod
    def parse(cls, cx: ParseContext, location: Location) -> Optional[Parsed]:
        parsed = cls.inner().parse(cx, location)
        if parsed is None:
            return None
        return Parsed(cls.from_inner(parsed.value, parsed.range), parsed.range)


RuleLike = Union[Production, type]


def as_production(rule: RuleLike) -> Production:
    """
    Normalizes anything usable as a rule into a production.

    Accepts a production, a ``TransformRule`` subclass, or a bare token kind
    class (consumed as a single token).
    """
    from .token import TokenDef, TokenType

    if isinstance(rule, Production):
        return rule
    if isinstance(rule, type) and issubclass(rule, TransformRule):
        return RuleRef(rule)
    if isinstance(rule, type) and issubclass(rule, TokenDef):
        return TokenRule(TokenType.of(rule))
    if isinstance(rule, TokenType):
        return TokenRule(rule)
    raise TypeError(f"Not a grammar rule: {rule!r}")


def parse(rule: RuleLike, src: str, skip: Optional[Union["TokenType", type]] = None) -> Any:
    """
    Parses the whole of ``src`` with ``rule``.

    Args:
        rule: Rule or production to apply at offset 0
        src: Source text
        skip: Optional kind consumed between tokens

    Returns:
        The rule's value

    Raises:
        ParseError: If the rule fails or does not reach the end of input
    """
    from .token import Eof, TokenType

    skip_kind = TokenType.of(skip) if isinstance(skip, type) else skip
    cx = ParseContext(src, skip=skip_kind)

    parsed = as_production(rule).parse(cx, Location(0))
    if parsed is None:
        raise cx.error()
    if cx.lex(TokenType.of(Eof), parsed.range.end) is None:
        raise cx.error()

    logger.debug(f"Parsed {len(src)} characters into {type(parsed.value).__name__}")
    return parsed.value


__all__ = [
    "Parsed",
    "ParseContext",
    "Production",
    "TokenRule",
    "Discard",
    "DualParse",
    "RuleRef",
    "TransformRule",
    "as_production",
    "parse",
]
