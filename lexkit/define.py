"""
Declarative token definitions.

Builds complete token kinds from a short description: an exact literal or a
regular expression (optionally with a capture group), optionally carrying a
payload parsed right after the token. Each generated kind comes with default
debug/display formatting and a grammar-rule adapter.

Example:
    Let = define_token("Let", exact="let")
    Ident = define_token("Ident", regex=r"[A-Za-z_]\\w*")
    Pixels = define_token("Pixels", regex=r"(\\d+)px", capture=1)
    Neg = define_token("Neg", exact="-", payload=Number)
"""

from __future__ import annotations

import enum
import logging
import types
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Optional, TextIO, Tuple

from .errors import PatternDefinitionError
from .lexing import LazyPattern, lex_exact, lex_regex
from .location import Location, LocationRange
from .rules import Discard, DualParse, Production, RuleLike, TokenRule, TransformRule, as_production
from .token import TokenDef, TokenType, quote_text

logger = logging.getLogger(__name__)


class Strategy(enum.Enum):
    """How a declared kind recognizes itself."""
    EXACT = "exact"
    REGEX = "regex"


@dataclass(frozen=True)
class TokenDecl:
    """
    Declaration of a token kind.

    Attributes:
        name: Declared name of the kind (a Python identifier)
        strategy: Matching strategy
        pattern: Literal text (EXACT) or regular expression source (REGEX)
        capture: Capture group whose extent forms the matched range (REGEX only)
        payload: Rule parsed after the token; makes the kind value-carrying
        doc: Docstring for the generated class
        module: Module the generated class reports as its own
    """
    name: str
    strategy: Strategy
    pattern: str
    capture: int = 0
    payload: Optional[RuleLike] = None
    doc: Optional[str] = None
    module: Optional[str] = None

    def __post_init__(self):
        if not self.name.isidentifier():
            raise PatternDefinitionError(f"Token name must be an identifier, got {self.name!r}")
        if self.strategy is Strategy.EXACT:
            if not self.pattern:
                raise PatternDefinitionError(f"Token '{self.name}' declares an empty literal")
            if self.capture:
                raise PatternDefinitionError(
                    f"Token '{self.name}' declares a capture group on an exact literal",
                    self.pattern,
                )
        if self.capture < 0:
            raise PatternDefinitionError(
                f"Token '{self.name}' declares a negative capture group {self.capture}",
                self.pattern,
            )


# ---------------------------- Matching strategies ----------------------------

class ExactToken(TokenDef):
    """Kind matching a fixed literal."""

    declaration: ClassVar[TokenDecl]
    _token_name: ClassVar[str]

    @classmethod
    def try_match(cls, src: str, location: Location) -> Optional[LocationRange]:
        return lex_exact(cls.declaration.pattern, src, location)

    @classmethod
    def name(cls) -> str:
        return cls._token_name

    @classmethod
    def display_name(cls) -> str:
        return cls.declaration.name

    @classmethod
    def print_debug(cls, src: str, range: LocationRange, out: TextIO) -> None:
        out.write(f"{cls.declaration.name}({quote_text(range.text(src))})")

    @classmethod
    def print_display(cls, src: str, range: LocationRange, out: TextIO) -> None:
        # Shows what was expected, not what was found
        out.write(cls.declaration.pattern)


class RegexToken(TokenDef):
    """Kind matching a regular expression anchored at the location."""

    declaration: ClassVar[TokenDecl]
    lazy_pattern: ClassVar[LazyPattern]
    _token_name: ClassVar[str]

    @classmethod
    def try_match(cls, src: str, location: Location) -> Optional[LocationRange]:
        return lex_regex(cls.lazy_pattern, src, location)

    @classmethod
    def name(cls) -> str:
        return cls._token_name

    @classmethod
    def display_name(cls) -> str:
        return cls.declaration.name

    @classmethod
    def print_debug(cls, src: str, range: LocationRange, out: TextIO) -> None:
        out.write(f"<{cls.declaration.name} {quote_text(range.text(src))}>")

    @classmethod
    def prepare(cls) -> None:
        cls.lazy_pattern.get()


# ------------------------------ Grammar values -------------------------------

@dataclass(frozen=True)
class MarkerValue:
    """Matched instance of a marker kind: just the token's range."""
    range: LocationRange

    @classmethod
    def inner(cls) -> Production:
        return TokenRule(TokenType.of(cls))

    @classmethod
    def from_inner(cls, inner: Any, range: LocationRange) -> Any:
        return cls(range=inner.range)

    def debug(self, src: str) -> str:
        return type(self).format_debug(src, self.range)

    def display(self, src: str) -> str:
        return type(self).format_display(src, self.range)


@dataclass(frozen=True)
class PayloadValue:
    """Matched instance of a value-carrying kind: the token plus its payload."""
    range: LocationRange
    value: Any

    payload: ClassVar[RuleLike]

    @classmethod
    def inner(cls) -> Production:
        return DualParse(Discard(TokenRule(TokenType.of(cls))), as_production(cls.payload))

    @classmethod
    def from_inner(cls, inner: Tuple[None, Any], range: LocationRange) -> Any:
        _, value = inner
        return cls(range=range, value=value)

    def debug(self, src: str) -> str:
        return f"{type(self).declaration.name}({self.value!r})"

    def display(self, src: str) -> str:
        return type(self).format_display(src, self.range)


_STRATEGY_BASES: Dict[Strategy, type] = {
    Strategy.EXACT: ExactToken,
    Strategy.REGEX: RegexToken,
}


def build_token(decl: TokenDecl, mixins: Tuple[type, ...] = ()) -> type:
    """
    Creates the token kind class described by ``decl``.

    Args:
        decl: Token declaration
        mixins: Classes placed first in the bases; their methods override the
            defaults and may delegate to them with ``super()``

    Returns:
        The generated class: a token kind, a grammar rule, and the type of
        the values that rule produces
    """
    value_base = MarkerValue if decl.payload is None else PayloadValue
    bases = (*mixins, value_base, _STRATEGY_BASES[decl.strategy], TransformRule)

    ns: Dict[str, Any] = {"declaration": decl}
    ns["__doc__"] = decl.doc
    ns["__qualname__"] = decl.name
    ns["__module__"] = decl.module or __name__
    if decl.strategy is Strategy.REGEX:
        ns["lazy_pattern"] = LazyPattern(decl.pattern, decl.capture)
        ns["_token_name"] = decl.name
    else:
        ns["_token_name"] = repr(decl.pattern)
    if decl.payload is not None:
        ns["payload"] = decl.payload

    cls = types.new_class(decl.name, bases, exec_body=lambda body: body.update(ns))

    logger.debug(
        f"Defined token kind {decl.name} ({decl.strategy.value} {decl.pattern!r}, "
        f"capture={decl.capture}, payload={decl.payload is not None})"
    )
    return cls


def _make_decl(
        name: str,
        exact: Optional[str],
        regex: Optional[str],
        capture: Optional[int],
        payload: Optional[RuleLike],
        doc: Optional[str],
        module: Optional[str],
) -> TokenDecl:
    if (exact is None) == (regex is None):
        raise PatternDefinitionError(f"Token '{name}' must declare exactly one of exact= or regex=")
    if exact is not None:
        if capture is not None:
            raise PatternDefinitionError(
                f"Token '{name}' declares a capture group on an exact literal", exact
            )
        return TokenDecl(name, Strategy.EXACT, exact, payload=payload, doc=doc, module=module)
    return TokenDecl(
        name, Strategy.REGEX, regex, capture=capture or 0, payload=payload, doc=doc, module=module
    )


def define_token(
        name: str,
        *,
        exact: Optional[str] = None,
        regex: Optional[str] = None,
        capture: Optional[int] = None,
        payload: Optional[RuleLike] = None,
        doc: Optional[str] = None,
        module: Optional[str] = None,
) -> type:
    """
    Declares a token kind.

    Args:
        name: Name of the kind
        exact: Literal to match exactly
        regex: Regular expression to match at the location
        capture: Capture group forming the matched range (regex only, default 0)
        payload: Rule parsed after the token, making the kind value-carrying
        doc: Docstring of the generated class
        module: Module the generated class reports (pass ``__name__``; defaults
            to ``lexkit.define``)

    Returns:
        The generated token kind class

    Raises:
        PatternDefinitionError: For an inconsistent declaration. Pattern
            compilation errors surface on first use or on ``prepare()``.
    """
    decl = _make_decl(name, exact, regex, capture, payload, doc, module)
    return build_token(decl)


def token(
        *,
        exact: Optional[str] = None,
        regex: Optional[str] = None,
        capture: Optional[int] = None,
        payload: Optional[RuleLike] = None,
) -> Callable[[type], type]:
    """
    Class decorator form of ``define_token``.

    The decorated class provides the name, docstring and module, and becomes
    the first base of the generated kind: its methods (for instance an
    overridden ``print_display``) take precedence and can reach the defaults
    through ``super()``.
    """

    def wrap(cls: type) -> type:
        decl = _make_decl(cls.__name__, exact, regex, capture, payload, cls.__doc__, cls.__module__)
        return build_token(decl, (cls,))

    return wrap


__all__ = [
    "Strategy",
    "TokenDecl",
    "ExactToken",
    "RegexToken",
    "MarkerValue",
    "PayloadValue",
    "build_token",
    "define_token",
    "token",
]
