"""
Token kinds and their runtime identity.

A token kind is a class deriving from ``TokenDef``; its matching and
formatting behavior lives in class methods, so each kind is a distinct type.
``TokenType`` erases a kind into a small, comparable, hashable handle that
can still invoke the kind's matching logic. ``AnyToken`` pairs a handle
with the range it matched.
"""

from __future__ import annotations

import functools
import io
import itertools
import json
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Optional, TextIO

from .location import Location, LocationRange
from .rules import Discard, Production, TokenRule, TransformRule

# Identity tokens are drawn from a single counter for the whole process
_TOKEN_IDS = itertools.count(1)
_TOKEN_IDS_LOCK = threading.Lock()


def quote_text(text: str) -> str:
    """Double-quoted, escaped rendering of matched text."""
    return json.dumps(text, ensure_ascii=False)


class TokenDef(ABC):
    """
    Contract every lexical token kind implements.

    All hooks are class methods and pure functions of ``(src, location)``
    or ``(src, range)``; a kind carries no per-instance state that affects
    matching. Instances of a kind class are grammar values built by its rule
    adapter.
    """

    _token_id: ClassVar[int]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        with _TOKEN_IDS_LOCK:
            cls._token_id = next(_TOKEN_IDS)

    @classmethod
    def token_id(cls) -> int:
        """Process-wide unique identity of this kind."""
        return cls._token_id

    @classmethod
    @abstractmethod
    def try_match(cls, src: str, location: Location) -> Optional[LocationRange]:
        """
        Attempts to match this kind starting exactly at ``location``.

        Returns:
            The matched range, or None when the kind does not match here
        """
        pass

    @classmethod
    def name(cls) -> str:
        return cls.__name__

    @classmethod
    def display_name(cls) -> str:
        return cls.name()

    @classmethod
    def print_debug(cls, src: str, range: LocationRange, out: TextIO) -> None:
        out.write(f"{cls.name()}({quote_text(range.text(src))})")

    @classmethod
    def print_display(cls, src: str, range: LocationRange, out: TextIO) -> None:
        cls.print_debug(src, range, out)

    @classmethod
    def format_debug(cls, src: str, range: LocationRange) -> str:
        out = io.StringIO()
        cls.print_debug(src, range, out)
        return out.getvalue()

    @classmethod
    def format_display(cls, src: str, range: LocationRange) -> str:
        out = io.StringIO()
        cls.print_display(src, range, out)
        return out.getvalue()

    @classmethod
    def prepare(cls) -> None:
        """Performs deferred definition-time work, such as compiling a pattern."""
        pass


@functools.total_ordering
class TokenType:
    """
    Type-erased handle of one token kind.

    Equality, ordering and hashing use only the kind's identity token, so
    handles constructed independently for the same kind compare equal.
    ``TokenType.of(Kind)`` returns the canonical instance.
    """

    __slots__ = ("kind", "_token_id", "_name", "_display_name", "_try_match",
                 "_print_debug", "_print_display", "_prepare")

    kind: type
    _token_id: int
    _name: Callable[[], str]
    _display_name: Callable[[], str]
    _try_match: Callable[[str, Location], Optional[LocationRange]]
    _print_debug: Callable[[str, LocationRange, TextIO], None]
    _print_display: Callable[[str, LocationRange, TextIO], None]
    _prepare: Callable[[], None]

    _instances: ClassVar[Dict[type, "TokenType"]] = {}
    _instances_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, kind: type):
        if not (isinstance(kind, type) and issubclass(kind, TokenDef)) or kind is TokenDef:
            raise TypeError(f"Expected a TokenDef subclass, got {kind!r}")
        init = object.__setattr__
        init(self, "kind", kind)
        init(self, "_token_id", kind.token_id())
        init(self, "_name", kind.name)
        init(self, "_display_name", kind.display_name)
        init(self, "_try_match", kind.try_match)
        init(self, "_print_debug", kind.print_debug)
        init(self, "_print_display", kind.print_display)
        init(self, "_prepare", kind.prepare)

    @classmethod
    def of(cls, kind: type) -> TokenType:
        """Returns the canonical handle of ``kind``."""
        handle = cls._instances.get(kind)
        if handle is not None:
            return handle

        with cls._instances_lock:
            handle = cls._instances.get(kind)
            if handle is None:
                handle = cls(kind)
                cls._instances[kind] = handle
        return handle

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def token_id(self) -> int:
        return self._token_id

    def name(self) -> str:
        return self._name()

    def display_name(self) -> str:
        return self._display_name()

    def print_debug(self, src: str, range: LocationRange, out: TextIO) -> None:
        self._print_debug(src, range, out)

    def print_display(self, src: str, range: LocationRange, out: TextIO) -> None:
        self._print_display(src, range, out)

    def format_debug(self, src: str, range: LocationRange) -> str:
        out = io.StringIO()
        self._print_debug(src, range, out)
        return out.getvalue()

    def format_display(self, src: str, range: LocationRange) -> str:
        out = io.StringIO()
        self._print_display(src, range, out)
        return out.getvalue()

    def prepare(self) -> None:
        self._prepare()

    def match_against(self, src: str, location: Location) -> Optional[AnyToken]:
        """
        Matches the kind at ``location``.

        Returns:
            The matched token, or None when the kind does not match here
        """
        range = self._try_match(src, location)
        if range is None:
            return None
        return AnyToken(self, range)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TokenType):
            return NotImplemented
        return self._token_id == other._token_id

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TokenType):
            return NotImplemented
        return self._token_id < other._token_id

    def __hash__(self) -> int:
        return hash(self._token_id)

    def __repr__(self) -> str:
        return self.name()


@dataclass(frozen=True, order=True)
class AnyToken:
    """A matched token: which kind, and which range of the source."""
    token_type: TokenType
    range: LocationRange

    def text(self, src: str) -> str:
        return self.range.text(src)

    def format_debug(self, src: str) -> str:
        return self.token_type.format_debug(src, self.range)

    def format_display(self, src: str) -> str:
        return self.token_type.format_display(src, self.range)


@dataclass(frozen=True)
class Eof(TokenDef, TransformRule):
    """End of input: matches only at or past the end of the source."""

    @classmethod
    def try_match(cls, src: str, location: Location) -> Optional[LocationRange]:
        if location.position >= len(src):
            return LocationRange.empty(location)
        return None

    @classmethod
    def name(cls) -> str:
        return "end-of-file"

    @classmethod
    def inner(cls) -> Production:
        return Discard(TokenRule(TokenType.of(cls)))

    @classmethod
    def from_inner(cls, inner: Any, range: LocationRange) -> Eof:
        return cls()


__all__ = ["TokenDef", "TokenType", "AnyToken", "Eof", "quote_text"]
