"""
Priority tables of token kinds.

The order of the table is the grammar's ambiguity policy: candidates are tried
in declaration order and the first one that matches wins (so a keyword listed
before an identifier takes precedence over it).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import LexError
from .location import Location
from .token import AnyToken, Eof, TokenDef, TokenType

logger = logging.getLogger(__name__)

KindLike = Union[TokenType, type]


def _as_handle(kind: KindLike) -> TokenType:
    if isinstance(kind, TokenType):
        return kind
    return TokenType.of(kind)


class TokenTable:
    """
    Ordered set of token kinds.

    Building a table is the grammar build phase: every kind is prepared
    (patterns compiled and validated) before any input is processed, so
    definition errors never show up in the middle of a parse.
    """

    def __init__(self, kinds: Iterable[KindLike]):
        handles: List[TokenType] = []
        priorities: Dict[TokenType, int] = {}

        for kind in kinds:
            handle = _as_handle(kind)
            if handle in priorities:
                logger.warning(f"Token kind {handle!r} listed twice in table, keeping first position")
                continue
            handle.prepare()
            priorities[handle] = len(handles)
            handles.append(handle)

        self._kinds: Tuple[TokenType, ...] = tuple(handles)
        self._priorities = priorities
        logger.debug(f"Built token table with {len(handles)} kinds: {list(handles)}")

    @property
    def kinds(self) -> Tuple[TokenType, ...]:
        return self._kinds

    def __len__(self) -> int:
        return len(self._kinds)

    def __iter__(self) -> Iterator[TokenType]:
        return iter(self._kinds)

    def __contains__(self, kind: object) -> bool:
        if isinstance(kind, type):
            if not issubclass(kind, TokenDef) or kind is TokenDef:
                return False
            kind = TokenType.of(kind)
        elif not isinstance(kind, TokenType):
            return False
        return kind in self._priorities

    def priority(self, kind: KindLike) -> int:
        """
        Position of ``kind`` in the table (0 is tried first).

        Raises:
            KeyError: If the kind is not in the table
        """
        return self._priorities[_as_handle(kind)]

    def match_first(
            self,
            src: str,
            location: Location,
            skip: Optional[KindLike] = None,
    ) -> Optional[AnyToken]:
        """
        Returns the token of the first kind matching at ``location``.

        The skip kind, if given, is never reported even when it is in the table.
        """
        skip_handle = _as_handle(skip) if skip is not None else None
        for kind in self._kinds:
            if kind == skip_handle:
                continue
            token = kind.match_against(src, location)
            if token is not None:
                return token
        return None

    def tokenize(self, src: str, skip: Optional[KindLike] = None) -> List[AnyToken]:
        """
        Splits the whole of ``src`` into tokens.

        Matches of the skip kind are dropped; the list ends with an
        end-of-file token.

        Raises:
            LexError: When no kind matches at some location
        """
        skip_handle = _as_handle(skip) if skip is not None else None
        eof = TokenType.of(Eof)
        tokens: List[AnyToken] = []
        location = Location(0)

        while location.position < len(src):
            if skip_handle is not None:
                trivia = skip_handle.match_against(src, location)
                if trivia is not None and trivia.range.end > location:
                    location = trivia.range.end
                    continue

            token = self.match_first(src, location, skip=skip_handle)
            if token is None or token.range.end <= location:
                # An empty match would never advance
                expected = [kind for kind in self._kinds if kind != skip_handle]
                raise LexError(location, expected)

            tokens.append(token)
            logger.debug(f"Matched {token.token_type!r} at {token.range!r}")
            location = token.range.end

        end = eof.match_against(src, location)
        assert end is not None
        tokens.append(end)
        return tokens


__all__ = ["TokenTable", "KindLike"]
