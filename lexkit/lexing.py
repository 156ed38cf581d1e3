"""
Matching primitives used by token kinds.

Wraps the regular-expression engine (stdlib ``re``) behind two operations:
compile a pattern once for the whole process, and match a compiled pattern
(or an exact literal) anchored at a location.
"""

from __future__ import annotations

import logging
import re
import threading
from re import Pattern
from typing import Dict, Optional

from .errors import PatternDefinitionError
from .location import Location, LocationRange

logger = logging.getLogger(__name__)

# Process-wide cache of compiled patterns, keyed by pattern text
_PATTERN_CACHE: Dict[str, Pattern[str]] = {}
_PATTERN_CACHE_LOCK = threading.Lock()


def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Compiles a pattern, at most once per process for the same text.

    Args:
        pattern: Regular expression source

    Returns:
        The shared compiled pattern

    Raises:
        PatternDefinitionError: If the pattern is malformed
    """
    compiled = _PATTERN_CACHE.get(pattern)
    if compiled is not None:
        return compiled

    with _PATTERN_CACHE_LOCK:
        compiled = _PATTERN_CACHE.get(pattern)
        if compiled is None:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise PatternDefinitionError(
                    f"Invalid regular expression {pattern!r}: {e}", pattern
                ) from e
            _PATTERN_CACHE[pattern] = compiled
            logger.debug(f"Compiled pattern {pattern!r} ({compiled.groups} groups)")
    return compiled


class LazyPattern:
    """
    A regular expression compiled on first use.

    Also validates the capture group index against the compiled pattern,
    so both kinds of definition error surface at the same point.
    Safe under concurrent first use: every caller observes the same
    compiled object.
    """

    __slots__ = ("pattern", "capture", "_compiled", "_lock")

    def __init__(self, pattern: str, capture: int = 0):
        if capture < 0:
            raise PatternDefinitionError(
                f"Capture group index must be non-negative, got {capture}", pattern
            )
        self.pattern = pattern
        self.capture = capture
        self._compiled: Optional[Pattern[str]] = None
        self._lock = threading.Lock()

    def get(self) -> Pattern[str]:
        compiled = self._compiled
        if compiled is not None:
            return compiled

        with self._lock:
            if self._compiled is None:
                compiled = compile_pattern(self.pattern)
                if self.capture > compiled.groups:
                    raise PatternDefinitionError(
                        f"Capture group {self.capture} does not exist in {self.pattern!r} "
                        f"({compiled.groups} groups)",
                        self.pattern,
                    )
                self._compiled = compiled
            return self._compiled

    @property
    def is_compiled(self) -> bool:
        return self._compiled is not None

    def __repr__(self) -> str:
        return f"LazyPattern({self.pattern!r}, capture={self.capture})"


def lex_exact(literal: str, src: str, location: Location) -> Optional[LocationRange]:
    """Matches ``literal`` exactly at ``location``."""
    if src.startswith(literal, location.position):
        return LocationRange(location, location.advance(len(literal)))
    return None


def lex_regex(pattern: LazyPattern, src: str, location: Location) -> Optional[LocationRange]:
    """
    Matches a pattern anchored at ``location``.

    The resulting range is the extent of the pattern's capture group;
    a group that did not take part in the match means no match.
    """
    if location.position > len(src):
        return None

    match = pattern.get().match(src, location.position)
    if match is None:
        return None

    start, end = match.span(pattern.capture)
    if start < 0:
        return None
    return LocationRange.of(start, end)


__all__ = ["compile_pattern", "LazyPattern", "lex_exact", "lex_regex"]
