from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TokenDeclCfg:
    """One token kind of a grammar file."""
    name: str
    exact: Optional[str] = None
    regex: Optional[str] = None
    capture: Optional[int] = None
    doc: Optional[str] = None

    def __post_init__(self):
        if (self.exact is None) == (self.regex is None):
            raise ValueError(f"token '{self.name}' must set exactly one of 'exact' or 'regex'")
        if self.exact is not None and self.capture is not None:
            raise ValueError(f"token '{self.name}': 'capture' applies to 'regex' tokens only")


@dataclass
class GrammarCfg:
    """
    Grammar file contents.

    ``tokens`` are listed in priority order: earlier kinds win when several
    match at the same location. ``skip`` names the kind consumed between
    tokens (typically whitespace).
    """
    tokens: List[TokenDeclCfg] = field(default_factory=list)
    skip: Optional[str] = None

    def __post_init__(self):
        seen: set[str] = set()
        for decl in self.tokens:
            if decl.name in seen:
                raise ValueError(f"duplicate token name '{decl.name}'")
            seen.add(decl.name)
        if self.skip is not None and self.skip not in seen:
            raise ValueError(f"skip token '{self.skip}' is not declared")


__all__ = ["TokenDeclCfg", "GrammarCfg"]
