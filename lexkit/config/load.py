"""
Loading grammars (ordered token declarations) from YAML files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import GrammarCfg
from .typed import ConfigLoadError, load_typed
from ..define import define_token
from ..table import TokenTable
from ..token import AnyToken, TokenType

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class Grammar:
    """Token kinds built from a grammar file, in priority order."""
    table: TokenTable
    kinds: Dict[str, type]
    skip: Optional[TokenType] = None

    def __getitem__(self, name: str) -> type:
        return self.kinds[name]

    def tokenize(self, src: str) -> List[AnyToken]:
        return self.table.tokenize(src, skip=self.skip)


def _read_yaml_map(text: str, source: str) -> dict:
    try:
        raw = _yaml.load(text) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"{source}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"{source}: YAML must be a mapping")
    return raw


def build_grammar(cfg: GrammarCfg) -> Grammar:
    """
    Defines every token kind of ``cfg`` and builds its table.

    Raises:
        PatternDefinitionError: If a pattern is malformed or a capture group
            does not exist (detected while building the table)
    """
    kinds: Dict[str, type] = {}
    for decl in cfg.tokens:
        kinds[decl.name] = define_token(
            decl.name,
            exact=decl.exact,
            regex=decl.regex,
            capture=decl.capture,
            doc=decl.doc,
        )

    table = TokenTable(kinds.values())
    skip = TokenType.of(kinds[cfg.skip]) if cfg.skip is not None else None
    return Grammar(table=table, kinds=kinds, skip=skip)


def load_grammar_text(text: str, *, source: str = "<string>") -> Grammar:
    raw = _read_yaml_map(text, source)
    cfg = load_typed(GrammarCfg, raw, path=source)
    grammar = build_grammar(cfg)
    logger.debug(f"Loaded grammar {source} with {len(grammar.table)} token kinds")
    return grammar


def load_grammar(path: Path) -> Grammar:
    """
    Loads a grammar file.

    Args:
        path: Path to the YAML grammar

    Returns:
        The built grammar

    Raises:
        ConfigLoadError: If the file is missing or malformed
        PatternDefinitionError: If a declared pattern is invalid
    """
    if not path.is_file():
        raise ConfigLoadError(f"Grammar file not found: {path}")
    return load_grammar_text(path.read_text(encoding="utf-8"), source=str(path))


__all__ = ["Grammar", "build_grammar", "load_grammar", "load_grammar_text"]
