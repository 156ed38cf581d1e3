from .load import Grammar, build_grammar, load_grammar, load_grammar_text
from .model import GrammarCfg, TokenDeclCfg
from .typed import ConfigLoadError, load_typed

__all__ = [
    "Grammar",
    "GrammarCfg",
    "TokenDeclCfg",
    "ConfigLoadError",
    "build_grammar",
    "load_grammar",
    "load_grammar_text",
    "load_typed",
]
