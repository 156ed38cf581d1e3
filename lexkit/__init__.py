"""
lexkit: the token layer of a lexer/parser toolkit.

Token kinds are classes implementing ``TokenDef``; ``TokenType`` is their
comparable runtime handle and ``AnyToken`` a matched token. Kinds are usually
declared with ``define_token`` / ``@token`` or loaded from a YAML grammar.
"""

from .define import Strategy, TokenDecl, build_token, define_token, token
from .errors import LexError, LexkitUserError, ParseError, PatternDefinitionError
from .location import Location, LocationRange
from .rules import Discard, DualParse, ParseContext, Parsed, TokenRule, TransformRule, parse
from .table import TokenTable
from .token import AnyToken, Eof, TokenDef, TokenType

__all__ = [
    "Location",
    "LocationRange",
    "TokenDef",
    "TokenType",
    "AnyToken",
    "Eof",
    "Strategy",
    "TokenDecl",
    "build_token",
    "define_token",
    "token",
    "TokenTable",
    "Parsed",
    "ParseContext",
    "TokenRule",
    "Discard",
    "DualParse",
    "TransformRule",
    "parse",
    "LexkitUserError",
    "LexError",
    "ParseError",
    "PatternDefinitionError",
]
