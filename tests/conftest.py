from pathlib import Path

import pytest

from lexkit import TokenTable
from tests.infrastructure.file_utils import write_grammar
from tests.infrastructure.kinds import Eq, Ident, Let, Number, Ws


@pytest.fixture
def table() -> TokenTable:
    """Keywords before identifiers: 'let' lexes as Let, not Ident."""
    return TokenTable([Ws, Let, Eq, Ident, Number])


@pytest.fixture
def grammar_file(tmp_path: Path) -> Path:
    """Minimal grammar: whitespace skip, a keyword, identifiers, numbers."""
    return write_grammar(
        tmp_path,
        r"""
        skip: Ws
        tokens:
          - name: Ws
            regex: '\s+'
          - name: Let
            exact: let
            doc: Binding keyword
          - name: Eq
            exact: '='
          - name: Ident
            regex: '[A-Za-z_]\w*'
          - name: Number
            regex: '(\d+)(px)?'
            capture: 1
        """,
    )
