"""
Shared test infrastructure for lexkit.

Modules:
- file_utils: writing files and grammars in temporary directories
- cli_utils: running the lexkit CLI in a subprocess
- kinds: token kinds shared by several test modules
"""

from .file_utils import write, write_grammar
from .cli_utils import run_cli, jload

__all__ = ["write", "write_grammar", "run_cli", "jload"]
