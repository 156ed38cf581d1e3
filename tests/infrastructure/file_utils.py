"""
Utilities for creating files in tests.
"""

from __future__ import annotations

import textwrap
from pathlib import Path


def write(p: Path, text: str) -> Path:
    """
    Writes text to a file, creating parent directories when needed.

    Args:
        p: File path
        text: Contents to write

    Returns:
        Path of the written file
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def write_grammar(root: Path, yaml_text: str, name: str = "grammar.yaml") -> Path:
    """Writes a YAML grammar (dedented) under ``root``."""
    return write(root / name, textwrap.dedent(yaml_text).strip() + "\n")
