from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List

from .config import Grammar, load_grammar
from .errors import LexkitUserError
from .jsonic import dumps as jdumps
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lexkit",
        description="Token kinds from declarative grammars",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_kinds = sub.add_parser("kinds", help="token kinds of a grammar in priority order (JSON)")
    sp_kinds.add_argument("grammar", type=Path, help="path to the YAML grammar")

    sp_scan = sub.add_parser("scan", help="split a source into tokens (JSON)")
    sp_scan.add_argument("grammar", type=Path, help="path to the YAML grammar")
    sp_scan.add_argument(
        "source",
        nargs="?",
        default="-",
        metavar="TEXT|@FILE|-",
        help="source text: a literal string, @file to read a file, or - for stdin (default)",
    )

    return p


def _read_source(source_arg: str) -> str:
    """
    Reads the source argument.

    Supports three forms:
    - literal string: "let x = 1"
    - from a file: @path/to/file.txt
    - from stdin: -
    """
    if source_arg == "-":
        return sys.stdin.read()

    if source_arg.startswith("@"):
        file_path = Path(source_arg[1:])
        if not file_path.is_file():
            raise ValueError(f"Source file not found: {file_path}")
        return file_path.read_text(encoding="utf-8")

    return source_arg


def _kinds_payload(grammar: Grammar) -> Dict[str, Any]:
    return {
        "kinds": [
            {
                "name": kind.name(),
                "display_name": kind.display_name(),
                "priority": grammar.table.priority(kind),
                "skip": kind == grammar.skip,
            }
            for kind in grammar.table
        ]
    }


def _scan_payload(grammar: Grammar, src: str) -> Dict[str, Any]:
    tokens: List[Dict[str, Any]] = []
    for token in grammar.tokenize(src):
        tokens.append({
            "kind": token.token_type,
            "range": token.range,
            "text": token.text(src),
            "debug": token.format_debug(src),
        })
    return {"tokens": tokens}


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    try:
        grammar = load_grammar(ns.grammar)

        if ns.cmd == "kinds":
            sys.stdout.write(jdumps(_kinds_payload(grammar)))
            return 0

        if ns.cmd == "scan":
            src = _read_source(ns.source)
            sys.stdout.write(jdumps(_scan_payload(grammar, src)))
            return 0

    except LexkitUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
