from __future__ import annotations

import json
from typing import Any

from .location import Location, LocationRange
from .token import TokenType


def _encode(obj: Any) -> Any:
    if isinstance(obj, TokenType):
        return obj.display_name()
    if isinstance(obj, LocationRange):
        return [obj.start.position, obj.end.position]
    if isinstance(obj, Location):
        return obj.position
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps(obj: Any) -> str:
    """
    Compact JSON for CLI answers.

    Token handles are written as their display names, locations as offsets
    and ranges as ``[start, end]``. No trailing newline; ensure_ascii=False.
    """
    return json.dumps(obj, ensure_ascii=False, default=_encode)
