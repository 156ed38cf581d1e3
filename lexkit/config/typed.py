"""
Typed coercion of raw YAML data into configuration dataclasses.

Errors name the offending field with a JSONPath-like prefix
(``grammar.yaml.tokens[2]: unknown key(s): ['priority']``), so a user can
find the line in the grammar file. Set ``LEXKIT_TYPED_DEBUG=1`` to trace
every coercion step.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
import typing as t
from enum import Enum
from types import UnionType
from typing import Any, Callable, Dict, get_args, get_origin

_LOG = logging.getLogger(__name__)

if os.environ.get("LEXKIT_TYPED_DEBUG"):
    _LOG.setLevel(logging.DEBUG)
    if not _LOG.handlers:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter("[typed] %(message)s"))
        _LOG.addHandler(_handler)


class ConfigLoadError(ValueError):
    """Configuration does not fit its declared type; the message starts with the field path."""
    pass


def _fail(path: str, reason: str) -> ConfigLoadError:
    _LOG.debug("%s rejected: %s", path, reason)
    return ConfigLoadError(f"{path}: {reason}")


def _label(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)


def _kind_of(val: Any) -> str:
    return type(val).__name__


# ------------------------------ Coercers ------------------------------

def _as_literal(tp: Any, val: Any, path: str) -> Any:
    choices = get_args(tp)
    if val in choices:
        return val
    raise _fail(path, f"expected one of {sorted(map(str, choices))}, got {val!r}")


def _as_enum(tp: Any, val: Any, path: str) -> Any:
    if isinstance(val, tp):
        return val
    if isinstance(val, str) and val in tp.__members__:
        return tp[val]
    try:
        return tp(val)
    except ValueError:
        raise _fail(path, f"expected {_label(tp)} member, got {val!r}")


def _as_union(tp: Any, val: Any, path: str) -> Any:
    options = get_args(tp)
    if val is None:
        if type(None) in options:
            return None
        raise _fail(path, "value is required")

    reasons: list[str] = []
    for option in options:
        if option is type(None):
            continue
        try:
            return load_typed(option, val, path=path)
        except ConfigLoadError as e:
            reasons.append(str(e))
    raise _fail(path, " | ".join(reasons))


def _as_dict(tp: Any, val: Any, path: str) -> Any:
    if not isinstance(val, dict):
        raise _fail(path, f"expected mapping, got {_kind_of(val)}")
    key_tp, value_tp = get_args(tp) or (Any, Any)
    return {
        load_typed(key_tp, k, path=f"{path}.<key>"): load_typed(value_tp, v, path=f"{path}.{k}")
        for k, v in val.items()
    }


def _as_list(tp: Any, val: Any, path: str) -> Any:
    if not isinstance(val, (list, tuple)):
        raise _fail(path, f"expected list, got {_kind_of(val)}")
    args = get_args(tp)
    item_tp = args[0] if args else Any
    items = [load_typed(item_tp, item, path=f"{path}[{i}]") for i, item in enumerate(val)]
    return tuple(items) if get_origin(tp) is tuple else items


def _field_types(cls: type) -> Dict[str, Any]:
    # Models use postponed annotations; resolve them in their own module
    module = sys.modules.get(cls.__module__)
    return t.get_type_hints(cls, globalns=vars(module) if module else None)


def _has_default(f: dataclasses.Field) -> bool:
    return f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING


def _is_optional(tp: Any) -> bool:
    return get_origin(tp) in (t.Union, UnionType) and type(None) in get_args(tp)


def _as_dataclass(cls: type, val: Any, path: str) -> Any:
    if not isinstance(val, dict):
        raise _fail(path, f"expected mapping for {_label(cls)}, got {_kind_of(val)}")

    declared = {f.name: f for f in dataclasses.fields(cls) if f.init}
    unknown = set(val) - set(declared)
    if unknown:
        raise _fail(path, f"unknown key(s): {sorted(map(str, unknown))}")

    hints = _field_types(cls)
    kwargs: Dict[str, Any] = {}
    for name, f in declared.items():
        ftype = hints.get(name, f.type)
        if name in val:
            kwargs[name] = load_typed(ftype, val[name], path=f"{path}.{name}")
        elif _has_default(f):
            continue
        elif _is_optional(ftype):
            kwargs[name] = None
        else:
            raise _fail(f"{path}.{name}", "required field missing")

    try:
        obj = cls(**kwargs)
    except ValueError as e:
        # Cross-field checks of the model itself
        raise _fail(path, str(e)) from e
    _LOG.debug("%s -> %r", path, obj)
    return obj


_BY_ORIGIN: Dict[Any, Callable[[Any, Any, str], Any]] = {
    t.Literal: _as_literal,
    t.Union: _as_union,
    UnionType: _as_union,
    dict: _as_dict,
    list: _as_list,
    tuple: _as_list,
}

_SCALARS = (str, int, float, bool)


def load_typed(tp: Any, val: Any, *, path: str = "$") -> Any:
    """
    Recursively coerces raw YAML data into the type ``tp`` describes.

    Supports dataclasses, Optional/Union, Literal, Enum, list/tuple, dict
    and scalars. Every failure names the offending field path.

    Raises:
        ConfigLoadError: If ``val`` does not fit ``tp``
    """
    _LOG.debug("%s: %s <- %s", path, _label(tp), _kind_of(val))

    if tp is Any:
        return val
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _as_dataclass(tp, val, path)

    coerce = _BY_ORIGIN.get(get_origin(tp))
    if coerce is not None:
        return coerce(tp, val, path)

    if isinstance(tp, type) and issubclass(tp, Enum):
        return _as_enum(tp, val, path)

    if tp in _SCALARS:
        # YAML booleans are ints to Python; they never stand in for numbers
        if isinstance(val, tp) and (tp is bool or not isinstance(val, bool)):
            return val
        raise _fail(path, f"expected {_label(tp)}, got {_kind_of(val)}")

    raise _fail(path, f"unsupported type {_label(tp)}")


__all__ = ["ConfigLoadError", "load_typed"]
