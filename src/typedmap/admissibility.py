"""Key type admissibility rules.

A map key type must have a well-defined equality and hash *and* value
semantics, so that a key's identity can never change while it is stored:

- immutable scalars (int, str, bytes, bool, float, Decimal, dates, UUID, ...)
- Enum members
- fixed-size composites of admissible types: ``tuple[A, B]``, NamedTuple,
  frozen dataclasses
- Literal, Union and Optional of the above
- classes that define both ``__eq__`` and ``__hash__`` themselves

Mutable containers, identity-hashed classes and variable-size composites
(``tuple[X, ...]``, frozenset, mappings) are rejected when the map is created.
"""

from __future__ import annotations

import dataclasses
import datetime
import types
import uuid
from collections.abc import Mapping, Set
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Union, get_args, get_origin, get_type_hints

import structlog

from typedmap.errors import InadmissibleKeyTypeError

logger = structlog.get_logger()

_SCALAR_TYPES: tuple[type, ...] = (
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    type(None),
)


def check_key_type(key_type: Any) -> None:
    """Validate that ``key_type`` may be used as a map key type.

    Raises:
        InadmissibleKeyTypeError: If the type lacks value semantics.
    """
    reason = _inadmissible_reason(key_type, set())
    if reason is not None:
        logger.debug("inadmissible_key_type", key_type=repr(key_type), reason=reason)
        raise InadmissibleKeyTypeError(key_type, reason)


def is_admissible_key_type(key_type: Any) -> bool:
    """Return True if ``key_type`` may be used as a map key type."""
    return _inadmissible_reason(key_type, set()) is None


def _inadmissible_reason(tp: Any, seen: set[int]) -> str | None:
    if tp is None:
        return None
    if tp is Any:
        return "Any does not guarantee hashable keys"

    origin = get_origin(tp)
    if origin is Annotated:
        return _inadmissible_reason(get_args(tp)[0], seen)
    if origin is Literal:
        for arg in get_args(tp):
            try:
                hash(arg)
            except TypeError:
                return f"literal value {arg!r} is unhashable"
        return None
    if origin is Union or origin is types.UnionType:
        for arg in get_args(tp):
            reason = _inadmissible_reason(arg, seen)
            if reason is not None:
                return reason
        return None
    if origin is tuple:
        return _tuple_reason(get_args(tp), seen)
    if origin is not None:
        # Parameterized containers such as list[int] or frozenset[str]
        return _class_reason(origin, seen)

    if not isinstance(tp, type):
        return f"{tp!r} is not a type"
    return _class_reason(tp, seen)


def _tuple_reason(args: tuple[Any, ...], seen: set[int]) -> str | None:
    if len(args) == 2 and args[1] is Ellipsis:
        return "variable-size tuple; declare a fixed shape such as tuple[int, str]"
    for index, arg in enumerate(args):
        reason = _inadmissible_reason(arg, seen)
        if reason is not None:
            return f"tuple element {index}: {reason}"
    return None


def _class_reason(tp: type, seen: set[int]) -> str | None:
    if issubclass(tp, Enum):
        return None
    if issubclass(tp, _SCALAR_TYPES) and tp.__hash__ is not None:
        return None

    if tp is tuple:
        return "bare tuple has no fixed size; declare a shape such as tuple[int, str]"
    if issubclass(tp, tuple):
        if hasattr(tp, "_fields"):
            return _fields_reason(tp, seen)
        return "tuple subclasses without named fields are variable-size"
    if issubclass(tp, (Mapping, Set)):
        return f"{tp.__name__} is a variable-size collection"
    if tp.__hash__ is None:
        return f"{tp.__name__} is unhashable (mutable or reference semantics)"

    if dataclasses.is_dataclass(tp):
        if not tp.__dataclass_params__.frozen:  # type: ignore[attr-defined]
            return f"dataclass {tp.__name__} is not frozen"
        if not tp.__dataclass_params__.eq:  # type: ignore[attr-defined]
            return f"dataclass {tp.__name__} uses identity equality; declare it with eq=True"
        return _fields_reason(tp, seen)

    if _defining_class(tp, "__hash__") is object or _defining_class(tp, "__eq__") is object:
        return f"{tp.__name__} uses identity equality; define __eq__ and __hash__"
    return None


def _fields_reason(tp: type, seen: set[int]) -> str | None:
    """Check annotated fields of a NamedTuple or frozen dataclass."""
    if id(tp) in seen:
        return None
    seen.add(id(tp))

    try:
        hints = get_type_hints(tp)
    except (NameError, TypeError) as err:
        logger.warning("unresolved_key_field_types", key_type=tp.__qualname__, error=str(err))
        return None

    if dataclasses.is_dataclass(tp):
        names = [f.name for f in dataclasses.fields(tp)]
    else:
        names = list(tp._fields)  # type: ignore[attr-defined]

    for name in names:
        if name not in hints:
            continue
        reason = _inadmissible_reason(hints[name], seen)
        if reason is not None:
            return f"field {name!r}: {reason}"
    return None


def _defining_class(tp: type, attr: str) -> type | None:
    for klass in tp.__mro__:
        if attr in klass.__dict__:
            return klass
    return None
