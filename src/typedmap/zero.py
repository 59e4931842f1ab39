"""Zero values for declared types.

The zero value is what a lookup reports for an absent key and what
``get_or_insert_default`` inserts. It follows Go's rules translated to
Python types: numbers are zero, strings and containers are empty, optional
types are None, and records are built from the zero values of their fields.
Every call builds a fresh object, so mutable zero values are never shared.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import types
import uuid
from enum import Enum
from typing import Annotated, Any, Literal, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel, ValidationError

# Abstract collection types resolve to their canonical concrete type
_ABSTRACT_CONCRETE: dict[Any, type] = {
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
}

_FIXED_ZEROS: dict[type, Any] = {
    datetime.datetime: datetime.datetime.min,
    datetime.date: datetime.date.min,
    uuid.UUID: uuid.UUID(int=0),
}


def zero_value(tp: Any) -> Any:
    """Return a fresh zero value for the declared type ``tp``."""
    if tp is None or tp is type(None) or tp is Any:
        return None

    origin = get_origin(tp)
    if origin is Annotated:
        return zero_value(get_args(tp)[0])
    if origin is Literal:
        return get_args(tp)[0]
    if origin is Union or origin is types.UnionType:
        args = get_args(tp)
        if type(None) in args:
            return None
        return zero_value(args[0])
    if origin is tuple:
        args = get_args(tp)
        if len(args) == 2 and args[1] is Ellipsis:
            return ()
        return tuple(zero_value(arg) for arg in args)
    if origin is not None:
        return _zero_for_generic(origin, get_args(tp))

    if not isinstance(tp, type):
        return None
    return _zero_for_class(tp)


def has_mutable_zero(tp: Any) -> bool:
    """Return True if the zero value of ``tp`` is a mutable container."""
    from typedmap.typed_map import TypedMap  # noqa: PLC0415

    zero = zero_value(tp)
    return isinstance(
        zero,
        (
            collections.abc.MutableSequence,
            collections.abc.MutableMapping,
            collections.abc.MutableSet,
            TypedMap,
        ),
    )


def _zero_for_generic(origin: Any, args: tuple[Any, ...]) -> Any:
    from typedmap.typed_map import TypedMap  # noqa: PLC0415

    if isinstance(origin, type) and issubclass(origin, TypedMap):
        key_type, value_type = args
        return origin.new(key_type, value_type)
    concrete = _ABSTRACT_CONCRETE.get(origin, origin)
    if not isinstance(concrete, type):
        return None
    return _zero_for_class(concrete)


def _zero_for_class(tp: type) -> Any:
    if tp in _ABSTRACT_CONCRETE:
        return _ABSTRACT_CONCRETE[tp]()
    if issubclass(tp, Enum):
        return next(iter(tp), None)
    for fixed_type, zero in _FIXED_ZEROS.items():
        if issubclass(tp, fixed_type):
            return zero
    if dataclasses.is_dataclass(tp):
        return _zero_dataclass(tp)
    if issubclass(tp, tuple) and hasattr(tp, "_fields"):
        return _zero_namedtuple(tp)
    if issubclass(tp, BaseModel):
        return _zero_model(tp)

    try:
        return tp()
    except (TypeError, ValueError):
        # Constructor needs arguments: no natural zero, fall back to nil
        return None


def _zero_dataclass(tp: type) -> Any:
    hints = get_type_hints(tp)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(tp):
        if not f.init:
            continue
        if f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING:
            continue
        kwargs[f.name] = zero_value(hints.get(f.name))
    return tp(**kwargs)


def _zero_namedtuple(tp: type) -> Any:
    hints = get_type_hints(tp)
    defaults = getattr(tp, "_field_defaults", {})
    kwargs = {
        name: zero_value(hints.get(name))
        for name in tp._fields  # type: ignore[attr-defined]
        if name not in defaults
    }
    return tp(**kwargs)


def _zero_model(tp: type[BaseModel]) -> BaseModel | None:
    kwargs = {
        field.alias or name: zero_value(field.annotation)
        for name, field in tp.model_fields.items()
        if field.is_required()
    }
    try:
        return tp(**kwargs)
    except ValidationError:
        # Field constraints reject the zero values: no natural zero
        return None
