"""Typed maps with Go semantics for Python.

Fixed key and value types, comma-ok lookups that never confuse "absent"
with a stored zero value, and fail-fast handling of uninitialized maps.

Example:
    >>> from typedmap import TypedMap
    >>>
    >>> ages = TypedMap.from_entries(str, int, [("alice", 31), ("bob", 0)])
    >>> ages.get("bob")
    Lookup(value=0, found=True)
    >>> ages.get("carol")
    Lookup(value=0, found=False)
"""

from __future__ import annotations

from typedmap.admissibility import check_key_type, is_admissible_key_type
from typedmap.config import TypedMapSettings, clear_settings_cache, get_settings
from typedmap.errors import (
    DuplicateKeyError,
    InadmissibleKeyTypeError,
    TypedMapError,
    TypeMismatchError,
    UninitializedContainerError,
)
from typedmap.frozen import FrozenTypedMap
from typedmap.log import configure_logging
from typedmap.sync import LockedTypedMap
from typedmap.typed_map import TypedMap
from typedmap.types import DuplicateKeyPolicy, IterationOrder, Lookup
from typedmap.zero import zero_value

__version__ = "0.1.0"

__all__ = [
    "DuplicateKeyError",
    "DuplicateKeyPolicy",
    "FrozenTypedMap",
    "InadmissibleKeyTypeError",
    "IterationOrder",
    "LockedTypedMap",
    "Lookup",
    "TypeMismatchError",
    "TypedMap",
    "TypedMapError",
    "TypedMapSettings",
    "UninitializedContainerError",
    "__version__",
    "check_key_type",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
    "is_admissible_key_type",
    "zero_value",
]
