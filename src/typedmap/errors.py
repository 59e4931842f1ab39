"""Error types raised by typed maps."""

from __future__ import annotations

from typing import Any


class TypedMapError(Exception):
    """Base class for all typedmap errors."""


class UninitializedContainerError(TypedMapError, RuntimeError):
    """Raised when writing through a handle that was never constructed.

    Mirrors the Go runtime panic ``assignment to entry in nil map``.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        msg = (
            f"Cannot {operation} an uninitialized map. "
            "Create it with TypedMap.new() or TypedMap.from_entries()."
        )
        super().__init__(msg)


class DuplicateKeyError(TypedMapError, ValueError):
    """Raised by strict literal construction when a key repeats."""

    def __init__(self, key: Any, first_index: int, duplicate_index: int) -> None:
        self.key = key
        self.first_index = first_index
        self.duplicate_index = duplicate_index
        msg = (
            f"Duplicate key {key!r} in map literal\n"
            f"  First entry at index: {first_index}\n"
            f"  Duplicate at index: {duplicate_index}"
        )
        super().__init__(msg)


class InadmissibleKeyTypeError(TypedMapError, TypeError):
    """Raised when a map is declared with a key type lacking value semantics."""

    def __init__(self, key_type: Any, reason: str) -> None:
        self.key_type = key_type
        self.reason = reason
        super().__init__(f"Invalid map key type {describe_type(key_type)}: {reason}")


class TypeMismatchError(TypedMapError, TypeError):
    """Raised when a key or value does not match the map's declared type."""

    def __init__(self, role: str, expected: Any, actual: Any) -> None:
        self.role = role
        self.expected = expected
        self.actual = actual
        msg = (
            f"Cannot use {actual!r} (type {type(actual).__name__}) "
            f"as map {role} of type {describe_type(expected)}"
        )
        super().__init__(msg)


def describe_type(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
