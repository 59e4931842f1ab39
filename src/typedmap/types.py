"""Small value types shared across the package."""

from __future__ import annotations

from enum import Enum
from typing import Generic, NamedTuple, TypeVar

VT = TypeVar("VT")


class DuplicateKeyPolicy(str, Enum):
    """How literal construction treats repeated keys."""

    STRICT = "strict"  # Reject, like a Go map literal at compile time
    PERMISSIVE = "permissive"  # Last write wins, like a Python dict display


class IterationOrder(str, Enum):
    """Order in which snapshots enumerate entries."""

    INSERTION = "insertion"
    RANDOM = "random"  # Reshuffled on every snapshot, as Go does


class Lookup(NamedTuple, Generic[VT]):
    """Result of a map lookup: the value and whether the key was present.

    Unpacks like Go's comma-ok idiom:

        >>> value, found = m.get("Batman")
    """

    value: VT
    found: bool
