"""Typed associative container with Go map semantics.

A ``TypedMap`` fixes its key and value types at creation, reports absence
through an explicit presence flag instead of a sentinel, and refuses writes
through a handle that was never initialized.

Example:
    >>> villains = TypedMap.new(str, list[str])
    >>> villains.get_or_insert_default("Batman").append("The Joker")
    >>> villains.get("Batman")
    Lookup(value=['The Joker'], found=True)
    >>> villains.get("Superman")
    Lookup(value=[], found=False)

The container is not synchronized. Share it across threads through
:class:`typedmap.sync.LockedTypedMap` or an external lock.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import structlog

from typedmap.admissibility import check_key_type
from typedmap.config import get_settings
from typedmap.errors import DuplicateKeyError, UninitializedContainerError
from typedmap.types import DuplicateKeyPolicy, IterationOrder, Lookup
from typedmap.validation import TypeChecker
from typedmap.zero import has_mutable_zero, zero_value

if TYPE_CHECKING:
    from rich.table import Table

    from typedmap.frozen import FrozenTypedMap

KT = TypeVar("KT")
VT = TypeVar("VT")

logger = structlog.get_logger()


class TypedMap(Generic[KT, VT]):
    """A mapping from keys of one declared type to values of another.

    Construct with :meth:`new`, :meth:`from_entries` or :meth:`nil`.
    ``TypedMap(key_type, value_type)`` is equivalent to :meth:`new`.

    Iteration order is insertion order unless the map was created with
    ``IterationOrder.RANDOM``, in which case every snapshot is reshuffled.
    """

    # Stays False on handles that bypass __init__ (e.g. TypedMap.__new__)
    _constructed: bool = False

    _key_type: Any
    _value_type: Any
    _data: dict[KT, VT] | None

    def __init__(
        self,
        key_type: type[KT] | Any,
        value_type: type[VT] | Any,
        *,
        iteration_order: IterationOrder | str | None = None,
    ) -> None:
        check_key_type(key_type)
        settings = get_settings()

        self._key_type = key_type
        self._value_type = value_type
        self._key_checker = TypeChecker(key_type, "key")
        self._value_checker = TypeChecker(value_type, "value")
        self._duplicate_policy = settings.duplicate_keys
        self._iteration_order = (
            IterationOrder(iteration_order)
            if iteration_order is not None
            else settings.iteration_order
        )
        self._data = {}
        self._constructed = True

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        key_type: type[KT] | Any,
        value_type: type[VT] | Any,
        *,
        iteration_order: IterationOrder | str | None = None,
    ) -> TypedMap[KT, VT]:
        """Create an empty map, ready for use.

        Raises:
            InadmissibleKeyTypeError: If ``key_type`` lacks value semantics.
        """
        m = cls(key_type, value_type, iteration_order=iteration_order)
        logger.debug("typed_map_created", key_type=repr(key_type), value_type=repr(value_type))
        return m

    @classmethod
    def from_entries(
        cls,
        key_type: type[KT] | Any,
        value_type: type[VT] | Any,
        entries: TypedMap[KT, VT] | Mapping[KT, VT] | Iterable[tuple[KT, VT]],
        *,
        duplicates: DuplicateKeyPolicy | str | None = None,
        iteration_order: IterationOrder | str | None = None,
    ) -> TypedMap[KT, VT]:
        """Create a map from a literal sequence of entries.

        Args:
            key_type: Declared key type.
            value_type: Declared value type.
            entries: Ordered ``(key, value)`` pairs, a mapping, or another map.
            duplicates: Policy for repeated keys. Defaults to the
                ``TYPEDMAP_DUPLICATE_KEYS`` setting (strict).
            iteration_order: Snapshot ordering for the new map.

        Returns:
            The populated map. Its ``duplicate_policy`` records the policy used.

        Raises:
            DuplicateKeyError: In strict mode, if a key appears twice.
            TypeMismatchError: If an entry does not match the declared types.
        """
        m = cls(key_type, value_type, iteration_order=iteration_order)
        if duplicates is not None:
            m._duplicate_policy = DuplicateKeyPolicy(duplicates)
        policy = m._duplicate_policy

        pairs: Iterable[tuple[KT, VT]]
        if isinstance(entries, TypedMap):
            pairs = entries.entries()
        elif isinstance(entries, Mapping):
            pairs = entries.items()
        else:
            pairs = entries
        data: dict[KT, VT] = {}
        first_seen: dict[KT, int] = {}
        collapsed = 0
        for index, (key, value) in enumerate(pairs):
            m._key_checker.check(key)
            m._value_checker.check(value)
            if key in first_seen:
                if policy is DuplicateKeyPolicy.STRICT:
                    logger.warning(
                        "duplicate_map_key",
                        key=repr(key),
                        first_index=first_seen[key],
                        duplicate_index=index,
                    )
                    raise DuplicateKeyError(key, first_seen[key], index)
                collapsed += 1
            else:
                first_seen[key] = index
            data[key] = value

        m._data = data
        logger.debug(
            "typed_map_created",
            key_type=repr(key_type),
            value_type=repr(value_type),
            entries=len(data),
            duplicates_collapsed=collapsed,
            duplicate_policy=policy.value,
        )
        return m

    @classmethod
    def nil(cls, key_type: type[KT] | Any, value_type: type[VT] | Any) -> TypedMap[KT, VT]:
        """Create an uninitialized handle, like a Go ``var m map[K]V``.

        Reads behave as on an empty map; any write raises
        UninitializedContainerError.
        """
        m = cls(key_type, value_type)
        m._data = None
        return m

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def key_type(self) -> Any:
        self._readable("inspect")
        return self._key_type

    @property
    def value_type(self) -> Any:
        self._readable("inspect")
        return self._value_type

    @property
    def duplicate_policy(self) -> DuplicateKeyPolicy:
        """Policy applied to repeated keys during literal construction."""
        self._readable("inspect")
        return self._duplicate_policy

    @property
    def iteration_order(self) -> IterationOrder:
        self._readable("inspect")
        return self._iteration_order

    @property
    def is_nil(self) -> bool:
        """True if this handle was never initialized for writing."""
        return not self._constructed or self._data is None

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def get(self, key: KT) -> Lookup[VT]:
        """Look up ``key``.

        Returns:
            ``Lookup(value, True)`` if present, otherwise
            ``Lookup(zero_value, False)``. Never raises for a well-typed key.
        """
        data = self._readable("read from")
        self._key_checker.check(key)
        if key in data:
            return Lookup(data[key], True)
        return Lookup(zero_value(self._value_type), False)

    def set(self, key: KT, value: VT) -> None:
        """Insert ``value`` at ``key``, overwriting any previous value."""
        data = self._writable("assign to entry in")
        self._key_checker.check(key)
        self._value_checker.check(value)
        data[key] = value

    def delete(self, key: KT) -> None:
        """Remove ``key`` if present. Deleting an absent key is a no-op."""
        data = self._readable("delete from")
        self._key_checker.check(key)
        data.pop(key, None)

    def len(self) -> int:
        """Return the number of entries."""
        return len(self._readable("measure"))

    def keys(self) -> tuple[KT, ...]:
        """Snapshot of the keys at call time."""
        return tuple(key for key, _ in self._snapshot())

    def values(self) -> tuple[VT, ...]:
        """Snapshot of the values at call time."""
        return tuple(value for _, value in self._snapshot())

    def entries(self) -> tuple[tuple[KT, VT], ...]:
        """Snapshot of the ``(key, value)`` pairs at call time."""
        return self._snapshot()

    def get_or_insert_default(self, key: KT) -> VT:
        """Return the value stored at ``key``, inserting its zero value first.

        The returned object is the stored value itself, so mutating it
        mutates the map's entry. Only container value types qualify.

        Raises:
            TypeError: If the value type's zero value is not a mutable container.
            UninitializedContainerError: If the map is nil.
        """
        data = self._writable("insert a default into")
        self._key_checker.check(key)
        if not has_mutable_zero(self._value_type):
            msg = (
                f"get_or_insert_default requires a container value type, "
                f"got {self._value_type!r}; use set() instead"
            )
            raise TypeError(msg)
        if key not in data:
            data[key] = zero_value(self._value_type)
        return data[key]

    # ------------------------------------------------------------------
    # Supplementary operations
    # ------------------------------------------------------------------

    def contains(self, key: KT) -> bool:
        """Return True if ``key`` is present."""
        data = self._readable("read from")
        self._key_checker.check(key)
        return key in data

    def setdefault(self, key: KT, value: VT) -> VT:
        """Insert ``value`` at ``key`` unless present; return the stored value."""
        data = self._writable("assign to entry in")
        self._key_checker.check(key)
        self._value_checker.check(value)
        return data.setdefault(key, value)

    def pop(self, key: KT) -> Lookup[VT]:
        """Remove ``key`` and report what was stored there."""
        data = self._readable("delete from")
        self._key_checker.check(key)
        if key in data:
            return Lookup(data.pop(key), True)
        return Lookup(zero_value(self._value_type), False)

    def clear(self) -> None:
        """Remove all entries. Clearing a nil map is a no-op."""
        self._readable("clear").clear()

    def update(self, other: TypedMap[KT, VT] | Mapping[KT, VT] | Iterable[tuple[KT, VT]]) -> None:
        """Copy every entry of ``other`` into this map, overwriting on conflict."""
        pairs: Iterable[tuple[KT, VT]]
        if isinstance(other, TypedMap):
            pairs = other.entries()
        elif isinstance(other, Mapping):
            pairs = other.items()
        else:
            pairs = other

        staged: list[tuple[KT, VT]] = []
        for key, value in pairs:
            self._key_checker.check(key)
            self._value_checker.check(value)
            staged.append((key, value))
        if staged:
            self._writable("assign to entry in").update(staged)

    def delete_func(self, predicate: Callable[[KT, VT], bool]) -> int:
        """Delete every entry for which ``predicate(key, value)`` is true.

        Returns:
            Number of entries removed.
        """
        data = self._readable("delete from")
        doomed = [key for key, value in data.items() if predicate(key, value)]
        for key in doomed:
            del data[key]
        return len(doomed)

    def clone(self) -> TypedMap[KT, VT]:
        """Shallow copy with the same types and policies. A nil map clones to nil."""
        data = self._readable("clone")
        copy = type(self)(self._key_type, self._value_type, iteration_order=self._iteration_order)
        copy._duplicate_policy = self._duplicate_policy
        copy._data = None if self._data is None else dict(data)
        return copy

    def equal(self, other: object) -> bool:
        """True if ``other`` is a map of the same types holding the same entries."""
        if not isinstance(other, TypedMap):
            return False
        if self.key_type != other.key_type or self.value_type != other.value_type:
            return False
        return self._readable("compare") == other._readable("compare")

    def sorted_keys(self) -> list[KT]:
        """Keys in ascending order. Requires totally ordered keys."""
        return sorted(self._readable("read from"))

    def to_dict(self) -> dict[KT, VT]:
        """Convert to a plain dict (insertion order)."""
        return dict(self._readable("read from"))

    def freeze(self) -> FrozenTypedMap[KT, VT]:
        """Return an immutable, hashable snapshot of this map."""
        from typedmap.frozen import FrozenTypedMap  # noqa: PLC0415

        return FrozenTypedMap(self.key_type, self.value_type, self.to_dict())

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.len()

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[KT]:
        # Iterates a snapshot, so deleting during iteration is safe
        return iter(self.keys())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypedMap):
            return self.equal(other)
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self._constructed:
            return f"<uninitialized {type(self).__name__}>"
        from typedmap.errors import describe_type  # noqa: PLC0415

        types_ = f"{describe_type(self._key_type)}, {describe_type(self._value_type)}"
        body = "nil" if self._data is None else repr(self._data)
        return f"{type(self).__name__}[{types_}]({body})"

    def __str__(self) -> str:
        from typedmap.display import format_map  # noqa: PLC0415

        return format_map(self)

    def __rich__(self) -> Table:
        from typedmap.display import render_table  # noqa: PLC0415

        return render_table(self)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _readable(self, operation: str) -> dict[KT, VT]:
        if not self._constructed:
            raise UninitializedContainerError(operation)
        if self._data is None:
            # A nil map reads as empty
            return {}
        return self._data

    def _writable(self, operation: str) -> dict[KT, VT]:
        if not self._constructed or self._data is None:
            raise UninitializedContainerError(operation)
        return self._data

    def _snapshot(self) -> tuple[tuple[KT, VT], ...]:
        items = list(self._readable("iterate over").items())
        if self._iteration_order is IterationOrder.RANDOM:
            random.shuffle(items)
        return tuple(items)
