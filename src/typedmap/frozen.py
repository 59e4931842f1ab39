"""Immutable snapshots of typed maps."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from typedmap.errors import describe_type
from typedmap.types import Lookup
from typedmap.zero import zero_value

if TYPE_CHECKING:
    from typedmap.typed_map import TypedMap

KT = TypeVar("KT")
VT = TypeVar("VT")


class FrozenTypedMap(Mapping[KT, VT], Generic[KT, VT]):
    """An immutable, hashable mapping that remembers its declared types.

    Produced by :meth:`TypedMap.freeze`. Safe to keep inside frozen
    dataclasses or as a dict key, as long as its values are hashable.
    """

    _data: dict[KT, VT]
    _hash: int | None

    def __init__(self, key_type: Any, value_type: Any, mapping: Mapping[KT, VT], /) -> None:
        self.key_type = key_type
        self.value_type = value_type
        self._data = dict(mapping)
        self._hash = None

    def __getitem__(self, key: KT) -> VT:
        return self._data[key]

    def __iter__(self) -> Iterator[KT]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def lookup(self, key: KT) -> Lookup[VT]:
        """Comma-ok lookup, as on :meth:`TypedMap.get`."""
        if key in self._data:
            return Lookup(self._data[key], True)
        return Lookup(zero_value(self.value_type), False)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._data.items()))
        return self._hash

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._data) == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        types_ = f"{describe_type(self.key_type)}, {describe_type(self.value_type)}"
        return f"{type(self).__name__}[{types_}]({self._data!r})"

    def to_dict(self) -> dict[KT, VT]:
        """Convert to a plain dict (useful for JSON serialization)."""
        return dict(self._data)

    def thaw(self) -> TypedMap[KT, VT]:
        """Return a new mutable map holding the same entries."""
        from typedmap.typed_map import TypedMap  # noqa: PLC0415

        return TypedMap.from_entries(
            self.key_type, self.value_type, self._data, duplicates="strict"
        )
