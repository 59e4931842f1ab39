"""Lock-guarded wrapper for sharing a typed map between threads."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from threading import RLock
from typing import Any, Generic, TypeVar

from typedmap.errors import UninitializedContainerError
from typedmap.typed_map import TypedMap
from typedmap.types import Lookup

KT = TypeVar("KT")
VT = TypeVar("VT")


class LockedTypedMap(Generic[KT, VT]):
    """Thread-safe facade over a :class:`TypedMap`.

    Every operation holds the lock for its duration. Compound
    read-modify-write sequences must hold it explicitly:

        >>> with shared.locked() as m:
        ...     count, _ = m.get("hits")
        ...     m.set("hits", count + 1)

    Values returned by :meth:`get_or_insert_default` escape the lock; mutate
    them inside :meth:`locked` when other threads may touch the same key.
    """

    def __init__(self, inner: TypedMap[KT, VT]) -> None:
        if inner.is_nil:
            # Reject up front instead of on the first write from some thread
            raise UninitializedContainerError("share")
        self._inner = inner
        self._lock = RLock()

    @classmethod
    def new(
        cls, key_type: type[KT] | Any, value_type: type[VT] | Any, **kwargs: Any
    ) -> LockedTypedMap[KT, VT]:
        """Create a guarded empty map."""
        return cls(TypedMap.new(key_type, value_type, **kwargs))

    @contextmanager
    def locked(self) -> Iterator[TypedMap[KT, VT]]:
        """Hold the lock and yield the underlying map."""
        with self._lock:
            yield self._inner

    def get(self, key: KT) -> Lookup[VT]:
        with self._lock:
            return self._inner.get(key)

    def set(self, key: KT, value: VT) -> None:
        with self._lock:
            self._inner.set(key, value)

    def delete(self, key: KT) -> None:
        with self._lock:
            self._inner.delete(key)

    def len(self) -> int:
        with self._lock:
            return self._inner.len()

    def keys(self) -> tuple[KT, ...]:
        with self._lock:
            return self._inner.keys()

    def values(self) -> tuple[VT, ...]:
        with self._lock:
            return self._inner.values()

    def entries(self) -> tuple[tuple[KT, VT], ...]:
        with self._lock:
            return self._inner.entries()

    def get_or_insert_default(self, key: KT) -> VT:
        with self._lock:
            return self._inner.get_or_insert_default(key)

    def contains(self, key: KT) -> bool:
        with self._lock:
            return self._inner.contains(key)

    def setdefault(self, key: KT, value: VT) -> VT:
        with self._lock:
            return self._inner.setdefault(key, value)

    def pop(self, key: KT) -> Lookup[VT]:
        with self._lock:
            return self._inner.pop(key)

    def update(self, other: TypedMap[KT, VT] | Mapping[KT, VT] | Iterable[tuple[KT, VT]]) -> None:
        with self._lock:
            self._inner.update(other)

    def delete_func(self, predicate: Callable[[KT, VT], bool]) -> int:
        with self._lock:
            return self._inner.delete_func(predicate)

    def clear(self) -> None:
        with self._lock:
            self._inner.clear()

    def snapshot(self) -> TypedMap[KT, VT]:
        """Return an unguarded copy of the current contents."""
        with self._lock:
            return self._inner.clone()

    def __len__(self) -> int:
        return self.len()

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[KT]:
        return iter(self.keys())

    def __repr__(self) -> str:
        with self._lock:
            return f"{type(self).__name__}({self._inner!r})"
