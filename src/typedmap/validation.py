"""Runtime type checks for map keys and values.

Checks are delegated to pydantic's strict validation, which understands
parameterized types such as ``list[str]``, ``Optional[int]`` and ``Literal``.
The validated copy pydantic returns is discarded: a map stores the caller's
own object so that mutable values keep their identity.
"""

from __future__ import annotations

import dataclasses
from typing import Any, get_args, get_origin

from pydantic import (
    BaseModel,
    ConfigDict,
    PydanticSchemaGenerationError,
    TypeAdapter,
    ValidationError,
)

from typedmap.errors import TypeMismatchError

_STRICT = ConfigDict(strict=True, arbitrary_types_allowed=True)


class TypeChecker:
    """Validates objects against one declared type.

    Args:
        declared_type: The type every checked object must conform to.
        role: Either "key" or "value" (used in error messages).
    """

    def __init__(self, declared_type: Any, role: str) -> None:
        self.declared_type = declared_type
        self.role = role
        self._instance_of: type | None = None
        self._map_types: tuple[Any, Any] | None = None
        self._adapter: TypeAdapter[Any] | None = None

        origin = get_origin(declared_type)
        if _is_map_class(origin):
            self._instance_of = origin
            self._map_types = get_args(declared_type)  # type: ignore[assignment]
        elif _is_typed_dict(declared_type):
            # pydantic refuses a config override for TypedDict
            self._adapter = TypeAdapter(declared_type)
        elif isinstance(declared_type, type) and _is_record_class(declared_type):
            self._instance_of = declared_type
        else:
            try:
                self._adapter = TypeAdapter(declared_type, config=_STRICT)
            except PydanticSchemaGenerationError:
                if not isinstance(declared_type, type):
                    raise
                self._instance_of = declared_type

    def check(self, obj: Any) -> None:
        """Raise TypeMismatchError unless ``obj`` conforms to the declared type."""
        if self._adapter is not None:
            try:
                self._adapter.validate_python(obj)
            except ValidationError as exc:
                raise TypeMismatchError(self.role, self.declared_type, obj) from exc
            return

        if self._instance_of is None or not isinstance(obj, self._instance_of):
            raise TypeMismatchError(self.role, self.declared_type, obj)
        if self._map_types is not None:
            key_type, value_type = self._map_types
            if obj.key_type != key_type or obj.value_type != value_type:
                raise TypeMismatchError(self.role, self.declared_type, obj)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.declared_type!r}, role={self.role!r})"


def _is_record_class(tp: type) -> bool:
    """Dataclasses and models are matched by class, never coerced from dicts."""
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def _is_typed_dict(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, dict) and hasattr(tp, "__total__")


def _is_map_class(origin: Any) -> bool:
    from typedmap.typed_map import TypedMap  # noqa: PLC0415

    return isinstance(origin, type) and issubclass(origin, TypedMap)
