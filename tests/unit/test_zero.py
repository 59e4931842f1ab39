"""Tests for zero values."""
from __future__ import annotations

import datetime
import uuid
from collections import deque
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Literal, NamedTuple, Optional

import pytest
from pydantic import BaseModel, Field

from typedmap.typed_map import TypedMap
from typedmap.zero import has_mutable_zero, zero_value


class Suit(Enum):
    HEARTS = 1
    SPADES = 2


@dataclass
class Hero:
    name: str
    villains: list[str]
    level: int = 1
    tags: dict[str, str] = field(default_factory=dict)


class Pair(NamedTuple):
    left: int
    right: str = "r"


class Profile(BaseModel):
    name: str
    age: int
    active: bool = True


class Handle(BaseModel):
    login: str = Field(min_length=1)


class TestScalarZeros:
    """Zero values for scalar types."""

    @pytest.mark.parametrize(
        ("tp", "expected"),
        [
            (int, 0),
            (float, 0.0),
            (complex, 0j),
            (str, ""),
            (bytes, b""),
            (bool, False),
            (Decimal, Decimal(0)),
            (datetime.timedelta, datetime.timedelta(0)),
            (datetime.date, datetime.date.min),
            (datetime.datetime, datetime.datetime.min),
            (uuid.UUID, uuid.UUID(int=0)),
        ],
    )
    def test_scalar(self, tp: Any, expected: Any) -> None:
        """Scalars zero to their empty or zero form."""
        assert zero_value(tp) == expected

    def test_none_like(self) -> None:
        """None, Any and Optional types zero to None."""
        assert zero_value(None) is None
        assert zero_value(Any) is None
        assert zero_value(Optional[int]) is None
        assert zero_value(int | None) is None

    def test_union_uses_first_member(self) -> None:
        """Non-optional unions take the zero of their first member."""
        assert zero_value(int | str) == 0

    def test_enum_first_member(self) -> None:
        """Enums zero to their first member."""
        assert zero_value(Suit) is Suit.HEARTS

    def test_literal_first_value(self) -> None:
        """Literals zero to their first value."""
        assert zero_value(Literal["x", "y"]) == "x"


class TestCompositeZeros:
    """Zero values for containers and records."""

    def test_containers_are_empty(self) -> None:
        """Container types zero to an empty instance."""
        assert zero_value(list[str]) == []
        assert zero_value(dict[str, int]) == {}
        assert zero_value(set[int]) == set()
        assert zero_value(deque) == deque()

    def test_fresh_objects(self) -> None:
        """Each call builds a new object."""
        assert zero_value(list[str]) is not zero_value(list[str])

    def test_fixed_tuple(self) -> None:
        """Fixed tuples zero element-wise."""
        assert zero_value(tuple[int, str]) == (0, "")
        assert zero_value(tuple[int, ...]) == ()

    def test_dataclass(self) -> None:
        """Dataclasses zero their required fields and keep defaults."""
        hero = zero_value(Hero)
        assert hero == Hero(name="", villains=[], level=1, tags={})

    def test_namedtuple(self) -> None:
        """NamedTuples zero their required fields and keep defaults."""
        assert zero_value(Pair) == Pair(0, "r")

    def test_model(self) -> None:
        """Pydantic models zero their required fields and keep defaults."""
        assert zero_value(Profile) == Profile(name="", age=0, active=True)

    def test_model_rejecting_zero_fields(self) -> None:
        """Models whose constraints reject the zero values zero to None."""
        assert zero_value(Handle) is None

    def test_nested_map(self) -> None:
        """Parameterized map types zero to an initialized empty map."""
        inner = zero_value(TypedMap[str, int])
        assert isinstance(inner, TypedMap)
        assert not inner.is_nil
        assert inner.key_type is str
        assert len(inner) == 0

    def test_class_needing_arguments(self) -> None:
        """Classes that cannot be built without arguments zero to None."""

        class NeedsArgs:
            def __init__(self, value: int) -> None:
                self.value = value

        assert zero_value(NeedsArgs) is None


class TestHasMutableZero:
    """Tests for has_mutable_zero."""

    @pytest.mark.parametrize("tp", [list[str], dict[str, int], set[int], deque, bytearray])
    def test_mutable(self, tp: Any) -> None:
        """Mutable containers qualify."""
        assert has_mutable_zero(tp)

    @pytest.mark.parametrize("tp", [int, str, tuple[int, int], Optional[list[int]]])
    def test_not_mutable(self, tp: Any) -> None:
        """Scalars, tuples and optionals do not qualify."""
        assert not has_mutable_zero(tp)
