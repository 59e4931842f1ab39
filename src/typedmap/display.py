"""Text and rich renderings of typed maps."""

from __future__ import annotations

import contextlib
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from typedmap.errors import describe_type

if TYPE_CHECKING:
    from typedmap.typed_map import TypedMap


def format_map(m: TypedMap[Any, Any]) -> str:
    """Format like Go's ``fmt.Print``: ``map[k1:v1 k2:v2]``.

    Entries are sorted by key when the keys are orderable, as Go's fmt does.
    A nil map prints as ``map[]``.
    """
    entries = m.entries()
    # Unorderable keys print in snapshot order
    with contextlib.suppress(TypeError):
        entries = tuple(sorted(entries, key=lambda kv: kv[0]))
    body = " ".join(f"{_format_value(k)}:{_format_value(v)}" for k, v in entries)
    return f"map[{body}]"


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(v) for v in value) + "]"
    if isinstance(value, Mapping):
        inner = " ".join(f"{_format_value(k)}:{_format_value(v)}" for k, v in value.items())
        return f"map[{inner}]"
    if value is None:
        return "<nil>"
    return str(value)


def render_table(m: TypedMap[Any, Any]) -> Table:
    """Render a map as a two-column rich table titled with its types."""
    title = f"map[{describe_type(m.key_type)}]{describe_type(m.value_type)}"
    if m.is_nil:
        title = f"{title} (nil)"

    table = Table(title=title)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    entries = m.entries()
    if not entries:
        table.add_row("-", "-")
        return table

    for key, value in entries:
        table.add_row(Text(repr(key)), Text(repr(value)))

    return table
