from __future__ import annotations

import numbers
from typing import Any, Iterable

import numpy as np

from contracts.table import ExtractedTable, FlatTable, ThreeDTable

FIELD_SEPARATOR = ", "
ROW_SEPARATOR = "\n"


def format_field(value: Any) -> str:
    """
    Canonical decimal text for one field.

    ints -> "7"; floats -> shortest round-trip form ("53.0", "0.5", "-0.0").
    """

    if isinstance(value, (bool, np.bool_)):
        raise TypeError("boolean fields are not supported")
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        # float() first so numpy scalars render as plain decimals.
        return repr(float(value))
    raise TypeError(f"unsupported field type: {type(value).__name__}")


def to_delimited_text(
    rows: Iterable[Iterable[Any]],
    field_separator: str = FIELD_SEPARATOR,
    row_separator: str = ROW_SEPARATOR,
) -> str:
    # No trailing row separator.
    return row_separator.join(field_separator.join(format_field(f) for f in row) for row in rows)


def render_table(table: ExtractedTable) -> str:
    if isinstance(table, (ThreeDTable, FlatTable)):
        return to_delimited_text(table.to_rows())
    raise TypeError(f"unsupported table type: {type(table).__name__}")
