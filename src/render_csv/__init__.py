"""
Stage 3: CSV rendering (ExtractedTable -> delimited text).

Fields are joined by ", " and rows by "\\n"; there is no trailing row separator.
"""

from .artifacts import write_csv_text
from .formatter import FIELD_SEPARATOR, ROW_SEPARATOR, format_field, render_table, to_delimited_text

__all__ = [
    "FIELD_SEPARATOR",
    "ROW_SEPARATOR",
    "format_field",
    "render_table",
    "to_delimited_text",
    "write_csv_text",
]
