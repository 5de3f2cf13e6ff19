from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ExtractMode(str, Enum):
    """
    Extraction layouts.

    THREE_D yields (x, y, value) samples for height-map / point-cloud generation.
    FLAT yields a plain [row][col] intensity matrix.
    """

    THREE_D = "3d"
    FLAT = "flat"


@dataclass(frozen=True, slots=True)
class ThreeDRecord:
    x: int  # column index in the cell grid
    y: int  # row index in the cell grid
    value: float

    def to_row(self) -> list[Any]:
        return [self.x, self.y, self.value]


@dataclass(frozen=True, slots=True)
class ThreeDTable:
    # Row-major: all columns of row 0, then row 1, ...
    records: list[ThreeDRecord]

    @property
    def mode(self) -> ExtractMode:
        return ExtractMode.THREE_D

    def to_rows(self) -> list[list[Any]]:
        return [r.to_row() for r in self.records]


@dataclass(frozen=True, slots=True)
class FlatTable:
    matrix: list[list[float]]  # [row][col]

    @property
    def mode(self) -> ExtractMode:
        return ExtractMode.FLAT

    @property
    def rows(self) -> int:
        return len(self.matrix)

    @property
    def cols(self) -> int:
        return len(self.matrix[0]) if self.matrix else 0

    def to_rows(self) -> list[list[Any]]:
        return [list(row) for row in self.matrix]


ExtractedTable = Union[ThreeDTable, FlatTable]
