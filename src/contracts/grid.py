from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


class InvalidInputError(ValueError):
    pass


def _readonly_rgb(array: Any, *, what: str) -> np.ndarray:
    arr = np.asarray(array)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise InvalidInputError(f"{what} must be shaped (height, width, 3|4), got {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidInputError(f"{what} must be at least 1x1, got {arr.shape[1]}x{arr.shape[0]}")

    # Alpha (if any) is dropped without compositing.
    out = np.array(arr[:, :, :3], dtype=np.uint8, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, slots=True, eq=False)
class PixelGrid:
    """
    Decoded source image, owned by the caller.

    `data` is a read-only uint8 array indexed [y, x, channel] (RGB).
    """

    data: np.ndarray

    @staticmethod
    def from_array(array: Any) -> "PixelGrid":
        return PixelGrid(data=_readonly_rgb(array, what="PixelGrid"))

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        r, g, b = self.data[y, x]
        return int(r), int(g), int(b)


@dataclass(frozen=True, slots=True, eq=False)
class CellGrid:
    """
    Resampled, monochrome grid (R=G=B per cell).

    `h_distance` / `v_distance` record the source block size each cell was averaged over.
    """

    data: np.ndarray
    h_distance: int
    v_distance: int

    @property
    def cols(self) -> int:
        return int(self.data.shape[1])

    @property
    def rows(self) -> int:
        return int(self.data.shape[0])

    @property
    def intensity(self) -> np.ndarray:
        return self.data[:, :, 0]

    def cell(self, x: int, y: int) -> tuple[int, int, int]:
        r, g, b = self.data[y, x]
        return int(r), int(g), int(b)

    def geometry(self) -> dict[str, int]:
        return {
            "cols": self.cols,
            "rows": self.rows,
            "h_distance": int(self.h_distance),
            "v_distance": int(self.v_distance),
        }
