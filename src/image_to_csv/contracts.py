from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from contracts.table import ExtractMode


class ImageEngineName(str, Enum):
    """
    Image decoding backend identifiers.
    """

    PILLOW = "pillow"


@dataclass(frozen=True, slots=True)
class ImageToCsvError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ImageToCsvResult:
    # Deterministic identifier, stable for identical:
    # (source_image_relpath + cells + scale_factor + mode + backend identifier)
    run_id: str
    ok: bool
    engine: ImageEngineName
    source_image_relpath: str | None
    out_csv_path: str | None
    mode: ExtractMode
    grid: dict[str, int]  # source_width_px, source_height_px, cols, rows, h_distance, v_distance
    errors: list[ImageToCsvError]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ImageToCsvConfig:
    """
    Image -> CSV configuration.

    - `data_root` must be passed explicitly (no environment variable reads)
    - cells <= 0 means "no reduction" along that axis
    - scale_factor may be zero or negative, but must be finite
    """

    data_root: Path
    horizontal_cells: int = 0
    vertical_cells: int = 0
    scale_factor: float = 1.0
    mode: ExtractMode = ExtractMode.THREE_D
    engine: ImageEngineName = ImageEngineName.PILLOW
    compute_source_sha256: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.data_root, Path):
            raise TypeError("data_root must be pathlib.Path")
        for name in ("horizontal_cells", "vertical_cells"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"{name} must be an int")
        if isinstance(self.scale_factor, bool) or not isinstance(self.scale_factor, (int, float)):
            raise TypeError("scale_factor must be a real number")
        if not math.isfinite(self.scale_factor):
            raise ValueError("scale_factor must be finite")
        if not isinstance(self.mode, ExtractMode):
            raise TypeError("mode must be an ExtractMode")
