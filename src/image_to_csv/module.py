from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Any

from contracts.grid import InvalidInputError, PixelGrid
from contracts.table import ExtractMode
from extract import extract
from render_csv import render_table, write_csv_text
from resample import LUMINANCE_WEIGHTS, resample

from .contracts import ImageEngineName, ImageToCsvConfig, ImageToCsvError, ImageToCsvResult
from .data_access import DataAccessError, resolve_under_data_root, sha256_file
from .engines import PillowImageEngine


def _safe_image_stem(image_relpath: str | None) -> str:
    """
    Deterministic, filesystem-safe stem for readability.
    """
    if not image_relpath:
        return "image"
    s = image_relpath.replace("\\", "/").split("/")[-1]
    s = s.rsplit(".", 1)[0] if "." in s else s
    s = re.sub(r"[^A-Za-z0-9._-]+", "_", s)
    s = re.sub(r"_+", "_", s).strip("_")
    return s or "image"


def _compute_run_id(*, config: ImageToCsvConfig, source_image_relpath: str | None, backend_id: str) -> str:
    payload = {
        "source_image_relpath": (source_image_relpath or "").replace("\\", "/"),
        "horizontal_cells": config.horizontal_cells,
        "vertical_cells": config.vertical_cells,
        "scale_factor": float(config.scale_factor),
        "mode": config.mode.value,
        "backend": backend_id,
    }
    s = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    digest = hashlib.sha256(s.encode("utf-8")).hexdigest()
    return f"{_safe_image_stem(source_image_relpath)}_{digest[:12]}"


def _get_engine(engine: ImageEngineName):
    if engine == ImageEngineName.PILLOW:
        return PillowImageEngine()
    raise ValueError(f"Unsupported image engine: {engine}")


def render_pixels_to_csv(
    pixels: PixelGrid,
    *,
    horizontal_cells: int,
    vertical_cells: int,
    scale_factor: float,
    mode: ExtractMode,
) -> str:
    """
    Core transform: PixelGrid + parameters -> CSV text (resample -> extract -> render).

    Deterministic and side-effect free. Raises InvalidInputError for a degenerate image.
    """

    cells = resample(pixels, horizontal_cells, vertical_cells)
    return render_table(extract(cells, scale_factor, mode))


class _Run:
    """
    Accumulates result fields for one run so every exit path reports the same shape.
    """

    def __init__(self, *, config: ImageToCsvConfig, source_image_relpath: str | None, run_id: str) -> None:
        self.config = config
        self.source_image_relpath = source_image_relpath
        self.run_id = run_id
        self.grid: dict[str, int] = {}
        self.meta: dict[str, Any] = {
            "scale_factor": float(config.scale_factor),
            "requested_cells": {"horizontal": config.horizontal_cells, "vertical": config.vertical_cells},
            "luminance_weights": list(LUMINANCE_WEIGHTS),
        }

    def result(self, *, out_csv: Path | None, errors: list[ImageToCsvError]) -> ImageToCsvResult:
        return ImageToCsvResult(
            run_id=self.run_id,
            ok=not errors,
            engine=self.config.engine,
            source_image_relpath=self.source_image_relpath,
            out_csv_path=(None if out_csv is None else out_csv.as_posix()),
            mode=self.config.mode,
            grid=dict(self.grid),
            errors=errors,
            meta=self.meta,
        )

    def fail(self, code: str, message: str, detail: dict[str, Any] | None = None) -> ImageToCsvResult:
        return self.result(out_csv=None, errors=[ImageToCsvError(code=code, message=message, detail=detail)])


def _run_on_resolved_file(*, run: _Run, engine, image_file: Path, out_csv: Path) -> ImageToCsvResult:
    config = run.config
    if not image_file.exists():
        return run.fail(
            "IMAGE_TO_CSV_INPUT_NOT_FOUND",
            "Input image not found",
            {"source_image_relpath": run.source_image_relpath, "resolved": str(image_file)},
        )

    try:
        pixels = engine.load_pixels(image_file=image_file)
    except InvalidInputError as e:
        return run.fail("IMAGE_TO_CSV_DEGENERATE_IMAGE", str(e), {"resolved": str(image_file)})
    except Exception as e:
        return run.fail("IMAGE_TO_CSV_DECODE_FAILED", "Image decoding failed", {"error": repr(e)})

    run.grid.update({"source_width_px": pixels.width, "source_height_px": pixels.height})

    try:
        cells = resample(pixels, config.horizontal_cells, config.vertical_cells)
    except InvalidInputError as e:
        return run.fail("IMAGE_TO_CSV_DEGENERATE_IMAGE", str(e), {"resolved": str(image_file)})
    run.grid.update(cells.geometry())

    text = render_table(extract(cells, config.scale_factor, config.mode))

    try:
        write_csv_text(text=text, out_csv=out_csv)
    except OSError as e:
        return run.fail("IMAGE_TO_CSV_WRITE_FAILED", "Failed to write CSV output", {"error": repr(e)})

    if config.compute_source_sha256:
        try:
            run.meta["source_sha256"] = sha256_file(image_file)
        except OSError as e:
            run.meta.setdefault("audit_warnings", []).append(
                {"code": "IMAGE_TO_CSV_SOURCE_HASH_FAILED", "error": repr(e)}
            )

    run.meta["csv_line_count"] = text.count("\n") + 1 if text else 0
    return run.result(out_csv=out_csv, errors=[])


def run_image_to_csv_relpath(*, config: ImageToCsvConfig, image_relpath: str, out_csv: Path) -> ImageToCsvResult:
    """
    Preferred programmatic entrypoint.

    Input: image relpath under `config.data_root`
    Output: CSV text written to `out_csv` + JSON-ready result
    """

    engine = _get_engine(config.engine)
    run = _Run(
        config=config,
        source_image_relpath=image_relpath,
        run_id=_compute_run_id(config=config, source_image_relpath=image_relpath, backend_id=engine.backend_id()),
    )
    run.meta["backend_version"] = engine.backend_version()

    try:
        image_file = resolve_under_data_root(data_root=config.data_root, relpath=image_relpath)
    except DataAccessError as e:
        return run.fail(
            "IMAGE_TO_CSV_DATA_ACCESS_ERROR",
            str(e),
            {"data_root": str(config.data_root), "relpath": image_relpath},
        )

    return _run_on_resolved_file(run=run, engine=engine, image_file=image_file, out_csv=out_csv)


def run_image_to_csv_file(
    *, config: ImageToCsvConfig, image_file: Path, out_csv: Path, source_image_relpath: str | None = None
) -> ImageToCsvResult:
    """
    Same as `run_image_to_csv_relpath`, for an explicit image file path (no data_root resolution).
    """

    engine = _get_engine(config.engine)
    run = _Run(
        config=config,
        source_image_relpath=source_image_relpath,
        run_id=_compute_run_id(
            config=config, source_image_relpath=source_image_relpath or image_file.name, backend_id=engine.backend_id()
        ),
    )
    run.meta["backend_version"] = engine.backend_version()
    return _run_on_resolved_file(run=run, engine=engine, image_file=image_file, out_csv=out_csv)
