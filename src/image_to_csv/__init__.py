"""
Image -> CSV pipeline (decode, resample, extract, render, write).

- The image engine is the ONLY component that decodes file formats.
- Stages 1-3 (resample, extract, render_csv) are pure and never touch the filesystem.
- No environment variable reads; data_root and output paths are passed explicitly.
- Expected failures are reported as structured errors on the result, not raised.
"""

from .artifacts import serialize_image_to_csv_result, write_image_to_csv_manifest_json
from .contracts import ImageEngineName, ImageToCsvConfig, ImageToCsvError, ImageToCsvResult
from .module import render_pixels_to_csv, run_image_to_csv_file, run_image_to_csv_relpath

__all__ = [
    "ImageEngineName",
    "ImageToCsvConfig",
    "ImageToCsvError",
    "ImageToCsvResult",
    "render_pixels_to_csv",
    "run_image_to_csv_file",
    "run_image_to_csv_relpath",
    "serialize_image_to_csv_result",
    "write_image_to_csv_manifest_json",
]
