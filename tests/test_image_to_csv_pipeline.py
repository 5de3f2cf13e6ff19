from __future__ import annotations

import json
import shutil
import unittest
from pathlib import Path
from unittest.mock import patch

import numpy as np
from PIL import Image

from contracts.grid import PixelGrid
from contracts.table import ExtractMode
from image_to_csv import (
    ImageToCsvConfig,
    ImageToCsvResult,
    run_image_to_csv_file,
    run_image_to_csv_relpath,
    serialize_image_to_csv_result,
)


class _FakeImageEngine:
    def __init__(self, array: np.ndarray) -> None:
        self.array = array

    def backend_id(self) -> str:
        return "fake_backend"

    def backend_version(self) -> str | None:
        return "0"

    def load_pixels(self, *, image_file: Path) -> PixelGrid:
        return PixelGrid.from_array(self.array)


def _fresh_dir(name: str) -> Path:
    repo_root = Path(__file__).resolve().parents[1]
    root = repo_root / "artifacts" / name
    if root.exists():
        shutil.rmtree(root)
    root.mkdir(parents=True, exist_ok=True)
    return root


class TestImageToCsvPipeline(unittest.TestCase):
    def setUp(self) -> None:
        self.root = _fresh_dir("_test_image_to_csv")
        self.data_root = self.root / "data"
        self.data_root.mkdir()
        Image.new("RGB", (4, 4), (255, 0, 0)).save(self.data_root / "red.png")
        self.out_csv = self.root / "out" / "red.csv"

    def _config(self, **overrides) -> ImageToCsvConfig:
        kwargs = dict(
            data_root=self.data_root,
            horizontal_cells=2,
            vertical_cells=2,
            scale_factor=255.0,
            mode=ExtractMode.THREE_D,
        )
        kwargs.update(overrides)
        return ImageToCsvConfig(**kwargs)

    def test_png_to_three_d_csv(self) -> None:
        r: ImageToCsvResult = run_image_to_csv_relpath(
            config=self._config(), image_relpath="red.png", out_csv=self.out_csv
        )

        self.assertTrue(r.ok, r.errors)
        self.assertEqual(self.out_csv.read_text(encoding="utf-8"), "0, 0, 53.0\n1, 0, 53.0\n0, 1, 53.0\n1, 1, 53.0")
        self.assertEqual(
            r.grid,
            {"source_width_px": 4, "source_height_px": 4, "cols": 2, "rows": 2, "h_distance": 2, "v_distance": 2},
        )
        self.assertEqual(r.meta["csv_line_count"], 4)
        self.assertTrue(r.run_id.startswith("red_"))

    def test_png_to_flat_csv(self) -> None:
        r = run_image_to_csv_relpath(
            config=self._config(mode=ExtractMode.FLAT, horizontal_cells=0, vertical_cells=1, scale_factor=1.0),
            image_relpath="red.png",
            out_csv=self.out_csv,
        )

        self.assertTrue(r.ok, r.errors)
        self.assertEqual(self.out_csv.read_text(encoding="utf-8"), ", ".join([repr(53 / 255.0)] * 4))

    def test_alpha_is_dropped_when_decoding(self) -> None:
        Image.new("RGBA", (2, 2), (255, 0, 0, 0)).save(self.data_root / "clear.png")
        r = run_image_to_csv_relpath(
            config=self._config(horizontal_cells=1, vertical_cells=1),
            image_relpath="clear.png",
            out_csv=self.out_csv,
        )
        self.assertTrue(r.ok, r.errors)
        self.assertEqual(self.out_csv.read_text(encoding="utf-8"), "0, 0, 53.0")

    def test_manifest_bytes_stable_across_runs(self) -> None:
        cfg = self._config(compute_source_sha256=True)
        r1 = run_image_to_csv_relpath(config=cfg, image_relpath="red.png", out_csv=self.out_csv)
        r2 = run_image_to_csv_relpath(config=cfg, image_relpath="red.png", out_csv=self.out_csv)

        b1 = serialize_image_to_csv_result(r1)
        b2 = serialize_image_to_csv_result(r2)
        self.assertEqual(b1, b2)

        d = json.loads(b1)
        self.assertEqual(d["mode"], "3d")
        self.assertEqual(d["engine"], "pillow")
        self.assertEqual(len(d["meta"]["source_sha256"]), 64)
        self.assertEqual(d["errors"], [])

    def test_run_id_depends_on_parameters(self) -> None:
        r1 = run_image_to_csv_relpath(config=self._config(), image_relpath="red.png", out_csv=self.out_csv)
        r2 = run_image_to_csv_relpath(
            config=self._config(scale_factor=1.0), image_relpath="red.png", out_csv=self.out_csv
        )
        self.assertNotEqual(r1.run_id, r2.run_id)

    def test_explicit_file_entrypoint(self) -> None:
        r = run_image_to_csv_file(
            config=self._config(), image_file=self.data_root / "red.png", out_csv=self.out_csv
        )
        self.assertTrue(r.ok, r.errors)
        self.assertIsNone(r.source_image_relpath)
        self.assertEqual(r.out_csv_path, self.out_csv.as_posix())


class TestImageToCsvFailures(unittest.TestCase):
    def setUp(self) -> None:
        self.root = _fresh_dir("_test_image_to_csv_failures")
        self.data_root = self.root / "data"
        self.data_root.mkdir()
        self.out_csv = self.root / "out.csv"
        self.cfg = ImageToCsvConfig(data_root=self.data_root, scale_factor=1.0)

    def _codes(self, r: ImageToCsvResult) -> list[str]:
        return [e.code for e in r.errors]

    def test_traversal_is_rejected(self) -> None:
        r = run_image_to_csv_relpath(config=self.cfg, image_relpath="../escape.png", out_csv=self.out_csv)
        self.assertFalse(r.ok)
        self.assertEqual(self._codes(r), ["IMAGE_TO_CSV_DATA_ACCESS_ERROR"])

    def test_absolute_path_is_rejected(self) -> None:
        r = run_image_to_csv_relpath(config=self.cfg, image_relpath="/etc/passwd", out_csv=self.out_csv)
        self.assertEqual(self._codes(r), ["IMAGE_TO_CSV_DATA_ACCESS_ERROR"])

    def test_missing_input(self) -> None:
        r = run_image_to_csv_relpath(config=self.cfg, image_relpath="nope.png", out_csv=self.out_csv)
        self.assertEqual(self._codes(r), ["IMAGE_TO_CSV_INPUT_NOT_FOUND"])
        self.assertFalse(self.out_csv.exists())

    def test_undecodable_input(self) -> None:
        (self.data_root / "bad.png").write_bytes(b"not an image")
        r = run_image_to_csv_relpath(config=self.cfg, image_relpath="bad.png", out_csv=self.out_csv)
        self.assertEqual(self._codes(r), ["IMAGE_TO_CSV_DECODE_FAILED"])
        self.assertEqual(r.grid, {})

    def test_degenerate_image(self) -> None:
        (self.data_root / "empty.png").write_bytes(b"")
        with patch(
            "image_to_csv.module._get_engine",
            return_value=_FakeImageEngine(np.zeros((0, 3, 3), dtype=np.uint8)),
        ):
            r = run_image_to_csv_relpath(config=self.cfg, image_relpath="empty.png", out_csv=self.out_csv)
        self.assertEqual(self._codes(r), ["IMAGE_TO_CSV_DEGENERATE_IMAGE"])

    def test_write_failure(self) -> None:
        Image.new("RGB", (2, 2), (0, 0, 0)).save(self.data_root / "black.png")
        blocker = self.root / "blocker"
        blocker.write_text("x", encoding="utf-8")
        r = run_image_to_csv_relpath(
            config=self.cfg, image_relpath="black.png", out_csv=blocker / "out.csv"
        )
        self.assertEqual(self._codes(r), ["IMAGE_TO_CSV_WRITE_FAILED"])
        self.assertEqual(r.grid["cols"], 2)

    def test_fake_engine_drives_core(self) -> None:
        (self.data_root / "any.png").write_bytes(b"")
        with patch(
            "image_to_csv.module._get_engine",
            return_value=_FakeImageEngine(np.zeros((2, 2, 3), dtype=np.uint8)),
        ):
            r = run_image_to_csv_relpath(
                config=ImageToCsvConfig(data_root=self.data_root, scale_factor=1, mode=ExtractMode.FLAT),
                image_relpath="any.png",
                out_csv=self.out_csv,
            )
        self.assertTrue(r.ok, r.errors)
        self.assertEqual(self.out_csv.read_text(encoding="utf-8"), "0.0, 0.0\n0.0, 0.0")


class TestImageToCsvConfig(unittest.TestCase):
    def test_non_finite_scale_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ImageToCsvConfig(data_root=Path("."), scale_factor=float("inf"))
        with self.assertRaises(ValueError):
            ImageToCsvConfig(data_root=Path("."), scale_factor=float("nan"))

    def test_data_root_must_be_path(self) -> None:
        with self.assertRaises(TypeError):
            ImageToCsvConfig(data_root=".")  # type: ignore[arg-type]

    def test_cells_must_be_ints(self) -> None:
        with self.assertRaises(TypeError):
            ImageToCsvConfig(data_root=Path("."), horizontal_cells=2.5)  # type: ignore[arg-type]

    def test_zero_and_negative_scale_are_allowed(self) -> None:
        ImageToCsvConfig(data_root=Path("."), scale_factor=0.0)
        ImageToCsvConfig(data_root=Path("."), scale_factor=-3.0)


if __name__ == "__main__":
    unittest.main()
