from __future__ import annotations

import argparse
from pathlib import Path

from contracts.table import ExtractMode

from .artifacts import write_image_to_csv_manifest_json
from .contracts import ImageToCsvConfig
from .module import run_image_to_csv_relpath


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="img2csv",
        description="Resample an image into cells and emit grayscale intensities as CSV text.",
    )
    p.add_argument("--data-root", required=True, type=Path, help="Resolved DATA_ROOT path.")
    p.add_argument("--image-relpath", required=True, help="Image path relative to --data-root.")
    p.add_argument("--out-csv", required=True, type=Path, help="Output CSV text file.")
    p.add_argument(
        "--out-manifest",
        required=False,
        type=Path,
        default=None,
        help="Optional output JSON manifest describing the run.",
    )
    p.add_argument(
        "--horizontal-cells",
        type=int,
        default=0,
        help="Target number of columns (<= 0: no horizontal reduction).",
    )
    p.add_argument(
        "--vertical-cells",
        type=int,
        default=0,
        help="Target number of rows (<= 0: no vertical reduction).",
    )
    p.add_argument(
        "--scale-factor",
        required=True,
        type=float,
        help="Intensity 255 maps to this value.",
    )
    p.add_argument(
        "--mode",
        choices=[m.value for m in ExtractMode],
        default=ExtractMode.THREE_D.value,
        help="3d: 'x, y, value' rows; flat: one row of values per cell row.",
    )
    p.add_argument(
        "--compute-source-sha256",
        action="store_true",
        help="Include SHA-256 of the source image in meta for auditing.",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = ImageToCsvConfig(
            data_root=args.data_root,
            horizontal_cells=args.horizontal_cells,
            vertical_cells=args.vertical_cells,
            scale_factor=args.scale_factor,
            mode=ExtractMode(args.mode),
            compute_source_sha256=args.compute_source_sha256,
        )
    except (TypeError, ValueError) as e:
        parser.error(str(e))

    result = run_image_to_csv_relpath(config=config, image_relpath=args.image_relpath, out_csv=args.out_csv)
    if args.out_manifest is not None:
        write_image_to_csv_manifest_json(result=result, out_manifest=args.out_manifest)

    grid = result.grid
    print(
        f"run_id={result.run_id} ok={result.ok} mode={result.mode.value} "
        f"cells={grid.get('cols', '?')}x{grid.get('rows', '?')} "
        f"errors={','.join(e.code for e in result.errors) or '-'}"
    )
    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
