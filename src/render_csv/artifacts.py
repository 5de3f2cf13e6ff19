from __future__ import annotations

from pathlib import Path


def write_csv_text(*, text: str, out_csv: Path) -> None:
    # Written verbatim; the rendered text carries no trailing newline.
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    with out_csv.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
