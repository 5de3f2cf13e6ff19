from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .contracts import ImageToCsvResult


def serialize_image_to_csv_result(result: ImageToCsvResult) -> str:
    payload: dict[str, Any] = result.to_dict()
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_image_to_csv_manifest_json(*, result: ImageToCsvResult, out_manifest: Path) -> None:
    out_manifest.parent.mkdir(parents=True, exist_ok=True)
    out_manifest.write_text(serialize_image_to_csv_result(result), encoding="utf-8")
