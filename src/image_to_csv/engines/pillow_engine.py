from __future__ import annotations

from pathlib import Path

import numpy as np
import PIL
from PIL import Image

from contracts.grid import PixelGrid

from .base import ImageSourceEngine


class PillowImageEngine(ImageSourceEngine):
    def backend_id(self) -> str:
        return "pillow"

    def backend_version(self) -> str | None:
        return getattr(PIL, "__version__", None)

    def load_pixels(self, *, image_file: Path) -> PixelGrid:
        with Image.open(image_file) as img:
            # Palette, grayscale and alpha images are all normalised to 8-bit RGB.
            rgb = img.convert("RGB")
            arr = np.asarray(rgb, dtype=np.uint8)
        return PixelGrid.from_array(arr)
