from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from contracts.grid import PixelGrid


class ImageSourceEngine(ABC):
    """
    Image decoding abstraction.

    Engines must:
    - Decode one raster image file into an RGB PixelGrid
    - Be deterministic for a given file
    - Perform NO resampling, colour conversion beyond RGB, or filtering
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def load_pixels(self, *, image_file: Path) -> PixelGrid:
        """
        Raise OSError (or a backend-specific error) if the file cannot be decoded.
        """

        raise NotImplementedError
