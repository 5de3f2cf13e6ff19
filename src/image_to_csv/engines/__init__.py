from .base import ImageSourceEngine
from .pillow_engine import PillowImageEngine

__all__ = ["ImageSourceEngine", "PillowImageEngine"]
