# terrain_generator/__init__.py

# Public API of the terrain generator package.

from .generator import TerrainGenerator, coerce_seed
from . import tiles

__all__ = ["TerrainGenerator", "coerce_seed", "tiles"]
