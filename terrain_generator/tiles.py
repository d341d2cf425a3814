# terrain_generator/tiles.py

"""
================================================================================
SHARED TILE UTILITIES
================================================================================
This module contains the tile label constants and the functions that turn a
terrain map into the forms its consumers need: integer ID arrays, RGB color
arrays for previews, and model placements for the scene layer.

It is designed to be a pure, stateless utility with no rendering
dependencies, so both the command-line tool and a host scene can use it.
================================================================================
"""
import numpy as np
from . import config as DEFAULTS

# --- Tile Labels ---
TILE_GRASS = "grass"
TILE_ROCK = "rock"
TILE_TREE = "tree"

# --- Tile ID Constants ---
# An integer ID for each tile type. 0 marks an excluded (empty) cell.
TILE_ID_EXCLUDED = 0
TILE_ID_GRASS = 1
TILE_ID_ROCK = 2
TILE_ID_TREE = 3

TILE_IDS = {
    None: TILE_ID_EXCLUDED,
    TILE_GRASS: TILE_ID_GRASS,
    TILE_ROCK: TILE_ID_ROCK,
    TILE_TREE: TILE_ID_TREE,
}

# --- Default Color Mappings ---
COLOR_MAP_TILES = {
    TILE_GRASS: (34, 139, 34),
    TILE_ROCK: (112, 128, 144),
    TILE_TREE: (0, 100, 0),
}

# Excluded cells are drawn black so they stand out from every tile.
COLOR_EXCLUDED = (0, 0, 0)


def create_tile_color_lut() -> np.ndarray:
    """Creates a LUT where the index is the Tile ID and the value is the RGB color."""
    return np.array([
        COLOR_EXCLUDED,
        COLOR_MAP_TILES[TILE_GRASS],
        COLOR_MAP_TILES[TILE_ROCK],
        COLOR_MAP_TILES[TILE_TREE],
    ], dtype=np.uint8)


def terrain_map_to_ids(terrain_map: list[list]) -> np.ndarray:
    """Converts a terrain map into a (height, width) array of tile IDs."""
    try:
        ids = [[TILE_IDS[cell] for cell in row] for row in terrain_map]
    except KeyError as e:
        raise ValueError(f"Unknown tile label: {e.args[0]!r}") from None
    return np.array(ids, dtype=np.uint8).reshape(len(terrain_map), -1)


def terrain_map_to_colors(terrain_map: list[list]) -> np.ndarray:
    """Converts a terrain map into a (height, width, 3) RGB array."""
    return create_tile_color_lut()[terrain_map_to_ids(terrain_map)]


def get_tile_placements(terrain_map: list[list], tile_size: float = DEFAULTS.DEFAULT_TILE_SIZE) -> list[dict]:
    """
    Translates a terrain map into model placements for the scene layer.

    Columns run along world X and rows along world Z, with every tile on the
    ground plane. Excluded cells produce no placement.
    """
    placements = []
    for row_index, row in enumerate(terrain_map):
        for col_index, label in enumerate(row):
            if label is None:
                continue
            placements.append({
                "label": label,
                "row": row_index,
                "col": col_index,
                "position": (col_index * tile_size, 0.0, row_index * tile_size),
            })
    return placements
