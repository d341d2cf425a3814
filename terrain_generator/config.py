# terrain_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the terrain
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC MAP.
Instead, pass a configuration dictionary to the TerrainGenerator instance.
================================================================================
"""

# --- Noise Generation ---
# The seed only offsets the sampling coordinates. It does not drive the
# permutation table; see TABLE_SEED.
DEFAULT_SEED = 42

# Seed for the permutation table's random source. None draws the table from
# OS entropy, so two generators with the same DEFAULT_SEED can differ.
# Set an integer to make the table (and therefore every map) reproducible.
TABLE_SEED = None

# Size of the base permutation table. Lookups use a table of twice this size
# so corner hashing never needs an explicit wraparound.
PERMUTATION_TABLE_SIZE = 256

# --- Map Dimensions (in tiles) ---
DEFAULT_MAP_WIDTH = 3
DEFAULT_MAP_HEIGHT = 3

# --- Excluded Lane ---
# Inclusive row range that is always left empty (None). Only takes effect on
# maps at least 21 rows high. Set to None to disable.
EXCLUDED_ROWS = (20, 30)

# --- Tile Levels (Normalized 0.0 to 1.0) ---
# Each value is the exclusive upper bound of its tile, except the last one,
# which is inclusive. Ordering matters.
TERRAIN_LEVELS = {
    "grass": 0.5,
    "rock": 0.9,
    "tree": 1.0
}

# What to do with a normalized value above the last level.
# 'clamp': log a warning and classify it as the last tile.
# 'raise': raise a ValueError.
OUT_OF_RANGE_POLICY = 'clamp'
OUT_OF_RANGE_POLICIES = ('clamp', 'raise')

# --- Scene Placement ---
# World-space edge length of one tile, used when turning a map into
# model placements.
DEFAULT_TILE_SIZE = 1.0

# --- Previews ---
DEFAULT_PIXELS_PER_TILE = 32
DEFAULT_OUTPUT_DIR = "generated_maps"
