# terrain_generator/generator.py

"""
================================================================================
CORE TERRAIN GENERATOR
================================================================================
This module contains the main TerrainGenerator class, responsible for sampling
a gradient-noise field on a grid and classifying each sample into a terrain
tile label.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of generation parameters which can override
      the internal defaults. Expected keys include 'seed', 'map_width', etc.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - generate_map(): a list of `map_height` rows, each a list of `map_width`
      cells holding None (excluded lane) or a tile label string.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same permutation table and seed, the output is
  deterministic. generate_map() never mutates the generator.
================================================================================
"""

import collections
import logging

import numpy as np

from . import config as DEFAULTS
from . import noise


def coerce_seed(seed) -> int:
    """
    Converts a seed coming from a host application into an int.
    Text fields deliver strings, so whitespace-padded digit strings are
    accepted. Floats must be whole numbers. Anything else that int()
    rejects raises ValueError.
    """
    if isinstance(seed, bool):
        raise ValueError(f"Invalid seed: {seed!r}")
    if isinstance(seed, str):
        seed = seed.strip()
    if isinstance(seed, (float, np.floating)) and not float(seed).is_integer():
        raise ValueError(f"Invalid seed: {seed!r}")
    try:
        return int(seed)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid seed: {seed!r}") from None


class TerrainGenerator:
    """
    Generates terrain tile maps from a seeded gradient-noise field.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config: dict, logger: logging.Logger, permutation_table: np.ndarray = None):
        """
        Initializes the terrain generator.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger): The logger instance for all output.
            permutation_table (np.ndarray, optional): A pre-computed noise
                permutation table of 256 or 512 entries. If None, one is drawn
                from the 'table_seed' random source.
        """
        self.logger = logger
        self.user_config = config
        self.logger.info("TerrainGenerator initializing...")

        # --- Consolidate Configuration ---
        self.settings = {
            'seed': self.user_config.get('seed', DEFAULTS.DEFAULT_SEED),
            'table_seed': self.user_config.get('table_seed', DEFAULTS.TABLE_SEED),
            'map_width': self.user_config.get('map_width', DEFAULTS.DEFAULT_MAP_WIDTH),
            'map_height': self.user_config.get('map_height', DEFAULTS.DEFAULT_MAP_HEIGHT),
            'excluded_rows': self.user_config.get('excluded_rows', DEFAULTS.EXCLUDED_ROWS),
            'terrain_levels': self.user_config.get('terrain_levels', DEFAULTS.TERRAIN_LEVELS),
            'out_of_range_policy': self.user_config.get('out_of_range_policy', DEFAULTS.OUT_OF_RANGE_POLICY),
        }
        self._validate_settings()

        # --- Public Properties for easy access ---
        self.seed = self.settings['seed']
        self.width = self.settings['map_width']
        self.height = self.settings['map_height']
        self.gradients = noise.GRADIENT_VECTORS

        # Classification walks the levels in insertion order.
        self._levels = list(self.settings['terrain_levels'].items())

        # --- Initialize Noise ---
        if permutation_table is not None:
            self._p = self._prepare_permutation_table(permutation_table)
            self.logger.debug("Initialized with injected permutation table.")
        else:
            table_seed = self.settings['table_seed']
            if table_seed is None:
                self.logger.debug("No table seed provided, drawing permutation table from OS entropy.")
            else:
                self.logger.debug(f"Drawing permutation table from table seed: {table_seed}")
            self._p = noise.make_permutation_table(np.random.default_rng(table_seed))
        self._p.setflags(write=False)

        # --- Expose the permutation table so a run can be reproduced ---
        self.permutation_table = self._p

        self.logger.info(f"TerrainGenerator initialized with seed: {self.seed}")
        self.logger.info(f"Map dimensions: {self.width}x{self.height} tiles")

    def _validate_settings(self):
        """Raises ValueError for settings the generator cannot work with."""
        self.settings['seed'] = coerce_seed(self.settings['seed'])

        for key in ('map_width', 'map_height'):
            value = self.settings[key]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"'{key}' must be a positive integer, got {value!r}")

        excluded = self.settings['excluded_rows']
        if excluded is not None:
            if not isinstance(excluded, (list, tuple)) or len(excluded) != 2:
                raise ValueError(f"'excluded_rows' must be a (first, last) pair, got {excluded!r}")
            if any(isinstance(row, bool) or not isinstance(row, (int, np.integer)) for row in excluded):
                raise ValueError(f"'excluded_rows' must hold integer row indices, got {excluded!r}")
            first, last = int(excluded[0]), int(excluded[1])
            if first > last:
                raise ValueError(f"'excluded_rows' must be a (first, last) pair, got {excluded!r}")
            self.settings['excluded_rows'] = (first, last)

        levels = self.settings['terrain_levels']
        if not isinstance(levels, dict):
            raise ValueError(f"'terrain_levels' must map tile labels to thresholds, got {levels!r}")
        if not levels:
            raise ValueError("'terrain_levels' must define at least one tile")
        thresholds = list(levels.values())
        for threshold in thresholds:
            if isinstance(threshold, bool) or not isinstance(threshold, (int, float, np.integer, np.floating)):
                raise ValueError(f"'terrain_levels' thresholds must be numbers, got {threshold!r}")
            if not np.isfinite(threshold):
                raise ValueError(f"'terrain_levels' thresholds must be finite, got {threshold!r}")
        if any(a >= b for a, b in zip(thresholds, thresholds[1:])):
            raise ValueError(f"'terrain_levels' must be strictly increasing, got {levels!r}")

        policy = self.settings['out_of_range_policy']
        if policy not in DEFAULTS.OUT_OF_RANGE_POLICIES:
            raise ValueError(
                f"'out_of_range_policy' must be one of {DEFAULTS.OUT_OF_RANGE_POLICIES}, got {policy!r}"
            )

    def _prepare_permutation_table(self, permutation_table) -> np.ndarray:
        """Validates an injected table and extends a 256-entry one to 512."""
        size = DEFAULTS.PERMUTATION_TABLE_SIZE
        p = np.array(permutation_table, dtype=np.int64)
        if p.ndim != 1 or p.shape[0] not in (size, 2 * size):
            raise ValueError(f"Permutation table must have {size} or {2 * size} entries, got shape {p.shape}")
        if np.any(p < 0) or np.any(p >= size):
            raise ValueError(f"Permutation table entries must lie in [0, {size})")
        if p.shape[0] == size:
            p = np.concatenate([p, p])
        elif not np.array_equal(p[:size], p[size:]):
            raise ValueError("A 512-entry permutation table must repeat its first 256 entries")
        return p

    def sample_noise(self, x: float, y: float) -> float:
        """Samples the raw noise field at continuous coordinates (x, y)."""
        return noise.perlin_noise_2d(self._p, float(x), float(y))

    def normalize_noise(self, value):
        """Maps raw noise from [-1, 1] to [0, 1]. Works on scalars and arrays."""
        return noise.normalize(value)

    def classify(self, value: float) -> str:
        """
        Returns the tile label for a normalized noise value.
        Each level is an exclusive upper bound except the last, which is
        inclusive. Values above the last level follow 'out_of_range_policy'.
        """
        value = float(value)
        for label, upper in self._levels[:-1]:
            if value < upper:
                return label

        last_label, last_upper = self._levels[-1]
        if value <= last_upper:
            return last_label

        if self.settings['out_of_range_policy'] == 'raise':
            raise ValueError(f"Normalized noise value {value} is above the last tile level {last_upper}")
        self.logger.warning(f"Normalized noise value {value} out of range, clamping to {last_upper}")
        return last_label

    def is_excluded_row(self, y: int) -> bool:
        """True if row y belongs to the excluded lane."""
        excluded = self.settings['excluded_rows']
        if excluded is None:
            return False
        first, last = excluded
        return first <= y <= last

    def get_sample_coordinates(self, seed: int) -> tuple[np.ndarray, np.ndarray]:
        """
        Returns the (height, width) grids of noise coordinates for a seed.
        The seed shifts every coordinate by seed/width and seed/height.
        """
        seed = coerce_seed(seed)
        columns = (np.arange(self.width, dtype=float) + seed) / self.width - 0.5
        rows = (np.arange(self.height, dtype=float) + seed) / self.height - 0.5
        x_coords, y_coords = np.meshgrid(columns, rows)
        return x_coords, y_coords

    def generate_map(self, seed=None) -> list[list]:
        """
        Generates a terrain map for the given seed.

        Args:
            seed (int | str, optional): Coordinate offset. Defaults to the
                seed the generator was configured with.

        Returns:
            list[list]: `height` rows of `width` cells, each None or a label.
        """
        seed = self.seed if seed is None else coerce_seed(seed)

        x_coords, y_coords = self.get_sample_coordinates(seed)
        normalized = self.normalize_noise(noise.perlin_noise_grid(self._p, x_coords, y_coords))

        terrain_map = []
        for y in range(self.height):
            if self.is_excluded_row(y):
                terrain_map.append([None] * self.width)
                continue
            terrain_map.append([self.classify(normalized[y, x]) for x in range(self.width)])

        counts = collections.Counter(cell for row in terrain_map for cell in row)
        summary = ", ".join(f"{label}={counts[label]}" for label, _ in self._levels)
        self.logger.info(
            f"Generated {self.width}x{self.height} map for seed {seed} "
            f"({summary}, excluded={counts[None]})"
        )
        return terrain_map
