# generate_terrain.py

"""
================================================================================
TERRAIN MAP GENERATOR SCRIPT
================================================================================
This script is a command-line tool for generating terrain tile maps and
writing them to disk as JSON, ready to be loaded by a scene. It can optionally
write a PNG preview of each map.

Every map in one run shares a single permutation table. The table is saved
next to the maps so a run can be reproduced with --permutation-table.

Usage:
    python generate_terrain.py --config path/to/your/config.json
    python generate_terrain.py --seed-range 0 10 --width 50 --height 50 --preview
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import numpy as np
from PIL import Image
from tqdm import tqdm

from terrain_generator.generator import TerrainGenerator
from terrain_generator import tiles
from terrain_generator import config as DEFAULTS


def save_preview(terrain_map: list[list], file_path: str, pixels_per_tile: int) -> None:
    """Saves a terrain map as a PNG image with one colored block per tile."""
    colors = tiles.terrain_map_to_colors(terrain_map)
    img = Image.fromarray(colors)
    height, width = colors.shape[:2]
    img = img.resize((width * pixels_per_tile, height * pixels_per_tile), Image.Resampling.NEAREST)
    img.save(file_path, 'PNG')


def save_terrain_map(generator: TerrainGenerator, seed: int, output_dir: str, preview: bool, pixels_per_tile: int) -> str:
    """Generates the map for one seed and writes it into its own directory."""
    terrain_map = generator.generate_map(seed)

    seed_dir = os.path.join(output_dir, f"seed_{seed}")
    os.makedirs(seed_dir, exist_ok=True)

    document = {
        "seed": seed,
        "settings": generator.settings,
        "terrain_map": terrain_map,
        "placements": tiles.get_tile_placements(terrain_map),
    }
    map_path = os.path.join(seed_dir, "terrain_map.json")
    with open(map_path, 'w') as f:
        json.dump(document, f, indent=2)

    if preview:
        save_preview(terrain_map, os.path.join(seed_dir, "preview.png"), pixels_per_tile)

    return map_path


def load_config(config_path: str) -> dict:
    """Reads the terrain generation parameters from a JSON config file."""
    with open(config_path, 'r') as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError(f"Expected a JSON object at the top level, got {type(config).__name__}")
    params = config.get('terrain_generation_parameters', {})
    if not isinstance(params, dict):
        raise ValueError("'terrain_generation_parameters' must be a JSON object")
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Procedural terrain tile map generator.")
    parser.add_argument("--config", type=str, help="Path to a JSON configuration file.")
    seeds = parser.add_mutually_exclusive_group()
    seeds.add_argument("--seed", type=int, help="Coordinate seed of the map to generate.")
    seeds.add_argument(
        "--seed-range", type=int, nargs=2, metavar=("START", "STOP"),
        help="Generate one map per seed in [START, STOP)."
    )
    parser.add_argument("--width", type=int, help="Map width in tiles.")
    parser.add_argument("--height", type=int, help="Map height in tiles.")
    parser.add_argument("--table-seed", type=int, help="Seed for the permutation table. Omit for a random table.")
    parser.add_argument("--permutation-table", type=str, help="Path to a permutation_table.json from an earlier run.")
    parser.add_argument("--output-dir", type=str, default=DEFAULTS.DEFAULT_OUTPUT_DIR, help="Directory to write maps into.")
    parser.add_argument("--preview", action="store_true", help="Also write a PNG preview of each map.")
    parser.add_argument(
        "--pixels-per-tile", type=int, default=DEFAULTS.DEFAULT_PIXELS_PER_TILE,
        help="Edge length of one tile in the preview image."
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.seed_range and args.seed_range[0] >= args.seed_range[1]:
        parser.error("--seed-range START must be less than STOP")

    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("TerrainGenerator")

    # 2. --- Load Configuration ---
    params = {}
    if args.config:
        logger.info(f"Loading configuration from: {args.config}")
        try:
            params = load_config(args.config)
        except (FileNotFoundError, json.JSONDecodeError, ValueError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 1

    # Command-line flags take precedence over the config file.
    overrides = {
        'seed': args.seed,
        'map_width': args.width,
        'map_height': args.height,
        'table_seed': args.table_seed,
    }
    params.update({key: value for key, value in overrides.items() if value is not None})

    permutation_table = None
    if args.permutation_table:
        logger.info(f"Loading permutation table from: {args.permutation_table}")
        try:
            with open(args.permutation_table, 'r') as f:
                permutation_table = np.array(json.load(f), dtype=np.int64)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.critical(f"Failed to load or parse permutation table: {e}")
            return 1

    # 3. --- Initialize the Generator ---
    try:
        generator = TerrainGenerator(config=params, logger=logger, permutation_table=permutation_table)
    except ValueError as e:
        logger.critical(f"Invalid terrain generation parameters: {e}")
        return 1

    os.makedirs(args.output_dir, exist_ok=True)
    table_path = os.path.join(args.output_dir, "permutation_table.json")
    with open(table_path, 'w') as f:
        json.dump(generator.permutation_table.tolist(), f)

    # 4. --- Generate Maps ---
    if args.seed_range:
        start, stop = args.seed_range
        seeds = range(start, stop)
    else:
        seeds = [generator.seed]

    start_time = time.perf_counter()
    for seed in tqdm(seeds, desc="Generating Maps", disable=len(seeds) < 2):
        map_path = save_terrain_map(generator, seed, args.output_dir, args.preview, args.pixels_per_tile)
        logger.debug(f"Saved map for seed {seed} to {map_path}")

    end_time = time.perf_counter()
    logger.info(f"Generated {len(seeds)} map(s) in {end_time - start_time:.2f} seconds.")
    logger.info(f"Maps and permutation table saved to: {args.output_dir}")
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
