"""
Penrose P3 (rhombus) tiling with 5-fold rotational symmetry.

Uses two rhombus shapes: fat (72 degrees, type 1) and thin (36 degrees, type 2).
"""
import logging
import math
from typing import Callable, Dict, List

import numpy as np

from ..core_lattice.quasicrystals import PHI, GenerationMethod, QuasicrystalData, Tile
from ..core_lattice.utils import _unit, project_window, unique_vertices

logger = logging.getLogger(__name__)

FAT, THIN = 1, 2
SYMMETRY = 5
WINDOW_SIZE = 0.5


def penrose_projection_basis():
    """Projection matrices from Z^5: parallel (5x2) and perpendicular (5x3)."""
    theta = 2 * math.pi / SYMMETRY
    k = np.arange(SYMMETRY) * theta
    e_par = np.column_stack([np.cos(k), np.sin(k)])
    e_perp = np.column_stack([np.cos(2 * k), np.sin(2 * k), np.cos(3 * k)])
    return e_par, e_perp


def generate_penrose_projection(radius: float) -> QuasicrystalData:
    """
    Penrose P3 vertices by projection from the 5D hypercubic lattice.

    Tiles are not reconstructed; the result carries positions only.
    """
    e_par, e_perp = penrose_projection_basis()
    positions, n_max = project_window(e_par, e_perp, radius, WINDOW_SIZE)
    logger.debug(f"Penrose projection: radius={radius}, n_max={n_max}, sites={len(positions)}")

    params = {
        "radius": radius,
        "n_max": n_max,
        "window_size": WINDOW_SIZE,
        "n_vertices": len(positions),
        "symmetry": SYMMETRY,
    }
    return QuasicrystalData(2, positions, [], GenerationMethod.PROJECTION, params)


def penrose_seed() -> List[Tile]:
    """Five fat rhombi arranged radially around the origin."""
    angle_fat = math.radians(72)
    tiles = []
    for i in range(5):
        angle = i * 2 * math.pi / 5
        v1 = np.zeros(2)
        v2 = _unit(angle)
        v4 = _unit(angle + angle_fat)
        v3 = v2 + v4
        tiles.append(Tile.from_vertices([v1, v2, v3, v4], FAT))
    return tiles


# NOTE: both rules scale the tile by phi instead of subdividing it
# (fat -> 1 fat + 2 thin, thin -> 1 fat under the true matching rules).
def inflate_fat_rhombus(tile: Tile) -> List[Tile]:
    return [tile.scaled(PHI)]


def inflate_thin_rhombus(tile: Tile) -> List[Tile]:
    return [tile.scaled(PHI)]


INFLATION_RULES: Dict[int, Callable[[Tile], List[Tile]]] = {
    FAT: inflate_fat_rhombus,
    THIN: inflate_thin_rhombus,
}


def inflate_penrose_tiles(tiles: List[Tile]) -> List[Tile]:
    """Apply one generation of the Penrose inflation rules."""
    new_tiles = []
    for tile in tiles:
        new_tiles.extend(INFLATION_RULES[tile.type](tile))
    return new_tiles


def generate_penrose_substitution(generations: int) -> QuasicrystalData:
    """Penrose P3 tiling from the radial fat-rhombus seed and `generations` inflation steps."""
    tiles = penrose_seed()
    for _ in range(generations):
        tiles = inflate_penrose_tiles(tiles)

    positions = unique_vertices(tiles)
    logger.debug(f"Penrose substitution: generations={generations}, "
                 f"tiles={len(tiles)}, vertices={len(positions)}")

    params = {
        "generations": generations,
        "n_tiles": len(tiles),
        "n_vertices": len(positions),
        "symmetry": SYMMETRY,
    }
    return QuasicrystalData(2, positions, tiles, GenerationMethod.SUBSTITUTION, params)
