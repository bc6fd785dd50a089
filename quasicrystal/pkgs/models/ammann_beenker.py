"""
Ammann-Beenker tiling (octagonal quasicrystal) with 8-fold rotational symmetry.

Uses squares (type 1) and 45-degree rhombi (type 2).
"""
import logging
import math
from typing import Callable, Dict, List

import numpy as np

from ..core_lattice.quasicrystals import GenerationMethod, QuasicrystalData, Tile
from ..core_lattice.utils import _unit, project_window, unique_vertices

logger = logging.getLogger(__name__)

SQUARE, RHOMBUS = 1, 2
SYMMETRY = 8
WINDOW_SIZE = 0.5
SQRT2 = math.sqrt(2.0)
INFLATION_FACTOR = 1 + SQRT2  # silver ratio


def ammann_beenker_projection_basis():
    """Projection matrices from Z^4: parallel and perpendicular, both 4x2."""
    theta = math.pi / 4
    k = np.arange(4) * theta
    e_par = np.column_stack([np.cos(k), np.sin(k)])
    e_perp = np.column_stack([np.cos(k + math.pi / 4), np.sin(k + math.pi / 4)])
    return e_par, e_perp


def generate_ammann_beenker_projection(radius: float) -> QuasicrystalData:
    """Ammann-Beenker vertices by projection from the 4D hypercubic lattice (square window)."""
    e_par, e_perp = ammann_beenker_projection_basis()
    positions, n_max = project_window(e_par, e_perp, radius, WINDOW_SIZE)
    logger.debug(f"Ammann-Beenker projection: radius={radius}, n_max={n_max}, "
                 f"sites={len(positions)}")

    params = {
        "radius": radius,
        "n_max": n_max,
        "window_size": WINDOW_SIZE,
        "n_vertices": len(positions),
        "symmetry": SYMMETRY,
    }
    return QuasicrystalData(2, positions, [], GenerationMethod.PROJECTION, params)


def ammann_beenker_seed() -> List[Tile]:
    """Unit square plus eight 45-degree rhombi in an octagonal pattern."""
    tiles = [Tile.from_vertices([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]], SQUARE)]
    for i in range(8):
        angle = i * math.pi / 4
        v1 = _unit(angle)
        v2 = v1 + _unit(angle + math.pi / 4)
        v3 = v2 + _unit(angle + math.pi)
        v4 = v1 + _unit(angle + math.pi)
        tiles.append(Tile.from_vertices([v1, v2, v3, v4], RHOMBUS))
    return tiles


# Simplified rules: scale by the silver ratio, no subdivision.
def inflate_ab_square(tile: Tile, factor: float = INFLATION_FACTOR) -> List[Tile]:
    return [tile.scaled(factor)]


def inflate_ab_rhombus(tile: Tile, factor: float = INFLATION_FACTOR) -> List[Tile]:
    return [tile.scaled(factor)]


INFLATION_RULES: Dict[int, Callable[..., List[Tile]]] = {
    SQUARE: inflate_ab_square,
    RHOMBUS: inflate_ab_rhombus,
}


def inflate_ammann_beenker_tiles(tiles: List[Tile]) -> List[Tile]:
    """Apply one generation of the Ammann-Beenker inflation rules."""
    new_tiles = []
    for tile in tiles:
        new_tiles.extend(INFLATION_RULES[tile.type](tile))
    return new_tiles


def generate_ammann_beenker_substitution(generations: int) -> QuasicrystalData:
    """Ammann-Beenker tiling from the octagonal seed and `generations` inflation steps."""
    tiles = ammann_beenker_seed()
    for _ in range(generations):
        tiles = inflate_ammann_beenker_tiles(tiles)

    positions = unique_vertices(tiles)
    logger.debug(f"Ammann-Beenker substitution: generations={generations}, "
                 f"tiles={len(tiles)}, vertices={len(positions)}")

    params = {
        "generations": generations,
        "n_tiles": len(tiles),
        "n_vertices": len(positions),
        "symmetry": SYMMETRY,
    }
    return QuasicrystalData(2, positions, tiles, GenerationMethod.SUBSTITUTION, params)
