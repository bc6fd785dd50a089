"""
Geometric helpers for quasicrystal generation.

Contains the cut-and-project enumeration kernel, unit-vector helpers and the
tolerance-quantized vertex deduplication used after substitution.
"""
import math
from typing import Iterable, Tuple

import numpy as np

from .quasicrystals import Tile

# Position tolerance for duplicate detection
POSITION_TOLERANCE = 1e-10

# Enumeration bound: n_max = ceil(radius * PROJECTION_SAFETY_FACTOR)
PROJECTION_SAFETY_FACTOR = 1.5


def _unit(angle: float) -> np.ndarray:
    return np.array([math.cos(angle), math.sin(angle)])


def _sweep_tail(n_max: int, dim: int) -> np.ndarray:
    """All points of [-n_max, n_max]^dim in lexicographic order (last axis fastest)."""
    axis = np.arange(-n_max, n_max + 1, dtype=np.float64)
    if dim == 0:
        return np.zeros((1, 0))
    grids = np.meshgrid(*([axis] * dim), indexing="ij")
    return np.stack(grids, axis=-1).reshape(-1, dim)


def project_window(e_par: np.ndarray, e_perp: np.ndarray, radius: float,
                   window_size: float,
                   safety_factor: float = PROJECTION_SAFETY_FACTOR) -> Tuple[np.ndarray, int]:
    """
    Cut-and-project sweep over a hypercubic lattice.

    Enumerates n in [-n_max, n_max]^D (D = e_par.shape[0]) and keeps the
    parallel projection n @ e_par of every point with |par| <= radius and
    all |n @ e_perp| <= window_size. Accepted points come out in the
    lexicographic order of the sweep; slabs of the first coordinate are
    vectorized.

    Returns:
        (positions, n_max)
    """
    dim, d_par = e_par.shape
    n_max = math.ceil(radius * safety_factor)
    if n_max < 0:
        return np.empty((0, d_par)), n_max

    tail = _sweep_tail(n_max, dim - 1)
    accepted = []
    for n1 in range(-n_max, n_max + 1):
        points = np.column_stack([np.full(len(tail), float(n1)), tail])
        pos_par = points @ e_par
        pos_perp = points @ e_perp
        mask = np.linalg.norm(pos_par, axis=1) <= radius
        mask &= np.all(np.abs(pos_perp) <= window_size, axis=1)
        accepted.append(pos_par[mask])

    return np.concatenate(accepted, axis=0), n_max


def vertex_key(vertex: np.ndarray, tolerance: float = POSITION_TOLERANCE) -> Tuple[int, ...]:
    """Canonical key: coordinates quantized to multiples of tolerance."""
    return tuple(int(q) for q in np.rint(np.asarray(vertex) / tolerance))


def unique_vertices(tiles: Iterable[Tile], dimension: int = 2,
                    tolerance: float = POSITION_TOLERANCE) -> np.ndarray:
    """Unique tile vertices in first-seen order, merged on quantized keys."""
    seen = {}
    for tile in tiles:
        for v in tile.vertices:
            seen.setdefault(vertex_key(v, tolerance), v)
    if not seen:
        return np.empty((0, dimension))
    return np.array(list(seen.values()))
