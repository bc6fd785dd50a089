"""
Fibonacci lattice (1D quasicrystal).

The simplest quasicrystal: two spacings L (long) and S (short), L/S = phi,
arranged according to the Fibonacci word.
"""
import logging
import math

import numpy as np

from ..core_lattice.quasicrystals import PHI, GenerationMethod, QuasicrystalData

logger = logging.getLogger(__name__)

# Substitution rules: L -> LS, S -> L
FIBONACCI_RULES = {"L": "LS", "S": "L"}
SPACINGS = {"L": PHI, "S": 1.0}


def fibonacci_sequence_length(n: int) -> int:
    """Length of the Fibonacci word after n generations: 1, 2, 3, 5, 8, 13, ..."""
    if n <= 0:
        return 1
    a, b = 1, 2
    for _ in range(n - 1):
        a, b = b, a + b
    return b


def fibonacci_word(generations: int) -> str:
    """Apply the substitution rules to the seed 'L' synchronously."""
    word = "L"
    for _ in range(generations):
        word = "".join(FIBONACCI_RULES[s] for s in word)
    return word


def generate_fibonacci_projection(n_points: int) -> QuasicrystalData:
    """
    Fibonacci lattice by projection of the 2D square lattice onto a line of slope 1/phi.

    Sweeps n1, n2 in 0..ceil(1.5 * n_points), keeping points whose perpendicular
    offset lies within half the acceptance width, until n_points positions are
    collected. The positions are then sorted and truncated to n_points.
    """
    slope = 1 / PHI
    acceptance_width = 1.0

    direction = np.array([1.0, slope])
    direction /= np.linalg.norm(direction)
    perp_direction = np.array([-slope, 1.0])
    perp_direction /= np.linalg.norm(perp_direction)

    positions = []
    n_max = math.ceil(n_points * 1.5)
    done = False
    for n1 in range(n_max + 1):
        for n2 in range(n_max + 1):
            point = np.array([float(n1), float(n2)])
            if abs(point @ perp_direction) <= acceptance_width / 2:
                positions.append(float(point @ direction))
            if len(positions) >= n_points:
                done = True
                break
        if done:
            break

    positions = sorted(positions)[:max(n_points, 0)]
    logger.debug(f"Fibonacci projection: {len(positions)} sites (requested {n_points})")

    params = {
        "n_points": len(positions),
        "slope": slope,
        "method_name": "projection",
    }
    return QuasicrystalData(1, np.array(positions).reshape(-1, 1), [],
                            GenerationMethod.PROJECTION, params)


def generate_fibonacci_substitution(generations: int) -> QuasicrystalData:
    """Fibonacci lattice from the substitution rules L -> LS, S -> L, with S = 1 and L = phi."""
    word = fibonacci_word(generations)
    steps = np.array([SPACINGS[s] for s in word])
    positions = np.concatenate([[0.0], np.cumsum(steps)])
    logger.debug(f"Fibonacci substitution: generations={generations}, word length={len(word)}")

    params = {
        "generations": generations,
        "n_points": len(positions),
        "sequence_length": len(word),
        "L_spacing": SPACINGS["L"],
        "S_spacing": SPACINGS["S"],
        "method_name": "substitution",
    }
    return QuasicrystalData(1, positions.reshape(-1, 1), [],
                            GenerationMethod.SUBSTITUTION, params)
