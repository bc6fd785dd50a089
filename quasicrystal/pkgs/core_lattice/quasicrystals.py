"""
Quasicrystal structures and generation provenance.

Contains the data aggregate produced by every generator (QuasicrystalData),
the Tile polygon type and the GenerationMethod tag.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Mapping

import numpy as np

from .lattice import Bond

GOLDEN_RATIO = (1 + np.sqrt(5)) / 2
PHI = GOLDEN_RATIO


class GenerationMethod(Enum):
    """Provenance tag: how a quasicrystal pattern was generated."""
    PROJECTION = "projection"      # cut-and-project from a higher-dimensional lattice
    SUBSTITUTION = "substitution"  # inflation rules


def _readonly(values, dtype=np.float64) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Tile:
    """Single tile of a tiling: ordered vertices, type tag and center."""
    vertices: np.ndarray
    type: int
    center: np.ndarray

    @classmethod
    def from_vertices(cls, vertices, tile_type: int) -> "Tile":
        verts = _readonly(vertices)
        return cls(vertices=verts, type=tile_type, center=_readonly(verts.mean(axis=0)))

    def scaled(self, factor: float) -> "Tile":
        return Tile(vertices=_readonly(factor * self.vertices), type=self.type,
                    center=_readonly(factor * self.center))


@dataclass
class QuasicrystalData:
    """
    Generated quasicrystal pattern.

    positions is a read-only (N, dimension) array and parameters a read-only
    mapping. bonds and nearest_neighbors start empty and are replaced by
    build_nearest_neighbor_bonds.
    """
    dimension: int
    positions: np.ndarray
    tiles: List[Tile]
    generation_method: GenerationMethod
    parameters: Mapping[str, Any]
    bonds: List[Bond] = field(default_factory=list)
    nearest_neighbors: List[List[int]] = field(default_factory=list)

    def __post_init__(self):
        self.positions = _readonly(self.positions).reshape(-1, self.dimension)
        self.positions.flags.writeable = False
        self.parameters = MappingProxyType(dict(self.parameters))
        if not self.nearest_neighbors:
            self.nearest_neighbors = [[] for _ in range(len(self.positions))]

    @property
    def n_sites(self) -> int:
        return len(self.positions)

    @property
    def n_tiles(self) -> int:
        return len(self.tiles)
