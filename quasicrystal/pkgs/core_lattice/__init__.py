"""
Core lattice components: data model, periodic lattices and the unified interface.

Pure computational kernels without side effects beyond the in-place bond
builder.
"""

# Lattice primitives
from .lattice import (
    Bond, Connection, UnitCell, Lattice, BoundaryCondition, IndexingMethod,
    available_topologies, get_unit_cell, register_topology, build_lattice
)

# Quasicrystal data model
from .quasicrystals import GOLDEN_RATIO, PHI, GenerationMethod, Tile, QuasicrystalData

# Geometry helpers
from .utils import POSITION_TOLERANCE, project_window, unique_vertices, vertex_key

# Unified interface
from .interface import (
    AbstractLattice, get_positions, get_bonds, get_nearest_neighbors,
    num_sites, num_bonds, coordination_numbers, adjacency_matrix, to_networkx,
    build_nearest_neighbor_bonds
)

__all__ = [
    # Lattice
    'Bond', 'Connection', 'UnitCell', 'Lattice', 'BoundaryCondition', 'IndexingMethod',
    'available_topologies', 'get_unit_cell', 'register_topology', 'build_lattice',
    # Quasicrystals
    'GOLDEN_RATIO', 'PHI', 'GenerationMethod', 'Tile', 'QuasicrystalData',
    # Utils
    'POSITION_TOLERANCE', 'project_window', 'unique_vertices', 'vertex_key',
    # Interface
    'AbstractLattice', 'get_positions', 'get_bonds', 'get_nearest_neighbors',
    'num_sites', 'num_bonds', 'coordination_numbers', 'adjacency_matrix', 'to_networkx',
    'build_nearest_neighbor_bonds'
]
