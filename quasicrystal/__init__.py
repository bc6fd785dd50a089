"""Quasicrystal - aperiodic point patterns, bond graphs and a unified lattice interface."""

__version__ = "0.1.0"

# Core components
from .pkgs.core_lattice import (
    Bond, Connection, UnitCell, Lattice, BoundaryCondition, IndexingMethod,
    available_topologies, get_unit_cell, build_lattice,
    GOLDEN_RATIO, PHI, GenerationMethod, Tile, QuasicrystalData,
    AbstractLattice, get_positions, get_bonds, get_nearest_neighbors,
    num_sites, num_bonds, coordination_numbers, adjacency_matrix, to_networkx,
    build_nearest_neighbor_bonds
)

from .pkgs.models import (
    fibonacci_sequence_length, fibonacci_word,
    generate_fibonacci_projection, generate_fibonacci_substitution,
    generate_penrose_projection, generate_penrose_substitution,
    generate_ammann_beenker_projection, generate_ammann_beenker_substitution,
    available_families, generate_quasicrystal
)

from .pkgs.engine_runtime import (
    SiteRecorder, GenerateRequest, LatticeRequest, GenerateResult
)

from .pkgs.observability import setup_logging, MetricsCollector

# High-level service
from .pkgs.engine_runtime.service import QuasicrystalService

__all__ = [
    # Core lattice
    'Bond', 'Connection', 'UnitCell', 'Lattice', 'BoundaryCondition', 'IndexingMethod',
    'available_topologies', 'get_unit_cell', 'build_lattice',
    'GOLDEN_RATIO', 'PHI', 'GenerationMethod', 'Tile', 'QuasicrystalData',
    'AbstractLattice', 'get_positions', 'get_bonds', 'get_nearest_neighbors',
    'num_sites', 'num_bonds', 'coordination_numbers', 'adjacency_matrix', 'to_networkx',
    'build_nearest_neighbor_bonds',

    # Models
    'fibonacci_sequence_length', 'fibonacci_word',
    'generate_fibonacci_projection', 'generate_fibonacci_substitution',
    'generate_penrose_projection', 'generate_penrose_substitution',
    'generate_ammann_beenker_projection', 'generate_ammann_beenker_substitution',
    'available_families', 'generate_quasicrystal',

    # Runtime
    'SiteRecorder', 'GenerateRequest', 'LatticeRequest', 'GenerateResult',

    # Observability
    'setup_logging', 'MetricsCollector',

    # High-level interface
    'QuasicrystalService'
]
