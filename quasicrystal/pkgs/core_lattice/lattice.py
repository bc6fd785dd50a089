"""
Lattice construction and bond primitives shared by periodic lattices and quasicrystals.

Contains the Bond/Connection edge types, unit cell definitions with a small
topology registry, and the periodic Lattice builder.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

import networkx as nx
import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Bond:
    """Undirected edge between two sites, stored with src < dst."""
    src: int
    dst: int
    type: int
    vector: np.ndarray  # position[dst] - position[src]


@dataclass(frozen=True)
class Connection:
    """Connection rule between sublattice sites, dx/dy count unit cells."""
    src_sub: int
    dst_sub: int
    dx: int
    dy: int
    type: int


@dataclass
class UnitCell:
    basis: np.ndarray
    sublattice_positions: np.ndarray
    connections: List[Connection]

    @property
    def dimension(self) -> int:
        return self.basis.shape[1]

    @property
    def n_sublattices(self) -> int:
        return len(self.sublattice_positions)


class BoundaryCondition(Enum):
    PERIODIC = "periodic"
    OPEN = "open"


class IndexingMethod(Enum):
    LINEAR = "linear"
    CARTESIAN = "cartesian"


_UNIT_CELLS: Dict[str, Callable[[], UnitCell]] = {}


def register_topology(name: str):
    """Register a unit cell factory under a topology name."""
    def decorator(fn: Callable[[], UnitCell]) -> Callable[[], UnitCell]:
        _UNIT_CELLS[name] = fn
        return fn
    return decorator


def available_topologies() -> List[str]:
    return sorted(_UNIT_CELLS)


def get_unit_cell(topology: str) -> UnitCell:
    """Return the UnitCell registered for a topology name."""
    if topology not in _UNIT_CELLS:
        raise ValueError(f"UnitCell not defined for {topology}")
    return _UNIT_CELLS[topology]()


@register_topology("square")
def _square_cell() -> UnitCell:
    # type 1: horizontal bond, type 2: vertical bond
    return UnitCell(
        basis=np.array([[1.0, 0.0], [0.0, 1.0]]),
        sublattice_positions=np.array([[0.0, 0.0]]),
        connections=[Connection(0, 0, 1, 0, 1), Connection(0, 0, 0, 1, 2)],
    )


@register_topology("triangular")
def _triangular_cell() -> UnitCell:
    return UnitCell(
        basis=np.array([[1.0, 0.0], [0.5, np.sqrt(3.0) / 2]]),
        sublattice_positions=np.array([[0.0, 0.0]]),
        connections=[Connection(0, 0, 1, 0, 1), Connection(0, 0, 0, 1, 2),
                     Connection(0, 0, 1, -1, 3)],
    )


@register_topology("honeycomb")
def _honeycomb_cell() -> UnitCell:
    h = np.sqrt(3.0) / 2
    return UnitCell(
        basis=np.array([[1.5, h], [1.5, -h]]),
        sublattice_positions=np.array([[0.0, 0.0], [1.0, 0.0]]),
        connections=[Connection(0, 1, 0, 0, 1), Connection(0, 1, -1, 0, 2),
                     Connection(0, 1, 0, -1, 3)],
    )


@dataclass
class Lattice:
    """Periodic lattice built by repeating a unit cell Lx x Ly times."""
    topology: str
    Lx: int
    Ly: int
    N: int
    positions: np.ndarray
    nearest_neighbors: List[List[int]]
    bonds: List[Bond]
    basis_vectors: np.ndarray
    reciprocal_vectors: Optional[np.ndarray]
    sublattice_ids: np.ndarray
    is_bipartite: bool
    site_map: Optional[np.ndarray]
    translation_x: np.ndarray
    translation_y: np.ndarray
    boundary: BoundaryCondition = BoundaryCondition.PERIODIC
    index_method: IndexingMethod = IndexingMethod.LINEAR
    unit_cell: Optional[UnitCell] = field(default=None, repr=False)

    @property
    def n_sites(self) -> int:
        return self.N

    @property
    def dimension(self) -> int:
        return self.positions.shape[1]


def _reciprocal(basis: np.ndarray) -> np.ndarray:
    """Rows b_j with a_i . b_j = 2*pi*delta_ij."""
    return 2.0 * np.pi * np.linalg.inv(basis).T


def build_lattice(topology: str, Lx: int, Ly: int,
                  boundary: BoundaryCondition = BoundaryCondition.PERIODIC,
                  index_method: IndexingMethod = IndexingMethod.LINEAR) -> Lattice:
    """Build a periodic (or open) lattice from a registered topology."""
    cell = get_unit_cell(topology)
    boundary, index_method = BoundaryCondition(boundary), IndexingMethod(index_method)
    n_sub = cell.n_sublattices
    a1, a2 = cell.basis
    N = Lx * Ly * n_sub

    def index(x: int, y: int, sub: int) -> int:
        return (y * Lx + x) * n_sub + sub

    positions = np.zeros((N, cell.dimension))
    sublattice_ids = np.zeros(N, dtype=int)
    for y in range(Ly):
        for x in range(Lx):
            for sub in range(n_sub):
                s = index(x, y, sub)
                positions[s] = x * a1 + y * a2 + cell.sublattice_positions[sub]
                sublattice_ids[s] = sub
    positions.flags.writeable = False

    bonds: List[Bond] = []
    nearest_neighbors: List[List[int]] = [[] for _ in range(N)]
    periodic = boundary is BoundaryCondition.PERIODIC
    for y in range(Ly):
        for x in range(Lx):
            for conn in cell.connections:
                tx, ty = x + conn.dx, y + conn.dy
                if periodic:
                    tx, ty = tx % Lx, ty % Ly
                elif not (0 <= tx < Lx and 0 <= ty < Ly):
                    continue
                src, dst = index(x, y, conn.src_sub), index(tx, ty, conn.dst_sub)
                if src == dst:
                    continue
                vector = (conn.dx * a1 + conn.dy * a2
                          + cell.sublattice_positions[conn.dst_sub]
                          - cell.sublattice_positions[conn.src_sub])
                if src > dst:
                    src, dst, vector = dst, src, -vector
                vector.flags.writeable = False
                bonds.append(Bond(src, dst, conn.type, vector))
                nearest_neighbors[src].append(dst)
                nearest_neighbors[dst].append(src)

    translation_x = np.full(N, -1, dtype=int)
    translation_y = np.full(N, -1, dtype=int)
    for y in range(Ly):
        for x in range(Lx):
            for sub in range(n_sub):
                s = index(x, y, sub)
                if periodic or x + 1 < Lx:
                    translation_x[s] = index((x + 1) % Lx, y, sub)
                if periodic or y + 1 < Ly:
                    translation_y[s] = index(x, (y + 1) % Ly, sub)

    site_map = None
    if index_method is IndexingMethod.CARTESIAN:
        site_map = np.array([[[index(x, y, sub) for sub in range(n_sub)]
                              for y in range(Ly)] for x in range(Lx)], dtype=int)

    graph = nx.Graph()
    graph.add_nodes_from(range(N))
    graph.add_edges_from((b.src, b.dst) for b in bonds)

    logger.debug(f"Built {topology} lattice {Lx}x{Ly}: N={N}, bonds={len(bonds)}")
    return Lattice(
        topology=topology, Lx=Lx, Ly=Ly, N=N,
        positions=positions,
        nearest_neighbors=nearest_neighbors,
        bonds=bonds,
        basis_vectors=cell.basis.copy(),
        reciprocal_vectors=_reciprocal(cell.basis),
        sublattice_ids=sublattice_ids,
        is_bipartite=nx.is_bipartite(graph),
        site_map=site_map,
        translation_x=translation_x,
        translation_y=translation_y,
        boundary=boundary,
        index_method=index_method,
        unit_cell=cell,
    )
