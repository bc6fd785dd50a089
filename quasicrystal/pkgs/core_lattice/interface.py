"""
Common interface methods for lattice-like structures.

These accessors provide unified read access to sites, bonds and neighbor lists
regardless of whether the structure is a periodic Lattice or an aperiodic
QuasicrystalData. build_nearest_neighbor_bonds is the only writer.
"""
import logging
from typing import List, Protocol, Sequence, runtime_checkable

import networkx as nx
import numpy as np
import torch
from scipy import sparse

from .lattice import Bond
from .quasicrystals import QuasicrystalData
from .utils import POSITION_TOLERANCE

DEVICE = "cuda" if torch.cuda.is_available() else "cpu"
DTYPE = torch.float64

# Rows of the pairwise distance matrix evaluated per block
DISTANCE_BLOCK = 1024

logger = logging.getLogger(__name__)


@runtime_checkable
class AbstractLattice(Protocol):
    """Shape shared by periodic lattices and quasicrystals."""
    positions: np.ndarray
    bonds: List[Bond]
    nearest_neighbors: List[List[int]]

    @property
    def n_sites(self) -> int: ...


def get_positions(lattice: AbstractLattice) -> np.ndarray:
    """Positions of all sites, shape (n_sites, dimension)."""
    return lattice.positions


def get_bonds(lattice: AbstractLattice) -> List[Bond]:
    return lattice.bonds


def get_nearest_neighbors(lattice: AbstractLattice) -> List[List[int]]:
    """Nearest neighbor indices for each site."""
    return lattice.nearest_neighbors


def num_sites(lattice: AbstractLattice) -> int:
    return int(lattice.n_sites)


def num_bonds(lattice: AbstractLattice) -> int:
    return len(lattice.bonds)


def coordination_numbers(lattice: AbstractLattice) -> np.ndarray:
    """Number of neighbors of every site."""
    return np.array([len(nn) for nn in lattice.nearest_neighbors], dtype=int)


def adjacency_matrix(lattice: AbstractLattice) -> sparse.csr_matrix:
    """
    Symmetric sparse adjacency matrix with one entry per bond direction.

    Parallel bonds between the same pair (periodic lattices with Lx or Ly <= 2)
    are summed, so A[i, j] counts bonds and row sums equal coordination numbers.
    """
    n = num_sites(lattice)
    bonds: Sequence[Bond] = lattice.bonds
    rows = np.fromiter((b.src for b in bonds), dtype=np.int64, count=len(bonds))
    cols = np.fromiter((b.dst for b in bonds), dtype=np.int64, count=len(bonds))
    data = np.ones(2 * len(bonds))
    return sparse.csr_matrix((data, (np.concatenate([rows, cols]), np.concatenate([cols, rows]))),
                             shape=(n, n))


def to_networkx(lattice: AbstractLattice) -> nx.MultiGraph:
    """
    Graph view with node attribute 'pos' and edge attributes 'type', 'vector'.

    A MultiGraph keeps one edge per bond, including parallel bonds of small
    periodic lattices; use nx.Graph(g) for the simple graph.
    """
    g = nx.MultiGraph()
    for i, pos in enumerate(lattice.positions):
        g.add_node(i, pos=tuple(float(p) for p in pos))
    for b in lattice.bonds:
        g.add_edge(b.src, b.dst, type=b.type, vector=b.vector)
    return g


def build_nearest_neighbor_bonds(data: QuasicrystalData, cutoff: float) -> QuasicrystalData:
    """
    Build nearest neighbor bonds for a quasicrystal from a distance cutoff.

    Replaces the bonds and nearest_neighbors of data in place: every pair i < j
    with POSITION_TOLERANCE < |r_j - r_i| < cutoff becomes Bond(i, j, 1, r_j - r_i).
    Bonds are emitted in (i, j) lexicographic order.

    Args:
        data: quasicrystal data structure
        cutoff: maximum distance for nearest neighbors

    Returns:
        data, with bonds and nearest neighbors populated
    """
    positions = np.asarray(data.positions, dtype=np.float64)
    n = len(positions)
    bonds: List[Bond] = []
    nearest_neighbors: List[List[int]] = [[] for _ in range(n)]

    if n > 1:
        # torch.tensor copies; positions are read-only
        pts = torch.tensor(positions, dtype=DTYPE, device=DEVICE)
        cols = torch.arange(n, device=DEVICE)
        for start in range(0, n, DISTANCE_BLOCK):
            stop = min(n, start + DISTANCE_BLOCK)
            dist = torch.cdist(pts[start:stop], pts, compute_mode="donot_use_mm_for_euclid_dist")
            upper = cols[None, :] > torch.arange(start, stop, device=DEVICE)[:, None]
            mask = upper & (dist > POSITION_TOLERANCE) & (dist < cutoff)
            for i, j in torch.nonzero(mask).cpu().tolist():
                i += start
                vector = positions[j] - positions[i]
                vector.flags.writeable = False
                bonds.append(Bond(i, j, 1, vector))
                nearest_neighbors[i].append(j)
                nearest_neighbors[j].append(i)

    data.bonds = bonds
    data.nearest_neighbors = nearest_neighbors
    logger.debug(f"Built {len(bonds)} bonds over {n} sites (cutoff={cutoff})")
    return data
