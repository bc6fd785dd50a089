"""Pydantic schemas for the generation service."""

from pydantic import BaseModel
from typing import Dict, Optional, Any


class GenerateRequest(BaseModel):
    """Request schema for quasicrystal generation."""
    family: str
    method: str = "projection"
    radius: Optional[float] = None
    n_points: Optional[int] = None
    generations: Optional[int] = None
    cutoff: Optional[float] = None  # build bonds when set


class LatticeRequest(BaseModel):
    """Request schema for a periodic lattice."""
    topology: str = "square"
    Lx: int = 4
    Ly: int = 4
    boundary: str = "periodic"
    index_method: str = "linear"


class GenerateResult(BaseModel):
    """Summary of a generated structure."""
    family: str
    method: str
    dimension: int
    n_sites: int
    n_bonds: int
    n_tiles: int = 0
    parameters: Dict[str, Any] = {}
    metrics: Dict[str, Any] = {}
