"""
Family registry: selects generators and seed parameters per quasicrystal family.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from ..core_lattice.quasicrystals import GenerationMethod, QuasicrystalData
from .ammann_beenker import generate_ammann_beenker_projection, generate_ammann_beenker_substitution
from .fibonacci import generate_fibonacci_projection, generate_fibonacci_substitution
from .penrose import generate_penrose_projection, generate_penrose_substitution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuasicrystalFamily:
    name: str
    dimension: int
    symmetry: Optional[int]
    projection: Callable[..., QuasicrystalData]
    substitution: Callable[..., QuasicrystalData]
    projection_param: str  # "radius" or "n_points"
    substitution_param: str = "generations"

    def generator(self, method: GenerationMethod) -> Callable[..., QuasicrystalData]:
        if method is GenerationMethod.PROJECTION:
            return self.projection
        return self.substitution

    def seed_param(self, method: GenerationMethod) -> str:
        if method is GenerationMethod.PROJECTION:
            return self.projection_param
        return self.substitution_param


FAMILIES: Dict[str, QuasicrystalFamily] = {
    "fibonacci": QuasicrystalFamily(
        "fibonacci", 1, None,
        generate_fibonacci_projection, generate_fibonacci_substitution, "n_points"),
    "penrose": QuasicrystalFamily(
        "penrose", 2, 5,
        generate_penrose_projection, generate_penrose_substitution, "radius"),
    "ammann_beenker": QuasicrystalFamily(
        "ammann_beenker", 2, 8,
        generate_ammann_beenker_projection, generate_ammann_beenker_substitution, "radius"),
}


def available_families() -> List[str]:
    return sorted(FAMILIES)


def get_family(name: str) -> QuasicrystalFamily:
    if name not in FAMILIES:
        raise ValueError(f"Unknown quasicrystal family: {name}")
    return FAMILIES[name]


def generate_quasicrystal(family: str,
                          method: Union[str, GenerationMethod] = GenerationMethod.PROJECTION,
                          **params) -> QuasicrystalData:
    """
    Generate a quasicrystal by family tag and generation method.

    Args:
        family: one of available_families()
        method: GenerationMethod or its value ("projection" / "substitution")
        **params: the family's seed parameter, e.g. radius=3.0, n_points=20
            or generations=4

    Returns:
        QuasicrystalData produced by the selected generator
    """
    fam = get_family(family)
    method = GenerationMethod(method)
    logger.debug(f"Generating {fam.name} via {method.value} with {params}")
    return fam.generator(method)(**params)
