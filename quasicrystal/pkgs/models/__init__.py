"""
Quasicrystal family models and their generators.

Each family provides a projection (cut-and-project) and a substitution
(inflation) generator; the registry selects them by family tag.
"""

from .fibonacci import (
    fibonacci_sequence_length, fibonacci_word,
    generate_fibonacci_projection, generate_fibonacci_substitution
)
from .penrose import (
    generate_penrose_projection, generate_penrose_substitution, inflate_penrose_tiles
)
from .ammann_beenker import (
    generate_ammann_beenker_projection, generate_ammann_beenker_substitution,
    inflate_ammann_beenker_tiles
)
from .registry import (
    FAMILIES, QuasicrystalFamily, available_families, get_family, generate_quasicrystal
)

__all__ = [
    # Fibonacci
    'fibonacci_sequence_length', 'fibonacci_word',
    'generate_fibonacci_projection', 'generate_fibonacci_substitution',
    # Penrose
    'generate_penrose_projection', 'generate_penrose_substitution', 'inflate_penrose_tiles',
    # Ammann-Beenker
    'generate_ammann_beenker_projection', 'generate_ammann_beenker_substitution',
    'inflate_ammann_beenker_tiles',
    # Registry
    'FAMILIES', 'QuasicrystalFamily', 'available_families', 'get_family',
    'generate_quasicrystal'
]
