"""
Runtime components: request schemas, recording and the generation service.
"""

from .recorder import SiteRecorder
from .schemas import GenerateRequest, LatticeRequest, GenerateResult
from .service import QuasicrystalService

__all__ = [
    'SiteRecorder',
    'GenerateRequest', 'LatticeRequest', 'GenerateResult',
    'QuasicrystalService'
]
