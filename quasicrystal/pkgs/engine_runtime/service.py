"""Generation service that wraps the family registry, bond builder and recorder."""

import logging
from typing import Any, Dict, Optional, Union

from ..core_lattice import (
    GenerationMethod, Lattice, QuasicrystalData, build_lattice, build_nearest_neighbor_bonds,
    coordination_numbers, num_bonds, num_sites
)
from ..models import generate_quasicrystal, get_family
from ..observability import MetricsCollector, setup_logging
from .recorder import SiteRecorder
from .schemas import GenerateRequest, GenerateResult, LatticeRequest

logger = logging.getLogger(__name__)

DEFAULT_PARAMS = {"radius": 3.0, "n_points": 20, "generations": 3}


class QuasicrystalService:
    """High-level interface: generate a structure, build its bonds, export it."""

    def __init__(self, cfg: Optional[Dict] = None):
        self.cfg = cfg or {}
        self.data: Optional[Union[QuasicrystalData, Lattice]] = None
        self.last_result: Optional[GenerateResult] = None
        self.metrics = MetricsCollector()
        self.recorder = SiteRecorder(enabled=True)

        setup_logging(self.cfg.get('log_level', 'INFO'))
        logger.info("QuasicrystalService initialized")

    def _seed_value(self, req: GenerateRequest, name: str) -> Any:
        value = getattr(req, name)
        if value is None:
            value = self.cfg.get('generation', {}).get(name, DEFAULT_PARAMS[name])
        return value

    def generate(self, req: GenerateRequest) -> GenerateResult:
        """Generate a quasicrystal and optionally build its bond graph."""
        family = get_family(req.family)
        method = GenerationMethod(req.method)
        param = family.seed_param(method)
        value = self._seed_value(req, param)
        logger.info(f"Generating {family.name} ({method.value}) with {param}={value}")

        self.metrics.start_timer("generation_duration")
        try:
            data = generate_quasicrystal(family.name, method, **{param: value})
        except Exception as e:
            self.metrics.stop_timer("generation_duration")
            logger.error(f"Generation failed for {family.name}: {e}")
            raise
        metrics: Dict[str, Any] = {
            "generation_duration": self.metrics.stop_timer("generation_duration")
        }

        if req.cutoff is not None:
            with self.metrics.timer("bond_duration"):
                build_nearest_neighbor_bonds(data, req.cutoff)
            metrics["bond_duration"] = self.metrics.timers["bond_duration"]
            metrics["cutoff"] = req.cutoff

        self.metrics.increment_counter("generated")
        return self._finish(data, family.name, method.value, metrics)

    def build_lattice(self, req: LatticeRequest) -> GenerateResult:
        """Build a periodic lattice through the same service surface."""
        logger.info(f"Building {req.topology} lattice {req.Lx}x{req.Ly} ({req.boundary})")
        self.metrics.start_timer("generation_duration")
        lattice = build_lattice(req.topology, req.Lx, req.Ly, req.boundary, req.index_method)
        metrics = {"generation_duration": self.metrics.stop_timer("generation_duration"),
                   "is_bipartite": lattice.is_bipartite}
        self.metrics.increment_counter("generated")
        return self._finish(lattice, req.topology, "periodic", metrics)

    def _finish(self, data, name: str, method: str, metrics: Dict[str, Any]) -> GenerateResult:
        self.data = data
        self.recorder.record(data)
        self.recorder.set_metadata(family=name, method=method)

        parameters = dict(getattr(data, 'parameters', {}))
        result = GenerateResult(
            family=name,
            method=method,
            dimension=data.positions.shape[1],
            n_sites=num_sites(data),
            n_bonds=num_bonds(data),
            n_tiles=len(getattr(data, 'tiles', [])),
            parameters=parameters,
            metrics=metrics,
        )
        self.last_result = result
        self.metrics.observe("n_sites", result.n_sites)
        self.metrics.observe("n_bonds", result.n_bonds)
        logger.info(f"Generated {name}: sites={result.n_sites}, bonds={result.n_bonds}, "
                    f"tiles={result.n_tiles}")
        return result

    def snapshot(self) -> Dict:
        """Return summary snapshot of the current structure."""
        if self.data is None:
            return {"status": "empty"}

        coordination = coordination_numbers(self.data)
        return {
            "status": "generated",
            "result": self.last_result.model_dump(),
            "mean_coordination": float(coordination.mean()) if len(coordination) else 0.0,
            "recorder": self.recorder.get_summary(),
            "metrics_summary": self.metrics.summary_stats(),
        }

    def export(self, format: str = "jsonl", path: str = "output/quasicrystal") -> str:
        """Export recorded sites and bonds in the specified format."""
        if self.data is None:
            raise RuntimeError("Nothing generated yet. Call generate() first.")

        if format == "csv":
            full_path = f"{path}.csv"
            self.recorder.dump_csv(full_path)
        elif format == "jsonl":
            full_path = f"{path}.jsonl"
            self.recorder.dump_jsonl(full_path)
        elif format == "parquet":
            full_path = f"{path}.parquet"
            self.recorder.dump_parquet(full_path)
        else:
            raise ValueError(f"Unsupported format: {format}")

        logger.info(f"Structure exported to: {full_path}")
        return full_path

    def reset(self):
        self.data = None
        self.last_result = None
        self.recorder.clear()
        self.metrics.reset()
