"""Integration tests for the generation service, recorder and CLI."""

import csv
import json
import os

import pytest
import yaml

from quasicrystal import (
    QuasicrystalService, GenerateRequest, LatticeRequest, GenerateResult, SiteRecorder,
    MetricsCollector, available_families, generate_quasicrystal, generate_penrose_projection,
    build_lattice, build_nearest_neighbor_bonds
)
from quasicrystal.apps.generate.main import get_default_config, load_config, main, run

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "configs", "default.yaml")


class TestRegistry:

    def test_families(self):
        assert available_families() == ["ammann_beenker", "fibonacci", "penrose"]

    def test_dispatch(self):
        qc = generate_quasicrystal("penrose", "projection", radius=2.0)
        assert qc.parameters["symmetry"] == 5
        qc = generate_quasicrystal("fibonacci", "substitution", generations=4)
        assert qc.dimension == 1
        assert len(qc.positions) == 9

    def test_unknown_family(self):
        with pytest.raises(ValueError, match="Unknown quasicrystal family: kagome"):
            generate_quasicrystal("kagome", radius=1.0)

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            generate_quasicrystal("penrose", "annealing", radius=1.0)


class TestService:

    def test_generate_without_bonds(self, quiet_config):
        service = QuasicrystalService(quiet_config)
        result = service.generate(GenerateRequest(family="penrose", radius=2.0))
        assert isinstance(result, GenerateResult)
        assert result.dimension == 2
        assert result.n_sites > 0
        assert result.n_bonds == 0
        assert "generation_duration" in result.metrics
        assert "bond_duration" not in result.metrics

    def test_generate_with_bonds(self, quiet_config):
        service = QuasicrystalService(quiet_config)
        result = service.generate(GenerateRequest(family="fibonacci", method="substitution",
                                                  generations=5, cutoff=1.7))
        assert result.n_sites == 14
        assert result.n_bonds == 13
        assert result.metrics["cutoff"] == 1.7
        assert result.parameters["sequence_length"] == 13

    def test_seed_parameter_from_config(self, quiet_config):
        service = QuasicrystalService(quiet_config)
        result = service.generate(GenerateRequest(family="ammann_beenker"))
        assert result.parameters["radius"] == 2.0

    def test_seed_parameter_default(self):
        service = QuasicrystalService({'log_level': 'WARNING'})
        result = service.generate(GenerateRequest(family="penrose", method="substitution"))
        assert result.parameters["generations"] == 3
        assert result.n_tiles == 5

    def test_generate_errors(self, quiet_config):
        service = QuasicrystalService(quiet_config)
        with pytest.raises(ValueError):
            service.generate(GenerateRequest(family="octagonal"))
        with pytest.raises(ValueError):
            service.generate(GenerateRequest(family="penrose", method="inflation"))
        assert service.data is None

    def test_build_lattice(self, quiet_config):
        service = QuasicrystalService(quiet_config)
        result = service.build_lattice(LatticeRequest(topology="honeycomb", Lx=2, Ly=3))
        assert result.family == "honeycomb"
        assert result.method == "periodic"
        assert result.n_sites == 12
        assert result.metrics["is_bipartite"]

    def test_snapshot(self, quiet_config):
        service = QuasicrystalService(quiet_config)
        assert service.snapshot() == {"status": "empty"}
        service.build_lattice(LatticeRequest(topology="square", Lx=4, Ly=4))
        snap = service.snapshot()
        assert snap["status"] == "generated"
        assert snap["mean_coordination"] == 4.0
        assert snap["recorder"]["site_count"] == 16
        assert snap["recorder"]["bond_count"] == 32
        assert snap["result"]["n_bonds"] == 32
        assert snap["metrics_summary"]["counter_sum"] == 1

    def test_reset(self, quiet_config):
        service = QuasicrystalService(quiet_config)
        service.generate(GenerateRequest(family="penrose", radius=1.0))
        service.reset()
        assert service.data is None
        assert service.snapshot() == {"status": "empty"}

    def test_export_before_generation(self, quiet_config, tmp_path):
        service = QuasicrystalService(quiet_config)
        with pytest.raises(RuntimeError):
            service.export("jsonl", str(tmp_path / "out"))

    def test_export_unsupported_format(self, quiet_config, tmp_path):
        service = QuasicrystalService(quiet_config)
        service.generate(GenerateRequest(family="penrose", radius=1.0))
        with pytest.raises(ValueError, match="Unsupported format: xml"):
            service.export("xml", str(tmp_path / "out"))

    def test_export_jsonl(self, quiet_config, tmp_path):
        service = QuasicrystalService(quiet_config)
        result = service.generate(GenerateRequest(family="penrose", radius=3.0, cutoff=2.0))
        path = service.export("jsonl", str(tmp_path / "penrose"))
        assert path.endswith("penrose.jsonl")

        with open(path) as f:
            lines = [json.loads(line) for line in f]
        assert lines[0]["_metadata"]["family"] == "penrose"
        assert lines[0]["_metadata"]["method"] == "projection"
        kinds = [line["kind"] for line in lines[1:]]
        assert kinds.count("site") == result.n_sites
        assert kinds.count("bond") == result.n_bonds

    def test_export_csv(self, quiet_config, tmp_path):
        service = QuasicrystalService(quiet_config)
        service.build_lattice(LatticeRequest(topology="square", Lx=3, Ly=3, boundary="open"))
        path = service.export("csv", str(tmp_path / "square"))

        with open(path, newline="") as f:
            sites = list(csv.DictReader(f))
        with open(tmp_path / "square_bonds.csv", newline="") as f:
            bonds = list(csv.DictReader(f))
        assert len(sites) == 9
        assert len(bonds) == 12
        assert set(sites[0]) == {"site", "x", "y", "coordination"}
        assert set(bonds[0]) == {"src", "dst", "type", "dx", "dy", "length"}

    def test_export_parquet(self, quiet_config, tmp_path):
        pd = pytest.importorskip("pandas")
        pytest.importorskip("pyarrow")
        service = QuasicrystalService(quiet_config)
        service.build_lattice(LatticeRequest(topology="square", Lx=2, Ly=3, boundary="open"))
        path = service.export("parquet", str(tmp_path / "square"))
        assert len(pd.read_parquet(path)) == 6
        assert len(pd.read_parquet(tmp_path / "square_bonds.parquet")) == 7


    def test_export_without_bonds_replaces_bond_file(self, quiet_config, tmp_path):
        service = QuasicrystalService(quiet_config)
        prefix = str(tmp_path / "chain")
        service.generate(GenerateRequest(family="fibonacci", method="substitution",
                                         generations=3, cutoff=1.7))
        service.export("csv", prefix)
        with open(tmp_path / "chain_bonds.csv", newline="") as f:
            assert len(list(csv.DictReader(f))) == 5

        service.generate(GenerateRequest(family="fibonacci", method="substitution",
                                         generations=3))
        service.export("csv", prefix)
        with open(tmp_path / "chain.csv", newline="") as f:
            assert len(list(csv.DictReader(f))) == 6
        with open(tmp_path / "chain_bonds.csv", newline="") as f:
            reader = csv.DictReader(f)
            assert list(reader) == []
            assert reader.fieldnames == ["src", "dst", "type", "dx", "length"]

    def test_parquet_without_bonds_replaces_bond_file(self, quiet_config, tmp_path):
        pd = pytest.importorskip("pandas")
        pytest.importorskip("pyarrow")
        service = QuasicrystalService(quiet_config)
        prefix = str(tmp_path / "chain")
        service.generate(GenerateRequest(family="fibonacci", method="substitution",
                                         generations=3, cutoff=1.7))
        service.export("parquet", prefix)
        service.generate(GenerateRequest(family="fibonacci", method="substitution",
                                         generations=3))
        service.export("parquet", prefix)
        bonds = pd.read_parquet(tmp_path / "chain_bonds.parquet")
        assert len(bonds) == 0
        assert list(bonds.columns) == ["src", "dst", "type", "dx", "length"]

    def test_export_empty_structure(self, quiet_config, tmp_path):
        service = QuasicrystalService(quiet_config)
        result = service.generate(GenerateRequest(family="penrose", radius=-1.0))
        assert result.n_sites == 0

        path = service.export("jsonl", str(tmp_path / "empty"))
        assert os.path.exists(path)
        with open(path) as f:
            lines = [json.loads(line) for line in f]
        assert len(lines) == 1
        assert lines[0]["_metadata"]["family"] == "penrose"

        path = service.export("csv", str(tmp_path / "empty"))
        with open(path, newline="") as f:
            reader = csv.DictReader(f)
            assert list(reader) == []
            assert reader.fieldnames == ["site", "x", "y", "coordination"]
        assert os.path.exists(tmp_path / "empty_bonds.csv")


class TestRecorder:

    def test_record_replaces_rows(self):
        recorder = SiteRecorder()
        recorder.record(build_lattice("square", 4, 4))
        recorder.record(build_lattice("square", 2, 3, boundary="open"))
        summary = recorder.get_summary()
        assert summary["site_count"] == 6
        assert summary["bond_count"] == 7
        assert summary["bond_length"]["min"] == pytest.approx(1.0)

    def test_one_dimensional_rows(self):
        recorder = SiteRecorder()
        qc = generate_quasicrystal("fibonacci", "substitution", generations=3)
        recorder.record(build_nearest_neighbor_bonds(qc, cutoff=1.7))
        assert set(recorder.site_rows[0]) == {"site", "x", "coordination"}
        assert set(recorder.bond_rows[0]) == {"src", "dst", "type", "dx", "length"}

    def test_disabled(self, tmp_path):
        recorder = SiteRecorder(enabled=False)
        recorder.record(generate_penrose_projection(2.0))
        recorder.dump_jsonl(str(tmp_path / "none.jsonl"))
        assert recorder.site_rows == []
        assert not (tmp_path / "none.jsonl").exists()


class TestMetrics:

    def test_timers_and_counters(self):
        metrics = MetricsCollector()
        metrics.start_timer("t")
        assert metrics.stop_timer("t") >= 0.0
        assert metrics.stop_timer("never") == 0.0
        metrics.increment_counter("runs")
        metrics.increment_counter("runs", 2)
        assert metrics.get_all_metrics()["counters"] == {"runs": 3}
        metrics.reset()
        assert metrics.summary_stats()["total_timers"] == 0

    def test_timer_context_and_sizes(self):
        metrics = MetricsCollector()
        for n in (10, 30):
            with metrics.timer("generation_duration"):
                metrics.observe("n_sites", n)
        stats = metrics.summary_stats()
        assert stats["durations"]["generation_duration"]["count"] == 2
        assert stats["sizes"]["n_sites"] == {"count": 2, "mean": 20.0, "max": 30.0}

    def test_service_records_sizes(self, quiet_config):
        service = QuasicrystalService(quiet_config)
        service.generate(GenerateRequest(family="fibonacci", method="substitution",
                                         generations=3, cutoff=1.7))
        sizes = service.snapshot()["metrics_summary"]["sizes"]
        assert sizes["n_sites"]["max"] == 6.0
        assert sizes["n_bonds"]["max"] == 5.0


class TestCLI:

    def test_default_config_file_matches_defaults(self):
        with open(CONFIG_PATH) as f:
            loaded = yaml.safe_load(f)
        assert loaded == get_default_config()

    def test_load_missing_config(self, tmp_path):
        assert load_config(str(tmp_path / "missing.yaml")) == get_default_config()

    def test_load_config_merges(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("generation:\n  family: fibonacci\ngraph:\n  cutoff: 1.5\n")
        config = load_config(str(path))
        assert config["generation"]["family"] == "fibonacci"
        assert config["generation"]["radius"] == 3.0
        assert config["graph"]["cutoff"] == 1.5

    def test_load_invalid_config(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("generation: [unclosed\n")
        with pytest.raises(SystemExit):
            load_config(str(path))

    def test_run(self, quiet_config):
        config = get_default_config()
        config["log_level"] = "WARNING"
        config["output"] = quiet_config["output"]
        path = run(config)
        with open(path) as f:
            assert json.loads(f.readline())["_metadata"]["family"] == "penrose"

    def test_main(self, tmp_path):
        output = tmp_path / "chain"
        main(["--config", str(tmp_path / "missing.yaml"),
              "--family", "fibonacci", "--method", "substitution", "--generations", "4",
              "--cutoff", "1.7", "--output", str(output), "--format", "csv",
              "--log-level", "WARNING"])
        with open(tmp_path / "chain.csv", newline="") as f:
            assert len(list(csv.DictReader(f))) == 9
        with open(tmp_path / "chain_bonds.csv", newline="") as f:
            assert len(list(csv.DictReader(f))) == 8

    def test_main_periodic(self, tmp_path):
        main(["--config", str(tmp_path / "missing.yaml"), "--periodic",
              "--output", str(tmp_path / "lattice"), "--log-level", "WARNING"])
        with open(tmp_path / "lattice.jsonl") as f:
            lines = f.readlines()
        # metadata, 16 sites, 32 bonds
        assert len(lines) == 1 + 16 + 32


if __name__ == "__main__":
    pytest.main([__file__])
