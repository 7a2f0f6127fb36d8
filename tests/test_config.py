"""
Tests for YAML analysis configuration.
"""

import pytest
import yaml

from mcnet.config import (
    AnalysisConfig,
    GraphConfig,
    LoggingConfig,
    MotifConfig,
    OutputConfig,
    SamplingConfig,
)


class TestSectionValidation:
    """Test per-section validation."""

    def test_defaults(self):
        assert MotifConfig().size == 3
        sampling = SamplingConfig()
        assert sampling.sample_size == 100
        assert sampling.max_trials == 200
        assert sampling.n_jobs == 1
        assert sampling.seed is None
        assert OutputConfig().prefix == "mcnet"
        assert LoggingConfig().level == "WARNING"

    def test_motif_size(self):
        with pytest.raises(ValueError, match="size"):
            MotifConfig(size=5)

    def test_negative_isoclass(self):
        with pytest.raises(ValueError):
            MotifConfig(isoclass=-1)

    @pytest.mark.parametrize("kwargs", [
        {"sample_size": -1},
        {"max_trials": -2},
        {"n_jobs": 0},
        {"n_jobs": -3},
    ])
    def test_sampling_bounds(self, kwargs):
        with pytest.raises(ValueError):
            SamplingConfig(**kwargs)

    def test_graph_path_required(self):
        with pytest.raises(ValueError, match="path"):
            GraphConfig(path="")

    def test_log_level_normalised(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValueError):
            LoggingConfig(level="loud")

    def test_map_requires_extract(self):
        with pytest.raises(ValueError):
            OutputConfig(map_path="map.txt")


class TestAnalysisConfig:
    """Test the complete configuration."""

    def test_from_dict(self):
        cfg = AnalysisConfig.from_dict({
            "graph": {"path": "net.gml"},
            "motif": {"size": 4, "isoclass": 7},
            "sampling": {"sample_size": 10, "seed": 3},
            "analyses": ["mcc", "mcstats"],
        })
        assert cfg.motif.size == 4
        assert cfg.sampling.sample_size == 10
        assert cfg.sampling.max_trials == 200
        assert cfg.analyses == ["mcc", "mcstats"]

    def test_unknown_analysis(self):
        with pytest.raises(ValueError, match="analyses"):
            AnalysisConfig.from_dict({"graph": {"path": "g.gml"}, "analyses": ["motifs"]})

    def test_extract_needs_path(self):
        with pytest.raises(ValueError, match="extract_path"):
            AnalysisConfig.from_dict({"graph": {"path": "g.gml"}, "analyses": ["mcextract"]})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "graph": {"path": "net.gml"},
            "output": {"prefix": "out/run", "write_types": True},
            "logging": {"level": "info", "timing": True},
        }))
        cfg = AnalysisConfig.from_yaml(path)

        assert cfg.output.write_types
        assert cfg.logging.level == "INFO"
        assert cfg.analyses == ["mcc"]

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AnalysisConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_missing_graph(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("motif:\n  size: 3\n")
        with pytest.raises(ValueError, match="graph"):
            AnalysisConfig.from_yaml(path)

    def test_to_dict_round_trip(self):
        cfg = AnalysisConfig(graph=GraphConfig(path="net.gml"))
        assert AnalysisConfig.from_dict(cfg.to_dict()) == cfg
