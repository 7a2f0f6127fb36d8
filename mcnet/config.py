"""
Configuration schemas for mcnet YAML-based analysis runs.

Provides type-safe, validated configuration classes using dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from pathlib import Path
import yaml

ANALYSES = ("mcc", "mcstats", "mcextract")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class GraphConfig:
    """Input graph configuration."""
    path: str
    format: str = "gml"

    def __post_init__(self):
        """Validate graph configuration."""
        if not self.path:
            raise ValueError("Graph path is required")
        if self.format != "gml":
            raise ValueError(f"format must be 'gml', got {self.format}")


@dataclass
class MotifConfig:
    """Motif selection by size and igraph isomorphism class."""
    size: int = 3
    isoclass: int = 0

    def __post_init__(self):
        """Validate motif configuration."""
        if self.size not in (3, 4):
            raise ValueError(f"size must be 3 or 4, got {self.size}")
        if self.isoclass < 0:
            raise ValueError(f"isoclass must be >= 0, got {self.isoclass}")


@dataclass
class SamplingConfig:
    """Null-model sampling configuration."""
    sample_size: int = 100
    max_trials: int = 200
    n_jobs: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate sampling configuration."""
        if self.sample_size < 0:
            raise ValueError(f"sample_size must be >= 0, got {self.sample_size}")
        if self.max_trials < 0:
            raise ValueError(f"max_trials must be >= 0, got {self.max_trials}")
        if self.n_jobs == 0 or self.n_jobs < -1:
            raise ValueError(f"n_jobs must be >= 1 or -1, got {self.n_jobs}")


@dataclass
class OutputConfig:
    """Output configuration."""
    prefix: str = "mcnet"
    write_types: bool = False
    write_node_maps: bool = False
    extract_path: Optional[str] = None
    map_path: Optional[str] = None

    def __post_init__(self):
        """Validate output configuration."""
        if self.map_path is not None and self.extract_path is None:
            raise ValueError("map_path requires extract_path")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    timing: bool = False

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {LOG_LEVELS}, got {self.level}")


@dataclass
class AnalysisConfig:
    """Complete analysis configuration."""
    graph: GraphConfig
    motif: MotifConfig = field(default_factory=MotifConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    analyses: List[str] = field(default_factory=lambda: ["mcc"])

    def __post_init__(self):
        """Validate the selected analyses."""
        if not self.analyses:
            raise ValueError("At least one analysis must be selected")
        unknown = [a for a in self.analyses if a not in ANALYSES]
        if unknown:
            raise ValueError(f"analyses must be drawn from {ANALYSES}, got {unknown}")
        if "mcextract" in self.analyses and self.output.extract_path is None:
            raise ValueError("mcextract requires output.extract_path")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AnalysisConfig:
        """Create AnalysisConfig from dictionary (e.g., from YAML)."""
        return cls(
            graph=GraphConfig(**data['graph']),
            motif=MotifConfig(**data.get('motif', {})),
            sampling=SamplingConfig(**data.get('sampling', {})),
            output=OutputConfig(**data.get('output', {})),
            logging=LoggingConfig(**data.get('logging', {})),
            analyses=list(data.get('analyses', ["mcc"])),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> AnalysisConfig:
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or 'graph' not in data:
            raise ValueError("Missing required section: graph")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        from dataclasses import asdict
        return asdict(self)
