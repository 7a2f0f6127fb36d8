"""
mcnet: Motif clustering statistics for networks

Motif clustering coefficient, its significance against fixed-motif-count
null models, clustering-type histograms and motif instance extraction.
"""

from .core.graph import Graph
from .core.pattern import Pattern
from .core.oracle import IsomorphismOracle
from .motifs import (
    find_instances,
    motif_clustering,
    motif_clustering_coefficient,
    OverlapClassifier,
    classify_instances,
    extract_instances,
)
from .stats import synthesize, sample, z_score

__version__ = "0.1.0"

__all__ = [
    'Graph',
    'Pattern',
    'IsomorphismOracle',
    'find_instances',
    'motif_clustering',
    'motif_clustering_coefficient',
    'OverlapClassifier',
    'classify_instances',
    'extract_instances',
    'synthesize',
    'sample',
    'z_score',
]
