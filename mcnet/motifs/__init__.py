"""
Motif instance discovery, clustering coefficient, clustering types and
instance extraction.
"""

from .instances import (
    INVALID,
    InstanceSet,
    clean_mappings,
    unique_mappings,
    find_instances,
    unique_count,
    motif_count,
    overlapping_pairs,
    shared_vertex_total,
)
from .clustering import ClusteringResult, motif_clustering, motif_clustering_coefficient
from .overlap import (
    OverlapClassifier,
    OverlapHistogram,
    build_catalogue,
    classify_instances,
    classify_pair,
    merge_copies,
)
from .extract import ExtractionResult, extract_instances

__all__ = [
    "INVALID",
    "InstanceSet",
    "clean_mappings",
    "unique_mappings",
    "find_instances",
    "unique_count",
    "motif_count",
    "overlapping_pairs",
    "shared_vertex_total",
    "ClusteringResult",
    "motif_clustering",
    "motif_clustering_coefficient",
    "OverlapClassifier",
    "OverlapHistogram",
    "build_catalogue",
    "classify_instances",
    "classify_pair",
    "merge_copies",
    "ExtractionResult",
    "extract_instances",
]
