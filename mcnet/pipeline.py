"""
Analysis runners shared by the command line and YAML-driven runs.

Each runner reads nothing itself: it takes a loaded graph and motif, runs one
analysis, writes its output files and returns the in-memory result.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .config import AnalysisConfig
from .core.graph import Graph
from .core.oracle import IsomorphismOracle
from .core.pattern import Pattern
from .core.timing import timed
from .io_adapters import (
    read_graph,
    write_graph,
    write_node_map,
    write_node_maps,
    write_samples,
    write_stats,
)
from .motifs.extract import ExtractionResult, extract_instances
from .motifs.instances import find_instances
from .motifs.overlap import OverlapClassifier, OverlapHistogram
from .stats.sampling import SampleStatResult, sample

logger = logging.getLogger(__name__)


def load_motif(
    graph: Graph, size: int, isoclass: int, oracle: Optional[IsomorphismOracle] = None
) -> Pattern:
    """Motif of the given size and class with the graph's directedness."""
    return Pattern.from_isoclass(size, isoclass, directed=graph.directed, oracle=oracle)


def run_mcc(
    graph: Graph,
    motif: Pattern,
    prefix: Optional[str],
    sample_size: int,
    max_trials: int,
    n_jobs: int = 1,
    seed: Optional[int] = None,
    oracle: Optional[IsomorphismOracle] = None,
    timing: bool = False,
) -> SampleStatResult:
    """
    Clustering coefficient and z-score; writes ``PREFIX_samples.txt`` and
    ``PREFIX_stats.txt`` when ``prefix`` is given.
    """
    result = sample(
        graph, motif, sample_size, max_trials,
        n_jobs=n_jobs, seed=seed, oracle=oracle, timing=timing,
    )
    if prefix is not None:
        write_samples(result.samples, f"{prefix}_samples.txt")
        write_stats(graph, result.observed, result.z_score, f"{prefix}_stats.txt")
        logger.info(f"Wrote {prefix}_samples.txt and {prefix}_stats.txt")
    return result


def run_mcstats(
    graph: Graph,
    motif: Pattern,
    prefix: Optional[str] = None,
    write_types: bool = True,
    write_maps: bool = True,
    oracle: Optional[IsomorphismOracle] = None,
    timing: bool = False,
) -> OverlapHistogram:
    """
    Clustering-type histogram; with ``prefix`` writes ``PREFIXType{i}.gml``
    per catalogue entry (numbered from 1) and ``PREFIXNodeMaps.txt``.
    """
    oracle = oracle or IsomorphismOracle()
    with timed("Clustering type catalogue", enabled=timing, log=logger):
        classifier = OverlapClassifier(motif, oracle)
    collect = prefix is not None and write_maps
    with timed("Clustering type statistics", enabled=timing, log=logger):
        histogram = classifier.classify(graph, collect_nodes=collect)

    if prefix is not None:
        if write_types:
            for i, type_graph in enumerate(histogram.catalogue):
                write_graph(type_graph, f"{prefix}Type{i + 1}.gml")
        if collect:
            write_node_maps(histogram.node_maps, f"{prefix}NodeMaps.txt", labels=graph.labels)
    return histogram


def run_mcextract(
    graph: Graph,
    motif: Pattern,
    graph_out: str | Path,
    map_out: Optional[str | Path] = None,
    oracle: Optional[IsomorphismOracle] = None,
    timing: bool = False,
) -> ExtractionResult:
    """Write the union of all motif instances and, optionally, its node map."""
    with timed("Motif extraction", enabled=timing, log=logger):
        instances = find_instances(graph, motif, oracle).unique
        result = extract_instances(graph, motif, instances=instances, oracle=oracle)
    write_graph(result.graph, graph_out)
    if map_out is not None:
        write_node_map(result.node_map, map_out)
    return result


def run_analysis(config: AnalysisConfig) -> Dict[str, Any]:
    """
    Run every analysis selected in ``config``.

    Returns
    -------
    dict
        Result object per analysis name
    """
    logger.info(f"Loading graph from {config.graph.path}")
    graph = read_graph(config.graph.path)
    oracle = IsomorphismOracle()
    motif = load_motif(graph, config.motif.size, config.motif.isoclass, oracle)
    timing = config.logging.timing
    prefix = config.output.prefix

    results: Dict[str, Any] = {}
    for analysis in config.analyses:
        logger.info(f"Running {analysis}")
        if analysis == "mcc":
            results[analysis] = run_mcc(
                graph, motif, prefix,
                config.sampling.sample_size,
                config.sampling.max_trials,
                n_jobs=config.sampling.n_jobs,
                seed=config.sampling.seed,
                oracle=oracle,
                timing=timing,
            )
        elif analysis == "mcstats":
            write = config.output.write_types or config.output.write_node_maps
            results[analysis] = run_mcstats(
                graph, motif,
                prefix=prefix if write else None,
                write_types=config.output.write_types,
                write_maps=config.output.write_node_maps,
                oracle=oracle,
                timing=timing,
            )
        elif analysis == "mcextract":
            results[analysis] = run_mcextract(
                graph, motif,
                config.output.extract_path,
                config.output.map_path,
                oracle=oracle,
                timing=timing,
            )

    logger.info(f"Complete: {', '.join(results)}")
    return results
