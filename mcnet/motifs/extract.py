"""
Extraction of the subgraph formed by all motif instances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from ..core.graph import Graph
from ..core.oracle import IsomorphismOracle, Mapping
from ..core.pattern import Pattern
from .instances import find_instances

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """
    Union of the motif instances of a host graph.

    Attributes
    ----------
    graph : Graph
        Simple graph containing only motif edges; node ``i`` corresponds to
        host node ``node_map[i]``
    node_map : list
        Original identifier of each output node (the host label when the
        host carries labels, otherwise the host node index)
    n_instances : int
        Number of unique instances merged
    """

    graph: Graph
    node_map: List[Any]
    n_instances: int


def extract_instances(
    G: Graph,
    M: Pattern,
    instances: Optional[Sequence[Mapping]] = None,
    oracle: Optional[IsomorphismOracle] = None,
) -> ExtractionResult:
    """
    Build the union of all unique instances of ``M`` in ``G``.

    The output grows one instance at a time: host nodes get consecutive new
    ids on first sight and only the motif's own edges are added through each
    instance's mapping, so host edges between different instances are not
    carried over.
    """
    if instances is None:
        instances = find_instances(G, M, oracle).unique

    new_id = {}
    host_nodes: List[int] = []
    edges = []
    for instance in instances:
        for node in instance:
            if node not in new_id:
                new_id[node] = len(host_nodes)
                host_nodes.append(node)
        edges.extend((new_id[instance[u]], new_id[instance[v]]) for u, v in M.edges)

    node_map = host_nodes if G.labels is None else [G.labels[n] for n in host_nodes]
    graph = Graph(edges=edges, n_nodes=len(host_nodes), directed=G.directed, labels=list(node_map))
    graph = graph.simplify()

    logger.info(
        f"Extracted {len(instances)} motif instances: "
        f"{graph.n_nodes} nodes, {graph.n_edges} edges"
    )
    return ExtractionResult(graph=graph, node_map=node_map, n_instances=len(instances))
