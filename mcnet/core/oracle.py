"""
Isomorphism oracle.

Wraps the NetworkX VF2 matchers for subgraph enumeration, isomorphism tests
and automorphism counting, and python-igraph for building a motif from its
canonical isomorphism-class index (the numbering used by ``igraph``'s motif
functions, so class ids are interchangeable with igraph tooling).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

import igraph as ig
import networkx as nx
from networkx.algorithms import isomorphism

from ..exceptions import InputError
from .graph import Graph
from .pattern import Pattern

logger = logging.getLogger(__name__)

Mapping = Tuple[int, ...]

# Number of isomorphism classes per (size, directed) supported by igraph
ISOCLASS_COUNTS: Dict[Tuple[int, bool], int] = {
    (3, False): 4,
    (4, False): 11,
    (3, True): 16,
    (4, True): 218,
}


def _matcher(G1: nx.Graph, G2: nx.Graph):
    if G1.is_directed():
        return isomorphism.DiGraphMatcher(G1, G2)
    return isomorphism.GraphMatcher(G1, G2)


class IsomorphismOracle:
    """
    Graph matching backend.

    Subgraph enumeration uses monomorphisms (pattern edges must be present,
    extra host edges are allowed) on directed hosts and induced isomorphisms
    on undirected hosts. Directed matches are therefore cleaned afterwards
    by edge count, while undirected matches are edge-exact as returned.
    """

    def enumerate_subisomorphisms(self, host: Graph, pattern: Graph) -> List[Mapping]:
        """
        All mappings of ``pattern`` into ``host``.

        Returns
        -------
        list of tuple
            One tuple per mapping; slot ``p`` holds the host node matched to
            pattern node ``p``.
        """
        if host.directed != pattern.directed:
            raise InputError(
                f"Host graph is {'directed' if host.directed else 'undirected'} "
                f"but the pattern is {'directed' if pattern.directed else 'undirected'}"
            )
        size = pattern.n_nodes
        if size == 0 or host.n_nodes < size:
            return []

        matcher = _matcher(host.as_networkx(), pattern.as_networkx())
        if host.directed:
            found = matcher.subgraph_monomorphisms_iter()
        else:
            found = matcher.subgraph_isomorphisms_iter()

        mappings = []
        for match in found:
            # match is host node -> pattern node
            slots = [0] * size
            for h, p in match.items():
                slots[p] = h
            mappings.append(tuple(slots))
        return mappings

    def is_isomorphic(self, a: Graph, b: Graph) -> bool:
        """Exact isomorphism test on the simplified graphs."""
        if a.directed != b.directed or a.n_nodes != b.n_nodes:
            return False
        a, b = a.simplify(), b.simplify()
        if a.n_edges != b.n_edges:
            return False
        return _matcher(a.as_networkx(), b.as_networkx()).is_isomorphic()

    def automorphism_count(self, pattern: Graph) -> int:
        """Number of isomorphisms of ``pattern`` onto itself."""
        P = pattern.simplify().as_networkx()
        return sum(1 for _ in _matcher(P, P).isomorphisms_iter())

    def pattern_from_graph(self, graph: Graph) -> Pattern:
        """Wrap a simple graph as a :class:`Pattern`."""
        graph = graph.simplify()
        return Pattern(graph=graph, automorphisms=self.automorphism_count(graph))

    def pattern_from_isoclass(self, size: int, class_id: int, directed: bool) -> Pattern:
        """
        Motif for an igraph isomorphism class.

        Raises
        ------
        InputError
            If ``size`` is not 3 or 4, or ``class_id`` is out of range for the
            size and directedness.
        """
        n_classes = ISOCLASS_COUNTS.get((size, bool(directed)))
        if n_classes is None:
            raise InputError(f"Motif size must be 3 or 4, got {size}")
        if not 0 <= class_id < n_classes:
            kind = "directed" if directed else "undirected"
            raise InputError(
                f"Isoclass {class_id} out of range for {kind} size-{size} motifs "
                f"(0..{n_classes - 1})"
            )
        motif = ig.Graph.Isoclass(size, class_id, directed=bool(directed))
        graph = Graph(edges=motif.get_edgelist(), n_nodes=size, directed=bool(directed))
        pattern = self.pattern_from_graph(graph)
        logger.debug(
            f"Built motif size={size} class={class_id} directed={directed}: "
            f"{pattern.n_edges} edges, {pattern.automorphisms} automorphisms"
        )
        return pattern
