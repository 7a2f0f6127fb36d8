"""
Motif clustering types.

A clustering type is one way two copies of a motif can share between 1 and
``size - 1`` vertices without either copy gaining or losing edges. The
catalogue of types is enumerated once per motif by merging two copies under
every injective overlap mapping, then every pair of instances found in a host
graph is bucketed into the catalogue by isomorphism.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import permutations
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from ..core.graph import EdgeIndex, Graph
from ..core.oracle import IsomorphismOracle, Mapping
from ..core.pattern import Pattern
from ..exceptions import CatalogueOverflowError, ClassificationError
from .instances import find_instances, overlapping_pairs

logger = logging.getLogger(__name__)

SUPPORTED_SIZES = (3, 4)


def overlap_mappings(size: int) -> Iterator[Tuple[Tuple[int, ...], Tuple[int, ...]]]:
    """
    Every injective overlap between two copies of a ``size``-node motif.

    Yields ``(m1, m2)`` pairs meaning copy-1 vertex ``m1[i]`` is identified
    with copy-2 vertex ``m2[i]``, for overlaps of 1 to ``size - 1`` vertices,
    in lexicographic order.
    """
    if size not in SUPPORTED_SIZES:
        raise CatalogueOverflowError(
            f"Clustering types are only supported for 3 and 4 node motifs, got {size}"
        )
    for overlap in range(1, size):
        for m1 in permutations(range(size), overlap):
            for m2 in permutations(range(size), overlap):
                yield m1, m2


def merge_copies(M: Pattern, m1: Sequence[int], m2: Sequence[int]) -> Tuple[Graph, List[int]]:
    """
    Merge two copies of ``M`` along an overlap mapping.

    Copy 1 keeps node ids ``0 .. size - 1``. Copy-2 vertex ``m2[i]`` becomes
    node ``m1[i]``; the remaining copy-2 vertices get new ids in index order.

    Returns
    -------
    merged : Graph
        Simple graph with the edges of both copies
    copy2 : list of int
        Node id in ``merged`` of each copy-2 vertex
    """
    size = M.size
    copy2 = [-1] * size
    for a, b in zip(m1, m2):
        copy2[b] = a
    next_id = size
    for p in range(size):
        if copy2[p] == -1:
            copy2[p] = next_id
            next_id += 1

    edges = list(M.edges) + [(copy2[u], copy2[v]) for u, v in M.edges]
    merged = Graph(edges=edges, n_nodes=next_id, directed=M.directed).simplify()
    return merged, copy2


def is_faithful(merged: Graph, M: Pattern, copy2: Sequence[int]) -> bool:
    """True if both copies still induce exactly the motif's edge count."""
    copy1 = range(M.size)
    return (
        merged.induced_subgraph(copy1).n_edges == M.n_edges
        and merged.induced_subgraph(copy2).n_edges == M.n_edges
    )


def build_catalogue(M: Pattern, oracle: Optional[IsomorphismOracle] = None) -> List[Graph]:
    """
    Enumerate the clustering types of ``M``.

    Returns
    -------
    list of Graph
        Pairwise non-isomorphic merged graphs, in discovery order

    Raises
    ------
    CatalogueOverflowError
        If ``M`` does not have 3 or 4 nodes
    """
    oracle = oracle or IsomorphismOracle()
    catalogue: List[Graph] = []
    for m1, m2 in overlap_mappings(M.size):
        merged, copy2 = merge_copies(M, m1, m2)
        if not is_faithful(merged, M, copy2):
            continue
        if any(oracle.is_isomorphic(merged, known) for known in catalogue):
            continue
        catalogue.append(merged)

    logger.info(f"Found {len(catalogue)} types of motif clustering")
    return catalogue


def merged_instance_graph(index: EdgeIndex, a: Mapping, b: Mapping) -> Graph:
    """
    Host subgraph formed by two overlapping instances.

    Nodes are the union of both vertex sets (``a`` first); edges are the host
    edges induced by ``a`` together with those induced by ``b``.
    """
    nodes = list(dict.fromkeys(list(a) + list(b)))
    position = {n: i for i, n in enumerate(nodes)}
    edges = [
        (position[u], position[v])
        for instance in (a, b)
        for u, v in index.induced_edges(instance)
    ]
    return Graph(edges=edges, n_nodes=len(nodes), directed=index.directed).simplify()


@dataclass
class OverlapHistogram:
    """
    Clustering-type counts over all pairs of motif instances.

    Attributes
    ----------
    catalogue : list of Graph
        Clustering types, in catalogue order
    counts : list of int
        Pairs per type, followed by the number of unclustered (disjoint) pairs
    node_maps : list of list of int, optional
        Host nodes taking part in each type, in first-seen order
    """

    catalogue: List[Graph]
    counts: List[int]
    node_maps: Optional[List[List[int]]] = None

    @property
    def type_counts(self) -> List[int]:
        return self.counts[:-1]

    @property
    def unclustered(self) -> int:
        return self.counts[-1]

    @property
    def n_pairs(self) -> int:
        return sum(self.counts)

    def __str__(self) -> str:
        return ",".join(str(c) for c in self.counts)


class OverlapClassifier:
    """
    Bucket motif instance pairs into clustering types.

    The catalogue is built once on construction (unless one is supplied) and
    reused for every host graph classified with this instance.
    """

    def __init__(
        self,
        M: Pattern,
        oracle: Optional[IsomorphismOracle] = None,
        catalogue: Optional[List[Graph]] = None,
    ):
        self.pattern = M
        self.oracle = oracle or IsomorphismOracle()
        if catalogue is None:
            catalogue = build_catalogue(M, self.oracle)
        self.catalogue = catalogue

    def _match(self, merged: Graph) -> Optional[int]:
        for k, known in enumerate(self.catalogue):
            if known.n_nodes != merged.n_nodes or known.n_edges != merged.n_edges:
                continue
            if self.oracle.is_isomorphic(merged, known):
                return k
        return None

    def _classify(self, index: EdgeIndex, a: Mapping, b: Mapping) -> Optional[int]:
        if not set(a) & set(b):
            return None
        merged = merged_instance_graph(index, a, b)
        k = self._match(merged)
        if k is None:
            raise ClassificationError(
                f"Instances {tuple(a)} and {tuple(b)} overlap in a way that matches "
                f"no clustering type"
            )
        return k

    def classify_pair(self, G: Graph, a: Mapping, b: Mapping) -> Optional[int]:
        """
        Clustering type of one instance pair.

        Returns
        -------
        int or None
            Catalogue index, or None if the instances share no vertex
        """
        return self._classify(EdgeIndex(G), a, b)

    def classify(
        self,
        G: Graph,
        instances: Optional[Sequence[Mapping]] = None,
        collect_nodes: bool = False,
    ) -> OverlapHistogram:
        """
        Classify every pair of unique instances of the motif in ``G``.

        Parameters
        ----------
        G : Graph
            Host graph
        instances : sequence of tuple, optional
            Unique instances; found with :func:`find_instances` if omitted
        collect_nodes : bool, default False
            Also record the host nodes involved in each type

        Returns
        -------
        OverlapHistogram
        """
        if instances is None:
            instances = find_instances(G, self.pattern, self.oracle).unique
        instances = list(instances)
        n_types = len(self.catalogue)
        counts = [0] * (n_types + 1)
        node_maps: Optional[List[List[int]]] = None
        seen: List[Set[int]] = []
        if collect_nodes:
            node_maps = [[] for _ in range(n_types)]
            seen = [set() for _ in range(n_types)]

        index = EdgeIndex(G)
        clustered = 0
        for i, j in overlapping_pairs(instances):
            a, b = instances[i], instances[j]
            k = self._classify(index, a, b)
            counts[k] += 1
            clustered += 1
            if collect_nodes:
                for u, v in zip(a, b):
                    for node in (u, v):
                        if node not in seen[k]:
                            seen[k].add(node)
                            node_maps[k].append(node)

        n = len(instances)
        counts[n_types] = n * (n - 1) // 2 - clustered
        logger.info(
            f"Classified {n * (n - 1) // 2} instance pairs: "
            f"{clustered} clustered, {counts[n_types]} unclustered"
        )
        return OverlapHistogram(catalogue=self.catalogue, counts=counts, node_maps=node_maps)


def classify_pair(
    G: Graph,
    M: Pattern,
    a: Mapping,
    b: Mapping,
    catalogue: Optional[List[Graph]] = None,
    oracle: Optional[IsomorphismOracle] = None,
) -> Optional[int]:
    """Catalogue index of the pair ``(a, b)``, or None if they are disjoint."""
    return OverlapClassifier(M, oracle, catalogue).classify_pair(G, a, b)


def classify_instances(
    G: Graph,
    M: Pattern,
    instances: Optional[Sequence[Mapping]] = None,
    catalogue: Optional[List[Graph]] = None,
    oracle: Optional[IsomorphismOracle] = None,
    collect_nodes: bool = False,
) -> OverlapHistogram:
    """Classify all instance pairs of ``M`` in ``G``, building the catalogue if needed."""
    return OverlapClassifier(M, oracle, catalogue).classify(G, instances, collect_nodes=collect_nodes)
