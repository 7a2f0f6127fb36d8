"""
Motif instance discovery and deduplication.

The oracle returns one raw mapping per (instance, automorphism) pair, plus,
on directed hosts, spurious mappings whose vertex set carries edges that are
not part of the motif. This module filters the spurious mappings and reduces
the rest to one representative per vertex set.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

import numpy as np
import scipy.sparse

from ..core.graph import EdgeIndex, Graph
from ..core.oracle import IsomorphismOracle, Mapping
from ..core.pattern import Pattern

logger = logging.getLogger(__name__)

# Marks a mapping rejected during cleanup (stored in slot 0)
INVALID = -1

# Above this many instances pair classification gets slow
INSTANCE_WARNING_LIMIT = 500_000


def is_valid(mapping: Mapping) -> bool:
    return mapping[0] != INVALID


@dataclass
class InstanceSet:
    """
    Motif instances found in a host graph.

    Attributes
    ----------
    mappings : list of tuple
        All raw mappings from the oracle after cleanup; rejected ones carry
        the ``-1`` sentinel in slot 0
    valid : list of tuple
        The mappings that survived cleanup
    unique : list of tuple
        One mapping per distinct vertex set, in first-seen order
    automorphisms : int
        Automorphism count of the motif
    """

    mappings: List[Mapping]
    valid: List[Mapping]
    unique: List[Mapping]
    automorphisms: int

    @property
    def unique_count(self) -> int:
        return len(self.unique)

    @property
    def motif_count(self) -> int:
        """Valid mappings divided by the automorphism count."""
        return len(self.valid) // self.automorphisms


def clean_mappings(G: Graph, M: Pattern, mappings: Iterable[Mapping]) -> List[Mapping]:
    """
    Invalidate mappings whose vertex set induces extra edges.

    Only directed hosts need this; undirected matches are induced already
    and are returned unchanged. Each check only looks at the
    ``size * (size - 1)`` ordered vertex pairs of the mapping.
    """
    mappings = [tuple(m) for m in mappings]
    if not G.directed:
        return mappings

    index = EdgeIndex(G)
    cleaned = []
    for mapping in mappings:
        if is_valid(mapping) and index.induced_edge_count(mapping) != M.n_edges:
            mapping = (INVALID,) + mapping[1:]
        cleaned.append(mapping)
    return cleaned


def unique_mappings(mappings: Iterable[Mapping]) -> List[Mapping]:
    """
    Keep the first mapping seen for each vertex set.

    Sentinel-marked mappings are skipped. Which representative is kept
    depends on input order, the set of vertex sets does not.
    """
    seen = set()
    unique = []
    for mapping in mappings:
        if not is_valid(mapping):
            continue
        key = frozenset(mapping)
        if key in seen:
            continue
        seen.add(key)
        unique.append(mapping)
    return unique


def find_instances(
    G: Graph, M: Pattern, oracle: Optional[IsomorphismOracle] = None
) -> InstanceSet:
    """
    Find the motif instances of ``M`` in ``G``.

    Parameters
    ----------
    G : Graph
        Host graph; it is simplified before matching
    M : Pattern
        Motif to search for
    oracle : IsomorphismOracle, optional
        Matching backend

    Returns
    -------
    InstanceSet
        Cleaned raw mappings and unique instances
    """
    oracle = oracle or IsomorphismOracle()
    host = G.simplify()
    raw = oracle.enumerate_subisomorphisms(host, M.graph)
    mappings = clean_mappings(host, M, raw)
    valid = [m for m in mappings if is_valid(m)]
    unique = unique_mappings(valid)

    logger.debug(
        f"Found {len(raw)} raw mappings, {len(valid)} valid, "
        f"{len(unique)} unique instances"
    )
    if len(unique) > INSTANCE_WARNING_LIMIT:
        logger.warning(
            f"{len(unique)} motif instances found; classifying overlapping "
            f"pairs may take a long time"
        )
    return InstanceSet(mappings=mappings, valid=valid, unique=unique, automorphisms=M.automorphisms)


def unique_count(G: Graph, M: Pattern, oracle: Optional[IsomorphismOracle] = None) -> int:
    """Number of distinct motif instances (vertex sets) in ``G``."""
    return find_instances(G, M, oracle).unique_count


def motif_count(G: Graph, M: Pattern, oracle: Optional[IsomorphismOracle] = None) -> int:
    """Valid raw mappings divided by the motif's automorphism count."""
    return find_instances(G, M, oracle).motif_count


def incidence_matrix(mappings: Sequence[Mapping], n_nodes: int) -> scipy.sparse.csr_matrix:
    """
    Sparse mapping-by-node membership matrix.

    Row ``i`` has a one in every column that is a vertex of ``mappings[i]``.
    """
    k = len(mappings)
    if k == 0:
        return scipy.sparse.csr_matrix((0, n_nodes), dtype=np.int64)
    size = len(mappings[0])
    rows = np.repeat(np.arange(k), size)
    cols = np.fromiter((v for m in mappings for v in m), dtype=np.int64, count=k * size)
    data = np.ones(k * size, dtype=np.int64)
    return scipy.sparse.csr_matrix((data, (rows, cols)), shape=(k, n_nodes))


def node_counts(mappings: Sequence[Mapping], n_nodes: int) -> np.ndarray:
    """Number of mappings containing each node."""
    X = incidence_matrix(mappings, n_nodes)
    return np.asarray(X.sum(axis=0)).ravel().astype(np.int64)


def vertex_set_counts(mappings: Sequence[Mapping]) -> np.ndarray:
    """Multiplicity of each distinct vertex set among ``mappings``."""
    if len(mappings) == 0:
        return np.zeros(0, dtype=np.int64)
    arr = np.sort(np.asarray(mappings, dtype=np.int64), axis=1)
    _, counts = np.unique(arr, axis=0, return_counts=True)
    return counts.astype(np.int64)


def _pairs(counts: np.ndarray) -> int:
    counts = counts.astype(np.int64)
    return int((counts * (counts - 1) // 2).sum())


def shared_vertex_total(mappings: Sequence[Mapping], n_nodes: int) -> int:
    """
    Shared-vertex sum over all mapping pairs with different vertex sets.

    Every node ``v`` contained in ``c_v`` mappings contributes ``C(c_v, 2)``
    to the sum over all pairs; the ``C(r_S, 2)`` pairs on the same vertex
    set ``S`` each account for ``size`` of those and are taken back out.
    Time and memory are linear in the number of mappings.
    """
    if len(mappings) < 2:
        return 0
    size = len(mappings[0])
    return _pairs(node_counts(mappings, n_nodes)) - size * _pairs(vertex_set_counts(mappings))


def overlapping_pairs(mappings: Sequence[Mapping]) -> Iterator[Tuple[int, int]]:
    """
    Yield every pair ``(i, j)`` with ``i < j`` whose vertex sets intersect.

    Pairs come in lexicographic order and are produced lazily from a
    node-to-mapping index, so memory stays linear in the number of
    mappings however many pairs overlap.
    """
    members: Dict[int, List[int]] = defaultdict(list)
    for i, mapping in enumerate(mappings):
        for v in mapping:
            members[v].append(i)

    for i, mapping in enumerate(mappings):
        seen: Set[int] = set()
        for v in mapping:
            ids = members[v]
            # ids is increasing, so everything after i is a later mapping
            start = bisect_right(ids, i)
            seen.update(ids[start:])
        for j in sorted(seen):
            yield i, j
