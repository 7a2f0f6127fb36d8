"""
Motif clustering coefficient.

The coefficient is the fraction of the theoretically possible shared
vertices between pairs of motif instances that is actually realised::

    C = actual_shared / possible_shared

    actual_shared   = sum over valid raw mapping pairs of |V_i & V_j|
                      (pairs with identical vertex sets excluded) / rot**2
    possible_shared = (size - 1) * C(unique, 2)

where ``rot`` is the automorphism count of the motif and
``unique = valid_raw // rot``. Working on the raw mappings avoids
materialising the symmetry explicitly: each instance appears ``rot`` times in
the raw list, so each instance pair contributes ``rot**2`` raw pairs. The
rescaling is exact as long as every instance is matched by exactly ``rot``
mappings, which holds for edge-exact (induced) matches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.graph import Graph
from ..core.oracle import IsomorphismOracle
from ..core.pattern import Pattern
from .instances import InstanceSet, find_instances, shared_vertex_total

logger = logging.getLogger(__name__)


@dataclass
class ClusteringResult:
    """
    Motif clustering coefficient and the counts it was derived from.

    Attributes
    ----------
    value : float
        Clustering coefficient in [0, 1]; NaN when undefined
    defined : bool
        False when fewer than two instances exist (no pairs to compare)
    unique_count : int
        Instances derived from the raw mappings (``valid_mappings // rot``)
    valid_mappings : int
        Raw mappings surviving cleanup
    total_shared : int
        Shared vertices summed over raw mapping pairs
    actual_shared : float
        ``total_shared / rot**2``
    possible_shared : int
        ``(size - 1) * C(unique_count, 2)``
    automorphisms : int
        Automorphism count of the motif
    """

    value: float
    defined: bool
    unique_count: int
    valid_mappings: int
    total_shared: int
    actual_shared: float
    possible_shared: int
    automorphisms: int

    def __str__(self) -> str:
        if not self.defined:
            return f"motif clustering: undefined ({self.unique_count} instances)"
        return f"motif clustering: {self.value:.8f} ({self.unique_count} instances)"


def motif_clustering(
    G: Graph,
    M: Pattern,
    oracle: Optional[IsomorphismOracle] = None,
    instances: Optional[InstanceSet] = None,
) -> ClusteringResult:
    """
    Compute the motif clustering coefficient of ``G`` for motif ``M``.

    Parameters
    ----------
    G : Graph
        Host graph
    M : Pattern
        Motif
    oracle : IsomorphismOracle, optional
        Matching backend
    instances : InstanceSet, optional
        Precomputed result of :func:`find_instances` for ``(G, M)``

    Returns
    -------
    ClusteringResult
        ``defined`` is False (and ``value`` NaN) when fewer than two
        instances exist
    """
    if instances is None:
        instances = find_instances(G, M, oracle)

    size = M.size
    rot = M.automorphisms
    valid = instances.valid
    unique = len(valid) // rot

    total_shared = shared_vertex_total(valid, G.n_nodes)

    actual_shared = total_shared / (rot * rot)
    possible_shared = (size - 1) * (unique * (unique - 1) // 2)

    if unique < 2:
        value = float("nan")
        defined = False
    else:
        value = actual_shared / possible_shared
        defined = True

    logger.debug(
        f"valid mappings: {len(valid)}, rot: {rot}, unique: {unique}, "
        f"total shared: {total_shared}, actual shared: {actual_shared}, "
        f"possible shared: {possible_shared}"
    )
    return ClusteringResult(
        value=value,
        defined=defined,
        unique_count=unique,
        valid_mappings=len(valid),
        total_shared=total_shared,
        actual_shared=actual_shared,
        possible_shared=possible_shared,
        automorphisms=rot,
    )


def motif_clustering_coefficient(
    G: Graph, M: Pattern, oracle: Optional[IsomorphismOracle] = None
) -> float:
    """Clustering coefficient as a bare float (NaN when undefined)."""
    return motif_clustering(G, M, oracle).value
