"""
Null models with a fixed number of motif instances.

Random comparison graphs are grown by scattering copies of the motif's edge
set over uniformly chosen nodes and keeping a batch only if it moves the
instance count towards the target without overshooting. Batches shrink as
the target gets closer. This is a best-effort hill climb: a run can fail to
hit the target within its trial budget, which callers treat as a normal
outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from ..core.graph import Graph
from ..core.oracle import IsomorphismOracle
from ..core.pattern import Pattern
from ..exceptions import InputError
from ..motifs.instances import unique_count

logger = logging.getLogger(__name__)

DEFAULT_MAX_TRIALS = 200


@dataclass
class SynthesisResult:
    """
    Outcome of one null-model synthesis run.

    Attributes
    ----------
    success : bool
        Whether a graph with exactly ``target_count`` instances was built
    graph : Graph or None
        The simple synthesised graph; None on failure
    target_count : int
        Requested number of motif instances
    count : int
        Instance count of the last accepted graph
    iterations : int
        Candidate graphs evaluated
    reason : str
        "ok", "trivial", "no trials", "no nodes", "overshoot", "stalled"
        or "cancelled"
    """

    success: bool
    graph: Optional[Graph]
    target_count: int
    count: int
    iterations: int
    reason: str = "ok"

    def __bool__(self) -> bool:
        return self.success


def place_motifs(
    G: Graph, M: Pattern, n_copies: int, rng: np.random.Generator
) -> None:
    """
    Add ``n_copies`` randomly placed copies of the motif's edges to ``G``.

    Each copy maps the motif's nodes to independently drawn uniform node
    indices; duplicate edges and self-loops are not filtered.
    """
    nodes = rng.integers(0, G.n_nodes, size=(n_copies, M.size))
    G.add_edges(
        (int(row[u]), int(row[v])) for row in nodes for u, v in M.edges
    )


def synthesize(
    n_nodes: int,
    directed: bool,
    M: Pattern,
    target_count: int,
    max_trials: int = DEFAULT_MAX_TRIALS,
    rng: Optional[np.random.Generator] = None,
    oracle: Optional[IsomorphismOracle] = None,
    cancel: Optional[Any] = None,
) -> SynthesisResult:
    """
    Grow a random graph containing exactly ``target_count`` motif instances.

    Parameters
    ----------
    n_nodes : int
        Number of nodes of the synthesised graph
    directed : bool
        Whether the graph is directed (must match the motif)
    M : Pattern
        Motif to place
    target_count : int
        Required number of unique motif instances
    max_trials : int, default 200
        Consecutive single-copy rejections tolerated before giving up
    rng : np.random.Generator, optional
        Random number generator
    oracle : IsomorphismOracle, optional
        Matching backend used to count instances
    cancel : object with ``is_set()``, optional
        Cancellation token (e.g. ``threading.Event``); checked before every
        candidate

    Returns
    -------
    SynthesisResult
        ``success`` is False when the target could not be reached
    """
    if bool(directed) != M.directed:
        raise InputError("Null model directedness must match the motif")
    if rng is None:
        rng = np.random.default_rng()
    oracle = oracle or IsomorphismOracle()

    G = Graph.empty(n_nodes, directed)
    if target_count <= 0:
        return SynthesisResult(True, G, target_count, 0, 0, reason="trivial")
    if max_trials <= 0:
        return SynthesisResult(False, None, target_count, 0, 0, reason="no trials")
    if n_nodes == 0:
        return SynthesisResult(False, None, target_count, 0, 0, reason="no nodes")

    add = max(1, target_count // 5)
    count = 0
    cur_count = 0
    trials = 0
    iterations = 0
    reason = "stalled"

    while trials < max_trials:
        if cancel is not None and cancel.is_set():
            reason = "cancelled"
            break

        candidate = G.copy()
        place_motifs(candidate, M, add, rng)
        candidate = candidate.simplify()
        cur_count = unique_count(candidate, M, oracle)
        iterations += 1

        if cur_count < target_count and cur_count != count:
            add = min(add, max(1, (target_count - cur_count) // 3))
            trials = 0
            G = candidate
            count = cur_count
            logger.debug(f"Accepting change, {cur_count} motifs of {target_count}")
        elif cur_count == target_count:
            G = candidate
            count = cur_count
            logger.debug(f"Accepting change, {cur_count} motifs of {target_count}, done")
            break
        else:
            add //= 3
            if add <= 1:
                add = 1
                trials += 1
            logger.debug(
                f"Rejecting change, {cur_count} motifs instead of {target_count}, trial {trials}"
            )

    if count == target_count:
        return SynthesisResult(True, G, target_count, count, iterations)

    if reason != "cancelled" and cur_count > target_count:
        reason = "overshoot"
    logger.debug(
        f"Synthesis failed ({reason}) after {iterations} candidates: "
        f"{count} of {target_count} motifs placed"
    )
    return SynthesisResult(False, None, target_count, count, iterations, reason=reason)
