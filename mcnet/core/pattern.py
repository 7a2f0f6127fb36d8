"""
Motif patterns: a small graph together with its automorphism count.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, TYPE_CHECKING

from .graph import Edge, Graph

if TYPE_CHECKING:
    from .oracle import IsomorphismOracle


@dataclass(frozen=True)
class Pattern:
    """
    A motif to search for.

    Attributes
    ----------
    graph : Graph
        Simple graph of the motif (3 or 4 nodes for the clustering-type
        catalogue, any size for counting)
    automorphisms : int
        Number of self-mappings of the motif onto itself. Each instance in a
        host graph is matched by exactly this many raw mappings.
    """

    graph: Graph
    automorphisms: int

    def __post_init__(self):
        if self.automorphisms < 1:
            raise ValueError(f"automorphisms must be >= 1, got {self.automorphisms}")

    @property
    def size(self) -> int:
        return self.graph.n_nodes

    @property
    def n_edges(self) -> int:
        return self.graph.n_edges

    @property
    def directed(self) -> bool:
        return self.graph.directed

    @property
    def edges(self) -> List[Edge]:
        return self.graph.edges

    @classmethod
    def from_edges(
        cls,
        edges: Sequence[Edge],
        n_nodes: int,
        directed: bool = False,
        oracle: Optional[IsomorphismOracle] = None,
    ) -> Pattern:
        """Build a pattern from an edge list, computing its automorphism count."""
        from .oracle import IsomorphismOracle

        oracle = oracle or IsomorphismOracle()
        return oracle.pattern_from_graph(Graph(edges=list(edges), n_nodes=n_nodes, directed=directed))

    @classmethod
    def from_isoclass(
        cls,
        size: int,
        isoclass: int,
        directed: bool = False,
        oracle: Optional[IsomorphismOracle] = None,
    ) -> Pattern:
        """Build the pattern with igraph isomorphism-class index ``isoclass``."""
        from .oracle import IsomorphismOracle

        oracle = oracle or IsomorphismOracle()
        return oracle.pattern_from_isoclass(size, isoclass, directed)

    def __repr__(self) -> str:
        return (
            f"Pattern(size={self.size}, n_edges={self.n_edges}, "
            f"directed={self.directed}, automorphisms={self.automorphisms})"
        )
