"""
Lightweight graph container used throughout mcnet.

Primary storage is a plain edge list so that random graphs can be grown
cheaply (duplicate edges and self-loops are allowed while a graph is being
built). ``simplify`` produces the clean form used for every structural
comparison, and NetworkX conversion happens only when a matcher needs it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

import igraph as ig
import networkx as nx
import numpy as np
from numpy.typing import NDArray

Edge = Tuple[int, int]


@dataclass
class Graph:
    """
    Edge-list graph on nodes ``0 .. n_nodes - 1``.

    Attributes
    ----------
    edges : list of (int, int)
        Edge multiset. For undirected graphs the orientation of a pair is
        irrelevant.
    n_nodes : int
        Number of nodes
    directed : bool
        Whether graph is directed
    labels : list, optional
        Original identifier of each node (e.g. the GML ``id``), index-aligned
        with the node numbering

    Examples
    --------
    >>> G = Graph(edges=[(0, 1), (1, 2), (1, 2)], n_nodes=3, directed=True)
    >>> G.n_edges
    3
    >>> G.simplify().n_edges
    2
    """

    edges: List[Edge] = field(default_factory=list)
    n_nodes: int = 0
    directed: bool = False
    labels: Optional[List[Any]] = None

    def __post_init__(self):
        if self.n_nodes < 0:
            raise ValueError(f"n_nodes must be >= 0, got {self.n_nodes}")
        self.edges = [(int(u), int(v)) for u, v in self.edges]
        for u, v in self.edges:
            if not (0 <= u < self.n_nodes and 0 <= v < self.n_nodes):
                raise ValueError(
                    f"Edge ({u}, {v}) references a node outside 0..{self.n_nodes - 1}"
                )
        if self.labels is not None and len(self.labels) != self.n_nodes:
            raise ValueError(
                f"labels has {len(self.labels)} entries for {self.n_nodes} nodes"
            )

    @classmethod
    def empty(cls, n_nodes: int, directed: bool = False) -> Graph:
        """Graph with ``n_nodes`` nodes and no edges."""
        return cls(edges=[], n_nodes=n_nodes, directed=directed)

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> Graph:
        """
        Build from a NetworkX graph, renumbering nodes in iteration order.

        Parallel edges of multigraphs are kept; the original node keys are
        stored in ``labels``.
        """
        nodes = list(G.nodes())
        index = {node: i for i, node in enumerate(nodes)}
        edges = [(index[u], index[v]) for u, v in G.edges()]
        return cls(edges=edges, n_nodes=len(nodes), directed=G.is_directed(), labels=nodes)

    @classmethod
    def from_igraph(cls, g: ig.Graph, label: str = "id") -> Graph:
        """
        Build from a python-igraph graph, keeping vertex order and parallel edges.

        The vertex attribute ``label`` (the GML ``id`` by default) becomes
        ``labels``; integral float values are stored as ints.
        """
        labels = None
        if label in g.vs.attributes():
            labels = [
                int(v) if isinstance(v, float) and v.is_integer() else v
                for v in g.vs[label]
            ]
        return cls(
            edges=g.get_edgelist(), n_nodes=g.vcount(), directed=g.is_directed(), labels=labels
        )

    @property
    def n_edges(self) -> int:
        """Number of edges (counting duplicates)."""
        return len(self.edges)

    def copy(self) -> Graph:
        labels = None if self.labels is None else list(self.labels)
        return Graph(edges=list(self.edges), n_nodes=self.n_nodes, directed=self.directed, labels=labels)

    def add_edges(self, edges: Iterable[Edge]) -> None:
        """Append edges in place; duplicates and self-loops are not filtered."""
        for u, v in edges:
            u, v = int(u), int(v)
            if not (0 <= u < self.n_nodes and 0 <= v < self.n_nodes):
                raise ValueError(f"Edge ({u}, {v}) references a node outside the graph")
            self.edges.append((u, v))

    def _key(self, u: int, v: int) -> Edge:
        if self.directed or u <= v:
            return (u, v)
        return (v, u)

    def simplify(self) -> Graph:
        """
        Copy without self-loops or duplicate edges.

        Edge order follows first occurrence.
        """
        seen = set()
        edges = []
        for u, v in self.edges:
            if u == v:
                continue
            key = self._key(u, v)
            if key in seen:
                continue
            seen.add(key)
            edges.append(key)
        labels = None if self.labels is None else list(self.labels)
        return Graph(edges=edges, n_nodes=self.n_nodes, directed=self.directed, labels=labels)

    def induced_subgraph(self, nodes: Sequence[int]) -> Graph:
        """
        Subgraph induced by ``nodes``.

        Node ``nodes[i]`` becomes node ``i`` of the result; repeated entries
        are ignored after their first occurrence.
        """
        order = list(dict.fromkeys(int(n) for n in nodes))
        index = {n: i for i, n in enumerate(order)}
        edges = [(index[u], index[v]) for u, v in self.edges if u in index and v in index]
        labels = None
        if self.labels is not None:
            labels = [self.labels[n] for n in order]
        return Graph(edges=edges, n_nodes=len(order), directed=self.directed, labels=labels)

    def degree_sequence(self) -> NDArray[np.int64]:
        """Total degree of each node (in + out for directed graphs)."""
        degrees = np.zeros(self.n_nodes, dtype=np.int64)
        for u, v in self.edges:
            degrees[u] += 1
            degrees[v] += 1
        return degrees

    def as_networkx(self) -> nx.Graph:
        """
        Convert to a simple NetworkX graph on integer nodes.

        Duplicate edges collapse; self-loops are kept.
        """
        G = nx.DiGraph() if self.directed else nx.Graph()
        G.add_nodes_from(range(self.n_nodes))
        G.add_edges_from(self.edges)
        return G

    def summary(self) -> dict:
        """
        Graph summary statistics.

        Returns
        -------
        stats : dict
            Dictionary with n_nodes, n_edges, avg_degree, density
        """
        simple = self.simplify()
        max_edges = self.n_nodes * (self.n_nodes - 1)
        if not self.directed:
            max_edges //= 2
        avg_degree = float(np.mean(self.degree_sequence())) if self.n_nodes else 0.0
        return {
            'n_nodes': self.n_nodes,
            'n_edges': self.n_edges,
            'avg_degree': avg_degree,
            'density': simple.n_edges / max_edges if max_edges > 0 else 0.0,
        }

    def __repr__(self) -> str:
        return f"Graph(n_nodes={self.n_nodes}, n_edges={self.n_edges}, directed={self.directed})"


class EdgeIndex:
    """
    Constant-time edge lookup on the simplified form of a graph.

    Built once per host so that per-instance edge tests only touch the
    instance's own vertices.
    """

    def __init__(self, G: Graph):
        self.directed = G.directed
        self.edges = set(G.simplify().edges)

    def has_edge(self, u: int, v: int) -> bool:
        if self.directed or u <= v:
            return (u, v) in self.edges
        return (v, u) in self.edges

    def induced_edges(self, nodes: Sequence[int]) -> Iterator[Edge]:
        """Edges of the subgraph induced by ``nodes``, in host numbering."""
        for u in nodes:
            for v in nodes:
                if u == v:
                    continue
                if not self.directed and u > v:
                    continue
                if self.has_edge(u, v):
                    yield u, v

    def induced_edge_count(self, nodes: Sequence[int]) -> int:
        return sum(1 for _ in self.induced_edges(nodes))
