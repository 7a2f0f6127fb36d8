"""
Tests for the edge-list graph container.
"""

import igraph as ig
import networkx as nx
import numpy as np
import pytest

from mcnet.core.graph import EdgeIndex, Graph


class TestGraphConstruction:
    """Test construction and validation."""

    def test_empty(self):
        G = Graph.empty(5, directed=True)
        assert G.n_nodes == 5
        assert G.n_edges == 0
        assert G.directed

    def test_edge_out_of_range(self):
        """Test that edges must reference existing nodes."""
        with pytest.raises(ValueError, match="outside"):
            Graph(edges=[(0, 3)], n_nodes=3)

    def test_negative_nodes(self):
        with pytest.raises(ValueError):
            Graph(n_nodes=-1)

    def test_labels_length(self):
        with pytest.raises(ValueError, match="labels"):
            Graph(edges=[], n_nodes=2, labels=["a"])

    def test_from_networkx_keeps_labels(self):
        """Test that node keys become labels in iteration order."""
        nxG = nx.Graph()
        nxG.add_edges_from([("a", "b"), ("b", "c")])
        G = Graph.from_networkx(nxG)

        assert G.n_nodes == 3
        assert G.labels == ["a", "b", "c"]
        assert G.edges == [(0, 1), (1, 2)]
        assert not G.directed

    def test_from_networkx_directed(self):
        G = Graph.from_networkx(nx.DiGraph([(1, 0)]))
        assert G.directed
        assert G.edges == [(0, 1)]

    def test_from_igraph_keeps_parallel_edges(self):
        """Test that igraph vertex order, ids and repeated edges carry over."""
        g = ig.Graph(n=3, edges=[(0, 1), (0, 1), (2, 1)], directed=True)
        g.vs["id"] = [10.0, 20.0, 30.0]
        G = Graph.from_igraph(g)

        assert G.directed
        assert G.edges == [(0, 1), (0, 1), (2, 1)]
        assert G.labels == [10, 20, 30]

    def test_from_igraph_without_ids(self):
        G = Graph.from_igraph(ig.Graph(n=2, edges=[(0, 1)]))
        assert G.labels is None
        assert not G.directed


class TestGraphOperations:
    """Test simplification, induced subgraphs and conversion."""

    def test_simplify_removes_loops_and_duplicates(self):
        G = Graph(edges=[(0, 1), (1, 0), (1, 1), (1, 2), (1, 2)], n_nodes=3)
        S = G.simplify()

        assert S.edges == [(0, 1), (1, 2)]
        assert G.n_edges == 5  # original untouched

    def test_simplify_directed_keeps_reciprocal_edges(self):
        G = Graph(edges=[(0, 1), (1, 0), (0, 1)], n_nodes=2, directed=True)
        assert G.simplify().edges == [(0, 1), (1, 0)]

    def test_add_edges_keeps_duplicates(self):
        G = Graph.empty(3)
        G.add_edges([(0, 1), (0, 1), (2, 2)])
        assert G.n_edges == 3
        with pytest.raises(ValueError):
            G.add_edges([(0, 5)])

    def test_copy_is_independent(self):
        G = Graph(edges=[(0, 1)], n_nodes=2)
        H = G.copy()
        H.add_edges([(1, 0)])
        assert G.n_edges == 1

    def test_induced_subgraph_renumbers(self):
        G = Graph(edges=[(0, 1), (1, 2), (2, 3), (0, 3)], n_nodes=4, labels=list("abcd"))
        H = G.induced_subgraph([3, 2, 1])

        assert H.n_nodes == 3
        assert H.edges == [(2, 1), (1, 0)]
        assert H.labels == ["d", "c", "b"]

    def test_degree_sequence(self, bowtie):
        degrees = bowtie.degree_sequence()
        np.testing.assert_array_equal(degrees, [2, 2, 4, 2, 2])

    def test_as_networkx(self, directed_path):
        nxG = directed_path.as_networkx()
        assert isinstance(nxG, nx.DiGraph)
        assert nxG.number_of_nodes() == 4
        assert nxG.number_of_edges() == 3

    def test_summary(self, bowtie):
        stats = bowtie.summary()
        assert stats['n_nodes'] == 5
        assert stats['n_edges'] == 6
        assert stats['avg_degree'] == pytest.approx(12 / 5)
        assert stats['density'] == pytest.approx(6 / 10)


class TestEdgeIndex:
    """Test edge lookup on the simplified host."""

    def test_undirected_lookup(self, bowtie):
        index = EdgeIndex(bowtie)
        assert index.has_edge(2, 0)
        assert index.has_edge(0, 2)
        assert not index.has_edge(0, 3)

    def test_directed_lookup(self, directed_path):
        index = EdgeIndex(directed_path)
        assert index.has_edge(0, 1)
        assert not index.has_edge(1, 0)

    def test_induced_edges(self, diamond):
        index = EdgeIndex(diamond)
        assert sorted(index.induced_edges([3, 1, 2])) == [(1, 2), (1, 3), (2, 3)]
        assert index.induced_edge_count([0, 3]) == 0

    def test_matches_induced_subgraph(self):
        """Test agreement with the edge count of the induced subgraph."""
        G = Graph(
            edges=[(0, 1), (1, 0), (1, 2), (2, 3), (3, 1), (1, 2), (4, 4)],
            n_nodes=5,
            directed=True,
        )
        index = EdgeIndex(G)
        simple = G.simplify()
        for nodes in ([0, 1, 2], [1, 2, 3], [4, 0, 1], [3, 2, 1, 0]):
            assert index.induced_edge_count(nodes) == simple.induced_subgraph(nodes).n_edges
