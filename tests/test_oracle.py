"""
Tests for the isomorphism oracle and motif patterns.
"""

import pytest

from mcnet.core.graph import Graph
from mcnet.core.oracle import ISOCLASS_COUNTS
from mcnet.core.pattern import Pattern
from mcnet.exceptions import InputError


class TestAutomorphisms:
    """Test automorphism counts of small motifs."""

    def test_triangle(self, triangle):
        assert triangle.automorphisms == 6

    def test_path(self, path3):
        assert path3.automorphisms == 2

    def test_directed_chain(self, directed_chain):
        assert directed_chain.automorphisms == 1

    def test_directed_cycle(self, oracle):
        cycle = Pattern.from_edges([(0, 1), (1, 2), (2, 0)], 3, directed=True, oracle=oracle)
        assert cycle.automorphisms == 3

    def test_pattern_requires_automorphism(self):
        with pytest.raises(ValueError):
            Pattern(graph=Graph.empty(3), automorphisms=0)


class TestIsoclass:
    """Test motif construction from igraph isomorphism classes."""

    def test_undirected_triangle_class(self, oracle, triangle):
        M = oracle.pattern_from_isoclass(3, 3, directed=False)
        assert M.n_edges == 3
        assert oracle.is_isomorphic(M.graph, triangle.graph)

    def test_undirected_path_class(self, oracle, path3):
        M = Pattern.from_isoclass(3, 2, oracle=oracle)
        assert oracle.is_isomorphic(M.graph, path3.graph)
        assert M.automorphisms == 2

    @pytest.mark.parametrize("size,directed", sorted(ISOCLASS_COUNTS))
    def test_last_class_in_range(self, oracle, size, directed):
        n_classes = ISOCLASS_COUNTS[(size, directed)]
        M = oracle.pattern_from_isoclass(size, n_classes - 1, directed)
        assert M.size == size
        assert M.directed == directed

    def test_class_out_of_range(self, oracle):
        with pytest.raises(InputError, match="out of range"):
            oracle.pattern_from_isoclass(3, 4, directed=False)

    def test_negative_class(self, oracle):
        with pytest.raises(InputError):
            oracle.pattern_from_isoclass(4, -1, directed=True)

    def test_unsupported_size(self, oracle):
        with pytest.raises(InputError, match="size"):
            oracle.pattern_from_isoclass(5, 0, directed=False)


class TestMatching:
    """Test subgraph enumeration and isomorphism tests."""

    def test_raw_mappings_include_symmetries(self, oracle, bowtie, triangle):
        mappings = oracle.enumerate_subisomorphisms(bowtie, triangle.graph)
        assert len(mappings) == 2 * triangle.automorphisms
        assert {frozenset(m) for m in mappings} == {frozenset({0, 1, 2}), frozenset({2, 3, 4})}

    def test_mapping_slots_follow_pattern(self, oracle, directed_path, directed_chain):
        mappings = oracle.enumerate_subisomorphisms(directed_path, directed_chain.graph)
        assert sorted(mappings) == [(0, 1, 2), (1, 2, 3)]

    def test_undirected_matches_are_induced(self, oracle, path3):
        """A path inside a triangle is not an induced match."""
        host = Graph(edges=[(0, 1), (1, 2), (0, 2)], n_nodes=3)
        assert oracle.enumerate_subisomorphisms(host, path3.graph) == []

    def test_directedness_mismatch(self, oracle, bowtie, directed_chain):
        with pytest.raises(InputError):
            oracle.enumerate_subisomorphisms(bowtie, directed_chain.graph)

    def test_small_host(self, oracle, triangle):
        assert oracle.enumerate_subisomorphisms(Graph.empty(2), triangle.graph) == []

    def test_is_isomorphic(self, oracle):
        a = Graph(edges=[(0, 1), (1, 2)], n_nodes=3)
        b = Graph(edges=[(2, 0), (0, 1), (0, 1)], n_nodes=3)
        c = Graph(edges=[(0, 1), (1, 2), (0, 2)], n_nodes=3)

        assert oracle.is_isomorphic(a, b)
        assert not oracle.is_isomorphic(a, c)
        assert not oracle.is_isomorphic(a, Graph(edges=[(0, 1), (1, 2)], n_nodes=3, directed=True))
