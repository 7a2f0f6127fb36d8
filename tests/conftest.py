"""
Test configuration and fixtures for pytest.

This file contains fixtures and configuration that will be available to all tests.
"""
import numpy as np
import pytest

from mcnet.core.graph import Graph
from mcnet.core.oracle import IsomorphismOracle
from mcnet.core.pattern import Pattern


@pytest.fixture
def oracle():
    return IsomorphismOracle()


# Motifs
@pytest.fixture
def triangle(oracle):
    """Undirected triangle (6 automorphisms)."""
    return Pattern.from_edges([(0, 1), (1, 2), (0, 2)], 3, oracle=oracle)


@pytest.fixture
def path3(oracle):
    """Undirected 3-node path (2 automorphisms)."""
    return Pattern.from_edges([(0, 1), (1, 2)], 3, oracle=oracle)


@pytest.fixture
def directed_chain(oracle):
    """Directed chain a -> b -> c (1 automorphism)."""
    return Pattern.from_edges([(0, 1), (1, 2)], 3, directed=True, oracle=oracle)


# Host graphs
@pytest.fixture
def bowtie():
    """Two triangles sharing node 2."""
    edges = [(0, 1), (1, 2), (0, 2), (2, 3), (3, 4), (2, 4)]
    return Graph(edges=edges, n_nodes=5)


@pytest.fixture
def diamond():
    """Two triangles sharing the edge 1-2."""
    edges = [(0, 1), (1, 2), (0, 2), (1, 3), (2, 3)]
    return Graph(edges=edges, n_nodes=4)


@pytest.fixture
def two_triangles():
    """Two disjoint triangles."""
    edges = [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5)]
    return Graph(edges=edges, n_nodes=6)


@pytest.fixture
def directed_path():
    """Directed path 0 -> 1 -> 2 -> 3."""
    return Graph(edges=[(0, 1), (1, 2), (2, 3)], n_nodes=4, directed=True)


@pytest.fixture
def rng():
    return np.random.default_rng(42)
