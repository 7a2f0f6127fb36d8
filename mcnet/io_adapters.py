"""
File adapters for mcnet.

Graphs are read from GML with python-igraph, which accepts parallel edges
without a ``multigraph`` flag, and written back through NetworkX. Both sides
convert through the internal :class:`~mcnet.core.graph.Graph`. Result files
are small plain text tables.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Union

import igraph as ig
import networkx as nx

from .core.graph import Graph
from .exceptions import InputError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_graph(path: PathLike) -> Graph:
    """
    Read a GML graph.

    Nodes are renumbered in file order and their GML ``id`` values are kept
    as ``Graph.labels``. Directedness is taken from the file. Parallel edges
    and self-loops are kept as read; matching works on the simplified graph.

    Raises
    ------
    InputError
        If the file is missing or is not valid GML
    """
    path = Path(path)
    if not path.exists():
        raise InputError(f"Graph file not found: {path}")
    try:
        g = ig.Graph.Read_GML(str(path))
    except (ig.InternalError, OSError, UnicodeDecodeError) as e:
        raise InputError(f"Could not read graph from {path}: {e}") from e

    graph = Graph.from_igraph(g, label="id")
    stats = graph.summary()
    logger.info(
        f"Read {graph!r} from {path}: "
        f"avg degree {stats['avg_degree']:.3f}, density {stats['density']:.4f}"
    )
    return graph


def write_graph(graph: Graph, path: PathLike) -> None:
    """Write ``graph`` as GML with integer node ids ``0 .. n - 1``."""
    nx.write_gml(graph.as_networkx(), str(path))


def write_samples(samples: Iterable[float], path: PathLike) -> None:
    """Write one ``%.8f`` value per line."""
    with open(path, 'w') as f:
        for value in samples:
            f.write(f"{value:.8f}\n")


def write_stats(graph: Graph, mcc: float, z_score: float, path: PathLike) -> None:
    """Write the ``Nodes, Edges, MCC, Z-Score`` summary table."""
    with open(path, 'w') as f:
        f.write("Nodes, Edges, MCC, Z-Score\n")
        f.write(f"{graph.n_nodes}, {graph.n_edges}, {mcc:.8f}, {z_score:.8f}")


def write_node_maps(
    node_maps: Sequence[Sequence[int]],
    path: PathLike,
    labels: Optional[Sequence[Any]] = None,
) -> None:
    """
    Write one comma-separated line of host nodes per clustering type.

    When ``labels`` is given, node indices are replaced by their labels.
    """
    with open(path, 'w') as f:
        for nodes in node_maps:
            if labels is not None:
                nodes = [labels[n] for n in nodes]
            f.write(",".join(str(n) for n in nodes) + "\n")


def write_node_map(node_map: Sequence[Any], path: PathLike) -> None:
    """Write ``new,original`` pairs for an extracted subgraph."""
    with open(path, 'w') as f:
        for i, original in enumerate(node_map):
            f.write(f"{i},{original}\n")