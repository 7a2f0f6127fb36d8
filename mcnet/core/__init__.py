"""
Core data structures: graphs, motif patterns and the isomorphism oracle.
"""

from .graph import EdgeIndex, Graph
from .pattern import Pattern
from .oracle import IsomorphismOracle, ISOCLASS_COUNTS
from .timing import timed

__all__ = [
    "EdgeIndex",
    "Graph",
    "Pattern",
    "IsomorphismOracle",
    "ISOCLASS_COUNTS",
    "timed",
]
