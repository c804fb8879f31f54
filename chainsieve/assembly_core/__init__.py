"""
Assembly core module for ChainSieve.

Graph data structures consumed by the pruner:
- Capability protocols (GraphView, EdgeLike)
- In-memory sequence multigraph (SeqGraph, GraphEdge)
- Non-branching chains (Chain)
"""

from .data_structures import (
    EdgeLike,
    GraphView,
    GraphEdge,
    SeqGraph,
    Chain,
    vertices_of,
)

__all__ = [
    "EdgeLike",
    "GraphView",
    "GraphEdge",
    "SeqGraph",
    "Chain",
    "vertices_of",
]
