#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ChainSieve v0.1.0

Assembly graph data structures — the read-only graph capability surface used
by the chain pruner, and a small in-memory multigraph implementing it.

The pruner only ever talks to the protocols below, so any assembly graph that
exposes per-vertex edge enumeration, source/sink predicates and edge
multiplicities can be pruned without adapting its class hierarchy.

Author: ChainSieve Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Protocol, Sequence, Set, Tuple
from collections import defaultdict
import logging

logger = logging.getLogger(__name__)


# ============================================================================
# Part 1: Capability protocols
# ============================================================================

class EdgeLike(Protocol):
    """Edge capability: read support and reference membership."""
    multiplicity: int
    is_ref: bool


class GraphView(Protocol):
    """
    Read-only view of a directed assembly multigraph.

    Vertices are opaque hashable keys. Edges are objects exposing
    ``multiplicity`` and ``is_ref``.
    """

    def outgoing_edges(self, vertex: Hashable) -> Iterable[EdgeLike]:
        ...

    def incoming_edges(self, vertex: Hashable) -> Iterable[EdgeLike]:
        ...

    def is_source(self, vertex: Hashable) -> bool:
        ...

    def is_sink(self, vertex: Hashable) -> bool:
        ...

    def max_edge_multiplicity(self) -> int:
        ...

    def edge_source(self, edge: EdgeLike) -> Hashable:
        ...

    def edge_target(self, edge: EdgeLike) -> Hashable:
        ...


# ============================================================================
# Part 2: In-memory sequence graph
# ============================================================================

@dataclass(eq=False)
class GraphEdge:
    """
    Edge in the sequence graph.

    Edges compare by identity so that parallel edges between the same pair of
    vertices stay distinct.
    """
    source: Hashable
    target: Hashable
    multiplicity: int = 1  # Number of supporting reads / k-mer observations
    is_ref: bool = False  # Lies on the reference backbone

    def __post_init__(self):
        """Validate edge data."""
        if self.multiplicity < 0:
            raise ValueError(
                f"Edge {self.source!r}->{self.target!r}: multiplicity must be >= 0, "
                f"got {self.multiplicity}"
            )

    def __repr__(self) -> str:
        ref = ", ref" if self.is_ref else ""
        return f"GraphEdge({self.source!r}->{self.target!r}, m={self.multiplicity}{ref})"


@dataclass
class SeqGraph:
    """
    Directed multigraph of assembly vertices.

    Uses ordered adjacency lists so that edge enumeration is deterministic.
    """
    out_edges: Dict[Hashable, List[GraphEdge]] = field(default_factory=lambda: defaultdict(list))
    in_edges: Dict[Hashable, List[GraphEdge]] = field(default_factory=lambda: defaultdict(list))
    _vertices: Dict[Hashable, None] = field(default_factory=dict, repr=False)

    def add_vertex(self, vertex: Hashable) -> Hashable:
        """Add a vertex to the graph (no-op if already present)."""
        if vertex not in self._vertices:
            self._vertices[vertex] = None
            self.out_edges.setdefault(vertex, [])
            self.in_edges.setdefault(vertex, [])
        return vertex

    def add_edge(
        self,
        source: Hashable,
        target: Hashable,
        multiplicity: int = 1,
        is_ref: bool = False
    ) -> GraphEdge:
        """Add an edge, creating its endpoints if needed."""
        self.add_vertex(source)
        self.add_vertex(target)
        edge = GraphEdge(source, target, multiplicity=multiplicity, is_ref=is_ref)
        self.out_edges[source].append(edge)
        self.in_edges[target].append(edge)
        return edge

    def add_path(
        self,
        vertices: Sequence[Hashable],
        multiplicity: int = 1,
        is_ref: bool = False
    ) -> List[GraphEdge]:
        """Add consecutive edges along a vertex path, returning them in order."""
        return [
            self.add_edge(u, v, multiplicity=multiplicity, is_ref=is_ref)
            for u, v in zip(vertices, vertices[1:])
        ]

    @property
    def vertices(self) -> List[Hashable]:
        return list(self._vertices)

    @property
    def edges(self) -> List[GraphEdge]:
        return [e for v in self._vertices for e in self.out_edges[v]]

    def outgoing_edges(self, vertex: Hashable) -> List[GraphEdge]:
        return list(self.out_edges.get(vertex, []))

    def incoming_edges(self, vertex: Hashable) -> List[GraphEdge]:
        return list(self.in_edges.get(vertex, []))

    def out_degree(self, vertex: Hashable) -> int:
        """Number of outgoing edges."""
        return len(self.out_edges.get(vertex, []))

    def in_degree(self, vertex: Hashable) -> int:
        """Number of incoming edges."""
        return len(self.in_edges.get(vertex, []))

    def is_source(self, vertex: Hashable) -> bool:
        """True if the vertex has no incoming edges."""
        return self.in_degree(vertex) == 0

    def is_sink(self, vertex: Hashable) -> bool:
        """True if the vertex has no outgoing edges."""
        return self.out_degree(vertex) == 0

    def max_edge_multiplicity(self) -> int:
        """Largest edge multiplicity in the graph, 0 for an edgeless graph."""
        return max((e.multiplicity for e in self.edges), default=0)

    def edge_source(self, edge: GraphEdge) -> Hashable:
        return edge.source

    def edge_target(self, edge: GraphEdge) -> Hashable:
        return edge.target

    def __len__(self) -> int:
        return len(self._vertices)


# ============================================================================
# Part 3: Chains
# ============================================================================

class Chain:
    """
    Ordered, non-empty run of edges between two vertices of a graph.

    Chains hash by identity; two chains over the same edges are still distinct
    candidates. Multiplicities are always read through the edges, so later
    changes to the graph's edges are seen by the chain.
    """

    __slots__ = ("graph", "edges")

    def __init__(self, graph: GraphView, edges: Sequence[EdgeLike]):
        edges = tuple(edges)
        if not edges:
            raise ValueError("Chain must contain at least one edge")

        for prev, nxt in zip(edges, edges[1:]):
            if graph.edge_target(prev) != graph.edge_source(nxt):
                raise ValueError(
                    f"Chain edges are not contiguous: {prev!r} does not end where {nxt!r} starts"
                )

        self.graph = graph
        self.edges: Tuple[EdgeLike, ...] = edges

    @classmethod
    def from_vertices(cls, graph: SeqGraph, vertices: Sequence[Hashable]) -> "Chain":
        """
        Build a chain by following existing edges through ``vertices``.

        Where parallel edges exist, the first one added is used.
        """
        edges = []
        for u, v in zip(vertices, vertices[1:]):
            matches = [e for e in graph.outgoing_edges(u) if e.target == v]
            if not matches:
                raise ValueError(f"No edge {u!r}->{v!r} in graph")
            edges.append(matches[0])
        return cls(graph, edges)

    @property
    def first_edge(self) -> EdgeLike:
        return self.edges[0]

    @property
    def last_edge(self) -> EdgeLike:
        return self.edges[-1]

    @property
    def first_vertex(self) -> Hashable:
        return self.graph.edge_source(self.edges[0])

    @property
    def last_vertex(self) -> Hashable:
        return self.graph.edge_target(self.edges[-1])

    @property
    def multiplicities(self) -> List[int]:
        return [e.multiplicity for e in self.edges]

    @property
    def total_multiplicity(self) -> int:
        return sum(e.multiplicity for e in self.edges)

    @property
    def max_multiplicity(self) -> int:
        return max(e.multiplicity for e in self.edges)

    @property
    def has_ref_edge(self) -> bool:
        """True if any edge of the chain lies on the reference backbone."""
        return any(e.is_ref for e in self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self):
        return iter(self.edges)

    def __repr__(self) -> str:
        return (
            f"Chain({self.first_vertex!r}->{self.last_vertex!r}, "
            f"edges={len(self.edges)}, m={self.multiplicities})"
        )


def vertices_of(chains: Iterable[Chain]) -> Set[Hashable]:
    """Endpoints (first and last vertices) of a collection of chains."""
    terminals: Set[Hashable] = set()
    for chain in chains:
        terminals.add(chain.first_vertex)
        terminals.add(chain.last_vertex)
    return terminals
