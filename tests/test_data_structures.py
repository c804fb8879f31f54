#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ChainSieve v0.1.0

Tests for graph and chain data structures.

Author: ChainSieve Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from chainsieve.assembly_core.data_structures import (
    Chain,
    GraphEdge,
    SeqGraph,
    vertices_of,
)


class TestSeqGraph:
    """Test the in-memory multigraph."""

    def test_empty_graph(self):
        """An empty graph has no vertices and zero max multiplicity."""
        graph = SeqGraph()
        assert len(graph) == 0
        assert graph.edges == []
        assert graph.max_edge_multiplicity() == 0

    def test_add_edge_creates_vertices(self):
        """Endpoints are added with the edge."""
        graph = SeqGraph()
        edge = graph.add_edge("a", "b", multiplicity=7, is_ref=True)

        assert graph.vertices == ["a", "b"]
        assert graph.outgoing_edges("a") == [edge]
        assert graph.incoming_edges("b") == [edge]
        assert edge.is_ref

    def test_sources_and_sinks(self, error_branch_graph):
        """Sources have no incoming edges, sinks no outgoing edges."""
        graph, _ = error_branch_graph
        assert graph.is_source("s")
        assert not graph.is_source("j")
        assert graph.is_sink("t")
        assert graph.is_sink("x")
        assert not graph.is_sink("j")

    def test_degrees(self, error_branch_graph):
        """Degrees count edges, not neighbours."""
        graph, _ = error_branch_graph
        assert graph.out_degree("j") == 2
        assert graph.in_degree("j") == 1
        assert graph.out_degree("unknown") == 0

    def test_parallel_edges_are_distinct(self):
        """Two edges between the same vertices are separate edges."""
        graph = SeqGraph()
        first = graph.add_edge("a", "b", multiplicity=3)
        second = graph.add_edge("a", "b", multiplicity=3)

        assert first != second
        assert len(graph.outgoing_edges("a")) == 2
        assert len({first, second}) == 2

    def test_max_edge_multiplicity(self, error_branch_graph):
        """Maximum over all edges."""
        graph, _ = error_branch_graph
        assert graph.max_edge_multiplicity() == 100

    def test_negative_multiplicity_rejected(self):
        """Multiplicities are read counts."""
        with pytest.raises(ValueError, match="multiplicity"):
            GraphEdge("a", "b", multiplicity=-1)

    def test_add_path(self):
        """Consecutive edges along a path."""
        graph = SeqGraph()
        edges = graph.add_path(["a", "b", "c"], multiplicity=4)
        assert [(e.source, e.target) for e in edges] == [("a", "b"), ("b", "c")]


class TestChain:
    """Test chain construction and accessors."""

    def test_accessors(self):
        """First/last edges and vertices follow edge order."""
        graph = SeqGraph()
        edges = graph.add_path(["a", "b", "c"], multiplicity=4)
        edges[1].multiplicity = 2
        chain = Chain(graph, edges)

        assert chain.first_edge is edges[0]
        assert chain.last_edge is edges[1]
        assert chain.first_vertex == "a"
        assert chain.last_vertex == "c"
        assert chain.multiplicities == [4, 2]
        assert chain.total_multiplicity == 6
        assert chain.max_multiplicity == 4
        assert len(chain) == 2
        assert not chain.has_ref_edge

    def test_multiplicities_read_through_edges(self):
        """A chain sees later changes to its edges."""
        graph = SeqGraph()
        edge = graph.add_edge("a", "b", multiplicity=1)
        chain = Chain(graph, [edge])
        edge.multiplicity = 9
        assert chain.total_multiplicity == 9

    def test_empty_chain_rejected(self):
        """Chains have at least one edge."""
        with pytest.raises(ValueError, match="at least one edge"):
            Chain(SeqGraph(), [])

    def test_non_contiguous_chain_rejected(self):
        """Consecutive edges must share a vertex."""
        graph = SeqGraph()
        first = graph.add_edge("a", "b")
        second = graph.add_edge("c", "d")
        with pytest.raises(ValueError, match="contiguous"):
            Chain(graph, [first, second])

    def test_from_vertices_missing_edge(self):
        """Building from a vertex path requires every edge to exist."""
        graph = SeqGraph()
        graph.add_edge("a", "b")
        with pytest.raises(ValueError, match="No edge"):
            Chain.from_vertices(graph, ["a", "b", "c"])

    def test_has_ref_edge(self):
        """Any reference edge marks the chain."""
        graph = SeqGraph()
        graph.add_edge("a", "b")
        graph.add_edge("b", "c", is_ref=True)
        assert Chain.from_vertices(graph, ["a", "b", "c"]).has_ref_edge

    def test_chains_hash_by_identity(self):
        """Two chains over the same edges are different candidates."""
        graph = SeqGraph()
        edge = graph.add_edge("a", "b")
        assert len({Chain(graph, [edge]), Chain(graph, [edge])}) == 2

    def test_vertices_of(self, error_branch_graph):
        """Terminal vertices of a set of chains."""
        _, chains = error_branch_graph
        assert vertices_of([chains["head"], chains["tip"]]) == {"s", "j", "x"}
