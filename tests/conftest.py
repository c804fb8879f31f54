#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ChainSieve v0.1.0

Pytest configuration and shared fixtures.

Author: ChainSieve Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from chainsieve.assembly_core.data_structures import Chain, SeqGraph


@pytest.fixture
def linear_graph():
    """Single source-to-sink chain with multiplicity 100."""
    graph = SeqGraph()
    graph.add_path(["s", "a", "t"], multiplicity=100)
    chain = Chain.from_vertices(graph, ["s", "a", "t"])
    return graph, {"main": chain}


@pytest.fixture
def error_branch_graph():
    """
    Main path s -> j -> t (multiplicity 100) with a one-read tip j -> x.

        s --100--> j --100--> t
                   \\
                    --1--> x
    """
    graph = SeqGraph()
    graph.add_edge("s", "j", multiplicity=100)
    graph.add_edge("j", "t", multiplicity=100)
    graph.add_edge("j", "x", multiplicity=1)

    chains = {
        "head": Chain.from_vertices(graph, ["s", "j"]),
        "tail": Chain.from_vertices(graph, ["j", "t"]),
        "tip": Chain.from_vertices(graph, ["j", "x"]),
    }
    return graph, chains


@pytest.fixture
def variant_graph():
    """
    Reference backbone s -> j -> k -> t with two minority tips of the same
    allele fraction (60/660 at j, 30/330 at k) and a one-read noise tip at s.
    """
    graph = SeqGraph()
    graph.add_edge("s", "j", multiplicity=1000, is_ref=True)
    graph.add_edge("j", "k", multiplicity=600, is_ref=True)
    graph.add_edge("k", "t", multiplicity=300, is_ref=True)
    graph.add_edge("j", "x1", multiplicity=60)
    graph.add_edge("k", "x2", multiplicity=30)
    graph.add_edge("s", "n", multiplicity=1)

    chains = {
        "ref_head": Chain.from_vertices(graph, ["s", "j"]),
        "ref_mid": Chain.from_vertices(graph, ["j", "k"]),
        "ref_tail": Chain.from_vertices(graph, ["k", "t"]),
        "deep_variant": Chain.from_vertices(graph, ["j", "x1"]),
        "shallow_variant": Chain.from_vertices(graph, ["k", "x2"]),
        "noise": Chain.from_vertices(graph, ["s", "n"]),
    }
    return graph, chains
