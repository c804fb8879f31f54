#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ChainSieve v0.1.0

Package initialization and version metadata.

Author: ChainSieve Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .version import __version__
from .assembly_core import Chain, GraphEdge, SeqGraph
from .assembly_utils import AdaptiveChainPruner, ChainPrunerConfig, PruningReport

__all__ = [
    "__version__",
    "Chain",
    "GraphEdge",
    "SeqGraph",
    "AdaptiveChainPruner",
    "ChainPrunerConfig",
    "PruningReport",
]

# ChainSieve v0.1.0
# Any usage is subject to this software's license.
