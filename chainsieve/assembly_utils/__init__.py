"""
Assembly Utilities module for ChainSieve.

This module provides graph cleanup for assembly tasks:
- Adaptive chain pruning (error-rate estimation, good-chain classification,
  variant cap)
"""

from .chain_pruner import (
    AdaptiveChainPruner,
    ChainPrunerConfig,
    ChainLogOdds,
    PruningReport,
    chain_log_odds,
    estimate_error_rate,
    is_chain_possible_variant,
)

__all__ = [
    "AdaptiveChainPruner",
    "ChainPrunerConfig",
    "ChainLogOdds",
    "PruningReport",
    "chain_log_odds",
    "estimate_error_rate",
    "is_chain_possible_variant",
]
