#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ChainSieve v0.1.0

Adaptive chain pruning — decides which low-support chains of an assembly
graph are sequencing/PCR noise so they can be excised before variant calling.

The procedure runs the good-chain classifier twice:
  1. Bootstrap round: classify with the prior error probability, then
     estimate a per-base error rate from the chains it calls errors.
  2. Refinement round: classify again with the estimated rate and cap the
     number of retained minority-branch (variant) chains.
Chains that carry a reference edge are never returned for removal.

Author: ChainSieve Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Mapping, Sequence, Set, Union
import logging

from chainsieve.assembly_core.data_structures import Chain, GraphView, vertices_of
from chainsieve.config.parser import ConfigParser
from chainsieve.utils.likelihood import LogOddsFunction, log_likelihood_ratio

logger = logging.getLogger(__name__)

# Chains with any edge heavier than max_edge_multiplicity // DEFINITE_GOOD_FRACTION
# are seeded as good without looking at junction statistics
DEFINITE_GOOD_FRACTION = 10

VARIANT_RANK_KEYS = ("left", "min")


# ============================================================================
# Data structures
# ============================================================================

@dataclass
class ChainPrunerConfig:
    """Construction-time parameters of the adaptive chain pruner."""
    initial_error_probability: float = 0.001  # Prior per-base error rate for the bootstrap round
    log_odds_threshold: float = 1.0  # Minimum junction log odds to call a chain real
    max_unpruned_variants: int = 100  # Minority-branch chains retained per invocation
    variant_rank_key: str = "left"  # "left" or "min" (see AdaptiveChainPruner)

    def __post_init__(self):
        """Validate configuration."""
        if not self.initial_error_probability > 0:
            raise ValueError(
                f"initial_error_probability must be > 0, got {self.initial_error_probability}"
            )
        if self.max_unpruned_variants < 0:
            raise ValueError(
                f"max_unpruned_variants must be >= 0, got {self.max_unpruned_variants}"
            )
        if self.variant_rank_key not in VARIANT_RANK_KEYS:
            raise ValueError(
                f"variant_rank_key must be one of {VARIANT_RANK_KEYS}, got {self.variant_rank_key!r}"
            )

    @classmethod
    def from_dict(cls, section: Mapping[str, Any]) -> "ChainPrunerConfig":
        """Build from a ``pruning`` config section, ignoring unknown keys."""
        known = {k: section[k] for k in cls.__dataclass_fields__ if k in section}
        return cls(**known)


@dataclass(frozen=True)
class ChainLogOdds:
    """Junction log odds at both ends of a chain."""
    left: float
    right: float


@dataclass
class ClassificationRound:
    """Working sets of one classifier round; discarded after the call."""
    threshold_edge_weight: int
    definite_good: Set[Chain]
    error_chains: Dict[Chain, None]  # insertion-ordered set
    log_odds: Dict[Chain, ChainLogOdds]
    rescued: List[Chain] = field(default_factory=list)
    capped_variants: List[Chain] = field(default_factory=list)
    passes: int = 0


@dataclass
class PruningReport:
    """
    Result of one pruning invocation.

    Attributes:
        chains_to_remove: Chains to excise, in input order
        estimated_error_rate: Error rate estimated from the bootstrap round
        bootstrap_error_chains: Number of chains called errors in the bootstrap round
        definite_good_chains: Number of chains seeded good by edge weight
        threshold_edge_weight: Edge weight a chain must exceed to be seeded good
        rescued_chains: Chains reclassified good by junction log odds and kept
            after the variant cap (refinement round)
        capped_variants: Chains added to the error set by the variant cap
        protected_ref_chains: Error chains kept because they carry a reference edge
        propagation_passes: Propagation passes in the refinement round
    """
    chains_to_remove: List[Chain] = field(default_factory=list)
    estimated_error_rate: float = 0.0
    bootstrap_error_chains: int = 0
    definite_good_chains: int = 0
    threshold_edge_weight: int = 0
    rescued_chains: List[Chain] = field(default_factory=list)
    capped_variants: List[Chain] = field(default_factory=list)
    protected_ref_chains: List[Chain] = field(default_factory=list)
    propagation_passes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialise summary counts to a JSON-friendly dictionary."""
        return {
            "chains_to_remove": len(self.chains_to_remove),
            "estimated_error_rate": self.estimated_error_rate,
            "bootstrap_error_chains": self.bootstrap_error_chains,
            "definite_good_chains": self.definite_good_chains,
            "threshold_edge_weight": self.threshold_edge_weight,
            "rescued_chains": len(self.rescued_chains),
            "capped_variants": len(self.capped_variants),
            "protected_ref_chains": len(self.protected_ref_chains),
            "propagation_passes": self.propagation_passes,
        }


# ============================================================================
# Junction statistics
# ============================================================================

def _junction_totals(chain: Chain, graph: GraphView):
    left_total = sum(e.multiplicity for e in graph.outgoing_edges(chain.first_vertex))
    right_total = sum(e.multiplicity for e in graph.incoming_edges(chain.last_vertex))
    return left_total, right_total


def chain_log_odds(
    chain: Chain,
    graph: GraphView,
    error_rate: float,
    llr: LogOddsFunction = log_likelihood_ratio
) -> ChainLogOdds:
    """
    Left and right junction log odds of a chain.

    The left side compares the chain's first edge against all other edges
    leaving its first vertex; the right side compares its last edge against
    all other edges entering its last vertex. A side that touches a graph
    source or sink has no competitors and scores 0.
    """
    left_total, right_total = _junction_totals(chain, graph)
    left_multiplicity = chain.first_edge.multiplicity
    right_multiplicity = chain.last_edge.multiplicity

    left = 0.0 if graph.is_source(chain.first_vertex) else \
        llr(left_total - left_multiplicity, left_multiplicity, error_rate)
    right = 0.0 if graph.is_sink(chain.last_vertex) else \
        llr(right_total - right_multiplicity, right_multiplicity, error_rate)

    return ChainLogOdds(left=left, right=right)


def is_chain_possible_variant(chain: Chain, graph: GraphView) -> bool:
    """True if the chain is a minority branch on at least one of its junctions."""
    left_total, right_total = _junction_totals(chain, graph)
    return (chain.first_edge.multiplicity <= left_total // 2
            or chain.last_edge.multiplicity <= right_total // 2)


def estimate_error_rate(chains: Sequence[Chain], error_chains) -> float:
    """
    Per-base error rate implied by a set of error chains.

    Only the last edge of each error chain counts as an error observation,
    while every edge of every candidate chain counts toward the total. A chain
    of several low-weight edges is one error event, not one per edge.

    Returns 0.0 when the chains carry no bases.
    """
    error_count = sum(c.last_edge.multiplicity for c in error_chains)
    total_bases = sum(c.total_multiplicity for c in chains)
    if total_bases == 0:
        return 0.0
    return error_count / total_bases


# ============================================================================
# Pruner
# ============================================================================

class AdaptiveChainPruner:
    """
    Prune noise chains using an adaptively estimated error rate.

    The pruner holds only its configuration; every call builds fresh working
    sets, so one instance may be shared across independent regions.

    Variant ranking: the capped variant chains are ordered by a confidence
    key. With ``variant_rank_key="left"`` the key is the chain's left log odds
    (``min(left, left)``), reproducing the established behaviour. With
    ``"min"`` it is ``min(left, right)``, the weaker of the two junctions.
    """

    def __init__(
        self,
        initial_error_probability: float,
        log_odds_threshold: float,
        max_unpruned_variants: int,
        llr: LogOddsFunction = log_likelihood_ratio,
        variant_rank_key: str = "left"
    ):
        """
        Initialize the pruner.

        Args:
            initial_error_probability: Prior per-base error rate (> 0)
            log_odds_threshold: Minimum junction log odds to call a chain real
            max_unpruned_variants: Maximum retained minority-branch chains (>= 0)
            llr: Log odds oracle ``llr(other_count, self_count, error_rate)``
            variant_rank_key: "left" or "min"

        Raises:
            ValueError: If a parameter is out of range
        """
        self.config = ChainPrunerConfig(
            initial_error_probability=initial_error_probability,
            log_odds_threshold=log_odds_threshold,
            max_unpruned_variants=max_unpruned_variants,
            variant_rank_key=variant_rank_key,
        )
        self.llr = llr
        self.logger = logging.getLogger(f"{__name__}.AdaptiveChainPruner")

    @classmethod
    def from_config(
        cls,
        config: Union[ChainPrunerConfig, ConfigParser, Mapping[str, Any]],
        llr: LogOddsFunction = log_likelihood_ratio
    ) -> "AdaptiveChainPruner":
        """
        Build a pruner from a ChainPrunerConfig, a ConfigParser, or a config
        dictionary with a ``pruning`` section.
        """
        if isinstance(config, ConfigParser):
            config = ChainPrunerConfig.from_dict(config.get_pruning_config())
        elif not isinstance(config, ChainPrunerConfig):
            config = ChainPrunerConfig.from_dict(config.get('pruning', {}))

        return cls(
            config.initial_error_probability,
            config.log_odds_threshold,
            config.max_unpruned_variants,
            llr=llr,
            variant_rank_key=config.variant_rank_key,
        )

    @property
    def initial_error_probability(self) -> float:
        return self.config.initial_error_probability

    @property
    def log_odds_threshold(self) -> float:
        return self.config.log_odds_threshold

    @property
    def max_unpruned_variants(self) -> int:
        return self.config.max_unpruned_variants

    def chains_to_remove(self, chains: Sequence[Chain]) -> List[Chain]:
        """
        Chains that should be excised from their graph.

        Args:
            chains: Candidate non-branching chains, all from the same graph

        Returns:
            Chains to remove in input order; never one containing a reference edge
        """
        return self.prune(chains).chains_to_remove

    def prune(self, chains: Sequence[Chain]) -> PruningReport:
        """
        Run both classification rounds and report the chains to remove.

        Args:
            chains: Candidate non-branching chains, all from the same graph

        Returns:
            PruningReport with the removal list and round diagnostics
        """
        if not chains:
            return PruningReport()

        ordered = list(dict.fromkeys(chains))
        graph = ordered[0].graph

        bootstrap = self._classify(ordered, graph, self.initial_error_probability)
        error_rate = estimate_error_rate(ordered, bootstrap.error_chains)

        refinement = self._classify(ordered, graph, error_rate)
        self._cap_variants(ordered, graph, refinement)

        to_remove = []
        protected = []
        for chain in ordered:
            if chain not in refinement.error_chains:
                continue
            if chain.has_ref_edge:
                protected.append(chain)
            else:
                to_remove.append(chain)

        report = PruningReport(
            chains_to_remove=to_remove,
            estimated_error_rate=error_rate,
            bootstrap_error_chains=len(bootstrap.error_chains),
            definite_good_chains=len(refinement.definite_good),
            threshold_edge_weight=refinement.threshold_edge_weight,
            rescued_chains=refinement.rescued,
            capped_variants=refinement.capped_variants,
            protected_ref_chains=protected,
            propagation_passes=refinement.passes,
        )

        self.logger.info(
            f"Chain pruning: {len(ordered)} chains, estimated error rate "
            f"{error_rate:.3g}, {len(to_remove)} to remove "
            f"({len(protected)} reference chains kept)"
        )

        return report

    def _classify(
        self,
        chains: List[Chain],
        graph: GraphView,
        error_rate: float
    ) -> ClassificationRound:
        """
        Good-chain classification for one error rate.

        Seeds definitely good chains by edge weight, then grows the set of good
        terminal vertices through junctions whose log odds clear the threshold.
        The frontier is updated in place during a pass, so a vertex added by one
        chain already counts for chains visited later in the same pass; chains
        leave the error set only at the end of the pass.
        """
        threshold_edge_weight = graph.max_edge_multiplicity() // DEFINITE_GOOD_FRACTION

        definite_good = {c for c in chains if c.max_multiplicity > threshold_edge_weight}
        good_terminals: Set[Hashable] = vertices_of(c for c in chains if c in definite_good)

        error_chains = {c: None for c in chains if c not in definite_good}
        log_odds = {
            c: chain_log_odds(c, graph, error_rate, self.llr) for c in error_chains
        }

        round_ = ClassificationRound(
            threshold_edge_weight=threshold_edge_weight,
            definite_good=definite_good,
            error_chains=error_chains,
            log_odds=log_odds,
        )

        threshold = self.log_odds_threshold
        while True:
            round_.passes += 1
            more_good = []

            for chain in error_chains:
                odds = log_odds[chain]
                if chain.first_vertex in good_terminals and odds.left > threshold:
                    more_good.append(chain)
                    good_terminals.add(chain.last_vertex)
                elif chain.last_vertex in good_terminals and odds.right > threshold:
                    more_good.append(chain)
                    good_terminals.add(chain.first_vertex)

            if not more_good:
                break

            for chain in more_good:
                del error_chains[chain]
            round_.rescued.extend(more_good)

        self.logger.debug(
            f"Round at error rate {error_rate:.3g}: threshold edge weight "
            f"{threshold_edge_weight}, {len(definite_good)} seeded good, "
            f"{len(round_.rescued)} rescued in {round_.passes} passes, "
            f"{len(error_chains)} errors"
        )

        return round_

    def _variant_rank(self, odds: ChainLogOdds) -> float:
        if self.config.variant_rank_key == "min":
            return min(odds.left, odds.right)
        return min(odds.left, odds.left)

    def _cap_variants(
        self,
        chains: List[Chain],
        graph: GraphView,
        round_: ClassificationRound
    ):
        """Move all but the top-ranked possible-variant chains into the error set."""
        candidates = [
            c for c in chains
            if c not in round_.error_chains
            and c not in round_.definite_good
            and is_chain_possible_variant(c, graph)
        ]

        # stable: ties keep input order
        ranked = sorted(
            candidates,
            key=lambda c: self._variant_rank(round_.log_odds[c]),
            reverse=True,
        )

        for chain in ranked[self.max_unpruned_variants:]:
            round_.error_chains[chain] = None
            round_.capped_variants.append(chain)

        if round_.capped_variants:
            capped = set(round_.capped_variants)
            round_.rescued = [c for c in round_.rescued if c not in capped]
            self.logger.debug(
                f"Variant cap: {len(candidates)} possible variants, "
                f"{len(round_.capped_variants)} over the limit of {self.max_unpruned_variants}"
            )

    def __repr__(self) -> str:
        return (
            f"AdaptiveChainPruner(initial_error_probability={self.initial_error_probability}, "
            f"log_odds_threshold={self.log_odds_threshold}, "
            f"max_unpruned_variants={self.max_unpruned_variants})"
        )
