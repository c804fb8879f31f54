#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ChainSieve v0.1.0

Log-likelihood ratio for "real signal" versus "sequencing error" at a graph
junction.

Given ``alt_count`` observations of a branch and ``ref_count`` observations of
its competitors at the same junction, returns the natural-log odds that the
branch is real (allele fraction drawn from a flat beta prior) rather than the
product of per-base errors at rate ``error_probability``. The variational form
avoids integrating over the allele fraction:

    f      = exp(digamma(ref + 1) - digamma(alt + 1))
    z      = (1 - e) / (1 - e + e * f)
    llr    = log B(ref + 1, alt + 1) + alt * (z * log((1 - e) / e) + H(z))

where H is the Bernoulli entropy in nats.

Author: ChainSieve Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
from typing import Callable

import numpy as np
from scipy.special import digamma, gammaln

logger = logging.getLogger(__name__)

# Signature shared by every log-odds oracle the pruner accepts
LogOddsFunction = Callable[[int, int, float], float]

# Error rates at or above this are treated as (almost) certain error
MAX_ERROR_PROBABILITY = 1.0 - 1e-12


def bernoulli_entropy(p: float) -> float:
    """Entropy of a Bernoulli(p) variable in nats; 0 at p = 0 and p = 1."""
    if p <= 0.0 or p >= 1.0:
        return 0.0
    return float(-(p * np.log(p) + (1.0 - p) * np.log1p(-p)))


def log_beta_entropy(ref_count: int, alt_count: int) -> float:
    """log( ref! * alt! / (ref + alt + 1)! ), the flat-prior normalizer."""
    return float(
        gammaln(ref_count + 1) + gammaln(alt_count + 1) - gammaln(ref_count + alt_count + 2)
    )


def log_likelihood_ratio(ref_count: int, alt_count: int, error_probability: float) -> float:
    """
    Log odds that ``alt_count`` observations are real rather than errors.

    Args:
        ref_count: Observations supporting competing branches
        alt_count: Observations supporting the branch under test
        error_probability: Per-base sequencing error rate

    Returns:
        Natural-log likelihood ratio (positive favours a real branch).
        ``+inf`` when the error rate is zero and the branch has support.

    Raises:
        ValueError: If either count is negative
    """
    if ref_count < 0 or alt_count < 0:
        raise ValueError(
            f"Counts must be non-negative, got ref={ref_count}, alt={alt_count}"
        )

    beta_entropy = log_beta_entropy(ref_count, alt_count)

    if error_probability <= 0.0:
        return math.inf if alt_count > 0 else beta_entropy

    epsilon = min(error_probability, MAX_ERROR_PROBABILITY)

    f_tilde_ratio = float(np.exp(digamma(ref_count + 1) - digamma(alt_count + 1)))
    z_bar_alt = (1.0 - epsilon) / (1.0 - epsilon + epsilon * f_tilde_ratio)
    log_epsilon = float(np.log(epsilon))
    log_one_minus_epsilon = float(np.log1p(-epsilon))

    read_sum = alt_count * (
        z_bar_alt * (log_one_minus_epsilon - log_epsilon) + bernoulli_entropy(z_bar_alt)
    )

    return beta_entropy + read_sum
