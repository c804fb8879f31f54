"""
Utilities module for ChainSieve.

This module provides core utilities for the pruner:
- Log-likelihood ratio oracle for junction statistics
- Logging setup for embedding applications
"""

import logging
from typing import Any, Dict, Optional

from chainsieve.config.parser import ConfigValidationError
from chainsieve.config.schema import DEFAULT_CONFIG, VALID_LOG_LEVELS

from .likelihood import (
    LogOddsFunction,
    bernoulli_entropy,
    log_beta_entropy,
    log_likelihood_ratio,
)


def configure_logging(config: Optional[Dict[str, Any]] = None):
    """
    Apply the ``output.logging`` section of a configuration to the root logger.

    Library modules only create loggers; call this from the application that
    embeds ChainSieve.

    Args:
        config: Full configuration dictionary (defaults used if None)

    Raises:
        ConfigValidationError: If the logging level is not a known level name
    """
    defaults = DEFAULT_CONFIG['output']['logging']
    settings = (config or {}).get('output', {}).get('logging', {})

    level_name = str(settings.get('level', defaults['level'])).upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ConfigValidationError(f"Invalid logging level: {level_name}")

    log_level = getattr(logging, level_name)
    logging.basicConfig(
        level=log_level,
        format=settings.get('format', defaults['format']),
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(log_level)


__all__ = [
    "LogOddsFunction",
    "bernoulli_entropy",
    "log_beta_entropy",
    "log_likelihood_ratio",
    "configure_logging",
]
