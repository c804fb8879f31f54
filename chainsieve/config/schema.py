"""
ChainSieve v0.1.0

Configuration schema for ChainSieve.

Defines all available configuration parameters with defaults and validation.

Author: ChainSieve Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Adaptive chain pruning
    # ========================================================================
    'pruning': {
        'initial_error_probability': 0.001,  # Prior per-base error rate (bootstrap round)
        'log_odds_threshold': 1.0,  # Minimum junction log odds to keep a chain
        'max_unpruned_variants': 100,  # Minority-branch chains kept per region
        'variant_rank_key': 'left',  # 'left' or 'min'
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        },
    },
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
VALID_RANK_KEYS = ['left', 'min']


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                user_config = yaml.safe_load(f)

            # Deep merge user config into defaults
            if user_config:
                config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'sensitive', 'strict')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'sensitive':
        # Keep more low-frequency branches (e.g. somatic calling)
        config['pruning']['log_odds_threshold'] = 0.0
        config['pruning']['max_unpruned_variants'] = 1000

    elif template == 'strict':
        config['pruning']['log_odds_threshold'] = 2.3
        config['pruning']['max_unpruned_variants'] = 20

    elif template != 'default':
        raise ValueError(f"Unknown config template: {template}")

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    pruning = config.get('pruning', {})

    # Validate error probability
    p = pruning.get('initial_error_probability')
    if not isinstance(p, (int, float)) or isinstance(p, bool) or not p > 0:
        errors.append(f"pruning.initial_error_probability must be a number > 0, got {p!r}")
    elif p >= 1:
        errors.append(f"pruning.initial_error_probability must be < 1, got {p}")

    threshold = pruning.get('log_odds_threshold')
    if not isinstance(threshold, (int, float)) or isinstance(threshold, bool):
        errors.append(f"pruning.log_odds_threshold must be a number, got {threshold!r}")

    max_variants = pruning.get('max_unpruned_variants')
    if not isinstance(max_variants, int) or isinstance(max_variants, bool) or max_variants < 0:
        errors.append(f"pruning.max_unpruned_variants must be an integer >= 0, got {max_variants!r}")

    rank_key = pruning.get('variant_rank_key', 'left')
    if rank_key not in VALID_RANK_KEYS:
        errors.append(f"Invalid pruning.variant_rank_key: {rank_key}")

    # Validate logging
    level = config.get('output', {}).get('logging', {}).get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors
