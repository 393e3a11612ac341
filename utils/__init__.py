"""Shared utilities for the behavioral inconsistency scoring engine."""

from .config_loader import load_config, load_default_config, get_nested_config
from .rounding import round_half_up
from .validation import require_text, require_unique, ensure_text_argument, ensure_finite

__all__ = [
    'load_config',
    'load_default_config',
    'get_nested_config',
    'round_half_up',
    'require_text',
    'require_unique',
    'ensure_text_argument',
    'ensure_finite',
]
