"""
Multimodal fusion module.

This package combines per-answer signals (face, voice, text, reaction delay)
into a single score using proportional weight renormalization:
- Missing modalities are excluded, not counted as zero
- Present weights keep their relative ratios and sum to 1
- One shared routine so every caller rounds and clips identically
"""

from .weighted_fusion import (
    FusionResult,
    renormalize_weights,
    weighted_average_present,
    fuse_scores
)

__all__ = [
    'FusionResult',
    'renormalize_weights',
    'weighted_average_present',
    'fuse_scores',
]
