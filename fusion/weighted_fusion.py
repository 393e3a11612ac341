"""
Weighted fusion over partially missing signals.

Fusion strategy:
- Every modality has a base weight (face, voice, text, reaction delay)
- Absent modalities (None) are dropped, never treated as zero
- Weights of the present modalities are renormalized to sum to 1,
  preserving their relative ratios

Example:
    base weights face=.35, voice=.35, nlp=.20, reaction_delay=.10
    with only voice and nlp present → voice=.35/.55, nlp=.20/.55

Treating a missing modality as zero would bias the fused score towards
"calm"; dropping it and renormalizing keeps the score on the same scale
however many modalities were captured.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

import numpy as np

from utils.rounding import round_half_up
from utils.validation import ensure_finite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FusionResult:
    """
    Outcome of fusing the present signals.

    Attributes:
        value: Weighted average of present signals (None if none present)
        weights: Renormalized weight actually applied to each present signal
    """
    value: Optional[float]
    weights: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'weights', MappingProxyType(dict(self.weights)))

    @property
    def signal_count(self) -> int:
        return len(self.weights)


def renormalize_weights(
    base_weights: Mapping[str, float],
    present: Mapping[str, Optional[float]]
) -> Dict[str, float]:
    """
    Restrict base weights to present signals and rescale them to sum to 1.

    Args:
        base_weights: Weight per signal name
        present: Signal values by name (None = absent)

    Returns:
        Dict of signal name → normalized weight (empty if nothing present)

    Raises:
        ValueError: If a weight is negative or not finite, if a present
            signal has no weight, or if the present weights sum to zero
    """
    for name, weight in base_weights.items():
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(f"Invalid fusion weight for '{name}': {weight}")

    available = {}
    for name, value in present.items():
        if value is None:
            continue
        if name not in base_weights:
            raise ValueError(f"No fusion weight configured for signal '{name}'")
        available[name] = float(base_weights[name])

    if not available:
        return {}

    total = sum(available.values())
    if total <= 0:
        raise ValueError(f"Fusion weights of present signals sum to zero: {sorted(available)}")

    return {name: weight / total for name, weight in available.items()}


def weighted_average_present(
    values: Mapping[str, Optional[float]],
    base_weights: Mapping[str, float]
) -> FusionResult:
    """
    Weighted average over the signals that are present.

    Args:
        values: Signal values by name (None = absent)
        base_weights: Base weight per signal name

    Returns:
        FusionResult; value is None when no signal is present

    Raises:
        ValueError: On NaN/infinite values or invalid weights
    """
    checked = {name: ensure_finite(value, name) for name, value in values.items()}
    weights = renormalize_weights(base_weights, checked)

    if not weights:
        return FusionResult(value=None)

    fused = float(sum(checked[name] * weight for name, weight in weights.items()))

    logger.debug(
        f"Fused {len(weights)} signal(s): "
        + ", ".join(f"{name}={checked[name]:.2f}@{weight:.3f}" for name, weight in weights.items())
    )

    return FusionResult(value=fused, weights=weights)


def fuse_scores(
    values: Mapping[str, Optional[float]],
    base_weights: Mapping[str, float],
    input_scale: float = 10.0,
    output_scale: float = 100.0
) -> Optional[float]:
    """
    Fuse 0-input_scale signals into a 0-output_scale score.

    Each signal is rescaled before weighting, the result is clipped to the
    output range and rounded to 2 decimals. Returns None if no signal is
    present.
    """
    rescaled = {
        name: (None if value is None else ensure_finite(value, name) / input_scale * output_scale)
        for name, value in values.items()
    }
    result = weighted_average_present(rescaled, base_weights)

    if result.value is None:
        return None

    return round_half_up(float(np.clip(result.value, 0.0, output_scale)))
