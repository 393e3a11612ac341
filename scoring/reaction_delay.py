"""
Reaction delay score.

Converts the time between a question appearing and the subject starting to
answer into a 0-10 penalty:
- <= 1s: 0 (immediate)
- <= 2s: 2
- <= 3s: 4
- <= 4s: 6
- <= 5s: 8
- slower: 10

The table is monotonic non-decreasing: a slower answer never scores lower.
"""

import logging
from typing import Dict, List, Optional, Tuple

from utils.config_loader import get_nested_config
from utils.validation import ensure_finite

logger = logging.getLogger(__name__)

DEFAULT_DELAY_BUCKETS: List[Tuple[float, float]] = [
    (1.0, 0.0),
    (2.0, 2.0),
    (3.0, 4.0),
    (4.0, 6.0),
    (5.0, 8.0),
]
DEFAULT_OVERFLOW_SCORE = 10.0


def compute_reaction_delay_score(
    reaction_delay: Optional[float],
    config: Optional[Dict] = None
) -> Optional[float]:
    """
    Bucket a reaction delay (seconds) into a 0-10 score.

    Args:
        reaction_delay: Seconds before answering (None if not measured)
        config: Configuration dict (reads scoring.reaction_delay.*)

    Returns:
        Score (0-10), or None for a missing or negative delay
    """
    delay = ensure_finite(reaction_delay, 'reaction_delay')
    if delay is None:
        return None
    if delay < 0:
        logger.debug(f"Negative reaction delay {delay:.2f}s treated as missing")
        return None

    buckets = get_nested_config(config, 'scoring.reaction_delay.buckets', default=DEFAULT_DELAY_BUCKETS)
    overflow_score = get_nested_config(
        config, 'scoring.reaction_delay.overflow_score', default=DEFAULT_OVERFLOW_SCORE
    )

    for max_seconds, score in buckets:
        if delay <= max_seconds:
            return float(score)

    return float(overflow_score)
