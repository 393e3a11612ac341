"""
Word lists used by the heuristic text analyzers.

The lists are configuration data: they can be replaced per deployment (other
languages, tuned phrase sets) through the `text_analysis.lexicons` section of
the YAML config without touching the scoring code. Entries are normalized
with the same routine as the answers so that matching is case-insensitive.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Tuple

from utils.config_loader import get_nested_config

from .normalization import normalize_text

logger = logging.getLogger(__name__)


def _normalize_entries(entries: Iterable[str]) -> Tuple[str, ...]:
    normalized = (normalize_text(str(entry)) for entry in entries)
    return tuple(entry for entry in normalized if entry)


@dataclass(frozen=True)
class Lexicons:
    """
    Immutable set of phrase lists.

    Attributes:
        uncertainty: Hedging phrases ("not sure", "maybe")
        evasion: Phrases declining to answer
        positive: Positive sentiment word stems
        negative: Negative sentiment word stems
    """
    uncertainty: Tuple[str, ...]
    evasion: Tuple[str, ...]
    positive: Tuple[str, ...]
    negative: Tuple[str, ...]

    def __post_init__(self):
        for name in ('uncertainty', 'evasion', 'positive', 'negative'):
            object.__setattr__(self, name, _normalize_entries(getattr(self, name)))

    @classmethod
    def from_config(cls, config: Optional[Dict], base: Optional['Lexicons'] = None) -> 'Lexicons':
        """
        Build lexicons from config, falling back to base for missing lists.

        Args:
            config: Configuration dict (reads text_analysis.lexicons.*)
            base: Lexicons used for lists the config does not define

        Returns:
            Lexicons instance
        """
        base = base or DEFAULT_LEXICONS
        section = get_nested_config(config, 'text_analysis.lexicons', default={}) or {}

        overrides = {
            name: tuple(section[name])
            for name in ('uncertainty', 'evasion', 'positive', 'negative')
            if section.get(name) is not None
        }
        if overrides:
            logger.debug(f"Lexicon overrides from config: {sorted(overrides)}")

        return replace(base, **overrides)


DEFAULT_LEXICONS = Lexicons(
    uncertainty=(
        'bilmem',
        'bilmiyorum',
        'hatırlamıyorum',
        'galiba',
        'sanırım',
        'emin değilim',
        'belki',
    ),
    evasion=(
        'konuşmak istemiyorum',
        'bunu cevaplamak istemiyorum',
        'boşver',
        'sonra konuşalım',
    ),
    positive=(
        'mutlu',
        'keyifli',
        'huzurlu',
        'sevinçli',
        'harika',
        'güzel',
        'iyiyim',
        'seviyorum',
        'rahatladım',
    ),
    negative=(
        'mutsuz',
        'üzgün',
        'kötü',
        'sinirli',
        'kızgın',
        'gergin',
        'endişeli',
        'korkuyorum',
        'huzursuz',
        'kırgın',
        'rahatsız',
        'nefret',
    ),
)
