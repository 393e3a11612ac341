"""Text normalization shared by the answer analyzers."""

import re
import unicodedata
from typing import Iterable, List

_NON_WORD = re.compile(r'[\W_]+', re.UNICODE)

# Python's default lowercasing turns dotted capital I into "i" plus a
# combining dot, which the non-word filter would then split into two tokens.
_TURKISH_UPPER = str.maketrans({'İ': 'i'})


def normalize_text(text: str) -> str:
    """
    Lowercase and keep only letters, digits and single spaces.

    Accented and Turkish letters (ç, ğ, ı, ö, ş, ü, ...) are letters and are
    kept; punctuation, symbols and underscores become spaces. Input is
    composed to NFC first so "u" + U+0308 matches a typed "ü".
    """
    composed = unicodedata.normalize('NFC', text)
    lowered = composed.translate(_TURKISH_UPPER).lower()
    return ' '.join(_NON_WORD.sub(' ', lowered).split())


def tokenize(normalized: str) -> List[str]:
    """Split an already normalized string on whitespace."""
    return normalized.split()


def count_phrase_hits(normalized: str, phrases: Iterable[str]) -> int:
    """
    Count lexicon phrases that occur as a substring of the normalized text.

    Each phrase counts at most once, however often it is repeated.
    """
    return sum(1 for phrase in phrases if phrase and phrase in normalized)


def contains_any(normalized: str, phrases: Iterable[str]) -> bool:
    return any(phrase and phrase in normalized for phrase in phrases)
