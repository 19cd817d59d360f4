"""
Keyword extraction and set similarity used by the skills factor.

Both functions are deterministic and side-effect free.
"""

import re
from typing import Iterable, List, Optional

from .config import MAX_KEYWORDS, MIN_KEYWORD_LENGTH, stop_words

_TOKEN_SPLIT = re.compile(r"\W+", re.ASCII)
_STOP_WORDS = stop_words()


def extract_keywords(
    text: Optional[str],
    limit: int = MAX_KEYWORDS,
    ignore: Iterable[str] = _STOP_WORDS,
) -> List[str]:
    """
    Extract lowercase keywords from free text.

    Text is split on ASCII non-word characters, so accented letters act as
    separators ("comunicação" yields "comunica"). Tokens shorter than
    MIN_KEYWORD_LENGTH and stop words are dropped; the
    first ``limit`` remaining tokens are returned in source order
    (duplicates included).

    Args:
        text: Free text (job requirements, description, ...)
        limit: Maximum number of keywords to return
        ignore: Words to drop

    Returns:
        List of keywords, empty for empty or None input or a non-positive limit
    """
    if not text or limit <= 0:
        return []

    ignore = ignore if isinstance(ignore, (set, frozenset)) else set(ignore)
    keywords: List[str] = []
    for token in _TOKEN_SPLIT.split(text.lower()):
        if len(token) < MIN_KEYWORD_LENGTH or token in ignore:
            continue
        keywords.append(token)
        if len(keywords) >= limit:
            break
    return keywords


def jaccard_similarity(first: Iterable[str], second: Iterable[str]) -> float:
    """|A ∩ B| / |A ∪ B| over trimmed, lowercased elements; 0.0 if either side is empty."""
    a = {item.strip().lower() for item in first}
    b = {item.strip().lower() for item in second}
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)
