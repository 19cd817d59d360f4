"""
Scoring configuration for candidate-job compatibility.

Weights, thresholds and the keyword tables live here so they can be
tested and extended without touching the scoring logic.
"""

# Factor weights (sum to 100; each sub-score is capped at its weight)
WEIGHTS = {
    "skills": 40,
    "area": 25,
    "experience": 20,
    "location": 10,
    "education": 5,
}

# Fixed evaluation order, also the order reasons are emitted in
FACTOR_ORDER = ["skills", "area", "experience", "location", "education"]

# Area tiers
AREA_RELATED_SCORE = 20

# Experience: points per registered experience, capped at WEIGHTS["experience"]
EXPERIENCE_POINTS_PER_ENTRY = 5
EXPERIENCE_REASON_MIN_COUNT = 3

# Location: same state as the company when the cities differ
LOCATION_SAME_STATE_SCORE = 7

# Skills reason is emitted only above this similarity
SKILLS_REASON_THRESHOLD = 0.30

# Compatibility level cut-offs on the final integer score
LEVEL_THRESHOLDS = {
    "High": 70,
    "Medium": 40,
}

MAX_REASONS = 3

# Keyword extraction
MIN_KEYWORD_LENGTH = 3
MAX_KEYWORDS = 20

STOP_WORDS = {
    "pt": [
        "o", "a", "de", "do", "da", "em", "um", "uma", "com", "para",
        "por", "se", "no", "na", "que", "não", "é", "e", "ou", "as",
        "os", "dos", "das", "ao", "à", "ser", "ter", "estar", "como",
        "mais", "muito", "bem", "já", "também",
    ],
    "en": [
        "the", "and", "or", "of", "to", "in", "for", "with", "on", "at",
        "by", "from",
    ],
}

DEFAULT_STOP_WORD_LANGUAGES = ("pt", "en")


def stop_words(languages=DEFAULT_STOP_WORD_LANGUAGES) -> frozenset:
    """Union of the stop-word lists for the given languages."""
    words = set()
    for lang in languages:
        words.update(STOP_WORDS.get(lang, []))
    return frozenset(words)
