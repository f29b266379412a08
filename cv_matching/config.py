"""
Configuration for the keyword-overlap candidate matching system.
Adjust thresholds and bonuses here.
"""

from types import MappingProxyType

# Keyword extraction
MIN_KEYWORD_LENGTH = 3  # Tokens shorter than this are dropped

# Everything except ASCII word chars, whitespace and + # . - becomes a space
KEYWORD_STRIP_PATTERN = r"[^A-Za-z0-9_\s+#.-]"

STOPWORDS = frozenset({
    "and", "the", "for", "with", "are", "you", "can", "will", "have",
    "must", "should", "years", "experience", "work", "job", "role",
    "position", "candidate", "looking", "seeking",
})

# Important keywords: long words, plain alphabetic words, or tech punctuation
IMPORTANT_MIN_LENGTH = 5
IMPORTANT_MARKERS = (".", "#", "+")

# Bonuses (fractions of 100 points)
SPECIALTY_BONUS = 0.15
EXPERIENCE_BONUS_CAP = 0.10
EXPERIENCE_BONUS_YEARS_DIVISOR = 50

# Score bounds
MIN_PERCENTAGE = 0
MAX_PERCENTAGE = 100
MATCH_FLOOR = 70  # Any visible match is at least a basic match

# Tier thresholds, evaluated top to bottom
TIER_THRESHOLDS = MappingProxyType({
    "excellent": MappingProxyType({"exact": 0.7, "important": 0.5}),
    "very_strong": MappingProxyType({"exact": 0.5, "total": 0.8, "important": 0.3}),
    "strong": MappingProxyType({"exact": 0.3, "total": 0.6, "important": 0.2}),
    "good": MappingProxyType({"exact": 0.2, "total": 0.4}),
})

NO_MATCH_REASONING = "No significant match found"

# Reasoning bands: (minimum percentage, label, detail)
REASONING_BANDS = (
    (95, "Excellent match", "Strong alignment with job requirements"),
    (90, "Very strong match", "High relevance to position"),
    (85, "Strong match", "Good fit for the role"),
    (80, "Good match", "Relevant experience and skills"),
    (75, "Fair match", "Some relevant qualifications"),
    (70, "Basic match", "Limited but relevant experience"),
)

# Runtime settings defaults (overridable through the environment)
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MIN_PERCENTAGE = 0
