"""
Keyword extraction shared by requirements and candidate text.

Keyword lists keep their original order and duplicates; ratios are computed
over list lengths, so a repeated requirement word weighs more.
"""

import re
from typing import List

from .config import (
    IMPORTANT_MARKERS,
    IMPORTANT_MIN_LENGTH,
    KEYWORD_STRIP_PATTERN,
    MIN_KEYWORD_LENGTH,
    STOPWORDS,
)
from .models import CandidateRecord

_STRIP_RE = re.compile(KEYWORD_STRIP_PATTERN)
_ALPHA_RE = re.compile(r"[a-z]+", re.IGNORECASE)


def extract_keywords(text: str) -> List[str]:
    """
    Split free text into normalized keywords.

    Lower-cases, replaces punctuation other than ``+ # . -`` with spaces,
    splits on whitespace and drops short words and stopwords.

    Args:
        text: Any free text (requirements or flattened CV)

    Returns:
        Keywords in order of appearance
    """
    if not text:
        return []
    words = _STRIP_RE.sub(" ", text.lower()).split()
    return [
        w for w in words
        if len(w) >= MIN_KEYWORD_LENGTH and w not in STOPWORDS
    ]


def is_important_keyword(word: str) -> bool:
    """Long words, purely alphabetic words and tech tokens like c++, c#, node.js."""
    return (
        len(word) >= IMPORTANT_MIN_LENGTH
        or _ALPHA_RE.fullmatch(word) is not None
        or any(marker in word for marker in IMPORTANT_MARKERS)
    )


def important_keywords(keywords: List[str]) -> List[str]:
    return [w for w in keywords if is_important_keyword(w)]


def build_candidate_text(candidate: CandidateRecord) -> str:
    """
    Flatten the scored parts of a candidate into one lower-cased string.

    Order: name, specialty, every skill value (categories in insertion order),
    then ``position company description`` for each experience entry.
    """
    skills_text = " ".join(
        skill for values in candidate.skills.values() for skill in values
    )
    experience_text = " ".join(
        f"{exp.position} {exp.company} {exp.description}"
        for exp in candidate.experience
    )
    return " ".join([
        candidate.name,
        candidate.professional_specialty,
        skills_text,
        experience_text,
    ]).lower()
