"""
Keyword-overlap CV Matching

Scores how well a parsed CV fits free-text job requirements:
1. Keyword extraction from requirements and CV text
2. Deterministic tiered percentage scoring with specialty/experience bonuses

Usage:
    from cv_matching import match_candidate

    result = match_candidate(requirements, candidate)
    print(f"Match: {result.percentage}% - {result.reasoning}")
"""

from .exceptions import (
    CandidateDataError,
    InvalidMatchOptionsError,
    InvalidRequirementsError,
    MatchingError,
)
from .matcher import match_candidate, match_candidates
from .models import CandidateRecord, MatchCandidatesResponse, MatchResult
from .scoring_engine import calculate_match_score

__all__ = [
    "match_candidate",
    "match_candidates",
    "calculate_match_score",
    "CandidateRecord",
    "MatchResult",
    "MatchCandidatesResponse",
    "MatchingError",
    "CandidateDataError",
    "InvalidRequirementsError",
    "InvalidMatchOptionsError",
]
__version__ = "1.0.0"
