"""
Deterministic Scoring Engine

Keyword-overlap heuristic scoring a candidate against free-text requirements.
All scoring functions are deterministic - same inputs produce same outputs.
"""

import logging
import math
from typing import Any, Callable, List, NamedTuple, Tuple, Union

from .config import (
    EXPERIENCE_BONUS_CAP,
    EXPERIENCE_BONUS_YEARS_DIVISOR,
    MATCH_FLOOR,
    MAX_PERCENTAGE,
    MIN_PERCENTAGE,
    NO_MATCH_REASONING,
    REASONING_BANDS,
    SPECIALTY_BONUS,
    TIER_THRESHOLDS,
)
from .keywords import build_candidate_text, extract_keywords, important_keywords
from .models import CandidateRecord, MatchBreakdown, MatchResult

logger = logging.getLogger(__name__)


class MatchRatios(NamedTuple):
    exact: float
    partial: float
    important: float
    total: float


class ScoreTier(NamedTuple):
    name: str
    applies: Callable[[MatchRatios], bool]
    base_score: Callable[[MatchRatios], float]


_T = TIER_THRESHOLDS

# Evaluated in order, first tier that applies wins
SCORE_TIERS: Tuple[ScoreTier, ...] = (
    ScoreTier(
        "excellent",
        lambda r: r.exact >= _T["excellent"]["exact"]
        and r.important >= _T["excellent"]["important"],
        lambda r: 90 + r.exact * 10 + r.important * 5,
    ),
    ScoreTier(
        "very_strong",
        lambda r: r.exact >= _T["very_strong"]["exact"]
        or (r.total >= _T["very_strong"]["total"]
            and r.important >= _T["very_strong"]["important"]),
        lambda r: 85 + r.exact * 10 + r.total * 8 + r.important * 5,
    ),
    ScoreTier(
        "strong",
        lambda r: r.exact >= _T["strong"]["exact"]
        or (r.total >= _T["strong"]["total"]
            and r.important >= _T["strong"]["important"]),
        lambda r: 80 + r.exact * 12 + r.total * 8 + r.important * 8,
    ),
    ScoreTier(
        "good",
        lambda r: r.exact >= _T["good"]["exact"] or r.total >= _T["good"]["total"],
        lambda r: 75 + r.exact * 15 + r.total * 10 + r.important * 10,
    ),
    ScoreTier(
        "basic",
        lambda r: True,
        lambda r: 70 + r.total * 10 + r.exact * 20,
    ),
)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def find_exact_matches(req_words: List[str], cv_words: List[str]) -> List[str]:
    cv_set = set(cv_words)
    return [w for w in req_words if w in cv_set]


def find_partial_matches(
    req_words: List[str],
    cv_words: List[str],
    exact_matches: List[str]
) -> List[str]:
    """Requirement keywords that contain, or are contained in, some CV keyword."""
    exact_set = set(exact_matches)
    cv_unique = list(dict.fromkeys(cv_words))
    return [
        w for w in req_words
        if w not in exact_set
        and any(cv_word in w or w in cv_word for cv_word in cv_unique)
    ]


def calculate_specialty_bonus(requirements: str, specialty: str) -> float:
    if specialty and specialty.lower() in requirements.lower():
        return SPECIALTY_BONUS
    return 0.0


def calculate_experience_bonus(years: float) -> float:
    """
    Formula: min(0.1, years / 50) for positive years, else 0.
    """
    if years > 0:
        return min(EXPERIENCE_BONUS_CAP, years / EXPERIENCE_BONUS_YEARS_DIVISOR)
    return 0.0


def select_tier(ratios: MatchRatios) -> ScoreTier:
    for tier in SCORE_TIERS:
        if tier.applies(ratios):
            return tier
    # The last tier always applies
    return SCORE_TIERS[-1]


def reasoning_for(percentage: int) -> str:
    """
    Map a final percentage to its human-readable band.

    Below the lowest band only happens for the zero-match result.
    """
    for minimum, label, detail in REASONING_BANDS:
        if percentage >= minimum:
            return f"{label} ({percentage}%) - {detail}"
    return NO_MATCH_REASONING


def calculate_match_score(
    requirements: str,
    candidate: Union[CandidateRecord, Any],
    return_breakdown: bool = False
) -> MatchResult:
    """
    Score how well a candidate fits free-text job requirements (0-100).

    Formula:
    - Keywords of the requirements are matched exactly, then by substring,
      against keywords of the flattened CV text
    - Exact, partial, important and total match ratios select a tier and
      its base score
    - Specialty bonus (+15) and experience bonus (up to +10) are added
    - Result is rounded, capped at 100 and floored at 70 when anything matched

    Args:
        requirements: Free-text job requirements
        candidate: CandidateRecord, or a mapping accepted by CandidateRecord.from_payload
        return_breakdown: Whether to attach the intermediate values

    Returns:
        MatchResult with percentage and reasoning
    """
    candidate = CandidateRecord.from_payload(candidate)
    requirements = requirements or ""

    req_words = extract_keywords(requirements)
    important_words = important_keywords(req_words)
    cv_words = extract_keywords(build_candidate_text(candidate))

    exact_matches = find_exact_matches(req_words, cv_words)
    partial_matches = find_partial_matches(req_words, cv_words, exact_matches)
    exact_set = set(exact_matches)
    important_matches = [w for w in important_words if w in exact_set]

    logger.debug(f"Requirement keywords: {req_words}")
    logger.debug(f"Exact: {exact_matches} | Partial: {partial_matches} | "
                 f"Important: {important_matches}")

    breakdown = MatchBreakdown(
        requirement_keywords=req_words,
        important_keywords=important_words,
        exact_matches=exact_matches,
        partial_matches=partial_matches,
        important_matches=important_matches,
    )

    total_matches = len(exact_matches) + len(partial_matches)
    if total_matches == 0:
        # Also covers empty requirements, so the ratios below never divide by zero
        logger.debug(f"No keyword overlap for candidate {candidate.name!r}")
        return MatchResult(
            percentage=MIN_PERCENTAGE,
            reasoning=NO_MATCH_REASONING,
            breakdown=breakdown if return_breakdown else None,
        )

    req_count = len(req_words)
    ratios = MatchRatios(
        exact=len(exact_matches) / req_count,
        partial=len(partial_matches) / req_count,
        important=len(important_matches) / max(len(important_words), 1),
        total=total_matches / req_count,
    )

    specialty_bonus = calculate_specialty_bonus(
        requirements, candidate.professional_specialty
    )
    experience_bonus = calculate_experience_bonus(candidate.total_years_experience)

    tier = select_tier(ratios)
    base_score = tier.base_score(ratios)

    percentage = min(
        MAX_PERCENTAGE,
        round_half_up(base_score + specialty_bonus * 100 + experience_bonus * 100),
    )
    if percentage < MATCH_FLOOR:
        percentage = MATCH_FLOOR

    logger.debug(
        f"Ratios exact={ratios.exact:.3f} total={ratios.total:.3f} "
        f"important={ratios.important:.3f} -> tier {tier.name}, base {base_score:.2f}, "
        f"bonuses specialty={specialty_bonus:.2f} experience={experience_bonus:.2f}"
    )
    logger.debug(f"Match score for {candidate.name or 'unnamed candidate'}: {percentage}%")

    result = MatchResult(percentage=percentage, reasoning=reasoning_for(percentage))
    if return_breakdown:
        breakdown.exact_ratio = ratios.exact
        breakdown.partial_ratio = ratios.partial
        breakdown.important_ratio = ratios.important
        breakdown.total_ratio = ratios.total
        breakdown.specialty_bonus = specialty_bonus
        breakdown.experience_bonus = experience_bonus
        breakdown.tier = tier.name
        breakdown.base_score = base_score
        result.breakdown = breakdown
    return result

