"""
Main Matcher Module

Orchestrates candidate matching:
1. Validate candidate records
2. Calculate deterministic match scores
3. Rank candidates by percentage (highest first)
"""

import logging
from typing import Any, Iterable, List, Optional, Tuple

from .config import MAX_PERCENTAGE, MIN_PERCENTAGE
from .exceptions import CandidateDataError, InvalidMatchOptionsError, InvalidRequirementsError
from .models import CandidateRecord, MatchCandidatesResponse, MatchResult, RankedMatch
from .scoring_engine import calculate_match_score
from .settings import get_settings

logger = logging.getLogger(__name__)


def match_candidate(
    requirements: str,
    candidate: Any,
    return_breakdown: bool = False
) -> MatchResult:
    """
    Calculate match percentage between job requirements and one candidate.

    Args:
        requirements: Free-text job requirements
        candidate: CandidateRecord, API-shaped dict or stored CV row
        return_breakdown: Whether to include keyword lists, ratios and bonuses

    Returns:
        MatchResult with percentage (0-100) and reasoning

    Raises:
        CandidateDataError: If the candidate payload cannot be parsed

    Example:
        >>> result = match_candidate("Python developer", {"skills": {"lang": ["Python"]}})
        >>> print(f"Match: {result.percentage}%")
    """
    record = CandidateRecord.from_payload(candidate)
    result = calculate_match_score(requirements, record, return_breakdown)
    logger.info(f"Candidate {record.name or record.id!r}: {result.reasoning}")
    return result


def match_candidates(
    requirements: str,
    candidates: Iterable[Any],
    min_percentage: Optional[int] = None,
    limit: Optional[int] = None
) -> MatchCandidatesResponse:
    """
    Match many candidates against one set of requirements.

    Candidates that cannot be parsed are logged and skipped. Results below
    min_percentage are dropped; the rest are ranked by percentage (highest
    first, ties in input order) and cut to limit.

    Args:
        requirements: Free-text job requirements
        candidates: CandidateRecords, API-shaped dicts or stored CV rows
        min_percentage: Minimum percentage to keep (defaults to settings)
        limit: Maximum number of matches to return (defaults to settings)

    Returns:
        MatchCandidatesResponse with total_analyzed and ranked matches

    Raises:
        InvalidRequirementsError: If requirements are blank
        InvalidMatchOptionsError: If limit < 1 or min_percentage is outside 0-100
    """
    if not requirements or not requirements.strip():
        raise InvalidRequirementsError("Job requirements are required")

    settings = get_settings()
    if min_percentage is None:
        min_percentage = settings.min_percentage
    if limit is None:
        limit = settings.max_results
    if not MIN_PERCENTAGE <= min_percentage <= MAX_PERCENTAGE:
        raise InvalidMatchOptionsError(
            f"min_percentage must be between {MIN_PERCENTAGE} and {MAX_PERCENTAGE}, got {min_percentage}"
        )
    if limit is not None and limit < 1:
        raise InvalidMatchOptionsError(f"limit must be at least 1, got {limit}")

    scored: List[Tuple[CandidateRecord, MatchResult]] = []
    skipped = 0
    for i, candidate in enumerate(candidates, 1):
        try:
            record = CandidateRecord.from_payload(candidate)
        except CandidateDataError as e:
            logger.warning(f"Skipping candidate {i}: {e}")
            skipped += 1
            continue
        scored.append((record, calculate_match_score(requirements, record)))

    logger.info(f"Analyzed {len(scored)} candidates ({skipped} skipped)")

    ranked = sorted(
        (item for item in scored if item[1].percentage >= min_percentage),
        key=lambda item: item[1].percentage,
        reverse=True,
    )
    if limit is not None:
        ranked = ranked[:limit]

    matches = [
        RankedMatch(
            rank=rank,
            id=record.id,
            name=record.name,
            professional_specialty=record.professional_specialty,
            percentage=result.percentage,
            reasoning=result.reasoning,
        )
        for rank, (record, result) in enumerate(ranked, 1)
    ]

    if matches:
        top = matches[0]
        label = top.name or f"id={top.id}"
        logger.info(f"Top match: {label} ({top.percentage}%)")
    else:
        logger.info("No candidates matched")

    return MatchCandidatesResponse(total_analyzed=len(scored), matches=matches)
