"""
Unit tests for keyword extraction and the deterministic scoring engine.
"""

import logging
import unittest

from cv_matching.config import NO_MATCH_REASONING
from cv_matching.keywords import (
    build_candidate_text,
    extract_keywords,
    important_keywords,
    is_important_keyword,
)
from cv_matching.models import CandidateRecord
from cv_matching.scoring_engine import (
    MatchRatios,
    calculate_experience_bonus,
    calculate_match_score,
    calculate_specialty_bonus,
    reasoning_for,
    round_half_up,
    select_tier,
)

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


# Sample data
SAMPLE_REQUIREMENTS = (
    "Looking for JavaScript developer with React experience and Node.js backend skills"
)

SAMPLE_CANDIDATE = {
    "id": 1,
    "name": "John Doe",
    "professional_specialty": "Software Development",
    "total_years_experience": 5,
    "skills": {
        "technical_skills": ["JavaScript", "React", "Node.js", "Python"],
        "programming_languages": ["JavaScript", "Python", "Java"],
        "frameworks_tools": ["React", "Express", "MongoDB"],
    },
    "experience": [
        {
            "position": "Senior Developer",
            "company": "Tech Corp",
            "description": "Developed web applications using React and Node.js",
        }
    ],
}

TRADES_REQUIREMENTS = (
    "Java plumbing carpentry welding masonry roofing painting tiling glazing drywall"
)


class TestKeywordExtraction(unittest.TestCase):
    """Test keyword normalization rules."""

    def test_sample_requirements_keywords(self):
        """Stopwords and short words are dropped, order is kept."""
        self.assertEqual(
            extract_keywords(SAMPLE_REQUIREMENTS),
            ["javascript", "developer", "react", "node.js", "backend", "skills"],
        )

    def test_tech_punctuation_is_kept(self):
        """+ # . - survive; other punctuation splits words."""
        self.assertEqual(
            extract_keywords("C++, C# and Node.js! front-end/back-end"),
            ["c++", "node.js", "front-end", "back-end"],
        )

    def test_duplicates_are_kept(self):
        """Repeated words count more than once."""
        self.assertEqual(extract_keywords("Python python PYTHON"), ["python"] * 3)

    def test_underscore_is_a_word_character(self):
        self.assertEqual(extract_keywords("snake_case naming"), ["snake_case", "naming"])

    def test_empty_and_stopword_only_text(self):
        """Empty or all-stopword text yields no keywords."""
        self.assertEqual(extract_keywords(""), [])
        self.assertEqual(extract_keywords("and the for with you must"), [])

    def test_important_keywords(self):
        """Long, purely alphabetic, or tech-punctuated words are important."""
        self.assertTrue(is_important_keyword("kubernetes"))
        self.assertTrue(is_important_keyword("sql"))
        self.assertTrue(is_important_keyword("c++"))
        self.assertTrue(is_important_keyword("node.js"))
        self.assertTrue(is_important_keyword("python3"))
        self.assertFalse(is_important_keyword("k8s"))
        self.assertFalse(is_important_keyword("web3"))
        self.assertEqual(important_keywords(["k8s", "aws", "s3a"]), ["aws"])

    def test_candidate_text_order(self):
        """Name, specialty, skills, then experience entries."""
        record = CandidateRecord.from_payload(SAMPLE_CANDIDATE)
        text = build_candidate_text(record)
        self.assertTrue(text.startswith("john doe software development javascript react"))
        self.assertTrue(text.endswith(
            "senior developer tech corp developed web applications using react and node.js"
        ))
        self.assertEqual(text, text.lower())


class TestScoringComponents(unittest.TestCase):
    """Test individual scoring components."""

    def test_round_half_up(self):
        """Halves round up, unlike Python's banker's rounding."""
        self.assertEqual(round_half_up(84.5), 85)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(84.49), 84)

    def test_experience_bonus(self):
        """Experience bonus is years / 50, capped at 0.1."""
        self.assertEqual(calculate_experience_bonus(0), 0.0)
        self.assertEqual(calculate_experience_bonus(2.5), 0.05)
        self.assertEqual(calculate_experience_bonus(5), 0.1)
        self.assertEqual(calculate_experience_bonus(20), 0.1)

    def test_specialty_bonus(self):
        """Specialty must be a non-empty case-insensitive substring."""
        self.assertEqual(
            calculate_specialty_bonus("Senior DATA SCIENCE lead", "Data Science"), 0.15
        )
        self.assertEqual(calculate_specialty_bonus("Backend engineer", "Data Science"), 0.0)
        self.assertEqual(calculate_specialty_bonus("Backend engineer", ""), 0.0)

    def test_tier_selection(self):
        """First tier whose predicate holds wins."""
        self.assertEqual(select_tier(MatchRatios(0.7, 0.0, 0.5, 0.7)).name, "excellent")
        self.assertEqual(select_tier(MatchRatios(0.7, 0.0, 0.4, 0.7)).name, "very_strong")
        self.assertEqual(select_tier(MatchRatios(0.1, 0.7, 0.3, 0.8)).name, "very_strong")
        self.assertEqual(select_tier(MatchRatios(0.1, 0.5, 0.2, 0.6)).name, "strong")
        self.assertEqual(select_tier(MatchRatios(0.3, 0.0, 0.0, 0.3)).name, "strong")
        self.assertEqual(select_tier(MatchRatios(0.1, 0.3, 0.0, 0.4)).name, "good")
        self.assertEqual(select_tier(MatchRatios(0.1, 0.1, 0.0, 0.2)).name, "basic")

    def test_reasoning_bands(self):
        """Percentages map to fixed bands."""
        self.assertEqual(
            reasoning_for(95), "Excellent match (95%) - Strong alignment with job requirements"
        )
        self.assertEqual(reasoning_for(94), "Very strong match (94%) - High relevance to position")
        self.assertEqual(reasoning_for(85), "Strong match (85%) - Good fit for the role")
        self.assertEqual(reasoning_for(80), "Good match (80%) - Relevant experience and skills")
        self.assertEqual(reasoning_for(75), "Fair match (75%) - Some relevant qualifications")
        self.assertEqual(reasoning_for(70), "Basic match (70%) - Limited but relevant experience")
        self.assertEqual(reasoning_for(69), NO_MATCH_REASONING)


class TestMatchScore(unittest.TestCase):
    """Test end-to-end percentage scoring."""

    def test_sample_candidate_match(self):
        """JavaScript/React/Node.js candidate scores a strong match without specialty bonus."""
        result = calculate_match_score(SAMPLE_REQUIREMENTS, SAMPLE_CANDIDATE, return_breakdown=True)
        breakdown = result.breakdown

        self.assertGreaterEqual(result.percentage, 85)
        self.assertEqual(result.percentage, 100)
        self.assertEqual(
            result.reasoning, "Excellent match (100%) - Strong alignment with job requirements"
        )
        self.assertEqual(
            breakdown.exact_matches, ["javascript", "developer", "react", "node.js"]
        )
        self.assertEqual(breakdown.partial_matches, [])
        self.assertEqual(breakdown.specialty_bonus, 0.0)
        self.assertEqual(breakdown.experience_bonus, 0.1)
        self.assertEqual(breakdown.tier, "very_strong")
        self.assertAlmostEqual(breakdown.exact_ratio, 4 / 6)
        self.assertAlmostEqual(breakdown.base_score, 85 + (4 / 6) * 23, places=6)

    def test_no_overlap_scores_zero(self):
        """Requirements with no shared vocabulary score 0."""
        result = calculate_match_score(
            "Certified plumber for residential pipelines", SAMPLE_CANDIDATE
        )
        self.assertEqual(result.percentage, 0)
        self.assertEqual(result.reasoning, NO_MATCH_REASONING)

    def test_specialty_bonus_adds_fifteen_points(self):
        """A specialty found in the requirements adds 15 points."""
        requirements = "Marketing Manager for brand campaigns budgets analytics reporting"
        with_specialty = {"professional_specialty": "Marketing Manager"}
        without_specialty = {"skills": {"titles": ["Marketing Manager"]}}

        bonus = calculate_match_score(requirements, with_specialty, return_breakdown=True)
        plain = calculate_match_score(requirements, without_specialty)

        self.assertEqual(bonus.breakdown.tier, "good")
        self.assertEqual(bonus.breakdown.specialty_bonus, 0.15)
        self.assertEqual(plain.percentage, 85)
        self.assertEqual(bonus.percentage, 100)

    def test_specialty_bonus_is_clamped(self):
        """Bonuses never push the percentage above 100."""
        candidate = dict(SAMPLE_CANDIDATE, professional_specialty="JavaScript developer")
        result = calculate_match_score(SAMPLE_REQUIREMENTS, candidate, return_breakdown=True)
        self.assertEqual(result.breakdown.specialty_bonus, 0.15)
        self.assertEqual(result.percentage, 100)

    def test_partial_match_gets_basic_floor(self):
        """A single substring match still counts as a basic match."""
        result = calculate_match_score(
            TRADES_REQUIREMENTS, {"skills": {"languages": ["JavaScript"]}}, return_breakdown=True
        )
        self.assertEqual(result.breakdown.exact_matches, [])
        self.assertEqual(result.breakdown.partial_matches, ["java"])
        self.assertEqual(result.breakdown.tier, "basic")
        self.assertEqual(result.percentage, 71)
        self.assertEqual(result.reasoning, "Basic match (71%) - Limited but relevant experience")

    def test_partial_match_is_bidirectional(self):
        """Requirement words containing a CV word also match partially."""
        result = calculate_match_score(
            "javascript", {"skills": {"languages": ["Java"]}}, return_breakdown=True
        )
        self.assertEqual(result.breakdown.partial_matches, ["javascript"])
        self.assertGreaterEqual(result.percentage, 70)

    def test_empty_requirements(self):
        """Empty or stopword-only requirements score 0 without errors."""
        for requirements in ("", "   ", "and the for with", None):
            result = calculate_match_score(requirements, SAMPLE_CANDIDATE)
            self.assertEqual(result.percentage, 0)
            self.assertEqual(result.reasoning, NO_MATCH_REASONING)

    def test_missing_candidate_fields(self):
        """Missing or null candidate fields default to empty values."""
        sparse = {
            "name": None,
            "professional_specialty": None,
            "total_years_experience": None,
            "skills": None,
            "experience": None,
        }
        self.assertEqual(calculate_match_score(SAMPLE_REQUIREMENTS, sparse).percentage, 0)
        self.assertEqual(calculate_match_score(SAMPLE_REQUIREMENTS, {}).percentage, 0)

    def test_percentage_bounds(self):
        """Percentage is 0 or within [70, 100] for a spread of inputs."""
        requirements_list = [
            SAMPLE_REQUIREMENTS,
            TRADES_REQUIREMENTS,
            "Python Java C++ C# Go Rust",
            "Senior React developer",
            "MongoDB Express React Node.js JavaScript Python Java developer web",
            "Quantum chemistry researcher",
        ]
        for requirements in requirements_list:
            result = calculate_match_score(requirements, SAMPLE_CANDIDATE)
            self.assertGreaterEqual(result.percentage, 0)
            self.assertLessEqual(result.percentage, 100)
            if result.percentage:
                self.assertGreaterEqual(result.percentage, 70)


class TestDeterminism(unittest.TestCase):
    """Test that scoring is deterministic."""

    def test_match_score_determinism(self):
        """Same inputs should produce same outputs."""
        result1 = calculate_match_score(SAMPLE_REQUIREMENTS, SAMPLE_CANDIDATE)
        result2 = calculate_match_score(SAMPLE_REQUIREMENTS, SAMPLE_CANDIDATE)
        self.assertEqual(result1, result2)


if __name__ == "__main__":
    unittest.main()
