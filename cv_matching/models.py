from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .config import DEFAULT_LOG_LEVEL, DEFAULT_MIN_PERCENTAGE
from .exceptions import CandidateDataError

# Stored CV rows keep JSON payloads in *_data columns
ROW_COLUMN_ALIASES = {
    "skills_data": "skills",
    "experience_data": "experience",
}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(_as_text(v) for v in value)
    return str(value)


def _decode_json(value: Any) -> Any:
    if isinstance(value, (str, bytes)):
        if not value.strip():
            return None
        return json.loads(value)
    return value


class ExperienceEntry(BaseModel):
    position: str = ""
    company: str = ""
    description: str = ""

    @field_validator("position", "company", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v)


class CandidateRecord(BaseModel):
    """A parsed CV as stored by the backend.

    Only name, specialty, years, skills and experience take part in scoring;
    the remaining fields are carried through to ranked results.
    """

    id: Optional[Union[int, str]] = None
    filename: Optional[str] = None
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    summary: Optional[str] = None
    professional_specialty: str = ""
    total_years_experience: float = 0.0
    skills: Dict[str, List[str]] = Field(default_factory=dict)
    experience: List[ExperienceEntry] = Field(default_factory=list)

    @field_validator("name", "professional_specialty", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("total_years_experience", mode="before")
    @classmethod
    def coerce_years(cls, v: Any) -> float:
        # Decimal columns come back as strings; unparsable means no experience
        try:
            years = float(v)
        except (TypeError, ValueError):
            return 0.0
        except OverflowError:
            # Integers too large for a float; the bonus caps anyway
            years = math.inf
        if math.isnan(years) or years < 0:
            return 0.0
        return years

    @field_validator("skills", mode="before")
    @classmethod
    def coerce_skills(cls, v: Any) -> Dict[str, List[str]]:
        v = _decode_json(v)
        if v is None:
            return {}
        if isinstance(v, (list, tuple)):
            v = {"skills": v}
        if not isinstance(v, Mapping):
            raise ValueError("skills must be a mapping of category to skill list")
        skills: Dict[str, List[str]] = {}
        for category, values in v.items():
            if values is None:
                values = []
            elif not isinstance(values, (list, tuple)):
                values = [values]
            skills[str(category)] = [_as_text(s) for s in values if s is not None]
        return skills

    @field_validator("experience", mode="before")
    @classmethod
    def coerce_experience(cls, v: Any) -> Any:
        v = _decode_json(v)
        if v is None:
            return []
        if isinstance(v, Mapping):
            return [v]
        return v

    @classmethod
    def from_payload(cls, data: Any) -> "CandidateRecord":
        """Validate an API-shaped candidate or a stored CV row."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise CandidateDataError(
                f"Candidate must be a mapping, got {type(data).__name__}"
            )
        if any(column in data for column in ROW_COLUMN_ALIASES):
            return cls.from_row(data)
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            ident = data.get("id", data.get("name"))
            raise CandidateDataError(f"Invalid candidate {ident!r}: {e}") from e

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CandidateRecord":
        """Build a record from a cvs table row (JSON columns as text or decoded)."""
        data = dict(row)
        for column, field in ROW_COLUMN_ALIASES.items():
            if column in data:
                data[field] = data.pop(column)
        return cls.from_payload(data)


class MatchBreakdown(BaseModel):
    """Intermediate values behind a match percentage."""
    requirement_keywords: List[str] = Field(default_factory=list)
    important_keywords: List[str] = Field(default_factory=list)
    exact_matches: List[str] = Field(default_factory=list)
    partial_matches: List[str] = Field(default_factory=list)
    important_matches: List[str] = Field(default_factory=list)
    exact_ratio: float = 0.0
    partial_ratio: float = 0.0
    important_ratio: float = 0.0
    total_ratio: float = 0.0
    specialty_bonus: float = 0.0
    experience_bonus: float = 0.0
    tier: Optional[str] = None
    base_score: float = 0.0


class MatchResult(BaseModel):
    percentage: int = Field(ge=0, le=100)
    reasoning: str
    breakdown: Optional[MatchBreakdown] = None


class RankedMatch(BaseModel):
    rank: int
    id: Optional[Union[int, str]] = None
    name: str = ""
    professional_specialty: str = ""
    percentage: int = Field(ge=0, le=100)
    reasoning: str


class MatchCandidatesResponse(BaseModel):
    success: bool = True
    total_analyzed: int = 0
    matches: List[RankedMatch] = Field(default_factory=list)


class Settings(BaseModel):
    log_level: str = DEFAULT_LOG_LEVEL
    min_percentage: int = Field(default=DEFAULT_MIN_PERCENTAGE, ge=0, le=100)
    max_results: Optional[int] = Field(default=None, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level
