from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List


@dataclass(frozen=True)
class ComponentScore:
    score: int
    reason: str


@dataclass(frozen=True)
class ScoreBreakdown:
    skills_score: int
    skills_matched: List[str]
    skills_missing: List[str]
    must_have_score: int
    must_have_matched: List[str]
    must_have_missing: List[str]
    nice_to_have_score: int
    nice_to_have_matched: List[str]
    nice_to_have_missing: List[str]
    location_score: int
    location_reason: str
    seniority_score: int
    seniority_reason: str
    salary_score: int
    salary_reason: str
    raw_score: int
    calibrated_score: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreExplanation:
    summary: str
    strengths: List[str]
    gaps: List[str]
    recommendations: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreResult:
    breakdown: ScoreBreakdown
    explanation: ScoreExplanation


@dataclass(frozen=True)
class ScoredJob:
    job: Any  # JobPosting in this codebase
    score: int
    result: ScoreResult
