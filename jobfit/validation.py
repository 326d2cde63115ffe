"""Boundary schemas: reject malformed input before it reaches the scoring core."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, model_validator

from jobfit.models import (
    CandidateProfile,
    Experience,
    FeedbackEvent,
    FeedbackFactor,
    FeedbackOutcome,
    JobPosting,
    RemotePreference,
    ScoringWeights,
    SeniorityLevel,
    Skill,
    SkillLevel,
)


class InputValidationError(ValueError):
    """Raised when caller-supplied data fails schema validation."""

    def __init__(self, message: str, errors: Dict[str, List[str]]) -> None:
        super().__init__(message)
        self.errors = errors


class SkillInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Skill name")
    level: Optional[SkillLevel] = Field(default=None, description="Self-assessed proficiency")
    years_experience: Optional[float] = Field(default=None, ge=0, le=50)

    def to_domain(self) -> Skill:
        return Skill(name=self.name, level=self.level, years_experience=self.years_experience)


class ExperienceInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(default="", max_length=200)
    start_date: date
    end_date: Optional[date] = None
    current: bool = False

    def to_domain(self) -> Experience:
        return Experience(
            title=self.title,
            company=self.company,
            start_date=self.start_date,
            end_date=self.end_date,
            current=self.current,
        )


class ProfileInput(BaseModel):
    location: Optional[str] = Field(default=None, max_length=200)
    remote_preference: RemotePreference = RemotePreference.ANY
    target_seniority: Optional[SeniorityLevel] = None
    salary_min: Optional[int] = Field(default=None, gt=0)
    salary_max: Optional[int] = Field(default=None, gt=0)
    skills: List[SkillInput] = Field(default_factory=list)
    experiences: List[ExperienceInput] = Field(default_factory=list)

    def to_domain(self) -> CandidateProfile:
        return CandidateProfile(
            skills=[s.to_domain() for s in self.skills],
            experiences=[e.to_domain() for e in self.experiences],
            location=self.location,
            remote_preference=self.remote_preference,
            target_seniority=self.target_seniority,
            salary_min=self.salary_min,
            salary_max=self.salary_max,
        )


class JobInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, description="Job title")
    company: str = Field(default="", max_length=200)
    location: Optional[str] = Field(default=None, max_length=200)
    remote_type: RemotePreference = RemotePreference.ONSITE
    seniority: Optional[SeniorityLevel] = None
    salary_min: Optional[int] = Field(default=None, gt=0)
    salary_max: Optional[int] = Field(default=None, gt=0)
    must_have_skills: List[str] = Field(default_factory=list)
    nice_to_have_skills: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)

    def to_domain(self) -> JobPosting:
        return JobPosting(**self.model_dump())


class FeedbackInput(BaseModel):
    outcome: FeedbackOutcome
    accuracy: int = Field(..., ge=1, le=5, description="How right the score felt, 5 = spot on")
    factor: Optional[FeedbackFactor] = Field(default=None, description="What mattered most")
    note: Optional[str] = Field(default=None, max_length=1000)

    def to_domain(self) -> FeedbackEvent:
        return FeedbackEvent(outcome=self.outcome, accuracy=self.accuracy, factor=self.factor, note=self.note)


class ScoringWeightsInput(BaseModel):
    w_skills: float = Field(default=1.0, ge=0, le=3)
    w_location: float = Field(default=1.0, ge=0, le=3)
    w_seniority_penalty: float = Field(default=1.0, ge=0, le=3)
    w_must_have_gap: float = Field(default=1.0, ge=0, le=3)
    w_nice_have_gap: float = Field(default=0.5, ge=0, le=3)
    w_salary: float = Field(default=0.5, ge=0, le=3)
    bias: float = Field(default=0.0, ge=-20, le=20)

    @model_validator(mode="after")
    def _not_all_zero(self) -> "ScoringWeightsInput":
        weights = [v for k, v in self.model_dump().items() if k != "bias"]
        if not any(weights):
            raise ValueError("at least one weight must be greater than zero")
        return self

    def to_domain(self) -> ScoringWeights:
        return ScoringWeights(**self.model_dump())


_M = TypeVar("_M", bound=BaseModel)


def _field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        key = ".".join(str(p) for p in err.get("loc", ())) or "__root__"
        errors.setdefault(key, []).append(err.get("msg", "invalid value"))
    return errors


def _parse(model: Type[_M], data: Any) -> _M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InputValidationError(f"Invalid {model.__name__}", _field_errors(e)) from e


def parse_profile(data: Any) -> CandidateProfile:
    return _parse(ProfileInput, data).to_domain()


def parse_job(data: Any) -> JobPosting:
    return _parse(JobInput, data).to_domain()


def parse_feedback(data: Any) -> FeedbackEvent:
    return _parse(FeedbackInput, data).to_domain()


def parse_weights(data: Any) -> ScoringWeights:
    return _parse(ScoringWeightsInput, data).to_domain()
