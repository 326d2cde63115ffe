from __future__ import annotations

from dataclasses import dataclass, field, asdict, fields
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class RemotePreference(str, Enum):
    REMOTE = "REMOTE"
    ONSITE = "ONSITE"
    HYBRID = "HYBRID"
    ANY = "ANY"


class SeniorityLevel(str, Enum):
    INTERN = "INTERN"
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"
    LEAD = "LEAD"
    MANAGER = "MANAGER"
    DIRECTOR = "DIRECTOR"
    VP = "VP"
    C_LEVEL = "C_LEVEL"


class SkillLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class FeedbackOutcome(str, Enum):
    ACCEPTED = "ACCEPTED"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    REJECTED = "REJECTED"
    GHOSTED = "GHOSTED"
    WITHDRAWN = "WITHDRAWN"


class FeedbackFactor(str, Enum):
    SKILLS = "SKILLS"
    LOCATION = "LOCATION"
    SALARY = "SALARY"
    SENIORITY = "SENIORITY"
    COMPANY_FIT = "COMPANY_FIT"


# Fixed total order used for over/under-qualification distance.
# Keep one entry per SeniorityLevel member; seniority_rank() fails loudly otherwise.
SENIORITY_ORDER: Dict[SeniorityLevel, int] = {
    SeniorityLevel.INTERN: 0,
    SeniorityLevel.JUNIOR: 1,
    SeniorityLevel.MID: 2,
    SeniorityLevel.SENIOR: 3,
    SeniorityLevel.LEAD: 4,
    SeniorityLevel.MANAGER: 5,
    SeniorityLevel.DIRECTOR: 6,
    SeniorityLevel.VP: 7,
    SeniorityLevel.C_LEVEL: 8,
}


def seniority_rank(level: SeniorityLevel) -> int:
    return SENIORITY_ORDER[level]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_whitespace(text: str) -> str:
    return " ".join((text or "").split()).strip()


def _clean_optional(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return normalize_whitespace(text) or None


@dataclass(frozen=True)
class Skill:
    name: str
    level: Optional[SkillLevel] = None
    years_experience: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_whitespace(self.name))


@dataclass(frozen=True)
class Experience:
    title: str
    start_date: date
    end_date: Optional[date] = None
    current: bool = False
    company: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", normalize_whitespace(self.title))
        object.__setattr__(self, "company", normalize_whitespace(self.company))


@dataclass(frozen=True)
class SalaryRange:
    min: Optional[int] = None
    max: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        # Zero is treated the same as "not given".
        return not self.min and not self.max


@dataclass(frozen=True)
class CandidateProfile:
    """
    Candidate attributes consumed by the scorer.
    Callers hydrate skills and experiences before scoring.
    """
    skills: List[Skill] = field(default_factory=list)
    experiences: List[Experience] = field(default_factory=list)
    location: Optional[str] = None
    remote_preference: RemotePreference = RemotePreference.ANY
    target_seniority: Optional[SeniorityLevel] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "skills", [s for s in self.skills or [] if s.name])
        object.__setattr__(self, "experiences", list(self.experiences or []))
        object.__setattr__(self, "location", _clean_optional(self.location))

    @property
    def salary(self) -> SalaryRange:
        return SalaryRange(self.salary_min, self.salary_max)


@dataclass(frozen=True)
class JobPosting:
    """
    Posting attributes consumed by the scorer.
    Skill lists keep the caller's spelling; normalisation happens at scoring time.
    """
    title: str
    location: Optional[str] = None
    remote_type: RemotePreference = RemotePreference.ONSITE
    seniority: Optional[SeniorityLevel] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    must_have_skills: List[str] = field(default_factory=list)
    nice_to_have_skills: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    company: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", normalize_whitespace(self.title))
        object.__setattr__(self, "company", normalize_whitespace(self.company))
        object.__setattr__(self, "location", _clean_optional(self.location))
        for name in ("must_have_skills", "nice_to_have_skills", "keywords"):
            cleaned = [normalize_whitespace(s) for s in getattr(self, name) or []]
            object.__setattr__(self, name, [s for s in cleaned if s])

    @property
    def salary(self) -> SalaryRange:
        return SalaryRange(self.salary_min, self.salary_max)


MIN_WEIGHT = 0.3
MAX_WEIGHT = 2.5
MIN_BIAS = -15.0
MAX_BIAS = 15.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class ScoringWeights:
    """
    Per-user scoring knobs. Created with defaults on signup, changed only by
    calibration, and reset to defaults on request.
    """
    w_skills: float = 1.0
    w_location: float = 1.0
    w_seniority_penalty: float = 1.0
    w_must_have_gap: float = 1.0
    w_nice_have_gap: float = 0.5
    w_salary: float = 0.5
    bias: float = 0.0

    @classmethod
    def defaults(cls) -> "ScoringWeights":
        return cls()

    def clamped(self) -> "ScoringWeights":
        values = {
            f.name: clamp(getattr(self, f.name), MIN_WEIGHT, MAX_WEIGHT)
            for f in fields(self)
            if f.name != "bias"
        }
        return ScoringWeights(bias=clamp(self.bias, MIN_BIAS, MAX_BIAS), **values)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringWeights":
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in known})


@dataclass(frozen=True)
class FeedbackEvent:
    outcome: FeedbackOutcome
    accuracy: int
    factor: Optional[FeedbackFactor] = None
    note: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "accuracy": self.accuracy,
            "factor": self.factor.value if self.factor else None,
            "note": self.note,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ScoreRecord:
    """
    One persisted scoring event. Append-only: a re-score produces a new record.
    """
    user_id: str
    job_id: str
    breakdown: Dict[str, Any]
    explanation: Dict[str, Any]
    weights: Dict[str, float]
    scored_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["scored_at"] = self.scored_at.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreRecord":
        return cls(
            user_id=data["user_id"],
            job_id=data["job_id"],
            breakdown=data["breakdown"],
            explanation=data["explanation"],
            weights=data["weights"],
            scored_at=datetime.fromisoformat(data["scored_at"]),
        )
