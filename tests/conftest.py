from datetime import date

import pytest

from jobfit.models import (
    CandidateProfile,
    JobPosting,
    RemotePreference,
    Skill,
    SkillLevel,
)

# Fixed "today" so experience-based scores do not drift between runs.
AS_OF = date(2026, 1, 15)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def make_profile():
    """
    Fixture that returns a builder: make_profile(skills=["Python"], ...) -> CandidateProfile
    Skill names are wrapped in Skill records so tests can stay terse.
    """
    def _make(skills=(), **kwargs) -> CandidateProfile:
        return CandidateProfile(
            skills=[s if isinstance(s, Skill) else Skill(name=s) for s in skills],
            **kwargs,
        )
    return _make


@pytest.fixture
def make_job():
    """
    Fixture that returns a builder: make_job(must_have=[...], ...) -> JobPosting
    """
    def _make(title: str = "Software Engineer", must_have=(), nice_to_have=(), keywords=(), **kwargs) -> JobPosting:
        return JobPosting(
            title=title,
            must_have_skills=list(must_have),
            nice_to_have_skills=list(nice_to_have),
            keywords=list(keywords),
            **kwargs,
        )
    return _make


@pytest.fixture
def remote_expert_profile(make_profile) -> CandidateProfile:
    return make_profile(
        skills=[
            Skill(name="TypeScript", level=SkillLevel.EXPERT),
            Skill(name="React", level=SkillLevel.EXPERT),
        ],
        remote_preference=RemotePreference.REMOTE,
    )
