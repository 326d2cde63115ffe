from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple

from jobfit.core.text_processing import normalize_skills
from jobfit.log import get_logger
from jobfit.models import CandidateProfile, JobPosting, ScoringWeights

from .explanation import build_explanation
from .scoring import (
    clamp100,
    location_fit,
    partition_skills,
    ratio_score,
    round_half_up,
    salary_fit,
    seniority_fit,
    skill_overlap,
    years_of_experience,
)
from .types import ScoreBreakdown, ScoredJob, ScoreResult

logger = get_logger(__name__)


# Base share of each component before the per-user multiplier is applied.
COMPONENT_BASE_WEIGHTS = {
    "skills": 0.30,
    "must_have": 0.25,
    "nice_to_have": 0.10,
    "location": 0.15,
    "seniority": 0.10,
    "salary": 0.10,
}


def _weighted_average(components: Sequence[Tuple[float, float]]) -> float:
    total_weight = sum(w for _, w in components)
    if total_weight <= 0:
        # All multipliers zeroed out: fall back to the plain mean.
        return sum(s for s, _ in components) / len(components)
    return sum(s * w for s, w in components) / total_weight


def calculate_score(
        profile: CandidateProfile,
        job: JobPosting,
        weights: Optional[ScoringWeights] = None,
        *,
        as_of: Optional[date] = None,
) -> ScoreResult:
    """
    Deterministic match score (0-100) plus a human-readable explanation.

    weights=None scores with ScoringWeights.defaults(). as_of pins the date used
    for ongoing experiences; pass it when results must be reproducible.
    """
    w = weights if weights is not None else ScoringWeights.defaults()
    today = as_of or date.today()

    candidate = normalize_skills(s.name for s in profile.skills)
    cand_set = set(candidate)
    must_have = normalize_skills(job.must_have_skills)
    nice_to_have = normalize_skills(job.nice_to_have_skills)
    keywords = normalize_skills(job.keywords)

    skills_score, skills_matched, skills_missing = skill_overlap(candidate, keywords, must_have, nice_to_have)

    must_matched, must_missing = partition_skills(cand_set, must_have)
    nice_matched, nice_missing = partition_skills(cand_set, nice_to_have)
    must_have_score = ratio_score(len(must_matched), len(must_have))
    nice_to_have_score = ratio_score(len(nice_matched), len(nice_to_have))

    years = years_of_experience(profile.experiences, today)

    location = location_fit(profile.location, profile.remote_preference, job.location, job.remote_type)
    seniority = seniority_fit(profile.target_seniority, job.seniority, years)
    salary = salary_fit(profile.salary_min, profile.salary_max, job.salary_min, job.salary_max)

    base = COMPONENT_BASE_WEIGHTS
    raw_score = _weighted_average(
        [
            (skills_score, w.w_skills * base["skills"]),
            (must_have_score, w.w_must_have_gap * base["must_have"]),
            (nice_to_have_score, w.w_nice_have_gap * base["nice_to_have"]),
            (float(location.score), w.w_location * base["location"]),
            (float(seniority.score), w.w_seniority_penalty * base["seniority"]),
            (float(salary.score), w.w_salary * base["salary"]),
        ]
    )
    calibrated_score = clamp100(raw_score + w.bias)

    breakdown = ScoreBreakdown(
        skills_score=round_half_up(skills_score),
        skills_matched=skills_matched,
        skills_missing=skills_missing,
        must_have_score=round_half_up(must_have_score),
        must_have_matched=must_matched,
        must_have_missing=must_missing,
        nice_to_have_score=round_half_up(nice_to_have_score),
        nice_to_have_matched=nice_matched,
        nice_to_have_missing=nice_missing,
        location_score=location.score,
        location_reason=location.reason,
        seniority_score=seniority.score,
        seniority_reason=seniority.reason,
        salary_score=salary.score,
        salary_reason=salary.reason,
        raw_score=round_half_up(raw_score),
        calibrated_score=round_half_up(calibrated_score),
    )

    explanation = build_explanation(
        skills_matched=skills_matched,
        must_have_score=must_have_score,
        must_have_missing=must_missing,
        location=location,
        seniority=seniority,
        salary=salary,
        calibrated_score=calibrated_score,
    )

    logger.debug(
        "scored job %r: raw=%.2f calibrated=%.2f bias=%.2f",
        job.title, raw_score, calibrated_score, w.bias,
    )
    return ScoreResult(breakdown=breakdown, explanation=explanation)


def rank_jobs(
        profile: CandidateProfile,
        jobs: Sequence[JobPosting],
        weights: Optional[ScoringWeights] = None,
        *,
        top_n: Optional[int] = None,
        min_score: Optional[int] = None,
        as_of: Optional[date] = None,
) -> List[ScoredJob]:
    scored = []
    for j in jobs:
        result = calculate_score(profile, j, weights, as_of=as_of)
        scored.append(ScoredJob(job=j, score=result.breakdown.calibrated_score, result=result))

    if min_score is not None:
        scored = [s for s in scored if s.score >= min_score]

    # sort() is stable, so ties keep input order
    scored.sort(key=lambda x: x.score, reverse=True)
    if top_n is not None:
        scored = scored[:top_n]
    return scored
