from __future__ import annotations

import math
from datetime import date
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from jobfit.models import (
    Experience,
    RemotePreference,
    SeniorityLevel,
    seniority_rank,
)

from .types import ComponentScore


def clamp100(x: float) -> float:
    return 0.0 if x < 0.0 else (100.0 if x > 100.0 else x)


def round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; scores round .5 upward.
    return int(math.floor(x + 0.5))


def ratio_score(matched: int, total: int) -> float:
    """matched/total as 0-100. No listed items means no requirement, so 100."""
    if total <= 0:
        return 100.0
    return clamp100(matched / total * 100.0)


def partition_skills(candidate: Set[str], required: Sequence[str]) -> Tuple[List[str], List[str]]:
    matched = [s for s in required if s in candidate]
    missing = [s for s in required if s not in candidate]
    return matched, missing


def skill_overlap(
        candidate: Sequence[str],
        keywords: Sequence[str],
        must_have: Sequence[str],
        nice_to_have: Sequence[str],
) -> Tuple[float, List[str], List[str]]:
    """
    Overall skill overlap.
    - matched: candidate skills found anywhere in the posting (candidate order)
    - missing: keywords + must-haves the candidate lacks (posting order)
    - score: matched / |keywords ∪ must-have|, capped at 100
    """
    cand_set = set(candidate)
    posting = set(keywords) | set(must_have) | set(nice_to_have)
    matched = [s for s in candidate if s in posting]

    required: List[str] = []
    for s in list(keywords) + list(must_have):
        if s not in required:
            required.append(s)
    missing = [s for s in required if s not in cand_set]

    score = ratio_score(len(matched), len(required))
    return score, matched, missing


def _months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def years_of_experience(experiences: Iterable[Experience], as_of: date) -> float:
    total_months = 0
    for exp in experiences or []:
        end = as_of if exp.current or exp.end_date is None else exp.end_date
        total_months += max(0, _months_between(exp.start_date, end))
    return total_months / 12.0


def seniority_from_years(years: float) -> SeniorityLevel:
    if years < 1:
        return SeniorityLevel.INTERN
    if years < 2:
        return SeniorityLevel.JUNIOR
    if years < 4:
        return SeniorityLevel.MID
    if years < 7:
        return SeniorityLevel.SENIOR
    if years < 10:
        return SeniorityLevel.LEAD
    return SeniorityLevel.MANAGER


def seniority_fit(
        candidate: Optional[SeniorityLevel],
        job: Optional[SeniorityLevel],
        years: float,
) -> ComponentScore:
    if job is None:
        return ComponentScore(100, "Job seniority not specified")

    level = candidate or seniority_from_years(years)
    diff = seniority_rank(level) - seniority_rank(job)

    if diff == 0:
        return ComponentScore(100, "Exact seniority match")
    if diff == 1:
        return ComponentScore(90, "Slightly overqualified (good)")
    if diff == -1:
        return ComponentScore(70, "Slightly junior - growth opportunity")
    if diff > 1:
        return ComponentScore(60, "Significantly overqualified")
    return ComponentScore(40, "May need more experience")


def location_fit(
        candidate_location: Optional[str],
        candidate_pref: RemotePreference,
        job_location: Optional[str],
        job_remote: RemotePreference,
) -> ComponentScore:
    """
    Rules are evaluated in order; the first hit wins.
    Remote arrangement first, then city text, then hybrid preference.
    """
    if job_remote == RemotePreference.REMOTE and candidate_pref == RemotePreference.REMOTE:
        return ComponentScore(100, "Perfect remote match")

    if candidate_pref == RemotePreference.ANY:
        return ComponentScore(90, "Flexible location preference")

    if job_remote == RemotePreference.REMOTE and candidate_pref == RemotePreference.ONSITE:
        return ComponentScore(60, "Job is remote but you prefer onsite")

    if candidate_location and job_location:
        cand = candidate_location.lower()
        loc = job_location.lower()
        if cand in loc or loc in cand:
            return ComponentScore(100, "Location match")

        cand_parts = {p.strip() for p in cand.split(",")}
        job_parts = {p.strip() for p in loc.split(",")}
        if cand_parts & job_parts:
            return ComponentScore(80, "Partial location match")

    if candidate_pref == RemotePreference.HYBRID:
        if job_remote == RemotePreference.HYBRID:
            return ComponentScore(90, "Hybrid match")
        return ComponentScore(70, "Hybrid preference, different job arrangement")

    return ComponentScore(50, "Location mismatch")


def salary_fit(
        candidate_min: Optional[int],
        candidate_max: Optional[int],
        job_min: Optional[int],
        job_max: Optional[int],
) -> ComponentScore:
    # A zero bound counts as unset, same as None.
    if not job_min and not job_max:
        return ComponentScore(100, "Job salary not specified")
    if not candidate_min and not candidate_max:
        return ComponentScore(100, "Profile salary not specified")

    p_min = float(candidate_min or 0)
    p_max = float(candidate_max or math.inf)
    j_min = float(job_min or 0)
    j_max = float(job_max or math.inf)

    if j_max >= p_min and j_min <= p_max:
        overlap = min(p_max, j_max) - max(p_min, j_min)
        union = max(p_max, j_max) - min(p_min, j_min)

        if union == 0:
            return ComponentScore(100, "Exact salary match")
        if math.isinf(union):
            # Open-ended ranges never reach a meaningful overlap share.
            return ComponentScore(70, "Some salary overlap")

        overlap_pct = overlap / union * 100.0
        if overlap_pct >= 80:
            return ComponentScore(100, "Strong salary overlap")
        if overlap_pct >= 50:
            return ComponentScore(85, "Good salary overlap")
        return ComponentScore(70, "Some salary overlap")

    if j_max < p_min:
        gap = (p_min - j_max) / p_min * 100.0
        if gap > 30:
            return ComponentScore(20, "Job pays significantly below expectations")
        if gap > 15:
            return ComponentScore(40, "Job pays below expectations")
        return ComponentScore(60, "Job pays slightly below expectations")

    return ComponentScore(90, "Job may pay more than expected")
