from __future__ import annotations

from typing import List, Sequence

from .types import ComponentScore, ScoreExplanation

STRENGTH_THRESHOLD = 80
GAP_THRESHOLD = 70
MAX_LISTED_GAPS = 3


def summary_for(calibrated_score: float) -> str:
    if calibrated_score >= 80:
        return "Excellent match! You're well-qualified for this role."
    if calibrated_score >= 60:
        return "Good match with some areas for improvement."
    if calibrated_score >= 40:
        return "Moderate match. Consider if this role aligns with your goals."
    return "Lower match. This role may require skills you're still developing."


def build_explanation(
        *,
        skills_matched: Sequence[str],
        must_have_score: float,
        must_have_missing: Sequence[str],
        location: ComponentScore,
        seniority: ComponentScore,
        salary: ComponentScore,
        calibrated_score: float,
) -> ScoreExplanation:
    """
    Threshold rules over the sub-scores. Ordering inside each list is fixed
    so the explanation is as deterministic as the score.
    """
    strengths: List[str] = []
    gaps: List[str] = []
    recommendations: List[str] = []

    if skills_matched:
        strengths.append(f"Strong match on {len(skills_matched)} key skills")
    if must_have_score >= STRENGTH_THRESHOLD:
        strengths.append("You meet most must-have requirements")
    if location.score >= STRENGTH_THRESHOLD:
        strengths.append(location.reason)
    if seniority.score >= STRENGTH_THRESHOLD:
        strengths.append(seniority.reason)

    if must_have_missing:
        listed = ", ".join(must_have_missing[:MAX_LISTED_GAPS])
        more = "..." if len(must_have_missing) > MAX_LISTED_GAPS else ""
        gaps.append(f"Missing must-have skills: {listed}{more}")
        recommendations.append(
            f"Consider adding {must_have_missing[0]} to your profile if you have relevant experience"
        )
    if location.score < GAP_THRESHOLD:
        gaps.append(location.reason)
    if seniority.score < GAP_THRESHOLD:
        gaps.append(seniority.reason)
    if salary.score < GAP_THRESHOLD:
        gaps.append(salary.reason)

    if not recommendations and gaps:
        recommendations.append("Update your profile to better match job requirements")

    return ScoreExplanation(
        summary=summary_for(calibrated_score),
        strengths=strengths,
        gaps=gaps,
        recommendations=recommendations,
    )
