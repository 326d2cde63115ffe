from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional

from jobfit.log import get_logger
from jobfit.models import (
    MAX_BIAS,
    MAX_WEIGHT,
    MIN_BIAS,
    MIN_WEIGHT,
    FeedbackEvent,
    FeedbackFactor,
    FeedbackOutcome,
    ScoringWeights,
    clamp,
)

logger = get_logger(__name__)

LEARNING_RATE = 0.1
# COMPANY_FIT has no weight of its own; it moves the bias this many steps instead.
COMPANY_FIT_BIAS_MULTIPLIER = 5

POSITIVE_OUTCOMES = frozenset({FeedbackOutcome.INTERVIEW, FeedbackOutcome.OFFER})

# Factor -> weight field it adjusts. COMPANY_FIT is handled separately.
FACTOR_WEIGHT_FIELDS: Dict[FeedbackFactor, Optional[str]] = {
    FeedbackFactor.SKILLS: "w_skills",
    FeedbackFactor.LOCATION: "w_location",
    FeedbackFactor.SENIORITY: "w_seniority_penalty",
    FeedbackFactor.SALARY: "w_salary",
    FeedbackFactor.COMPANY_FIT: None,
}

_WEIGHT_LABELS = {
    "w_skills": "Skills Match Weight",
    "w_location": "Location Weight",
    "w_seniority_penalty": "Seniority Mismatch Penalty",
    "w_must_have_gap": "Must-Have Skills Gap Penalty",
    "w_nice_have_gap": "Nice-to-Have Skills Weight",
    "w_salary": "Salary Fit Weight",
    "bias": "Score Adjustment",
}

_WEIGHT_DESCRIPTIONS = {
    "w_skills": "How much skill matches affect your score (higher = more important)",
    "w_location": "How much location/remote preference affects your score",
    "w_seniority_penalty": "Penalty for seniority level mismatches",
    "w_must_have_gap": "Penalty for missing must-have skills",
    "w_nice_have_gap": "Weight for nice-to-have skill matches",
    "w_salary": "How much salary alignment affects your score",
    "bias": "Overall adjustment to your scores based on past feedback",
}


def is_positive_outcome(outcome: FeedbackOutcome) -> bool:
    # GHOSTED and WITHDRAWN count as negative, same as REJECTED.
    return outcome in POSITIVE_OUTCOMES


def update_weights(weights: Optional[ScoringWeights], feedback: FeedbackEvent) -> ScoringWeights:
    """
    One online calibration step.

    - Positive outcome + low accuracy rating: the score was too pessimistic, raise bias.
    - Negative outcome + low accuracy rating: the score was too optimistic, lower bias.
    - A primary factor moves that factor's weight up (positive) or down (negative)
      by LEARNING_RATE; COMPANY_FIT sets bias to the incoming bias plus five
      such steps, in place of the accuracy adjustment.

    Returns a new, clamped vector. The caller stores it.
    """
    current = weights if weights is not None else ScoringWeights.defaults()

    positive = is_positive_outcome(feedback.outcome)
    direction = 1.0 if positive else -1.0
    accuracy_error = 5 - feedback.accuracy

    bias = current.bias + direction * accuracy_error * LEARNING_RATE * 2
    updated = replace(current, bias=clamp(bias, MIN_BIAS, MAX_BIAS))

    if feedback.factor is not None:
        factor_adjustment = direction * LEARNING_RATE
        field_name = FACTOR_WEIGHT_FIELDS.get(feedback.factor)
        if field_name is not None:
            value = getattr(current, field_name) + factor_adjustment
            updated = replace(updated, **{field_name: clamp(value, MIN_WEIGHT, MAX_WEIGHT)})
        elif feedback.factor == FeedbackFactor.COMPANY_FIT:
            # Replaces the accuracy step: starts again from the incoming bias.
            bias = current.bias + factor_adjustment * COMPANY_FIT_BIAS_MULTIPLIER
            updated = replace(updated, bias=clamp(bias, MIN_BIAS, MAX_BIAS))

    updated = updated.clamped()
    logger.info(
        "calibrated weights: outcome=%s accuracy=%d factor=%s bias %.2f -> %.2f",
        feedback.outcome.value,
        feedback.accuracy,
        feedback.factor.value if feedback.factor else "-",
        current.bias,
        updated.bias,
    )
    return updated


def reset_weights() -> ScoringWeights:
    return ScoringWeights.defaults()


def weight_labels() -> Dict[str, str]:
    return dict(_WEIGHT_LABELS)


def weight_description(key: str) -> str:
    return _WEIGHT_DESCRIPTIONS.get(key, "")
