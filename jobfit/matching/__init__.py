from .engine import calculate_score, rank_jobs
from .types import ScoreBreakdown, ScoredJob, ScoreExplanation, ScoreResult

__all__ = ["calculate_score", "rank_jobs", "ScoreBreakdown", "ScoredJob", "ScoreExplanation", "ScoreResult"]
