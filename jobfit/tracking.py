from __future__ import annotations

import json
import os
import threading
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from jobfit import config
from jobfit.calibration import reset_weights, update_weights
from jobfit.log import get_logger
from jobfit.matching.engine import calculate_score
from jobfit.matching.types import ScoreResult
from jobfit.models import CandidateProfile, FeedbackEvent, JobPosting, ScoreRecord, ScoringWeights

logger = get_logger(__name__)


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _best_effort_lockdown_file_permissions(path: Path) -> None:
    """
    Best-effort privacy: on Unix, set 600. On Windows, chmod is limited and may fail.
    """
    try:
        os.chmod(path, 0o600)
    except OSError:
        logger.debug("could not restrict permissions on %s", path)


class WeightsRepository(Protocol):
    def load_weights(self, user_id: str) -> ScoringWeights:
        ...

    def save_weights(self, user_id: str, weights: ScoringWeights) -> None:
        ...

    def apply_feedback(self, user_id: str, feedback: FeedbackEvent) -> ScoringWeights:
        """
        Load -> update_weights -> save, serialized per user.
        """
        ...

    def reset_weights(self, user_id: str) -> ScoringWeights:
        ...

    def record_score(self, record: ScoreRecord) -> None:
        ...

    def record_result(
            self,
            user_id: str,
            job_id: str,
            result: ScoreResult,
            weights: Optional[ScoringWeights] = None,
    ) -> ScoreRecord:
        ...

    def load_score_history(
            self,
            user_id: str,
            job_id: Optional[str] = None,
            *,
            limit: Optional[int] = None,
    ) -> List[ScoreRecord]:
        ...


class JsonWeightsRepository:
    """
    Local persistence using JSON files. Reference store for the scoring core.

    Layout:
      <base_dir>/
        weights.json   -> { "<user_id>": {ScoringWeights...}, ... }
        scores.jsonl   -> JSON lines: one ScoreRecord per scoring event (append-only)
        feedback.jsonl -> JSON lines: {"user_id": "...", **FeedbackEvent}

    Concurrent apply_feedback() calls for the same user are serialized with an
    in-process lock so two events cannot overwrite each other's update.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.weights_path = base_dir / "weights.json"
        self.scores_path = base_dir / "scores.jsonl"
        self.feedback_path = base_dir / "feedback.jsonl"
        _ensure_dir(self.base_dir)

        self._file_lock = threading.Lock()
        self._user_locks: Dict[str, threading.Lock] = {}
        self._user_locks_guard = threading.Lock()

    def _user_lock(self, user_id: str) -> threading.Lock:
        with self._user_locks_guard:
            return self._user_locks.setdefault(user_id, threading.Lock())

    def _load_all(self) -> Dict[str, Dict[str, float]]:
        if not self.weights_path.exists():
            return {}
        raw_text = self.weights_path.read_text(encoding="utf-8").strip()
        if not raw_text:
            return {}
        return json.loads(raw_text)

    def _write_all(self, data: Dict[str, Dict[str, float]]) -> None:
        self.weights_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        _best_effort_lockdown_file_permissions(self.weights_path)

    def _append_line(self, path: Path, record: dict) -> None:
        line = json.dumps(record, sort_keys=True)
        with self._file_lock:
            with path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        _best_effort_lockdown_file_permissions(path)

    def load_weights(self, user_id: str) -> ScoringWeights:
        with self._file_lock:
            stored = self._load_all().get(user_id)
        if stored is None:
            return ScoringWeights.defaults()
        return ScoringWeights.from_dict(stored)

    def save_weights(self, user_id: str, weights: ScoringWeights) -> None:
        with self._file_lock:
            data = self._load_all()
            data[user_id] = weights.to_dict()
            self._write_all(data)
        logger.debug("saved weights for user %s", user_id)

    def apply_feedback(self, user_id: str, feedback: FeedbackEvent) -> ScoringWeights:
        with self._user_lock(user_id):
            current = self.load_weights(user_id)
            updated = update_weights(current, feedback)
            self.save_weights(user_id, updated)
            self._append_line(self.feedback_path, {"user_id": user_id, **feedback.to_dict()})
        return updated

    def reset_weights(self, user_id: str) -> ScoringWeights:
        with self._user_lock(user_id):
            weights = reset_weights()
            self.save_weights(user_id, weights)
        return weights

    def record_score(self, record: ScoreRecord) -> None:
        self._append_line(self.scores_path, record.to_dict())
        logger.debug("recorded score for user %s job %s", record.user_id, record.job_id)

    def record_result(
            self,
            user_id: str,
            job_id: str,
            result: ScoreResult,
            weights: Optional[ScoringWeights] = None,
    ) -> ScoreRecord:
        """Snapshot a scoring result together with the weights that produced it."""
        record = ScoreRecord(
            user_id=user_id,
            job_id=job_id,
            breakdown=result.breakdown.to_dict(),
            explanation=result.explanation.to_dict(),
            weights=(weights or ScoringWeights.defaults()).to_dict(),
        )
        self.record_score(record)
        return record

    def load_score_history(
            self,
            user_id: str,
            job_id: Optional[str] = None,
            *,
            limit: Optional[int] = None,
    ) -> List[ScoreRecord]:
        """
        Newest first. limit defaults to JOBFIT_SCORE_HISTORY_LIMIT; <= 0 returns everything.
        """
        if not self.scores_path.exists():
            return []

        records: List[ScoreRecord] = []
        with self._file_lock:
            lines = self.scores_path.read_text(encoding="utf-8").splitlines()
        for line in lines:
            if not line.strip():
                continue
            rec = ScoreRecord.from_dict(json.loads(line))
            if rec.user_id != user_id:
                continue
            if job_id is not None and rec.job_id != job_id:
                continue
            records.append(rec)

        records.reverse()
        cap = config.JOBFIT_SCORE_HISTORY_LIMIT if limit is None else limit
        return records[:cap] if cap > 0 else records


def score_and_record(
        *,
        user_id: str,
        job_id: str,
        profile: CandidateProfile,
        job: JobPosting,
        repo: Optional[WeightsRepository] = None,
        as_of: Optional[date] = None,
) -> ScoreResult:
    """
    Score a job with the user's stored weights and append the result to their history.

    repo=None uses a JsonWeightsRepository under JOBFIT_DATA_DIR.
    """
    repo = repo or JsonWeightsRepository(config.default_repo_dir())
    weights = repo.load_weights(user_id)
    result = calculate_score(profile, job, weights, as_of=as_of)
    repo.record_result(user_id, job_id, result, weights)
    return result
