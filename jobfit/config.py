# jobfit/config.py
from __future__ import annotations

import os
from pathlib import Path

# --- Logging ---

JOBFIT_LOG_LEVEL: str = (os.environ.get("JOBFIT_LOG_LEVEL") or "INFO").strip().upper()

# --- Local store ---

# Where JsonWeightsRepository keeps weights.json / scores.jsonl / feedback.jsonl.
JOBFIT_DATA_DIR: str = os.environ.get("JOBFIT_DATA_DIR", "").strip() or ".jobfit"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Newest-first cap for load_score_history(); <= 0 means "no cap".
JOBFIT_SCORE_HISTORY_LIMIT: int = _env_int("JOBFIT_SCORE_HISTORY_LIMIT", 20)


def default_repo_dir() -> Path:
    return Path(JOBFIT_DATA_DIR)
