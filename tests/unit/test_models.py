from datetime import datetime, timezone

from jobfit.models import (
    SENIORITY_ORDER,
    CandidateProfile,
    FeedbackEvent,
    FeedbackOutcome,
    JobPosting,
    SalaryRange,
    ScoreRecord,
    ScoringWeights,
    SeniorityLevel,
    Skill,
    seniority_rank,
)


def test_seniority_order_covers_every_level_in_order():
    assert set(SENIORITY_ORDER) == set(SeniorityLevel)
    assert [seniority_rank(level) for level in SeniorityLevel] == list(range(9))


def test_job_posting_normalizes_strings_and_drops_blank_skills():
    job = JobPosting(
        title="  Senior   Engineer ",
        location="  ",
        must_have_skills=[" Python ", "", "  "],
        keywords=["AWS"],
    )
    assert job.title == "Senior Engineer"
    assert job.location is None
    assert job.must_have_skills == ["Python"]
    assert job.salary.is_empty


def test_profile_drops_unnamed_skills():
    profile = CandidateProfile(skills=[Skill(name="  "), Skill(name=" Go ")], location=" Austin, TX ")
    assert [s.name for s in profile.skills] == ["Go"]
    assert profile.location == "Austin, TX"


def test_salary_range_zero_counts_as_empty():
    assert SalaryRange(0, 0).is_empty
    assert not SalaryRange(100000, None).is_empty


def test_weights_clamped_and_dict_round_trip():
    wild = ScoringWeights(w_skills=5.0, w_salary=0.0, bias=-40.0)
    c = wild.clamped()
    assert c.w_skills == 2.5
    assert c.w_salary == 0.3
    assert c.bias == -15.0
    assert ScoringWeights.from_dict(c.to_dict()) == c
    # unknown keys (e.g. storage metadata) are ignored
    assert ScoringWeights.from_dict({"w_skills": "1.5", "user_id": "u1"}) == ScoringWeights(w_skills=1.5)


def test_feedback_and_score_record_serialize():
    ts = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    fb = FeedbackEvent(outcome=FeedbackOutcome.REJECTED, accuracy=2, created_at=ts)
    assert fb.to_dict() == {
        "outcome": "REJECTED",
        "accuracy": 2,
        "factor": None,
        "note": None,
        "created_at": "2026-01-15T12:00:00+00:00",
    }

    rec = ScoreRecord(
        user_id="u1",
        job_id="j1",
        breakdown={"calibrated_score": 70},
        explanation={"summary": "Good match with some areas for improvement."},
        weights=ScoringWeights().to_dict(),
        scored_at=ts,
    )
    assert ScoreRecord.from_dict(rec.to_dict()) == rec
