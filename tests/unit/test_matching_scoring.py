from datetime import date

from jobfit.models import Experience, RemotePreference, SeniorityLevel
from jobfit.matching.scoring import (
    clamp100,
    location_fit,
    ratio_score,
    round_half_up,
    salary_fit,
    seniority_fit,
    seniority_from_years,
    skill_overlap,
    years_of_experience,
)

R = RemotePreference
S = SeniorityLevel


def test_clamp100():
    assert clamp100(-5) == 0.0
    assert clamp100(140) == 100.0
    assert clamp100(42.5) == 42.5


def test_round_half_up_matches_display_rounding():
    assert round_half_up(66.666) == 67
    assert round_half_up(62.5) == 63
    assert round_half_up(0.4) == 0


def test_ratio_score_empty_requirement_is_full_marks():
    assert ratio_score(0, 0) == 100.0
    assert ratio_score(1, 4) == 25.0


def test_skill_overlap_lists_and_score():
    score, matched, missing = skill_overlap(
        candidate=["python", "react", "go"],
        keywords=["python", "docker"],
        must_have=["python", "aws"],
        nice_to_have=["go"],
    )
    assert matched == ["python", "go"]
    assert missing == ["docker", "aws"]
    # 2 matched over |{python, docker, aws}|
    assert round(score, 2) == 66.67


def test_skill_overlap_capped_when_nice_to_have_inflates_matches():
    score, _, _ = skill_overlap(
        candidate=["python", "go", "rust"],
        keywords=[],
        must_have=["python"],
        nice_to_have=["go", "rust"],
    )
    assert score == 100.0


def test_years_of_experience_counts_months_and_floors_negative_spans():
    as_of = date(2026, 1, 15)
    exps = [
        Experience(title="Dev", start_date=date(2020, 1, 1), end_date=date(2022, 1, 1)),  # 24 months
        Experience(title="Dev", start_date=date(2025, 1, 1), current=True),  # 12 months
        Experience(title="Typo", start_date=date(2024, 6, 1), end_date=date(2023, 6, 1)),  # negative -> 0
    ]
    assert years_of_experience(exps, as_of) == 3.0


def test_years_of_experience_open_ended_uses_as_of():
    exps = [Experience(title="Dev", start_date=date(2025, 7, 1))]
    assert years_of_experience(exps, date(2026, 1, 1)) == 0.5


def test_seniority_from_years_thresholds():
    assert seniority_from_years(0.5) == S.INTERN
    assert seniority_from_years(1) == S.JUNIOR
    assert seniority_from_years(3.9) == S.MID
    assert seniority_from_years(4) == S.SENIOR
    assert seniority_from_years(9.99) == S.LEAD
    assert seniority_from_years(10) == S.MANAGER


def test_seniority_fit_signed_distance():
    assert seniority_fit(S.SENIOR, None, 0).score == 100
    assert seniority_fit(S.SENIOR, S.SENIOR, 0).score == 100
    assert seniority_fit(S.LEAD, S.SENIOR, 0).score == 90
    assert seniority_fit(S.MID, S.SENIOR, 0).score == 70
    assert seniority_fit(S.DIRECTOR, S.SENIOR, 0).score == 60
    assert seniority_fit(S.INTERN, S.SENIOR, 0).score == 40


def test_seniority_fit_estimates_from_years_when_no_target():
    # 5 years -> SENIOR estimate
    result = seniority_fit(None, S.SENIOR, 5)
    assert result.score == 100
    assert result.reason == "Exact seniority match"


def test_location_fit_rule_order():
    assert location_fit(None, R.REMOTE, None, R.REMOTE).score == 100
    assert location_fit(None, R.ANY, "Berlin", R.ONSITE).score == 90
    assert location_fit("Berlin", R.ONSITE, "Berlin", R.REMOTE).score == 60
    assert location_fit("San Francisco", R.ONSITE, "San Francisco, CA", R.ONSITE).score == 100
    assert location_fit("Austin, TX", R.ONSITE, "Dallas, TX", R.ONSITE).score == 80
    assert location_fit("Berlin", R.HYBRID, "Paris", R.HYBRID).score == 90
    assert location_fit("Berlin", R.HYBRID, "Paris", R.ONSITE).score == 70
    mismatch = location_fit("Berlin", R.ONSITE, "Paris", R.ONSITE)
    assert mismatch.score == 50
    assert mismatch.reason == "Location mismatch"


def test_location_fit_is_case_insensitive():
    assert location_fit("new york", R.ONSITE, "New York, NY", R.HYBRID).score == 100


def test_salary_fit_neutral_when_missing():
    assert salary_fit(None, None, None, None).score == 100
    assert salary_fit(100000, 150000, None, None).score == 100
    assert salary_fit(None, None, 100000, 150000).score == 100


def test_salary_fit_overlap_bands():
    assert salary_fit(100000, 150000, 100000, 150000).score == 100
    assert salary_fit(100000, 150000, 110000, 150000).score == 100  # 80%
    assert salary_fit(100000, 150000, 110000, 170000).score == 85   # 40k of 70k
    assert salary_fit(100000, 150000, 140000, 200000).score == 70   # 10k of 100k


def test_salary_fit_exact_and_open_ended():
    exact = salary_fit(120000, 120000, 120000, 120000)
    assert exact.score == 100
    assert exact.reason == "Exact salary match"
    # both maxima unset: union is unbounded
    assert salary_fit(100000, None, 120000, None).score == 70


def test_salary_fit_below_expectations_by_gap():
    assert salary_fit(100000, None, 40000, 60000).score == 20   # 40% gap
    assert salary_fit(100000, None, 60000, 80000).score == 40   # 20% gap
    assert salary_fit(100000, None, 70000, 90000).score == 60   # 10% gap


def test_salary_fit_job_pays_more():
    result = salary_fit(None, 100000, 120000, 160000)
    assert result.score == 90
    assert result.reason == "Job may pay more than expected"
