from __future__ import annotations

import pytest

from jobfit.models import SalaryRange, SeniorityLevel
from jobfit.requirements import (
    build_job_posting,
    estimate_seniority,
    extract_keywords,
    extract_salary,
    extract_years_required,
)


# ---------------------------------------------------------------------------
# extract_salary
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("$120,000 - $150,000", SalaryRange(min=120000, max=150000)),
        ("$100k - $130k", SalaryRange(min=100000, max=130000)),
        ("Salary range: $100,000 to $150,000 per year", SalaryRange(min=100000, max=150000)),
        ("Pay: 90,000-110,000 USD", SalaryRange(min=90000, max=110000)),
        ("$120 - 150", SalaryRange(min=120000, max=150000)),
        ("$120,000", SalaryRange(min=120000, max=120000)),
        ("$120,000 \u2013 $150,000", SalaryRange(min=120000, max=150000)),
    ],
)
def test_extract_salary_recognised_formats(text, expected) -> None:
    assert extract_salary(text) == expected


@pytest.mark.parametrize("text", ["", "competitive salary", "$15 - $25 per hour", "$200,000 - $100,000"])
def test_extract_salary_returns_none_when_absent_or_implausible(text) -> None:
    assert extract_salary(text) is None


@pytest.mark.parametrize(
    "text",
    [
        "$25 per hour",
        "Pay: $30/hr",
        "$45 an hour, weekly pay",
        "$40 - $60 hourly",
        "$50 gift card for referrals",
        "$500 home office stipend",
    ],
)
def test_extract_salary_ignores_hourly_pay_and_small_amounts(text) -> None:
    assert extract_salary(text) is None


def test_extract_salary_single_figure_needs_k_or_full_amount() -> None:
    assert extract_salary("Base pay $95k plus equity") == SalaryRange(min=95000, max=95000)
    assert extract_salary("$95 and a laptop") is None


def test_build_job_posting_leaves_salary_empty_for_hourly_roles() -> None:
    job = build_job_posting("Contract Python Developer", "Python work at $60/hr, remote friendly.")
    assert job.salary_min is None
    assert job.salary_max is None


# ---------------------------------------------------------------------------
# estimate_seniority
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "title, expected",
    [
        ("Senior Software Engineer", SeniorityLevel.SENIOR),
        ("Sr. Developer", SeniorityLevel.SENIOR),
        ("Software Engineering Intern", SeniorityLevel.INTERN),
        ("Summer Internship - Developer", SeniorityLevel.INTERN),
        ("Junior Developer", SeniorityLevel.JUNIOR),
        ("Jr. Frontend Developer", SeniorityLevel.JUNIOR),
        ("Entry Level Software Engineer", SeniorityLevel.JUNIOR),
        ("Mid-Level Backend Engineer", SeniorityLevel.MID),
        ("Tech Lead", SeniorityLevel.LEAD),
        ("Senior Staff Engineer", SeniorityLevel.LEAD),
        ("Principal Engineer", SeniorityLevel.LEAD),
        ("Engineering Manager", SeniorityLevel.MANAGER),
        ("Director of Engineering", SeniorityLevel.DIRECTOR),
        ("VP Engineering", SeniorityLevel.VP),
        ("CTO", SeniorityLevel.C_LEVEL),
    ],
)
def test_estimate_seniority_from_title(title, expected) -> None:
    assert estimate_seniority(title, "") == expected


def test_estimate_seniority_falls_back_to_years() -> None:
    assert estimate_seniority("Software Engineer", "You have 1 year of experience") == SeniorityLevel.JUNIOR
    assert estimate_seniority("Software Engineer", "3+ years building APIs") == SeniorityLevel.MID
    assert estimate_seniority("Software Engineer", "5 yrs with Python") == SeniorityLevel.SENIOR
    assert estimate_seniority("Software Engineer", "8+ years in distributed systems") == SeniorityLevel.LEAD


def test_estimate_seniority_none_for_unclear_titles() -> None:
    assert estimate_seniority("Software Engineer", "") is None
    assert estimate_seniority("", "") is None


# ---------------------------------------------------------------------------
# extract_keywords / extract_years_required
# ---------------------------------------------------------------------------

def test_extract_keywords_canonical_names_in_text_order() -> None:
    text = "We use TypeScript, React and Node.js on AWS; C++ and C# a plus. K8s and Kubernetes both count."
    assert extract_keywords(text) == ["TypeScript", "React", "Node.js", "AWS", "C++", "C#", "Kubernetes"]


def test_extract_keywords_avoids_prefix_false_positives() -> None:
    kws = extract_keywords("JavaScript and PostgreSQL experience")
    assert "JavaScript" in kws
    assert "Java" not in kws
    assert "PostgreSQL" in kws
    assert "SQL" not in kws


def test_extract_keywords_is_case_insensitive_and_deduped() -> None:
    assert extract_keywords("TYPESCRIPT and TypeScript should be the same") == ["TypeScript"]
    assert extract_keywords("") == []


def test_extract_years_required_takes_largest_mention() -> None:
    text = "3+ years of experience with Python, 5 years experience overall"
    assert extract_years_required(text) == 5
    assert extract_years_required("no numbers here") is None


# ---------------------------------------------------------------------------
# build_job_posting
# ---------------------------------------------------------------------------

def test_build_job_posting_fills_missing_fields_from_text() -> None:
    job = build_job_posting(
        "Senior Backend Engineer",
        "Python and Django on AWS. Salary: $140,000 - $170,000.",
        must_have_skills=["Python"],
    )
    assert job.title == "Senior Backend Engineer"
    assert job.seniority == SeniorityLevel.SENIOR
    assert job.salary_min == 140000 and job.salary_max == 170000
    assert job.keywords == ["Python", "Django", "AWS"]
    assert job.must_have_skills == ["Python"]


def test_build_job_posting_keeps_caller_values() -> None:
    job = build_job_posting(
        "Senior Backend Engineer",
        "Python. $140,000 - $170,000",
        seniority=SeniorityLevel.LEAD,
        salary_min=200000,
        keywords=["Go"],
    )
    assert job.seniority == SeniorityLevel.LEAD
    assert job.salary_min == 200000
    assert job.salary_max is None
    assert job.keywords == ["Go"]
