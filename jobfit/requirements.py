from __future__ import annotations

import re
from typing import Any, List, Optional, Tuple

from jobfit.core.text_processing import normalize_text
from jobfit.models import JobPosting, SalaryRange, SeniorityLevel

# --- Keywords ---

# (pattern, canonical display name). Order is the tie-break for terms found at
# the same position, so longer spellings come before their prefixes.
_TECH_TERMS: List[Tuple[str, str]] = [
    # Languages
    (r"javascript", "JavaScript"),
    (r"typescript", "TypeScript"),
    (r"python", "Python"),
    (r"java", "Java"),
    (r"c\+\+", "C++"),
    (r"c#", "C#"),
    (r"ruby", "Ruby"),
    (r"golang", "Go"),
    (r"go", "Go"),
    (r"rust", "Rust"),
    (r"php", "PHP"),
    (r"swift", "Swift"),
    (r"kotlin", "Kotlin"),
    (r"scala", "Scala"),
    # Frontend
    (r"react", "React"),
    (r"vue(?:\.?js)?", "Vue"),
    (r"angular", "Angular"),
    (r"next\.?js", "Next.js"),
    (r"nuxt", "Nuxt"),
    (r"svelte", "Svelte"),
    (r"html", "HTML"),
    (r"css", "CSS"),
    (r"sass", "Sass"),
    (r"tailwind", "Tailwind"),
    (r"bootstrap", "Bootstrap"),
    # Backend
    (r"node\.?js", "Node.js"),
    (r"express", "Express"),
    (r"django", "Django"),
    (r"flask", "Flask"),
    (r"fastapi", "FastAPI"),
    (r"spring", "Spring"),
    (r"rails", "Rails"),
    (r"laravel", "Laravel"),
    (r"asp\.net", "ASP.NET"),
    # Databases
    (r"postgresql", "PostgreSQL"),
    (r"postgres", "PostgreSQL"),
    (r"mysql", "MySQL"),
    (r"mongodb", "MongoDB"),
    (r"redis", "Redis"),
    (r"elasticsearch", "Elasticsearch"),
    (r"dynamodb", "DynamoDB"),
    (r"sqlite", "SQLite"),
    (r"nosql", "NoSQL"),
    (r"sql", "SQL"),
    # Cloud
    (r"aws", "AWS"),
    (r"azure", "Azure"),
    (r"gcp", "GCP"),
    (r"google cloud", "GCP"),
    (r"heroku", "Heroku"),
    (r"vercel", "Vercel"),
    (r"netlify", "Netlify"),
    (r"cloudflare", "Cloudflare"),
    # DevOps
    (r"docker", "Docker"),
    (r"kubernetes", "Kubernetes"),
    (r"k8s", "Kubernetes"),
    (r"jenkins", "Jenkins"),
    (r"circleci", "CircleCI"),
    (r"github actions", "GitHub Actions"),
    (r"terraform", "Terraform"),
    (r"ansible", "Ansible"),
    # Tools
    (r"git", "Git"),
    (r"graphql", "GraphQL"),
    (r"rest", "REST"),
    (r"api", "API"),
    (r"microservices", "Microservices"),
    (r"ci/cd", "CI/CD"),
    (r"agile", "Agile"),
    (r"scrum", "Scrum"),
    # Data
    (r"machine learning", "Machine Learning"),
    (r"ml", "ML"),
    (r"data science", "Data Science"),
    (r"pandas", "pandas"),
    (r"numpy", "NumPy"),
    (r"tensorflow", "TensorFlow"),
    (r"pytorch", "PyTorch"),
]

# \b does not work around "+" / "#", so terms are delimited by non-word lookarounds.
_TECH_RES = [(re.compile(rf"(?<![\w.]){p}(?![\w+#])", re.IGNORECASE), name) for p, name in _TECH_TERMS]

_YEARS_REQUIRED_RE = re.compile(r"(\d+)\+?\s*(?:years?|yrs?)(?:\s+of)?\s+(?:experience|exp)\b", re.IGNORECASE)


def extract_keywords(text: str) -> List[str]:
    """
    Known technology terms mentioned in posting text.
    Canonical names, ordered by first appearance, deduped.
    """
    t = normalize_text(text)
    if not t:
        return []

    hits: List[Tuple[int, int, str]] = []
    for order, (rx, name) in enumerate(_TECH_RES):
        m = rx.search(t)
        if m:
            hits.append((m.start(), order, name))
    hits.sort()

    out: List[str] = []
    for _, _, name in hits:
        if name not in out:
            out.append(name)
    return out


def extract_years_required(text: str) -> Optional[int]:
    """Largest "N+ years of experience" figure in the text, if any."""
    years = [int(m.group(1)) for m in _YEARS_REQUIRED_RE.finditer(normalize_text(text))]
    return max(years) if years else None


# --- Seniority ---

# Checked in order; the first rule that fires wins.
_SENIORITY_RULES: List[Tuple[re.Pattern, SeniorityLevel]] = [
    (re.compile(r"\b(?:intern|internship)\b"), SeniorityLevel.INTERN),
    (re.compile(r"\b(?:junior|jr\.?|entry[\s-]?level|associate)(?!\w)"), SeniorityLevel.JUNIOR),
    (re.compile(r"\b(?:mid[\s-]?level|intermediate)\b"), SeniorityLevel.MID),
]
_SENIOR_RE = re.compile(r"\b(?:senior|sr\.?)(?!\w)")
_ABOVE_SENIOR_RE = re.compile(r"\b(?:staff|principal|lead|manager|director)\b")
_LATER_RULES: List[Tuple[re.Pattern, SeniorityLevel]] = [
    (re.compile(r"\b(?:lead|tech[\s-]?lead|team[\s-]?lead)\b"), SeniorityLevel.LEAD),
    (re.compile(r"\b(?:staff|principal)\b"), SeniorityLevel.LEAD),
    (re.compile(r"\b(?:manager|engineering[\s-]?manager)\b"), SeniorityLevel.MANAGER),
    (re.compile(r"\bdirector\b"), SeniorityLevel.DIRECTOR),
    (re.compile(r"\b(?:vp|vice[\s-]?president)\b"), SeniorityLevel.VP),
    (re.compile(r"\b(?:cto|ceo|chief)\b"), SeniorityLevel.C_LEVEL),
]
_ANY_YEARS_RE = re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\b")


def estimate_seniority(title: str, description: str = "") -> Optional[SeniorityLevel]:
    """
    Keyword rules over title + description, then a fallback on the first
    "N years" mention. None when nothing points at a level.
    """
    text = normalize_text(f"{title or ''} {description or ''}").lower()

    for rx, level in _SENIORITY_RULES:
        if rx.search(text):
            return level
    if _SENIOR_RE.search(text) and not _ABOVE_SENIOR_RE.search(text):
        return SeniorityLevel.SENIOR
    for rx, level in _LATER_RULES:
        if rx.search(text):
            return level

    m = _ANY_YEARS_RE.search(text)
    if m:
        years = int(m.group(1))
        if years <= 1:
            return SeniorityLevel.JUNIOR
        if years <= 3:
            return SeniorityLevel.MID
        if years <= 6:
            return SeniorityLevel.SENIOR
        return SeniorityLevel.LEAD

    return None


# --- Salary ---

SALARY_FLOOR = 20_000
SALARY_CEILING = 1_000_000

_AMOUNT = r"(\d{1,3}(?:[,.]\d{3})+|\d+(?:\.\d+)?)\s*(k\b)?"
_RANGE_SEP = r"\s*(?:-|to)\s*"

_DOLLAR_RANGE_RE = re.compile(rf"\$\s*{_AMOUNT}{_RANGE_SEP}\$?\s*{_AMOUNT}", re.IGNORECASE)
_SUFFIXED_RANGE_RE = re.compile(
    rf"{_AMOUNT}{_RANGE_SEP}{_AMOUNT}\s*(?:usd|per\s+year|annually|/\s*yr|/\s*year)",
    re.IGNORECASE,
)
_DOLLAR_SINGLE_RE = re.compile(rf"\$\s*{_AMOUNT}", re.IGNORECASE)
# Hourly / monthly pay right after a figure; never an annual salary.
_NOT_ANNUAL_RE = re.compile(
    r"\s*(?:/\s*(?:hr|hour|h|mo|month)\b|per\s+(?:hour|month)\b|an?\s+hour\b|hourly\b)",
    re.IGNORECASE,
)


def _parse_amount(number: str, k_suffix: Optional[str], *, bare_means_thousands: bool = False) -> int:
    if re.fullmatch(r"\d{1,3}(?:[,.]\d{3})+", number):
        value = float(re.sub(r"[,.]", "", number))
    else:
        value = float(number)
    # "$120k" always means thousands; "$120 - 150" only inside a range
    if k_suffix or (bare_means_thousands and value < 1000):
        value *= 1000
    return int(round(value))


def _sane(low: int, high: int) -> Optional[SalaryRange]:
    if SALARY_FLOOR <= low <= high <= SALARY_CEILING:
        return SalaryRange(min=low, max=high)
    return None


def _is_not_annual(t: str, end: int) -> bool:
    return _NOT_ANNUAL_RE.match(t, end) is not None


def extract_salary(text: str) -> Optional[SalaryRange]:
    """
    Annual salary range mentioned in posting text.

    "$120,000 - $150,000" -> SalaryRange(120000, 150000)
    "$100k - $130k"       -> SalaryRange(100000, 130000)
    "$120,000"            -> SalaryRange(120000, 120000)
    "competitive salary"  -> None
    "$30/hr"              -> None
    """
    t = normalize_text(text)
    if not t:
        return None

    saw_range = False
    for rx in (_DOLLAR_RANGE_RE, _SUFFIXED_RANGE_RE):
        m = rx.search(t)
        if m:
            saw_range = True
            if _is_not_annual(t, m.end()):
                continue
            low = _parse_amount(m.group(1), m.group(2), bare_means_thousands=True)
            high = _parse_amount(m.group(3), m.group(4), bare_means_thousands=True)
            found = _sane(low, high)
            if found:
                return found

    # A rejected range is not retried as a single figure.
    if saw_range:
        return None

    m = _DOLLAR_SINGLE_RE.search(t)
    if m and not _is_not_annual(t, m.end()):
        amount = _parse_amount(m.group(1), m.group(2))
        return _sane(amount, amount)

    return None


def build_job_posting(title: str, description: str = "", **fields: Any) -> JobPosting:
    """
    JobPosting from raw posting text. Caller-supplied fields win; keywords,
    seniority and salary are filled from the text only when missing.
    """
    text = f"{title or ''}\n{description or ''}"

    if not fields.get("keywords"):
        fields["keywords"] = extract_keywords(text)
    if fields.get("seniority") is None:
        fields["seniority"] = estimate_seniority(title, description)
    if fields.get("salary_min") is None and fields.get("salary_max") is None:
        salary = extract_salary(description)
        if salary:
            fields["salary_min"] = salary.min
            fields["salary_max"] = salary.max

    return JobPosting(title=title, **fields)
