"""
Pure formatting helpers for the job description document.

Structured fields always produce a string (falling back to NOT_SPECIFIED);
free-text helpers return empty lists so the caller can drop the section.
"""

import re
from collections.abc import Iterable
from datetime import date, datetime

from jd_renderer.models.job import JobType

NOT_SPECIFIED = "Not specified"
NOT_AVAILABLE = "Not Available"
AVAILABLE = "Available"

JOB_TYPE_LABELS = {
    JobType.FULL_TIME.value: "Full time",
    JobType.PART_TIME.value: "Part Time",
    JobType.CONTRACT.value: "Contract",
    JobType.INTERNSHIP.value: "Internship",
    JobType.FREELANCE.value: "Freelance",
}

# Serialisation debris that leaks from upstream, e.g. '{"Pune","Mumbai"}' or "['B.Tech']"
_WRAPPER_CHARS = "{}[]\"' "
_QUOTE_CHARS = "\"' "
_LEADING_BULLET = re.compile(r"^(?:[•\-*]\s*)+")
# fromisoformat only accepts a trailing "Z" from Python 3.11
_UTC_SUFFIX = re.compile(r"[Zz]$")


def format_number(value: float | int) -> str:
    """Thousands-separated number; integral floats lose their decimals."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


def format_job_type(job_type: str | None) -> str:
    if not job_type:
        return NOT_SPECIFIED
    return JOB_TYPE_LABELS.get(job_type, job_type)


def format_salary(currency: str, salary_min: float | None, salary_max: float | None) -> str:
    """
    Render a salary range.

    Zero bounds are treated as absent, mirroring how the platform stores
    "not disclosed".
    """
    if salary_min and salary_max:
        return f"{currency} {format_number(salary_min)} - {format_number(salary_max)}"
    if salary_min:
        return f"{currency} {format_number(salary_min)}+"
    if salary_max:
        return f"{currency} Up to {format_number(salary_max)}"
    return NOT_SPECIFIED


def format_experience(experience_min: float | None, experience_max: float | None) -> str:
    """
    Render an experience range in years.

    An explicit minimum of zero with a maximum reads "Up to N years", never "0-N years".
    """
    if experience_min and experience_max:
        return f"{format_number(experience_min)}-{format_number(experience_max)} years"
    if experience_min:
        return f"{format_number(experience_min)}+ years"
    if experience_max:
        return f"Up to {format_number(experience_max)} years"
    return NOT_SPECIFIED


def join_values(value: str | Iterable[str] | None) -> str:
    """
    Normalise a single value or a list into one comma-joined string.

    Strings that carry set/list syntax from upstream serialisation are split
    on commas and stripped of brace, bracket and quote characters.
    """
    if not value:
        return NOT_SPECIFIED
    if isinstance(value, str):
        raw_items = value.strip().strip(_WRAPPER_CHARS).split(",")
        items = [item.strip().strip(_WRAPPER_CHARS).strip(_QUOTE_CHARS) for item in raw_items]
    else:
        # list items are real values; only whitespace is trimmed
        items = [str(item).strip() for item in value]

    items = [item for item in items if item]
    return ", ".join(items) if items else NOT_SPECIFIED


def split_bullets(text: str | None) -> list[str]:
    """Split multi-line text into bullet items without pre-existing bullet markers."""
    if not text:
        return []
    items = []
    for line in text.splitlines():
        cleaned = _LEADING_BULLET.sub("", line.strip()).strip()
        if cleaned:
            items.append(cleaned)
    return items


def skill_columns(count: int) -> int:
    """Column count for the skills grid: 1, 2, or 3 for three skills and more."""
    if count <= 1:
        return 1
    if count == 2:
        return 2
    return 3


def format_flag(value: bool, yes: str = AVAILABLE, no: str = NOT_AVAILABLE) -> str:
    return yes if value else no


def parse_date(value: datetime | date | str | None) -> date | None:
    """Best-effort conversion to a date; returns None when the value is not a date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(_UTC_SUFFIX.sub("+00:00", value.strip())).date()
    except ValueError:
        return None


def format_date(value: datetime | date | str | None) -> str:
    """Long US-style date ("March 15, 2025"); unparseable strings pass through."""
    if value is None or value == "":
        return NOT_SPECIFIED
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_timestamp(moment: datetime) -> str:
    """Footer generation stamp, DD/MM/YYYY HH:MM."""
    return moment.strftime("%d/%m/%Y %H:%M")
