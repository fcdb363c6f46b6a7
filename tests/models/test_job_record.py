import pytest
from pydantic import ValidationError

from jd_renderer.models.company import CompanyProfile
from jd_renderer.models.job import JobRecord


def test_job_record_requires_title_and_description():
    """Test that title and description are the only required fields."""
    with pytest.raises(ValidationError) as exc_info:
        JobRecord(title="Engineer")

    assert "description" in str(exc_info.value)


def test_job_record_defaults(minimal_job):
    """Test defaults for an otherwise empty job."""
    assert minimal_job.skills_required == []
    assert minimal_job.salary_currency == "INR"
    assert minimal_job.remote_work is False
    assert minimal_job.travel_required is False
    assert minimal_job.onsite_office is False
    assert minimal_job.location is None


def test_null_skills_are_treated_as_empty():
    job = JobRecord.model_validate({"title": "QA", "description": "Test things", "skills_required": None})

    assert job.skills_required == []


def test_numeric_ctc_is_coerced_to_text():
    job = JobRecord(title="QA", description="Test things", ctc_with_probation=1200000, ctc_after_probation=7.5)

    assert job.ctc_with_probation == "1200000"
    assert job.ctc_after_probation == "7.5"


def test_unknown_keys_are_ignored():
    """Test that extra upstream fields do not fail validation."""
    job = JobRecord.model_validate(
        {"title": "QA", "description": "Test things", "applicants_count": 42, "status": "open"}
    )

    assert not hasattr(job, "applicants_count")


def test_unknown_job_type_is_kept():
    job = JobRecord(title="QA", description="Test things", job_type="apprenticeship")

    assert job.job_type == "apprenticeship"


def test_location_accepts_string_or_list():
    assert JobRecord(title="QA", description="d", location="Pune").location == "Pune"
    assert JobRecord(title="QA", description="d", location=["Pune", "Delhi"]).location == ["Pune", "Delhi"]


def test_company_profile_is_entirely_optional():
    company = CompanyProfile()

    assert company.company_name is None
    assert company.verified is False
