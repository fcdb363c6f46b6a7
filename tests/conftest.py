import io
from contextlib import asynccontextmanager
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from jd_renderer.models.company import CompanyProfile
from jd_renderer.models.job import JobRecord

FIXED_NOW = datetime(2025, 3, 15, 9, 30)


def make_png(width: int, height: int, mode: str = "RGB", color=(30, 90, 160)) -> bytes:
    """Encode a solid-colour PNG of the given size."""
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeBrowser:
    """Stands in for BrowserSession: hands out one mocked page and records context lifecycle."""

    def __init__(self, page):
        self._page = page
        self.pages_opened = 0
        self.contexts_closed = 0
        self.is_running = False

    @asynccontextmanager
    async def page(self):
        self.pages_opened += 1
        try:
            yield self._page
        finally:
            self.contexts_closed += 1


# Record fixtures
@pytest.fixture
def sample_job():
    """A fully populated job record."""
    return JobRecord(
        id="job_123",
        title="Backend Engineer (Remote)!!",
        description="Build and operate the services behind our hiring platform.",
        requirements="• 3+ years with Python\n\n- Experience with REST APIs\n* Comfortable with SQL",
        responsibilities="Design APIs\nReview code\nMentor juniors",
        job_type="full_time",
        location=["Pune", "Remote"],
        remote_work=True,
        travel_required=False,
        onsite_office=True,
        salary_min=1200000,
        salary_max=1800000,
        salary_currency="INR",
        experience_min=2,
        experience_max=5,
        education_level="Bachelors",
        education_degree=["B.Tech", "B.E."],
        education_branch='{"Computer Science","IT"}',
        skills_required=["Python", "FastAPI", "PostgreSQL", "Docker", "AWS"],
        application_deadline="2025-04-01",
        industry="Information Technology",
        selection_process="Online test followed by two technical interviews.",
        campus_drive_date="2025-03-20",
        number_of_openings=4,
        perks_and_benefits="Health insurance\nRemote allowance\nAnnual bonus",
        eligibility_criteria="B.Tech 2025 batch\nNo active backlogs",
        service_agreement_details="12 month service agreement.",
        ctc_with_probation=600000,
        ctc_after_probation="12 LPA",
        created_at="2025-03-01T10:00:00",
        expiration_date="2025-04-30",
    )


@pytest.fixture
def minimal_job():
    """A job with only the required fields."""
    return JobRecord(title="Data Analyst", description="Analyse hiring funnel data.")


@pytest.fixture
def sample_company():
    return CompanyProfile(
        company_name="Acme Corp",
        company_email="careers@acme.example",
        website_url="https://acme.example",
        industry="Software",
        company_size="100-500 employees",
        founded_year=2010,
        description="Acme builds tools for recruiters.",
        company_logo="https://cdn.acme.example/logo.png",
    )


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


# Browser fixtures
@pytest.fixture
def mock_page():
    """A Playwright page double with async evaluate/set_content/screenshot."""
    page = MagicMock()
    page.evaluate = AsyncMock(return_value=None)
    page.set_content = AsyncMock()
    page.screenshot = AsyncMock(return_value=make_png(40, 50))
    return page


@pytest.fixture
def fake_browser(mock_page):
    return FakeBrowser(mock_page)
