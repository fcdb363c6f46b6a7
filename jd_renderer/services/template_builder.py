"""
HTML template builder for the job description document.

Produces self-contained markup (styles inline, logo as a data URL) laid out
as three A4-sized pages with a repeated header and footer.
"""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from jd_renderer.core.config import settings
from jd_renderer.models.company import CompanyProfile
from jd_renderer.models.job import JobRecord
from jd_renderer.services import formatting as fmt

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "job_description.html.j2"

# A4 at 96 CSS px per inch
PAGE_WIDTH_PX = 794
PAGE_HEIGHT_PX = 1123

LOGO_PLACEHOLDER_TEXT = "LOGO"
COMPANY_NAME_PLACEHOLDER = "Company Name Not Available"
COMPANY_DESCRIPTION_PLACEHOLDER = (
    "Company details have not been shared for this opening yet. "
    "Reach out to the placement cell for more information about the recruiter."
)

DEFAULT_PERKS = [
    "Competitive salary with performance-based incentives",
    "Health insurance for employees and their dependents",
    "Paid time off and a flexible leave policy",
    "Learning and development programs with certifications",
    "Collaborative and inclusive work environment",
]

DEFAULT_ELIGIBILITY = [
    "Graduates from recognised universities and institutes",
    "Minimum 60% aggregate throughout academics",
    "No active backlogs at the time of joining",
    "Strong communication and interpersonal skills",
    "Willingness to relocate as per business requirements",
]


class TemplateBuilder:
    """Builds the job description markup from job and company records."""

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        platform_name: str | None = None,
    ):
        self.clock = clock or datetime.now
        self.platform_name = platform_name or settings.platform_name
        self.env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(TEMPLATE_NAME)

    def _company_context(self, company: CompanyProfile | None, fallback_name: str | None) -> dict:
        company = company or CompanyProfile()
        founded = str(company.founded_year) if company.founded_year else fmt.NOT_SPECIFIED
        return {
            "name": company.company_name or fallback_name or COMPANY_NAME_PLACEHOLDER,
            "description": company.description or COMPANY_DESCRIPTION_PLACEHOLDER,
            "rows": [
                ("Industry", company.industry or fmt.NOT_SPECIFIED),
                ("Company Size", company.company_size or fmt.NOT_SPECIFIED),
                ("Founded", founded),
                ("Website", company.website_url or fmt.NOT_SPECIFIED),
            ],
        }

    def _footer_context(self, company: CompanyProfile | None, fallback_name: str | None, now: datetime) -> dict:
        contact_lines = []
        if company and company.website_url:
            contact_lines.append(company.website_url)
        if company and company.company_email:
            contact_lines.append(company.company_email)
        if not contact_lines:
            contact_lines.append(f"Generated by {self.platform_name} job portal")
        owner = (company.company_name if company else None) or fallback_name or self.platform_name
        return {
            "year": now.year,
            "owner": owner,
            "generated_at": fmt.format_timestamp(now),
            "contact_lines": contact_lines,
        }

    def _application_context(self, job: JobRecord, now: datetime) -> tuple[list, str | None]:
        rows = []
        if job.campus_drive_date:
            rows.append(("Campus Drive", fmt.format_date(job.campus_drive_date)))
        if job.application_deadline:
            rows.append(("Application Deadline", fmt.format_date(job.application_deadline)))

        status = None
        if job.expiration_date:
            rows.append(("Expiration Date", fmt.format_date(job.expiration_date)))
            expires_on = fmt.parse_date(job.expiration_date)
            if expires_on is not None:
                status = "Expired" if expires_on < now.date() else "Active"
        return rows, status

    def build_context(
        self,
        job: JobRecord,
        company: CompanyProfile | None = None,
        logo: str | None = None,
    ) -> dict:
        """Compute every value the template renders; no formatting happens in the template."""
        now = self.clock()
        application_rows, expiration_status = self._application_context(job, now)

        probation_rows = []
        if job.ctc_with_probation:
            probation_rows.append(("CTC During Probation", job.ctc_with_probation))
        if job.ctc_after_probation:
            probation_rows.append(("CTC After Probation", job.ctc_after_probation))

        skills = [skill.strip() for skill in job.skills_required if skill and skill.strip()]
        openings = str(job.number_of_openings) if job.number_of_openings else fmt.NOT_SPECIFIED
        posted_on = fmt.format_date(job.created_at) if job.created_at else fmt.NOT_SPECIFIED

        return {
            "page_width": PAGE_WIDTH_PX,
            "page_height": PAGE_HEIGHT_PX,
            "logo": logo,
            "logo_placeholder": LOGO_PLACEHOLDER_TEXT,
            "company": self._company_context(company, job.corporate_name),
            "footer": self._footer_context(company, job.corporate_name, now),
            "job_title": job.title,
            "job_facts": [
                ("Position", fmt.format_job_type(job.job_type)),
                ("Location", fmt.join_values(job.location)),
                ("Salary", fmt.format_salary(job.salary_currency, job.salary_min, job.salary_max)),
                ("Experience", fmt.format_experience(job.experience_min, job.experience_max)),
            ],
            "probation_rows": probation_rows,
            "description": job.description,
            "requirements": fmt.split_bullets(job.requirements),
            "skills": skills,
            "skill_columns": fmt.skill_columns(len(skills)),
            "responsibilities": fmt.split_bullets(job.responsibilities),
            "education_rows": [
                ("Education Level", fmt.join_values(job.education_level)),
                ("Degree", fmt.join_values(job.education_degree)),
                ("Branch", fmt.join_values(job.education_branch)),
            ],
            "additional_rows": [
                ("No. of Openings", openings),
                ("Remote Work", fmt.format_flag(job.remote_work)),
                ("Onsite Office", fmt.format_flag(job.onsite_office)),
                ("Travel Required", fmt.format_flag(job.travel_required, yes="Yes", no="No")),
                ("Industry", job.industry or fmt.NOT_SPECIFIED),
                ("Posted On", posted_on),
            ],
            "perks": fmt.split_bullets(job.perks_and_benefits) or DEFAULT_PERKS,
            "eligibility": fmt.split_bullets(job.eligibility_criteria) or DEFAULT_ELIGIBILITY,
            "selection_process": (job.selection_process or "").strip() or None,
            "service_agreement": (job.service_agreement_details or "").strip() or None,
            "application_rows": application_rows,
            "expiration_status": expiration_status,
        }

    def build(
        self,
        job: JobRecord,
        company: CompanyProfile | None = None,
        logo: str | None = None,
    ) -> str:
        """
        Render the job description markup.

        Args:
            job: The job being described.
            company: Optional company profile; placeholder copy is used without it.
            logo: Inline logo data URL, or None to render the placeholder box.

        Returns:
            str: A complete HTML document.
        """
        return self.template.render(**self.build_context(job, company, logo))
