from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DateLike = datetime | date | str
MultiValue = str | list[str]


class JobType(str, Enum):
    """Employment types known to the platform."""

    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    FREELANCE = "freelance"


class JobRecord(BaseModel):
    """
    Job posting as delivered by the platform API. Only title and description are required.
    """

    id: str | None = Field(None, description="The unique ID of the job record.")
    title: str = Field(..., description="The title of the job.")
    description: str = Field(..., description="A detailed description of the job.")
    requirements: str | None = Field(None, description="Requirements, one per line.")
    responsibilities: str | None = Field(None, description="Responsibilities, one per line.")
    job_type: str | None = Field(None, description="One of the JobType values; unknown values are kept.")
    location: MultiValue | None = Field(None, description="A location or list of locations.")
    remote_work: bool = Field(False, description="Whether remote work is available.")
    travel_required: bool = Field(False, description="Whether the role requires travel.")
    onsite_office: bool = Field(False, description="Whether an onsite office is available.")
    salary_min: float | None = Field(None, description="Lower salary bound.")
    salary_max: float | None = Field(None, description="Upper salary bound.")
    salary_currency: str = Field("INR", description="ISO currency code for the salary bounds.")
    experience_min: float | None = Field(None, description="Minimum experience in years.")
    experience_max: float | None = Field(None, description="Maximum experience in years.")
    education_level: MultiValue | None = Field(None, description="Required education level(s).")
    education_degree: MultiValue | None = Field(None, description="Accepted degree(s).")
    education_branch: MultiValue | None = Field(None, description="Accepted branch(es).")
    skills_required: list[str] = Field(default_factory=list, description="The required skills, in order.")
    application_deadline: DateLike | None = Field(None, description="Last date to apply.")
    industry: str | None = Field(None, description="The industry of the job.")
    selection_process: str | None = Field(None, description="Free-text selection process.")
    campus_drive_date: DateLike | None = Field(None, description="Date of the campus drive.")
    number_of_openings: int | None = Field(None, description="Number of open positions.")
    perks_and_benefits: str | None = Field(None, description="Perks, one per line.")
    eligibility_criteria: str | None = Field(None, description="Eligibility criteria, one per line.")
    service_agreement_details: str | None = Field(None, description="Service agreement / bond details.")
    ctc_with_probation: str | None = Field(None, description="Compensation during probation.")
    ctc_after_probation: str | None = Field(None, description="Compensation after probation.")
    corporate_name: str | None = Field(None, description="Company name denormalised onto the job.")
    created_at: DateLike | None = Field(None, description="When the job was posted.")
    expiration_date: DateLike | None = Field(None, description="When the posting expires.")

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    @field_validator("skills_required", mode="before")
    @classmethod
    def _none_skills_to_empty(cls, value):
        return [] if value is None else value

    @field_validator("ctc_with_probation", "ctc_after_probation", mode="before")
    @classmethod
    def _numbers_to_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value)) if float(value).is_integer() else str(value)
        return value
