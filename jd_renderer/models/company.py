from pydantic import BaseModel, ConfigDict, Field


class CompanyProfile(BaseModel):
    """
    Corporate profile shown in the document header and company summary.
    """

    id: str | None = Field(None, description="The unique ID of the corporate profile.")
    company_name: str | None = Field(None, description="Display name of the company.")
    company_email: str | None = Field(None, description="Public contact email.")
    website_url: str | None = Field(None, description="Company website.")
    industry: str | None = Field(None, description="Industry the company operates in.")
    company_size: str | None = Field(None, description="Headcount bracket, e.g. 100-500 employees.")
    founded_year: int | None = Field(None, description="Year the company was founded.")
    description: str | None = Field(None, description="About the company.")
    company_type: str | None = Field(None, description="Private, public, startup...")
    company_logo: str | None = Field(None, description="Logo URL or data URL.")
    verified: bool = Field(False, description="Whether the profile is verified.")
    contact_person: str | None = Field(None, description="Recruiter or HR contact.")
    contact_designation: str | None = Field(None, description="Designation of the contact person.")
    address: str | None = Field(None, description="Registered address.")

    model_config = ConfigDict(extra="ignore", from_attributes=True)
