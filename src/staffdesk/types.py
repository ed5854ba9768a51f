from __future__ import annotations

from datetime import date
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

VacancyStatus = Literal["active", "filled", "expired"]
VacancyPipelineStage = Literal["detected", "contacted", "proposal", "won", "lost"]
VacancySource = Literal["indeed", "linkedin", "company_website", "manual"]
SeniorityLevel = Literal[
    "entry_level",
    "mid_level",
    "mid_senior",
    "senior",
    "lead",
    "manager",
    "director",
    "executive",
]
WorkModality = Literal["on_site", "remote", "hybrid"]
JobType = Literal["full_time", "part_time", "contract", "temporary", "internship"]

CompanyRelationshipType = Literal["client", "prospect", "lead", "inactive"]
CompanyPipelineStage = Literal[
    "lead",
    "prospecting",
    "engaged",
    "proposal",
    "initial_appointment_held",
    "onboarding_started",
    "client",
    "lost",
]
Industry = Literal[
    "technology",
    "healthcare",
    "financial_services",
    "manufacturing",
    "retail",
    "energy",
    "education",
    "logistics",
    "construction",
    "other",
]
CompanySize = Literal["1-50", "50-100", "100-200", "200-500", "500-1000", "1000-5000", "5000+"]
Country = Literal["USA", "Mexico", "Colombia", "Argentina", "Chile", "Peru", "Brazil"]
ResearchStatus = Literal["pending", "completed"]
KpiColor = Literal["purple", "blue", "green", "orange"]

T = TypeVar("T")

VACANCY_STATUS_LABELS: dict[str, str] = {
    "active": "Active",
    "filled": "Filled",
    "expired": "Expired",
}

PIPELINE_STAGE_LABELS: dict[str, str] = {
    "detected": "Detected",
    "contacted": "Contacted",
    "proposal": "Proposal",
    "won": "Won",
    "lost": "Lost",
}

VACANCY_SOURCE_LABELS: dict[str, str] = {
    "indeed": "Indeed",
    "linkedin": "LinkedIn",
    "company_website": "Website",
    "manual": "Manual",
}

COMPANY_RELATIONSHIP_LABELS: dict[str, str] = {
    "client": "Client",
    "prospect": "Prospect",
    "lead": "Lead",
    "inactive": "Inactive",
}

COMPANY_PIPELINE_LABELS: dict[str, str] = {
    "lead": "Lead",
    "prospecting": "Prospecting",
    "engaged": "Engaged",
    "proposal": "Proposal",
    "initial_appointment_held": "Initial Appointment Held",
    "onboarding_started": "Onboarding Started",
    "client": "Client",
    "lost": "Lost",
}

INDUSTRY_LABELS: dict[str, str] = {
    "technology": "Technology",
    "healthcare": "Healthcare",
    "financial_services": "Financial Services",
    "manufacturing": "Manufacturing",
    "retail": "Retail",
    "energy": "Energy",
    "education": "Education",
    "logistics": "Logistics",
    "construction": "Construction",
    "other": "Other",
}


def _required_text(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("must not be blank")
    return cleaned


def _iso_date(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise ValueError("must be an ISO date (YYYY-MM-DD)") from None


class Vacancy(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    job_title: str
    company_id: int
    company_name: str
    location: str = "Unknown"
    department: str | None = None
    seniority_level: SeniorityLevel | None = None
    job_type: JobType | None = None
    work_modality: WorkModality | None = None
    is_remote_viable: bool | None = None
    salary_range: str | None = None
    status: VacancyStatus = "active"
    pipeline_stage: VacancyPipelineStage = "detected"
    source: VacancySource = "manual"
    job_url: str | None = None
    published_date: str
    scraped_at: str | None = None
    description: str | None = None
    notes: str | None = None
    assigned_to: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("published_date")
    @classmethod
    def validate_published_date(cls, value: str) -> str:
        return _iso_date(value)


class VacancyStateChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    user: str
    from_state: VacancyPipelineStage | None = None
    to_state: VacancyPipelineStage
    note: str
    tags: tuple[str, ...] = ()


class Contact(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    full_name: str
    job_title: str
    email: str | None = None
    phone: str | None = None
    linkedin_url: str | None = None
    is_primary: bool = False


class Research(BaseModel):
    value_proposition: str | None = None
    mission: str | None = None
    vision: str | None = None
    sales_pitch: str | None = None
    last_research_date: str | None = None
    completeness_percent: int = Field(default=0, ge=0, le=100)


class Company(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    name: str
    industry: Industry | None = None
    location: str | None = None
    relationship_type: CompanyRelationshipType = "lead"
    pipeline_stage: CompanyPipelineStage = "lead"
    website: str | None = None
    phone: str | None = None
    employees: CompanySize | None = None
    country: Country | None = None
    contacts: list[Contact] = Field(default_factory=list)
    research: Research | None = None
    research_status: ResearchStatus | None = None
    assigned_to: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CompanyStateChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    user: str
    from_state: CompanyPipelineStage | None = None
    to_state: CompanyPipelineStage
    note: str
    tags: tuple[str, ...] = ()


class Page(BaseModel, Generic[T]):
    data: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int
    total_pages: int = 0


class VacancyCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    job_title: str
    company_id: int
    company_name: str | None = None
    location: str | None = None
    department: str | None = None
    seniority_level: SeniorityLevel | None = None
    job_type: JobType | None = None
    work_modality: WorkModality | None = None
    is_remote_viable: bool | None = None
    salary_range: str | None = None
    status: VacancyStatus | None = None
    pipeline_stage: VacancyPipelineStage | None = None
    source: VacancySource | None = None
    job_url: str | None = None
    published_date: str | None = None
    scraped_at: str | None = None
    description: str | None = None
    notes: str | None = None
    assigned_to: str | None = None

    @field_validator("job_title")
    @classmethod
    def validate_job_title(cls, value: str) -> str:
        return _required_text(value)

    @field_validator("published_date")
    @classmethod
    def validate_published_date(cls, value: str | None) -> str | None:
        return _iso_date(value)


class VacancyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    job_title: str | None = None
    company_id: int | None = None
    company_name: str | None = None
    location: str | None = None
    department: str | None = None
    seniority_level: SeniorityLevel | None = None
    job_type: JobType | None = None
    work_modality: WorkModality | None = None
    is_remote_viable: bool | None = None
    salary_range: str | None = None
    status: VacancyStatus | None = None
    source: VacancySource | None = None
    job_url: str | None = None
    published_date: str | None = None
    description: str | None = None
    notes: str | None = None
    assigned_to: str | None = None

    @field_validator("published_date")
    @classmethod
    def validate_published_date(cls, value: str | None) -> str | None:
        return _iso_date(value)


class CompanyCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    website: str | None = None
    industry: Industry | None = None
    location: str | None = None
    employees: CompanySize | None = None
    phone: str | None = None
    country: Country | None = None
    relationship_type: CompanyRelationshipType | None = None
    pipeline_stage: CompanyPipelineStage | None = None
    assigned_to: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _required_text(value)


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    website: str | None = None
    industry: Industry | None = None
    location: str | None = None
    employees: CompanySize | None = None
    phone: str | None = None
    country: Country | None = None
    relationship_type: CompanyRelationshipType | None = None
    research_status: ResearchStatus | None = None
    assigned_to: str | None = None


class CompanyInvestigate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    country: Country
    website: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _required_text(value)


class ContactCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: str
    job_title: str
    email: str | None = None
    phone: str | None = None
    linkedin_url: str | None = None
    is_primary: bool | None = None

    @field_validator("full_name", "job_title")
    @classmethod
    def validate_required(cls, value: str) -> str:
        return _required_text(value)


class ContactUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: str | None = None
    job_title: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin_url: str | None = None
    is_primary: bool | None = None


class ResearchUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value_proposition: str | None = Field(default=None, max_length=2000)
    mission: str | None = Field(default=None, max_length=2000)
    vision: str | None = Field(default=None, max_length=2000)
    sales_pitch: str | None = Field(default=None, max_length=2000)


class StateChangeRequest(BaseModel):
    new_state: str
    note: str = ""
    tags: list[str] | None = None


class PaginationParams(BaseModel):
    page: int = Field(default=1, ge=1)
    page_size: int | None = Field(default=None, ge=1)
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None


class VacancyFilterParams(PaginationParams):
    search: str | None = None
    status: VacancyStatus | None = None
    pipeline_stage: VacancyPipelineStage | None = None
    source: VacancySource | None = None
    state: str | None = None
    company: str | None = None
    company_id: int | None = None
    date_from: str | None = None
    date_to: str | None = None
    assigned_to: str | None = None


class CompanyFilterParams(PaginationParams):
    search: str | None = None
    relationship_type: CompanyRelationshipType | None = None
    pipeline_stage: CompanyPipelineStage | None = None
    industry: Industry | None = None
    location: str | None = None
    country: Country | None = None
    assigned_to: str | None = None


class HistoryFilterParams(BaseModel):
    stage: str | None = None
    user: str | None = None
    date_from: str | None = None
    date_to: str | None = None


class KpiItem(BaseModel):
    label: str
    value: str
    icon: str
    color: KpiColor


class DashboardData(BaseModel):
    vacancy_kpis: list[KpiItem] = Field(default_factory=list)
    company_kpis: list[KpiItem] = Field(default_factory=list)
    vacancy_counts: dict[str, int] = Field(default_factory=dict)
    company_counts: dict[str, int] = Field(default_factory=dict)
