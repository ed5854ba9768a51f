from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from staffdesk.types import CompanyStateChange, VacancyStateChange

if TYPE_CHECKING:
    from staffdesk.core.engine import CRMEngine

logger = logging.getLogger(__name__)

SEED_COMPANIES: list[dict[str, object]] = [
    {
        "id": 1,
        "name": "TechCorp Solutions",
        "industry": "technology",
        "location": "Miami, FL",
        "relationship_type": "client",
        "pipeline_stage": "onboarding_started",
        "website": "https://techcorp.com",
        "phone": "+1 (305) 555-0123",
        "employees": "500-1000",
        "country": "USA",
        "contacts": [
            {
                "id": 1,
                "full_name": "John Smith",
                "job_title": "HR Director",
                "email": "john.smith@techcorp.com",
                "phone": "+1 (305) 555-0124",
                "linkedin_url": "linkedin.com/in/johnsmith",
                "is_primary": True,
            },
            {
                "id": 2,
                "full_name": "Sarah Johnson",
                "job_title": "Talent Acquisition Manager",
                "email": "sarah.j@techcorp.com",
                "phone": "+1 (305) 555-0125",
                "linkedin_url": "linkedin.com/in/sarahjohnson",
                "is_primary": False,
            },
        ],
        "research": {
            "value_proposition": (
                "Technology solutions that change how companies operate, "
                "raising operational efficiency by 40% on average."
            ),
            "mission": "Give organizations leading-edge technology to drive their digital transformation.",
            "vision": "Be the global leader in enterprise technology solutions by 2030.",
            "sales_pitch": (
                "TechCorp delivers tailored solutions with proven ROI within 6 months. "
                "A team of 500+ engineers provides round-the-clock support."
            ),
            "last_research_date": "2025-12-15",
        },
        "created_at": "2025-06-15",
        "updated_at": "2025-12-15",
        "assigned_to": "Carlos M.",
        "research_status": "completed",
    },
    {
        "id": 2,
        "name": "Global Manufacturing Inc",
        "industry": "manufacturing",
        "location": "Houston, TX",
        "relationship_type": "prospect",
        "pipeline_stage": "prospecting",
        "website": "https://globalmanufacturing.com",
        "phone": "+1 (713) 555-0100",
        "employees": "1000-5000",
        "country": "USA",
        "contacts": [
            {
                "id": 3,
                "full_name": "Michael Brown",
                "job_title": "VP of Operations",
                "email": "m.brown@globalmanufacturing.com",
                "phone": "+1 (713) 555-0101",
                "is_primary": True,
            },
        ],
        "research": {},
        "created_at": "2025-09-10",
        "updated_at": "2025-12-10",
        "assigned_to": "María G.",
        "research_status": "pending",
    },
    {
        "id": 3,
        "name": "HealthFirst Medical",
        "industry": "healthcare",
        "location": "Atlanta, GA",
        "relationship_type": "lead",
        "pipeline_stage": "lead",
        "website": "https://healthfirstmedical.com",
        "phone": "+1 (404) 555-0200",
        "employees": "200-500",
        "country": "USA",
        "contacts": [],
        "research": {},
        "created_at": "2025-11-20",
        "updated_at": "2025-11-20",
    },
    {
        "id": 4,
        "name": "Financial Partners LLC",
        "industry": "financial_services",
        "location": "New York, NY",
        "relationship_type": "client",
        "pipeline_stage": "onboarding_started",
        "website": "https://financialpartners.com",
        "phone": "+1 (212) 555-0300",
        "employees": "100-200",
        "country": "USA",
        "contacts": [
            {
                "id": 4,
                "full_name": "Emily Davis",
                "job_title": "Chief People Officer",
                "email": "e.davis@financialpartners.com",
                "phone": "+1 (212) 555-0301",
                "linkedin_url": "linkedin.com/in/emilydavis",
                "is_primary": True,
            },
        ],
        "research": {
            "value_proposition": "Tailored financial services for mid-sized companies.",
            "mission": "Open up access to high-quality financial services.",
        },
        "created_at": "2025-03-05",
        "updated_at": "2025-12-01",
        "assigned_to": "Carlos M.",
        "research_status": "completed",
    },
    {
        "id": 5,
        "name": "Retail Masters Group",
        "industry": "retail",
        "location": "Chicago, IL",
        "relationship_type": "prospect",
        "pipeline_stage": "engaged",
        "website": "https://retailmasters.com",
        "phone": "+1 (312) 555-0400",
        "employees": "5000+",
        "country": "USA",
        "contacts": [
            {
                "id": 5,
                "full_name": "Robert Wilson",
                "job_title": "HR Manager",
                "email": "r.wilson@retailmasters.com",
                "is_primary": True,
            },
        ],
        "research": {},
        "created_at": "2025-08-12",
        "updated_at": "2025-12-08",
        "assigned_to": "Juan P.",
        "research_status": "pending",
    },
    {
        "id": 6,
        "name": "CloudScale Technologies",
        "industry": "technology",
        "location": "San Francisco, CA",
        "relationship_type": "prospect",
        "pipeline_stage": "initial_appointment_held",
        "website": "https://cloudscale.io",
        "phone": "+1 (415) 555-0500",
        "employees": "200-500",
        "country": "USA",
        "contacts": [
            {
                "id": 6,
                "full_name": "Amanda Chen",
                "job_title": "Head of Talent",
                "email": "a.chen@cloudscale.io",
                "phone": "+1 (415) 555-0501",
                "linkedin_url": "linkedin.com/in/amandachen",
                "is_primary": True,
            },
        ],
        "research": {
            "value_proposition": "Cloud infrastructure platform that scales automatically with demand.",
            "vision": "Lead the serverless infrastructure shift.",
            "sales_pitch": "CloudScale cuts infrastructure costs by 60% with pay-per-use pricing.",
        },
        "created_at": "2025-07-20",
        "updated_at": "2025-12-12",
        "assigned_to": "Carlos M.",
        "research_status": "completed",
    },
    {
        "id": 7,
        "name": "Logistics Pro",
        "industry": "logistics",
        "location": "Dallas, TX",
        "relationship_type": "lead",
        "pipeline_stage": "lead",
        "website": "https://logisticspro.com",
        "employees": "500-1000",
        "country": "USA",
        "contacts": [],
        "research": {},
        "created_at": "2025-12-01",
        "updated_at": "2025-12-01",
    },
    {
        "id": 8,
        "name": "EduTech Learning",
        "industry": "education",
        "location": "Boston, MA",
        "relationship_type": "inactive",
        "pipeline_stage": "lost",
        "website": "https://edutechlearning.com",
        "phone": "+1 (617) 555-0700",
        "employees": "50-100",
        "country": "USA",
        "contacts": [
            {
                "id": 7,
                "full_name": "Jennifer Lee",
                "job_title": "CEO",
                "email": "j.lee@edutechlearning.com",
                "is_primary": True,
            },
        ],
        "research": {},
        "created_at": "2025-02-10",
        "updated_at": "2025-10-15",
        "assigned_to": "María G.",
        "research_status": "completed",
    },
    {
        "id": 9,
        "name": "Green Energy Corp",
        "industry": "energy",
        "location": "Denver, CO",
        "relationship_type": "prospect",
        "pipeline_stage": "prospecting",
        "website": "https://greenenergycorp.com",
        "phone": "+1 (303) 555-0800",
        "employees": "200-500",
        "country": "USA",
        "contacts": [
            {
                "id": 8,
                "full_name": "David Martinez",
                "job_title": "HR Director",
                "email": "d.martinez@greenenergycorp.com",
                "is_primary": True,
            },
        ],
        "research": {"mission": "Speed up the transition to renewable energy."},
        "created_at": "2025-09-25",
        "updated_at": "2025-12-05",
    },
    {
        "id": 10,
        "name": "Construction Plus",
        "industry": "construction",
        "location": "Phoenix, AZ",
        "relationship_type": "client",
        "pipeline_stage": "onboarding_started",
        "website": "https://constructionplus.com",
        "phone": "+1 (602) 555-0900",
        "employees": "1000-5000",
        "country": "USA",
        "contacts": [
            {
                "id": 9,
                "full_name": "Patricia Garcia",
                "job_title": "Talent Director",
                "email": "p.garcia@constructionplus.com",
                "phone": "+1 (602) 555-0901",
                "is_primary": True,
            },
        ],
        "research": {
            "value_proposition": "High-quality commercial construction with guaranteed timelines.",
            "sales_pitch": "Construction Plus delivered 98% of projects on time over the last 5 years.",
        },
        "created_at": "2025-04-18",
        "updated_at": "2025-11-30",
        "assigned_to": "Juan P.",
        "research_status": "pending",
    },
    {
        "id": 13,
        "name": "SalesForce Pro",
        "industry": "technology",
        "location": "Austin, TX",
        "relationship_type": "prospect",
        "pipeline_stage": "prospecting",
        "website": "https://salesforcepro.com",
        "phone": "+1 (512) 555-1100",
        "employees": "200-500",
        "country": "USA",
        "contacts": [],
        "research": {},
        "created_at": "2025-09-05",
        "updated_at": "2025-12-10",
        "assigned_to": "Carlos M.",
        "research_status": "pending",
    },
    {
        "id": 14,
        "name": "SecureNet Systems",
        "industry": "technology",
        "location": "Seattle, WA",
        "relationship_type": "lead",
        "pipeline_stage": "lead",
        "website": "https://securenetsystems.com",
        "phone": "+1 (206) 555-1200",
        "employees": "100-200",
        "country": "USA",
        "contacts": [],
        "research": {},
        "created_at": "2025-10-01",
        "updated_at": "2025-12-01",
        "research_status": "pending",
    },
    {
        "id": 15,
        "name": "Industrial Dynamics",
        "industry": "manufacturing",
        "location": "Detroit, MI",
        "relationship_type": "prospect",
        "pipeline_stage": "prospecting",
        "website": "https://industrialdynamics.com",
        "phone": "+1 (313) 555-1300",
        "employees": "500-1000",
        "country": "USA",
        "contacts": [],
        "research": {},
        "created_at": "2025-07-12",
        "updated_at": "2025-12-03",
        "assigned_to": "Juan P.",
        "research_status": "pending",
    },
    {
        "id": 16,
        "name": "AppVenture Studios",
        "industry": "technology",
        "location": "Los Angeles, CA",
        "relationship_type": "lead",
        "pipeline_stage": "lead",
        "website": "https://appventurestudios.com",
        "phone": "+1 (213) 555-1400",
        "employees": "50-100",
        "country": "USA",
        "contacts": [],
        "research": {},
        "created_at": "2025-08-22",
        "updated_at": "2025-12-02",
        "research_status": "pending",
    },
]

SEED_VACANCIES: list[dict[str, object]] = [
    {
        "id": 1,
        "job_title": "Senior Software Engineer",
        "company_id": 1,
        "location": "Miami, FL",
        "department": "Engineering",
        "seniority_level": "senior",
        "job_type": "full_time",
        "work_modality": "hybrid",
        "is_remote_viable": True,
        "salary_range": "$120,000 - $160,000",
        "status": "active",
        "pipeline_stage": "contacted",
        "source": "indeed",
        "published_date": "2025-12-13",
        "notes": "Ideal candidate with React and Node.js experience.",
    },
    {
        "id": 2,
        "job_title": "Product Manager",
        "company_id": 6,
        "location": "San Francisco, CA",
        "department": "Product",
        "seniority_level": "senior",
        "job_type": "full_time",
        "work_modality": "remote",
        "is_remote_viable": True,
        "salary_range": "$140,000 - $180,000",
        "status": "active",
        "pipeline_stage": "proposal",
        "source": "linkedin",
        "published_date": "2025-12-12",
    },
    {
        "id": 3,
        "job_title": "Registered Nurse - ICU",
        "company_id": 3,
        "location": "Atlanta, GA",
        "department": "Nursing",
        "seniority_level": "mid_level",
        "job_type": "full_time",
        "work_modality": "on_site",
        "is_remote_viable": False,
        "salary_range": "$75,000 - $95,000",
        "status": "active",
        "pipeline_stage": "detected",
        "source": "company_website",
        "published_date": "2025-12-11",
    },
    {
        "id": 4,
        "job_title": "Financial Analyst",
        "company_id": 4,
        "location": "New York, NY",
        "department": "Finance",
        "seniority_level": "mid_level",
        "job_type": "full_time",
        "work_modality": "hybrid",
        "is_remote_viable": True,
        "salary_range": "$90,000 - $120,000",
        "status": "filled",
        "pipeline_stage": "won",
        "source": "indeed",
        "published_date": "2025-12-05",
    },
    {
        "id": 5,
        "job_title": "Store Manager",
        "company_id": 5,
        "location": "Chicago, IL",
        "department": "Operations",
        "seniority_level": "mid_senior",
        "job_type": "full_time",
        "work_modality": "on_site",
        "is_remote_viable": False,
        "salary_range": "$65,000 - $85,000",
        "status": "active",
        "pipeline_stage": "detected",
        "source": "indeed",
        "published_date": "2025-12-10",
    },
    {
        "id": 6,
        "job_title": "DevOps Engineer",
        "company_id": 6,
        "location": "San Francisco, CA",
        "department": "Infrastructure",
        "seniority_level": "senior",
        "job_type": "full_time",
        "work_modality": "remote",
        "is_remote_viable": True,
        "salary_range": "$130,000 - $170,000",
        "status": "active",
        "pipeline_stage": "contacted",
        "source": "linkedin",
        "published_date": "2025-12-14",
    },
    {
        "id": 7,
        "job_title": "Warehouse Supervisor",
        "company_id": 7,
        "location": "Dallas, TX",
        "department": "Warehouse",
        "seniority_level": "mid_level",
        "job_type": "full_time",
        "work_modality": "on_site",
        "is_remote_viable": False,
        "salary_range": "$55,000 - $70,000",
        "status": "expired",
        "pipeline_stage": "lost",
        "source": "indeed",
        "published_date": "2025-11-20",
    },
    {
        "id": 8,
        "job_title": "Marketing Coordinator",
        "company_id": 8,
        "location": "Boston, MA",
        "department": "Marketing",
        "seniority_level": "entry_level",
        "job_type": "full_time",
        "work_modality": "hybrid",
        "is_remote_viable": True,
        "salary_range": "$50,000 - $65,000",
        "status": "active",
        "pipeline_stage": "detected",
        "source": "company_website",
        "published_date": "2025-12-09",
    },
    {
        "id": 9,
        "job_title": "Solar Installation Technician",
        "company_id": 9,
        "location": "Denver, CO",
        "department": "Installation",
        "seniority_level": "mid_level",
        "job_type": "full_time",
        "work_modality": "on_site",
        "is_remote_viable": False,
        "salary_range": "$45,000 - $60,000",
        "status": "active",
        "pipeline_stage": "contacted",
        "source": "indeed",
        "published_date": "2025-12-08",
    },
    {
        "id": 10,
        "job_title": "Project Manager - Construction",
        "company_id": 10,
        "location": "Phoenix, AZ",
        "department": "Project Management",
        "seniority_level": "senior",
        "job_type": "full_time",
        "work_modality": "on_site",
        "is_remote_viable": False,
        "salary_range": "$95,000 - $125,000",
        "status": "active",
        "pipeline_stage": "proposal",
        "source": "linkedin",
        "published_date": "2025-12-07",
    },
    {
        "id": 11,
        "job_title": "Data Scientist",
        "company_id": 1,
        "location": "Miami, FL",
        "department": "Data Science",
        "seniority_level": "senior",
        "job_type": "full_time",
        "work_modality": "hybrid",
        "is_remote_viable": True,
        "salary_range": "$130,000 - $165,000",
        "status": "active",
        "pipeline_stage": "detected",
        "source": "indeed",
        "published_date": "2025-12-14",
    },
    {
        "id": 12,
        "job_title": "HR Generalist",
        "company_id": 2,
        "location": "Houston, TX",
        "department": "Human Resources",
        "seniority_level": "mid_level",
        "job_type": "full_time",
        "work_modality": "hybrid",
        "is_remote_viable": True,
        "salary_range": "$60,000 - $80,000",
        "status": "active",
        "pipeline_stage": "detected",
        "source": "company_website",
        "published_date": "2025-12-06",
    },
]

# Histories are newest-first.
SEED_VACANCY_HISTORY: dict[int, list[dict[str, object]]] = {
    1: [
        {
            "date": "2025-12-14T10:30:00+00:00",
            "user": "Carlos Mendoza",
            "from_state": "detected",
            "to_state": "contacted",
            "note": "First contact sent to HR Director. Awaiting response.",
            "tags": ["#email", "#outreach"],
        },
        {
            "date": "2025-12-13T14:30:00+00:00",
            "user": "System",
            "from_state": None,
            "to_state": "detected",
            "note": "Vacancy detected automatically from Indeed.",
            "tags": ["#auto"],
        },
    ],
}

SEED_COMPANY_HISTORY: dict[int, list[dict[str, object]]] = {
    1: [
        {
            "date": "2025-12-10",
            "user": "Carlos Mendoza",
            "from_state": "initial_appointment_held",
            "to_state": "onboarding_started",
            "note": "Contract signed. Client active from January.",
            "tags": ["#closing", "#contract"],
        },
        {
            "date": "2025-11-28",
            "user": "Carlos Mendoza",
            "from_state": "engaged",
            "to_state": "initial_appointment_held",
            "note": "Commercial proposal sent for 5 initial positions.",
            "tags": ["#proposal"],
        },
        {
            "date": "2025-11-15",
            "user": "María García",
            "from_state": "prospecting",
            "to_state": "engaged",
            "note": "Successful meeting with the HR Director. Interest confirmed.",
            "tags": ["#meeting", "#followup"],
        },
        {
            "date": "2025-10-20",
            "user": "Carlos Mendoza",
            "from_state": "lead",
            "to_state": "prospecting",
            "note": "Research started and first contact made.",
            "tags": [],
        },
    ],
    6: [
        {
            "date": "2025-12-12",
            "user": "Carlos Mendoza",
            "from_state": "engaged",
            "to_state": "initial_appointment_held",
            "note": "Proposal sent for DevOps and Product positions.",
            "tags": ["#proposal"],
        },
        {
            "date": "2025-11-20",
            "user": "María García",
            "from_state": "prospecting",
            "to_state": "engaged",
            "note": "Demo completed, strong interest in our services.",
            "tags": ["#demo", "#positive"],
        },
    ],
}


def seed_fixtures(engine: CRMEngine) -> dict[str, int]:
    """Load the demo data set into an empty engine. Companies go first so vacancies resolve."""
    if len(engine.company_store) or len(engine.vacancy_store):
        logger.info("engine already holds data; skipping fixtures")
        return {"companies": 0, "vacancies": 0, "history_entries": 0}

    companies = engine.company_store.load(SEED_COMPANIES)
    vacancies = engine.vacancy_store.load(SEED_VACANCIES)

    history_entries = 0
    for vacancy_id, entries in SEED_VACANCY_HISTORY.items():
        history_entries += engine.vacancy_transitions.trail.load(
            vacancy_id, [VacancyStateChange.model_validate(entry) for entry in entries]
        )
    for company_id, entries in SEED_COMPANY_HISTORY.items():
        history_entries += engine.company_transitions.trail.load(
            company_id, [CompanyStateChange.model_validate(entry) for entry in entries]
        )

    return {"companies": companies, "vacancies": vacancies, "history_entries": history_entries}
