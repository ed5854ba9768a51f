from __future__ import annotations

import re
from typing import Any

Rule = tuple[re.Pattern[str], str]

# Ordered; the first matching pattern wins.
DEPARTMENT_RULES: list[Rule] = [
    (re.compile(r"nurse|medical|clinical|health|pharmacist|therapist"), "Healthcare"),
    (
        re.compile(r"engineer|developer|software|devops|data|security|network|\b(?:qa|sre|it)\b"),
        "Engineering",
    ),
    (re.compile(r"product|designer|design|scrum|\b(?:ux|ui)\b"), "Product"),
    (re.compile(r"sales|account|business development|\bsdr\b"), "Sales"),
    (re.compile(r"marketing|content|brand|growth"), "Marketing"),
    (re.compile(r"finance|financial|analyst|banker|accountant|risk|\btax\b"), "Finance"),
    (re.compile(r"human|talent|recruit|people|\bhr\b"), "Human Resources"),
    (re.compile(r"operations|manager|supervisor|coordinator|director|\blead(?:er|ership)?\b"), "Operations"),
]
DEFAULT_DEPARTMENT = "General"

SENIORITY_RULES: list[Rule] = [
    (re.compile(r"\bintern(?:ship)?\b|trainee|\bentry\b|\bjunior\b|\bjr\b"), "entry_level"),
    (re.compile(r"\bmid\b|associate"), "mid_level"),
    (re.compile(r"\bsenior\b|\bsr\b"), "senior"),
    (re.compile(r"\blead(?:er|ership)?\b|principal"), "lead"),
    (re.compile(r"manager"), "manager"),
    (re.compile(r"director|\bvp\b|vice president"), "director"),
]
DEFAULT_SENIORITY = "mid_level"

JOB_TYPE_RULES: list[Rule] = [
    (re.compile(r"\bintern(?:ship)?\b"), "internship"),
    (re.compile(r"contract|freelance"), "contract"),
    (re.compile(r"part[-\s]?time"), "part_time"),
    (re.compile(r"\b(?:temporary|temp|seasonal)\b"), "temporary"),
]
DEFAULT_JOB_TYPE = "full_time"

WORK_MODALITY_RULES: list[Rule] = [
    (re.compile(r"remote|remoto"), "remote"),
    (re.compile(r"hybrid|hibrid"), "hybrid"),
]
DEFAULT_WORK_MODALITY = "on_site"

SALARY_TABLE: dict[str, dict[str, str]] = {
    "Engineering": {
        "entry_level": "$60,000 - $80,000",
        "mid_level": "$85,000 - $115,000",
        "mid_senior": "$100,000 - $130,000",
        "senior": "$120,000 - $160,000",
        "lead": "$140,000 - $180,000",
        "manager": "$150,000 - $190,000",
        "director": "$170,000 - $210,000",
        "executive": "$190,000 - $240,000",
    },
    "Product": {
        "entry_level": "$55,000 - $75,000",
        "mid_level": "$80,000 - $110,000",
        "mid_senior": "$95,000 - $125,000",
        "senior": "$115,000 - $150,000",
        "lead": "$130,000 - $170,000",
        "manager": "$140,000 - $180,000",
        "director": "$160,000 - $200,000",
        "executive": "$180,000 - $220,000",
    },
    "Finance": {
        "entry_level": "$50,000 - $70,000",
        "mid_level": "$70,000 - $95,000",
        "mid_senior": "$85,000 - $110,000",
        "senior": "$100,000 - $140,000",
        "lead": "$120,000 - $160,000",
        "manager": "$130,000 - $170,000",
        "director": "$150,000 - $190,000",
        "executive": "$170,000 - $210,000",
    },
    "Sales": {
        "entry_level": "$45,000 - $65,000",
        "mid_level": "$60,000 - $90,000",
        "mid_senior": "$75,000 - $105,000",
        "senior": "$90,000 - $130,000",
        "lead": "$100,000 - $140,000",
        "manager": "$110,000 - $150,000",
        "director": "$130,000 - $170,000",
        "executive": "$150,000 - $190,000",
    },
    "Healthcare": {
        "entry_level": "$45,000 - $65,000",
        "mid_level": "$60,000 - $85,000",
        "mid_senior": "$70,000 - $95,000",
        "senior": "$80,000 - $110,000",
        "lead": "$95,000 - $125,000",
        "manager": "$100,000 - $130,000",
        "director": "$120,000 - $150,000",
        "executive": "$130,000 - $170,000",
    },
    "Marketing": {
        "entry_level": "$40,000 - $60,000",
        "mid_level": "$55,000 - $80,000",
        "mid_senior": "$65,000 - $90,000",
        "senior": "$80,000 - $110,000",
        "lead": "$95,000 - $125,000",
        "manager": "$105,000 - $135,000",
        "director": "$120,000 - $150,000",
        "executive": "$140,000 - $170,000",
    },
    "Operations": {
        "entry_level": "$40,000 - $60,000",
        "mid_level": "$55,000 - $80,000",
        "mid_senior": "$65,000 - $90,000",
        "senior": "$80,000 - $110,000",
        "lead": "$95,000 - $125,000",
        "manager": "$105,000 - $135,000",
        "director": "$120,000 - $150,000",
        "executive": "$140,000 - $170,000",
    },
    "General": {
        "entry_level": "$38,000 - $55,000",
        "mid_level": "$50,000 - $70,000",
        "mid_senior": "$60,000 - $80,000",
        "senior": "$70,000 - $95,000",
        "lead": "$80,000 - $105,000",
        "manager": "$90,000 - $115,000",
        "director": "$105,000 - $135,000",
        "executive": "$120,000 - $150,000",
    },
}

SOURCE_URL_PREFIX: dict[str, str] = {
    "indeed": "https://www.indeed.com/viewjob?jk=",
    "linkedin": "https://www.linkedin.com/jobs/view/",
    "company_website": "https://careers.",
    "manual": "https://staffdesk.local/vacancies/",
}

STAGE_NOTES: dict[str, str] = {
    "detected": "Pending first contact and validation with the client.",
    "contacted": "First contact sent. Awaiting response.",
    "proposal": "Commercial proposal under review by the client.",
    "won": "Vacancy closed successfully. Prepare onboarding.",
    "lost": "Vacancy lost. Record the reason in the follow-up.",
}
DEFAULT_STAGE_NOTE = "Follow-up in progress."

# Derived field -> the fields it is computed from, in evaluation order.
FIELD_DEPENDENCIES: dict[str, frozenset[str]] = {
    "department": frozenset({"job_title"}),
    "seniority_level": frozenset({"job_title"}),
    "job_type": frozenset({"job_title"}),
    "work_modality": frozenset({"job_title", "location"}),
    "is_remote_viable": frozenset({"work_modality"}),
    "salary_range": frozenset({"department", "seniority_level"}),
    "job_url": frozenset({"source", "job_title", "company_name", "company_id"}),
    "scraped_at": frozenset({"published_date"}),
    "description": frozenset({"job_title", "company_name", "department"}),
    "notes": frozenset({"pipeline_stage"}),
}
DERIVED_FIELDS: tuple[str, ...] = tuple(FIELD_DEPENDENCIES)

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    return _SLUG_PATTERN.sub("-", value.lower()).strip("-")


def classify(text: str, rules: list[Rule], default: str) -> str:
    normalized = text.lower()
    for pattern, result in rules:
        if pattern.search(normalized):
            return result
    return default


def infer_department(title: str) -> str:
    return classify(title, DEPARTMENT_RULES, DEFAULT_DEPARTMENT)


def infer_seniority(title: str) -> str:
    return classify(title, SENIORITY_RULES, DEFAULT_SENIORITY)


def infer_job_type(title: str) -> str:
    return classify(title, JOB_TYPE_RULES, DEFAULT_JOB_TYPE)


def infer_work_modality(title: str, location: str) -> str:
    return classify(f"{title} {location}", WORK_MODALITY_RULES, DEFAULT_WORK_MODALITY)


def infer_salary_range(department: str, seniority: str) -> str:
    band = SALARY_TABLE.get(department, {}).get(seniority)
    return band or SALARY_TABLE[DEFAULT_DEPARTMENT][DEFAULT_SENIORITY]


def build_job_url(source: str, title: str, company_name: str, company_id: int) -> str:
    if source == "company_website":
        return f"{SOURCE_URL_PREFIX['company_website']}{slugify(company_name)}.com/jobs/{slugify(title)}"
    prefix = SOURCE_URL_PREFIX.get(source, SOURCE_URL_PREFIX["manual"])
    return f"{prefix}{slugify(title)}-{company_id}"


def build_description(title: str, company_name: str, department: str) -> str:
    if department == "Engineering":
        focus = "building scalable systems and modern web services"
    else:
        focus = "delivering outstanding results in a fast-paced environment"
    return (
        f"We are hiring a {title} to join {company_name}. "
        f"The ideal candidate will be focused on {focus}.\n\n"
        "Responsibilities:\n"
        "- Own key deliverables and collaborate across teams\n"
        "- Maintain high standards for quality and execution\n\n"
        "Requirements:\n"
        "- Relevant experience for the role\n"
        "- Strong communication and problem-solving skills"
    )


def build_stage_note(stage: str) -> str:
    return STAGE_NOTES.get(stage, DEFAULT_STAGE_NOTE)


def stale_fields(changed: set[str]) -> set[str]:
    """Derived fields whose inputs (directly or transitively) are in ``changed``."""
    stale: set[str] = set()
    frontier = set(changed)
    while frontier:
        hits = {
            name
            for name, sources in FIELD_DEPENDENCIES.items()
            if name not in stale and sources & frontier
        }
        stale |= hits
        frontier = hits
    return stale


def enrich_vacancy(values: dict[str, Any]) -> tuple[dict[str, Any], set[str]]:
    """Fill every derived vacancy field the caller left unset.

    ``values`` must already carry ``job_title``, ``company_id``, ``company_name``,
    ``location``, ``source``, ``pipeline_stage`` and ``published_date``. A field
    counts as unset when it is missing or ``None``. Returns the enriched copy and
    the names of the fields that were inferred.
    """
    out = dict(values)
    inferred: set[str] = set()

    def fill(field_name: str, value: Any) -> None:
        if out.get(field_name) is None:
            out[field_name] = value
            inferred.add(field_name)

    title = out["job_title"]
    fill("department", infer_department(title))
    fill("seniority_level", infer_seniority(title))
    fill("job_type", infer_job_type(title))
    fill("work_modality", infer_work_modality(title, out.get("location") or ""))
    fill("is_remote_viable", out["work_modality"] != "on_site")
    fill("salary_range", infer_salary_range(out["department"], out["seniority_level"]))
    fill("job_url", build_job_url(out["source"], title, out["company_name"], out["company_id"]))
    fill("scraped_at", f"{out['published_date']}T00:00:00+00:00")
    fill("description", build_description(title, out["company_name"], out["department"]))
    fill("notes", build_stage_note(out["pipeline_stage"]))
    return out, inferred
