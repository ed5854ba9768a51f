import pytest

from staffdesk.core.engine import CRMEngine, build_engine
from staffdesk.errors import InvalidArgumentError


def _setup_company(engine: CRMEngine, name: str = "Acme"):
    return engine.companies.create({"name": name})


def test_primary_contact_handover(engine) -> None:
    company = _setup_company(engine)
    contact_a = engine.companies.add_contact(company.id, {"full_name": "Contact A", "job_title": "HR"})
    assert contact_a.is_primary is True

    contact_b = engine.companies.add_contact(
        company.id, {"full_name": "Contact B", "job_title": "CEO", "is_primary": True}
    )
    contacts = {contact.id: contact for contact in engine.companies.get_by_id(company.id).contacts}
    assert contacts[contact_a.id].is_primary is False
    assert contacts[contact_b.id].is_primary is True


def test_minimal_vacancy_is_fully_enriched(engine) -> None:
    company = _setup_company(engine)
    vacancy = engine.vacancies.create({"job_title": "Senior Backend Engineer", "company_id": company.id})

    assert vacancy.department == "Engineering"
    assert vacancy.seniority_level == "senior"
    assert vacancy.job_type == "full_time"
    derived = ("work_modality", "is_remote_viable", "salary_range", "job_url", "scraped_at", "description", "notes")
    assert all(getattr(vacancy, name) is not None for name in derived)


def test_empty_note_leaves_history_untouched(seeded_engine) -> None:
    before = len(seeded_engine.vacancies.get_history(1))
    with pytest.raises(InvalidArgumentError):
        seeded_engine.vacancies.change_state(1, "contacted", "")
    assert len(seeded_engine.vacancies.get_history(1)) == before


def test_partial_research_scores_half(engine) -> None:
    company = _setup_company(engine)
    research = engine.companies.update_research(company.id, {"mission": "Grow", "value_proposition": "Speed"})
    assert research.completeness_percent == 50


def test_full_company_lifecycle(engine) -> None:
    company = _setup_company(engine, "Globex")
    vacancy = engine.vacancies.create(
        {"job_title": "Remote Support Specialist", "company_id": company.id, "source": "linkedin"}
    )

    for stage, note in (
        ("prospecting", "Researching the account"),
        ("engaged", "Intro call done"),
        ("proposal", "Sent a proposal for two roles"),
        ("initial_appointment_held", "Met the COO"),
        ("onboarding_started", "Signed"),
    ):
        engine.companies.change_state(company.id, stage, note, user="Ana")
    engine.vacancies.change_state(vacancy.id, "won", "Placement accepted by client", user="Ana")

    history = engine.companies.get_history(company.id)
    assert len(history) == 6
    assert history[0].to_state == "onboarding_started"
    assert history[-1].from_state is None
    assert engine.companies.get_by_id(company.id).relationship_type == "client"

    dashboard = engine.dashboard()
    assert dashboard.company_counts == {"onboarding_started": 1}
    assert dashboard.vacancy_counts == {"won": 1}


def test_engines_are_isolated(settings, frozen_clock) -> None:
    first = build_engine(settings, clock=frozen_clock, seed=True)
    second = build_engine(settings, clock=frozen_clock, seed=True)

    first.vacancies.delete(1)
    first.companies.create({"name": "Only in first"})

    assert second.vacancies.get_by_id(1).id == 1
    assert second.companies.query({"search": "Only in first"}).total == 0
    assert first.companies.query({"search": "Only in first"}).total == 1


def test_unseeded_engine_starts_empty(settings, frozen_clock) -> None:
    engine = build_engine(settings, clock=frozen_clock)
    assert engine.vacancies.query().total == 0
    assert engine.companies.query().total == 0
