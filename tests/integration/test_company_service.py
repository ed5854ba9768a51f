import pytest

from staffdesk.errors import InvalidArgumentError, NotFoundError


def test_create_defaults_to_lead(engine) -> None:
    company = engine.companies.create({"name": "  Acme  "}, user="Ana")

    assert company.name == "Acme"
    assert company.relationship_type == "lead"
    assert company.pipeline_stage == "lead"
    assert company.contacts == []
    assert company.research is not None
    assert company.research.completeness_percent == 0
    assert engine.companies.get_history(company.id)[0].from_state is None


def test_investigate_registers_pending_research(engine) -> None:
    company = engine.companies.investigate({"name": "Nimbus", "country": "Mexico", "website": "https://nimbus.mx"})

    assert company.relationship_type == "lead"
    assert company.research_status == "pending"
    assert company.country == "Mexico"
    assert engine.companies.get_history(company.id)[0].tags == ("#investigation",)

    with pytest.raises(InvalidArgumentError):
        engine.companies.investigate({"name": "Nimbus", "country": "Atlantis"})


def test_update_applies_only_supplied_keys(engine, acme) -> None:
    updated = engine.companies.update(acme.id, {"phone": "+1 555 0100", "assigned_to": "Juan P."})

    assert updated.phone == "+1 555 0100"
    assert updated.assigned_to == "Juan P."
    assert updated.industry == "technology"
    assert updated.location == "Austin, TX"

    with pytest.raises(InvalidArgumentError):
        engine.companies.update(acme.id, {"name": ""})
    with pytest.raises(InvalidArgumentError):
        engine.companies.update(acme.id, {"pipeline_stage": "client"})
    with pytest.raises(NotFoundError):
        engine.companies.update(999, {"phone": "1"})


@pytest.mark.parametrize("start", ["lead", "prospect", "client", "inactive"])
def test_lost_always_marks_company_inactive(engine, start: str) -> None:
    company = engine.companies.create({"name": "Acme", "relationship_type": start})
    moved = engine.companies.change_state(company.id, "lost", "Budget frozen")
    assert moved.relationship_type == "inactive"


@pytest.mark.parametrize("stage", ["onboarding_started", "client"])
def test_client_start_stages_mark_company_client(engine, acme, stage: str) -> None:
    moved = engine.companies.change_state(acme.id, stage, "Contract signed")
    assert moved.relationship_type == "client"
    assert moved.pipeline_stage == stage


def test_intermediate_stage_keeps_relationship(engine) -> None:
    company = engine.companies.create({"name": "Acme", "relationship_type": "prospect"})
    moved = engine.companies.change_state(company.id, "engaged", "Demo went well")
    assert moved.relationship_type == "prospect"


def test_company_note_rules(engine, acme) -> None:
    with pytest.raises(InvalidArgumentError):
        engine.companies.change_state(acme.id, "engaged", "   ")
    with pytest.raises(InvalidArgumentError):
        engine.companies.change_state(acme.id, "engaged", "x" * 501)
    with pytest.raises(InvalidArgumentError):
        engine.companies.change_state(acme.id, "engaged", "ok", user="  ")
    assert len(engine.companies.get_history(acme.id)) == 1


def test_research_update_recomputes_completeness(engine, acme) -> None:
    research = engine.companies.update_research(acme.id, {"mission": "Grow", "value_proposition": "Speed"})
    assert research.completeness_percent == 50
    assert research.last_research_date == "2025-12-15"
    assert engine.companies.get_by_id(acme.id).research_status is None

    research = engine.companies.update_research(acme.id, {"vision": "Everywhere", "sales_pitch": "Cheaper"})
    assert research.completeness_percent == 100
    assert research.mission == "Grow"
    assert engine.companies.get_by_id(acme.id).research_status == "completed"


def test_company_vacancies(seeded_engine) -> None:
    assert [vacancy.id for vacancy in seeded_engine.companies.get_company_vacancies(1)] == [11, 1]
    assert seeded_engine.companies.get_company_vacancies(16) == []
    with pytest.raises(NotFoundError):
        seeded_engine.companies.get_company_vacancies(11)


def test_listing_sorts_by_name_and_filters(seeded_engine) -> None:
    page = seeded_engine.companies.query()
    assert page.total == 14
    assert page.page_size == 20
    assert page.data[0].name == "AppVenture Studios"
    assert page.data[-1].name == "TechCorp Solutions"

    tech = seeded_engine.companies.query({"search": "tech"})
    assert [company.name for company in tech.data] == [
        "CloudScale Technologies",
        "EduTech Learning",
        "TechCorp Solutions",
    ]

    assigned = seeded_engine.companies.query({"assigned_to": "carlos", "relationship_type": "client"})
    assert {company.id for company in assigned.data} == {1, 4}

    second = seeded_engine.companies.query({"page": 2, "page_size": 5})
    assert len(second.data) == 5
    assert second.total_pages == 3


def test_seeded_research_completeness_is_recomputed(seeded_engine) -> None:
    percents = {
        company_id: seeded_engine.companies.get_by_id(company_id).research.completeness_percent
        for company_id in (1, 2, 4, 6, 9)
    }
    assert percents == {1: 100, 2: 0, 4: 50, 6: 75, 9: 25}


def test_seeded_histories(seeded_engine) -> None:
    history = seeded_engine.companies.get_history(1)
    assert [entry.to_state for entry in history] == [
        "onboarding_started",
        "initial_appointment_held",
        "engaged",
        "prospecting",
    ]
    moved = seeded_engine.companies.change_state(6, "onboarding_started", "Kick-off booked", user="Ana")
    assert moved.relationship_type == "client"
    assert seeded_engine.companies.get_history(6)[0].from_state == "initial_appointment_held"
    assert len(seeded_engine.companies.get_history(6)) == 3
