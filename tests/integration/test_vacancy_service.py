import pytest

from staffdesk.errors import InvalidArgumentError, NotFoundError


def test_create_infers_missing_fields_and_records_creation(engine, acme) -> None:
    vacancy = engine.vacancies.create({"job_title": "Senior Backend Engineer", "company_id": acme.id}, user="Ana")

    assert vacancy.company_name == "Acme"
    assert vacancy.location == "Unknown"
    assert vacancy.department == "Engineering"
    assert vacancy.seniority_level == "senior"
    assert vacancy.job_type == "full_time"
    assert vacancy.status == "active"
    assert vacancy.pipeline_stage == "detected"
    assert vacancy.published_date == "2025-12-15"
    assert vacancy.job_url == f"https://staffdesk.local/vacancies/senior-backend-engineer-{acme.id}"
    assert vacancy.created_at == vacancy.updated_at == "2025-12-15T09:00:00+00:00"

    history = engine.vacancies.get_history(vacancy.id)
    assert len(history) == 1
    assert history[0].from_state is None
    assert history[0].to_state == "detected"
    assert history[0].user == "Ana"


def test_create_rejects_unknown_company_and_blank_title(engine, acme) -> None:
    with pytest.raises(InvalidArgumentError):
        engine.vacancies.create({"job_title": "Nurse", "company_id": 404})
    with pytest.raises(InvalidArgumentError):
        engine.vacancies.create({"job_title": "   ", "company_id": acme.id})
    assert len(engine.vacancy_store) == 0


def test_ids_are_never_reused_after_delete(engine, acme) -> None:
    first = engine.vacancies.create({"job_title": "Cashier", "company_id": acme.id})
    second = engine.vacancies.create({"job_title": "Baker", "company_id": acme.id})
    assert engine.vacancies.delete(second.id) is True
    assert engine.vacancies.delete(second.id) is False

    third = engine.vacancies.create({"job_title": "Driver", "company_id": acme.id})
    assert first.id < second.id < third.id


def test_callers_receive_copies(engine, acme) -> None:
    vacancy = engine.vacancies.create({"job_title": "Cashier", "company_id": acme.id})
    vacancy.job_title = "Tampered"
    assert engine.vacancies.get_by_id(vacancy.id).job_title == "Cashier"


def test_update_reinfers_only_inferred_fields(engine, acme) -> None:
    vacancy = engine.vacancies.create(
        {"job_title": "Marketing Coordinator", "company_id": acme.id, "salary_range": "$1 - $2"}
    )
    assert vacancy.department == "Marketing"

    updated = engine.vacancies.update(vacancy.id, {"job_title": "Senior Software Engineer"})
    assert updated.department == "Engineering"
    assert updated.seniority_level == "senior"
    assert updated.salary_range == "$1 - $2"
    assert updated.notes == vacancy.notes
    assert updated.updated_at is not None
    assert "salary_range" not in engine.vacancy_store.inferred_fields(vacancy.id)


def test_update_location_switches_modality(engine, acme) -> None:
    vacancy = engine.vacancies.create({"job_title": "Support Agent", "company_id": acme.id, "location": "Dallas, TX"})
    assert vacancy.work_modality == "on_site"
    assert vacancy.is_remote_viable is False

    updated = engine.vacancies.update(vacancy.id, {"location": "Remote"})
    assert updated.work_modality == "remote"
    assert updated.is_remote_viable is True


def test_update_guards(engine, acme) -> None:
    vacancy = engine.vacancies.create({"job_title": "Cashier", "company_id": acme.id})
    with pytest.raises(InvalidArgumentError):
        engine.vacancies.update(vacancy.id, {"pipeline_stage": "won"})
    with pytest.raises(InvalidArgumentError):
        engine.vacancies.update(vacancy.id, {"job_title": None})
    with pytest.raises(InvalidArgumentError):
        engine.vacancies.update(vacancy.id, {"company_id": 999})
    with pytest.raises(NotFoundError):
        engine.vacancies.update(999, {"job_title": "Baker"})
    assert engine.vacancies.get_by_id(vacancy.id).job_title == "Cashier"


def test_change_state_validates_before_mutating(engine, acme) -> None:
    vacancy = engine.vacancies.create({"job_title": "Cashier", "company_id": acme.id})

    with pytest.raises(NotFoundError):
        engine.vacancies.change_state(999, "contacted", "")
    with pytest.raises(InvalidArgumentError):
        engine.vacancies.change_state(vacancy.id, "contacted", "too short")
    with pytest.raises(InvalidArgumentError):
        engine.vacancies.change_state(vacancy.id, "archived", "A perfectly fine note")

    assert engine.vacancies.get_by_id(vacancy.id).pipeline_stage == "detected"
    assert len(engine.vacancies.get_history(vacancy.id)) == 1

    moved = engine.vacancies.change_state(
        vacancy.id, "won", "  Skipped straight to a signed deal  ", tags=["#fast"], user="Carlos"
    )
    assert moved.pipeline_stage == "won"
    latest = engine.vacancies.get_history(vacancy.id)[0]
    assert (latest.from_state, latest.to_state) == ("detected", "won")
    assert latest.note == "Skipped straight to a signed deal"
    assert latest.tags == ("#fast",)
    assert latest.user == "Carlos"


def test_history_survives_delete(engine, acme) -> None:
    vacancy = engine.vacancies.create({"job_title": "Cashier", "company_id": acme.id})
    engine.vacancies.delete(vacancy.id)
    assert len(engine.vacancies.get_history(vacancy.id)) == 1
    with pytest.raises(NotFoundError):
        engine.vacancies.get_by_id(vacancy.id)


def test_seeded_listing_order_and_filters(seeded_engine) -> None:
    page = seeded_engine.vacancies.query()
    assert page.total == 12
    assert page.page_size == 50
    assert [vacancy.id for vacancy in page.data[:3]] == [6, 11, 1]

    detected = seeded_engine.vacancies.query({"pipeline_stage": "detected"})
    assert detected.total == 5

    cloud = seeded_engine.vacancies.query({"company": "cloudscale", "state": "CA"})
    assert {vacancy.id for vacancy in cloud.data} == {2, 6}

    window = seeded_engine.vacancies.query({"date_from": "2025-12-10", "date_to": "2025-12-12"})
    assert [vacancy.id for vacancy in window.data] == [2, 3, 5]

    with pytest.raises(InvalidArgumentError):
        seeded_engine.vacancies.query({"status": "archived"})


def test_counts_by_stage(seeded_engine) -> None:
    assert seeded_engine.vacancies.counts_by_stage() == {
        "contacted": 3,
        "proposal": 2,
        "detected": 5,
        "won": 1,
        "lost": 1,
    }


def test_published_date_must_be_iso(engine, acme) -> None:
    older = engine.vacancies.create({"job_title": "Cashier", "company_id": acme.id, "published_date": "2025-12-01"})
    newer = engine.vacancies.create({"job_title": "Baker", "company_id": acme.id, "published_date": "2026-01-05"})

    with pytest.raises(InvalidArgumentError):
        engine.vacancies.create({"job_title": "Driver", "company_id": acme.id, "published_date": "01/05/2026"})
    with pytest.raises(InvalidArgumentError):
        engine.vacancies.update(older.id, {"published_date": "yesterday"})
    assert len(engine.vacancy_store) == 2

    page = engine.vacancies.query({})
    assert [vacancy.id for vacancy in page.data] == [newer.id, older.id]
    window = engine.vacancies.query({"date_from": "2026-01-01", "date_to": "2026-12-31"})
    assert [vacancy.id for vacancy in window.data] == [newer.id]
