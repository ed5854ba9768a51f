import pytest

from staffdesk.config import Settings
from staffdesk.core.pipeline import AuditTrail, company_policy, normalize_tags, vacancy_policy
from staffdesk.errors import InvalidArgumentError
from staffdesk.types import HistoryFilterParams, VacancyStateChange


def test_vacancy_notes_need_ten_characters_after_trimming() -> None:
    policy = vacancy_policy(Settings(app_env="test"))
    with pytest.raises(InvalidArgumentError):
        policy.validate_note("")
    with pytest.raises(InvalidArgumentError):
        policy.validate_note("   short    ")
    assert policy.validate_note("  Called the hiring manager  ") == "Called the hiring manager"


def test_company_notes_are_bounded() -> None:
    policy = company_policy(Settings(app_env="test"))
    assert policy.validate_note("ok") == "ok"
    with pytest.raises(InvalidArgumentError):
        policy.validate_note("   ")
    with pytest.raises(InvalidArgumentError):
        policy.validate_note("x" * 501)


def test_unknown_or_missing_stage_is_rejected() -> None:
    policy = vacancy_policy(Settings(app_env="test"))
    assert policy.validate_stage("won") == "won"
    with pytest.raises(InvalidArgumentError):
        policy.validate_stage("onboarding_started")
    with pytest.raises(InvalidArgumentError):
        policy.validate_stage(None)


def test_company_relationship_side_effects() -> None:
    policy = company_policy(Settings(app_env="test"))
    assert policy.side_effects("onboarding_started") == {"relationship_type": "client"}
    assert policy.side_effects("client") == {"relationship_type": "client"}
    assert policy.side_effects("lost") == {"relationship_type": "inactive"}
    assert policy.side_effects("engaged") == {}
    assert vacancy_policy(Settings(app_env="test")).side_effects("lost") == {}


def test_tags_are_trimmed_and_blank_ones_dropped() -> None:
    assert normalize_tags(None) == ()
    assert normalize_tags([" #email ", "", "  ", "#call"]) == ("#email", "#call")


def test_audit_trail_filters() -> None:
    trail: AuditTrail[VacancyStateChange] = AuditTrail()
    for date, user, from_state, to_state in (
        ("2025-12-01T08:00:00+00:00", "Ana Ruiz", None, "detected"),
        ("2025-12-05T08:00:00+00:00", "Carlos", "detected", "contacted"),
        ("2025-12-09T08:00:00+00:00", "ana ruiz", "contacted", "proposal"),
    ):
        entry = VacancyStateChange(date=date, user=user, from_state=from_state, to_state=to_state, note="Moved along")
        trail.record(1, entry)

    assert [entry.to_state for entry in trail.history(1)] == ["proposal", "contacted", "detected"]
    assert len(trail.history(1, HistoryFilterParams(stage="contacted"))) == 2
    assert len(trail.history(1, HistoryFilterParams(user="ANA"))) == 2
    same_day = HistoryFilterParams(date_from="2025-12-05", date_to="2025-12-05")
    assert [entry.to_state for entry in trail.history(1, same_day)] == ["contacted"]
    assert trail.history(99) == []
