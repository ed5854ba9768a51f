import json

import pytest
from typer.testing import CliRunner

from staffdesk.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("staffdesk.logging_config._LOG_CONFIGURED", True)


def _run(*args: str):
    result = runner.invoke(app, list(args))
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_vacancies_list_filters_by_stage() -> None:
    payload = _run("vacancies", "list", "--stage", "detected")
    assert payload["total"] == 5
    assert all(item["pipeline_stage"] == "detected" for item in payload["data"])


def test_vacancy_show_and_history() -> None:
    vacancy = _run("vacancies", "show", "--id", "1")
    assert vacancy["job_title"] == "Senior Software Engineer"

    history = _run("vacancies", "history", "--id", "1")
    assert [entry["to_state"] for entry in history] == ["contacted", "detected"]


def test_companies_list_and_show() -> None:
    payload = _run("companies", "list", "--relationship", "client")
    assert {item["id"] for item in payload["data"]} == {1, 4, 10}

    company = _run("companies", "show", "--id", "6")
    assert company["contacts"][0]["full_name"] == "Amanda Chen"


def test_dashboard_command() -> None:
    payload = _run("dashboard")
    assert [kpi["label"] for kpi in payload["vacancy_kpis"]] == ["Detected", "Contacted", "Proposal", "Won", "Lost"]


def test_unknown_id_is_reported() -> None:
    result = runner.invoke(app, ["companies", "show", "--id", "999"])
    assert result.exit_code != 0
