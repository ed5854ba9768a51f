from types import SimpleNamespace

from staffdesk.core.dashboard import COMPANY_KPIS, build_dashboard, build_kpis, counts_by_stage


def _stages(*names: str) -> list[SimpleNamespace]:
    return [SimpleNamespace(pipeline_stage=name) for name in names]


def test_counts_skip_stages_without_records() -> None:
    assert counts_by_stage(_stages("lead", "lead", "client")) == {"lead": 2, "client": 1}
    assert counts_by_stage([]) == {}


def test_kpis_sum_grouped_stages() -> None:
    kpis = build_kpis({"onboarding_started": 2, "client": 3, "engaged": 1, "proposal": 4}, COMPANY_KPIS)
    values = {kpi.label: kpi.value for kpi in kpis}
    assert values["Client"] == "5"
    assert values["Engaged"] == "5"
    assert values["Leads"] == "0"


def test_kpi_values_use_thousands_separators() -> None:
    data = build_dashboard(_stages(*["detected"] * 1200), [])
    detected = next(kpi for kpi in data.vacancy_kpis if kpi.label == "Detected")
    assert detected.value == "1,200"
    assert data.vacancy_counts == {"detected": 1200}
    assert data.company_counts == {}
