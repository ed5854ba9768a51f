from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from staffdesk.types import DashboardData, KpiColor, KpiItem


@dataclass(frozen=True, slots=True)
class KpiDefinition:
    label: str
    stages: tuple[str, ...]
    icon: str
    color: KpiColor


VACANCY_KPIS: tuple[KpiDefinition, ...] = (
    KpiDefinition("Detected", ("detected",), "schedule", "purple"),
    KpiDefinition("Contacted", ("contacted",), "phone", "blue"),
    KpiDefinition("Proposal", ("proposal",), "description", "orange"),
    KpiDefinition("Won", ("won",), "check_circle", "green"),
    KpiDefinition("Lost", ("lost",), "cancel", "orange"),
)

COMPANY_KPIS: tuple[KpiDefinition, ...] = (
    KpiDefinition("Leads", ("lead",), "group_add", "purple"),
    KpiDefinition("Prospecting", ("prospecting",), "search", "blue"),
    KpiDefinition("Engaged", ("engaged", "proposal"), "handshake", "blue"),
    KpiDefinition("Appt Held", ("initial_appointment_held",), "event", "orange"),
    KpiDefinition("Client", ("onboarding_started", "client"), "business", "green"),
    KpiDefinition("Lost", ("lost",), "person_off", "orange"),
)


def counts_by_stage(collection: Iterable[Any], attribute: str = "pipeline_stage") -> dict[str, int]:
    """Single pass stage -> count; stages with no records are absent."""
    return dict(Counter(getattr(item, attribute) for item in collection))


def build_kpis(counts: dict[str, int], definitions: Iterable[KpiDefinition]) -> list[KpiItem]:
    return [
        KpiItem(
            label=definition.label,
            value=f"{sum(counts.get(stage, 0) for stage in definition.stages):,}",
            icon=definition.icon,
            color=definition.color,
        )
        for definition in definitions
    ]


def build_dashboard(vacancies: Iterable[Any], companies: Iterable[Any]) -> DashboardData:
    vacancy_counts = counts_by_stage(vacancies)
    company_counts = counts_by_stage(companies)
    return DashboardData(
        vacancy_kpis=build_kpis(vacancy_counts, VACANCY_KPIS),
        company_kpis=build_kpis(company_counts, COMPANY_KPIS),
        vacancy_counts=vacancy_counts,
        company_counts=company_counts,
    )
