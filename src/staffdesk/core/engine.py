from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from staffdesk.config import Settings, get_settings
from staffdesk.core.contacts import ContactManager
from staffdesk.core.dashboard import build_dashboard, counts_by_stage
from staffdesk.core.pipeline import AuditTrail, TransitionEngine, company_policy, vacancy_policy
from staffdesk.core.query import FieldFilter, SortSpec, locale_sort_key, query
from staffdesk.errors import InvalidArgumentError, from_validation_error
from staffdesk.store.base import Clock, utc_now
from staffdesk.store.companies import CompanyStore
from staffdesk.store.vacancies import VacancyStore
from staffdesk.types import (
    VACANCY_SOURCE_LABELS,
    Company,
    CompanyCreate,
    CompanyFilterParams,
    CompanyInvestigate,
    CompanyStateChange,
    CompanyUpdate,
    Contact,
    ContactCreate,
    ContactUpdate,
    DashboardData,
    HistoryFilterParams,
    Page,
    Research,
    ResearchUpdate,
    Vacancy,
    VacancyCreate,
    VacancyFilterParams,
    VacancyStateChange,
    VacancyUpdate,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
Payload = BaseModel | Mapping[str, Any]

VACANCY_FILTERS: tuple[FieldFilter, ...] = (
    FieldFilter("search", "job_title", "contains"),
    FieldFilter("status", "status"),
    FieldFilter("pipeline_stage", "pipeline_stage"),
    FieldFilter("source", "source"),
    FieldFilter("state", "location", "contains"),
    FieldFilter("company", "company_name", "contains"),
    FieldFilter("company_id", "company_id"),
    FieldFilter("date_from", "published_date", "date_from"),
    FieldFilter("date_to", "published_date", "date_to"),
    FieldFilter("assigned_to", "assigned_to", "contains"),
)
VACANCY_SORT = SortSpec(key=lambda vacancy: vacancy.published_date, descending=True)

COMPANY_FILTERS: tuple[FieldFilter, ...] = (
    FieldFilter("search", "name", "contains"),
    FieldFilter("relationship_type", "relationship_type"),
    FieldFilter("pipeline_stage", "pipeline_stage"),
    FieldFilter("industry", "industry"),
    FieldFilter("location", "location", "contains"),
    FieldFilter("country", "country"),
    FieldFilter("assigned_to", "assigned_to", "contains"),
)
COMPANY_SORT = SortSpec(key=lambda company: locale_sort_key(company.name))


def coerce(model: type[M], payload: Payload | None) -> M:
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload or {})
    except ValidationError as exc:
        raise from_validation_error(exc) from exc


class _FamilyService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def _actor(self, user: str | None) -> str:
        if user is None:
            return self.settings.default_actor
        cleaned = user.strip()
        if not cleaned:
            raise InvalidArgumentError("a caller identity is required", field="user")
        return cleaned


class VacancyService(_FamilyService):
    def __init__(
        self,
        *,
        store: VacancyStore,
        transitions: TransitionEngine[Vacancy, VacancyStateChange],
        settings: Settings,
    ) -> None:
        super().__init__(settings)
        self.store = store
        self.transitions = transitions

    def create(self, payload: Payload, *, user: str | None = None) -> Vacancy:
        actor = self._actor(user)
        vacancy = self.store.create(coerce(VacancyCreate, payload))
        self.transitions.record_creation(
            vacancy,
            user=actor,
            note=f"Vacancy registered from {VACANCY_SOURCE_LABELS[vacancy.source]}.",
            tags=("#created",),
        )
        return vacancy

    def get_by_id(self, vacancy_id: int) -> Vacancy:
        return self.store.get_by_id(vacancy_id)

    def update(self, vacancy_id: int, patch: Payload) -> Vacancy:
        return self.store.update(vacancy_id, coerce(VacancyUpdate, patch))

    def delete(self, vacancy_id: int) -> bool:
        return self.store.delete(vacancy_id)

    def change_state(
        self,
        vacancy_id: int,
        new_state: str,
        note: str,
        *,
        tags: Iterable[str] | None = None,
        user: str | None = None,
    ) -> Vacancy:
        return self.transitions.change_state(vacancy_id, new_state, note, user=self._actor(user), tags=tags)

    def get_history(self, vacancy_id: int, filters: Payload | None = None) -> list[VacancyStateChange]:
        params = coerce(HistoryFilterParams, filters) if filters is not None else None
        return self.transitions.history(vacancy_id, params)

    def query(self, params: Payload | None = None) -> Page[Vacancy]:
        return query(
            self.store.iter_entities(),
            coerce(VacancyFilterParams, params),
            filters=VACANCY_FILTERS,
            sort=VACANCY_SORT,
            default_page_size=self.settings.vacancy_page_size,
            max_page_size=self.settings.max_page_size,
        )

    def counts_by_stage(self) -> dict[str, int]:
        return counts_by_stage(self.store.iter_entities())


class CompanyService(_FamilyService):
    def __init__(
        self,
        *,
        store: CompanyStore,
        transitions: TransitionEngine[Company, CompanyStateChange],
        contacts: ContactManager,
        vacancy_store: VacancyStore,
        settings: Settings,
    ) -> None:
        super().__init__(settings)
        self.store = store
        self.transitions = transitions
        self.contacts = contacts
        self.vacancy_store = vacancy_store

    def create(self, payload: Payload, *, user: str | None = None) -> Company:
        actor = self._actor(user)
        company = self.store.create(coerce(CompanyCreate, payload))
        self.transitions.record_creation(company, user=actor, note="Company registered.", tags=("#created",))
        return company

    def investigate(self, payload: Payload, *, user: str | None = None) -> Company:
        actor = self._actor(user)
        data = coerce(CompanyInvestigate, payload)
        company = self.store.investigate(data)
        self.transitions.record_creation(
            company,
            user=actor,
            note=f"Investigation started for {company.name} in {data.country}.",
            tags=("#investigation",),
        )
        return company

    def get_by_id(self, company_id: int) -> Company:
        return self.store.get_by_id(company_id)

    def update(self, company_id: int, patch: Payload) -> Company:
        return self.store.update(company_id, coerce(CompanyUpdate, patch))

    def delete(self, company_id: int) -> bool:
        return self.store.delete(company_id)

    def change_state(
        self,
        company_id: int,
        new_state: str,
        note: str,
        *,
        tags: Iterable[str] | None = None,
        user: str | None = None,
    ) -> Company:
        return self.transitions.change_state(company_id, new_state, note, user=self._actor(user), tags=tags)

    def get_history(self, company_id: int, filters: Payload | None = None) -> list[CompanyStateChange]:
        params = coerce(HistoryFilterParams, filters) if filters is not None else None
        return self.transitions.history(company_id, params)

    def query(self, params: Payload | None = None) -> Page[Company]:
        return query(
            self.store.iter_entities(),
            coerce(CompanyFilterParams, params),
            filters=COMPANY_FILTERS,
            sort=COMPANY_SORT,
            default_page_size=self.settings.company_page_size,
            max_page_size=self.settings.max_page_size,
        )

    def get_company_vacancies(self, company_id: int) -> list[Vacancy]:
        self.store.get_by_id(company_id)
        matches = (vacancy for vacancy in self.vacancy_store.iter_entities() if vacancy.company_id == company_id)
        return sorted(matches, key=VACANCY_SORT.key, reverse=VACANCY_SORT.descending)

    def update_research(self, company_id: int, patch: Payload) -> Research:
        return self.store.update_research(company_id, coerce(ResearchUpdate, patch))

    def add_contact(self, company_id: int, payload: Payload, *, user: str | None = None) -> Contact:
        return self.contacts.add_contact(company_id, coerce(ContactCreate, payload), user=self._actor(user))

    def update_contact(
        self,
        company_id: int,
        contact_id: int,
        patch: Payload,
        *,
        user: str | None = None,
    ) -> Contact:
        return self.contacts.update_contact(
            company_id,
            contact_id,
            coerce(ContactUpdate, patch),
            user=self._actor(user),
        )

    def remove_contact(self, company_id: int, contact_id: int, *, user: str | None = None) -> bool:
        return self.contacts.remove_contact(company_id, contact_id, user=self._actor(user))

    def counts_by_stage(self) -> dict[str, int]:
        return counts_by_stage(self.store.iter_entities())


class CRMEngine:
    """One isolated set of stores, audit trails and services."""

    def __init__(self, settings: Settings | None = None, *, clock: Clock | None = None) -> None:
        self.settings = settings or get_settings()
        self.clock = clock or utc_now

        self.company_store = CompanyStore(clock=self.clock)
        self.vacancy_store = VacancyStore(company_directory=self.company_store.get_name, clock=self.clock)

        self.company_transitions: TransitionEngine[Company, CompanyStateChange] = TransitionEngine(
            store=self.company_store,
            trail=AuditTrail(),
            policy=company_policy(self.settings),
            entry_model=CompanyStateChange,
            clock=self.clock,
        )
        self.vacancy_transitions: TransitionEngine[Vacancy, VacancyStateChange] = TransitionEngine(
            store=self.vacancy_store,
            trail=AuditTrail(),
            policy=vacancy_policy(self.settings),
            entry_model=VacancyStateChange,
            clock=self.clock,
        )

        self.vacancies = VacancyService(
            store=self.vacancy_store,
            transitions=self.vacancy_transitions,
            settings=self.settings,
        )
        self.companies = CompanyService(
            store=self.company_store,
            transitions=self.company_transitions,
            contacts=ContactManager(self.company_store),
            vacancy_store=self.vacancy_store,
            settings=self.settings,
        )

    def dashboard(self) -> DashboardData:
        return build_dashboard(self.vacancy_store.iter_entities(), self.company_store.iter_entities())


def build_engine(
    settings: Settings | None = None,
    *,
    clock: Clock | None = None,
    seed: bool | None = None,
) -> CRMEngine:
    from staffdesk.store.seed import seed_fixtures

    engine = CRMEngine(settings, clock=clock)
    should_seed = engine.settings.seed_fixtures if seed is None else seed
    if should_seed:
        result = seed_fixtures(engine)
        logger.info("seeded engine with %s", result)
    return engine
