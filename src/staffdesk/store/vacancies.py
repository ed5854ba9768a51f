from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from staffdesk.core.inference import enrich_vacancy, stale_fields
from staffdesk.errors import InvalidArgumentError
from staffdesk.store.base import Clock, EntityStore
from staffdesk.types import Vacancy, VacancyCreate, VacancyUpdate

logger = logging.getLogger(__name__)

CompanyDirectory = Callable[[int], "str | None"]

_REQUIRED_FIELDS = ("job_title", "company_id", "company_name", "location", "status", "source", "published_date")

_DEFAULTS: dict[str, Any] = {
    "location": "Unknown",
    "status": "active",
    "pipeline_stage": "detected",
    "source": "manual",
}


class VacancyStore(EntityStore[Vacancy]):
    entity_name = "vacancy"
    model = Vacancy

    def __init__(self, *, company_directory: CompanyDirectory, clock: Clock | None = None) -> None:
        super().__init__(clock=clock)
        self._company_directory = company_directory
        # Fields per vacancy that were inferred rather than supplied.
        self._inferred: dict[int, set[str]] = {}

    def create(self, payload: VacancyCreate) -> Vacancy:
        company_name = self._resolve_company(payload.company_id, payload.company_name)

        values = _DEFAULTS | payload.model_dump(exclude_none=True)
        values["company_name"] = company_name
        values.setdefault("published_date", self.today())
        values.setdefault("scraped_at", self.now())

        enriched, inferred = enrich_vacancy(values)
        entity_id = self._allocate_id()
        timestamp = self.now()
        vacancy = self._validate(enriched | {"id": entity_id, "created_at": timestamp, "updated_at": timestamp})

        self._inferred[entity_id] = inferred
        logger.info(
            "created vacancy %s '%s' for company %s (inferred: %s)",
            entity_id,
            vacancy.job_title,
            vacancy.company_id,
            ", ".join(sorted(inferred)) or "none",
        )
        return self._insert(vacancy)

    def update(self, vacancy_id: int, patch: VacancyUpdate) -> Vacancy:
        _, current = self._require(vacancy_id)
        changes = patch.model_dump(exclude_unset=True)
        for name in _REQUIRED_FIELDS:
            if name in changes and (changes[name] is None or str(changes[name]).strip() == ""):
                logger.warning("rejected vacancy %s update clearing %s", vacancy_id, name)
                raise InvalidArgumentError(f"{name} cannot be cleared", field=name)

        if changes.get("company_id") is not None and changes["company_id"] != current.company_id:
            changes["company_name"] = self._resolve_company(changes["company_id"], changes.get("company_name"))

        previously_inferred = self._inferred.get(vacancy_id, set())
        explicit = {name for name, value in changes.items() if value is not None}
        stale = (stale_fields(set(changes)) & previously_inferred) - explicit

        merged = current.model_dump() | changes
        for name in stale:
            merged[name] = None
        enriched, newly_inferred = enrich_vacancy(merged)

        updated = self.apply_changes(vacancy_id, enriched)
        self._inferred[vacancy_id] = (previously_inferred - explicit) | newly_inferred
        if stale:
            logger.info("vacancy %s re-inferred %s", vacancy_id, ", ".join(sorted(newly_inferred)))
        logger.info("updated vacancy %s fields=%s", vacancy_id, sorted(changes))
        return updated

    def delete(self, entity_id: int) -> bool:
        removed = super().delete(entity_id)
        if removed:
            self._inferred.pop(entity_id, None)
        return removed

    def load(self, entities) -> int:
        loaded = 0
        for raw in entities:
            values = raw.model_dump() if isinstance(raw, Vacancy) else _DEFAULTS | dict(raw)
            if not values.get("company_name"):
                values["company_name"] = self._resolve_company(values["company_id"], None)
            enriched, inferred = enrich_vacancy(values)
            loaded += super().load([enriched])
            self._inferred[enriched["id"]] = inferred
        return loaded

    def inferred_fields(self, vacancy_id: int) -> set[str]:
        self._require(vacancy_id)
        return set(self._inferred.get(vacancy_id, set()))

    def _resolve_company(self, company_id: int, supplied_name: str | None) -> str:
        resolved = self._company_directory(company_id)
        if resolved is None:
            logger.warning("rejected vacancy for unknown company %s", company_id)
            raise InvalidArgumentError(f"company {company_id} does not exist", field="company_id")
        return supplied_name.strip() if supplied_name and supplied_name.strip() else resolved
