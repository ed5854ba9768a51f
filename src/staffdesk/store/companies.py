from __future__ import annotations

import logging
from typing import Any

from staffdesk.core.research import merge_research
from staffdesk.errors import InvalidArgumentError
from staffdesk.store.base import Clock, EntityStore
from staffdesk.types import Company, CompanyCreate, CompanyInvestigate, CompanyUpdate, Research, ResearchUpdate

logger = logging.getLogger(__name__)


class CompanyStore(EntityStore[Company]):
    entity_name = "company"
    model = Company

    def __init__(self, *, clock: Clock | None = None) -> None:
        super().__init__(clock=clock)
        self._next_contact_id = 1

    def create(self, payload: CompanyCreate, *, research_status: str | None = None) -> Company:
        values: dict[str, Any] = {
            "relationship_type": "lead",
            "pipeline_stage": "lead",
        } | payload.model_dump(exclude_none=True)
        timestamp = self.now()
        company = self._validate(
            values
            | {
                "id": self._allocate_id(),
                "contacts": [],
                "research": Research(),
                "research_status": research_status,
                "created_at": timestamp,
                "updated_at": timestamp,
            }
        )
        logger.info("created company %s '%s'", company.id, company.name)
        return self._insert(company)

    def investigate(self, payload: CompanyInvestigate) -> Company:
        company = self.create(
            CompanyCreate(name=payload.name, country=payload.country, website=payload.website),
            research_status="pending",
        )
        logger.info("investigation started for company %s '%s' in %s", company.id, company.name, payload.country)
        return company

    def update(self, company_id: int, patch: CompanyUpdate) -> Company:
        self._require(company_id)
        changes = patch.model_dump(exclude_unset=True)
        if "name" in changes and not (changes["name"] or "").strip():
            logger.warning("rejected company %s update clearing name", company_id)
            raise InvalidArgumentError("name cannot be cleared", field="name")
        if changes.get("relationship_type", "") is None:
            raise InvalidArgumentError("relationship_type cannot be cleared", field="relationship_type")

        updated = self.apply_changes(company_id, changes)
        logger.info("updated company %s fields=%s", company_id, sorted(changes))
        return updated

    def update_research(self, company_id: int, patch: ResearchUpdate) -> Research:
        _, current = self._require(company_id)
        research = merge_research(
            current.research,
            patch.model_dump(exclude_unset=True),
            research_date=self.today(),
        )
        changes: dict[str, Any] = {"research": research}
        if research.completeness_percent == 100:
            changes["research_status"] = "completed"
        self.apply_changes(company_id, changes)
        logger.info("company %s research now %s%% complete", company_id, research.completeness_percent)
        return research.model_copy(deep=True)

    def get_name(self, company_id: int) -> str | None:
        index = self._find_index(company_id)
        if index is None:
            return None
        return self._items[index].name

    def allocate_contact_id(self) -> int:
        contact_id = self._next_contact_id
        self._next_contact_id += 1
        return contact_id

    def load(self, entities) -> int:
        loaded = 0
        for raw in entities:
            values = raw.model_dump() if isinstance(raw, Company) else dict(raw)
            research = values.get("research")
            # Stored percentages are never trusted; recompute from the populated fields.
            values["research"] = merge_research(
                Research.model_validate(research) if research else None,
                {},
                research_date=(research or {}).get("last_research_date"),
            )
            loaded += super().load([values])
            for contact in values.get("contacts", []):
                contact_id = contact.id if hasattr(contact, "id") else contact["id"]
                self._next_contact_id = max(self._next_contact_id, contact_id + 1)
        return loaded
