from __future__ import annotations

import logging

from pydantic import ValidationError

from staffdesk.errors import InvalidArgumentError, NotFoundError, from_validation_error
from staffdesk.store.companies import CompanyStore
from staffdesk.types import Contact, ContactCreate, ContactUpdate

logger = logging.getLogger(__name__)


def _demote_all(contacts: list[Contact]) -> list[Contact]:
    return [contact.model_copy(update={"is_primary": False}) for contact in contacts]


class ContactManager:
    """Contacts nested under a company; at most one of them is primary.

    Removing the primary contact does not promote another one.
    """

    def __init__(self, store: CompanyStore) -> None:
        self.store = store

    def list_contacts(self, company_id: int) -> list[Contact]:
        return self.store.get_by_id(company_id).contacts

    def primary_contact(self, company_id: int) -> Contact | None:
        return next((c for c in self.list_contacts(company_id) if c.is_primary), None)

    def add_contact(self, company_id: int, payload: ContactCreate, *, user: str) -> Contact:
        company = self.store.get_by_id(company_id)
        contacts = list(company.contacts)

        is_primary = payload.is_primary if payload.is_primary is not None else not contacts
        if is_primary:
            contacts = _demote_all(contacts)

        contact = Contact.model_validate(
            payload.model_dump(exclude={"is_primary"})
            | {"id": self.store.allocate_contact_id(), "is_primary": is_primary}
        )
        contacts.append(contact)
        self.store.apply_changes(company_id, {"contacts": contacts})

        logger.info(
            "company %s: contact %s added by %s (primary=%s)",
            company_id,
            contact.id,
            user,
            contact.is_primary,
        )
        return contact.model_copy()

    def update_contact(self, company_id: int, contact_id: int, patch: ContactUpdate, *, user: str) -> Contact:
        company = self.store.get_by_id(company_id)
        contacts = list(company.contacts)
        index = _find_contact(contacts, contact_id, company_id)

        changes = patch.model_dump(exclude_unset=True)
        if changes.get("is_primary") is None:
            changes.pop("is_primary", None)
        if changes.get("is_primary"):
            contacts = _demote_all(contacts)

        for name in ("full_name", "job_title"):
            if name in changes and not (changes[name] or "").strip():
                raise InvalidArgumentError(f"{name} cannot be cleared", field=name)
        try:
            updated = Contact.model_validate(contacts[index].model_dump() | changes)
        except ValidationError as exc:
            raise from_validation_error(exc) from exc
        contacts[index] = updated
        self.store.apply_changes(company_id, {"contacts": contacts})

        logger.info("company %s: contact %s updated by %s fields=%s", company_id, contact_id, user, sorted(changes))
        return updated.model_copy()

    def remove_contact(self, company_id: int, contact_id: int, *, user: str) -> bool:
        company = self.store.get_by_id(company_id)
        remaining = [contact for contact in company.contacts if contact.id != contact_id]
        if len(remaining) == len(company.contacts):
            return False

        self.store.apply_changes(company_id, {"contacts": remaining})
        logger.info("company %s: contact %s removed by %s", company_id, contact_id, user)
        return True


def _find_contact(contacts: list[Contact], contact_id: int, company_id: int) -> int:
    for index, contact in enumerate(contacts):
        if contact.id == contact_id:
            return index
    raise NotFoundError("contact", contact_id, parent=f"company {company_id}")
