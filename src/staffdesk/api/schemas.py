from __future__ import annotations

from pydantic import BaseModel


class DeleteResponse(BaseModel):
    id: int
    deleted: bool


class ContactDeleteResponse(BaseModel):
    company_id: int
    contact_id: int
    deleted: bool


class StageCountsResponse(BaseModel):
    counts: dict[str, int]
    total: int
