from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar, get_args

from pydantic import BaseModel

from staffdesk.config import Settings
from staffdesk.core.query import contains_text, within_date_range
from staffdesk.errors import InvalidArgumentError
from staffdesk.store.base import Clock, EntityStore, utc_now
from staffdesk.types import (
    CompanyPipelineStage,
    CompanyStateChange,
    HistoryFilterParams,
    VacancyPipelineStage,
    VacancyStateChange,
)

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", VacancyStateChange, CompanyStateChange)
EntityT = TypeVar("EntityT", bound=BaseModel)

# Company stages that mark the start of a client relationship.
CLIENT_START_STAGES: tuple[str, ...] = ("onboarding_started", "client")


class StageTracked(Protocol):
    id: int
    pipeline_stage: str


@dataclass(slots=True)
class PipelinePolicy:
    """Stage vocabulary and note rules for one entity family.

    Any stage may follow any other; adjacency is not validated.
    """

    entity: str
    stages: tuple[str, ...]
    min_note_length: int = 1
    max_note_length: int | None = None
    relationship_effects: dict[str, str] = field(default_factory=dict)

    def validate_stage(self, stage: str | None) -> str:
        if not stage:
            raise InvalidArgumentError("a target pipeline stage is required", field="new_state")
        if stage not in self.stages:
            raise InvalidArgumentError(
                f"unsupported {self.entity} pipeline stage '{stage}'",
                field="new_state",
            )
        return stage

    def validate_note(self, note: str | None) -> str:
        cleaned = (note or "").strip()
        if not cleaned:
            raise InvalidArgumentError("a note is required for every stage change", field="note")
        if len(cleaned) < self.min_note_length:
            raise InvalidArgumentError(
                f"note must be at least {self.min_note_length} characters",
                field="note",
            )
        if self.max_note_length is not None and len(cleaned) > self.max_note_length:
            raise InvalidArgumentError(
                f"note must be at most {self.max_note_length} characters",
                field="note",
            )
        return cleaned

    def side_effects(self, stage: str) -> dict[str, Any]:
        relationship = self.relationship_effects.get(stage)
        if relationship is None:
            return {}
        return {"relationship_type": relationship}


def vacancy_policy(settings: Settings) -> PipelinePolicy:
    return PipelinePolicy(
        entity="vacancy",
        stages=get_args(VacancyPipelineStage),
        min_note_length=settings.vacancy_min_note_length,
    )


def company_policy(settings: Settings) -> PipelinePolicy:
    effects = {stage: "client" for stage in CLIENT_START_STAGES}
    effects["lost"] = "inactive"
    return PipelinePolicy(
        entity="company",
        stages=get_args(CompanyPipelineStage),
        min_note_length=settings.company_min_note_length,
        max_note_length=settings.company_max_note_length,
        relationship_effects=effects,
    )


def normalize_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    if not tags:
        return ()
    return tuple(tag.strip() for tag in tags if tag and tag.strip())


class AuditTrail(Generic[EntryT]):
    """Append-only stage history per entity id, newest entry first."""

    def __init__(self) -> None:
        self._entries: dict[int, list[EntryT]] = {}

    def record(self, entity_id: int, entry: EntryT) -> EntryT:
        self._entries.setdefault(entity_id, []).insert(0, entry)
        return entry

    def load(self, entity_id: int, entries: Sequence[EntryT]) -> int:
        """Seed older entries (newest-first) behind whatever is already recorded."""
        self._entries.setdefault(entity_id, []).extend(entries)
        return len(entries)

    def count(self, entity_id: int) -> int:
        return len(self._entries.get(entity_id, []))

    def history(self, entity_id: int, filters: HistoryFilterParams | None = None) -> list[EntryT]:
        entries = list(self._entries.get(entity_id, []))
        if filters is None:
            return entries

        if filters.stage:
            entries = [e for e in entries if filters.stage in (e.from_state, e.to_state)]
        if filters.user:
            entries = [e for e in entries if contains_text(e.user, filters.user)]
        if filters.date_from or filters.date_to:
            entries = [e for e in entries if within_date_range(e.date, filters.date_from, filters.date_to)]
        return entries


class TransitionEngine(Generic[EntityT, EntryT]):
    def __init__(
        self,
        *,
        store: EntityStore[EntityT],
        trail: AuditTrail[EntryT],
        policy: PipelinePolicy,
        entry_model: type[EntryT],
        clock: Clock | None = None,
    ) -> None:
        self.store = store
        self.trail = trail
        self.policy = policy
        self.entry_model = entry_model
        self._clock = clock or utc_now

    def change_state(
        self,
        entity_id: int,
        new_stage: str,
        note: str,
        *,
        user: str,
        tags: Iterable[str] | None = None,
    ) -> EntityT:
        current = self.store.get_by_id(entity_id)
        try:
            cleaned_note = self.policy.validate_note(note)
            stage = self.policy.validate_stage(new_stage)
            actor = _require_actor(user)
        except InvalidArgumentError as exc:
            logger.warning("rejected %s %s stage change: %s", self.policy.entity, entity_id, exc)
            raise

        previous = current.pipeline_stage
        entry = self.entry_model(
            date=self._clock().isoformat(),
            user=actor,
            from_state=previous,
            to_state=stage,
            note=cleaned_note,
            tags=normalize_tags(tags),
        )
        changes = {"pipeline_stage": stage} | self.policy.side_effects(stage)
        updated = self.store.apply_changes(entity_id, changes)
        self.trail.record(entity_id, entry)

        logger.info(
            "%s %s moved %s -> %s by %s",
            self.policy.entity,
            entity_id,
            previous,
            stage,
            actor,
        )
        return updated

    def record_creation(self, entity: StageTracked, *, user: str, note: str, tags: Iterable[str] = ()) -> EntryT:
        entry = self.entry_model(
            date=self._clock().isoformat(),
            user=_require_actor(user),
            from_state=None,
            to_state=entity.pipeline_stage,
            note=note,
            tags=normalize_tags(tags),
        )
        return self.trail.record(entity.id, entry)

    def history(self, entity_id: int, filters: HistoryFilterParams | None = None) -> list[EntryT]:
        return self.trail.history(entity_id, filters)


def _require_actor(user: str | None) -> str:
    cleaned = (user or "").strip()
    if not cleaned:
        raise InvalidArgumentError("a caller identity is required", field="user")
    return cleaned
