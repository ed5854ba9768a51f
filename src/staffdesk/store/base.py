from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from staffdesk.errors import NotFoundError, from_validation_error

E = TypeVar("E", bound=BaseModel)
Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class EntityStore(Generic[E]):
    """Newest-first in-memory collection for one entity family.

    Callers only ever receive copies; every mutation builds a validated
    replacement and swaps it in, so a failed call leaves the collection as it was.
    """

    entity_name = "entity"
    model: type[E]

    def __init__(self, *, clock: Clock | None = None) -> None:
        self._items: list[E] = []
        self._next_id = 1
        self._clock = clock or utc_now

    def now(self) -> str:
        return self._clock().isoformat()

    def today(self) -> str:
        return self._clock().date().isoformat()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return self._find_index(entity_id) is not None

    def iter_entities(self) -> Iterator[E]:
        for item in self._items:
            yield item.model_copy(deep=True)

    def list_all(self) -> list[E]:
        return list(self.iter_entities())

    def get_by_id(self, entity_id: int) -> E:
        _, entity = self._require(entity_id)
        return entity.model_copy(deep=True)

    def delete(self, entity_id: int) -> bool:
        index = self._find_index(entity_id)
        if index is None:
            logger.debug("delete of missing %s %s ignored", self.entity_name, entity_id)
            return False
        del self._items[index]
        logger.info("deleted %s %s", self.entity_name, entity_id)
        return True

    def apply_changes(self, entity_id: int, changes: dict[str, Any], *, touch: bool = True) -> E:
        index, current = self._require(entity_id)
        payload = current.model_dump() | changes
        if touch:
            payload["updated_at"] = self.now()
        updated = self._validate(payload)
        self._items[index] = updated
        return updated.model_copy(deep=True)

    def load(self, entities: Iterable[E | dict[str, Any]]) -> int:
        """Append pre-built records (fixtures) after the current ones, keeping their ids."""
        loaded = 0
        for raw in entities:
            entity = raw if isinstance(raw, BaseModel) else self._validate(raw)
            self._items.append(entity)
            self._next_id = max(self._next_id, entity.id + 1)
            loaded += 1
        return loaded

    def _allocate_id(self) -> int:
        entity_id = self._next_id
        self._next_id += 1
        return entity_id

    def _insert(self, entity: E) -> E:
        self._items.insert(0, entity)
        return entity.model_copy(deep=True)

    def _find_index(self, entity_id: object) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                return index
        return None

    def _require(self, entity_id: int) -> tuple[int, E]:
        index = self._find_index(entity_id)
        if index is None:
            raise NotFoundError(self.entity_name, entity_id)
        return index, self._items[index]

    def _validate(self, payload: dict[str, Any]) -> E:
        try:
            return self.model.model_validate(payload)
        except ValidationError as exc:
            raise from_validation_error(exc) from exc
