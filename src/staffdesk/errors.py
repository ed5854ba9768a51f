from __future__ import annotations

from pydantic import ValidationError


class EngineError(Exception):
    """Base class for failures surfaced by the pipeline engine."""


class NotFoundError(EngineError, LookupError):
    def __init__(self, entity: str, entity_id: int, *, parent: str | None = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        self.parent = parent
        message = f"{entity} {entity_id} not found"
        if parent:
            message = f"{message} on {parent}"
        super().__init__(message)


class InvalidArgumentError(EngineError, ValueError):
    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


def from_validation_error(exc: ValidationError) -> InvalidArgumentError:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    detail = first.get("msg", "invalid input")
    return InvalidArgumentError(f"{location}: {detail}" if location else detail, field=location or None)
