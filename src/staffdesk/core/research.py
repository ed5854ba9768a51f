from __future__ import annotations

from typing import Any

from staffdesk.types import Research

RESEARCH_FIELDS: tuple[str, ...] = ("value_proposition", "mission", "vision", "sales_pitch")


def _is_populated(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def completeness(research: Research | dict[str, Any] | None) -> int:
    """Percentage of the four research fields that hold non-blank text (0, 25, 50, 75 or 100)."""
    if research is None:
        return 0
    values = research.model_dump() if isinstance(research, Research) else research
    filled = sum(1 for name in RESEARCH_FIELDS if _is_populated(values.get(name)))
    return round(100 * filled / len(RESEARCH_FIELDS))


def merge_research(current: Research | None, patch: dict[str, Any], *, research_date: str | None) -> Research:
    base = current.model_dump() if current else {}
    merged = base | patch
    merged["last_research_date"] = research_date
    merged["completeness_percent"] = completeness(merged)
    return Research.model_validate(merged)
