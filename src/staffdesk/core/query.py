from __future__ import annotations

import math
import unicodedata
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypeVar

from pydantic import BaseModel

from staffdesk.errors import InvalidArgumentError
from staffdesk.types import Page

T = TypeVar("T")

FilterKind = Literal["exact", "contains", "date_from", "date_to"]


def within_date_range(value: str | None, date_from: str | None = None, date_to: str | None = None) -> bool:
    """Inclusive ISO range check by lexical comparison.

    The value is truncated to the bound's length first, so a date-only bound
    covers every timestamp on that day.
    """
    if date_from is None and date_to is None:
        return True
    if not value:
        return False
    if date_from and value[: len(date_from)] < date_from:
        return False
    if date_to and value[: len(date_to)] > date_to:
        return False
    return True


def contains_text(value: Any, needle: str) -> bool:
    if value is None:
        return False
    return needle.lower() in str(value).lower()


@dataclass(frozen=True, slots=True)
class FieldFilter:
    param: str
    attribute: str
    kind: FilterKind = "exact"

    def matches(self, item: Any, expected: Any) -> bool:
        value = getattr(item, self.attribute, None)
        if self.kind == "exact":
            return value == expected
        if self.kind == "contains":
            return contains_text(value, str(expected))
        if self.kind == "date_from":
            return within_date_range(value, date_from=str(expected))
        if self.kind == "date_to":
            return within_date_range(value, date_to=str(expected))
        raise ValueError(f"unsupported filter kind '{self.kind}'")


@dataclass(frozen=True, slots=True)
class SortSpec:
    key: Callable[[Any], Any]
    descending: bool = False


def locale_sort_key(value: str | None) -> str:
    text = unicodedata.normalize("NFKD", value or "")
    return "".join(ch for ch in text if not unicodedata.combining(ch)).casefold()


def build_predicate(filters: Sequence[FieldFilter], params: Mapping[str, Any]) -> Callable[[Any], bool]:
    active = [(item, params[item.param]) for item in filters if params.get(item.param) not in (None, "")]

    def predicate(entity: Any) -> bool:
        return all(field_filter.matches(entity, expected) for field_filter, expected in active)

    return predicate


def sort_items(items: Iterable[T], sort: SortSpec | None) -> list[T]:
    # sorted() is stable, also with reverse=True, so ties keep insertion order.
    if sort is None:
        return list(items)
    return sorted(items, key=sort.key, reverse=sort.descending)


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    total = len(items)
    start = (page - 1) * page_size
    return Page[T](
        data=list(items[start : start + page_size]),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size),
    )


def query(
    collection: Iterable[T],
    params: BaseModel | Mapping[str, Any] | None,
    *,
    filters: Sequence[FieldFilter],
    sort: SortSpec | None,
    default_page_size: int,
    max_page_size: int | None = None,
) -> Page[T]:
    """Filter with AND semantics, sort, then slice one 1-indexed page.

    ``sort_by``/``sort_order`` in ``params`` are accepted but the fixed ``sort``
    always applies. ``total`` is the filtered count.
    """
    if params is None:
        values: dict[str, Any] = {}
    elif isinstance(params, BaseModel):
        values = params.model_dump(exclude_none=True)
    else:
        values = {key: value for key, value in params.items() if value is not None}

    page = values.get("page", 1)
    page_size = values.get("page_size", default_page_size)
    if page < 1:
        raise InvalidArgumentError("page must be >= 1", field="page")
    if page_size < 1:
        raise InvalidArgumentError("page_size must be >= 1", field="page_size")
    if max_page_size is not None:
        page_size = min(page_size, max_page_size)

    predicate = build_predicate(filters, values)
    matched = sort_items((entity for entity in collection if predicate(entity)), sort)
    return paginate(matched, page, page_size)
