from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from core.records import SigamiRequest, field_value

ALL_STATUSES = "Todos os Status"
ALL_DEPARTMENTS = "Todas as Subsecretarias"
OTHERS_CATEGORY = "Outros"
FLAGGED_KEYWORD = "linha verde"

SEARCH_FIELDS = ("protocol", "subject", "analyst_name", "neighborhood")


@dataclass(frozen=True)
class FilterCriteria:
    search: str = ""
    status: str = ""
    department: str = ""
    start_date: str = ""
    end_date: str = ""
    only_flagged: bool = False


@dataclass(frozen=True)
class DynamicFilter:
    field: str
    value: str

    def describe(self) -> str:
        return f"Filtrando por {self.field.upper()}: {self.value}"


def _as_str(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "sim", "on"}
    return bool(value)


def normalize_filters(raw: dict, *, base: Optional[FilterCriteria] = None) -> FilterCriteria:
    """Build criteria from a loose dict, falling back to ``base`` for absent keys."""
    base = base or FilterCriteria()
    return FilterCriteria(
        search=_as_str(raw.get("search", base.search)),
        status=_as_str(raw.get("status", base.status)),
        department=_as_str(raw.get("department", base.department)),
        start_date=_as_str(raw.get("start_date", base.start_date)).strip(),
        end_date=_as_str(raw.get("end_date", base.end_date)).strip(),
        only_flagged=_as_bool(raw.get("only_flagged", base.only_flagged)),
    )


def is_flagged(record: SigamiRequest) -> bool:
    return FLAGGED_KEYWORD in (record.description or "").lower()


def matches_search(record: SigamiRequest, criteria: FilterCriteria) -> bool:
    if not criteria.search:
        return True
    needle = criteria.search.lower()
    return any(needle in field_value(record, f).lower() for f in SEARCH_FIELDS)


def matches_status(record: SigamiRequest, criteria: FilterCriteria) -> bool:
    if not criteria.status or criteria.status == ALL_STATUSES:
        return True
    return record.status == criteria.status


def matches_department(record: SigamiRequest, criteria: FilterCriteria) -> bool:
    if not criteria.department or criteria.department == ALL_DEPARTMENTS:
        return True
    return record.department == criteria.department


def matches_dynamic(record: SigamiRequest, dynamic: Optional[DynamicFilter]) -> bool:
    if dynamic is None:
        return True
    value = field_value(record, dynamic.field)
    # Exact or case-insensitive match.
    return value == dynamic.value or value.lower() == dynamic.value.lower()


def matches_date_range(record: SigamiRequest, criteria: FilterCriteria) -> bool:
    # Plain string comparison: an empty opened_date sorts before any bound.
    if criteria.start_date and not record.opened_date >= criteria.start_date:
        return False
    if criteria.end_date and not record.opened_date <= criteria.end_date:
        return False
    return True


def matches_flagged(record: SigamiRequest, criteria: FilterCriteria) -> bool:
    return not criteria.only_flagged or is_flagged(record)


def matches(record: SigamiRequest, criteria: FilterCriteria, dynamic: Optional[DynamicFilter] = None) -> bool:
    return (
        matches_search(record, criteria)
        and matches_status(record, criteria)
        and matches_department(record, criteria)
        and matches_dynamic(record, dynamic)
        and matches_date_range(record, criteria)
        and matches_flagged(record, criteria)
    )


def apply_filters(
    records: Iterable[SigamiRequest],
    criteria: FilterCriteria,
    dynamic: Optional[DynamicFilter] = None,
) -> Tuple[SigamiRequest, ...]:
    return tuple(r for r in records if matches(r, criteria, dynamic))


def flagged_subset(records: Iterable[SigamiRequest]) -> Tuple[SigamiRequest, ...]:
    return tuple(r for r in records if is_flagged(r))


def drilldown(field: str, value: object) -> Optional[DynamicFilter]:
    """Dynamic filter for a clicked aggregate category.

    The catch-all bucket has no single underlying value, so it yields None.
    """
    text = _as_str(value)
    if text == OTHERS_CATEGORY:
        return None
    return DynamicFilter(field=field, value=text)


def _distinct(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def status_options(records: Iterable[SigamiRequest]) -> List[str]:
    return [ALL_STATUSES] + _distinct(r.status for r in records)


def department_options(records: Iterable[SigamiRequest]) -> List[str]:
    return [ALL_DEPARTMENTS] + _distinct(r.department for r in records)
