"""Grouping and ranking over a filtered request set.

Counting goes through pandas ``groupby(sort=False)`` so buckets come out in
first-seen order; ranking uses Python's stable ``sorted`` so ties keep that
order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from core.filters import OTHERS_CATEGORY
from core.records import UNASSIGNED_ANALYST, SigamiRequest, field_value

NA_CATEGORY = "N/A"

COMPLETED_MARKERS = ("conclu",)
IN_PROGRESS_MARKERS = ("andamento", "atendimento")
NOT_STARTED_MARKERS = ("iniciado",)
WAITING_MARKERS = ("aguardando",)


@dataclass(frozen=True)
class AggregateBucket:
    category: str
    count: int


@dataclass(frozen=True)
class DashboardStats:
    total: int
    completed: int
    in_progress: int
    not_started: int
    completion_rate: str


def _category_series(records: Sequence[SigamiRequest], field: str) -> pd.Series:
    values = [field_value(r, field) or NA_CATEGORY for r in records]
    return pd.Series(values, dtype="object")


def group_count(records: Iterable[SigamiRequest], field: str) -> List[AggregateBucket]:
    records = list(records)
    if not records:
        return []
    series = _category_series(records, field)
    counts = series.groupby(series, sort=False).size()
    return [AggregateBucket(category=str(cat), count=int(n)) for cat, n in counts.items()]


def _ranked(buckets: List[AggregateBucket]) -> List[AggregateBucket]:
    return sorted(buckets, key=lambda b: b.count, reverse=True)


def top_n(records: Iterable[SigamiRequest], field: str, n: int) -> List[AggregateBucket]:
    return _ranked(group_count(records, field))[: max(0, n)]


def top_n_with_others(records: Iterable[SigamiRequest], field: str, n: int) -> List[AggregateBucket]:
    ranked = _ranked(group_count(records, field))
    n = max(0, n)
    if len(ranked) <= n:
        return ranked
    rest = sum(b.count for b in ranked[n:])
    return ranked[:n] + [AggregateBucket(category=OTHERS_CATEGORY, count=rest)]


def _has_marker(status: str, markers: Sequence[str]) -> bool:
    s = status.lower()
    return any(m in s for m in markers)


def format_rate(value: float, ndigits: int = 1) -> str:
    """Percentage rounded half-up on the exact binary value: 12.25 -> "12.3", 0.15 -> "0.1"."""
    q = Decimal(10) ** -ndigits
    return str(Decimal(value).quantize(q, rounding=ROUND_HALF_UP))


def compute_stats(records: Iterable[SigamiRequest]) -> DashboardStats:
    # Marker checks are independent; a status may count in several buckets.
    statuses = [r.status for r in records]
    total = len(statuses)
    completed = sum(1 for s in statuses if _has_marker(s, COMPLETED_MARKERS))
    in_progress = sum(1 for s in statuses if _has_marker(s, IN_PROGRESS_MARKERS))
    not_started = sum(1 for s in statuses if _has_marker(s, NOT_STARTED_MARKERS))
    rate = (completed / total) * 100 if total > 0 else 0.0
    return DashboardStats(
        total=total,
        completed=completed,
        in_progress=in_progress,
        not_started=not_started,
        completion_rate=format_rate(rate),
    )


def status_tone(status: str) -> str:
    """Badge class for a status: completed, in_progress, not_started, waiting or other."""
    if _has_marker(status, COMPLETED_MARKERS):
        return "completed"
    if _has_marker(status, IN_PROGRESS_MARKERS):
        return "in_progress"
    if _has_marker(status, NOT_STARTED_MARKERS):
        return "not_started"
    if _has_marker(status, WAITING_MARKERS):
        return "waiting"
    return "other"


def analyst_productivity(records: Iterable[SigamiRequest]) -> List[Dict[str, object]]:
    counts: Dict[str, int] = {}
    for r in records:
        name = r.analyst_name or UNASSIGNED_ANALYST
        counts[name] = counts.get(name, 0) + 1
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [
        {"rank": idx, "name": name, "count": count, "active": True}
        for idx, (name, count) in enumerate(ranked, start=1)
    ]
