from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

from core.aggregate import analyst_productivity, status_tone
from core.settings import DEFAULT_SETTINGS, DashboardSettings
from core.state import DashboardState
from core.table import page_count, page_window, paginate, sort_by


def compute_analysts(state: DashboardState) -> Dict[str, Any]:
    return {"rows": analyst_productivity(state.filtered())}


def compute_requests(
    state: DashboardState,
    settings: DashboardSettings = DEFAULT_SETTINGS,
    *,
    sort_key: Optional[str] = None,
    direction: Optional[str] = None,
    page: int = 1,
    page_size: Optional[int] = None,
) -> Dict[str, Any]:
    page_size = page_size or settings.page_size
    ordered = sort_by(state.filtered(), sort_key, direction)
    total_pages = page_count(len(ordered), page_size)
    rows = []
    for r in paginate(ordered, page_size, page):
        row = asdict(r)
        row["status_tone"] = status_tone(r.status)
        rows.append(row)
    return {
        "sort": {"key": sort_key, "direction": direction},
        "rows": rows,
        "total": len(ordered),
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "pages": page_window(page, total_pages),
    }
