from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.aggregate import compute_stats, top_n
from core.charts import compute_charts, to_vega_spec, top_subjects_chart
from core.filters import flagged_subset
from core.settings import DEFAULT_SETTINGS, DashboardSettings
from core.state import DashboardState


def compute_overview(
    state: DashboardState,
    settings: DashboardSettings = DEFAULT_SETTINGS,
    *,
    geo_view: str = "city",
) -> Dict[str, Any]:
    filtered = state.filtered()
    stats = compute_stats(filtered)

    # Highlighted section only makes sense while the toggle is not already narrowing to it.
    flagged = flagged_subset(filtered)
    flagged_visible = not state.criteria.only_flagged and len(flagged) > 0
    flagged_payload: Dict[str, Any] = {
        "visible": flagged_visible,
        "count": len(flagged),
        "top_subjects": [asdict(b) for b in top_n(flagged, "subject", settings.top_subjects)],
        "chart": None,
    }
    if flagged_visible:
        title = f"Top {settings.top_subjects} Assuntos (Linha Verde)"
        flagged_payload["chart"] = to_vega_spec(top_subjects_chart(flagged, settings.top_subjects, title=title))

    dynamic = state.dynamic_filter
    return {
        "filters": asdict(state.criteria),
        "dynamic_filter": (
            {"field": dynamic.field, "value": dynamic.value, "label": dynamic.describe()} if dynamic else None
        ),
        "dataset": {"source": state.source, "total_rows": len(state.requests), "generation": state.generation},
        "kpis": asdict(stats),
        "charts": compute_charts(filtered, settings, geo_view=geo_view),
        "flagged": flagged_payload,
    }
