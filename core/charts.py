from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Sequence

import altair as alt
import pandas as pd

from core.aggregate import AggregateBucket, group_count, top_n, top_n_with_others
from core.filters import OTHERS_CATEGORY
from core.records import SigamiRequest
from core.settings import DEFAULT_SETTINGS, DashboardSettings

alt.data_transformers.disable_max_rows()

# Point selection name shared by every chart; a click yields {"category": ...}.
DRILLDOWN_SELECTION = "drilldown"
OTHERS_COLOR = "#64748b"
GEO_VIEWS = ("city", "neighborhood")


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def buckets_frame(buckets: Sequence[AggregateBucket]) -> pd.DataFrame:
    return pd.DataFrame([asdict(b) for b in buckets], columns=["category", "count"])


def _tooltip(title: str) -> List[alt.Tooltip]:
    return [alt.Tooltip("category:N", title=title), alt.Tooltip("count:Q", title="Solicitações")]


def donut_chart(buckets: Sequence[AggregateBucket], title: str, *, inner_radius: int = 70, outer_radius: int = 100) -> alt.Chart:
    pick = alt.selection_point(fields=["category"], name=DRILLDOWN_SELECTION)
    color = alt.Color("category:N", title=None, sort=None, legend=alt.Legend(orient="bottom"))
    return (
        alt.Chart(buckets_frame(buckets))
        .mark_arc(innerRadius=inner_radius, outerRadius=outer_radius, padAngle=0.02)
        .encode(
            theta=alt.Theta("count:Q", stack=True),
            color=alt.condition(alt.datum.category == OTHERS_CATEGORY, alt.value(OTHERS_COLOR), color),
            opacity=alt.condition(pick, alt.value(1), alt.value(0.4)),
            tooltip=_tooltip(title),
        )
        .add_params(pick)
        .properties(title=title, height=300)
    )


def bar_chart(buckets: Sequence[AggregateBucket], title: str, *, ranked: bool = False) -> alt.Chart:
    pick = alt.selection_point(fields=["category"], name=DRILLDOWN_SELECTION)
    return (
        alt.Chart(buckets_frame(buckets))
        .mark_bar(cornerRadiusEnd=4)
        .encode(
            x=alt.X("count:Q", title="Solicitações", axis=alt.Axis(format="d", gridDash=[4, 4])),
            y=alt.Y("category:N", title=None, sort="-x" if ranked else None),
            opacity=alt.condition(pick, alt.value(1), alt.value(0.4)),
            tooltip=_tooltip(title),
        )
        .add_params(pick)
        .properties(title=title, height=300)
    )


def status_chart(records: Iterable[SigamiRequest]) -> alt.Chart:
    return donut_chart(group_count(records, "status"), "Distribuição por Status")


def department_chart(records: Iterable[SigamiRequest]) -> alt.Chart:
    return bar_chart(group_count(records, "department"), "Solicitações por Subsecretaria")


def top_subjects_chart(records: Iterable[SigamiRequest], n: int = DEFAULT_SETTINGS.top_subjects, title: str = "") -> alt.Chart:
    return bar_chart(top_n(records, "subject", n), title or f"Top {n} Assuntos", ranked=True)


def geo_chart(records: Iterable[SigamiRequest], view: str = "city", n: int = DEFAULT_SETTINGS.top_locations) -> alt.Chart:
    if view not in GEO_VIEWS:
        view = "city"
    title = "Distribuição por Cidade" if view == "city" else "Distribuição por Bairro"
    return donut_chart(top_n_with_others(records, view, n), title, inner_radius=60, outer_radius=80)


def compute_charts(
    records: Sequence[SigamiRequest],
    settings: DashboardSettings = DEFAULT_SETTINGS,
    *,
    geo_view: str = "city",
) -> Dict[str, Any]:
    return {
        "status": to_vega_spec(status_chart(records)),
        "department": to_vega_spec(department_chart(records)),
        "top_subjects": to_vega_spec(top_subjects_chart(records, settings.top_subjects)),
        "geo": to_vega_spec(geo_chart(records, geo_view, settings.top_locations)),
    }
