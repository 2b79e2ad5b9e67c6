import json

import pytest

from core.charts import DRILLDOWN_SELECTION, compute_charts, geo_chart, to_vega_spec
from core.metrics_overview import compute_overview
from core.metrics_requests import compute_analysts, compute_requests
from core.settings import DashboardSettings
from core.state import AggregateSelected, SetFilters, ToggleFlagged


pytestmark = pytest.mark.unit


def _dataset_rows(spec):
    return [row for values in spec.get("datasets", {}).values() for row in values]


def test_overview_kpis_and_dataset(store):
    payload = compute_overview(store.state)
    assert payload["kpis"] == {
        "total": 5,
        "completed": 2,
        "in_progress": 2,
        "not_started": 1,
        "completion_rate": "40.0",
    }
    assert payload["dataset"] == {"source": "fixture", "total_rows": 5, "generation": 1}
    assert payload["dynamic_filter"] is None
    assert set(payload["charts"]) == {"status", "department", "top_subjects", "geo"}


def test_overview_is_json_serializable(store):
    json.dumps(compute_overview(store.state, geo_view="neighborhood"))


def test_overview_flagged_section_visible(store):
    flagged = compute_overview(store.state)["flagged"]
    assert flagged["visible"] is True
    assert flagged["count"] == 2
    assert flagged["top_subjects"] == [{"category": "Poda De Árvore", "count": 2}]
    assert isinstance(flagged["chart"], dict)


def test_overview_flagged_section_hidden_when_toggle_on(store):
    store.dispatch(ToggleFlagged())
    payload = compute_overview(store.state)
    assert payload["kpis"]["total"] == 2
    assert payload["flagged"]["visible"] is False
    assert payload["flagged"]["chart"] is None


def test_overview_flagged_section_hidden_without_matches(store):
    store.dispatch(SetFilters(changes={"department": "SUBLIC"}))
    flagged = compute_overview(store.state)["flagged"]
    assert flagged["count"] == 0
    assert flagged["visible"] is False


def test_overview_reports_dynamic_filter(store):
    store.dispatch(AggregateSelected(field="subject", value="Queimada"))
    payload = compute_overview(store.state)
    assert payload["dynamic_filter"] == {
        "field": "subject",
        "value": "Queimada",
        "label": "Filtrando por SUBJECT: Queimada",
    }
    assert payload["kpis"]["total"] == 2


def test_charts_expose_drilldown_selection(requests_sample):
    charts = compute_charts(requests_sample)
    for spec in charts.values():
        names = [p["name"] for p in spec.get("params", [])]
        assert DRILLDOWN_SELECTION in names


def test_geo_chart_collapses_tail_into_others(requests_sample):
    spec = to_vega_spec(geo_chart(requests_sample, "neighborhood", 1))
    rows = _dataset_rows(spec)
    assert rows == [{"category": "Centro", "count": 3}, {"category": "Outros", "count": 2}]


def test_geo_chart_unknown_view_falls_back_to_city(requests_sample):
    spec = to_vega_spec(geo_chart(requests_sample, "street", 10))
    categories = [row["category"] for row in _dataset_rows(spec)]
    assert categories == ["Belford Roxo", "Nova Iguaçu"]


def test_compute_requests_sorted_page(store):
    payload = compute_requests(store.state, sort_key="opened_date", direction="asc", page=1, page_size=2)
    assert [r["id"] for r in payload["rows"]] == ["2", "0"]
    assert payload["rows"][0]["status_tone"] == "not_started"
    assert payload["total"] == 5
    assert payload["total_pages"] == 3
    assert payload["pages"] == [1, 2, 3]
    assert payload["sort"] == {"key": "opened_date", "direction": "asc"}


def test_compute_requests_defaults_to_settings_page_size(store):
    payload = compute_requests(store.state, DashboardSettings(page_size=3), page=2)
    assert payload["page_size"] == 3
    assert [r["id"] for r in payload["rows"]] == ["3", "4"]


def test_compute_requests_page_past_end_is_empty(store):
    payload = compute_requests(store.state, page=9, page_size=10)
    assert payload["rows"] == []
    assert payload["total_pages"] == 1


def test_compute_analysts_ranks_by_volume(store):
    rows = compute_analysts(store.state)["rows"]
    assert [(r["name"], r["count"]) for r in rows] == [
        ("Carlos Menezes", 2),
        ("Fernanda Rocha", 2),
        ("Juliana Prado", 1),
    ]
    assert rows[0]["rank"] == 1
