import logging
from contextlib import contextmanager
from typing import Optional

import altair as alt
import pandas as pd
import streamlit as st

from core.aggregate import analyst_productivity, compute_stats, status_tone
from core.charts import (
    DRILLDOWN_SELECTION,
    department_chart,
    geo_chart,
    status_chart,
    top_subjects_chart,
)
from core.data import EXPORT_FILENAME, export_requests, import_spreadsheet, load_bundled
from core.exceptions import SpreadsheetImportError
from core.filters import department_options, flagged_subset, status_options
from core.settings import DEFAULT_SETTINGS
from core.state import (
    AggregateSelected,
    ClearAllFilters,
    ClearDynamicFilter,
    DashboardStore,
    SetFilters,
)
from core.table import page_count, paginate, sort_by

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

settings = DEFAULT_SETTINGS

TABLE_COLUMNS = {
    "protocol": "Protocolo",
    "subject": "Assunto",
    "department": "Subsecretaria",
    "status": "Status",
    "priority": "Prioridade",
    "opened_date": "Abertura",
    "due_date": "Prazo",
    "analyst_name": "Analista",
    "neighborhood": "Bairro",
}
TONE_BADGES = {
    "completed": "🟢",
    "in_progress": "🟡",
    "not_started": "🔴",
    "waiting": "🔵",
    "other": "⚪",
}
FILTER_KEYS = ("f_search", "f_status", "f_department", "f_start", "f_end", "f_flagged")


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #334155;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.5rem;font-weight: 800;}
        .app-top-bar .breadcrumb {font-size: 0.75rem;text-transform: uppercase;opacity: 0.8;}
        .card {border: 1px solid #334155;border-radius: 12px;padding: 16px;margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;margin-bottom: 8px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def _load_bundled_guarded(store: DashboardStore) -> None:
    try:
        load_bundled(store, settings)
    except SpreadsheetImportError:
        logger.warning("Bundled dataset rejected; keeping the current data")


def get_store() -> DashboardStore:
    if "store" not in st.session_state:
        store = DashboardStore()
        st.session_state["store"] = store
        _load_bundled_guarded(store)
    return st.session_state["store"]


def _clear_all_filters():
    for key in FILTER_KEYS:
        st.session_state.pop(key, None)
    get_store().dispatch(ClearAllFilters())


def drilldown_chart(chart: alt.Chart, field: str, key: str):
    """Render a chart and turn a clicked category into a drill-down filter."""
    event = st.altair_chart(chart, use_container_width=True, on_select="rerun", key=key)
    selection = event.get("selection", {}) if event else {}
    points = selection.get(DRILLDOWN_SELECTION) or []
    token: Optional[tuple] = (field, str(points[0].get("category"))) if points else None
    last_key = f"_last_{key}"
    if token == st.session_state.get(last_key):
        return
    st.session_state[last_key] = token
    if token is not None:
        get_store().dispatch(AggregateSelected(field=token[0], value=token[1]))
        st.rerun()


# ---------- UI setup ----------
st.set_page_config(page_title="SIGAMI - Gestão Ambiental", layout="wide")
inject_base_styles()
store = get_store()

top = st.container()
c1, c2, c3 = top.columns([6, 3, 1])
with c1:
    st.markdown(
        "<div class='app-top-bar'><div class='page-title'>SIGAMI</div>"
        "<div class='breadcrumb'>Gestão Ambiental - Belford Roxo</div></div>",
        unsafe_allow_html=True,
    )
with c2:
    uploaded = st.file_uploader("Upload Excel", type=["xlsx", "xls"], label_visibility="collapsed")
    if uploaded is not None and st.session_state.get("_last_upload") != uploaded.file_id:
        st.session_state["_last_upload"] = uploaded.file_id
        try:
            import_spreadsheet(store, uploaded.getvalue(), filename=uploaded.name)
        except SpreadsheetImportError:
            logger.warning("Upload of %s rejected", uploaded.name)
with c3:
    if st.button("Atualizar", help="Recarregar os dados de exemplo"):
        _load_bundled_guarded(store)

state = store.state
if state.last_error:
    st.error(state.last_error)

# ----- Drill-down banner -----
if state.dynamic_filter is not None:
    b1, b2 = st.columns([8, 1])
    b1.info(state.dynamic_filter.describe())
    if b2.button("Limpar filtro"):
        store.dispatch(ClearDynamicFilter())
        st.rerun()

# ----- Filter bar -----
with card("Filtros Avançados"):
    cols = st.columns(6)
    start = cols[0].date_input("Data Início", value=None, format="DD/MM/YYYY", key="f_start")
    end = cols[1].date_input("Data Fim", value=None, format="DD/MM/YYYY", key="f_end")
    status = cols[2].selectbox("Status", status_options(state.requests), key="f_status")
    department = cols[3].selectbox("Subsecretaria", department_options(state.requests), key="f_department")
    search = cols[4].text_input("Buscar", placeholder="Protocolo, assunto...", key="f_search")
    only_flagged = cols[5].toggle("Linha Verde", key="f_flagged")
    st.button("Limpar tudo", on_click=_clear_all_filters)

state = store.dispatch(
    SetFilters(
        changes={
            "search": search or "",
            "status": status or "",
            "department": department or "",
            "start_date": start.isoformat() if start else "",
            "end_date": end.isoformat() if end else "",
            "only_flagged": bool(only_flagged),
        }
    )
)
filtered = state.filtered()

# ----- KPI row -----
stats = compute_stats(filtered)
k = st.columns(5)
k[0].metric("Total", stats.total, help="Solicitações")
k[1].metric("Concluídas", stats.completed, help="Resolvidos")
k[2].metric("Em Andamento", stats.in_progress, help="Em análise")
k[3].metric("Pendentes", stats.not_started, help="Aguardando")
k[4].metric("Eficiência", f"{stats.completion_rate}%", help="Taxa conclusão")

# ----- Charts -----
row1 = st.columns(2)
with row1[0]:
    drilldown_chart(status_chart(filtered), "status", "chart_status")
with row1[1]:
    drilldown_chart(department_chart(filtered), "department", "chart_department")
row2 = st.columns(2)
with row2[0]:
    drilldown_chart(top_subjects_chart(filtered, settings.top_subjects), "subject", "chart_subjects")
with row2[1]:
    geo_view = st.radio("Localidade", ["city", "neighborhood"], horizontal=True, format_func=lambda v: "Cidade" if v == "city" else "Bairro")
    drilldown_chart(geo_chart(filtered, geo_view, settings.top_locations), geo_view, f"chart_geo_{geo_view}")

# ----- Linha Verde section -----
flagged = flagged_subset(filtered)
if not state.criteria.only_flagged and flagged:
    with card("Monitoramento Linha Verde"):
        f1, f2 = st.columns([1, 2])
        f1.metric("Solicitações", len(flagged), help="Via Linha Verde")
        f1.caption('Visualizando solicitações que contêm "Linha Verde" na descrição.')
        with f2:
            title = f"Top {settings.top_subjects} Assuntos (Linha Verde)"
            drilldown_chart(top_subjects_chart(flagged, settings.top_subjects, title=title), "subject", "chart_flagged")

# ----- Analysts -----
with card("Produtividade por Analista"):
    analysts = pd.DataFrame(analyst_productivity(filtered), columns=["rank", "name", "count", "active"])
    analysts["active"] = analysts["active"].map(lambda v: "ATIVO" if v else "")
    st.dataframe(
        analysts.rename(columns={"rank": "#", "name": "Analista", "count": "Solicitações", "active": "Status"}),
        use_container_width=True,
        hide_index=True,
    )

# ----- Detailed requests -----
with card("Solicitações Detalhadas"):
    t1, t2, t3, t4 = st.columns([3, 2, 2, 2])
    sort_key = t1.selectbox(
        "Ordenar por",
        [None] + list(TABLE_COLUMNS),
        format_func=lambda c: "Sem ordenação" if c is None else TABLE_COLUMNS[c],
    )
    direction = t2.radio("Direção", ["asc", "desc"], horizontal=True)
    page_size = t3.selectbox("Por página", list(settings.page_sizes))

    # Any change to the underlying rows sends the pager back to page 1.
    signature = (state.generation, len(filtered), page_size)
    if st.session_state.get("_table_sig") != signature:
        st.session_state["_table_sig"] = signature
        st.session_state["page"] = 1
    total_pages = max(1, page_count(len(filtered), page_size))
    page = t4.number_input("Página", min_value=1, max_value=total_pages, step=1, key="page")

    ordered = sort_by(filtered, sort_key, direction)
    rows = [
        {**{label: getattr(r, name) for name, label in TABLE_COLUMNS.items()}, "": TONE_BADGES[status_tone(r.status)]}
        for r in paginate(ordered, page_size, int(page))
    ]
    if rows:
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    else:
        st.caption("Nenhum registro encontrado.")
    st.caption(f"Página {int(page)} de {total_pages} · {len(filtered)} registros")
    st.download_button(
        "Exportar",
        data=export_requests(filtered),
        file_name=EXPORT_FILENAME,
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )

st.caption("SEMAS Belford Roxo. Desenvolvido para gestão eficiente de recursos ambientais.")
