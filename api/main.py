from __future__ import annotations

from dataclasses import asdict
import logging
import math
from typing import Literal, Optional

import numpy as np
import pandas as pd
from fastapi import Depends, FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import (
    DatasetModel,
    DrilldownModel,
    DynamicFilterModel,
    FilterCriteriaModel,
    FilterPatchModel,
    MetaListResponse,
    StateResponse,
)
from core.data import EXPORT_FILENAME, export_requests, import_spreadsheet, load_bundled
from core.exceptions import SigamiError, SpreadsheetImportError
from core.filters import department_options, status_options
from core.metrics_overview import compute_overview
from core.metrics_requests import compute_analysts, compute_requests
from core.state import (
    AggregateSelected,
    ClearAllFilters,
    ClearDynamicFilter,
    DashboardState,
    DashboardStore,
    SetFilters,
    ToggleFlagged,
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

app = FastAPI(title="SIGAMI Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_store = DashboardStore()


def get_store() -> DashboardStore:
    """Process-wide store, seeded with the bundled dataset on first use."""
    if _store.state.generation == 0 and _store.state.last_error is None:
        try:
            load_bundled(_store)
        except SpreadsheetImportError:
            logger.warning("Serving an empty dataset until a spreadsheet is imported")
    return _store


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        ),
    )


def _state_payload(state: DashboardState) -> StateResponse:
    dynamic = state.dynamic_filter
    return StateResponse(
        filters=FilterCriteriaModel(**asdict(state.criteria)),
        dynamic_filter=(
            DynamicFilterModel(field=dynamic.field, value=dynamic.value, label=dynamic.describe()) if dynamic else None
        ),
        dataset=DatasetModel(source=state.source, total_rows=len(state.requests), generation=state.generation),
        last_error=state.last_error,
    )


@app.exception_handler(SigamiError)
async def sigami_error_handler(request: Request, exc: SigamiError) -> JSONResponse:
    status_code = 422 if isinstance(exc, SpreadsheetImportError) else 500
    logger.warning("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "type": type(exc).__name__, "code": exc.code},
    )


@app.get("/state", response_model=StateResponse)
def get_state(store: DashboardStore = Depends(get_store)):
    return _state_payload(store.state)


@app.patch("/filters", response_model=StateResponse)
def patch_filters(patch: FilterPatchModel, store: DashboardStore = Depends(get_store)):
    changes = patch.model_dump(exclude_unset=True, exclude_none=True)
    return _state_payload(store.dispatch(SetFilters(changes=changes)))


@app.post("/filters/clear", response_model=StateResponse)
def clear_filters(store: DashboardStore = Depends(get_store)):
    return _state_payload(store.dispatch(ClearAllFilters()))


@app.post("/filters/flagged/toggle", response_model=StateResponse)
def toggle_flagged(store: DashboardStore = Depends(get_store)):
    return _state_payload(store.dispatch(ToggleFlagged()))


@app.post("/drilldown", response_model=StateResponse)
def set_drilldown(body: DrilldownModel, store: DashboardStore = Depends(get_store)):
    return _state_payload(store.dispatch(AggregateSelected(field=body.field, value=body.value)))


@app.delete("/drilldown", response_model=StateResponse)
def clear_drilldown(store: DashboardStore = Depends(get_store)):
    return _state_payload(store.dispatch(ClearDynamicFilter()))


@app.get("/meta/statuses", response_model=MetaListResponse)
def meta_statuses(store: DashboardStore = Depends(get_store)):
    return MetaListResponse(values=status_options(store.current()))


@app.get("/meta/departments", response_model=MetaListResponse)
def meta_departments(store: DashboardStore = Depends(get_store)):
    return MetaListResponse(values=department_options(store.current()))


@app.get("/overview")
def overview(
    geo_view: Literal["city", "neighborhood"] = Query(default="city"),
    store: DashboardStore = Depends(get_store),
):
    try:
        return _json(compute_overview(store.state, geo_view=geo_view))
    except Exception as exc:
        logger.exception("overview failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/analysts")
def analysts(store: DashboardStore = Depends(get_store)):
    try:
        return _json(compute_analysts(store.state))
    except Exception as exc:
        logger.exception("analysts failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/requests")
def requests_table(
    sort_key: Optional[str] = Query(default=None),
    direction: Optional[Literal["asc", "desc"]] = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=500),
    store: DashboardStore = Depends(get_store),
):
    try:
        payload = compute_requests(store.state, sort_key=sort_key, direction=direction, page=page, page_size=page_size)
        return _json(payload)
    except Exception as exc:
        logger.exception("requests failed")
        return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.post("/import", response_model=StateResponse)
async def import_file(
    request: Request,
    filename: str = Query(default="upload.xlsx"),
    store: DashboardStore = Depends(get_store),
):
    body = await request.body()
    state = await run_in_threadpool(import_spreadsheet, store, body, filename=filename)
    return _state_payload(state)


@app.post("/refresh", response_model=StateResponse)
def refresh(store: DashboardStore = Depends(get_store)):
    return _state_payload(load_bundled(store))


@app.get("/export")
def export(store: DashboardStore = Depends(get_store)):
    content = export_requests(store.state.filtered())
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )
