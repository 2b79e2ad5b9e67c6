from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, field_validator

from core.records import REQUEST_FIELDS


class FilterCriteriaModel(BaseModel):
    search: str = ""
    status: str = ""
    department: str = ""
    start_date: str = ""
    end_date: str = ""
    only_flagged: bool = False


class FilterPatchModel(BaseModel):
    search: Optional[str] = None
    status: Optional[str] = None
    department: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    only_flagged: Optional[bool] = None


class DrilldownModel(BaseModel):
    field: str
    value: str

    @field_validator("field")
    @classmethod
    def known_field(cls, v: str) -> str:
        if v not in REQUEST_FIELDS:
            raise ValueError(f"unknown field: {v}")
        return v


class DynamicFilterModel(BaseModel):
    field: str
    value: str
    label: str


class DatasetModel(BaseModel):
    source: str
    total_rows: int
    generation: int


class StateResponse(BaseModel):
    filters: FilterCriteriaModel
    dynamic_filter: Optional[DynamicFilterModel] = None
    dataset: DatasetModel
    last_error: Optional[str] = None


class MetaListResponse(BaseModel):
    values: List[str]
