from __future__ import annotations

import math
import numbers
from datetime import date, datetime, timedelta
from typing import Any, Mapping, Optional

import pandas as pd

# Day 25569 of the spreadsheet calendar is 1970-01-01.
EXCEL_UNIX_EPOCH_OFFSET = 25569
SECONDS_PER_DAY = 86400
UNIX_EPOCH = datetime(1970, 1, 1)


def is_missing(value: object) -> bool:
    """True for None and for pandas/numpy missing markers (NaN, NaT, pd.NA)."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def as_text(value: object) -> str:
    """Stringify a loosely-typed cell. Missing -> "", 123.0 -> "123"."""
    if is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_text(value: object) -> str:
    """Title-case words longer than two characters ("AREIA BRANCA" -> "Areia Branca").

    Short words ("de", "do", "da") stay lowercase. Idempotent.
    """
    text = as_text(value)
    if not text:
        return ""
    words = text.lower().strip().split(" ")
    return " ".join(w[0].upper() + w[1:] if len(w) > 2 else w for w in words)


def resolve_field(row: Mapping[str, Any], *keys: str) -> Optional[Any]:
    """Return the first non-missing value found under one of ``keys``.

    Exact keys are tried first, in order. Only when none of them holds a value
    is the row scanned again, matching each candidate case-insensitively
    against the row's own headers ("Descrição" vs "descrição").
    """
    for key in keys:
        if key in row and not is_missing(row[key]):
            return row[key]

    row_keys = list(row.keys())
    for key in keys:
        lowered = key.lower()
        found = next((k for k in row_keys if str(k).lower() == lowered), None)
        if found is not None and not is_missing(row[found]):
            return row[found]
    return None


def coerce_excel_date(value: object) -> str:
    """Convert a spreadsheet date serial to ``YYYY-MM-DD``.

    The conversion is approximate: it keeps the spreadsheet's 1900 leap-year
    erratum, so serial 1 maps to 1899-12-31. Date cells already decoded as
    dates keep their calendar day. Any other value is returned as ``str``.
    """
    if is_missing(value):
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if value == 0:
            return ""
        try:
            millis = math.floor((value - EXCEL_UNIX_EPOCH_OFFSET) * SECONDS_PER_DAY * 1000 + 0.5)
            return (UNIX_EPOCH + timedelta(milliseconds=millis)).date().isoformat()
        except OverflowError:
            return str(value)
    return str(value)
