from __future__ import annotations

import io
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.exceptions import SpreadsheetImportError
from core.normalize import is_missing
from core.records import FIELD_KEYS, REQUEST_FIELDS, SigamiRequest, map_rows, requests_to_frame
from core.sample import SAMPLE_ROWS
from core.settings import DEFAULT_SETTINGS, DashboardSettings
from core.state import DashboardState, DashboardStore, ImportFailed

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
SAMPLE_SOURCE = "sample"

EXPORT_FILENAME = "relatorio_sigami.xlsx"
EXPORT_SHEET = "Solicitações"
EXPORT_COLUMNS = {"id": "id", **{name: keys[0] for name, keys in FIELD_KEYS.items()}}

SpreadsheetSource = Union[str, Path, bytes, BinaryIO]


def get_source_files(pattern: str = DEFAULT_SETTINGS.data_glob) -> List[Path]:
    return sorted(DATA_DIR.glob(pattern))


def file_signature(files: List[Path]) -> Tuple[Tuple[str, float], ...]:
    return tuple((f.name, f.stat().st_mtime) for f in files)


def _excel_engine(filename: Optional[str]) -> Optional[str]:
    if filename and filename.lower().endswith(".xls"):
        return "xlrd"
    return None


def rows_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """One dict per non-blank row; empty cells are left out of the dict."""
    df = df.dropna(how="all")
    rows: List[Dict[str, Any]] = []
    for record in df.to_dict(orient="records"):
        rows.append({str(k): v for k, v in record.items() if not is_missing(v)})
    return rows


def read_spreadsheet(source: SpreadsheetSource, filename: Optional[str] = None) -> List[Dict[str, Any]]:
    """Decode the first sheet of an .xlsx/.xls into loose row dicts.

    Cells keep the type stored in the workbook: text stays text even when it
    looks numeric ("00123"), numbers stay numbers and date cells come back
    as datetimes.
    """
    if filename is None and isinstance(source, (str, Path)):
        filename = Path(source).name
    payload = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        df = pd.read_excel(payload, sheet_name=0, dtype=object, engine=_excel_engine(filename))
    except Exception as exc:
        label = f" {filename}" if filename else ""
        raise SpreadsheetImportError(f"Não foi possível ler a planilha{label}: {exc}", filename=filename) from exc
    return rows_from_frame(df)


def import_spreadsheet(
    store: DashboardStore,
    source: SpreadsheetSource,
    filename: Optional[str] = None,
) -> DashboardState:
    """Decode, map and load a spreadsheet as the new dataset.

    A failed decode leaves the current dataset in place, records the message
    on the state and re-raises.
    """
    try:
        rows = read_spreadsheet(source, filename=filename)
    except SpreadsheetImportError as exc:
        logger.warning("Spreadsheet import failed (%s): %s", filename, exc.message)
        store.dispatch(ImportFailed(message=exc.message))
        raise
    requests = map_rows(rows)
    logger.info("Loaded %d requests from %s", len(requests), filename or "upload")
    return store.load(requests, source=filename or "upload")


@lru_cache(maxsize=4)
def _load_bundled_cached(files_sig: Tuple[Tuple[str, float], ...]) -> Tuple[Tuple[SigamiRequest, ...], str]:
    if not files_sig:
        return map_rows(SAMPLE_ROWS), SAMPLE_SOURCE
    latest = files_sig[-1][0]
    return map_rows(read_spreadsheet(DATA_DIR / latest)), latest


def load_bundled_requests(settings: DashboardSettings = DEFAULT_SETTINGS) -> Tuple[Tuple[SigamiRequest, ...], str]:
    """Newest SIGAMI spreadsheet next to the app, or the built-in sample."""
    files = get_source_files(settings.data_glob)
    return _load_bundled_cached(file_signature(files))


def load_bundled(store: DashboardStore, settings: DashboardSettings = DEFAULT_SETTINGS) -> DashboardState:
    """Load the bundled dataset. An unreadable bundled file is recorded like a failed upload."""
    try:
        requests, source = load_bundled_requests(settings)
    except SpreadsheetImportError as exc:
        logger.warning("Bundled dataset could not be loaded (%s): %s", exc.filename, exc.message)
        store.dispatch(ImportFailed(message=exc.message))
        raise
    logger.info("Loaded %d requests from %s", len(requests), source)
    return store.load(requests, source=source)


def export_frame(records: Iterable[SigamiRequest]) -> pd.DataFrame:
    df = requests_to_frame(records)
    return df[list(REQUEST_FIELDS)].rename(columns=EXPORT_COLUMNS)


def export_requests(records: Iterable[SigamiRequest], sheet_name: str = EXPORT_SHEET) -> bytes:
    """Encode requests as an .xlsx workbook with the import headers."""
    df = export_frame(records)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
        worksheet = writer.sheets[sheet_name]
        header_font = Font(bold=True)
        for col_num, col_name in enumerate(df.columns, 1):
            worksheet.cell(row=1, column=col_num).font = header_font
            longest = df[col_name].astype(str).map(len).max() if not df.empty else 0
            worksheet.column_dimensions[get_column_letter(col_num)].width = min(max(longest, len(col_name)) + 2, 50)
    return output.getvalue()
