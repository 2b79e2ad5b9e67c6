from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple

import pandas as pd

from core.normalize import as_text, coerce_excel_date, normalize_text, resolve_field

DEFAULT_SUBJECT = "Outros"
DEFAULT_DEPARTMENT = "N/A"
DEFAULT_PRIORITY = "Média"
DEFAULT_STATUS = "Não Iniciado"
UNASSIGNED_ANALYST = "Não Atribuído"


@dataclass(frozen=True)
class SigamiRequest:
    id: str
    protocol: str = ""
    process_number: str = ""
    subject: str = DEFAULT_SUBJECT
    department: str = DEFAULT_DEPARTMENT
    priority: str = DEFAULT_PRIORITY
    status: str = DEFAULT_STATUS
    opened_date: str = ""
    due_date: str = ""
    completion_note: str = ""
    requester_name: str = ""
    analyst_name: str = UNASSIGNED_ANALYST
    description: str = ""
    street: str = ""
    neighborhood: str = ""
    city: str = ""
    state_code: str = ""
    postal_code: str = ""


REQUEST_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(SigamiRequest))

# Spreadsheet headers accepted for each canonical field, in lookup order.
# The first key is also the header written on export.
FIELD_KEYS: Dict[str, Tuple[str, ...]] = {
    "protocol": ("protocolo", "Protocolo"),
    "process_number": ("nprocessopmbr", "Nprocessopmbr", "Processo"),
    "subject": ("assunto", "Assunto"),
    "department": ("subsecretaria", "Subsecretaria"),
    "priority": ("prioridade", "Prioridade"),
    "status": ("status", "Status"),
    "opened_date": ("abertura", "Abertura"),
    "due_date": ("prazo", "Prazo"),
    "completion_note": ("conclusão", "conclusao", "Conclusão", "Conclusao"),
    "requester_name": ("solicitante", "Solicitante"),
    "analyst_name": ("analista", "Analista"),
    "description": ("descrição", "descricao", "Descrição", "Descricao"),
    "street": ("logradouro", "Logradouro"),
    "neighborhood": ("bairro", "Bairro"),
    "city": ("cidade", "Cidade"),
    "state_code": ("uf", "UF", "Uf"),
    "postal_code": ("cep", "CEP", "Cep"),
}

FIELD_TRANSFORMS: Dict[str, Callable[[object], str]] = {
    "subject": normalize_text,
    "requester_name": normalize_text,
    "analyst_name": normalize_text,
    "street": normalize_text,
    "neighborhood": normalize_text,
    "city": normalize_text,
    "opened_date": coerce_excel_date,
    "due_date": coerce_excel_date,
}

FIELD_DEFAULTS: Dict[str, str] = {
    "subject": DEFAULT_SUBJECT,
    "department": DEFAULT_DEPARTMENT,
    "priority": DEFAULT_PRIORITY,
    "status": DEFAULT_STATUS,
    "analyst_name": UNASSIGNED_ANALYST,
}


def map_row(row: Mapping[str, Any], index: int) -> SigamiRequest:
    values: Dict[str, str] = {}
    for name, keys in FIELD_KEYS.items():
        transform = FIELD_TRANSFORMS.get(name, as_text)
        values[name] = transform(resolve_field(row, *keys)) or FIELD_DEFAULTS.get(name, "")
    return SigamiRequest(id=str(index), **values)


def map_rows(rows: Iterable[Mapping[str, Any]]) -> Tuple[SigamiRequest, ...]:
    """Map a whole import batch. Ids restart at "0" on every call."""
    return tuple(map_row(row, idx) for idx, row in enumerate(rows))


def field_value(record: SigamiRequest, field: str) -> str:
    """Value of ``field`` on ``record``; unknown fields read as ""."""
    if field not in REQUEST_FIELDS:
        return ""
    return getattr(record, field)


def requests_to_frame(records: Iterable[SigamiRequest]) -> pd.DataFrame:
    rows: List[Dict[str, str]] = [asdict(r) for r in records]
    return pd.DataFrame(rows, columns=list(REQUEST_FIELDS))
