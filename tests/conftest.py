import os
import sys

import pytest

# Make the flat `core` / `api` packages importable without installing.
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from core.records import SigamiRequest
from core.state import DashboardStore


def make_request(idx: int = 0, **overrides) -> SigamiRequest:
    values = {
        "id": str(idx),
        "protocol": f"2024.{idx:06d}",
        "subject": "Poda De Árvore",
        "department": "SUBFIS",
        "status": "Em Andamento",
        "opened_date": "2024-03-01",
        "analyst_name": "Carlos Menezes",
        "neighborhood": "Centro",
        "city": "Belford Roxo",
    }
    values.update(overrides)
    return SigamiRequest(**values)


@pytest.fixture
def requests_sample():
    return (
        make_request(0, status="Concluído", subject="Poda De Árvore", neighborhood="Areia Branca",
                     opened_date="2024-01-10", description="Recebido via Linha Verde"),
        make_request(1, status="Em Andamento", subject="Queimada", department="SUBLIC",
                     analyst_name="Fernanda Rocha", opened_date="2024-02-15"),
        make_request(2, status="Não Iniciado", subject="Poda De Árvore", neighborhood="Heliópolis",
                     opened_date="", description="linha verde: denúncia"),
        make_request(3, status="Em Atendimento", subject="Licença Ambiental", department="SUBLIC",
                     analyst_name="Juliana Prado", opened_date="2024-03-20"),
        make_request(4, status="Concluído", subject="Queimada", analyst_name="Fernanda Rocha",
                     opened_date="2024-04-02", city="Nova Iguaçu"),
    )


@pytest.fixture
def store(requests_sample):
    s = DashboardStore()
    s.load(requests_sample, source="fixture")
    return s


@pytest.fixture
def request_factory():
    return make_request
