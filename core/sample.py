"""Bundled sample of raw SIGAMI rows, shown before any spreadsheet is uploaded.

Rows deliberately mix header casing, accents and value casing the way real
exports do; they go through the same mapping as uploaded spreadsheets.
"""

from __future__ import annotations

from typing import Any, Dict, List

SAMPLE_ROWS: List[Dict[str, Any]] = [
    {
        "protocolo": "2024.000101",
        "nprocessopmbr": "PMBR-1201/2024",
        "assunto": "PODA DE ÁRVORE",
        "subsecretaria": "SUBFIS",
        "prioridade": "Alta",
        "status": "Concluído",
        "abertura": "2024-01-08",
        "prazo": "2024-01-22",
        "conclusão": "Poda realizada pela equipe de campo",
        "solicitante": "MARIA DAS GRAÇAS SOUZA",
        "analista": "carlos menezes",
        "descrição": "Solicitação recebida via Linha Verde: galhos sobre a rede elétrica",
        "logradouro": "RUA DOUTOR ARMANDO DE OLIVEIRA",
        "bairro": "AREIA BRANCA",
        "cidade": "BELFORD ROXO",
        "uf": "RJ",
        "cep": "26130-000",
    },
    {
        "Protocolo": "2024.000102",
        "Processo": "PMBR-1202/2024",
        "Assunto": "descarte irregular de resíduos",
        "Subsecretaria": "SUBFIS",
        "Prioridade": "Média",
        "Status": "Em Andamento",
        "Abertura": 45302,
        "Prazo": 45316,
        "Solicitante": "joão batista lima",
        "Analista": "Fernanda Rocha",
        "Descrição": "Entulho descartado em terreno baldio",
        "Logradouro": "avenida joaquim da costa lima",
        "Bairro": "centro",
        "Cidade": "Belford Roxo",
        "UF": "RJ",
        "CEP": "26165-000",
    },
    {
        "protocolo": "2024.000103",
        "assunto": "Licença Ambiental",
        "subsecretaria": "SUBLIC",
        "prioridade": "Baixa",
        "status": "Não Iniciado",
        "abertura": "2024-01-15",
        "prazo": "2024-02-15",
        "solicitante": "Comercial Heliópolis Ltda",
        "descricao": "Pedido de licença de operação para oficina mecânica",
        "logradouro": "Rua Floripes Rocha",
        "bairro": "Heliópolis",
        "cidade": "Belford Roxo",
        "uf": "RJ",
        "cep": "26185-000",
    },
    {
        "protocolo": "2024.000104",
        "assunto": "poluição sonora",
        "subsecretaria": "SUBFIS",
        "prioridade": "Alta",
        "status": "Em Atendimento",
        "abertura": "2024-02-02",
        "prazo": "2024-02-09",
        "solicitante": "ANA PAULA FERREIRA",
        "analista": "CARLOS MENEZES",
        "descricao": "Denúncia pela linha verde de som alto em bar durante a madrugada",
        "logradouro": "Rua Santa Maria",
        "bairro": "Santa Maria",
        "cidade": "Belford Roxo",
        "uf": "RJ",
        "cep": "26170-000",
    },
    {
        "protocolo": "2024.000105",
        "assunto": "Poda de Árvore",
        "subsecretaria": "SUBPAV",
        "prioridade": "Média",
        "status": "Concluído",
        "abertura": "2024-02-10",
        "prazo": "2024-02-24",
        "conclusao": "Vistoria concluída, poda autorizada",
        "solicitante": "Roberto Alves",
        "analista": "fernanda rocha",
        "descricao": "Árvore com risco de queda em frente à escola",
        "logradouro": "Estrada do Lote XV",
        "bairro": "Lote XV",
        "cidade": "Belford Roxo",
        "uf": "RJ",
        "cep": "26140-000",
    },
    {
        "protocolo": "2024.000106",
        "assunto": "Queimada",
        "subsecretaria": "SUBFIS",
        "prioridade": "Alta",
        "status": "Aguardando Documentação",
        "abertura": "2024-02-18",
        "prazo": "2024-02-20",
        "solicitante": "Associação de Moradores do Parque Amorim",
        "analista": "Juliana Prado",
        "descricao": "Queima de lixo em área de preservação",
        "logradouro": "rua são josé",
        "bairro": "PARQUE AMORIM",
        "cidade": "BELFORD ROXO",
        "uf": "RJ",
        "cep": "26160-000",
    },
    {
        "protocolo": "2024.000107",
        "assunto": "Licença Ambiental",
        "subsecretaria": "SUBLIC",
        "prioridade": "Média",
        "status": "Concluído",
        "abertura": "2024-03-01",
        "prazo": "2024-04-01",
        "conclusão": "Licença emitida",
        "solicitante": "Posto Nova Aurora",
        "analista": "Juliana Prado",
        "descrição": "Renovação de licença de posto de combustível",
        "logradouro": "Avenida Automóvel Clube",
        "bairro": "Nova Aurora",
        "cidade": "Belford Roxo",
        "uf": "RJ",
        "cep": "26115-000",
    },
    {
        "protocolo": "2024.000108",
        "assunto": "DESCARTE IRREGULAR DE RESÍDUOS",
        "subsecretaria": "SUBFIS",
        "prioridade": "Alta",
        "status": "Em Andamento",
        "abertura": "2024-03-05",
        "prazo": "2024-03-12",
        "solicitante": "Marcos Vinícius",
        "analista": "Carlos Menezes",
        "descrição": "Ligação para a Linha Verde relatando descarte de óleo em córrego",
        "logradouro": "Rua Iguaçu",
        "bairro": "Vila Pauline",
        "cidade": "Belford Roxo",
        "uf": "RJ",
        "cep": "26175-000",
    },
    {
        "protocolo": "2024.000109",
        "assunto": "Maus-tratos a Animais",
        "subsecretaria": "SUBBEA",
        "prioridade": "Alta",
        "status": "Não Iniciado",
        "abertura": "2024-03-11",
        "prazo": "2024-03-13",
        "solicitante": "Cláudia Nogueira",
        "descricao": "Cão acorrentado sem água e abrigo",
        "logradouro": "Rua Bom Jesus",
        "bairro": "Areia Branca",
        "cidade": "Belford Roxo",
        "uf": "RJ",
        "cep": "26130-000",
    },
    {
        "protocolo": "2024.000110",
        "assunto": "poda de árvore",
        "subsecretaria": "SUBPAV",
        "prioridade": "Baixa",
        "status": "Em Andamento",
        "abertura": "2024-03-20",
        "prazo": "2024-04-03",
        "solicitante": "Pedro Henrique Costa",
        "analista": "Fernanda Rocha",
        "descricao": "Poda preventiva em praça pública",
        "logradouro": "Praça Eliseu de Alvarenga",
        "bairro": "Centro",
        "cidade": "Belford Roxo",
        "uf": "RJ",
        "cep": "26165-000",
    },
    {
        "protocolo": "2024.000111",
        "assunto": "Queimada",
        "subsecretaria": "SUBFIS",
        "prioridade": "Média",
        "status": "Concluído",
        "abertura": "2024-04-02",
        "prazo": "2024-04-05",
        "conclusão": "Autuação lavrada",
        "solicitante": "Luciana Martins",
        "analista": "Juliana Prado",
        "descricao": "Queimada em terreno vizinho, registrada pela linha verde",
        "logradouro": "Rua Sargento Mário da Silva",
        "bairro": "Santa Teresa",
        "cidade": "Nova Iguaçu",
        "uf": "RJ",
        "cep": "26210-000",
    },
    {
        "protocolo": "2024.000112",
        "assunto": "Poluição Sonora",
        "subsecretaria": "SUBFIS",
        "prioridade": "Média",
        "status": "Em Atendimento",
        "abertura": "2024-04-09",
        "prazo": "2024-04-16",
        "solicitante": "Igreja Batista Central",
        "analista": "carlos menezes",
        "descricao": "Reclamação contra ruído de obra em horário noturno",
        "logradouro": "Rua Amazonas",
        "bairro": "Heliópolis",
        "cidade": "Belford Roxo",
        "uf": "RJ",
        "cep": "26185-000",
    },
]
