"""
End-to-end report against the default SQLite executor.

The database file is created in a temporary directory and stores ISO
dates, so the date literal format is switched to ``%Y-%m-%d``.
"""
import sqlite3

import pytest
from fastapi.testclient import TestClient

from service_order_api.app.core.config import settings
from service_order_api.app.core.db import run_query
from service_order_api.app.main import app


SCHEMA = """
CREATE TABLE CLIENTE (COD_CLIENTE INTEGER PRIMARY KEY, NOME_CLIENTE TEXT);
CREATE TABLE PROJETO (COD_PROJETO INTEGER PRIMARY KEY, CODCLI_PROJETO INTEGER);
CREATE TABLE TAREFA (COD_TAREFA INTEGER PRIMARY KEY, CODPRO_TAREFA INTEGER);
CREATE TABLE RECURSO (COD_RECURSO INTEGER PRIMARY KEY, NOME_RECURSO TEXT);
CREATE TABLE CHAMADO (COD_CHAMADO INTEGER PRIMARY KEY, STATUS_CHAMADO TEXT);
CREATE TABLE OS (
    COD_OS INTEGER PRIMARY KEY,
    DTINI_OS TEXT,
    HRINI_OS TEXT,
    HRFIM_OS TEXT,
    OBS_OS TEXT,
    STATUS_OS TEXT,
    CHAMADO_OS TEXT,
    NUM_OS TEXT,
    COMP_OS TEXT,
    DTINC_OS TEXT,
    CODTRF_OS INTEGER,
    CODREC_OS INTEGER
);

INSERT INTO CLIENTE VALUES (1, 'ACME'), (2, 'Globex');
INSERT INTO PROJETO VALUES (10, 1), (20, 2);
INSERT INTO TAREFA VALUES (100, 10), (200, 20);
INSERT INTO RECURSO VALUES (7, 'Maria'), (8, 'João');
INSERT INTO CHAMADO VALUES (501, 'Aberto'), (502, 'Fechado');

INSERT INTO OS VALUES (1, '2024-05-02', '0900', '1100', NULL, 'F', '501', '1', '05/2024', '2024-05-02', 100, 7);
INSERT INTO OS VALUES (2, '2024-05-10', '1300', '1630', NULL, 'F', '501', '2', '05/2024', '2024-05-10', 100, 8);
INSERT INTO OS VALUES (3, '2024-05-20', '0800', '0900', NULL, 'A', NULL, '3', '05/2024', '2024-05-20', 100, 7);
INSERT INTO OS VALUES (4, '2024-05-21', '1000', '1200', NULL, 'F', '502', '4', '05/2024', '2024-05-21', 200, 8);
INSERT INTO OS VALUES (5, '2024-06-01', '0900', '1000', NULL, 'F', '501', '5', '06/2024', '2024-06-01', 100, 7);
INSERT INTO OS VALUES (6, '2024-04-30', '0900', '1000', NULL, 'F', '501', '6', '04/2024', '2024-04-30', 100, 7);
"""

URL = "/api/v1/ordens-servico"


@pytest.fixture(name="database")
def database_fixture(tmp_path, monkeypatch):
    db_path = tmp_path / "service_orders.db"
    conn = sqlite3.connect(db_path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()
    monkeypatch.setattr(settings, "database_url", str(db_path))
    monkeypatch.setattr(settings, "date_literal_format", "%Y-%m-%d")
    return db_path


@pytest.fixture(name="sqlite_client")
def sqlite_client_fixture(database):
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        yield client


def test_run_query_returns_dict_rows(database):
    rows = run_query("SELECT COD_CLIENTE, NOME_CLIENTE FROM CLIENTE WHERE COD_CLIENTE = ?", [2])
    assert rows == [{"COD_CLIENTE": 2, "NOME_CLIENTE": "Globex"}]


def test_admin_month_report(sqlite_client):
    response = sqlite_client.get(URL, params={"isAdmin": "true", "mes": "5", "ano": "2024"})

    assert response.status_code == 200
    data = response.json()
    # Newest first; the June and April orders fall outside the month
    assert [row["COD_OS"] for row in data["chamados"]] == [4, 3, 2, 1]
    totals = data["totalizadores"]
    assert totals["TOTAL_OS"] == 4
    assert totals["TOTAL_CHAMADOS"] == 2
    assert totals["TOTAL_RECURSOS"] == 2
    assert totals["TOTAL_HRS"] == 8.5
    assert totals["TOTAL_HRS_CHAMADOS"] == 7.5
    assert totals["TOTAL_CHAMADOS_COM_HORAS"] == 2
    assert totals["MEDIA_HRS_POR_CHAMADO"] == 3.75
    assert totals["TOTAL_HRS_TAREFAS"] == 1
    assert totals["TOTAL_TAREFAS_COM_HORAS"] == 1


def test_client_restriction_and_status_filter(sqlite_client):
    response = sqlite_client.get(
        URL, params={"codCliente": "1", "mes": "5", "ano": "2024", "status": "abert"}
    )

    assert response.status_code == 200
    data = response.json()
    assert [row["COD_OS"] for row in data["chamados"]] == [2, 1]
    assert all(row["STATUS_CHAMADO"] == "Aberto" for row in data["chamados"])
    assert data["totalizadores"]["TOTAL_OS"] == 2
    assert data["totalizadores"]["TOTAL_HRS"] == 5.5


def test_resource_filter(sqlite_client):
    response = sqlite_client.get(
        URL, params={"isAdmin": "true", "mes": "5", "ano": "2024", "codRecursoFilter": "8"}
    )

    data = response.json()
    assert [row["COD_OS"] for row in data["chamados"]] == [4, 2]
    assert data["totalizadores"]["TOTAL_RECURSOS"] == 1


def test_december_rolls_into_next_year(sqlite_client):
    response = sqlite_client.get(URL, params={"isAdmin": "true", "mes": "12", "ano": "2023"})

    assert response.status_code == 200
    assert response.json()["chamados"] == []


def test_missing_tables_return_500(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "empty.db"))
    monkeypatch.setattr(settings, "debug", False)
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        response = client.get(URL, params={"isAdmin": "true", "mes": "5", "ano": "2024"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Erro no servidor"
    assert "no such table" in body["message"]
    assert "details" not in body
