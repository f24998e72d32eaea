"""
Tests for expenses / quinielas / balances API endpoints
"""
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_current_account_id, get_ledger_store
from app.infrastructure.memory.ledger_store import InMemoryLedgerStore
from app.main import create_app


FUTURE_DAY = "2999-01-01"


@pytest.fixture
def ledger_store():
    return InMemoryLedgerStore()


@pytest.fixture
def client(ledger_store, sample_account_id):
    """Cliente con cuenta autenticada y store en memoria"""
    app = create_app()
    app.dependency_overrides[get_current_account_id] = lambda: sample_account_id
    app.dependency_overrides[get_ledger_store] = lambda: ledger_store
    return TestClient(app)


def post_expense(client, day="2024-03-01", amount="150,50", category="servicios", subcategory="luz"):
    return client.post("/api/v1/expenses/", json={
        "day": day,
        "amount": amount,
        "category": category,
        "subcategory": subcategory,
        "description": "Factura",
    })


def post_line(client, day="2024-03-01", game="Quiniela - Matutina", tx_type="ingreso",
              amount="1000", category=None):
    return client.post("/api/v1/quinielas/transactions", json={
        "day": day,
        "game": game,
        "tx_type": tx_type,
        "amount": amount,
        "category": category,
    })


def test_health(client):
    assert client.get("/health").text == "ok"


def test_create_and_list_expense(client):
    response = post_expense(client)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["amount"] == "150.50"
    assert body["data"]["label"] == "Servicios - Luz"

    listed = client.get("/api/v1/expenses/2024-03-01").json()["data"]
    assert [e["id"] for e in listed] == [body["data"]["id"]]


def test_expense_amount_validation(client):
    """Más de 2 decimales -> 400 con el error por campo"""
    response = post_expense(client, amount="10.555")

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION"
    assert body["errors"][0]["field"] == "amount"
    assert body["errors"][0]["message"] == "Máximo 2 decimales"


def test_expense_amount_too_large(client):
    response = post_expense(client, amount="1" * 19)

    assert response.status_code == 400
    assert response.json()["errors"][0] == {"field": "amount", "message": "El monto es demasiado grande"}


def test_expense_in_future_rejected(client):
    response = post_expense(client, day=FUTURE_DAY)

    assert response.status_code == 400
    assert response.json()["code"] == "FUTURE_DATE"


def test_update_and_delete_expense(client):
    expense_id = post_expense(client).json()["data"]["id"]

    updated = client.put(f"/api/v1/expenses/{expense_id}", json={
        "day": "2024-03-02", "amount": 99, "category": "sueldo",
    })
    assert updated.status_code == 200
    assert updated.json()["data"]["day"] == "2024-03-02"
    assert updated.json()["data"]["amount"] == "99.00"

    assert client.delete(f"/api/v1/expenses/{expense_id}").status_code == 200
    assert client.get("/api/v1/expenses/2024-03-02").json()["data"] == []
    assert client.delete(f"/api/v1/expenses/{expense_id}").status_code == 404


def test_expense_categories(client):
    data = client.get("/api/v1/expenses/categories").json()["data"]
    assert [c["id"] for c in data] == ["sueldo", "servicios", "otros"]


def test_quiniela_line_defaults(client):
    response = post_line(client)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["category"] == "Apuestas Nuevas"
    assert data["description"] == "Total jugadas Matutina"
    assert data["source"] == "Quiniela - Matutina"


def test_quiniela_egress_without_category_rejected(client):
    response = post_line(client, tx_type="egreso")

    assert response.status_code == 400
    assert response.json()["message"] == "La categoría es requerida para egresos"


def test_games_catalog(client):
    data = client.get("/api/v1/quinielas/games").json()["data"]
    games = {g["game"]: g for g in data}
    assert games["Loto"]["income_categories"] == ["Venta de Tickets"]


def test_day_flow_finalize_and_carry_forward(client):
    """Flujo completo: cargar el día, cerrarlo, y el saldo pasa al día siguiente"""
    post_line(client, amount="1000")
    post_expense(client, amount="200")
    post_line(client, tx_type="egreso", category="Premio Pagado", amount="300")

    day = client.get("/api/v1/balances/day/2024-03-01").json()["data"]
    assert day["state"] == "OPEN"
    assert day["opening_balance"] == "0.00"
    assert day["total_egress"] == "500.00"
    assert day["closing_balance"] == "500.00"

    finalized = client.post("/api/v1/balances/finalize/2024-03-01")
    assert finalized.status_code == 200
    assert finalized.json()["data"]["closing_balance"] == "500.00"

    # the closed day is read-only
    assert post_expense(client).json()["code"] == "DAY_FINALIZED"
    again = client.post("/api/v1/balances/finalize/2024-03-01")
    assert again.status_code == 400
    assert again.json()["code"] == "ALREADY_FINALIZED"

    opening = client.get("/api/v1/balances/opening-balance/2024-03-02").json()["data"]
    assert opening["opening_balance"] == "500.00"
    assert client.get("/api/v1/balances/finalized-days").json()["data"] == ["2024-03-01"]
    assert client.get("/api/v1/balances/day/2024-03-01").json()["data"]["state"] == "FINALIZED"


def test_finalize_future_day_rejected(client):
    response = client.post(f"/api/v1/balances/finalize/{FUTURE_DAY}")

    assert response.status_code == 400
    assert response.json()["message"] == "No se pueden finalizar días futuros"


def test_mutation_check(client):
    client.post("/api/v1/balances/finalize/2024-03-01")

    allowed = client.get("/api/v1/balances/mutation-check/2024-03-02")
    assert allowed.status_code == 200
    assert allowed.json()["data"] == {"allowed": True}

    locked = client.get(
        "/api/v1/balances/mutation-check/2024-03-02",
        params={"new_day": "2024-03-01", "kind": "transacciones"},
    )
    assert locked.status_code == 400
    assert locked.json()["message"] == "No se puede editar transacciones de días finalizados"

    future = client.get(f"/api/v1/balances/mutation-check/{FUTURE_DAY}")
    assert future.json()["code"] == "FUTURE_DATE"


def test_bad_day_parameter(client):
    response = client.get("/api/v1/balances/day/2024-02-30")

    assert response.status_code == 400
    assert response.json()["message"] == "La fecha no es válida"


def test_schedules(client):
    defaults = client.get("/api/v1/quinielas/schedules").json()
    assert defaults["message"] == "Horarios por defecto obtenidos"
    assert len(defaults["data"]) == 5

    saved = client.post("/api/v1/quinielas/schedules", json={"schedules": [
        {"modality_id": 1, "modality_name": "La Primera", "opens_at": "08:00", "closes_at": "09:30"},
    ]})
    assert saved.status_code == 200
    assert saved.json()["data"][0]["closes_at"] == "09:30:00"

    custom = client.get("/api/v1/quinielas/schedules").json()
    assert custom["message"] == "Horarios personalizados obtenidos exitosamente"
    assert len(custom["data"]) == 1

    empty = client.post("/api/v1/quinielas/schedules", json={"schedules": []})
    assert empty.status_code == 400


def test_modality_status(client):
    data = client.get("/api/v1/quinielas/modality-status").json()["data"]

    assert len(data) == 5
    assert {"modality_name", "is_open", "minutes_remaining"} <= set(data[0])
