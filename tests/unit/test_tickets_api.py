from pathlib import Path
import pytest
from fastapi.testclient import TestClient
from src.app.server import app
from src.connectors.tickets_router import get_store
from src.storage.ticket_store import TicketStore


@pytest.fixture
def store(tmp_path: Path):
    return TicketStore(tmp_path)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


ALICE = {"id": "T1", "customerName": "Alice", "issueType": "billing"}


def test_list_on_missing_store(client):
    r = client.get("/tickets")
    assert r.status_code == 200
    assert r.json() == {"tickets": []}


def test_create_round_trip(client):
    r = client.post("/tickets", json=ALICE)
    assert r.status_code == 201
    assert r.json() == {"message": "Ticket added successfully", "newTicket": ALICE}
    assert r.headers["X-Ticket-Persisted"] == "true"
    assert client.get("/tickets").json() == {"tickets": [ALICE]}


@pytest.mark.parametrize("missing", ["id", "customerName", "issueType"])
def test_create_validation(client, missing):
    body = {k: v for k, v in ALICE.items() if k != missing}
    r = client.post("/tickets", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields"}
    assert client.get("/tickets").json() == {"tickets": []}


def test_create_non_object_body(client):
    r = client.post("/tickets", json=["T1"])
    assert r.status_code == 400
    r = client.post("/tickets", content=b"{oops", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_update_status(client):
    client.post("/tickets", json={**ALICE, "status": "open", "priority": "low"})
    r = client.patch("/tickets/T1", json={"status": "resolved"})
    assert r.status_code == 200
    assert r.json()["message"] == "Ticket status updated"
    assert r.json()["ticket"]["status"] == "resolved"
    tickets = client.get("/tickets").json()["tickets"]
    assert tickets == [{**ALICE, "status": "resolved", "priority": "low"}]


def test_update_requires_status(client):
    client.post("/tickets", json=ALICE)
    r = client.patch("/tickets/T1", json={})
    assert r.status_code == 400
    assert r.json() == {"error": "Status is required"}
    # validación antes de la búsqueda
    r = client.patch("/tickets/nope", json={"status": ""})
    assert r.status_code == 400


def test_update_not_found(client):
    client.post("/tickets", json=ALICE)
    before = client.get("/tickets").json()
    r = client.patch("/tickets/T9", json={"status": "resolved"})
    assert r.status_code == 404
    assert r.json() == {"error": "Ticket not found"}
    assert client.get("/tickets").json() == before


def test_delete_removes_exactly_one(client):
    client.post("/tickets", json=ALICE)
    client.post("/tickets", json={"id": "T1", "customerName": "Carol", "issueType": "tech"})
    r = client.delete("/tickets/T1")
    assert r.status_code == 200
    assert r.json() == {"message": "Ticket deleted successfully", "deletedTicket": [ALICE]}
    assert client.get("/tickets").json() == {"tickets": [{"id": "T1", "customerName": "Carol", "issueType": "tech"}]}


def test_delete_not_found(client):
    r = client.delete("/tickets/T1")
    assert r.status_code == 404
    assert r.json() == {"error": "Ticket not found"}


def test_list_is_idempotent(client):
    client.post("/tickets", json=ALICE)
    first = client.get("/tickets").json()
    assert client.get("/tickets").json() == first
    assert client.get("/tickets").json() == first


def test_write_failure_still_reports_success(client, store, monkeypatch):
    monkeypatch.setattr(store, "save", lambda data: False)
    r = client.post("/tickets", json=ALICE)
    assert r.status_code == 201
    assert r.headers["X-Ticket-Persisted"] == "false"
    assert r.json()["newTicket"] == ALICE


def test_cors_allows_any_origin(client):
    r = client.get("/tickets", headers={"Origin": "http://ui.example"})
    assert r.headers.get("access-control-allow-origin") == "*"
    pre = client.options(
        "/tickets/T1",
        headers={"Origin": "http://ui.example", "Access-Control-Request-Method": "PATCH"},
    )
    assert pre.status_code == 200


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_status_with_empty_list_is_accepted(client):
    client.post("/tickets", json=ALICE)
    r = client.patch("/tickets/T1", json={"status": []})
    assert r.status_code == 200
    assert r.json()["ticket"]["status"] == []
    r = client.patch("/tickets/T1", json={"status": 0})
    assert r.status_code == 400


def test_health_reports_active_store(client, store):
    r = client.get("/health")
    assert r.json()["tickets_file"] == str(store.file)
