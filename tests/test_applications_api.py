from sqlalchemy.exc import OperationalError

from app.db.base import get_db
from tests.conftest import application_payload


def test_create_application(client):
    response = client.post("/api/applications", json=application_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["id"] > 0
    assert data["legalEntityName"] == "Acme Industrial Supply LLC"
    assert data["taxEIN"] == "12-3456789"
    assert [ref["name"] for ref in data["tradeReferences"]] == [
        "Gulf Coast Metals", "Lone Star Fasteners", "Bayou Packaging",
    ]


def test_blank_trade_references_are_dropped(create_application):
    data = create_application(tradeReferences=[{"name": "  "}, {"name": "Gulf Coast Metals"}])
    assert [ref["name"] for ref in data["tradeReferences"]] == ["Gulf Coast Metals"]


def test_get_application(client, create_application):
    created = create_application()
    response = client.get(f"/api/applications/{created['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == created["id"]


def test_get_unknown_application(client):
    response = client.get("/api/applications/999")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Application '999' not found"}


def test_terms_must_be_agreed(client):
    response = client.post("/api/applications", json=application_payload(termsAgreed=False))
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"
    assert [d["field"] for d in body["details"]] == ["termsAgreed"]


def test_invalid_ein(client):
    response = client.post("/api/applications", json=application_payload(taxEIN="12345"))
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "taxEIN"


def test_more_than_three_trade_references(client):
    refs = [{"name": f"Supplier {i}"} for i in range(4)]
    response = client.post("/api/applications", json=application_payload(tradeReferences=refs))
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "tradeReferences"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Resource not found"}


def test_database_unavailable(app, client):
    async def _unreachable_db():
        raise OperationalError("SELECT 1", {}, Exception("could not connect to server"))
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = _unreachable_db

    response = client.post("/api/applications", json=application_payload())

    assert response.status_code == 503
    assert response.json() == {
        "success": False,
        "error": "Database connection not available. Service temporarily unavailable.",
    }
