def _shipping(**overrides) -> dict:
    payload = {
        "firstName": "Ana",
        "lastName": "Silva",
        "email": "ana@importadora.br",
        "phone": "+55 11 5555 0100",
        "company": "Importadora Silva",
        "shippingAddress": "Av. Paulista 1000",
        "city": "Sao Paulo",
        "stateProvince": "SP",
        "postalCode": "01310-100",
        "country": "Brazil",
        "productDescription": "Stainless fittings",
        "quantity": "200 units",
        "estimatedValue": "$4,500",
        "orderRequest": "PO-7781",
        "shippingMethod": "Air Freight",
        "urgency": "standard",
        "trackingRequired": True,
    }
    payload.update(overrides)
    return payload


def test_submit_shipping_request(client):
    response = client.post("/api/shipping", json=_shipping())

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["trackingRequired"] is True
    assert data["insuranceRequired"] is False


def test_missing_required_field(client):
    response = client.post("/api/shipping", json=_shipping(country=""))
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "country"


def test_get_by_id(client):
    created = client.post("/api/shipping", json=_shipping()).json()["data"]
    response = client.get("/api/shipping", params={"id": created["id"]})
    assert response.status_code == 200
    assert response.json()["data"]["orderRequest"] == "PO-7781"


def test_get_unknown_id(client):
    response = client.get("/api/shipping", params={"id": 404})
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_list_newest_first(client):
    first = client.post("/api/shipping", json=_shipping(orderRequest="PO-1")).json()["data"]
    second = client.post("/api/shipping", json=_shipping(orderRequest="PO-2")).json()["data"]

    response = client.get("/api/shipping")

    assert response.status_code == 200
    ids = [item["id"] for item in response.json()["data"]]
    assert ids == [second["id"], first["id"]]
