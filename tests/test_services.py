from conftest import LOOKER, PROVIDER, bearer
from repository.store import SERVICES


def service_body(**overrides):
    body = {"name": "Fade", "price": 25.0, "duration": 30, "providerId": PROVIDER, "category": "hair"}
    body.update(overrides)
    return body


def create(client, **overrides):
    r = client.post("/services", json=service_body(**overrides), headers=bearer(PROVIDER))
    assert r.status_code == 201, r.text
    return r.json()["serviceId"]


def test_provider_creates_and_lists_services(client):
    first = create(client)
    create(client, category="nails")

    r = client.get("/services?category=hair")
    assert [s["id"] for s in r.json()] == [first]
    assert len(client.get(f"/services?providerId={PROVIDER}").json()) == 2
    assert client.get(f"/services/{first}").json()["name"] == "Fade"


def test_create_for_another_provider_forbidden(client):
    r = client.post("/services", json=service_body(), headers=bearer(LOOKER))
    assert r.status_code == 403


def test_invalid_price(client):
    r = client.post("/services", json=service_body(price=0), headers=bearer(PROVIDER))
    assert r.status_code == 400
    assert r.json()["details"][0]["path"] == ["price"]


def test_update_and_delete_need_ownership(client, store):
    service_id = create(client)
    assert client.put(f"/services/{service_id}", json={"price": 30}, headers=bearer(LOOKER)).status_code == 403
    assert client.delete(f"/services/{service_id}", headers=bearer(LOOKER)).status_code == 403

    assert client.put(f"/services/{service_id}", json={"price": 30}, headers=bearer(PROVIDER)).status_code == 200
    assert store.raw(SERVICES, service_id)["price"] == 30

    assert client.delete(f"/services/{service_id}", headers=bearer(PROVIDER)).status_code == 200
    assert client.get(f"/services/{service_id}").status_code == 404


def test_missing_service(client):
    assert client.put("/services/nope", json={"price": 30}, headers=bearer(PROVIDER)).status_code == 404


def test_update_can_clear_optional_fields(client, store):
    service_id = create(client, description="Skin fade", imageUrl="https://img.example.com/fade.png")
    r = client.put(
        f"/services/{service_id}",
        json={"description": None, "imageUrl": None},
        headers=bearer(PROVIDER),
    )
    assert r.status_code == 200
    stored = store.raw(SERVICES, service_id)
    assert stored["description"] is None
    assert stored["imageUrl"] is None
    assert stored["name"] == "Fade"


def test_update_cannot_clear_required_fields(client, store):
    service_id = create(client)
    r = client.put(f"/services/{service_id}", json={"price": None}, headers=bearer(PROVIDER))
    assert r.status_code == 400
    assert r.json()["details"][0]["path"] == ["price"]
    assert store.raw(SERVICES, service_id)["price"] == 25.0
