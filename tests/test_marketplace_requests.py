from conftest import LOOKER, PROVIDER, ADMIN, OTHER, bearer
from repository.store import MARKETPLACE_REQUESTS


def request_body(**overrides):
    body = {"lookerId": LOOKER, "serviceName": "Haircut", "area": "Downtown", "notificationOptIn": True}
    body.update(overrides)
    return body


def submit(client):
    r = client.post("/marketplace-requests", json=request_body(), headers=bearer(LOOKER))
    assert r.status_code == 201, r.text
    return r.json()["requestId"]


def test_looker_submits_pending_request(client, store):
    request_id = submit(client)
    stored = store.raw(MARKETPLACE_REQUESTS, request_id)
    assert stored["status"] == "pending"
    assert stored["area"] == "Downtown"


def test_submit_for_another_user_forbidden(client):
    r = client.post("/marketplace-requests", json=request_body(lookerId=PROVIDER), headers=bearer(LOOKER))
    assert r.status_code == 403


def test_only_lookers_submit(client):
    r = client.post("/marketplace-requests", json=request_body(lookerId=PROVIDER), headers=bearer(PROVIDER))
    assert r.status_code == 403


def test_submit_validation(client):
    r = client.post("/marketplace-requests", json={"lookerId": LOOKER}, headers=bearer(LOOKER))
    assert r.status_code == 400
    paths = [issue["path"] for issue in r.json()["details"]]
    assert ["serviceName"] in paths and ["area"] in paths


def test_listing_is_for_providers_and_admins(client):
    submit(client)
    assert client.get("/marketplace-requests", headers=bearer(LOOKER)).status_code == 403
    assert client.get("/marketplace-requests", headers=bearer(OTHER)).status_code == 403
    assert len(client.get("/marketplace-requests", headers=bearer(PROVIDER)).json()) == 1
    assert len(client.get("/marketplace-requests?area=Uptown", headers=bearer(ADMIN)).json()) == 0


def test_match_records_provider(client, store):
    request_id = submit(client)
    r = client.put(f"/marketplace-requests/{request_id}", json={"status": "matched"}, headers=bearer(PROVIDER))
    assert r.status_code == 200
    stored = store.raw(MARKETPLACE_REQUESTS, request_id)
    assert stored["status"] == "matched"
    assert stored["matchedProviderId"] == PROVIDER

    r = client.get("/marketplace-requests?status=matched", headers=bearer(PROVIDER))
    assert [req["id"] for req in r.json()] == [request_id]


def test_update_status_errors(client):
    request_id = submit(client)
    assert client.put(f"/marketplace-requests/{request_id}", json={"status": "matched"}, headers=bearer(LOOKER)).status_code == 403
    assert client.put(f"/marketplace-requests/{request_id}", json={"status": "done"}, headers=bearer(PROVIDER)).status_code == 400
    assert client.put("/marketplace-requests/nope", json={"status": "cancelled"}, headers=bearer(ADMIN)).status_code == 404
