from conftest import LOOKER, PROVIDER, OTHER, bearer
from repository.store import USERS
from utils.errors import Internal


def test_create_own_profile(client, store):
    r = client.post("/users", json={"email": "new@example.com", "role": "Provider"}, headers=bearer(OTHER))
    assert r.status_code == 201
    profile = store.raw(USERS, OTHER)
    assert profile["uid"] == OTHER
    assert profile["role"] == "Provider"
    assert profile["favoriteProviders"] == []


def test_create_profile_twice_conflicts(client):
    r = client.post("/users", json={"email": "l@example.com"}, headers=bearer(LOOKER))
    assert r.status_code == 409


def test_admin_role_cannot_be_self_assigned(client, store):
    r = client.post("/users", json={"email": "x@example.com", "role": "Admin"}, headers=bearer(OTHER))
    assert r.status_code == 400
    assert store.raw(USERS, OTHER) is None


def test_update_profile(client, store):
    r = client.put(f"/users/{LOOKER}", json={"name": "Lee", "bio": "hi"}, headers=bearer(LOOKER))
    assert r.status_code == 200
    profile = store.raw(USERS, LOOKER)
    assert profile["name"] == "Lee"
    assert profile["role"] == "Looker"


def test_update_someone_else_is_forbidden(client):
    r = client.put(f"/users/{PROVIDER}", json={"name": "x"}, headers=bearer(LOOKER))
    assert r.status_code == 403


def test_update_rejects_unknown_fields(client):
    r = client.put(f"/users/{LOOKER}", json={"role": "Admin"}, headers=bearer(LOOKER))
    assert r.status_code == 400


def test_update_missing_profile_does_not_upload(client, monkeypatch):
    calls = []
    monkeypatch.setattr("routes.users.upload_base64_image", lambda *a, **kw: calls.append(a))
    r = client.put(f"/users/{OTHER}", json={"avatarUrl": "data:image/png;base64,AAAA"}, headers=bearer(OTHER))
    assert r.status_code == 404
    assert calls == []


def test_data_uri_avatar_is_uploaded(client, store, monkeypatch):
    monkeypatch.setattr(
        "routes.users.upload_base64_image",
        lambda data, folder: f"https://cdn.example.com/{folder}/a.png",
    )
    r = client.put(f"/users/{LOOKER}", json={"avatarUrl": "data:image/png;base64,AAAA"}, headers=bearer(LOOKER))
    assert r.status_code == 200
    assert store.raw(USERS, LOOKER)["avatarUrl"] == f"https://cdn.example.com/avatars/{LOOKER}/a.png"


def test_failed_upload_is_500(client, store, monkeypatch):
    def fail(*args, **kwargs):
        raise Internal("Image upload failed")

    monkeypatch.setattr("routes.users.upload_base64_image", fail)
    r = client.put(f"/users/{LOOKER}", json={"avatarUrl": "data:image/png;base64,AAAA"}, headers=bearer(LOOKER))
    assert r.status_code == 500
    assert r.json() == {"error": "Image upload failed"}
    assert "avatarUrl" not in store.raw(USERS, LOOKER)


def test_plain_url_avatar_is_stored_as_is(client, store):
    url = "https://img.example.com/me.png"
    assert client.put(f"/users/{LOOKER}", json={"avatarUrl": url}, headers=bearer(LOOKER)).status_code == 200
    assert store.raw(USERS, LOOKER)["avatarUrl"] == url


def test_delete_user_removes_profile_and_account(client, store, identity):
    r = client.delete(f"/users/{LOOKER}", headers=bearer(LOOKER))
    assert r.status_code == 200
    assert store.raw(USERS, LOOKER) is None
    assert identity.deleted == [LOOKER]


def test_delete_other_user_forbidden(client, identity):
    assert client.delete(f"/users/{PROVIDER}", headers=bearer(LOOKER)).status_code == 403
    assert identity.deleted == []


def test_favorites_add_and_remove(client, store):
    url = f"/users/{LOOKER}/favorites"
    r = client.post(url, json={"providerId": PROVIDER}, headers=bearer(LOOKER))
    assert r.status_code == 200
    assert r.json()["favoriteProviders"] == [PROVIDER]

    assert client.post(url, json={"providerId": PROVIDER}, headers=bearer(LOOKER)).status_code == 409

    r = client.request("DELETE", url, json={"providerId": PROVIDER}, headers=bearer(LOOKER))
    assert r.status_code == 200
    assert store.raw(USERS, LOOKER)["favoriteProviders"] == []

    r = client.request("DELETE", url, json={"providerId": PROVIDER}, headers=bearer(LOOKER))
    assert r.status_code == 404


def test_favorites_of_someone_else_forbidden(client):
    r = client.post(f"/users/{PROVIDER}/favorites", json={"providerId": LOOKER}, headers=bearer(LOOKER))
    assert r.status_code == 403
