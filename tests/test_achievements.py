from conftest import LOOKER, PROVIDER, bearer
from repository.store import ACHIEVEMENTS, BADGE_DEFINITIONS


def test_own_achievements_only(client, store):
    store.seed(ACHIEVEMENTS, "a1", {"userId": LOOKER, "badgeId": "first-booking"})
    store.seed(ACHIEVEMENTS, "a2", {"userId": PROVIDER, "badgeId": "five-stars"})

    r = client.get(f"/users/{LOOKER}/achievements", headers=bearer(LOOKER))
    assert [a["badgeId"] for a in r.json()] == ["first-booking"]

    assert client.get(f"/users/{PROVIDER}/achievements", headers=bearer(LOOKER)).status_code == 403


def test_badges_are_public(client, store):
    store.seed(BADGE_DEFINITIONS, "first-booking", {"name": "First booking"})
    r = client.get("/badges")
    assert r.json() == [{"id": "first-booking", "name": "First booking"}]
