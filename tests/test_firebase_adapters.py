from unittest.mock import MagicMock

import pytest
from firebase_admin import auth

from repository.identity import FirebaseIdentityProvider
from repository.store import FirestoreStore
from utils.errors import Unauthenticated


def snapshot(doc_id, data):
    snap = MagicMock(exists=True, id=doc_id)
    snap.to_dict.return_value = data
    return snap


def test_get_returns_none_for_missing_document():
    client = MagicMock()
    client.collection.return_value.document.return_value.get.return_value = MagicMock(exists=False)
    assert FirestoreStore(client).get("bookings", "b1") is None


def test_find_chains_filters_and_ordering():
    client = MagicMock()
    query = client.collection.return_value
    query.where.return_value = query
    query.order_by.return_value = query
    query.stream.return_value = [snapshot("c1", {"updatedAt": 2})]

    docs = FirestoreStore(client).find(
        "conversations", [("participantIds", "array-contains", "u1")], order_by="updatedAt", descending=True,
    )

    assert docs == [{"id": "c1", "updatedAt": 2}]
    assert query.where.call_count == 1
    field_filter = query.where.call_args.kwargs["filter"]
    assert (field_filter.field_path, field_filter.op_string, field_filter.value) == (
        "participantIds", "array-contains", "u1",
    )
    assert query.order_by.call_args.args == ("updatedAt",)


def test_add_returns_generated_id():
    client = MagicMock()
    client.collection.return_value.add.return_value = (None, MagicMock(id="new-id"))
    assert FirestoreStore(client).add("reviews", {"rating": 5}) == "new-id"


def test_verify_token_returns_uid(monkeypatch):
    monkeypatch.setattr(auth, "verify_id_token", lambda token, app=None, check_revoked=True: {"uid": "u1"})
    assert FirebaseIdentityProvider().verify_token("tok") == "u1"


@pytest.mark.parametrize("error", [
    auth.InvalidIdTokenError("bad", cause=None, http_response=None),
    ValueError("malformed"),
])
def test_verify_token_rejections_become_401(monkeypatch, error):
    def reject(*args, **kwargs):
        raise error

    monkeypatch.setattr(auth, "verify_id_token", reject)
    with pytest.raises(Unauthenticated):
        FirebaseIdentityProvider().verify_token("tok")


def test_delete_user_tolerates_missing_account(monkeypatch):
    def missing(uid, app=None):
        raise auth.UserNotFoundError("gone")

    monkeypatch.setattr(auth, "delete_user", missing)
    FirebaseIdentityProvider().delete_user("u1")
