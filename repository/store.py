# repository/store.py - Document store port and its Firestore implementation
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar
from google.cloud import firestore
from google.cloud.firestore import SERVER_TIMESTAMP
from google.cloud.firestore_v1.base_query import FieldFilter


T = TypeVar("T")

# (field, operator, value) as understood by Firestore, e.g. ("status", "==", "pending")
Filter = Tuple[str, str, Any]

BOOKINGS = "bookings"
USERS = "users"
SERVICES = "services"
REVIEWS = "reviews"
CONVERSATIONS = "conversations"
MESSAGES = "messages"
MARKETPLACE_REQUESTS = "marketplaceRequests"
ACHIEVEMENTS = "achievements"
BADGE_DEFINITIONS = "badgeDefinitions"

__all__ = [
    "SERVER_TIMESTAMP", "Filter", "Transaction", "DocumentStore",
    "FirestoreTransaction", "FirestoreStore",
    "BOOKINGS", "USERS", "SERVICES", "REVIEWS", "CONVERSATIONS", "MESSAGES",
    "MARKETPLACE_REQUESTS", "ACHIEVEMENTS", "BADGE_DEFINITIONS",
]


class Transaction(ABC):
    """Reads and staged writes executed atomically by DocumentStore.run_transaction.

    All reads must happen before the first write.
    """

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def create(self, collection: str, data: Dict[str, Any]) -> str:
        """Stage a new document with a generated id and return the id"""

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        ...


class DocumentStore(ABC):
    """Collection/document access used by the route handlers.

    Documents come back as plain dicts with their id under "id".
    """

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def find(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def add(self, collection: str, data: Dict[str, Any]) -> str:
        ...

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        ...

    @abstractmethod
    def run_transaction(self, fn: Callable[[Transaction], T]) -> T:
        """Run fn atomically; if fn raises, none of its writes are applied"""


def _snapshot_to_dict(snapshot) -> Optional[Dict[str, Any]]:
    if not snapshot.exists:
        return None
    return {"id": snapshot.id, **(snapshot.to_dict() or {})}


class FirestoreTransaction(Transaction):
    def __init__(self, client: firestore.Client, transaction: firestore.Transaction):
        self._client = client
        self._transaction = transaction

    def get(self, collection, doc_id):
        ref = self._client.collection(collection).document(doc_id)
        return _snapshot_to_dict(ref.get(transaction=self._transaction))

    def create(self, collection, data):
        ref = self._client.collection(collection).document()
        self._transaction.create(ref, data)
        return ref.id

    def set(self, collection, doc_id, data):
        self._transaction.set(self._client.collection(collection).document(doc_id), data)

    def update(self, collection, doc_id, fields):
        self._transaction.update(self._client.collection(collection).document(doc_id), fields)


class FirestoreStore(DocumentStore):
    def __init__(self, client: firestore.Client):
        self._client = client

    def get(self, collection, doc_id):
        return _snapshot_to_dict(self._client.collection(collection).document(doc_id).get())

    def find(self, collection, filters=(), order_by=None, descending=False):
        query = self._client.collection(collection)
        for field, op, value in filters:
            query = query.where(filter=FieldFilter(field, op, value))
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        return [_snapshot_to_dict(doc) for doc in query.stream()]

    def add(self, collection, data):
        _, ref = self._client.collection(collection).add(data)
        return ref.id

    def set(self, collection, doc_id, data):
        self._client.collection(collection).document(doc_id).set(data)

    def update(self, collection, doc_id, fields):
        self._client.collection(collection).document(doc_id).update(fields)

    def delete(self, collection, doc_id):
        self._client.collection(collection).document(doc_id).delete()

    def run_transaction(self, fn):
        # Firestore re-runs the function when a read document changed before commit
        @firestore.transactional
        def _run(transaction):
            return fn(FirestoreTransaction(self._client, transaction))

        return _run(self._client.transaction())
