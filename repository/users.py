# repository/users.py - Caller authentication and user profile access
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Any, Dict, Optional
from config import get_identity_provider
from repository.identity import IdentityProvider
from repository.store import DocumentStore, Transaction, SERVER_TIMESTAMP, USERS
from utils.errors import Conflict, Forbidden, NotFound, Unauthenticated
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_uid(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> str:
    """Resolve the bearer token to the caller's uid"""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Unauthorized: No token provided")
    return identity.verify_token(credentials.credentials)


def ensure_self(caller_id: str, user_id: str, message: str = "Forbidden: Insufficient permissions") -> None:
    if caller_id != user_id:
        raise Forbidden(message)


class UserRepo:
    @staticmethod
    def get(store: DocumentStore, user_id: str) -> Optional[Dict[str, Any]]:
        return store.get(USERS, user_id)

    @staticmethod
    def get_or_404(store: DocumentStore, user_id: str) -> Dict[str, Any]:
        user = store.get(USERS, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    @staticmethod
    def get_role(store: DocumentStore, user_id: str) -> Optional[str]:
        user = store.get(USERS, user_id)
        return user.get("role") if user else None

    @staticmethod
    def create_profile(store: DocumentStore, user_id: str, profile: Dict[str, Any]) -> None:
        def _create(txn: Transaction):
            if txn.get(USERS, user_id) is not None:
                raise Conflict("User profile already exists")
            txn.set(USERS, user_id, {
                **profile,
                "uid": user_id,
                "favoriteProviders": [],
                "createdAt": SERVER_TIMESTAMP,
                "updatedAt": SERVER_TIMESTAMP,
            })

        store.run_transaction(_create)

    @staticmethod
    def update_profile(store: DocumentStore, user_id: str, fields: Dict[str, Any]) -> None:
        def _update(txn: Transaction):
            if txn.get(USERS, user_id) is None:
                raise NotFound("User not found")
            txn.update(USERS, user_id, {**fields, "updatedAt": SERVER_TIMESTAMP})

        store.run_transaction(_update)

    @staticmethod
    def add_favorite(store: DocumentStore, user_id: str, provider_id: str) -> list:
        def _add(txn: Transaction):
            user = txn.get(USERS, user_id)
            if user is None:
                raise NotFound("User not found")
            favorites = list(user.get("favoriteProviders") or [])
            if provider_id in favorites:
                raise Conflict("Provider is already in favorites")
            favorites.append(provider_id)
            txn.update(USERS, user_id, {"favoriteProviders": favorites, "updatedAt": SERVER_TIMESTAMP})
            return favorites

        return store.run_transaction(_add)

    @staticmethod
    def remove_favorite(store: DocumentStore, user_id: str, provider_id: str) -> list:
        def _remove(txn: Transaction):
            user = txn.get(USERS, user_id)
            if user is None:
                raise NotFound("User not found")
            favorites = list(user.get("favoriteProviders") or [])
            if provider_id not in favorites:
                raise NotFound("Provider is not in favorites")
            favorites.remove(provider_id)
            txn.update(USERS, user_id, {"favoriteProviders": favorites, "updatedAt": SERVER_TIMESTAMP})
            return favorites

        return store.run_transaction(_remove)
