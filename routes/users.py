# routes/users.py - Profile creation, update, deletion and favorite providers
from fastapi import APIRouter, Body, Depends
from typing import Any
from config import get_store, get_identity_provider
from models.users import CreateUserRequest, FavoriteProviderRequest, UpdateUserRequest
from repository.identity import IdentityProvider
from repository.store import DocumentStore, USERS
from repository.users import UserRepo, get_current_uid, ensure_self
from utils.cloudinary_helper import is_data_image, upload_base64_image
from utils.errors import parse_payload
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", status_code=201)
def create_user(
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Create the caller's own profile document"""
    req = parse_payload(CreateUserRequest, payload)
    UserRepo.create_profile(store, current_uid, req.model_dump(mode="json", exclude_none=True))
    logger.info(f"User profile {current_uid} created as {req.role.value}")
    return {"message": "User created successfully", "userId": current_uid}


@router.put("/{user_id}")
def update_user(
    user_id: str,
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    ensure_self(current_uid, user_id)
    req = parse_payload(UpdateUserRequest, payload)
    fields = req.model_dump(exclude_unset=True)

    # Existence is checked before any upload happens
    UserRepo.get_or_404(store, user_id)
    if fields.get("avatarUrl") and is_data_image(fields["avatarUrl"]):
        fields["avatarUrl"] = upload_base64_image(fields["avatarUrl"], folder=f"avatars/{user_id}")

    UserRepo.update_profile(store, user_id, fields)
    return {"message": "User updated successfully"}


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    store: DocumentStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity_provider),
    current_uid: str = Depends(get_current_uid),
):
    """Delete the profile document and the sign-in account"""
    ensure_self(current_uid, user_id)
    UserRepo.get_or_404(store, user_id)

    store.delete(USERS, user_id)
    identity.delete_user(user_id)
    logger.info(f"User {user_id} deleted")

    return {"message": "User deleted successfully"}


@router.post("/{user_id}/favorites")
def add_favorite_provider(
    user_id: str,
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    ensure_self(current_uid, user_id)
    req = parse_payload(FavoriteProviderRequest, payload)
    favorites = UserRepo.add_favorite(store, user_id, req.providerId)
    return {"message": "Favorite provider added", "favoriteProviders": favorites}


@router.delete("/{user_id}/favorites")
def remove_favorite_provider(
    user_id: str,
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    ensure_self(current_uid, user_id)
    req = parse_payload(FavoriteProviderRequest, payload)
    favorites = UserRepo.remove_favorite(store, user_id, req.providerId)
    return {"message": "Favorite provider removed", "favoriteProviders": favorites}
