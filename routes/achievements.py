# routes/achievements.py - Earned achievements and the badge catalog
from fastapi import APIRouter, Depends
from config import get_store
from repository.store import DocumentStore, ACHIEVEMENTS, BADGE_DEFINITIONS
from repository.users import get_current_uid, ensure_self

router = APIRouter(tags=["Achievements"])


@router.get("/users/{user_id}/achievements")
def get_user_achievements(
    user_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    ensure_self(current_uid, user_id, "Forbidden: You are not authorized to view other users' achievements")
    return store.find(ACHIEVEMENTS, [("userId", "==", current_uid)])


@router.get("/badges")
def get_all_badges(store: DocumentStore = Depends(get_store)):
    """Every badge definition"""
    return store.find(BADGE_DEFINITIONS)
