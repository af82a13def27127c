# routes/reviews.py - Review submission and public review reads
from fastapi import APIRouter, Body, Depends
from typing import Any
from config import get_store
from repository.reviews import ReviewRepo
from repository.store import DocumentStore, REVIEWS
from repository.users import get_current_uid
from utils.errors import NotFound

router = APIRouter(tags=["Reviews"])


@router.post("/reviews", status_code=201)
def submit_review(
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Review a completed booking; one review per booking"""
    review_id = ReviewRepo.submit(store, current_uid, payload)
    return {"message": "Review submitted successfully", "reviewId": review_id}


@router.get("/providers/{provider_id}/reviews")
def get_provider_reviews(provider_id: str, store: DocumentStore = Depends(get_store)):
    return store.find(REVIEWS, [("providerId", "==", provider_id)])


@router.get("/reviews/{review_id}")
def get_review_details(review_id: str, store: DocumentStore = Depends(get_store)):
    review = store.get(REVIEWS, review_id)
    if review is None:
        raise NotFound("Review not found")
    return review
