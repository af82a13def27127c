# routes/bookings.py - Booking creation, lookup and lifecycle transitions
from fastapi import APIRouter, Body, Depends, Query
from typing import Any, Dict, Optional
from config import get_store
from models.bookings import CreateBookingRequest
from repository.bookings import BookingRepo
from repository.store import DocumentStore
from repository.users import get_current_uid, ensure_self
from utils.booking_lifecycle import (
    TRANSITIONS, BookingAction, BookingStatus, PaymentStatus, LOOKER, PROVIDER,
)
from utils.errors import Forbidden, parse_payload
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Bookings"])

ROLE_FIELDS = {"Looker": LOOKER, "Provider": PROVIDER}


@router.post("/bookings", status_code=201)
def create_booking(
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Create a booking request as the looker"""
    if not isinstance(payload, dict) or payload.get("lookerId") != current_uid:
        raise Forbidden("Forbidden: Cannot create booking for another user")

    req = parse_payload(CreateBookingRequest, payload)
    booking_id = BookingRepo.create(store, req.model_dump(exclude_none=True))

    return {
        "message": "Booking request created",
        "bookingId": booking_id,
        "status": BookingStatus.PENDING_PROVIDER_CONFIRMATION.value,
    }


@router.get("/bookings/{booking_id}")
def get_booking(
    booking_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Get a booking visible to its looker or provider"""
    return BookingRepo.get_for_participant(store, booking_id, current_uid)


@router.get("/users/{user_id}/bookings")
def get_user_bookings(
    user_id: str,
    status: Optional[str] = Query(None, description="Filter by booking status"),
    role: Optional[str] = Query(None, description="Looker or Provider; both otherwise"),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Get the caller's bookings, optionally narrowed by status and role"""
    ensure_self(current_uid, user_id, "Forbidden: You are not authorized to view other users' bookings")
    # Any role other than Looker or Provider lists both sides
    return BookingRepo.list_for_user(store, user_id, ROLE_FIELDS.get(role), status)


def _transition(booking_id: str, action: BookingAction, store: DocumentStore, current_uid: str) -> Dict[str, str]:
    new_status = BookingRepo.transition(store, booking_id, current_uid, action)
    return {"message": TRANSITIONS[action].success_message, "status": new_status.value}


@router.post("/bookings/{booking_id}/confirm")
def confirm_booking(
    booking_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Provider accepts a pending booking"""
    return _transition(booking_id, BookingAction.CONFIRM, store, current_uid)


@router.post("/bookings/{booking_id}/cancel")
def cancel_booking(
    booking_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Looker or provider cancels a booking that is not finished yet"""
    return _transition(booking_id, BookingAction.CANCEL, store, current_uid)


@router.post("/bookings/{booking_id}/complete")
def complete_booking(
    booking_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Provider marks the booking as done"""
    return _transition(booking_id, BookingAction.COMPLETE, store, current_uid)


# Payment gateway integration is not wired in; these only acknowledge the call.

@router.post("/bookings/{booking_id}/authorize-payment")
def authorize_payment(booking_id: str, current_uid: str = Depends(get_current_uid)):
    logger.info(f"Placeholder: authorizing payment for booking {booking_id} (caller {current_uid})")
    return {
        "message": "Payment authorized (placeholder)",
        "paymentStatus": PaymentStatus.AUTHORIZED.value,
    }


@router.post("/bookings/{booking_id}/capture-payment")
def capture_payment(booking_id: str, current_uid: str = Depends(get_current_uid)):
    logger.info(f"Placeholder: capturing payment for booking {booking_id} (caller {current_uid})")
    return {
        "message": "Payment captured (placeholder)",
        "paymentStatus": PaymentStatus.CAPTURED.value,
        "totalAmount": 0,
    }
