# repository/bookings.py - Booking persistence; status writes go through the lifecycle gate
from typing import Any, Dict, List, Optional
from repository.store import DocumentStore, Transaction, BOOKINGS
from utils.booking_lifecycle import (
    BookingAction, BookingStatus, LOOKER, PROVIDER,
    apply_transition, ensure_participant, new_booking_document, transition_update,
)
from utils.errors import NotFound
import logging

logger = logging.getLogger(__name__)


class BookingRepo:
    @staticmethod
    def create(store: DocumentStore, booking_request: Dict[str, Any]) -> str:
        booking_id = store.add(BOOKINGS, new_booking_document(booking_request))
        logger.info(f"Booking {booking_id} created by looker {booking_request.get(LOOKER)}")
        return booking_id

    @staticmethod
    def get_for_participant(store: DocumentStore, booking_id: str, caller_id: str) -> Dict[str, Any]:
        booking = store.get(BOOKINGS, booking_id)
        if booking is None:
            raise NotFound("Booking not found")
        ensure_participant(booking, caller_id)
        return booking

    @staticmethod
    def list_for_user(
        store: DocumentStore,
        user_id: str,
        role_field: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Bookings where the user is looker and/or provider, de-duplicated by id"""
        fields = [role_field] if role_field else [LOOKER, PROVIDER]
        bookings: Dict[str, Dict[str, Any]] = {}
        for field in fields:
            filters = [(field, "==", user_id)]
            if status:
                filters.append(("status", "==", status))
            for booking in store.find(BOOKINGS, filters):
                bookings.setdefault(booking["id"], booking)
        return list(bookings.values())

    @staticmethod
    def transition(store: DocumentStore, booking_id: str, caller_id: str, action: BookingAction) -> BookingStatus:
        """Read, check and write the status in one transaction.

        A rejected transition raises before anything is staged, so the stored
        booking stays untouched.
        """
        def _apply(txn: Transaction) -> BookingStatus:
            booking = txn.get(BOOKINGS, booking_id)
            if booking is None:
                raise NotFound("Booking not found")
            new_status = apply_transition(booking, caller_id, action)
            txn.update(BOOKINGS, booking_id, transition_update(new_status))
            return new_status

        new_status = store.run_transaction(_apply)
        logger.info(f"Booking {booking_id}: {action.value} by {caller_id} -> {new_status.value}")
        return new_status
