# repository/reviews.py - Review submission bound to a completed booking
from typing import Any, Dict
from models.reviews import SubmitReviewRequest
from repository.store import DocumentStore, Transaction, SERVER_TIMESTAMP, BOOKINGS, REVIEWS
from utils.booking_lifecycle import BookingStatus
from utils.errors import Conflict, Forbidden, InvalidTransition, MissingParameter, NotFound, parse_payload
import logging

logger = logging.getLogger(__name__)


class ReviewRepo:
    @staticmethod
    def submit(store: DocumentStore, caller_id: str, payload: Dict[str, Any]) -> str:
        """Insert the review and set the booking's reviewId atomically.

        A booking that already carries a reviewId answers 409 before the rest
        of the payload is looked at.
        """
        booking_id = payload.get("bookingId") if isinstance(payload, dict) else None
        if not isinstance(booking_id, str) or not booking_id:
            raise MissingParameter("bookingId is required", details=[{
                "path": ["bookingId"], "message": "bookingId is required", "code": "missing",
            }])

        def _submit(txn: Transaction) -> str:
            booking = txn.get(BOOKINGS, booking_id)
            if booking is None:
                raise NotFound("Booking not found")
            if booking.get("lookerId") != caller_id:
                raise Forbidden("Forbidden: You can only review your own bookings")
            if booking.get("reviewId"):
                raise Conflict("Review already submitted for this booking")

            review = parse_payload(SubmitReviewRequest, payload)

            if booking.get("status") != BookingStatus.COMPLETED.value:
                raise InvalidTransition("Cannot submit review for a booking that is not completed")

            data = review.model_dump(mode="json")
            review_id = txn.create(REVIEWS, {
                "bookingId": booking_id,
                "lookerId": caller_id,
                "providerId": booking.get("providerId"),
                "overallRating": data["rating"],
                "text": data["text"],
                "imageUrls": data["images"],
                "categoryRatings": data["categoryRatings"],
                "timestamp": SERVER_TIMESTAMP,
                "createdAt": SERVER_TIMESTAMP,
                "updatedAt": SERVER_TIMESTAMP,
            })
            txn.update(BOOKINGS, booking_id, {"reviewId": review_id, "updatedAt": SERVER_TIMESTAMP})
            return review_id

        review_id = store.run_transaction(_submit)
        logger.info(f"Review {review_id} submitted for booking {booking_id}")
        return review_id
