# utils/booking_lifecycle.py - Booking status transitions and who may trigger them
"""
Every booking status change goes through ``apply_transition``. Handlers never
write a status they computed themselves; they ask the gate for it inside the
same store transaction that reads the booking.

    pending_provider_confirmation --confirm--> awaiting_reservation
    anything but completed or cancelled --cancel--> cancelled
    anything but completed --complete--> completed

The prior status is compared as the raw stored string, so a booking with a
missing or unrecognized status can still be cancelled or completed.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional
from repository.store import SERVER_TIMESTAMP
from utils.errors import Forbidden, InvalidTransition


class BookingStatus(str, Enum):
    PENDING_PROVIDER_CONFIRMATION = "pending_provider_confirmation"
    AWAITING_RESERVATION = "awaiting_reservation"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING_AUTHORIZATION = "pending_authorization"
    AUTHORIZED = "authorized"
    CAPTURED = "captured"


class BookingAction(str, Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"
    COMPLETE = "complete"


LOOKER = "lookerId"
PROVIDER = "providerId"


@dataclass(frozen=True)
class TransitionRule:
    """Who may trigger an action and from which stored statuses.

    With ``allowed_from`` set only those statuses pass; otherwise every status
    passes except the ones in ``forbidden_from``.
    """
    callers: FrozenSet[str]
    target: BookingStatus
    success_message: str
    rejection: str
    allowed_from: Optional[FrozenSet[str]] = None
    forbidden_from: FrozenSet[str] = frozenset()

    def permits(self, status: Any) -> bool:
        if not isinstance(status, str):
            return self.allowed_from is None
        if self.allowed_from is not None:
            return status in self.allowed_from
        return status not in self.forbidden_from


TRANSITIONS: Dict[BookingAction, TransitionRule] = {
    BookingAction.CONFIRM: TransitionRule(
        callers=frozenset({PROVIDER}),
        allowed_from=frozenset({BookingStatus.PENDING_PROVIDER_CONFIRMATION.value}),
        target=BookingStatus.AWAITING_RESERVATION,
        success_message="Booking confirmed",
        rejection="Booking status is not pending confirmation",
    ),
    BookingAction.CANCEL: TransitionRule(
        callers=frozenset({LOOKER, PROVIDER}),
        forbidden_from=frozenset({BookingStatus.COMPLETED.value, BookingStatus.CANCELLED.value}),
        target=BookingStatus.CANCELLED,
        success_message="Booking cancelled",
        rejection="Booking cannot be cancelled in {status} status",
    ),
    BookingAction.COMPLETE: TransitionRule(
        callers=frozenset({PROVIDER}),
        forbidden_from=frozenset({BookingStatus.COMPLETED.value}),
        target=BookingStatus.COMPLETED,
        success_message="Booking completed successfully",
        rejection="Booking is already completed",
    ),
}


def is_participant(booking: Mapping[str, Any], caller_id: str) -> bool:
    return caller_id in (booking.get(LOOKER), booking.get(PROVIDER))


def ensure_participant(booking: Mapping[str, Any], caller_id: str, verb: str = "view") -> None:
    if not is_participant(booking, caller_id):
        raise Forbidden(f"Forbidden: You are not authorized to {verb} this booking")


def apply_transition(booking: Mapping[str, Any], caller_id: str, action: BookingAction) -> BookingStatus:
    """Return the status the booking moves to, or raise.

    The caller check comes first so that strangers get 403 whatever the
    booking's status is.
    """
    rule = TRANSITIONS[action]
    if not any(booking.get(field) == caller_id for field in rule.callers):
        raise Forbidden(f"Forbidden: You are not authorized to {action.value} this booking")

    current = booking.get("status")
    if not rule.permits(current):
        raise InvalidTransition(rule.rejection.format(status=current))
    return rule.target


def transition_update(new_status: BookingStatus) -> Dict[str, Any]:
    return {"status": new_status.value, "updatedAt": SERVER_TIMESTAMP}


def new_booking_document(booking_request: Dict[str, Any]) -> Dict[str, Any]:
    """Fields of a freshly created booking, from a validated create payload"""
    return {
        **booking_request,
        "status": BookingStatus.PENDING_PROVIDER_CONFIRMATION.value,
        "paymentStatus": PaymentStatus.PENDING_AUTHORIZATION.value,
        # TODO: derive basePrice from the booked services' prices once pricing lands
        "basePrice": 0,
        "tipAmount": 0,
        "totalPrice": 0,
        "serviceIds": [service["serviceId"] for service in booking_request.get("services", [])],
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    }

