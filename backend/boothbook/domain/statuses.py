"""
Closed status types and their transition tables.
"""

from enum import Enum


class ReservationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"
    CANCELLED = "cancelled"

    @property
    def is_active(self) -> bool:
        """Active reservations claim their days on the booth."""
        return self not in INACTIVE_RESERVATION_STATUSES


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    UNAVAILABLE = "unavailable"


class BoothApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    REFUNDED = "refunded"


INACTIVE_RESERVATION_STATUSES = frozenset(
    {ReservationStatus.DECLINED, ReservationStatus.CANCELLED}
)

RESERVATION_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset(
        {ReservationStatus.APPROVED, ReservationStatus.DECLINED, ReservationStatus.CANCELLED}
    ),
    ReservationStatus.APPROVED: frozenset({ReservationStatus.CANCELLED}),
    ReservationStatus.DECLINED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
}

BOOTH_APPROVAL_TRANSITIONS: dict[BoothApprovalStatus, frozenset[BoothApprovalStatus]] = {
    BoothApprovalStatus.PENDING: frozenset(
        {BoothApprovalStatus.APPROVED, BoothApprovalStatus.DECLINED, BoothApprovalStatus.CANCELLED}
    ),
    BoothApprovalStatus.APPROVED: frozenset({BoothApprovalStatus.CANCELLED}),
    BoothApprovalStatus.DECLINED: frozenset(),
    BoothApprovalStatus.CANCELLED: frozenset(),
}


def can_transition(current: ReservationStatus, requested: ReservationStatus) -> bool:
    return requested in RESERVATION_TRANSITIONS[current]


def can_transition_booth(current: BoothApprovalStatus, requested: BoothApprovalStatus) -> bool:
    return requested in BOOTH_APPROVAL_TRANSITIONS[current]
