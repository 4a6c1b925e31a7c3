"""
Conflict validation for candidate reservations.

Works on anything shaped like a reservation: an `id`, a `status` and a
`date_range`. Both the ORM model and plain test doubles qualify.
"""

from typing import Iterable, Optional, Protocol

from boothbook.core.errors import ConflictError
from boothbook.domain.date_range import DateRange
from boothbook.domain.statuses import ReservationStatus


class ReservationLike(Protocol):
    id: int
    status: ReservationStatus

    @property
    def date_range(self) -> DateRange: ...


def is_active(reservation: ReservationLike) -> bool:
    return ReservationStatus(reservation.status).is_active


def active_only(reservations: Iterable[ReservationLike]) -> list[ReservationLike]:
    return [r for r in reservations if is_active(r)]


def find_conflict(
    candidate: DateRange,
    reservations: Iterable[ReservationLike],
) -> Optional[ReservationLike]:
    """First active reservation whose days overlap the candidate, if any."""
    for reservation in reservations:
        if is_active(reservation) and candidate.overlaps(reservation.date_range):
            return reservation
    return None


def validate(candidate: DateRange, reservations: Iterable[ReservationLike]) -> None:
    """Raise ConflictError when the candidate collides with an active reservation."""
    conflicting = find_conflict(candidate, reservations)
    if conflicting is not None:
        raise ConflictError(
            f"Booth is already reserved for part of {candidate} "
            f"(reservation {conflicting.id}, {conflicting.date_range})",
            conflicting_reservation_id=conflicting.id,
        )
