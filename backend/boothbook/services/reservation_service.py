"""
Reservation lifecycle with a consistent booth availability.

Every operation that changes a booth's set of active reservations runs as
one read-validate-write sequence against that booth:

  1. Read the booth (remember its version) and its event
  2. Validate and write the reservation change
  3. Recompute availability from the booth's stored reservations
  4. Write availability with a version check (see reservation_store)

If step 4 loses a race, the session is rolled back and the sequence starts
over, so the conflict check always runs against the state that gets
committed. Availability is never computed lazily on read.

State machine per reservation:

  pending  -> approved | declined | cancelled
  approved -> cancelled
  declined, cancelled: terminal (record kept, days released)
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Awaitable, Callable, Optional, Union

from boothbook.core.config import get_settings
from boothbook.core.errors import (
    BoothBookError,
    ConcurrentModificationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    RangeOutOfBoundsError,
)
from boothbook.core.logging import get_logger
from boothbook.core.metrics import (
    record_availability,
    record_reservation_operation,
    record_version_conflict,
    reservation_latency,
)
from boothbook.domain import conflicts
from boothbook.domain.availability import compute_availability
from boothbook.domain.date_range import DateRange
from boothbook.domain.statuses import AvailabilityStatus, ReservationStatus, can_transition
from boothbook.models import Booth, Event, Reservation
from boothbook.services.interfaces.store import ReservationStore

logger = get_logger(__name__)

DateInput = Union[date, str]

# Statuses an owner can decide on through update_status
DECISION_STATUSES = frozenset({ReservationStatus.APPROVED, ReservationStatus.DECLINED})


@dataclass(frozen=True)
class LifecycleResult:
    """Outcome of a committed booth write."""

    reservation: Optional[Reservation]
    booth_id: int
    event_id: int
    availability: AvailabilityStatus


@contextmanager
def _instrumented(operation: str):
    started = time.perf_counter()
    try:
        yield
    except BoothBookError as exc:
        record_reservation_operation(operation, exc.kind)
        raise
    else:
        record_reservation_operation(operation, "success")
    finally:
        reservation_latency.labels(operation=operation).observe(time.perf_counter() - started)


def _to_range(start_date: DateInput, end_date: DateInput) -> DateRange:
    if isinstance(start_date, str) or isinstance(end_date, str):
        return DateRange.parse(str(start_date), str(end_date))
    return DateRange(start_date, end_date)


async def _write_booth(
    store: ReservationStore,
    booth_id: int,
    operation: str,
    mutate: Callable[[Booth, Event], Awaitable[Optional[Reservation]]],
) -> LifecycleResult:
    """
    Run `mutate` and the availability write as one unit for the booth.
    Retries up to MAX_RETRY_ATTEMPTS when another writer bumps the version first.
    """
    max_attempts = get_settings().MAX_RETRY_ATTEMPTS

    for attempt in range(1, max_attempts + 1):
        booth = await store.get_booth(booth_id, lock=True)
        if booth is None:
            raise NotFoundError("Booth", booth_id)

        event = await store.get_event(booth.event_id)
        if event is None:
            raise NotFoundError("Event", booth.event_id)

        current_version = booth.version
        reservation = await mutate(booth, event)

        reservations = await store.list_reservations_for_booth(booth_id)
        availability = compute_availability(event.date_range, reservations)

        written = await store.patch_booth(
            booth_id,
            expected_version=current_version,
            availability_status=availability,
        )
        if written:
            record_availability(availability.value)
            logger.info(
                "booth_availability_updated",
                booth_id=booth_id,
                operation=operation,
                availability=availability.value,
                version=current_version + 1,
                attempt=attempt,
            )
            return LifecycleResult(
                reservation=reservation,
                booth_id=booth_id,
                event_id=event.id,
                availability=availability,
            )

        # Version conflict - another transaction modified this booth
        record_version_conflict()
        logger.info(
            "booth_version_conflict",
            booth_id=booth_id,
            operation=operation,
            attempt=attempt,
        )
        await store.rollback()

    logger.warning("booth_write_gave_up", booth_id=booth_id, operation=operation, attempts=max_attempts)
    raise ConcurrentModificationError(
        f"Booth {booth_id} is being modified by other requests. Please try again."
    )


async def create_reservation(
    store: ReservationStore,
    booth_id: int,
    renter_id: int,
    start_date: DateInput,
    end_date: DateInput,
    total_price: Union[Decimal, float, int],
) -> LifecycleResult:
    """
    Create a pending reservation if the dates fit the event and are free.

    Raises NotFoundError, RangeOutOfBoundsError (InvalidRangeError for
    start > end) or ConflictError. Nothing is written on failure.
    """
    with _instrumented("create"):
        candidate = _to_range(start_date, end_date)

        async def insert(booth: Booth, event: Event) -> Reservation:
            if not candidate.is_subrange_of(event.date_range):
                logger.warning(
                    "reservation_out_of_bounds",
                    booth_id=booth.id,
                    requested=str(candidate),
                    event_range=str(event.date_range),
                )
                raise RangeOutOfBoundsError(
                    f"Reservation dates {candidate} are outside the event schedule {event.date_range}"
                )

            existing = await store.list_reservations_for_booth(booth.id)
            try:
                conflicts.validate(candidate, existing)
            except ConflictError as exc:
                logger.warning(
                    "reservation_conflict",
                    booth_id=booth.id,
                    requested=str(candidate),
                    conflicting_reservation_id=exc.conflicting_reservation_id,
                )
                raise

            return await store.insert_reservation(
                booth_id=booth.id,
                renter_id=renter_id,
                start_date=candidate.start,
                end_date=candidate.end,
                total_price=total_price,
                status=ReservationStatus.PENDING,
            )

        result = await _write_booth(store, booth_id, "create", insert)

    logger.info(
        "reservation_created",
        reservation_id=result.reservation.id,
        booth_id=booth_id,
        renter_id=renter_id,
        dates=str(candidate),
    )
    return result


async def _transition(
    store: ReservationStore,
    reservation_id: int,
    new_status: ReservationStatus,
    operation: str,
) -> LifecycleResult:
    reservation = await store.get_reservation(reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation", reservation_id)

    async def apply(booth: Booth, event: Event) -> Reservation:
        # Re-read inside the sequence: the status may have moved since the first read
        current = await store.get_reservation(reservation_id)
        current_status = ReservationStatus(current.status)
        if not can_transition(current_status, new_status):
            raise InvalidTransitionError("reservation", current_status.value, new_status.value)
        return await store.patch_reservation(reservation_id, status=new_status)

    result = await _write_booth(store, reservation.booth_id, operation, apply)
    logger.info(
        "reservation_status_updated",
        reservation_id=reservation_id,
        booth_id=result.booth_id,
        status=new_status.value,
    )
    return result


async def update_status(
    store: ReservationStore,
    reservation_id: int,
    new_status: Union[ReservationStatus, str],
) -> LifecycleResult:
    """Approve or decline a pending reservation."""
    with _instrumented("update_status"):
        try:
            requested = ReservationStatus(new_status)
        except ValueError:
            raise InvalidTransitionError("reservation", "unknown", str(new_status)) from None

        if requested not in DECISION_STATUSES:
            # Cancellation has its own operation; pending cannot be re-entered
            reservation = await get_reservation(store, reservation_id)
            raise InvalidTransitionError(
                "reservation", ReservationStatus(reservation.status).value, requested.value
            )

        return await _transition(store, reservation_id, requested, "update_status")


async def cancel_reservation(store: ReservationStore, reservation_id: int) -> LifecycleResult:
    """Cancel a pending or approved reservation and release its days."""
    with _instrumented("cancel"):
        return await _transition(store, reservation_id, ReservationStatus.CANCELLED, "cancel")


async def recompute_booth_availability(store: ReservationStore, booth_id: int) -> LifecycleResult:
    """Rebuild the cached availability from stored reservations."""
    async def no_change(booth: Booth, event: Event) -> None:
        return None

    with _instrumented("recompute"):
        return await _write_booth(store, booth_id, "recompute", no_change)


async def get_booth_availability(store: ReservationStore, booth_id: int) -> AvailabilityStatus:
    booth = await store.get_booth(booth_id)
    if booth is None:
        raise NotFoundError("Booth", booth_id)
    return AvailabilityStatus(booth.availability_status)


async def get_reservation(store: ReservationStore, reservation_id: int) -> Reservation:
    reservation = await store.get_reservation(reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation", reservation_id)
    return reservation


async def list_booth_reservations(store: ReservationStore, booth_id: int) -> list[Reservation]:
    if await store.get_booth(booth_id) is None:
        raise NotFoundError("Booth", booth_id)
    return await store.list_reservations_for_booth(booth_id)


async def list_renter_reservations(store: ReservationStore, renter_id: int) -> list[Reservation]:
    return await store.list_reservations_for_renter(renter_id)
