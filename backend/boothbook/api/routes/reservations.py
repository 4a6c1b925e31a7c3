"""
Reservation endpoints with conflict-checked, concurrency-safe booth writes.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from boothbook.db.session import get_db
from boothbook.schemas.reservation import (
    ReservationCreate,
    ReservationStatusUpdate,
    ReservationResponse,
    ReservationChangeResponse,
)
from boothbook.services import reservation_service
from boothbook.services.reservation_service import LifecycleResult
from boothbook.services.cache_service import invalidate_booth_cache
from boothbook.services.interfaces.store import ReservationStore
from boothbook.services.strategy_factory import get_reservation_store
from boothbook.core.security import get_current_user_id

router = APIRouter(prefix="/reservations", tags=["Reservations"])


async def _respond(db: AsyncSession, result: LifecycleResult, message: str) -> ReservationChangeResponse:
    # Commit first: a listing read between delete and commit would re-cache the old availability
    await db.commit()
    await invalidate_booth_cache(result.event_id)
    return ReservationChangeResponse(
        message=message,
        reservation=ReservationResponse.model_validate(result.reservation),
        booth_availability=result.availability,
    )


@router.post("/", response_model=ReservationChangeResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    reservation_data: ReservationCreate,
    user_id: int = Depends(get_current_user_id),
    store: ReservationStore = Depends(get_reservation_store),
    db: AsyncSession = Depends(get_db),
):
    """
    Request a booth for an inclusive day range.

    The range must sit inside the event's dates and must not share a day
    with any pending or approved reservation of the booth (409 otherwise).
    """
    result = await reservation_service.create_reservation(
        store,
        booth_id=reservation_data.booth_id,
        renter_id=user_id,
        start_date=reservation_data.start_date,
        end_date=reservation_data.end_date,
        total_price=reservation_data.total_price,
    )
    return await _respond(db, result, "Reservation created")


@router.get("/", response_model=list[ReservationResponse])
async def list_my_reservations(
    user_id: int = Depends(get_current_user_id),
    store: ReservationStore = Depends(get_reservation_store),
):
    """Get all reservations made by the authenticated user."""
    return await reservation_service.list_renter_reservations(store, user_id)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: int,
    store: ReservationStore = Depends(get_reservation_store),
):
    return await reservation_service.get_reservation(store, reservation_id)


@router.patch("/{reservation_id}/status", response_model=ReservationChangeResponse)
async def update_reservation_status(
    reservation_id: int,
    update: ReservationStatusUpdate,
    user_id: int = Depends(get_current_user_id),
    store: ReservationStore = Depends(get_reservation_store),
    db: AsyncSession = Depends(get_db),
):
    """Approve or decline a pending reservation."""
    result = await reservation_service.update_status(store, reservation_id, update.status)
    return await _respond(db, result, f"Reservation {update.status.value}")


@router.post("/{reservation_id}/cancel", response_model=ReservationChangeResponse)
async def cancel_reservation(
    reservation_id: int,
    user_id: int = Depends(get_current_user_id),
    store: ReservationStore = Depends(get_reservation_store),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a pending or approved reservation and release its days."""
    result = await reservation_service.cancel_reservation(store, reservation_id)
    return await _respond(db, result, "Reservation cancelled successfully")
