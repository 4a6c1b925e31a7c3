"""
Booth endpoints: creation, approval workflow and availability reads.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from boothbook.db.session import get_db
from boothbook.domain.statuses import BoothApprovalStatus
from boothbook.schemas.booth import BoothCreate, BoothResponse, BoothAvailabilityResponse
from boothbook.schemas.reservation import ReservationResponse
from boothbook.services import booth_service, reservation_service
from boothbook.services.cache_service import invalidate_booth_cache
from boothbook.services.interfaces.store import ReservationStore
from boothbook.services.strategy_factory import get_reservation_store
from boothbook.core.security import get_current_user_id

router = APIRouter(prefix="/booths", tags=["Booths"])


@router.post("/", response_model=BoothResponse, status_code=status.HTTP_201_CREATED)
async def create_booth(
    booth_data: BoothCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a booth for an event. It starts pending approval and fully available."""
    booth = await booth_service.create_booth(db, booth_data, user_id)
    await db.commit()
    await invalidate_booth_cache(booth.event_id)
    return booth


@router.get("/{booth_id}", response_model=BoothResponse)
async def get_booth(booth_id: int, db: AsyncSession = Depends(get_db)):
    return await booth_service.get_booth(db, booth_id)


@router.get("/{booth_id}/availability", response_model=BoothAvailabilityResponse)
async def get_booth_availability(
    booth_id: int,
    store: ReservationStore = Depends(get_reservation_store),
):
    """Current availability as of the last committed reservation change. Not cached."""
    availability = await reservation_service.get_booth_availability(store, booth_id)
    return BoothAvailabilityResponse(booth_id=booth_id, availability_status=availability)


@router.get("/{booth_id}/reservations", response_model=list[ReservationResponse])
async def list_booth_reservations(
    booth_id: int,
    store: ReservationStore = Depends(get_reservation_store),
):
    """Every reservation of the booth, including declined and cancelled ones."""
    return await reservation_service.list_booth_reservations(store, booth_id)


async def _set_approval(db: AsyncSession, booth_id: int, new_status: BoothApprovalStatus):
    booth = await booth_service.set_approval_status(db, booth_id, new_status)
    await db.commit()
    await invalidate_booth_cache(booth.event_id)
    return booth


@router.post("/{booth_id}/approve", response_model=BoothResponse)
async def approve_booth(
    booth_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await _set_approval(db, booth_id, BoothApprovalStatus.APPROVED)


@router.post("/{booth_id}/decline", response_model=BoothResponse)
async def decline_booth(
    booth_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await _set_approval(db, booth_id, BoothApprovalStatus.DECLINED)


@router.post("/{booth_id}/cancel", response_model=BoothResponse)
async def cancel_booth(
    booth_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await _set_approval(db, booth_id, BoothApprovalStatus.CANCELLED)


@router.post("/{booth_id}/availability/recompute", response_model=BoothAvailabilityResponse)
async def recompute_booth_availability(
    booth_id: int,
    user_id: int = Depends(get_current_user_id),
    store: ReservationStore = Depends(get_reservation_store),
    db: AsyncSession = Depends(get_db),
):
    """Rebuild the stored availability from the booth's reservations (repair after manual edits)."""
    result = await reservation_service.recompute_booth_availability(store, booth_id)
    await db.commit()
    await invalidate_booth_cache(result.event_id)
    return BoothAvailabilityResponse(booth_id=booth_id, availability_status=result.availability)
