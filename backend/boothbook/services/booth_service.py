"""
Booth service: creation, lookup and the approval workflow.

The approval workflow only moves `Booth.status`. Availability belongs to
the reservation service and is never written here except for its initial
value on creation.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boothbook.core.errors import InvalidTransitionError, NotFoundError
from boothbook.core.logging import get_logger
from boothbook.domain.statuses import AvailabilityStatus, BoothApprovalStatus, can_transition_booth
from boothbook.models import Booth, Event
from boothbook.schemas.booth import BoothCreate

logger = get_logger(__name__)


async def create_booth(db: AsyncSession, booth_data: BoothCreate, owner_id: int) -> Booth:
    """Create a booth pending approval, with every event day free."""
    event = await db.get(Event, booth_data.event_id)
    if event is None:
        raise NotFoundError("Event", booth_data.event_id)

    booth = Booth(
        event_id=event.id,
        owner_id=owner_id,
        name=booth_data.name,
        size=booth_data.size,
        price=booth_data.price,
        location=booth_data.location,
        status=BoothApprovalStatus.PENDING,
        availability_status=AvailabilityStatus.AVAILABLE,
        version=1,
    )
    db.add(booth)
    await db.flush()
    await db.refresh(booth)

    logger.info("booth_created", booth_id=booth.id, event_id=event.id, owner_id=owner_id)
    return booth


async def get_booth(db: AsyncSession, booth_id: int) -> Booth:
    result = await db.execute(
        select(Booth)
        .where(Booth.id == booth_id)
        .execution_options(populate_existing=True)
    )
    booth = result.scalar_one_or_none()
    if booth is None:
        raise NotFoundError("Booth", booth_id)
    return booth


async def list_event_booths(db: AsyncSession, event_id: int) -> list[Booth]:
    """All booths of an event. Raises NotFoundError for an unknown event."""
    if await db.get(Event, event_id) is None:
        raise NotFoundError("Event", event_id)

    result = await db.execute(
        select(Booth)
        .where(Booth.event_id == event_id)
        .order_by(Booth.id.asc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def set_approval_status(
    db: AsyncSession,
    booth_id: int,
    new_status: BoothApprovalStatus,
) -> Booth:
    """Move a booth through pending -> approved/declined -> cancelled."""
    booth = await get_booth(db, booth_id)
    current = BoothApprovalStatus(booth.status)

    if not can_transition_booth(current, new_status):
        raise InvalidTransitionError("booth", current.value, new_status.value)

    booth.status = new_status
    await db.flush()
    await db.refresh(booth)

    logger.info("booth_status_updated", booth_id=booth.id, status=new_status.value)
    return booth
