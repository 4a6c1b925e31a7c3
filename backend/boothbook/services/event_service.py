"""
Event service handling CRUD operations.
"""

from datetime import date
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from boothbook.core.errors import NotFoundError
from boothbook.models.event import Event
from boothbook.schemas.event import EventCreate
from boothbook.core.logging import get_logger

logger = get_logger(__name__)


async def create_event(db: AsyncSession, event_data: EventCreate, organizer_id: int) -> Event:
    """Create a new multi-day event."""
    event = Event(
        title=event_data.title,
        description=event_data.description,
        location=event_data.location,
        start_date=event_data.start_date,
        end_date=event_data.end_date,
        created_by=organizer_id,
    )
    db.add(event)
    await db.flush()
    await db.refresh(event)

    logger.info(
        "event_created",
        event_id=event.id,
        title=event.title,
        start_date=event.start_date.isoformat(),
        end_date=event.end_date.isoformat(),
    )
    return event


async def get_event(db: AsyncSession, event_id: int) -> Event:
    """Get a single event by ID."""
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()

    if not event:
        raise NotFoundError("Event", event_id)
    return event


async def list_events(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 20,
    upcoming_only: bool = True,
    today: date | None = None,
) -> tuple[list[Event], int]:
    """
    List events with pagination.
    "Upcoming" means the event has not ended yet, so running events are included.
    Uses the ix_events_start_date index for ordering.
    """
    query = select(Event)

    if upcoming_only:
        query = query.where(Event.end_date >= (today or date.today()))

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar()

    events_query = (
        query
        .order_by(Event.start_date.asc(), Event.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await db.execute(events_query)
    events = list(result.scalars().all())

    return events, total
