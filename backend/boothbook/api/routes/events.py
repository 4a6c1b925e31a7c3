"""
Event endpoints, plus the Redis-cached booth listing of an event.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from boothbook.db.session import get_db
from boothbook.schemas.event import EventCreate, EventResponse, EventListResponse
from boothbook.schemas.booth import BoothListResponse, BoothResponse
from boothbook.services.event_service import create_event, get_event, list_events
from boothbook.services.booth_service import list_event_booths
from boothbook.services.cache_service import get_cached_booths, set_cached_booths
from boothbook.core.security import get_current_user_id
from boothbook.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a new event. Requires authentication."""
    return await create_event(db, event_data, user_id)


@router.get("/", response_model=EventListResponse)
async def list_events_endpoint(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    upcoming_only: bool = Query(True),
    db: AsyncSession = Depends(get_db),
):
    """List events with pagination, ordered by start date."""
    events, total = await list_events(db, page, page_size, upcoming_only)
    return EventListResponse(
        events=[EventResponse.model_validate(e) for e in events],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(
    event_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await get_event(db, event_id)


@router.get("/{event_id}/booths", response_model=BoothListResponse)
async def list_event_booths_endpoint(
    event_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    List the booths of an event with their availability.
    Results are cached in Redis and invalidated on every reservation change.
    """
    cached = await get_cached_booths(event_id)
    if cached is not None:
        logger.info("booth_list_cache_hit", event_id=event_id)
        return BoothListResponse(booths=cached, cached=True)

    booths = await list_event_booths(db, event_id)
    payload = [BoothResponse.model_validate(b).model_dump(mode="json") for b in booths]
    await set_cached_booths(event_id, payload)

    return BoothListResponse(booths=payload, cached=False)
