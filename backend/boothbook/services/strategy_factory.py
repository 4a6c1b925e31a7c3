"""
Reservation store factory.
Configures which per-booth serialization strategy to use.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boothbook.core.config import get_settings
from boothbook.db.session import get_db
from boothbook.services.interfaces.store import ReservationStore
from boothbook.services.reservation_store import SqlAlchemyReservationStore


def build_reservation_store(db: AsyncSession) -> ReservationStore:
    """
    Build the configured store for a session.

    Strategy selection via BOOTH_LOCK_STRATEGY:
    - optimistic (default): version check on write, retry on conflict
    - pessimistic: row lock on the booth for the whole sequence
    """
    strategy = get_settings().BOOTH_LOCK_STRATEGY
    return SqlAlchemyReservationStore(db, pessimistic=strategy == "pessimistic")


async def get_reservation_store(db: AsyncSession = Depends(get_db)) -> ReservationStore:
    """FastAPI dependency: a store bound to the request session."""
    return build_reservation_store(db)
