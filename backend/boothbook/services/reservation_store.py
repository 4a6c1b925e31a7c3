"""
SQLAlchemy implementation of the reservation store.

CONCURRENCY STRATEGY: Version-Guarded Booth Write
=================================================

Problem:
  Two renters request overlapping dates on the same booth simultaneously.
  Both read an empty conflict set, both pass validation, both insert.
  Result: double-booked days.

Solution:
  Every reservation write finishes with

    UPDATE booths SET availability_status = :s, version = version + 1
    WHERE id = :booth_id AND version = :version_read_at_start

  The booth row is the serialization point. The loser of a race updates
  zero rows, rolls back its reservation insert, and the service re-runs
  the whole read-validate-write sequence against fresh state.

  In pessimistic mode the booth is read with SELECT ... FOR UPDATE instead,
  so concurrent writers queue on the row lock and the version check always
  passes. Same invariants, lower throughput under light contention.
"""

from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from boothbook.models import Booth, Event, Reservation
from boothbook.services.interfaces.store import ReservationStore
from boothbook.core.errors import NotFoundError
from boothbook.core.metrics import record_db_operation


class SqlAlchemyReservationStore(ReservationStore):

    def __init__(self, db: AsyncSession, *, pessimistic: bool = False):
        self.db = db
        self.pessimistic = pessimistic

    async def get_event(self, event_id: int) -> Optional[Event]:
        record_db_operation("read")
        result = await self.db.execute(select(Event).where(Event.id == event_id))
        return result.scalar_one_or_none()

    async def get_booth(self, booth_id: int, *, lock: bool = False) -> Optional[Booth]:
        record_db_operation("read")
        query = (
            select(Booth)
            .where(Booth.id == booth_id)
            .execution_options(populate_existing=True)
        )
        if lock and self.pessimistic:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        record_db_operation("read")
        result = await self.db.execute(
            select(Reservation)
            .where(Reservation.id == reservation_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_reservations_for_booth(self, booth_id: int) -> list[Reservation]:
        record_db_operation("read")
        result = await self.db.execute(
            select(Reservation)
            .where(Reservation.booth_id == booth_id)
            .order_by(Reservation.start_date.asc(), Reservation.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_reservations_for_renter(self, renter_id: int) -> list[Reservation]:
        record_db_operation("read")
        result = await self.db.execute(
            select(Reservation)
            .where(Reservation.renter_id == renter_id)
            .order_by(Reservation.created_at.desc(), Reservation.id.desc())
        )
        return list(result.scalars().all())

    async def insert_reservation(self, **fields: Any) -> Reservation:
        record_db_operation("write")
        reservation = Reservation(**fields)
        self.db.add(reservation)
        await self.db.flush()
        await self.db.refresh(reservation)
        return reservation

    async def patch_reservation(self, reservation_id: int, **fields: Any) -> Reservation:
        record_db_operation("write")
        reservation = await self.get_reservation(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", reservation_id)
        for name, value in fields.items():
            setattr(reservation, name, value)
        await self.db.flush()
        await self.db.refresh(reservation)
        return reservation

    async def patch_booth(
        self,
        booth_id: int,
        expected_version: Optional[int] = None,
        **fields: Any,
    ) -> bool:
        record_db_operation("write")
        stmt = update(Booth).where(Booth.id == booth_id)
        if expected_version is not None:
            stmt = stmt.where(Booth.version == expected_version)
        stmt = (
            stmt.values(**fields, version=Booth.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def rollback(self) -> None:
        record_db_operation("retry")
        await self.db.rollback()
