"""
Persistence boundary for the reservation engine.
Allows swapping storage and locking implementations without changing
the lifecycle logic.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from boothbook.models import Booth, Event, Reservation


class ReservationStore(ABC):
    """
    Point reads and writes the lifecycle manager needs.

    Implementations:
    - SqlAlchemyReservationStore: optimistic version check on the booth row
    - SqlAlchemyReservationStore(pessimistic=True): SELECT ... FOR UPDATE on the booth row

    Contract: everything between the first `get_booth` of an operation and a
    successful `patch_booth` is one atomic unit for that booth. A `patch_booth`
    that loses the version race returns False, and the caller must `rollback`
    before retrying.
    """

    @abstractmethod
    async def get_event(self, event_id: int) -> Optional[Event]:
        pass

    @abstractmethod
    async def get_booth(self, booth_id: int, *, lock: bool = False) -> Optional[Booth]:
        """
        Fresh read of a booth.

        Args:
            booth_id: Booth to load
            lock: Start of a read-modify-write sequence; pessimistic
                implementations take the row lock here
        """
        pass

    @abstractmethod
    async def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_reservations_for_booth(self, booth_id: int) -> list[Reservation]:
        """All reservations of a booth, active or not, oldest first."""
        pass

    @abstractmethod
    async def list_reservations_for_renter(self, renter_id: int) -> list[Reservation]:
        """All reservations made by a renter, newest first."""
        pass

    @abstractmethod
    async def insert_reservation(self, **fields: Any) -> Reservation:
        pass

    @abstractmethod
    async def patch_reservation(self, reservation_id: int, **fields: Any) -> Reservation:
        pass

    @abstractmethod
    async def patch_booth(
        self,
        booth_id: int,
        expected_version: Optional[int] = None,
        **fields: Any,
    ) -> bool:
        """
        Write booth fields and bump its version.

        Args:
            booth_id: Booth to update
            expected_version: Only write if the stored version still matches

        Returns:
            True if the row was written
            False if another writer got there first
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard every uncommitted write of the current operation."""
        pass
