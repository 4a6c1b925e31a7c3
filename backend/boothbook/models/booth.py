"""
Booth model: a rentable unit inside one event.

Key design decisions:
- `availability_status` is denormalized from the booth's active reservations
  and only ever written by the reservation service
- `status` is the owner/admin approval workflow and is independent of scheduling
- `version` column enables optimistic locking for concurrent reservation writes
"""

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Index, CheckConstraint, Enum
from sqlalchemy.orm import relationship

from boothbook.db.base import Base, TimestampMixin, enum_values
from boothbook.domain.statuses import AvailabilityStatus, BoothApprovalStatus


class Booth(Base, TimestampMixin):
    __tablename__ = "booths"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    owner_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    size = Column(String(50), nullable=True)  # e.g. "3x3m"
    price = Column(Numeric(12, 2), nullable=False, default=0)
    location = Column(String(255), nullable=True)  # e.g. "Hall A - Booth 12"
    status = Column(
        Enum(BoothApprovalStatus, name="booth_status", native_enum=False,
             values_callable=enum_values, length=20),
        nullable=False,
        default=BoothApprovalStatus.PENDING,
    )
    availability_status = Column(
        Enum(AvailabilityStatus, name="booth_availability_status", native_enum=False,
             values_callable=enum_values, length=20),
        nullable=False,
        default=AvailabilityStatus.AVAILABLE,
    )

    # Optimistic locking version counter
    version = Column(Integer, nullable=False, default=1)

    event = relationship("Event", back_populates="booths")

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_booth_price_non_negative"),
        Index("ix_booths_event_availability", "event_id", "availability_status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booth(id={self.id}, event={self.event_id}, "
            f"availability={self.availability_status}, v={self.version})>"
        )
