"""
Reservation model representing a renter's claim on a booth for a day range.

Key design decisions:
- Status field allows cancellation and declines without deleting records
- Inclusive `start_date`..`end_date`, validated against the event by the service
- No DB-level exclusion constraint: overlap is enforced under the booth's version lock
"""

from sqlalchemy import Column, Integer, Date, Numeric, ForeignKey, Index, CheckConstraint, Enum

from boothbook.db.base import Base, TimestampMixin, enum_values
from boothbook.domain.date_range import DateRange
from boothbook.domain.statuses import ReservationStatus, PaymentStatus


class Reservation(Base, TimestampMixin):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    booth_id = Column(Integer, ForeignKey("booths.id"), nullable=False, index=True)
    renter_id = Column(Integer, nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    status = Column(
        Enum(ReservationStatus, name="reservation_status", native_enum=False,
             values_callable=enum_values, length=20),
        nullable=False,
        default=ReservationStatus.PENDING,
    )
    payment_status = Column(
        Enum(PaymentStatus, name="reservation_payment_status", native_enum=False,
             values_callable=enum_values, length=20),
        nullable=False,
        default=PaymentStatus.UNPAID,
    )

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="check_reservation_date_range"),
        CheckConstraint("total_price >= 0", name="check_reservation_price_non_negative"),
        Index("ix_reservations_dates", "start_date", "end_date"),
    )

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def is_active(self) -> bool:
        return ReservationStatus(self.status).is_active

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, booth={self.booth_id}, renter={self.renter_id}, "
            f"{self.start_date}..{self.end_date}, status={self.status})>"
        )
