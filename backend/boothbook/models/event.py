"""
Event model: a multi-day container that owns booths.

Key design decisions:
- `start_date`/`end_date` are calendar dates, inclusive on both ends
- CHECK constraint keeps the range well-formed at the DB level
- Index on `start_date` for upcoming-event listings
"""

from sqlalchemy import Column, Integer, String, Date, Index, CheckConstraint
from sqlalchemy.orm import relationship

from boothbook.db.base import Base, TimestampMixin
from boothbook.domain.date_range import DateRange


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=True)
    location = Column(String(255), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_by = Column(Integer, nullable=False, index=True)

    booths = relationship("Booth", back_populates="event", lazy="selectin")

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="check_event_date_range"),
        Index("ix_events_start_date", "start_date"),
    )

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, {self.start_date}..{self.end_date})>"
