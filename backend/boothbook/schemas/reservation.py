"""
Pydantic schemas for reservation-related request/response validation.

Dates travel as ISO `YYYY-MM-DD` strings, inclusive on both ends. Range
ordering and event bounds are checked by the reservation service, so a
reversed range comes back as `invalid_range` rather than a schema error.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from boothbook.domain.statuses import AvailabilityStatus, PaymentStatus, ReservationStatus


class ReservationCreate(BaseModel):
    booth_id: int
    start_date: date
    end_date: date
    total_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class ReservationResponse(BaseModel):
    id: int
    booth_id: int
    renter_id: int
    start_date: date
    end_date: date
    total_price: Decimal
    status: ReservationStatus
    payment_status: PaymentStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ReservationChangeResponse(BaseModel):
    message: str
    reservation: ReservationResponse
    booth_availability: AvailabilityStatus
