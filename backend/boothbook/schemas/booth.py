"""
Pydantic schemas for booth-related request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from boothbook.domain.statuses import AvailabilityStatus, BoothApprovalStatus


class BoothCreate(BaseModel):
    event_id: int
    name: str = Field(..., min_length=1, max_length=255)
    size: Optional[str] = Field(None, max_length=50)
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    location: Optional[str] = Field(None, max_length=255)


class BoothResponse(BaseModel):
    id: int
    event_id: int
    owner_id: int
    name: str
    size: Optional[str]
    price: Decimal
    location: Optional[str]
    status: BoothApprovalStatus
    availability_status: AvailabilityStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class BoothListResponse(BaseModel):
    booths: list[BoothResponse]
    cached: bool = False


class BoothAvailabilityResponse(BaseModel):
    booth_id: int
    availability_status: AvailabilityStatus
