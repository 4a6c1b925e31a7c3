from boothbook.schemas.event import EventCreate, EventResponse, EventListResponse
from boothbook.schemas.booth import (
    BoothCreate, BoothResponse, BoothListResponse, BoothAvailabilityResponse,
)
from boothbook.schemas.reservation import (
    ReservationCreate, ReservationStatusUpdate, ReservationResponse, ReservationChangeResponse,
)

__all__ = [
    "EventCreate", "EventResponse", "EventListResponse",
    "BoothCreate", "BoothResponse", "BoothListResponse", "BoothAvailabilityResponse",
    "ReservationCreate", "ReservationStatusUpdate", "ReservationResponse",
    "ReservationChangeResponse",
]
