from boothbook.models.event import Event
from boothbook.models.booth import Booth
from boothbook.models.reservation import Reservation

__all__ = ["Event", "Booth", "Reservation"]
