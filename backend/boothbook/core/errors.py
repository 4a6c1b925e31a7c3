"""
Domain error taxonomy for the reservation engine.

Every failure the engine reports on purpose derives from BoothBookError and
carries a stable `kind` plus the HTTP status the API layer answers with.
Database errors are not wrapped; they surface from SQLAlchemy unchanged.
"""

from typing import Optional

from fastapi import status


class BoothBookError(Exception):
    """Base class for expected, caller-facing failures."""

    kind = "error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(BoothBookError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class RangeOutOfBoundsError(BoothBookError):
    """Reservation dates fall outside the owning event's schedule."""

    kind = "range_out_of_bounds"
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT


class InvalidRangeError(RangeOutOfBoundsError):
    """Start date after end date, or a date that cannot be parsed."""

    kind = "invalid_range"


class ConflictError(BoothBookError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, detail: str, conflicting_reservation_id: Optional[int] = None):
        super().__init__(detail)
        self.conflicting_reservation_id = conflicting_reservation_id


class InvalidTransitionError(BoothBookError):
    kind = "invalid_transition"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, entity: str, current: str, requested: str):
        super().__init__(f"Cannot move {entity} from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class ConcurrentModificationError(BoothBookError):
    """Retry budget exhausted while other writers kept changing the booth."""

    kind = "concurrent_modification"
    status_code = status.HTTP_409_CONFLICT
