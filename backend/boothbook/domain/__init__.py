"""
Pure scheduling rules: date ranges, statuses, conflict checks and
availability. Nothing in here touches the database.
"""

from boothbook.domain.date_range import DateRange, expand, overlaps, is_subrange, merge_ranges
from boothbook.domain.statuses import (
    ReservationStatus,
    AvailabilityStatus,
    BoothApprovalStatus,
    PaymentStatus,
)
from boothbook.domain.conflicts import find_conflict, validate
from boothbook.domain.availability import compute_availability

__all__ = [
    "DateRange", "expand", "overlaps", "is_subrange", "merge_ranges",
    "ReservationStatus", "AvailabilityStatus", "BoothApprovalStatus", "PaymentStatus",
    "find_conflict", "validate", "compute_availability",
]
