"""
Availability calculation for a booth.

The status summarises how much of the event's schedule is claimed by active
reservations:

  - available:   no active reservation at all
  - reserved:    some days claimed, at least one event day still free
  - unavailable: every event day claimed

Coverage is computed by merging the active ranges instead of materialising a
set of days, so cost grows with the number of reservations, not with the
length of the event. Overlapping inputs are tolerated and treated as a union.
"""

from typing import Iterable

from boothbook.domain.conflicts import ReservationLike, active_only
from boothbook.domain.date_range import DateRange, merge_ranges
from boothbook.domain.statuses import AvailabilityStatus


def covers(ranges: Iterable[DateRange], target: DateRange) -> bool:
    """True if the union of `ranges` contains every day of `target`."""
    return any(target.is_subrange_of(r) for r in merge_ranges(ranges))


def compute_availability(
    event_range: DateRange,
    reservations: Iterable[ReservationLike],
) -> AvailabilityStatus:
    active = active_only(reservations)
    if not active:
        return AvailabilityStatus.AVAILABLE

    if covers((r.date_range for r in active), event_range):
        return AvailabilityStatus.UNAVAILABLE

    return AvailabilityStatus.RESERVED
