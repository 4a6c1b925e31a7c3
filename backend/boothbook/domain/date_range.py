"""
Inclusive calendar-day ranges.

A DateRange claims every day from `start` to `end`, both ends included, so two
ranges that share a single boundary day overlap.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Iterator

from boothbook.core.errors import InvalidRangeError

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True, order=True)
class DateRange:
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidRangeError(
                f"Start date {self.start.isoformat()} is after end date {self.end.isoformat()}"
            )

    @classmethod
    def parse(cls, start: str, end: str) -> "DateRange":
        """Build a range from two ISO `YYYY-MM-DD` strings."""
        try:
            return cls(date.fromisoformat(start), date.fromisoformat(end))
        except (TypeError, ValueError) as exc:
            raise InvalidRangeError(f"Invalid date range {start!r}..{end!r}") from exc

    def days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += ONE_DAY

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def overlaps(self, other: "DateRange") -> bool:
        return self.start <= other.end and other.start <= self.end

    def is_subrange_of(self, outer: "DateRange") -> bool:
        return self.start >= outer.start and self.end <= outer.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


def expand(date_range: DateRange) -> list[date]:
    """Every day of the range in ascending order."""
    return list(date_range.days())


def overlaps(a: DateRange, b: DateRange) -> bool:
    return a.overlaps(b)


def is_subrange(inner: DateRange, outer: DateRange) -> bool:
    return inner.is_subrange_of(outer)


def merge_ranges(ranges: Iterable[DateRange]) -> list[DateRange]:
    """
    Collapse ranges into the minimal ascending list of disjoint ranges.

    Overlapping ranges and ranges that touch on consecutive days merge,
    so the result covers exactly the union of the input day-sets.
    """
    merged: list[DateRange] = []
    for current in sorted(ranges):
        if merged and current.start <= merged[-1].end + ONE_DAY:
            last = merged[-1]
            if current.end > last.end:
                merged[-1] = DateRange(last.start, current.end)
        else:
            merged.append(current)
    return merged
