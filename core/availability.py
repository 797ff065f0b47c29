#!/usr/bin/env python3
"""
Availability Calculations - Overlap between children's availability slots.

Recurring slots are weekly windows expressed as "HH:MM" 24-hour strings.
Callers must validate the format (is_valid_time_format) before passing
times into the overlap calculators; same-day wraparound (end < start) is
not supported and yields zero overlap.
"""

from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterable, List, Optional
import logging

from dateutil.relativedelta import relativedelta, MO

from core.models import AvailabilitySlot, DayOfWeek, TIME_PATTERN

logger = logging.getLogger(__name__)

IDEAL_WEEKLY_OVERLAP_MINUTES = 180
MIN_SUGGESTION_MINUTES = 60
SUGGESTION_WEEKS = 2
MAX_SUGGESTIONS = 3


@dataclass(frozen=True)
class SuggestedSlot:
    """A concrete future playdate window derived from recurring overlap."""
    start: datetime
    end: datetime
    label: str
    day_of_week: DayOfWeek


def is_valid_time_format(value: str) -> bool:
    return bool(TIME_PATTERN.match(value or ''))


def time_to_minutes(value: str) -> int:
    """Minutes since midnight for an "HH:MM" string."""
    hours, minutes = value.split(':')
    return int(hours) * 60 + int(minutes)


def time_overlap_minutes(start1: str, end1: str, start2: str, end2: str) -> int:
    """Minutes shared by two same-day time ranges (0 when disjoint)."""
    overlap_start = max(time_to_minutes(start1), time_to_minutes(start2))
    overlap_end = min(time_to_minutes(end1), time_to_minutes(end2))
    return max(0, overlap_end - overlap_start)


def _recurring(slots: Iterable[AvailabilitySlot]) -> List[AvailabilitySlot]:
    return [s for s in slots if s.is_recurring]


def recurring_overlap_minutes(
    slots_a: Iterable[AvailabilitySlot],
    slots_b: Iterable[AvailabilitySlot]
) -> int:
    """
    Total weekly overlap between two sets of recurring slots.

    Sums over every same-day pair of the cross product. Overlapping slots on
    the same day are not merged first, so they can be counted more than once.
    Ad-hoc slots are ignored.
    """
    recurring_a = _recurring(slots_a)
    recurring_b = _recurring(slots_b)

    total = 0
    for slot_a in recurring_a:
        for slot_b in recurring_b:
            if slot_a.day_of_week == slot_b.day_of_week:
                total += time_overlap_minutes(
                    slot_a.start_time, slot_a.end_time,
                    slot_b.start_time, slot_b.end_time
                )
    return total


def overlap_to_score(overlap_minutes: float) -> float:
    """Linear 0-100 score; three hours a week or more scores 100."""
    score = overlap_minutes / IDEAL_WEEKLY_OVERLAP_MINUTES * 100.0
    return min(100.0, score)


def _format_time(value: str) -> str:
    hours, minutes = (int(part) for part in value.split(':'))
    period = 'PM' if hours >= 12 else 'AM'
    if hours == 0:
        hour12 = 12
    elif hours > 12:
        hour12 = hours - 12
    else:
        hour12 = hours
    return f"{hour12}:{minutes:02d}{period}"


def format_time_range(start: str, end: str) -> str:
    """Display form, e.g. "9:00AM - 12:00PM"."""
    return f"{_format_time(start)} - {_format_time(end)}"


def _at(day: datetime, value: str) -> datetime:
    hours, minutes = (int(part) for part in value.split(':'))
    return datetime.combine(day.date(), time(hours, minutes), tzinfo=day.tzinfo)


def suggested_slots(
    slots_a: Iterable[AvailabilitySlot],
    slots_b: Iterable[AvailabilitySlot],
    reference: Optional[datetime] = None
) -> List[SuggestedSlot]:
    """
    Suggest concrete playdate windows over the next two weeks.

    Every same-day recurring pair with at least an hour of overlap becomes a
    suggestion dated in the current or following week (weeks start Monday),
    using the first child's slot times. Only windows starting after
    `reference` are kept.

    Returns:
        Up to three suggestions, earliest first
    """
    reference = reference or datetime.now()
    week_start = (reference + relativedelta(weekday=MO(-1))).replace(
        hour=0, minute=0, second=0, microsecond=0
    )

    recurring_a = _recurring(slots_a)
    recurring_b = _recurring(slots_b)

    suggestions = []
    for week in range(SUGGESTION_WEEKS):
        for slot_a in recurring_a:
            for slot_b in recurring_b:
                if slot_a.day_of_week != slot_b.day_of_week:
                    continue
                overlap = time_overlap_minutes(
                    slot_a.start_time, slot_a.end_time,
                    slot_b.start_time, slot_b.end_time
                )
                if overlap < MIN_SUGGESTION_MINUTES:
                    continue

                slot_day = week_start + relativedelta(days=slot_a.day_of_week.offset + week * 7)
                start = _at(slot_day, slot_a.start_time)
                end = _at(slot_day, slot_a.end_time)

                if start > reference:
                    suggestions.append(SuggestedSlot(
                        start=start,
                        end=end,
                        label=f"{slot_a.day_of_week.label} {format_time_range(slot_a.start_time, slot_a.end_time)}",
                        day_of_week=slot_a.day_of_week
                    ))

    suggestions.sort(key=lambda s: s.start)
    logger.debug(f"Generated {len(suggestions)} candidate suggestions, returning {min(len(suggestions), MAX_SUGGESTIONS)}")
    return suggestions[:MAX_SUGGESTIONS]


def ad_hoc_overlap(slot_a: AvailabilitySlot, slot_b: AvailabilitySlot) -> bool:
    """
    Whether two one-off slots overlap (closed intervals).

    Returns False if either slot lacks a start or end timestamp.
    """
    if not (slot_a.start_datetime and slot_a.end_datetime and
            slot_b.start_datetime and slot_b.end_datetime):
        return False

    def within(moment: datetime, slot: AvailabilitySlot) -> bool:
        return slot.start_datetime <= moment <= slot.end_datetime

    return (
        within(slot_b.start_datetime, slot_a) or
        within(slot_b.end_datetime, slot_a) or
        within(slot_a.start_datetime, slot_b)
    )


def is_valid_slot_duration(start: str, end: str) -> bool:
    """Slot must last between 15 minutes and 6 hours."""
    duration = time_overlap_minutes(start, end, start, end)
    return 15 <= duration <= 360
