#!/usr/bin/env python3
"""
Domain Models - Plain records consumed by the scoring engine.

Records are immutable for the duration of a scoring call. They are built by
the provider layer (see core/providers.py) and never persisted by the engine.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import FrozenSet, Optional, Tuple
import re

from dateutil.relativedelta import relativedelta

TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')


class AgeBand(str, Enum):
    """Developmental age buckets, ordered youngest to oldest."""
    INFANT_0_12M = "INFANT_0_12M"
    TODDLER_13_24M = "TODDLER_13_24M"
    TODDLER_2_3Y = "TODDLER_2_3Y"
    PRESCHOOL_4_5Y = "PRESCHOOL_4_5Y"
    SCHOOL_AGE_6_8Y = "SCHOOL_AGE_6_8Y"
    SCHOOL_AGE_9_12Y = "SCHOOL_AGE_9_12Y"
    TEEN_13_PLUS = "TEEN_13_PLUS"


# Inclusive upper bound (months) for every band except the last one
_AGE_BAND_LIMITS = [
    (12, AgeBand.INFANT_0_12M),
    (24, AgeBand.TODDLER_13_24M),
    (47, AgeBand.TODDLER_2_3Y),
    (71, AgeBand.PRESCHOOL_4_5Y),
    (107, AgeBand.SCHOOL_AGE_6_8Y),
    (155, AgeBand.SCHOOL_AGE_9_12Y),
]


class DayOfWeek(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def offset(self) -> int:
        """Days since Monday."""
        return list(DayOfWeek).index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()


class SlotType(str, Enum):
    RECURRING = "RECURRING"
    AD_HOC = "AD_HOC"


class ScreenTimePolicy(str, Enum):
    LIMITED = "limited"
    MODERATE = "moderate"
    UNRESTRICTED = "unrestricted"


def age_band_for_months(age_in_months: int) -> AgeBand:
    """Map an age in months to its age band."""
    for upper, band in _AGE_BAND_LIMITS:
        if age_in_months <= upper:
            return band
    return AgeBand.TEEN_13_PLUS


def age_in_months(birth_year: int, birth_month: int, today: Optional[date] = None) -> int:
    """Whole months between the first of the birth month and today's month."""
    today = today or date.today()
    diff = relativedelta(date(today.year, today.month, 1), date(birth_year, birth_month, 1))
    return diff.years * 12 + diff.months


@dataclass(frozen=True)
class Household:
    """Household attributes relevant to distance and safety scoring."""
    id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    match_radius_km: float = 8.0
    has_pets: bool = False
    pet_types: FrozenSet[str] = frozenset()
    smoking_household: bool = False
    screen_time_policy: Optional[ScreenTimePolicy] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    is_active: bool = True
    is_banned: bool = False

    def __post_init__(self):
        if self.match_radius_km <= 0:
            raise ValueError(f"match_radius_km must be positive, got {self.match_radius_km}")
        object.__setattr__(self, 'pet_types', frozenset(p.lower() for p in self.pet_types))
        if isinstance(self.screen_time_policy, str):
            object.__setattr__(self, 'screen_time_policy', ScreenTimePolicy(self.screen_time_policy))

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def coordinates(self) -> Optional[Tuple[float, float]]:
        if not self.has_coordinates:
            return None
        return (self.latitude, self.longitude)

    @property
    def effective_screen_time_policy(self) -> ScreenTimePolicy:
        return self.screen_time_policy or ScreenTimePolicy.MODERATE


@dataclass(frozen=True)
class Interest:
    id: str
    name: str


@dataclass(frozen=True)
class ChildInterest:
    """Association of a child with an interest. Level is display-only."""
    interest: Interest
    level: Optional[str] = None

    @property
    def interest_id(self) -> str:
        return self.interest.id


@dataclass(frozen=True)
class AvailabilitySlot:
    """Recurring weekly window or one-off absolute window."""
    type: SlotType
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None
    id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'type', SlotType(self.type))
        if self.day_of_week is not None:
            object.__setattr__(self, 'day_of_week', DayOfWeek(self.day_of_week))
        if self.type == SlotType.RECURRING:
            if self.day_of_week is None:
                raise ValueError("Recurring slot requires day_of_week")
            for value in (self.start_time, self.end_time):
                if value is None or not TIME_PATTERN.match(value):
                    raise ValueError(f"Invalid time format (expected HH:MM): {value!r}")

    @classmethod
    def recurring(cls, day_of_week, start_time: str, end_time: str, id: Optional[str] = None) -> "AvailabilitySlot":
        return cls(
            type=SlotType.RECURRING,
            day_of_week=DayOfWeek(day_of_week),
            start_time=start_time,
            end_time=end_time,
            id=id
        )

    @classmethod
    def ad_hoc(cls, start: datetime, end: datetime, id: Optional[str] = None) -> "AvailabilitySlot":
        return cls(type=SlotType.AD_HOC, start_datetime=start, end_datetime=end, id=id)

    @property
    def is_recurring(self) -> bool:
        return self.type == SlotType.RECURRING


@dataclass(frozen=True)
class Child:
    """A child profile, fully hydrated with household, interests and availability."""
    id: str
    first_name: str
    age_in_months: int
    household: Household
    allergies: Tuple[str, ...] = ()
    interests: Tuple[ChildInterest, ...] = ()
    availability_slots: Tuple[AvailabilitySlot, ...] = ()
    is_active: bool = True

    def __post_init__(self):
        if self.age_in_months < 0:
            raise ValueError(f"age_in_months must be >= 0, got {self.age_in_months}")
        object.__setattr__(self, 'allergies', tuple(a.lower() for a in self.allergies))
        object.__setattr__(self, 'interests', tuple(self.interests))
        object.__setattr__(self, 'availability_slots', tuple(self.availability_slots))

    @property
    def age_band(self) -> AgeBand:
        return age_band_for_months(self.age_in_months)

    @property
    def interest_ids(self) -> FrozenSet[str]:
        return frozenset(ci.interest_id for ci in self.interests)
