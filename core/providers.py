"""
Child Providers - Where hydrated Child records come from.

The scoring engine only consumes plain records. In production those come from
the relational store; this module defines the interface plus an in-memory
implementation backed by a YAML/JSON roster file.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Dict, List, Optional, Union
import logging
import os

import yaml
from pydantic import BaseModel, Field, model_validator

from core.models import (
    AvailabilitySlot, Child, ChildInterest, Household, Interest,
    DayOfWeek, ScreenTimePolicy, age_in_months
)

logger = logging.getLogger(__name__)


class ChildProvider(ABC):
    """
    Abstract interface for looking up children and their match candidates.
    """

    @abstractmethod
    def get_child(self, child_id: str) -> Optional[Child]:
        """Return the fully hydrated child, or None if unknown."""
        pass

    @abstractmethod
    def list_candidates(self, child: Child, limit: int = 100) -> List[Child]:
        """
        Return candidate children for `child`, already filtered to active,
        non-banned households in the same area. The subject is excluded.
        """
        pass


class InMemoryChildProvider(ChildProvider):
    """Provider over a fixed list of children (roster files, tests)."""

    def __init__(self, children: List[Child]):
        self._children: Dict[str, Child] = {c.id: c for c in children}

    def get_child(self, child_id: str) -> Optional[Child]:
        return self._children.get(child_id)

    def list_candidates(self, child: Child, limit: int = 100) -> List[Child]:
        city = (child.household.city or '').lower()
        candidates = []
        for other in self._children.values():
            if other.id == child.id or not other.is_active:
                continue
            household = other.household
            if not household.is_active or household.is_banned:
                continue
            if (household.city or '').lower() != city:
                continue
            candidates.append(other)
            if len(candidates) >= limit:
                break
        logger.debug(f"Found {len(candidates)} candidates for child {child.id} in '{city}'")
        return candidates


# ---------------------------------------------------------------------------
# Roster file schema
# ---------------------------------------------------------------------------

class InterestEntry(BaseModel):
    id: str
    name: str


class HouseholdEntry(BaseModel):
    id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    match_radius_km: Optional[float] = None  # falls back to config default radius
    has_pets: bool = False
    pet_types: List[str] = Field(default_factory=list)
    smoking_household: bool = False
    screen_time_policy: Optional[ScreenTimePolicy] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    is_active: bool = True
    is_banned: bool = False


class ChildInterestEntry(BaseModel):
    id: str
    level: Optional[str] = None


class SlotEntry(BaseModel):
    """Either day_of_week/start_time/end_time or start/end timestamps."""
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @model_validator(mode='after')
    def _check_kind(self):
        if self.day_of_week is None and (self.start is None or self.end is None):
            raise ValueError("slot needs day_of_week/start_time/end_time or start/end")
        return self

    def to_slot(self) -> AvailabilitySlot:
        if self.day_of_week is not None:
            return AvailabilitySlot.recurring(self.day_of_week, self.start_time, self.end_time)
        return AvailabilitySlot.ad_hoc(self.start, self.end)


class ChildEntry(BaseModel):
    id: str
    first_name: str
    household: str
    age_in_months: Optional[int] = None
    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    allergies: List[str] = Field(default_factory=list)
    interests: List[Union[str, ChildInterestEntry]] = Field(default_factory=list)
    availability: List[SlotEntry] = Field(default_factory=list)
    is_active: bool = True

    @model_validator(mode='after')
    def _check_age(self):
        if self.age_in_months is None and (self.birth_year is None or self.birth_month is None):
            raise ValueError(f"child {self.id}: age_in_months or birth_year/birth_month required")
        return self


class RosterFile(BaseModel):
    interests: List[InterestEntry] = Field(default_factory=list)
    households: List[HouseholdEntry] = Field(default_factory=list)
    children: List[ChildEntry] = Field(default_factory=list)


def build_children(
    roster: RosterFile,
    default_radius_km: float = 8.0,
    today: Optional[date] = None
) -> List[Child]:
    """Resolve roster references into Child records."""
    interests = {i.id: Interest(id=i.id, name=i.name) for i in roster.interests}
    households = {
        h.id: Household(
            id=h.id,
            latitude=h.latitude,
            longitude=h.longitude,
            match_radius_km=h.match_radius_km if h.match_radius_km is not None else default_radius_km,
            has_pets=h.has_pets,
            pet_types=frozenset(h.pet_types),
            smoking_household=h.smoking_household,
            screen_time_policy=h.screen_time_policy,
            city=h.city,
            state=h.state,
            country=h.country,
            is_active=h.is_active,
            is_banned=h.is_banned,
        )
        for h in roster.households
    }

    children = []
    for entry in roster.children:
        household = households.get(entry.household)
        if household is None:
            raise ValueError(f"child {entry.id}: unknown household {entry.household!r}")

        child_interests = []
        for item in entry.interests:
            ref = ChildInterestEntry(id=item) if isinstance(item, str) else item
            if ref.id not in interests:
                raise ValueError(f"child {entry.id}: unknown interest {ref.id!r}")
            child_interests.append(ChildInterest(interest=interests[ref.id], level=ref.level))

        if entry.age_in_months is not None:
            months = entry.age_in_months
        else:
            months = age_in_months(entry.birth_year, entry.birth_month, today)

        children.append(Child(
            id=entry.id,
            first_name=entry.first_name,
            age_in_months=months,
            household=household,
            allergies=tuple(entry.allergies),
            interests=tuple(child_interests),
            availability_slots=tuple(s.to_slot() for s in entry.availability),
            is_active=entry.is_active,
        ))

    return children


def load_roster(path: str, default_radius_km: float = 8.0) -> List[Child]:
    """Load children from a YAML or JSON roster file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Roster file not found: {path}")

    logger.info(f"Loading roster from {path}")
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    children = build_children(RosterFile(**data), default_radius_km=default_radius_km)
    logger.info(f"Loaded {len(children)} children")
    return children
