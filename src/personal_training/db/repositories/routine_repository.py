"""File-backed repository for routines."""

from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from ...models.enums import Intensity, MuscleGroup, RoutineKind
from ...models.routine import Routine, estimate_calories, matches
from .base import FileRepository


class RoutineFilter(str, Enum):
    """Criteria accepted by ``RoutineRepository.find_by_criteria``."""
    ATHLETE = "athlete"
    KIND = "kind"
    INTENSITY = "intensity"
    MUSCLE_GROUP = "muscle_group"
    FROM_DATE = "from_date"
    TO_DATE = "to_date"
    WITH_INJURIES = "with_injuries"
    TERM = "term"


def _same_athlete(routine: Routine, name: str) -> bool:
    return routine.athlete_name.lower() == (name or "").strip().lower()


# filter -> predicate(routine, value)
FILTER_PREDICATES: Dict[RoutineFilter, Callable[[Routine, Any], bool]] = {
    RoutineFilter.ATHLETE: _same_athlete,
    RoutineFilter.KIND: lambda r, v: r.kind is v,
    RoutineFilter.INTENSITY: lambda r, v: r.intensity is v,
    RoutineFilter.MUSCLE_GROUP: lambda r, v: r.muscle_group is v,
    RoutineFilter.FROM_DATE: lambda r, v: r.performed_on >= v,
    RoutineFilter.TO_DATE: lambda r, v: r.performed_on <= v,
    RoutineFilter.WITH_INJURIES: lambda r, v: r.has_injury == bool(v),
    RoutineFilter.TERM: lambda r, v: matches(r, v),
}

ENUM_FILTERS = {
    RoutineFilter.KIND: RoutineKind,
    RoutineFilter.INTENSITY: Intensity,
    RoutineFilter.MUSCLE_GROUP: MuscleGroup,
}


class RoutineSummary(BaseModel):
    """Aggregate figures over a set of routines."""
    total: int = 0
    strength: int = 0
    cardio: int = 0
    total_minutes: int = 0
    total_calories: float = 0.0
    with_injuries: int = 0
    by_intensity: Dict[str, int] = Field(default_factory=dict)

    @property
    def average_minutes(self) -> float:
        return self.total_minutes / self.total if self.total else 0.0


class RoutineRepository(FileRepository[Routine]):
    """Routines ordered by performed date, newest first."""

    entity_name = "Rutina"
    sort_descending = True

    def _deserialize(self, data: dict) -> Routine:
        return Routine.from_dict(data)

    def _sort_key(self, entity: Routine):
        return entity.performed_on

    def find_by_athlete(self, athlete_name: str) -> List[Routine]:
        return self._find(lambda r: _same_athlete(r, athlete_name))

    def find_by_kind(self, kind: "RoutineKind | str") -> List[Routine]:
        kind = RoutineKind.parse(kind)
        return self._find(lambda r: r.kind is kind)

    def find_by_intensity(self, intensity: "Intensity | str") -> List[Routine]:
        intensity = Intensity.parse(intensity)
        return self._find(lambda r: r.intensity is intensity)

    def find_by_date_range(self, start: date, end: date) -> List[Routine]:
        """Routines performed between ``start`` and ``end``, both inclusive."""
        return self._find(lambda r: start <= r.performed_on <= end)

    def find_with_injuries(self, athlete_name: Optional[str] = None) -> List[Routine]:
        return self._find(
            lambda r: r.has_injury and (athlete_name is None or _same_athlete(r, athlete_name))
        )

    def find_by_insurance(self, insurance_id: str) -> List[Routine]:
        return self._find(lambda r: r.insurance_id == insurance_id)

    def find_by_criteria(self, criteria: Dict[RoutineFilter, Any]) -> List[Routine]:
        """Routines satisfying every criterion; ``None`` values are ignored."""
        active = {
            RoutineFilter(key): value for key, value in (criteria or {}).items() if value is not None
        }
        # parse enum values up front so a bad value fails before scanning
        for key, enum_type in ENUM_FILTERS.items():
            if key in active:
                active[key] = enum_type.parse(active[key])
        return self._find(
            lambda r: all(FILTER_PREDICATES[key](r, value) for key, value in active.items())
        )

    def summary(self, athlete_name: Optional[str] = None) -> RoutineSummary:
        routines = self.get_all() if athlete_name is None else self.find_by_athlete(athlete_name)
        by_intensity: Dict[str, int] = {}
        for routine in routines:
            by_intensity[routine.intensity.value] = by_intensity.get(routine.intensity.value, 0) + 1
        return RoutineSummary(
            total=len(routines),
            strength=sum(1 for r in routines if r.kind is RoutineKind.STRENGTH),
            cardio=sum(1 for r in routines if r.kind is RoutineKind.CARDIO),
            total_minutes=sum(r.duration_min for r in routines),
            total_calories=round(sum(estimate_calories(r) for r in routines), 1),
            with_injuries=sum(1 for r in routines if r.has_injury),
            by_intensity=by_intensity,
        )
