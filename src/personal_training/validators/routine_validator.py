"""Business rules for routines."""

from enum import Enum
from typing import Dict

from ..models.enums import Intensity, MuscleGroup, RoutineKind
from ..models.routine import MAX_DURATION_MIN, MIN_DURATION_MIN, Routine, details_errors
from .base import Rule, Validator

# High intensity sessions longer than this are not coherent
MAX_HIGH_INTENSITY_MIN = 120


class RoutineRule(str, Enum):
    DURATION = "duration"
    INTENSITY = "intensity"
    MUSCLE_GROUP = "muscle_group"
    ATHLETE = "athlete"
    DATES = "dates"
    COHERENCE = "coherence"
    DETAILS = "details"


class RoutineValidator(Validator[Routine]):
    """Validates routines, including kind/muscle-group coherence."""

    missing_message = "La rutina no puede ser nula"

    def _build_rules(self) -> Dict[RoutineRule, Rule]:
        return {
            RoutineRule.DURATION: Rule(
                lambda r: MIN_DURATION_MIN <= r.duration_min <= MAX_DURATION_MIN,
                lambda r: f"Duración {r.duration_min} min fuera de rango (1-480 min)",
            ),
            RoutineRule.INTENSITY: Rule(
                lambda r: isinstance(r.intensity, Intensity),
                lambda r: f"Intensidad '{r.intensity}' no válida",
            ),
            RoutineRule.MUSCLE_GROUP: Rule(
                lambda r: isinstance(r.muscle_group, MuscleGroup),
                lambda r: f"Grupo muscular '{r.muscle_group}' no válido",
            ),
            RoutineRule.ATHLETE: Rule(
                lambda r: bool((r.athlete_name or "").strip()),
                lambda r: "Nombre del atleta requerido",
            ),
            RoutineRule.DATES: Rule(
                self._dates_are_consistent,
                lambda r: "Fechas inválidas o inconsistentes",
            ),
            RoutineRule.COHERENCE: Rule(
                self._is_coherent,
                lambda r: "Datos de rutina incoherentes",
            ),
            RoutineRule.DETAILS: Rule(
                lambda r: not details_errors(r.details),
                lambda r: "Detalles de rutina inválidos: " + ", ".join(details_errors(r.details)),
            ),
        }

    def _dates_are_consistent(self, routine: Routine) -> bool:
        if routine.performed_on > self.today():
            return False
        if routine.expires_on is not None:
            return routine.expires_on > routine.performed_on
        return True

    @staticmethod
    def _is_coherent(routine: Routine) -> bool:
        if routine.kind is RoutineKind.CARDIO and routine.muscle_group not in (
            MuscleGroup.CARDIO,
            MuscleGroup.GENERAL,
        ):
            return False
        if routine.intensity is Intensity.HIGH and routine.duration_min > MAX_HIGH_INTENSITY_MIN:
            return False
        return True
