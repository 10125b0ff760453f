"""Domain entities."""

from .enums import (
    Level,
    Intensity,
    MuscleGroup,
    RoutineKind,
    InsuranceStatus,
    STRENGTH_GROUPS,
)
from .athlete import Athlete
from .routine import Routine, StrengthDetails, CardioDetails, RoutineDetails
from .insurance import MedicalInsurance
from .statistics import AthleteStatistics

__all__ = [
    "Level",
    "Intensity",
    "MuscleGroup",
    "RoutineKind",
    "InsuranceStatus",
    "STRENGTH_GROUPS",
    "Athlete",
    "Routine",
    "StrengthDetails",
    "CardioDetails",
    "RoutineDetails",
    "MedicalInsurance",
    "AthleteStatistics",
]
